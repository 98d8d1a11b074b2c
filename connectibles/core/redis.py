from typing import Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError

from connectibles.core.config import settings
from connectibles.shared.utils.logger import get_logger

logger = get_logger(__name__)


class RedisManager:
    """Lazily created client shared by the API process."""

    _client: Optional[Redis] = None

    @classmethod
    def get_client(cls) -> Redis:
        if cls._client is None:
            cls._client = Redis.from_url(
                settings.REDIS_URL,
                decode_responses=True,
                socket_connect_timeout=2,
            )
        return cls._client

    @classmethod
    async def close(cls) -> None:
        if cls._client is not None:
            await cls._client.aclose()
            cls._client = None


async def check_connection() -> bool:
    try:
        return bool(await RedisManager.get_client().ping())
    except (RedisError, OSError) as e:
        logger.warning(f"Redis is unreachable: {e}")
        return False
