# connectibles/domains/feed/repository.py
from datetime import datetime
from typing import List, Optional, Type, TypeVar

from sqlalchemy import delete, select

from connectibles.core.database import session_scope
from connectibles.domains.feed.models import CollaborationPost, SpillPost
from connectibles.shared.models.base import Base
from connectibles.shared.utils.logger import get_logger

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


async def add(item: ModelT) -> ModelT:
    async with session_scope() as db:
        db.add(item)
        await db.flush()
        return item


async def get(model: Type[ModelT], item_id: str) -> Optional[ModelT]:
    async with session_scope() as db:
        return await db.get(model, item_id)


async def remove(model: Type[ModelT], item_id: str) -> None:
    async with session_scope() as db:
        await db.execute(delete(model).where(model.id == item_id))


async def set_field(model: Type[ModelT], item_id: str, field: str, value) -> None:
    """Assign a whole column value; JSON lists are only persisted when replaced."""
    async with session_scope() as db:
        item = await db.get(model, item_id)
        if item:
            setattr(item, field, value)


async def list_newest(model: Type[ModelT], limit: Optional[int] = None) -> List[ModelT]:
    async with session_scope() as db:
        query = select(model).order_by(model.created_at.desc())
        if limit:
            query = query.limit(limit)
        result = await db.execute(query)
        return list(result.scalars().all())


async def list_posts_by_author(author_id: str) -> List[CollaborationPost]:
    async with session_scope() as db:
        result = await db.execute(
            select(CollaborationPost)
            .filter(CollaborationPost.author_id == author_id)
            .order_by(CollaborationPost.created_at.desc())
        )
        return list(result.scalars().all())


async def delete_spills_before(cutoff: datetime) -> int:
    async with session_scope() as db:
        result = await db.execute(delete(SpillPost).where(SpillPost.created_at < cutoff))
        return result.rowcount or 0
