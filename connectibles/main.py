from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from connectibles.core import (
    celery,
    config,
    database,
    exception_handlers,
    redis,
)
from connectibles.domains import (
    admin,
    auth,
    connections,
    feed,
    games,
    matching,
    messages,
    moderation,
    notifications,
    profiles,
    truth_dare,
)
from connectibles.shared.utils.logger import get_logger

logger = get_logger(__name__)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    await database.init_db()
    games.register_event_handlers()
    logger.info(f"Connectibles API started ({config.settings.ENVIRONMENT.value})")
    yield
    await redis.RedisManager.close()


app = FastAPI(title="Connectibles Campus API", version=VERSION, lifespan=lifespan)

exception_handlers.setup_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])
app.include_router(profiles.router, prefix="/api/profiles", tags=["Profiles"])
app.include_router(matching.router, prefix="/api/matches", tags=["Matching"])
app.include_router(connections.router, prefix="/api/connections", tags=["Connections"])
app.include_router(messages.router, prefix="/api/messages", tags=["Messages"])
app.include_router(moderation.router, prefix="/api/moderation", tags=["Moderation"])
app.include_router(notifications.router, prefix="/api/notifications", tags=["Notifications"])
app.include_router(games.router, prefix="/api/games", tags=["Games"])
app.include_router(truth_dare.router, prefix="/api/truth-dare", tags=["Truth or Dare"])
app.include_router(feed.router, prefix="/api/feed", tags=["Feed"])
app.include_router(admin.router, prefix="/api/admin", tags=["Admin"])


@app.get("/health")
async def health():
    services = {
        "database": await database.check_connection(),
        "redis": await redis.check_connection(),
        "broker": await celery.check_connection(),
    }
    status = "healthy" if all(services.values()) else "degraded"
    return {"status": status, "services": services, "version": VERSION}
