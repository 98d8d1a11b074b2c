"""Initialize local development data"""
import asyncio
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).parent.parent))

from alembic import command
from alembic.config import Config
from sqlalchemy import inspect

from connectibles.core.database import engine
from connectibles.domains.auth import repository as user_repository
from connectibles.domains.profiles import repository as profile_repository
from connectibles.shared.utils.logger import get_logger

logger = get_logger(__name__)

DEMO_STUDENTS = [
    {
        "email": "aarav@spsu.ac.in",
        "name": "Aarav",
        "interests": ["chess", "music", "coding"],
        "skills": ["python"],
        "location": "Hostel A",
    },
    {
        "email": "diya@spsu.ac.in",
        "name": "Diya",
        "interests": ["music", "art", "coding"],
        "skills": ["design", "python"],
        "location": "Hostel A",
    },
    {
        "email": "kabir@spsu.ac.in",
        "name": "Kabir",
        "interests": ["football", "chess"],
        "skills": ["public speaking"],
        "location": "Hostel C",
    },
]


def _has_users_table(sync_conn) -> bool:
    return inspect(sync_conn).has_table("users")


async def check_and_run_migrations():
    """Run alembic when the schema is missing"""
    async with engine.connect() as conn:
        ready = await conn.run_sync(_has_users_table)
    if ready:
        logger.info("Database schema is up to date")
        return
    logger.info("Running database migrations...")
    alembic_cfg = Config("alembic.ini")
    await asyncio.to_thread(command.upgrade, alembic_cfg, "head")
    logger.info("✅ Migrations completed")


async def seed_students():
    for student in DEMO_STUDENTS:
        if await user_repository.get_user_by_email(student["email"]):
            continue
        user = await user_repository.create_user(student["email"], student["name"])
        await profile_repository.update_user_fields(
            user.id,
            {key: student[key] for key in ("interests", "skills", "location")},
        )
        logger.info(f"Seeded {student['email']}")


async def main():
    await check_and_run_migrations()
    await seed_students()
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
