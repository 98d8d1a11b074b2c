"""Wipe every table. Local and dev only."""
import asyncio
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).parent.parent))

from connectibles.core.config import Environment, settings
from connectibles.core.database import engine, load_models
from connectibles.domains.admin.service import clean_all_data


async def main():
    if settings.ENVIRONMENT not in (Environment.LOCAL, Environment.DEV):
        print(f"Refusing to wipe the {settings.ENVIRONMENT.value} database")
        return 1
    load_models()
    result = await clean_all_data()
    for table, count in result["deleted_counts"].items():
        print(f"  {table}: {count}")
    await engine.dispose()
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
