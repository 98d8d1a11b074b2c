# scripts/dev_jwt_token.py
import asyncio
import sys
from datetime import timedelta
from pathlib import Path

sys.path.append(str(Path(__file__).parent.parent))

from connectibles.domains.auth import repository as user_repository
from connectibles.shared.utils.security import create_access_token


async def main(email: str):
    user = await user_repository.get_user_by_email(email)
    if not user:
        user = await user_repository.create_user(email)
    token = create_access_token({"sub": user.id}, timedelta(days=30))
    print(token)


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else "dev@spsu.ac.in"))
