"""Check /health of a running API.

Usage: python scripts/health_check.py [base_url]
Without a base URL the address is chosen from ENVIRONMENT.
"""
import asyncio
import sys
from pathlib import Path

import httpx

sys.path.append(str(Path(__file__).parent.parent))

from connectibles.core.config import Environment, settings

BASE_URLS = {
    Environment.LOCAL: "http://localhost:8001",
    Environment.DEV: "http://localhost:8000",
    Environment.STAGING: "https://staging.connectibles.app",
    Environment.PROD: "https://api.connectibles.app",
}


async def check_health(base_url: str) -> bool:
    try:
        async with httpx.AsyncClient(base_url=base_url, timeout=5.0) as client:
            response = await client.get("/health")
            response.raise_for_status()
    except httpx.HTTPError as e:
        print(f"❌ {base_url} is unhealthy: {e}")
        return False

    data = response.json()
    print(f"{base_url} ({settings.ENVIRONMENT.value}), API {data.get('version', '?')}: {data['status']}")
    for service, up in data["services"].items():
        print(f"  {'✅' if up else '❌'} {service}")
    return data["status"] == "healthy"


if __name__ == "__main__":
    target = sys.argv[1] if len(sys.argv) > 1 else BASE_URLS[settings.ENVIRONMENT]
    sys.exit(0 if asyncio.run(check_health(target.rstrip("/"))) else 1)
