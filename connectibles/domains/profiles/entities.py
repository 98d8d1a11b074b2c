from datetime import datetime, timedelta
from typing import Optional

# Basic and academic fields counted towards profile completion
COMPLETION_FIELDS = (
    "name",
    "image",
    "bio",
    "interests",
    "skills",
    "location",
    "year_of_study",
    "department",
    "major",
    "looking_for",
    "availability",
)


def profile_completion(user) -> int:
    """Percentage of COMPLETION_FIELDS that hold a non-empty value."""
    filled = sum(1 for field in COMPLETION_FIELDS if getattr(user, field, None))
    return round(filled / len(COMPLETION_FIELDS) * 100)


def is_online(last_active: Optional[datetime], now: datetime, window_minutes: int) -> bool:
    if last_active is None:
        return False
    return last_active > now - timedelta(minutes=window_minutes)
