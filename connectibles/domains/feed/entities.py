from enum import Enum
from typing import Dict, List, Optional, Tuple


class MediaType(str, Enum):
    IMAGE = "image"
    DOODLE = "doodle"
    STICKER = "sticker"
    MUSIC = "music"
    OTHER = "other"


def toggle_reaction(reactions: List[Dict], user_id: str, emoji: str) -> Tuple[List[Dict], bool]:
    """Add the user's emoji, or take it back if already there. Returns (reactions, added)."""
    reactions = list(reactions or [])
    kept = [r for r in reactions if not (r["user_id"] == user_id and r["emoji"] == emoji)]
    if len(kept) != len(reactions):
        return kept, False
    return kept + [{"user_id": user_id, "emoji": emoji}], True


def summarize_reactions(reactions: List[Dict], viewer_id: Optional[str]) -> List[Dict]:
    """Per-emoji counts in first-used order, without who reacted."""
    summary: Dict[str, Dict] = {}
    for r in reactions or []:
        entry = summary.setdefault(r["emoji"], {"emoji": r["emoji"], "count": 0, "reacted": False})
        entry["count"] += 1
        if viewer_id and r["user_id"] == viewer_id:
            entry["reacted"] = True
    return list(summary.values())
