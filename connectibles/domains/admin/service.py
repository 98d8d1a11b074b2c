from typing import Dict

from connectibles.domains.admin import repository
from connectibles.shared.utils.logger import get_logger

logger = get_logger(__name__)


async def clean_all_data() -> Dict:
    """Wipe every table, users included. Returns rows deleted per table."""
    counts = await repository.delete_everything()
    logger.warning(f"All data wiped: {counts}")
    return {"success": True, "deleted_counts": counts}
