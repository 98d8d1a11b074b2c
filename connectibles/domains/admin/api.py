from fastapi import APIRouter, Depends

from connectibles.domains.admin import service
from connectibles.domains.auth.dependencies import require_admin

router = APIRouter()


@router.post("/clean-all-data")
async def clean_all_data(admin=Depends(require_admin)):
    return await service.clean_all_data()
