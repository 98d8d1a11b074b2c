# connectibles/domains/moderation/api.py
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from connectibles.domains.auth.dependencies import get_active_user, get_optional_user
from connectibles.domains.moderation import service

router = APIRouter()


class ReportUserRequest(BaseModel):
    reported_user_id: str
    reason: Optional[str] = Field(default=None, max_length=1000)


@router.post("/reports")
async def report_user(request: ReportUserRequest, user=Depends(get_active_user)):
    """Report another user; returns their updated report count"""
    return await service.report_user(user, request.reported_user_id, request.reason)


@router.get("/reports/{user_id}/count")
async def get_report_count(user_id: str):
    return {"count": await service.get_report_count(user_id)}


@router.get("/reports/{user_id}/mine")
async def has_reported(user_id: str, user=Depends(get_optional_user)):
    """Whether the caller already reported this user"""
    return {"reported": await service.has_reported(user, user_id)}
