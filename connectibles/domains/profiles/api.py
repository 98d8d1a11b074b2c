# connectibles/domains/profiles/api.py
from typing import List, Optional

from fastapi import APIRouter, Depends

from connectibles.domains.auth.dependencies import (
    get_active_user,
    get_current_user,
    get_optional_user,
)
from connectibles.domains.auth.schemas import UserPrivate, UserPublic
from connectibles.domains.profiles import service
from connectibles.domains.profiles.schemas import (
    OnlineStatus,
    OnlineStatusesRequest,
    ProfileUpdate,
)

router = APIRouter()


@router.get("/me", response_model=Optional[UserPrivate])
async def get_current_user_profile(user=Depends(get_optional_user)):
    return user


@router.patch("/me", response_model=UserPrivate)
async def update_profile(patch: ProfileUpdate, user=Depends(get_active_user)):
    return await service.update_profile(user, patch)


@router.get("/me/completion")
async def get_profile_completion(user=Depends(get_optional_user)):
    return {"completion": service.get_profile_completion(user)}


@router.post("/presence")
async def update_presence(user=Depends(get_current_user)):
    """Heartbeat; clients call this while the app is open"""
    await service.update_presence(user)
    return {"success": True}


@router.post("/online-statuses", response_model=List[OnlineStatus])
async def get_online_statuses(request: OnlineStatusesRequest):
    return await service.get_online_statuses(request.user_ids)


@router.get("/{user_id}/online")
async def is_user_online(user_id: str):
    return {"user_id": user_id, "is_online": await service.is_user_online(user_id)}


@router.get("/{user_id}", response_model=UserPublic)
async def get_profile(user_id: str):
    return await service.get_profile(user_id)
