from fastapi import APIRouter, Depends

from connectibles.domains.auth.dependencies import get_current_user, get_optional_user
from connectibles.domains.notifications import service

router = APIRouter()


@router.get("")
async def list_notifications(user=Depends(get_optional_user)):
    """Newest notifications for the caller"""
    return await service.get_notifications(user)


@router.get("/unread-count")
async def unread_count(user=Depends(get_optional_user)):
    return {"count": await service.get_unread_count(user)}


@router.post("/{notification_id}/read")
async def mark_as_read(notification_id: str, user=Depends(get_current_user)):
    return {"notification_id": await service.mark_as_read(user, notification_id)}


@router.post("/read-all")
async def mark_all_as_read(user=Depends(get_current_user)):
    return {"updated": await service.mark_all_as_read(user)}


@router.delete("/{notification_id}")
async def delete_notification(notification_id: str, user=Depends(get_current_user)):
    return {"notification_id": await service.delete_notification(user, notification_id)}


@router.delete("")
async def delete_all_notifications(user=Depends(get_current_user)):
    return {"deleted": await service.delete_all_notifications(user)}
