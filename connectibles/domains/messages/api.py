# connectibles/domains/messages/api.py
from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from connectibles.domains.auth.dependencies import (
    get_active_user,
    get_current_user,
    get_optional_user,
)
from connectibles.domains.messages import service

router = APIRouter()


class SendMessageRequest(BaseModel):
    receiver_id: str
    body: str = Field(min_length=1, max_length=4000)


class MessageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    sender_id: str
    receiver_id: str
    body: str
    read: bool
    created_at: datetime


@router.post("", response_model=MessageResponse)
async def send_message(request: SendMessageRequest, user=Depends(get_active_user)):
    return await service.send_message(user, request.receiver_id, request.body)


@router.get("/conversation/{other_id}", response_model=List[MessageResponse])
async def get_conversation(other_id: str, user=Depends(get_optional_user)):
    """Messages between the caller and another user, oldest first"""
    return await service.get_conversation(user, other_id)


@router.post("/{message_id}/read")
async def mark_message_read(message_id: str, user=Depends(get_current_user)):
    return {"message_id": await service.mark_message_read(user, message_id)}


@router.get("/unread-count")
async def get_unread_count(user=Depends(get_optional_user)):
    return {"count": await service.get_unread_message_count(user)}


@router.post("/blocks/{other_id}")
async def block_user(other_id: str, user=Depends(get_current_user)):
    await service.block_user(user, other_id)
    return {"success": True}


@router.delete("/blocks/{other_id}")
async def unblock_user(other_id: str, user=Depends(get_current_user)):
    await service.unblock_user(user, other_id)
    return {"success": True}


@router.get("/blocks/{other_id}")
async def is_user_blocked(other_id: str, user=Depends(get_optional_user)):
    return {"blocked": service.is_user_blocked(user, other_id)}
