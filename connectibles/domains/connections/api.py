# connectibles/domains/connections/api.py
from typing import List

from fastapi import APIRouter, Depends

from connectibles.domains.auth.dependencies import get_active_user, get_optional_user
from connectibles.domains.auth.schemas import UserPublic
from connectibles.domains.connections import service
from connectibles.domains.connections.schemas import ConnectionResult, TargetUserRequest

router = APIRouter()


@router.post("/wave", response_model=ConnectionResult)
async def send_wave(request: TargetUserRequest, user=Depends(get_active_user)):
    """Low-commitment signal of interest"""
    return await service.send_wave(user, request.receiver_id)


@router.post("/requests", response_model=ConnectionResult)
async def send_connection_request(request: TargetUserRequest, user=Depends(get_active_user)):
    return await service.send_connection_request(user, request.receiver_id)


@router.get("/requests")
async def get_connection_requests(user=Depends(get_optional_user)):
    """Pending requests addressed to the caller"""
    return await service.get_connection_requests(user)


@router.post("/requests/{request_id}/accept")
async def accept_connection_request(request_id: str, user=Depends(get_active_user)):
    return {"request_id": await service.accept_connection_request(user, request_id)}


@router.post("/requests/{request_id}/reject")
async def reject_connection_request(request_id: str, user=Depends(get_active_user)):
    return {"request_id": await service.reject_connection_request(user, request_id)}


@router.get("", response_model=List[UserPublic])
async def get_connections(user=Depends(get_optional_user)):
    return await service.get_connections(user)


@router.delete("/{other_id}")
async def remove_connection(other_id: str, user=Depends(get_active_user)):
    await service.remove_connection(user, other_id)
    return {"success": True}


@router.get("/status/{other_id}")
async def get_connection_status(other_id: str, user=Depends(get_optional_user)):
    status = await service.get_connection_status(user, other_id)
    return {"status": status.value if status else None}
