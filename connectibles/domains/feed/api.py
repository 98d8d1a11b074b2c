# connectibles/domains/feed/api.py
from typing import List

from fastapi import APIRouter, Depends

from connectibles.domains.auth.dependencies import get_active_user, get_optional_user
from connectibles.domains.auth.schemas import UserPublic
from connectibles.domains.feed import service
from connectibles.domains.feed.schemas import (
    CollaborationCreate,
    CollaborationResponse,
    EventCreate,
    EventResponse,
    GossipCreate,
    GossipResponse,
    ReactionRequest,
    SpillCreate,
    SpillResponse,
)

router = APIRouter()


# Spill (anonymous) posts

@router.post("/spills")
async def create_spill(request: SpillCreate, user=Depends(get_active_user)):
    return {"post_id": await service.create_spill(user, request)}


@router.get("/spills", response_model=List[SpillResponse])
async def get_spills(user=Depends(get_optional_user)):
    """Newest first; authors stay anonymous"""
    return await service.get_spills(user)


@router.post("/spills/{post_id}/reactions")
async def toggle_spill_reaction(post_id: str, request: ReactionRequest, user=Depends(get_active_user)):
    return {"reacted": await service.toggle_spill_reaction(user, post_id, request.emoji)}


@router.delete("/spills/{post_id}")
async def delete_spill(post_id: str, user=Depends(get_active_user)):
    return {"post_id": await service.delete_spill(user, post_id)}


# Collaboration posts

@router.post("/posts")
async def create_post(request: CollaborationCreate, user=Depends(get_active_user)):
    return {"post_id": await service.create_post(user, request)}


@router.get("/posts", response_model=List[CollaborationResponse])
async def get_posts():
    return await service.get_posts()


@router.get("/posts/by/{user_id}", response_model=List[CollaborationResponse])
async def get_user_posts(user_id: str):
    return await service.get_user_posts(user_id)


@router.post("/posts/{post_id}/volunteer")
async def toggle_volunteer(post_id: str, user=Depends(get_active_user)):
    return {"volunteering": await service.toggle_volunteer(user, post_id)}


@router.get("/posts/{post_id}/volunteers", response_model=List[UserPublic])
async def get_volunteers(post_id: str):
    return await service.get_volunteers(post_id)


# Events

@router.post("/events")
async def create_event(request: EventCreate, user=Depends(get_active_user)):
    return {"event_id": await service.create_event(user, request)}


@router.get("/events", response_model=List[EventResponse])
async def get_events():
    return await service.get_events()


@router.post("/events/{event_id}/interest")
async def toggle_interest(event_id: str, user=Depends(get_active_user)):
    return {"interested": await service.toggle_interest(user, event_id)}


# Gossip

@router.post("/gossip")
async def send_gossip(request: GossipCreate, user=Depends(get_active_user)):
    return {"message_id": await service.send_gossip(user, request.message)}


@router.get("/gossip", response_model=List[GossipResponse])
async def get_gossip(user=Depends(get_optional_user)):
    return await service.get_gossip(user)


@router.post("/gossip/{message_id}/reactions")
async def toggle_gossip_reaction(message_id: str, request: ReactionRequest, user=Depends(get_active_user)):
    return {"reacted": await service.toggle_gossip_reaction(user, message_id, request.emoji)}


@router.delete("/gossip/{message_id}")
async def delete_gossip(message_id: str, user=Depends(get_active_user)):
    return {"message_id": await service.delete_gossip(user, message_id)}
