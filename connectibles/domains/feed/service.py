# connectibles/domains/feed/service.py
"""
Campus feed: anonymous spill posts, collaboration posts, events and the
gossip group chat.
"""
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional

from connectibles.core.config import settings
from connectibles.core.database import session_scope
from connectibles.domains.auth import repository as user_repository
from connectibles.domains.auth.models import User
from connectibles.domains.auth.schemas import UserPublic
from connectibles.domains.connections.entities import with_member, without_member
from connectibles.domains.feed import repository
from connectibles.domains.feed.entities import summarize_reactions, toggle_reaction
from connectibles.domains.feed.models import CollaborationPost, Event, GossipMessage, SpillPost
from connectibles.domains.feed.schemas import (
    CollaborationCreate,
    CollaborationResponse,
    EventCreate,
    EventResponse,
    GossipResponse,
    SpillCreate,
    SpillResponse,
)
from connectibles.domains.notifications.entities import NotificationType
from connectibles.domains.notifications.service import notify
from connectibles.shared.exceptions import Forbidden, InvalidRequest, NotFound
from connectibles.shared.utils.logger import get_logger
from connectibles.shared.utils.timeutils import utcnow

logger = get_logger(__name__)


async def _public_users(user_ids: Iterable[str]) -> Dict[str, UserPublic]:
    users = await user_repository.get_users_by_ids(set(user_ids))
    return {u.id: UserPublic.model_validate(u) for u in users}


# Spill posts

def _spill_response(post: SpillPost, viewer_id: Optional[str]) -> SpillResponse:
    return SpillResponse(
        id=post.id,
        content=post.content,
        media_url=post.media_url,
        media_type=post.media_type,
        reactions=summarize_reactions(post.reactions, viewer_id),
        is_mine=viewer_id is not None and post.author_id == viewer_id,
        created_at=post.created_at,
    )


async def create_spill(user: User, data: SpillCreate) -> str:
    content = (data.content or "").strip() or None
    if not content and not data.media_url:
        raise InvalidRequest("EMPTY_POST", "Write something or attach media")
    post = await repository.add(
        SpillPost(
            author_id=user.id,
            content=content,
            media_url=data.media_url,
            media_type=data.media_type.value if data.media_type else None,
            reactions=[],
        )
    )
    return post.id


async def get_spills(user: Optional[User]) -> List[SpillResponse]:
    viewer_id = user.id if user else None
    return [_spill_response(p, viewer_id) for p in await repository.list_newest(SpillPost)]


async def toggle_spill_reaction(user: User, post_id: str, emoji: str) -> bool:
    post = await repository.get(SpillPost, post_id)
    if not post:
        raise NotFound("POST_NOT_FOUND", "Post not found")
    reactions, added = toggle_reaction(post.reactions, user.id, emoji)
    await repository.set_field(SpillPost, post.id, "reactions", reactions)
    return added


async def delete_spill(user: User, post_id: str) -> str:
    post = await repository.get(SpillPost, post_id)
    if not post:
        raise NotFound("POST_NOT_FOUND", "Post not found")
    if post.author_id != user.id:
        raise Forbidden("NOT_AUTHOR", "You can only delete your own posts")
    await repository.remove(SpillPost, post.id)
    return post.id


async def delete_old_spills(hours: int = settings.SPILL_TTL_HOURS) -> int:
    deleted = await repository.delete_spills_before(utcnow() - timedelta(hours=hours))
    logger.info(f"Deleted {deleted} spill posts older than {hours}h")
    return deleted


# Collaboration posts

def _collaboration_response(post: CollaborationPost, authors: Dict[str, UserPublic]) -> CollaborationResponse:
    return CollaborationResponse(
        id=post.id,
        author_id=post.author_id,
        title=post.title,
        description=post.description,
        tags=post.tags or [],
        volunteers=post.volunteers or [],
        created_at=post.created_at,
        author=authors.get(post.author_id),
    )


async def create_post(user: User, data: CollaborationCreate) -> str:
    post = await repository.add(
        CollaborationPost(
            author_id=user.id,
            title=data.title,
            description=data.description,
            tags=data.tags,
            volunteers=[],
        )
    )
    return post.id


async def get_posts() -> List[CollaborationResponse]:
    posts = await repository.list_newest(CollaborationPost)
    authors = await _public_users(p.author_id for p in posts)
    return [_collaboration_response(p, authors) for p in posts]


async def get_user_posts(user_id: str) -> List[CollaborationResponse]:
    posts = await repository.list_posts_by_author(user_id)
    authors = await _public_users([user_id])
    return [_collaboration_response(p, authors) for p in posts]


async def toggle_volunteer(user: User, post_id: str) -> bool:
    post = await repository.get(CollaborationPost, post_id)
    if not post:
        raise NotFound("POST_NOT_FOUND", "Post not found")
    if post.author_id == user.id:
        raise InvalidRequest("OWN_POST", "You cannot volunteer for your own post")

    volunteering = user.id in (post.volunteers or [])
    volunteers = without_member(post.volunteers, user.id) if volunteering else with_member(post.volunteers, user.id)
    await repository.set_field(CollaborationPost, post.id, "volunteers", volunteers)
    return not volunteering


async def get_volunteers(post_id: str) -> List[UserPublic]:
    post = await repository.get(CollaborationPost, post_id)
    if not post:
        raise NotFound("POST_NOT_FOUND", "Post not found")
    users = await _public_users(post.volunteers or [])
    return [users[uid] for uid in post.volunteers or [] if uid in users]


# Events

def _naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


async def create_event(user: User, data: EventCreate) -> str:
    async with session_scope():
        event = await repository.add(
            Event(
                creator_id=user.id,
                title=data.title,
                description=data.description,
                tags=data.tags,
                location=data.location,
                event_date=_naive_utc(data.event_date),
                interested_users=[],
            )
        )
        for connection_id in user.connections or []:
            await notify(
                connection_id,
                NotificationType.NEW_EVENT,
                f"{user.name or 'Someone'} created a new event: {data.title}",
                related_user_id=user.id,
            )
    return event.id


async def get_events() -> List[EventResponse]:
    events = await repository.list_newest(Event)
    creators = await _public_users(e.creator_id for e in events)
    return [
        EventResponse(
            id=e.id,
            creator_id=e.creator_id,
            title=e.title,
            description=e.description,
            tags=e.tags or [],
            location=e.location,
            event_date=e.event_date,
            interested_users=e.interested_users or [],
            created_at=e.created_at,
            creator=creators.get(e.creator_id),
        )
        for e in events
    ]


async def toggle_interest(user: User, event_id: str) -> bool:
    event = await repository.get(Event, event_id)
    if not event:
        raise NotFound("EVENT_NOT_FOUND", "Event not found")

    interested = user.id in (event.interested_users or [])
    if interested:
        await repository.set_field(Event, event.id, "interested_users", without_member(event.interested_users, user.id))
        return False

    async with session_scope():
        await repository.set_field(Event, event.id, "interested_users", with_member(event.interested_users, user.id))
        await notify(
            event.creator_id,
            NotificationType.EVENT_INTEREST,
            f"{user.name or 'Someone'} is interested in your event: {event.title}",
            related_user_id=user.id,
        )
    return True


# Gossip

async def send_gossip(user: User, message: str) -> str:
    gossip = await repository.add(GossipMessage(sender_id=user.id, message=message, reactions=[]))
    return gossip.id


async def get_gossip(user: Optional[User]) -> List[GossipResponse]:
    """Latest messages, oldest first"""
    viewer_id = user.id if user else None
    messages = await repository.list_newest(GossipMessage, settings.GOSSIP_PAGE_SIZE)
    senders = await _public_users(m.sender_id for m in messages)
    return [
        GossipResponse(
            id=m.id,
            sender_id=m.sender_id,
            message=m.message,
            reactions=summarize_reactions(m.reactions, viewer_id),
            created_at=m.created_at,
            sender=senders.get(m.sender_id),
        )
        for m in reversed(messages)
    ]


async def toggle_gossip_reaction(user: User, message_id: str, emoji: str) -> bool:
    message = await repository.get(GossipMessage, message_id)
    if not message:
        raise NotFound("MESSAGE_NOT_FOUND", "Message not found")
    reactions, added = toggle_reaction(message.reactions, user.id, emoji)
    await repository.set_field(GossipMessage, message.id, "reactions", reactions)
    return added


async def delete_gossip(user: User, message_id: str) -> str:
    message = await repository.get(GossipMessage, message_id)
    if not message:
        raise NotFound("MESSAGE_NOT_FOUND", "Message not found")
    if message.sender_id != user.id:
        raise Forbidden("NOT_AUTHOR", "You can only delete your own messages")
    await repository.remove(GossipMessage, message.id)
    return message.id
