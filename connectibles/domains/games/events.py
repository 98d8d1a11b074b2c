# connectibles/domains/games/events.py
from connectibles.core import event_bus
from connectibles.domains.games import service
from connectibles.shared.schemas.events import GameSessionCompleted


async def _on_session_completed(data: dict):
    event = GameSessionCompleted(**data)
    await service.record_session_outcome(event.session_id)


def register_event_handlers():
    event_bus.event_bus.subscribe("game:session_completed", _on_session_completed)
