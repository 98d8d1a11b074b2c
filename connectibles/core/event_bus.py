import asyncio
import inspect
from typing import Any, Callable, Dict, List

from connectibles.shared.utils import logger


def _handler_name(handler: Callable) -> str:
    return getattr(handler, "__name__", repr(handler))


class EventBus:
    """In-process publish/subscribe for deferred side effects.

    Handler failures and timeouts are logged, never raised to the publisher.
    """

    def __init__(self, handler_timeout: float = 5.0):
        self.subscriptions: Dict[str, List[Callable]] = {}
        self.handler_timeout = handler_timeout
        self.log = logger.get_logger("event_bus")

    async def publish(self, event_name: str, event_data: Any):
        handlers = self.subscriptions.get(event_name, [])
        if not handlers:
            self.log.debug(f"No subscribers for {event_name}")
            return
        await asyncio.gather(*(self._run_handler(h, event_data) for h in handlers))

    async def _run_handler(self, handler: Callable, event_data: Any):
        try:
            if inspect.iscoroutinefunction(handler):
                call = handler(event_data)
            else:
                call = asyncio.to_thread(handler, event_data)
            await asyncio.wait_for(call, timeout=self.handler_timeout)
        except asyncio.TimeoutError:
            self.log.error(f"Handler timed out: {_handler_name(handler)}")
        except Exception as e:
            self.log.error(f"Error in event handler {_handler_name(handler)}: {e}")

    def subscribe(self, event_name: str, handler: Callable[[Any], None]):
        handlers = self.subscriptions.setdefault(event_name, [])
        if handler in handlers:
            return
        handlers.append(handler)
        self.log.debug(f"Subscribed {_handler_name(handler)} to: {event_name}")


event_bus = EventBus()
