from . import api, events, models, service

router = api.router
register_event_handlers = events.register_event_handlers
