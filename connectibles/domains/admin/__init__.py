from . import api

router = api.router
