"""
Domain errors.

Every error carries a short uppercase code. Clients match on the
"CODE: message" string, so codes and the separator are part of the API.
"""


class ConnectiblesError(Exception):
    status_code = 400

    def __init__(self, code: str, message: str, status_code: int = None):
        self.code = code
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(f"{code}: {message}")

    @property
    def detail(self) -> str:
        return str(self)


class InvalidRequest(ConnectiblesError):
    status_code = 400


class AuthRequired(ConnectiblesError):
    status_code = 401

    def __init__(self, message: str = "Please sign in to continue"):
        super().__init__("AUTH_REQUIRED", message)


class Forbidden(ConnectiblesError):
    status_code = 403


class NotFound(ConnectiblesError):
    status_code = 404


class Conflict(ConnectiblesError):
    status_code = 409
