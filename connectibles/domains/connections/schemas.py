from pydantic import BaseModel


class TargetUserRequest(BaseModel):
    receiver_id: str


class ConnectionResult(BaseModel):
    request_id: str
    status: str
