from pydantic import BaseModel
from typing import Optional


class NotificationRequest(BaseModel):
    """One outbound message; exists only for the duration of a dispatch call."""

    to: str
    subject: str = ""
    body: str = ""
    # Kept as a plain string so unknown channels reach the gateway and get a 400
    channel: str = "email"


class DispatchResult(BaseModel):
    success: bool
    channel: str
    to: str
    message: Optional[str] = None
    error: Optional[str] = None
