"""
app/schemas/auth.py

Request and response schemas for the throttled auth email endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel


class AuthEmailRequest(BaseModel):
    # Left as a plain string: malformed addresses get the generic reply.
    email: str = ""


class AuthEmailResponse(BaseModel):
    message: str


class RateLimitedResponse(BaseModel):
    message: str
    retry_after: int
