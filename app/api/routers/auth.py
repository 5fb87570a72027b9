"""
app/api/routers/auth.py

Throttled auth email endpoints.

Replies never reveal whether an address is registered. Malformed
addresses get the same message as a successful send.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.api.dependencies import get_request_client_ip
from app.schemas.auth import AuthEmailRequest, AuthEmailResponse, RateLimitedResponse
from app.services.auth_email_service import (
    PASSWORD_RESET_SENT_MESSAGE,
    VERIFICATION_SENT_MESSAGE,
    AuthEmailService,
    get_auth_email_service,
)
from app.services.rate_limiter import ThrottleDecision
from app.utils.client_ip import UNKNOWN_CLIENT_IP
from app.validators.agency_row_validator import is_valid_email

router = APIRouter(prefix="/auth", tags=["auth"])

VERIFICATION_THROTTLED_MESSAGE = "Please wait before requesting another verification email."
PASSWORD_RESET_THROTTLED_MESSAGE = "Too many password reset requests. Please try again later."


def _throttled_response(message: str, decision: ThrottleDecision) -> JSONResponse:
    retry_after = decision.retry_after_seconds or 1
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content=RateLimitedResponse(message=message, retry_after=retry_after).model_dump(),
        headers={"Retry-After": str(retry_after)},
    )


@router.post(
    "/resend-verification",
    response_model=AuthEmailResponse,
    responses={429: {"model": RateLimitedResponse}},
)
def resend_verification(
    payload: AuthEmailRequest,
    auth_email_service: AuthEmailService = Depends(get_auth_email_service),
):
    """
    Resend the signup verification email, two per address per window.
    """

    if not is_valid_email(payload.email):
        return AuthEmailResponse(message=VERIFICATION_SENT_MESSAGE)

    decision = auth_email_service.request_verification_email(email=payload.email)
    if not decision.allowed:
        return _throttled_response(VERIFICATION_THROTTLED_MESSAGE, decision)

    return AuthEmailResponse(message=VERIFICATION_SENT_MESSAGE)


@router.post(
    "/forgot-password",
    response_model=AuthEmailResponse,
    responses={429: {"model": RateLimitedResponse}},
)
def forgot_password(
    payload: AuthEmailRequest,
    client_ip: str = Depends(get_request_client_ip),
    auth_email_service: AuthEmailService = Depends(get_auth_email_service),
):
    """
    Send a password reset link, throttled per address and per client IP.
    """

    if not is_valid_email(payload.email):
        return AuthEmailResponse(message=PASSWORD_RESET_SENT_MESSAGE)

    decision = auth_email_service.request_password_reset(
        email=payload.email,
        client_ip=None if client_ip == UNKNOWN_CLIENT_IP else client_ip,
    )
    if not decision.allowed:
        return _throttled_response(PASSWORD_RESET_THROTTLED_MESSAGE, decision)

    return AuthEmailResponse(message=PASSWORD_RESET_SENT_MESSAGE)
