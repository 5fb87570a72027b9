"""
app/services/auth_email_service.py

Throttled "resend verification" and "forgot password" requests.

Responses never reveal whether an address is registered: malformed
addresses and delivery failures produce the same outcome as a successful
send. Only throttling is visible to the caller.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Protocol

from app.config import get_rate_limit_settings
from app.logging_utils import log_event, mask_email
from app.services.rate_limiter import AuthRequestThrottle, FixedWindowRateLimiter, ThrottleDecision

logger = logging.getLogger(__name__)

VERIFICATION_SENT_MESSAGE = "If this email exists, we sent a verification link. Please check your inbox."
PASSWORD_RESET_SENT_MESSAGE = (
    "If an account exists for this email, we sent a password reset link. Please check your inbox."
)


class AuthEmailSender(Protocol):
    """
    Delivery collaborator backed by the identity provider.
    """

    def resend_verification(self, email: str) -> None:
        ...

    def send_password_reset(self, email: str) -> None:
        ...


class LoggingAuthEmailSender:
    """
    Sender for local runs: records the request instead of delivering mail.
    """

    def resend_verification(self, email: str) -> None:
        log_event(logger, logging.INFO, "auth_email_requested", kind="verification", email=mask_email(email))

    def send_password_reset(self, email: str) -> None:
        log_event(logger, logging.INFO, "auth_email_requested", kind="password_reset", email=mask_email(email))


class AuthEmailService:
    def __init__(
        self,
        *,
        sender: AuthEmailSender,
        verification_throttle: AuthRequestThrottle,
        password_reset_throttle: AuthRequestThrottle,
    ) -> None:
        self._sender = sender
        self._verification_throttle = verification_throttle
        self._password_reset_throttle = password_reset_throttle

    def request_verification_email(self, *, email: str) -> ThrottleDecision:
        """
        Resend the signup verification email unless the address is throttled.
        """

        decision = self._verification_throttle.check(email=email)
        if not decision.allowed:
            self._log_throttled("verification", email, decision)
            return decision

        try:
            self._sender.resend_verification(email.strip())
        except Exception as exc:  # noqa: BLE001
            logger.error("Resend verification failed email=%s: %s", mask_email(email), exc)
        return decision

    def request_password_reset(self, *, email: str, client_ip: str | None) -> ThrottleDecision:
        """
        Send a password reset link unless the address or client IP is throttled.
        """

        decision = self._password_reset_throttle.check(email=email, ip=client_ip)
        if not decision.allowed:
            self._log_throttled("password_reset", email, decision)
            return decision

        try:
            self._sender.send_password_reset(email.strip())
        except Exception as exc:  # noqa: BLE001
            logger.error("Password reset email failed email=%s: %s", mask_email(email), exc)
        return decision

    @staticmethod
    def _log_throttled(kind: str, email: str, decision: ThrottleDecision) -> None:
        log_event(
            logger,
            logging.WARNING,
            "auth_email_throttled",
            kind=kind,
            email=mask_email(email),
            reason=decision.reason,
            retry_after_seconds=decision.retry_after_seconds,
        )


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_auth_email_service() -> AuthEmailService:
    """
    Build the process-wide service. Each endpoint owns separate counters.
    """

    settings = get_rate_limit_settings()

    def email_limiter() -> FixedWindowRateLimiter:
        return FixedWindowRateLimiter(
            max_requests=settings.email_max_requests,
            window_seconds=settings.email_window_seconds,
        )

    return AuthEmailService(
        sender=LoggingAuthEmailSender(),
        verification_throttle=AuthRequestThrottle(email_limiter=email_limiter()),
        password_reset_throttle=AuthRequestThrottle(
            email_limiter=email_limiter(),
            ip_limiter=FixedWindowRateLimiter(
                max_requests=settings.ip_max_requests,
                window_seconds=settings.ip_window_seconds,
            ),
        ),
    )
