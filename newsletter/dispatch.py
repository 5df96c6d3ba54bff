from __future__ import annotations

import hashlib
import hmac
import logging
import secrets
from typing import Protocol

from .log import log_event
from .mailer import ConfirmationEmailError
from .rate_limit import SlidingWindowRateLimiter
from .schemas import SubscribeRequest


class ConfirmationSender(Protocol):
    def send_confirmation(self, email: str, token: str) -> None: ...


class RateLimitedError(Exception):
    def __init__(self, scope: str) -> None:
        super().__init__(f"Too many confirmation requests for {scope}")
        self.scope = scope


class ConfirmationDispatcher:
    """Sends subscription confirmation emails behind per-IP and per-email limits."""

    def __init__(
        self,
        limiter: SlidingWindowRateLimiter,
        mailer: ConfirmationSender,
        ip_limit: int,
        email_limit: int,
        window_seconds: float,
        key_pepper: str = "",
    ) -> None:
        self.limiter = limiter
        self.mailer = mailer
        self.ip_limit = ip_limit
        self.email_limit = email_limit
        self.window_seconds = window_seconds
        self.key_pepper = key_pepper

    def _hash_identifier(self, value: str) -> str:
        # Raw addresses never reach logs or limiter keys.
        digest = hmac.new(self.key_pepper.encode("utf-8"), value.encode("utf-8"), hashlib.sha256)
        return digest.hexdigest()

    def request_confirmation(self, client_ip: str, email: str, token: str | None = None) -> str:
        """Send a confirmation email and return the token it links to.

        Raises ``RateLimitedError`` before anything is sent when either the
        caller's address or the recipient has used up its window, and lets
        ``ConfirmationEmailError`` from the mailer propagate.
        """
        address = SubscribeRequest(email=email).email
        ip_hash = self._hash_identifier(client_ip)
        email_hash = self._hash_identifier(address)

        if not self.limiter.allow(f"ip:{client_ip}", self.ip_limit, self.window_seconds):
            log_event("confirmation_rate_limited", scope="ip", ip_hash=ip_hash[:12])
            raise RateLimitedError("ip")
        if not self.limiter.allow(f"email:{email_hash}", self.email_limit, self.window_seconds):
            log_event("confirmation_rate_limited", scope="email", email_hash=email_hash[:12])
            raise RateLimitedError("email")

        token = token or secrets.token_urlsafe(32)
        try:
            self.mailer.send_confirmation(address, token)
        except ConfirmationEmailError as exc:
            log_event(
                "confirmation_failed",
                level=logging.WARNING,
                email_hash=email_hash[:12],
                status_code=exc.status_code,
                error=str(exc),
            )
            raise

        log_event("confirmation_sent", ip_hash=ip_hash[:12], email_hash=email_hash[:12])
        return token
