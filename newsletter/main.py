from __future__ import annotations

from .config import Settings, settings
from .dispatch import ConfirmationDispatcher
from .log import configure_logging, log_event
from .mailer import SendGridMailer
from .rate_limit import SlidingWindowRateLimiter


def create_dispatcher(config: Settings | None = None) -> ConfirmationDispatcher:
    """Build the process-wide dispatcher; hand the result to whatever serves requests."""
    config = config or settings
    limiter = SlidingWindowRateLimiter(
        window_seconds=config.rate_limit_window_seconds,
        max_keys=config.rate_limit_max_keys,
    )
    mailer = SendGridMailer(
        api_key=config.sendgrid_api_key,
        from_email=config.from_email,
        base_url=config.base_url,
        timeout_seconds=config.sendgrid_timeout_seconds,
    )
    return ConfirmationDispatcher(
        limiter=limiter,
        mailer=mailer,
        ip_limit=config.rate_limit_ip_per_window,
        email_limit=config.rate_limit_email_per_window,
        window_seconds=config.rate_limit_window_seconds,
        key_pepper=config.log_hash_pepper,
    )


def startup(config: Settings | None = None) -> ConfirmationDispatcher:
    config = config or settings
    configure_logging(config.log_level)
    missing = [
        name
        for name, value in (
            ("SENDGRID_API_KEY", config.sendgrid_api_key),
            ("FROM_EMAIL", config.from_email),
            ("BASE_URL", config.base_url),
        )
        if not value
    ]
    if missing:
        # Sends fail with MailerConfigError until these are set.
        log_event("mailer_not_configured", missing=missing)
    log_event("startup", app_name=config.app_name, environment=config.environment)
    return create_dispatcher(config)
