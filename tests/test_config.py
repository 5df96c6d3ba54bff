from __future__ import annotations

import pytest
from pydantic import ValidationError

from newsletter.config import Settings


ENV_NAMES = (
    "SENDGRID_API_KEY",
    "FROM_EMAIL",
    "BASE_URL",
    "LOG_LEVEL",
    "RATE_LIMIT_WINDOW_SECONDS",
    "RATE_LIMIT_IP_PER_WINDOW",
    "RATE_LIMIT_EMAIL_PER_WINDOW",
    "RATE_LIMIT_MAX_KEYS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = Settings(_env_file=None)
    assert config.sendgrid_api_key is None
    assert config.from_email is None
    assert config.base_url is None
    assert config.rate_limit_window_seconds == 3600
    assert config.rate_limit_ip_per_window == 5
    assert config.rate_limit_email_per_window == 3
    assert config.rate_limit_max_keys == 100_000
    assert config.log_level == "INFO"


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("SENDGRID_API_KEY", "SG.key")
    monkeypatch.setenv("BASE_URL", "https://example.com/")
    monkeypatch.setenv("RATE_LIMIT_IP_PER_WINDOW", "9")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    config = Settings(_env_file=None)
    assert config.sendgrid_api_key == "SG.key"
    assert config.base_url == "https://example.com/"
    assert config.rate_limit_ip_per_window == 9
    assert config.log_level == "DEBUG"


def test_blank_mail_settings_count_as_missing(monkeypatch):
    monkeypatch.setenv("FROM_EMAIL", "   ")
    assert Settings(_env_file=None).from_email is None


def test_rejects_unknown_log_level():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, LOG_LEVEL="LOUD")
