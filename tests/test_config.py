"""Tests for translator settings."""

import logging

import pytest
from pydantic import ValidationError

from audience_rules.config import (
    ENV_LITERAL_POLICY,
    ENV_LOG_LEVEL,
    LiteralPolicy,
    TranslatorSettings,
    configure_logging,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """No ambient settings and no stray .env file."""
    # set-then-delete so values written by load_dotenv are undone too
    for name in (ENV_LITERAL_POLICY, ENV_LOG_LEVEL):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


def test_defaults():
    settings = TranslatorSettings.from_env()

    assert settings.literal_policy is LiteralPolicy.ESCAPE
    assert settings.log_level == "INFO"


def test_from_environment(monkeypatch):
    monkeypatch.setenv(ENV_LITERAL_POLICY, "Reject")
    monkeypatch.setenv(ENV_LOG_LEVEL, "debug")

    settings = TranslatorSettings.from_env()

    assert settings.literal_policy is LiteralPolicy.REJECT
    assert settings.log_level == "DEBUG"


def test_from_env_file(tmp_path):
    env_file = tmp_path / "translator.env"
    env_file.write_text(f"{ENV_LITERAL_POLICY}=verbatim\n")

    settings = TranslatorSettings.from_env(env_file)

    assert settings.literal_policy is LiteralPolicy.VERBATIM


def test_environment_wins_over_env_file(monkeypatch, tmp_path):
    monkeypatch.setenv(ENV_LITERAL_POLICY, "reject")
    env_file = tmp_path / ".env"
    env_file.write_text(f"{ENV_LITERAL_POLICY}=verbatim\n")

    settings = TranslatorSettings.from_env()

    assert settings.literal_policy is LiteralPolicy.REJECT


def test_invalid_policy(monkeypatch):
    monkeypatch.setenv(ENV_LITERAL_POLICY, "sanitize")

    with pytest.raises(ValidationError):
        TranslatorSettings.from_env()


def test_invalid_log_level():
    with pytest.raises(ValidationError):
        TranslatorSettings(log_level="VERBOSE")


def test_invalid_log_level_from_environment(monkeypatch):
    monkeypatch.setenv(ENV_LOG_LEVEL, "verbose")

    with pytest.raises(ValidationError):
        TranslatorSettings.from_env()


def test_configure_logging(monkeypatch):
    calls = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))

    configure_logging(TranslatorSettings(log_level="DEBUG"))

    assert calls["level"] == "DEBUG"
    assert "%(levelname)s" in calls["format"]
