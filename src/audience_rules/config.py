"""Translator settings.

Settings come from the environment (optionally seeded from a .env file in the
working directory). Library callers can also build TranslatorSettings directly.
"""

from __future__ import annotations

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

ENV_LITERAL_POLICY = "AUDIENCE_RULES_LITERAL_POLICY"
ENV_LOG_LEVEL = "AUDIENCE_RULES_LOG_LEVEL"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LiteralPolicy(str, Enum):
    """What to do with single quotes and backslashes inside literal values."""

    ESCAPE = "escape"  # ' -> \' ; backslash is rejected
    REJECT = "reject"  # either character is rejected
    VERBATIM = "verbatim"  # emitted unchanged


class TranslatorSettings(BaseModel):
    """Runtime configuration for rule translation."""

    literal_policy: LiteralPolicy = Field(
        default=LiteralPolicy.ESCAPE,
        description="Quoting policy for audience/field/permission/profile literals",
    )
    log_level: LogLevel = Field(default="INFO", description="Level used by configure_logging()")

    @classmethod
    def from_env(cls, env_file: Path | None = None) -> TranslatorSettings:
        """Build settings from environment variables.

        Args:
            env_file: Optional .env file. Defaults to ./.env when it exists.
                Variables already set in the environment take precedence.

        Returns:
            TranslatorSettings with unset variables left at their defaults.
        """
        env_path = env_file or Path.cwd() / ".env"
        if env_path.exists():
            load_dotenv(env_path)

        values: dict[str, str] = {}
        literal_policy = os.getenv(ENV_LITERAL_POLICY)
        if literal_policy:
            values["literal_policy"] = literal_policy.strip().lower()
        log_level = os.getenv(ENV_LOG_LEVEL)
        if log_level:
            values["log_level"] = log_level.strip().upper()
        return cls.model_validate(values)


def configure_logging(settings: TranslatorSettings | None = None) -> None:
    """Configure root logging for hosts that run the translator standalone."""
    settings = settings or TranslatorSettings()
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
