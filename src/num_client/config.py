"""Runtime settings for num-client.

Settings are read from ``NUM_CLIENT_*`` environment variables through
Pydantic's ``BaseSettings``.  Command-line flags cover what a user picks
per invocation; these settings cover how the client talks to DNS and
how it logs.

List-valued settings take comma-separated values, e.g.
``NUM_CLIENT_NAMESERVERS=1.1.1.1,9.9.9.9``.
"""

from __future__ import annotations

import logging
from typing import Annotated, Optional

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from num_client.core.models import WARM_UP_URIS
from num_client.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Environment-driven settings for one process."""

    model_config = SettingsConfigDict(env_prefix="NUM_CLIENT_")

    log_level: str = "WARNING"
    """
    Root log level.
    Set with NUM_CLIENT_LOG_LEVEL.
    """

    logging_config_file: Optional[str] = None
    """
    Path to a JSON ``logging.config.dictConfig`` document.  Overrides
    log_level when set.
    Set with NUM_CLIENT_LOGGING_CONFIG_FILE.
    """

    nameservers: Annotated[list[str], NoDecode] = []
    """
    DNS servers to query.  Empty uses the system resolver configuration.
    Set with NUM_CLIENT_NAMESERVERS as comma-separated values.
    """

    timeout: float = 5.0
    """
    Lifetime of a single DNS query in seconds.
    Set with NUM_CLIENT_TIMEOUT.
    """

    warm_up: bool = True
    """
    Resolve warm_up_uris in the background when the interactive shell starts.
    Set with NUM_CLIENT_WARM_UP.
    """

    warm_up_uris: Annotated[list[str], NoDecode] = list(WARM_UP_URIS)
    """
    URIs resolved by the background warm-up.
    Set with NUM_CLIENT_WARM_UP_URIS as comma-separated values.
    """

    @field_validator("nameservers", "warm_up_uris", mode="before")
    @classmethod
    def split_comma_separated(cls, v) -> list[str]:
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {v!r}")
        return level

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeout must be positive")
        return v


def load_settings() -> Settings:
    """Build :class:`Settings` from the environment.

    Raises
    ------
    ConfigurationError
        If any ``NUM_CLIENT_*`` variable fails validation.
    """
    try:
        return Settings()
    except ValidationError as exc:
        fields = ", ".join(
            "NUM_CLIENT_" + str(error["loc"][0]).upper() for error in exc.errors() if error["loc"]
        )
        raise ConfigurationError(
            f"Invalid configuration: {fields or exc}",
            hint=str(exc),
        ) from exc
