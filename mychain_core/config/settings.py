# mychain_core/config/settings.py

import logging
import re
from typing import Optional

import coloredlogs
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..constants import (
    DEFAULT_CHAIN_ID,
    DEFAULT_GAS_PRICE,
    DEFAULT_REST_ENDPOINT,
    DEFAULT_RPC_ENDPOINT,
    NATIVE_DENOM,
)

# ANSI color codes
GREEN = "\033[92m"
YELLOW = "\033[93m"
RESET = "\033[0m"

# Tendermint tx hashes are 64 hex chars; accounts are bech32 "mychain1..."
TX_HASH_REGEX = re.compile(r"(\b[a-fA-F0-9]{64}\b)")
ADDRESS_REGEX = re.compile(r"(\bmychain1[02-9ac-hj-np-z]{38}\b)")


class HighlightFormatter(coloredlogs.ColoredFormatter):
    """Colours transaction hashes and chain addresses inside log lines."""

    def format(self, record):
        formatted_message = super().format(record)
        formatted_message = TX_HASH_REGEX.sub(
            lambda m: f"{YELLOW}{m.group(1)}{RESET}", formatted_message
        )
        formatted_message = ADDRESS_REGEX.sub(
            lambda m: f"{GREEN}{m.group(1)}{RESET}", formatted_message
        )
        return formatted_message


class Settings(BaseSettings):
    """
    Central configuration, loaded from environment variables or a .env file.
    """

    model_config = SettingsConfigDict(
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="MYCHAIN_",
    )

    NETWORK: Optional[str] = Field(
        default=None,
        description="Named network preset from networks.yaml; unset means the explicit endpoints below",
    )
    RPC_ENDPOINT: str = Field(
        default=DEFAULT_RPC_ENDPOINT, description="Tendermint RPC endpoint"
    )
    REST_ENDPOINT: str = Field(
        default=DEFAULT_REST_ENDPOINT, description="Cosmos REST (LCD) endpoint"
    )
    CHAIN_ID: str = Field(default=DEFAULT_CHAIN_ID, description="Chain id")
    DEFAULT_DENOM: str = Field(
        default=NATIVE_DENOM, description="Denom used when none is given"
    )
    GAS_PRICE: str = Field(
        default=DEFAULT_GAS_PRICE,
        description="Gas price bound to signing connections, e.g. 0.1umychain",
    )
    REQUEST_TIMEOUT: float = Field(
        default=30.0, description="HTTP transport timeout in seconds"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level {value!r}")
        return level

    @field_validator("RPC_ENDPOINT", "REST_ENDPOINT")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


try:
    settings = Settings()  # type: ignore
except Exception as e:
    logging.warning(f"Error loading settings: {e}. Falling back to defaults.")
    settings = Settings.model_construct()  # type: ignore

LOG_LEVEL_CONFIG = logging.getLevelName(settings.LOG_LEVEL)
if not isinstance(LOG_LEVEL_CONFIG, int):
    LOG_LEVEL_CONFIG = logging.INFO

DEFAULT_LEVEL_STYLES = {
    "debug": {"color": "green"},
    "info": {"color": "cyan"},
    "warning": {"color": "yellow"},
    "error": {"color": "red"},
    "critical": {"bold": True, "color": "red"},
}
DEFAULT_FIELD_STYLES = {
    "asctime": {"color": "magenta"},
    "levelname": {"bold": True, "color": "blue"},
    "name": {"color": "white"},
}
DEFAULT_FMT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

highlight_formatter = HighlightFormatter(
    fmt=DEFAULT_FMT,
    level_styles=DEFAULT_LEVEL_STYLES,
    field_styles=DEFAULT_FIELD_STYLES,
)

# Only the package logger is configured; the host application's root
# logger is left alone.
package_logger = logging.getLogger("mychain_core")
coloredlogs.install(
    level=LOG_LEVEL_CONFIG,
    logger=package_logger,
    reconfigure=True,
)
package_logger.propagate = False
for handler in package_logger.handlers:
    handler.setFormatter(highlight_formatter)

logger = logging.getLogger(__name__)
logger.debug(
    f"Settings loaded. Log level set to {logging.getLevelName(LOG_LEVEL_CONFIG)}."
)
