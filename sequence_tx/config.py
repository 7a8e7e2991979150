"""
Configuration loading for sequence-tx.

The configuration is a small JSON document with connection and credential
fields. It is parsed into a frozen ``AppConfig`` and validated before any
network activity happens.
"""
import logging
import os
import string
from typing import List, Optional

from eth_utils import is_hex_address
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ConfigError, ValidationFailedError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config.json"
DEFAULT_DIRECTORY_URL = "https://keymachine.sequence.app"

# Fields that must be present and non-empty, in reporting order
REQUIRED_FIELDS = [
    ("project_access_key", "projectAccessKey"),
    ("private_key", "privateKey"),
    ("chain_id", "chainId"),
    ("target_address", "targetAddress"),
    ("node_url", "nodeUrl"),
    ("relayer_url", "relayerUrl"),
    ("explorer_url", "explorerUrl"),
]


class AppConfig(BaseModel):
    """Connection and credential settings for a single run"""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    project_access_key: str = Field("", alias="projectAccessKey")
    private_key: str = Field("", alias="privateKey")
    chain_id: int = Field(0, alias="chainId")
    target_address: str = Field("", alias="targetAddress")
    node_url: str = Field("", alias="nodeUrl")
    relayer_url: str = Field("", alias="relayerUrl")
    explorer_url: str = Field("", alias="explorerUrl")
    directory_url: str = Field("", alias="directoryUrl")
    wallet_factory: Optional[str] = Field(None, alias="walletFactory")

    @field_validator(
        "project_access_key", "private_key", "target_address",
        "node_url", "relayer_url", "explorer_url", "directory_url",
        mode="before",
    )
    @classmethod
    def _null_as_empty_string(cls, value):
        return "" if value is None else value

    @field_validator("chain_id", mode="before")
    @classmethod
    def _null_as_zero(cls, value):
        return 0 if value is None else value

    def validate_fields(self) -> None:
        """
        Check required fields, the target address and the private key.

        Raises:
            ConfigError: If one or more required fields are empty
            ValidationFailedError: If the address or private key is malformed
        """
        missing: List[str] = [
            alias for attr, alias in REQUIRED_FIELDS if not getattr(self, attr)
        ]
        if missing:
            raise ConfigError(f"missing required config values: {', '.join(missing)}")

        if not is_hex_address(self.target_address):
            raise ValidationFailedError(f"invalid target address: {self.target_address}")

        normalize_private_key(self.private_key)

    @property
    def normalized_private_key(self) -> str:
        """The private key without ``0x`` prefix or surrounding whitespace."""
        return normalize_private_key(self.private_key)

    @property
    def resolved_directory_url(self) -> str:
        return self.directory_url or DEFAULT_DIRECTORY_URL

    @property
    def resolved_wallet_factory(self) -> Optional[str]:
        return self.wallet_factory or os.environ.get("SEQUENCE_WALLET_FACTORY")

    @property
    def provider_url(self) -> str:
        """Node URL with the project access key appended."""
        return with_access_key(self.node_url, self.project_access_key)


def load_config(path: str = DEFAULT_CONFIG_PATH) -> AppConfig:
    """
    Read, parse and validate a configuration file.

    Args:
        path: Path to the JSON configuration file

    Returns:
        Validated AppConfig

    Raises:
        ConfigError: If the file can't be read, parsed, or lacks required values
        ValidationFailedError: If the address or key is malformed
    """
    try:
        with open(path, "rb") as f:
            raw = f.read()
    except OSError as e:
        raise ConfigError(f"read config {path}: {e}", cause=e) from e

    try:
        cfg = AppConfig.model_validate_json(raw)
    except PydanticValidationError as e:
        raise ConfigError(f"parse config: {e}", cause=e) from e

    cfg.validate_fields()
    logger.debug(f"Loaded config from {path} for chain {cfg.chain_id}")
    return cfg


def normalize_private_key(key: str) -> str:
    """
    Strip whitespace and an optional ``0x`` prefix from a private key.

    Raises:
        ValidationFailedError: If the key is not exactly 64 hex characters
    """
    key = key.strip()
    if key.startswith("0x"):
        key = key[2:]
    if len(key) != 64:
        raise ValidationFailedError("private key must be 32 bytes (64 hex chars)")
    bad = [c for c in key if c not in string.hexdigits]
    if bad:
        raise ValidationFailedError(f"invalid private key: non-hex character {bad[0]!r}")
    return key


def with_access_key(base_url: str, access_key: str) -> str:
    if base_url.endswith("/"):
        return base_url + access_key
    return f"{base_url}/{access_key}"
