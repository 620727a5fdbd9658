"""Suite settings loaded from environment variables and config files.

Configuration is loaded from (highest priority first):
1. Environment variables (prefix: ``HEDERABDD_``, nested via ``__``)
2. YAML config file (``HEDERABDD_CONFIG_PATH`` env var)
3. Defaults defined here

Accounts are given as a JSON list in ``HEDERABDD_ACCOUNTS`` or as an
``accounts:`` list in the YAML file.  ``accounts[0]`` is the treasury and
default operator for every scenario.
"""

from __future__ import annotations

import enum
from pathlib import Path
from typing import Any, Self

import yaml
from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from hedera_bdd.errors.ledger_errors import ConfigurationError

# ---------------------------------------------------------------------------
# Enums for validated choices
# ---------------------------------------------------------------------------


class Network(enum.StrEnum):
    """Supported ledger networks."""

    MAINNET = "mainnet"
    TESTNET = "testnet"
    PREVIEWNET = "previewnet"


class KeyType(enum.StrEnum):
    """Private key algorithms accepted for configured accounts."""

    ED25519 = "ed25519"
    ECDSA = "ecdsa"


_MIRROR_URLS: dict[Network, str] = {
    Network.MAINNET: "https://mainnet-public.mirrornode.hedera.com",
    Network.TESTNET: "https://testnet.mirrornode.hedera.com",
    Network.PREVIEWNET: "https://previewnet.mirrornode.hedera.com",
}

# ---------------------------------------------------------------------------
# Sub-config models
# ---------------------------------------------------------------------------


class AccountConfig(BaseModel):
    """A pre-funded account the scenarios may operate."""

    id: str
    private_key: str = Field(repr=False)
    key_type: KeyType = KeyType.ED25519


class MirrorNodeConfig(BaseSettings):
    """Mirror node REST settings."""

    model_config = SettingsConfigDict(
        env_prefix="HEDERABDD_MIRROR__",
        case_sensitive=False,
    )

    url: str = Field(
        default="",
        description="Base URL; derived from the network when empty",
    )
    timeout: float = 30.0
    settle_seconds: float = Field(
        default=4.0,
        ge=0,
        description="Fixed wait before reading freshly published messages",
    )


# ---------------------------------------------------------------------------
# Top-level config
# ---------------------------------------------------------------------------


def _load_yaml(path: str | Path) -> dict[str, Any]:
    """Load a YAML configuration file and return its contents as a dict.

    Returns an empty dict if the file doesn't exist or is empty.
    """
    p = Path(path)
    if not p.exists():
        return {}
    text = p.read_text(encoding="utf-8")
    data = yaml.safe_load(text)
    return data if isinstance(data, dict) else {}


class AppConfig(BaseSettings):
    """Top-level suite configuration.

    Loads settings from environment variables (``HEDERABDD_`` prefix),
    an optional YAML file, and built-in defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="HEDERABDD_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    network: Network = Network.TESTNET
    accounts: list[AccountConfig] = Field(default_factory=list)
    token_decimals: int = Field(default=2, ge=0, le=18)
    new_account_key_type: KeyType = KeyType.ED25519
    log_level: str = "INFO"
    config_path: str = ""

    mirror: MirrorNodeConfig = Field(default_factory=MirrorNodeConfig)

    @model_validator(mode="before")
    @classmethod
    def _merge_yaml(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Merge YAML config file contents under the env var overrides."""
        config_path = values.get("config_path", "")
        if not config_path:
            return values
        yaml_data = _load_yaml(config_path)
        # YAML values serve as defaults; env vars (already in *values*) win.
        for key, val in yaml_data.items():
            if key not in values or values[key] is None:
                values[key] = val
            elif isinstance(val, dict) and isinstance(values.get(key), dict):
                merged = {**val, **values[key]}
                values[key] = merged
        return values

    @classmethod
    def from_yaml(cls, path: str | Path) -> Self:
        """Construct ``AppConfig`` loading defaults from a YAML file.

        Environment variables still override YAML values.
        """
        return cls(config_path=str(path))

    @property
    def mirror_url(self) -> str:
        """Mirror node base URL without a trailing slash."""
        url = self.mirror.url or _MIRROR_URLS[self.network]
        return url.rstrip("/")

    def account(self, index: int) -> AccountConfig:
        """Return the configured account at *index*.

        Raises:
            ConfigurationError: If fewer than ``index + 1`` accounts are set.
        """
        if index < 0 or index >= len(self.accounts):
            msg = (
                f"account #{index + 1} is not configured "
                f"({len(self.accounts)} account(s) in HEDERABDD_ACCOUNTS)"
            )
            raise ConfigurationError(msg)
        return self.accounts[index]
