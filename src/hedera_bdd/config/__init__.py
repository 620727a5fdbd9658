"""Suite configuration."""

from hedera_bdd.config.settings import AccountConfig, AppConfig, KeyType, MirrorNodeConfig, Network

__all__ = ["AccountConfig", "AppConfig", "KeyType", "MirrorNodeConfig", "Network"]
