"""hedera-bdd: behavior-driven scenarios for Hedera account, topic and token services."""

__version__ = "0.1.0"
