"""Step definitions for the ledger feature files.

Loaded as pytest plugins; list every module in ``pytest_plugins``::

    pytest_plugins = list(hedera_bdd.steps.PLUGINS)
"""

PLUGINS = (
    "hedera_bdd.steps.fixtures",
    "hedera_bdd.steps.accounts",
    "hedera_bdd.steps.topics",
    "hedera_bdd.steps.tokens",
    "hedera_bdd.steps.transfers",
)
