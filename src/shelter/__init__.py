"""SHELTER

A resilient orchestration facade for a cat shelter. It composes an
authorization service, a product ledger, a breed catalog, a price exchange
and a persisted key-value store into one consistent domain view, retrying
transient failures and repairing records the ledger no longer knows about.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
