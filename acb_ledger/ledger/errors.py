"""Project-native typed exceptions for ledger run failures."""

from __future__ import annotations

from datetime import datetime


class LedgerError(Exception):
    """Base exception for ledger engine failures.

    Attributes:
        asset: Asset code involved in the failure, if any.
    """

    def __init__(self, message: str, asset: str | None = None):
        super().__init__(message)
        self.asset = asset


class TransactionValueUnresolvedError(LedgerError, ValueError):
    """A transaction or its fee reached the ledger without a monetary value."""

    def __init__(self, message: str, asset: str | None = None, time: datetime | None = None):
        super().__init__(message=message, asset=asset)
        self.time = time


class EmptyBalanceDispositionError(LedgerError, ValueError):
    """An asset was disposed from a zero balance while strict disposals are enabled."""


class LedgerFinalizedError(LedgerError, RuntimeError):
    """The engine was used after its run had been finalized."""
