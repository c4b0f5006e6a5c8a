"""Negative-balance monitoring for ledger runs."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from acb_ledger.domain import (
    NEGATIVE_BALANCE_CODE,
    DiagnosticEvent,
    DiagnosticSink,
    domain_asset_normalize_code,
    domain_format_time,
)

from .interfaces import LEDGER_NEGATIVE_BALANCE_TOLERANCE, BalanceObservation, NegativeBalanceRecord


class NegativeBalanceMonitor:
    """Record when asset balances fall below the negative tolerance.

    A negative balance usually means an acquisition is missing upstream or the
    input is out of order. The monitor only reports; it never changes ledger
    state.
    """

    def __init__(
        self,
        diagnostic_sink: DiagnosticSink,
        tolerance: Decimal = LEDGER_NEGATIVE_BALANCE_TOLERANCE,
    ):
        if diagnostic_sink is None:
            raise ValueError("diagnostic_sink must not be None")
        if tolerance < Decimal("0"):
            raise ValueError("tolerance must not be negative")
        self._diagnostic_sink = diagnostic_sink
        self._tolerance = tolerance
        self._record_by_asset: dict[str, NegativeBalanceRecord] = {}

    def monitor_observe(self, asset: str, balance: Decimal, time: datetime) -> None:
        """Observe one updated balance.

        Args:
            asset: Asset code of the updated ledger.
            balance: Balance after the update.
            time: Timestamp of the transaction that caused the update.

        Returns:
            None: State is recorded internally.

        Raises:
            RuntimeError: Raised when the diagnostic sink fails.
        """

        if balance >= -self._tolerance:
            return

        normalized_asset = domain_asset_normalize_code(asset)
        observation = BalanceObservation(balance=balance, time=time)
        record = self._record_by_asset.get(normalized_asset)
        if record is None:
            self._record_by_asset[normalized_asset] = NegativeBalanceRecord(first=observation, minimum=observation)
            self._diagnostic_sink.diagnostic_emit(
                DiagnosticEvent(
                    asset=normalized_asset,
                    kind=NEGATIVE_BALANCE_CODE,
                    time=time,
                    message=(
                        f"Encountered a negative balance for {normalized_asset} "
                        f"on {domain_format_time(time)}: {balance}."
                    ),
                    details={"balance": str(balance)},
                )
            )
            return

        if balance < record.minimum.balance:
            self._record_by_asset[normalized_asset] = NegativeBalanceRecord(first=record.first, minimum=observation)

    def monitor_records(self) -> dict[str, NegativeBalanceRecord]:
        """Return negative-balance records keyed by asset code."""

        return dict(self._record_by_asset)
