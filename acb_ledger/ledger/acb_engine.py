"""ACB ledger engine that folds chronological transactions into capital gains."""

from __future__ import annotations

from decimal import Decimal
from typing import Final, Iterable

from acb_ledger.domain import (
    EMPTY_BALANCE_DISPOSITION_CODE,
    DiagnosticEvent,
    DiagnosticSink,
    NullDiagnosticSink,
    Transaction,
    domain_asset_normalize_code,
    domain_format_time,
)

from .aggregator import aggregate_finalize_ledgers, aggregate_taxable_gain
from .disposition import (
    ledger_apply_adjustment,
    ledger_compute_fee_settlement,
    ledger_compute_transaction_adjustment,
    ledger_requires_fee_settlement,
)
from .errors import EmptyBalanceDispositionError, LedgerFinalizedError, TransactionValueUnresolvedError
from .interfaces import CapitalGains, LedgerEngineConfig, LedgerEnginePort
from .negative_balance import NegativeBalanceMonitor
from .store import LedgerStore, ledger_normalize_forward

LEDGER_STATE_EMPTY: Final[str] = "empty"
LEDGER_STATE_ACCUMULATING: Final[str] = "accumulating"
LEDGER_STATE_FINALIZED: Final[str] = "finalized"


class AcbLedgerEngine(LedgerEnginePort):
    """Sequential capital-gains fold over chronologically ordered transactions.

    The engine does not reorder its input: transactions must already be in
    global chronological order. One engine instance serves exactly one run;
    a new period starts a new engine seeded with the previous forward map.
    """

    def __init__(
        self,
        config: LedgerEngineConfig | None = None,
        diagnostic_sink: DiagnosticSink | None = None,
    ):
        """Initialize engine state and seed the ledger store.

        Args:
            config: Run configuration; defaults to an empty forward seed.
            diagnostic_sink: Receiver of recoverable data-quality events.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: Raised when a forward asset code is blank or duplicated after normalization.
        """

        self._config = config or LedgerEngineConfig()
        self._diagnostic_sink = diagnostic_sink or NullDiagnosticSink()
        self._forward_by_asset = ledger_normalize_forward(self._config.forward_by_asset)
        self._store = LedgerStore(self._forward_by_asset)
        self._monitor = NegativeBalanceMonitor(
            diagnostic_sink=self._diagnostic_sink,
            tolerance=self._config.negative_balance_tolerance,
        )
        self._transactions: list[Transaction] = []
        self._state = LEDGER_STATE_EMPTY

    def ledger_state(self) -> str:
        """Return the current engine state label."""

        return self._state

    def ledger_store(self) -> LedgerStore:
        """Return the ledger store owned by this run."""

        return self._store

    def ledger_apply(self, transaction: Transaction) -> None:
        """Apply one transaction to the ledger store.

        Args:
            transaction: Next transaction in chronological order.

        Returns:
            None: The engine mutates its ledger store.

        Raises:
            TransactionValueUnresolvedError: Raised when the transaction or its fee is unpriced.
            EmptyBalanceDispositionError: Raised for zero-balance disposals when strict disposals are enabled.
            LedgerFinalizedError: Raised after the run has been finalized.
            ValueError: Raised when the fee amount is negative.
        """

        if self._state == LEDGER_STATE_FINALIZED:
            raise LedgerFinalizedError("ledger run is already finalized", asset=transaction.asset)

        self._ledger_validate_transaction(transaction)
        asset = domain_asset_normalize_code(transaction.asset)
        ledger = self._store.get_or_create(asset)

        if transaction.amount < Decimal("0") and ledger.balance == Decimal("0"):
            message = f"Disposition of {asset} from an empty balance on {domain_format_time(transaction.time)}."
            if self._config.strict_empty_disposals:
                raise EmptyBalanceDispositionError(message, asset=asset)
            self._diagnostic_sink.diagnostic_emit(
                DiagnosticEvent(
                    asset=asset,
                    kind=EMPTY_BALANCE_DISPOSITION_CODE,
                    time=transaction.time,
                    message=message,
                    details={"amount": str(transaction.amount)},
                )
            )

        ledger_apply_adjustment(ledger, ledger_compute_transaction_adjustment(ledger, transaction))
        self._monitor.monitor_observe(asset, ledger.balance, transaction.time)

        if self._config.settle_foreign_fees and ledger_requires_fee_settlement(transaction):
            fee_ledger = self._store.get(transaction.fee_asset or "")
            if fee_ledger is not None:
                ledger_apply_adjustment(
                    fee_ledger,
                    ledger_compute_fee_settlement(fee_ledger, transaction.fee_amount),
                )
                self._monitor.monitor_observe(transaction.fee_asset or "", fee_ledger.balance, transaction.time)

        self._transactions.append(transaction)
        self._state = LEDGER_STATE_ACCUMULATING

    def ledger_consume(self, transactions: Iterable[Transaction]) -> CapitalGains:
        """Apply every transaction drawn from the producer, then finalize.

        Args:
            transactions: Chronologically ordered, finite transaction sequence.

        Returns:
            CapitalGains: Finalized run snapshot.

        Raises:
            TransactionValueUnresolvedError: Raised when any transaction is unpriced; no snapshot is produced.
        """

        for transaction in transactions:
            self.ledger_apply(transaction)
        return self.ledger_finalize()

    def ledger_finalize(self) -> CapitalGains:
        """Aggregate all ledgers and freeze the run.

        Returns:
            CapitalGains: Finalized run snapshot.

        Raises:
            LedgerFinalizedError: Raised when the run was already finalized.
        """

        if self._state == LEDGER_STATE_FINALIZED:
            raise LedgerFinalizedError("ledger run is already finalized")

        ledger_by_asset = self._store.ledger_by_asset()
        aggregate_disposition = aggregate_finalize_ledgers(ledger_by_asset)
        self._state = LEDGER_STATE_FINALIZED

        return CapitalGains(
            forward_by_asset=dict(self._forward_by_asset),
            transactions=tuple(self._transactions),
            ledger_by_asset=ledger_by_asset,
            aggregate_disposition=aggregate_disposition,
            taxable_gain=aggregate_taxable_gain(aggregate_disposition),
            negative_balance_by_asset=self._monitor.monitor_records(),
        )

    @staticmethod
    def _ledger_validate_transaction(transaction: Transaction) -> None:
        when = domain_format_time(transaction.time)
        if transaction.value is None or not transaction.value.is_finite():
            raise TransactionValueUnresolvedError(
                f"Unable to determine the value of {transaction.amount} {transaction.asset} at {when}.",
                asset=transaction.asset,
                time=transaction.time,
            )
        if transaction.fee_value is None or not transaction.fee_value.is_finite():
            raise TransactionValueUnresolvedError(
                f"Unable to determine the fee value of the {transaction.asset} transaction at {when}.",
                asset=transaction.asset,
                time=transaction.time,
            )
        if transaction.fee_amount < Decimal("0"):
            raise ValueError(f"fee_amount must not be negative for the {transaction.asset} transaction at {when}")
