"""Typed interfaces for ACB ledger computations."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Final, Iterable, Protocol

from acb_ledger.domain import Forward, Transaction

LEDGER_NEGATIVE_BALANCE_TOLERANCE: Final[Decimal] = Decimal("0.000000005")
LEDGER_TAXABLE_INCLUSION_RATE: Final[Decimal] = Decimal("0.5")


@dataclass(frozen=True)
class Disposition:
    """One taxable disposal of asset units.

    Attributes:
        exchange: Exchange on which the disposal was executed.
        amount: Positive quantity disposed.
        pod: Proceeds of disposition.
        acb: Adjusted cost base consumed by the disposal.
        oae: Outlays and expenses charged on the disposal.
        gain: Capital gain (or loss), `pod - acb - oae`.
        time: Disposal timestamp.
    """

    exchange: str | None
    amount: Decimal
    pod: Decimal
    acb: Decimal
    oae: Decimal
    gain: Decimal
    time: datetime


@dataclass(frozen=True)
class AggregateDisposition:
    """Componentwise sum of a set of dispositions.

    Attributes:
        amount: Total units disposed.
        pod: Total proceeds of disposition.
        acb: Total adjusted cost base consumed.
        oae: Total outlays and expenses.
        gain: Total capital gain (or loss).
    """

    amount: Decimal = Decimal("0")
    pod: Decimal = Decimal("0")
    acb: Decimal = Decimal("0")
    oae: Decimal = Decimal("0")
    gain: Decimal = Decimal("0")

    def aggregate_add(self, other: "AggregateDisposition | Disposition") -> "AggregateDisposition":
        """Return the componentwise sum of this aggregate and another value."""

        return AggregateDisposition(
            amount=self.amount + other.amount,
            pod=self.pod + other.pod,
            acb=self.acb + other.acb,
            oae=self.oae + other.oae,
            gain=self.gain + other.gain,
        )


@dataclass(frozen=True)
class BalanceObservation:
    """Balance observed at one point in time."""

    balance: Decimal
    time: datetime


@dataclass(frozen=True)
class NegativeBalanceRecord:
    """First and lowest negative-balance observations for one asset.

    Attributes:
        first: Balance right after the first crossing below tolerance.
        minimum: Lowest balance observed while below tolerance.
    """

    first: BalanceObservation
    minimum: BalanceObservation


@dataclass
class Ledger:
    """Mutable running account of one asset.

    Attributes:
        acb: Total adjusted cost base of currently held units.
        balance: Quantity currently held.
        dispositions: Dispositions in chronological order.
        aggregate_disposition: Sum of dispositions, set once the run is finalized.
    """

    acb: Decimal = Decimal("0")
    balance: Decimal = Decimal("0")
    dispositions: list[Disposition] = field(default_factory=list)
    aggregate_disposition: AggregateDisposition | None = None

    def ledger_acb_per_unit(self) -> Decimal:
        """Return the average cost per held unit, or zero for an empty balance."""

        if self.balance == Decimal("0"):
            return Decimal("0")
        return self.acb / self.balance


@dataclass(frozen=True)
class CapitalGains:
    """Finalized snapshot of one ledger run.

    Attributes:
        forward_by_asset: Forward seed the run started from.
        transactions: Every transaction applied, in processing order.
        ledger_by_asset: Final ledger of each asset, in creation order.
        aggregate_disposition: Grand-total aggregate disposition.
        taxable_gain: Taxable portion of the total gain.
        negative_balance_by_asset: Negative-balance records of affected assets.
    """

    forward_by_asset: dict[str, Forward]
    transactions: tuple[Transaction, ...]
    ledger_by_asset: dict[str, Ledger]
    aggregate_disposition: AggregateDisposition
    taxable_gain: Decimal
    negative_balance_by_asset: dict[str, NegativeBalanceRecord]

    def capital_gains_sorted_assets(self) -> list[str]:
        """Return asset codes in reporting order."""

        return sorted(self.ledger_by_asset)


@dataclass(frozen=True)
class LedgerEngineConfig:
    """Explicit configuration for one ledger engine run.

    Attributes:
        forward_by_asset: Opening state carried in from a prior period.
        settle_foreign_fees: Whether fees paid in another tracked asset reduce that asset's ledger.
        strict_empty_disposals: Whether disposing from a zero balance aborts the run.
        negative_balance_tolerance: Magnitude below which a negative balance is treated as rounding noise.
    """

    forward_by_asset: dict[str, Forward] = field(default_factory=dict)
    settle_foreign_fees: bool = True
    strict_empty_disposals: bool = False
    negative_balance_tolerance: Decimal = LEDGER_NEGATIVE_BALANCE_TOLERANCE


class LedgerEnginePort(Protocol):
    """Port definition for capital-gains ledger computations."""

    def ledger_apply(self, transaction: Transaction) -> None:
        """Apply one transaction to the ledger store.

        Args:
            transaction: Next transaction in chronological order.

        Returns:
            None: The engine mutates its ledger store.

        Raises:
            TransactionValueUnresolvedError: Raised when the transaction is unpriced.
            LedgerFinalizedError: Raised after the run has been finalized.
        """

    def ledger_consume(self, transactions: Iterable[Transaction]) -> CapitalGains:
        """Apply every transaction of a finite sequence and finalize the run.

        Args:
            transactions: Chronologically ordered transactions.

        Returns:
            CapitalGains: Finalized run snapshot.

        Raises:
            TransactionValueUnresolvedError: Raised when any transaction is unpriced.
        """

    def ledger_finalize(self) -> CapitalGains:
        """Aggregate all ledgers and freeze the run.

        Returns:
            CapitalGains: Finalized run snapshot.

        Raises:
            LedgerFinalizedError: Raised when the run was already finalized.
        """
