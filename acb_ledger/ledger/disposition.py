"""Pure ACB computations for dispositions, acquisitions and fee settlement.

The adjusted cost base is a moving average: a disposal consumes cost base in
proportion to the units disposed, an acquisition capitalizes its value and
fee into the cost base.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from acb_ledger.domain import Transaction, domain_asset_normalize_code

from .interfaces import Disposition, Ledger


@dataclass(frozen=True)
class LedgerAdjustment:
    """Change to apply to one ledger.

    Attributes:
        acb_delta: Signed change of the total adjusted cost base.
        balance_delta: Signed change of the held quantity.
        disposition: Disposition produced by a disposal, if any.
    """

    acb_delta: Decimal
    balance_delta: Decimal
    disposition: Disposition | None = None


def ledger_compute_transaction_adjustment(ledger: Ledger, transaction: Transaction) -> LedgerAdjustment:
    """Compute the ledger change produced by one priced transaction.

    Args:
        ledger: Current ledger of the transaction asset. It is not mutated.
        transaction: Priced transaction; `value` and `fee_value` must be resolved.

    Returns:
        LedgerAdjustment: Cost-base and balance change, with a disposition for disposals.

    Raises:
        ValueError: Raised when the transaction is unpriced.
    """

    if transaction.value is None or transaction.fee_value is None:
        raise ValueError("transaction value and fee_value must be resolved")

    if transaction.amount < Decimal("0"):
        acb_per_unit = ledger.ledger_acb_per_unit()
        disposed_amount = -transaction.amount
        disposed_acb = disposed_amount * acb_per_unit
        disposition = Disposition(
            exchange=transaction.exchange,
            amount=disposed_amount,
            pod=transaction.value,
            acb=disposed_acb,
            oae=transaction.fee_value,
            gain=transaction.value - disposed_acb - transaction.fee_value,
            time=transaction.time,
        )
        return LedgerAdjustment(
            acb_delta=acb_per_unit * transaction.amount,
            balance_delta=transaction.amount,
            disposition=disposition,
        )

    return LedgerAdjustment(
        acb_delta=transaction.value + transaction.fee_value,
        balance_delta=transaction.amount,
    )


def ledger_compute_fee_settlement(fee_ledger: Ledger, fee_amount: Decimal) -> LedgerAdjustment:
    """Compute the change to a fee asset ledger when units are spent on a fee.

    The fee units leave the ledger at its current average cost, so the cost
    per unit of the remaining units is unchanged.

    Args:
        fee_ledger: Ledger of the asset the fee was charged in.
        fee_amount: Non-negative fee quantity.

    Returns:
        LedgerAdjustment: Cost-base and balance reduction without a disposition.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    fee_acb_per_unit = fee_ledger.ledger_acb_per_unit()
    return LedgerAdjustment(
        acb_delta=-(fee_acb_per_unit * fee_amount),
        balance_delta=-fee_amount,
    )


def ledger_apply_adjustment(ledger: Ledger, adjustment: LedgerAdjustment) -> None:
    """Apply one computed adjustment to a ledger in place."""

    if adjustment.disposition is not None:
        ledger.dispositions.append(adjustment.disposition)
    ledger.acb += adjustment.acb_delta
    ledger.balance += adjustment.balance_delta


def ledger_requires_fee_settlement(transaction: Transaction) -> bool:
    """Return whether a transaction's fee was charged in another asset."""

    if not transaction.fee_asset or not transaction.fee_asset.strip():
        return False
    if transaction.fee_amount <= Decimal("0"):
        return False
    return domain_asset_normalize_code(transaction.fee_asset) != domain_asset_normalize_code(transaction.asset)
