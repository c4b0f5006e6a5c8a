"""Finalization helpers that fold dispositions into aggregates."""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Mapping

from acb_ledger.domain import Forward

from .interfaces import (
    LEDGER_NEGATIVE_BALANCE_TOLERANCE,
    LEDGER_TAXABLE_INCLUSION_RATE,
    AggregateDisposition,
    CapitalGains,
    Disposition,
    Ledger,
)


def aggregate_dispositions(dispositions: Iterable[Disposition | AggregateDisposition]) -> AggregateDisposition:
    """Sum dispositions componentwise, starting from the zero aggregate.

    Args:
        dispositions: Dispositions or aggregates to fold.

    Returns:
        AggregateDisposition: Componentwise total.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    total = AggregateDisposition()
    for disposition in dispositions:
        total = total.aggregate_add(disposition)
    return total


def aggregate_finalize_ledgers(ledger_by_asset: Mapping[str, Ledger]) -> AggregateDisposition:
    """Set each ledger's aggregate disposition and return the grand total.

    Args:
        ledger_by_asset: Ledgers to finalize; mutated in place.

    Returns:
        AggregateDisposition: Grand total over every asset.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    for ledger in ledger_by_asset.values():
        ledger.aggregate_disposition = aggregate_dispositions(ledger.dispositions)

    return aggregate_dispositions(
        ledger.aggregate_disposition
        for ledger in ledger_by_asset.values()
        if ledger.aggregate_disposition is not None
    )


def aggregate_taxable_gain(aggregate_disposition: AggregateDisposition) -> Decimal:
    """Return the taxable portion of a total capital gain (or loss)."""

    return aggregate_disposition.gain * LEDGER_TAXABLE_INCLUSION_RATE


def aggregate_derive_forward(
    capital_gains: CapitalGains,
    tolerance: Decimal = LEDGER_NEGATIVE_BALANCE_TOLERANCE,
) -> dict[str, Forward]:
    """Derive the forward seed for the next reporting period.

    Assets whose balance magnitude is below the tolerance are treated as
    closed out and are not carried.

    Args:
        capital_gains: Finalized run snapshot.
        tolerance: Balance magnitude treated as rounding noise.

    Returns:
        dict[str, Forward]: Carried balance and cost base keyed by asset, sorted by asset code.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    forward_by_asset: dict[str, Forward] = {}
    for asset in capital_gains.capital_gains_sorted_assets():
        ledger = capital_gains.ledger_by_asset[asset]
        if ledger.balance < -tolerance or ledger.balance >= tolerance:
            forward_by_asset[asset] = Forward(balance=ledger.balance, acb=ledger.acb)
    return forward_by_asset
