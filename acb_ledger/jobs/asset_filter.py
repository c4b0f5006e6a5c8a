"""Asset filter applied to trades and transactions before they reach the ledger."""

from __future__ import annotations

from typing import Iterable, Iterator

from acb_ledger.domain import Trade, Transaction, domain_asset_normalize_code


def job_asset_filter_parse(filter_text: str | Iterable[str] | None) -> frozenset[str] | None:
    """Parse an asset filter from comma-separated text or an iterable of codes.

    Args:
        filter_text: Asset codes, or None/blank to admit every asset.

    Returns:
        frozenset[str] | None: Canonical asset codes, or None when no filter applies.

    Raises:
        TypeError: Raised when the filter is not text or holds non-text codes.
    """

    if filter_text is None:
        return None
    raw_codes = filter_text.split(",") if isinstance(filter_text, str) else list(filter_text)
    if any(not isinstance(code, str) for code in raw_codes):
        raise TypeError("asset filter entries must be asset code strings")
    asset_codes = frozenset(domain_asset_normalize_code(code) for code in raw_codes if code and code.strip())
    return asset_codes or None


def job_asset_filter_trades(trades: Iterable[Trade], assets: frozenset[str] | None) -> Iterator[Trade]:
    """Yield trades touching at least one admitted asset."""

    for trade in trades:
        if assets is None or trade.base_asset in assets or trade.quote_asset in assets:
            yield trade


def job_asset_filter_transactions(
    transactions: Iterable[Transaction],
    assets: frozenset[str] | None,
) -> Iterator[Transaction]:
    """Yield transactions whose asset is admitted."""

    for transaction in transactions:
        if assets is None or transaction.asset in assets:
            yield transaction
