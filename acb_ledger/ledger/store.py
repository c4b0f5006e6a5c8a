"""Single-owner ledger store keyed by canonical asset code."""

from __future__ import annotations

from typing import Mapping

from acb_ledger.domain import Forward, domain_asset_normalize_code

from .interfaces import Ledger


class LedgerStore:
    """Map each asset to its running ledger, creating ledgers lazily."""

    def __init__(self, forward_by_asset: Mapping[str, Forward] | None = None):
        """Initialize the store, seeding ledgers from carried-forward state.

        Args:
            forward_by_asset: Optional opening state per asset.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: Raised when a forward asset code is blank or duplicated after normalization.
        """

        self._ledger_by_asset: dict[str, Ledger] = {}
        for asset, forward in ledger_normalize_forward(forward_by_asset).items():
            self._ledger_by_asset[asset] = Ledger(
                acb=forward.acb,
                balance=forward.balance,
            )

    def get(self, asset: str) -> Ledger | None:
        """Return the ledger of one asset without creating it."""

        return self._ledger_by_asset.get(domain_asset_normalize_code(asset))

    def get_or_create(self, asset: str) -> Ledger:
        """Return the ledger of one asset, creating an empty one on first reference.

        Args:
            asset: Asset code in any case.

        Returns:
            Ledger: Existing or newly created ledger.

        Raises:
            ValueError: Raised when asset code is blank.
        """

        normalized_asset = domain_asset_normalize_code(asset)
        ledger = self._ledger_by_asset.get(normalized_asset)
        if ledger is None:
            ledger = Ledger()
            self._ledger_by_asset[normalized_asset] = ledger
        return ledger

    def ledger_by_asset(self) -> dict[str, Ledger]:
        """Return the asset-to-ledger mapping in creation order."""

        return dict(self._ledger_by_asset)


def ledger_normalize_forward(forward_by_asset: Mapping[str, Forward] | None) -> dict[str, Forward]:
    """Return forward entries keyed by canonical asset code.

    Args:
        forward_by_asset: Opening state per asset in any code spelling.

    Returns:
        dict[str, Forward]: Entries keyed by canonical code, in input order.

    Raises:
        ValueError: Raised when a code is blank or two codes share a canonical form.
    """

    normalized_forward_by_asset: dict[str, Forward] = {}
    for asset, forward in (forward_by_asset or {}).items():
        normalized_asset = domain_asset_normalize_code(asset)
        if normalized_asset in normalized_forward_by_asset:
            raise ValueError(f"forward entry for asset={normalized_asset} is duplicated")
        normalized_forward_by_asset[normalized_asset] = forward
    return normalized_forward_by_asset
