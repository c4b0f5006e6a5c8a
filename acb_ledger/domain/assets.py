"""Asset code normalization helpers shared by intake and ledger layers."""

from __future__ import annotations

from typing import Final

_DOMAIN_ASSET_CODE_ALIASES: Final[dict[str, str]] = {
    "BCC": "BCH",
    "XBT": "BTC",
    "XBTC": "BTC",
    "XXBT": "BTC",
    "XETH": "ETH",
    "XLTC": "LTC",
    "ZCAD": "CAD",
    "ZUSD": "USD",
}

_DOMAIN_ASSET_PRIORITIES: Final[dict[str, int]] = {
    "CAD": 0,
    "USD": 0,
    "BTC": 1,
    "BNB": 2,
    "ETH": 2,
    "LTC": 2,
}

DOMAIN_ASSET_DEFAULT_PRIORITY: Final[int] = 3


def domain_asset_normalize_code(code: str) -> str:
    """Normalize one exchange asset code to its canonical upper-case form.

    Args:
        code: Raw asset code from an exchange export or user input.

    Returns:
        str: Canonical asset code.

    Raises:
        ValueError: Raised when code is blank.
    """

    normalized_code = code.strip().upper()
    if not normalized_code:
        raise ValueError("asset code must not be blank")
    return _DOMAIN_ASSET_CODE_ALIASES.get(normalized_code, normalized_code)


def domain_asset_priority(code: str) -> int:
    """Return the quote priority of one canonical asset code.

    Fiat currencies have priority 0 and are not tracked by the ledger.
    """

    return _DOMAIN_ASSET_PRIORITIES.get(code, DOMAIN_ASSET_DEFAULT_PRIORITY)


def domain_asset_is_fiat(code: str) -> bool:
    """Return whether one canonical asset code is a fiat currency."""

    return domain_asset_priority(code) == 0
