"""Typed domain models shared across runtime layers.

This module provides the data contracts exchanged between intake, ledger and
API layers. Monetary values and quantities are `Decimal` so ledger arithmetic
stays exact.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class HealthStatus:
    """Health response contract used by health-check surfaces.

    Attributes:
        status: Overall status text for service health.
        detail: Additional message suitable for operational diagnostics.
    """

    status: str
    detail: str


@dataclass(frozen=True)
class Trade:
    """Priced two-asset trade produced by upstream parsing and valuation.

    Attributes:
        exchange: Optional exchange label.
        base_asset: Pricing asset of the market pair (BTC in an ETH/BTC market).
        quote_asset: Traded asset of the market pair (ETH in an ETH/BTC market).
        base_amount: Unsigned base asset quantity.
        quote_amount: Unsigned quote asset quantity.
        value: Trade value in the reporting currency, or None when unpriced.
        sell: True when the quote asset is sold for the base asset.
        time: Offset-aware trade timestamp.
        fee_asset: Optional asset in which the fee was charged.
        fee_amount: Fee quantity in `fee_asset` units.
        fee_value: Fee value in the reporting currency, or None when unpriced.
    """

    exchange: str | None
    base_asset: str
    quote_asset: str
    base_amount: Decimal
    quote_amount: Decimal
    value: Decimal | None
    sell: bool
    time: datetime
    fee_asset: str | None = None
    fee_amount: Decimal = Decimal("0")
    fee_value: Decimal | None = Decimal("0")


@dataclass(frozen=True)
class Transaction:
    """Single-asset movement consumed by the ACB ledger engine.

    Attributes:
        exchange: Optional exchange label.
        asset: Asset code.
        amount: Signed quantity; negative disposes, positive acquires.
        value: Transaction value in the reporting currency, or None when unpriced.
        time: Offset-aware transaction timestamp.
        fee_asset: Optional asset in which the fee was charged.
        fee_amount: Non-negative fee quantity in `fee_asset` units.
        fee_value: Fee value in the reporting currency, or None when unpriced.
    """

    exchange: str | None
    asset: str
    amount: Decimal
    value: Decimal | None
    time: datetime
    fee_asset: str | None = None
    fee_amount: Decimal = Decimal("0")
    fee_value: Decimal | None = Decimal("0")


@dataclass(frozen=True)
class Forward:
    """Opening balance and adjusted cost base carried in from a prior period.

    Attributes:
        balance: Quantity held at the period boundary.
        acb: Total adjusted cost base of the held quantity.
    """

    balance: Decimal
    acb: Decimal
