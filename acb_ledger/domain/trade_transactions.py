"""Split priced two-asset trades into single-asset ledger transactions."""

from __future__ import annotations

from dataclasses import replace
from decimal import Decimal

from .assets import domain_asset_is_fiat
from .models import Trade, Transaction


def domain_trade_split_transactions(trade: Trade) -> list[Transaction]:
    """Break one trade into the transactions the ledger engine consumes.

    The disposed side is emitted first with a negative amount and the trade
    fee value as its outlay. The acquired side keeps a positive amount and
    carries the fee asset and fee amount so the fee asset ledger can be
    settled. Zero-amount sides and fiat sides are dropped.

    Args:
        trade: Priced trade.

    Returns:
        list[Transaction]: Zero, one or two transactions in processing order.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    base_transaction = Transaction(
        exchange=trade.exchange,
        asset=trade.base_asset,
        amount=trade.base_amount,
        value=trade.value,
        time=trade.time,
        fee_value=Decimal("0"),
    )
    quote_transaction = Transaction(
        exchange=trade.exchange,
        asset=trade.quote_asset,
        amount=trade.quote_amount,
        value=trade.value,
        time=trade.time,
        fee_value=Decimal("0"),
    )

    if trade.sell:
        disposed, acquired = quote_transaction, base_transaction
    else:
        disposed, acquired = base_transaction, quote_transaction

    transactions = [
        replace(disposed, amount=-abs(disposed.amount)),
        replace(acquired, amount=abs(acquired.amount)),
    ]
    transactions = [
        transaction
        for transaction in transactions
        if transaction.amount != Decimal("0") and not domain_asset_is_fiat(transaction.asset)
    ]
    if not transactions:
        return []

    transactions[0] = replace(transactions[0], fee_value=trade.fee_value)
    transactions[-1] = replace(
        transactions[-1],
        fee_asset=trade.fee_asset,
        fee_amount=trade.fee_amount,
    )
    return transactions


__all__ = ["domain_trade_split_transactions"]
