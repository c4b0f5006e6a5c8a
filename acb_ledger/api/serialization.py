"""JSON serialization of capital-gains run results for API and CLI surfaces.

Decimal values are emitted as strings so no precision is lost in transit.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from acb_ledger.domain import Forward, Transaction, forward_spec_format_block
from acb_ledger.jobs import CapitalGainsRunResult
from acb_ledger.ledger import AggregateDisposition, BalanceObservation, CapitalGains, Disposition, Ledger


def api_serialize_capital_gains_run(run_result: CapitalGainsRunResult) -> dict[str, object]:
    """Serialize one run result to a JSON-compatible payload.

    Args:
        run_result: Completed capital-gains run.

    Returns:
        dict[str, object]: Snapshot, carry-forward and diagnostics payload.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return {
        "status": "ok",
        "capital_gains": api_serialize_capital_gains(run_result.capital_gains),
        "carry_forward": {
            "forward_by_asset": {
                asset: _api_serialize_forward(forward) for asset, forward in run_result.forward_by_asset_out.items()
            },
            "spec": run_result.carry_forward_spec,
            "block": forward_spec_format_block(run_result.forward_by_asset_out),
        },
        "diagnostics": run_result.diagnostics,
    }


def api_serialize_capital_gains(capital_gains: CapitalGains) -> dict[str, object]:
    """Serialize one finalized snapshot with assets in reporting order."""

    return {
        "forward_by_asset": {
            asset: _api_serialize_forward(forward) for asset, forward in sorted(capital_gains.forward_by_asset.items())
        },
        "transactions": [_api_serialize_transaction(transaction) for transaction in capital_gains.transactions],
        "ledger_by_asset": {
            asset: _api_serialize_ledger(capital_gains.ledger_by_asset[asset])
            for asset in capital_gains.capital_gains_sorted_assets()
        },
        "aggregate_disposition": _api_serialize_aggregate(capital_gains.aggregate_disposition),
        "taxable_gain": _api_decimal(capital_gains.taxable_gain),
        "negative_balance_by_asset": {
            asset: {
                "first": _api_serialize_observation(record.first),
                "minimum": _api_serialize_observation(record.minimum),
            }
            for asset, record in sorted(capital_gains.negative_balance_by_asset.items())
        },
    }


def _api_serialize_ledger(ledger: Ledger) -> dict[str, object]:
    return {
        "acb": _api_decimal(ledger.acb),
        "balance": _api_decimal(ledger.balance),
        "dispositions": [_api_serialize_disposition(disposition) for disposition in ledger.dispositions],
        "aggregate_disposition": (
            None if ledger.aggregate_disposition is None else _api_serialize_aggregate(ledger.aggregate_disposition)
        ),
    }


def _api_serialize_disposition(disposition: Disposition) -> dict[str, object]:
    return {
        "exchange": disposition.exchange,
        "amount": _api_decimal(disposition.amount),
        "pod": _api_decimal(disposition.pod),
        "acb": _api_decimal(disposition.acb),
        "oae": _api_decimal(disposition.oae),
        "gain": _api_decimal(disposition.gain),
        "time": _api_time(disposition.time),
    }


def _api_serialize_aggregate(aggregate: AggregateDisposition) -> dict[str, object]:
    return {
        "amount": _api_decimal(aggregate.amount),
        "pod": _api_decimal(aggregate.pod),
        "acb": _api_decimal(aggregate.acb),
        "oae": _api_decimal(aggregate.oae),
        "gain": _api_decimal(aggregate.gain),
    }


def _api_serialize_transaction(transaction: Transaction) -> dict[str, object]:
    return {
        "exchange": transaction.exchange,
        "asset": transaction.asset,
        "amount": _api_decimal(transaction.amount),
        "value": None if transaction.value is None else _api_decimal(transaction.value),
        "time": _api_time(transaction.time),
        "fee_asset": transaction.fee_asset,
        "fee_amount": _api_decimal(transaction.fee_amount),
        "fee_value": None if transaction.fee_value is None else _api_decimal(transaction.fee_value),
    }


def _api_serialize_forward(forward: Forward) -> dict[str, str]:
    return {"balance": _api_decimal(forward.balance), "acb": _api_decimal(forward.acb)}


def _api_serialize_observation(observation: BalanceObservation) -> dict[str, str]:
    return {"balance": _api_decimal(observation.balance), "time": _api_time(observation.time)}


def _api_decimal(value: Decimal) -> str:
    return format(value, "f")


def _api_time(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat()


__all__ = ["api_serialize_capital_gains", "api_serialize_capital_gains_run"]
