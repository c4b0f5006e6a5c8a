"""Job-layer capital-gains run: intake, split, filter, fold and carry forward."""

from __future__ import annotations

from typing import Iterable, Iterator, Mapping

from acb_ledger.domain import (
    DiagnosticCollector,
    Transaction,
    domain_trade_split_transactions,
    forward_spec_format,
    forward_spec_parse,
)
from acb_ledger.ledger import AcbLedgerEngine, LedgerEngineConfig, aggregate_derive_forward

from .asset_filter import job_asset_filter_trades, job_asset_filter_transactions
from .interfaces import RECORD_KIND_TRADE, CapitalGainsRunResult, IntakeRecord
from .record_intake import job_intake_parse_records


def job_capital_gains_run(
    records: Iterable[Mapping[str, object]],
    config: LedgerEngineConfig | None = None,
    asset_filter: frozenset[str] | None = None,
    diagnostic_collector: DiagnosticCollector | None = None,
) -> CapitalGainsRunResult:
    """Compute capital gains for one chronologically ordered record sequence.

    Every record is parsed before the first transaction is applied, so
    malformed input aborts the run before any ledger changes.

    Args:
        records: JSON-compatible trade or transaction records, already in chronological order.
        config: Ledger engine configuration, including the forward seed.
        asset_filter: Optional admitted asset codes; None admits every asset.
        diagnostic_collector: Optional collector receiving diagnostic events.

    Returns:
        CapitalGainsRunResult: Finalized snapshot with carry-forward output and diagnostics.

    Raises:
        InputRecordError: Raised when a record cannot be parsed.
        TransactionValueUnresolvedError: Raised when a transaction or fee is unpriced.
        EmptyBalanceDispositionError: Raised for zero-balance disposals under strict policy.
    """

    collector = diagnostic_collector if diagnostic_collector is not None else DiagnosticCollector()
    intake_records = job_intake_parse_records(records, diagnostic_sink=collector)

    engine = AcbLedgerEngine(config=config, diagnostic_sink=collector)
    capital_gains = engine.ledger_consume(
        job_asset_filter_transactions(job_intake_transactions(intake_records, asset_filter), asset_filter)
    )
    forward_by_asset_out = aggregate_derive_forward(capital_gains)

    return CapitalGainsRunResult(
        capital_gains=capital_gains,
        forward_by_asset_out=forward_by_asset_out,
        carry_forward_spec=forward_spec_format(forward_by_asset_out),
        diagnostics=collector.diagnostic_payloads(),
    )


def job_intake_transactions(
    intake_records: Iterable[IntakeRecord],
    asset_filter: frozenset[str] | None = None,
) -> Iterator[Transaction]:
    """Yield ledger transactions from parsed records, splitting trades in place.

    Args:
        intake_records: Recognized records in chronological order.
        asset_filter: Optional admitted asset codes applied to trades.

    Returns:
        Iterator[Transaction]: Transactions in processing order.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    for intake_record in intake_records:
        if intake_record.kind == RECORD_KIND_TRADE and intake_record.trade is not None:
            for trade in job_asset_filter_trades([intake_record.trade], asset_filter):
                yield from domain_trade_split_transactions(trade)
        elif intake_record.transaction is not None:
            yield intake_record.transaction


def job_capital_gains_engine_config(
    forward_spec: str | None,
    settle_foreign_fees: bool = True,
    strict_empty_disposals: bool = False,
) -> LedgerEngineConfig:
    """Build ledger engine configuration from a carry-forward specification.

    Args:
        forward_spec: Carry-forward specification text, or None for an empty seed.
        settle_foreign_fees: Whether foreign-asset fees reduce the fee asset ledger.
        strict_empty_disposals: Whether zero-balance disposals abort the run.

    Returns:
        LedgerEngineConfig: Explicit engine configuration.

    Raises:
        ForwardSpecError: Raised when the specification is malformed.
    """

    return LedgerEngineConfig(
        forward_by_asset=forward_spec_parse(forward_spec),
        settle_foreign_fees=settle_foreign_fees,
        strict_empty_disposals=strict_empty_disposals,
    )
