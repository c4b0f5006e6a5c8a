"""Regression tests for input record classification and parsing."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from acb_ledger.domain import UNRECOGNIZED_RECORD_CODE, DiagnosticCollector
from acb_ledger.jobs import (
    RECORD_KIND_TRADE,
    RECORD_KIND_TRANSACTION,
    RECORD_KIND_UNRECOGNIZED,
    InputRecordError,
    job_asset_filter_parse,
    job_intake_classify_record,
    job_intake_parse_record,
    job_intake_parse_records,
    job_intake_parse_time,
)


def test_jobs_intake_classifies_records_by_field_signature() -> None:
    """Match records to the closed set of known shapes.

    Returns:
        None: Assertions validate record kinds.

    Raises:
        AssertionError: Raised when classification is unexpected.
    """

    assert (
        job_intake_classify_record(
            {
                "baseAsset": "BTC",
                "quoteAsset": "ETH",
                "baseAmount": 1,
                "quoteAmount": 10,
                "sell": False,
                "time": 0,
            }
        )
        == RECORD_KIND_TRADE
    )
    assert job_intake_classify_record({"asset": "BTC", "amount": 1, "time": 0, "value": 1}) == RECORD_KIND_TRANSACTION
    assert job_intake_classify_record({"asset": "BTC", "amount": 1}) == RECORD_KIND_UNRECOGNIZED
    assert job_intake_classify_record({"asset": "BTC", "amount": 1, "time": 0, "memo": "x"}) == RECORD_KIND_UNRECOGNIZED


def test_jobs_intake_parses_transaction_fields_into_decimals() -> None:
    """Parse numbers, aliases and timestamps of one transaction record."""

    intake_record = job_intake_parse_record(
        {
            "exchange": "Kraken",
            "asset": "xxbt",
            "amount": "-1,000.5",
            "value": 12.5,
            "time": "2021-05-01T10:00:00Z",
            "feeAsset": "zcad",
            "feeAmount": "0.1",
            "feeValue": "0.1",
        }
    )

    transaction = intake_record.transaction
    assert transaction is not None
    assert transaction.asset == "BTC"
    assert transaction.amount == Decimal("-1000.5")
    assert transaction.value == Decimal("12.5")
    assert transaction.fee_asset == "CAD"
    assert transaction.time == datetime(2021, 5, 1, 10, 0, tzinfo=timezone.utc)


def test_jobs_intake_marks_missing_values_as_unpriced() -> None:
    """Leave value unset when absent and fee value unset only when a fee was charged."""

    unpriced = job_intake_parse_record({"asset": "BTC", "amount": "1", "time": 0, "fee_amount": "0.1"}).transaction
    fee_free = job_intake_parse_record({"asset": "BTC", "amount": "1", "time": 0}).transaction

    assert unpriced is not None and fee_free is not None
    assert unpriced.value is None
    assert unpriced.fee_value is None
    assert fee_free.fee_value == Decimal("0")


@pytest.mark.parametrize(
    "record",
    [
        {"asset": "BTC", "amount": "lots", "time": 0},
        {"asset": "BTC", "amount": True, "time": 0},
        {"asset": "BTC", "amount": "1", "time": "2021-05-01T10:00:00"},
        {"asset": "BTC", "amount": "1", "time": 0, "fee_amount": "-1"},
        {"asset": " ", "amount": "1", "time": 0},
        {"asset": "BTC", "amount": "1", "time": 10**30},
        {"base_asset": "BTC", "quote_asset": "ETH", "base_amount": 1, "quote_amount": 1, "sell": "maybe", "time": 0},
    ],
)
def test_jobs_intake_rejects_unparseable_fields(record: dict[str, object]) -> None:
    """Raise input errors for recognized records with invalid values."""

    with pytest.raises(InputRecordError):
        job_intake_parse_record(record, record_index=3)


def test_jobs_intake_reports_each_unrecognized_signature_once() -> None:
    """Skip unknown record shapes and emit one diagnostic per distinct signature."""

    collector = DiagnosticCollector()
    records = [
        {"txid": "a", "type": "deposit"},
        {"asset": "BTC", "amount": "1", "time": 0, "value": "10"},
        {"type": "deposit", "txid": "b"},
        {"Date(UTC)": "2018-01-01", "Market": "ETHBTC"},
    ]

    intake_records = job_intake_parse_records(records, diagnostic_sink=collector)

    assert [intake_record.kind for intake_record in intake_records] == [RECORD_KIND_TRANSACTION]
    assert collector.diagnostic_kinds() == [UNRECOGNIZED_RECORD_CODE, UNRECOGNIZED_RECORD_CODE]
    assert collector.events[0].details == {"record_index": 0, "signature": "txid|type"}


def test_jobs_intake_parses_epoch_milliseconds() -> None:
    """Interpret numeric timestamps as UNIX epoch milliseconds."""

    assert job_intake_parse_time(1514764800000) == datetime(2018, 1, 1, tzinfo=timezone.utc)


def test_jobs_asset_filter_parse_normalizes_codes() -> None:
    """Parse filters from text or lists and treat blank filters as accept-all."""

    assert job_asset_filter_parse("btc, xeth") == frozenset({"BTC", "ETH"})
    assert job_asset_filter_parse(["ltc"]) == frozenset({"LTC"})
    assert job_asset_filter_parse("") is None
    assert job_asset_filter_parse(None) is None


def test_jobs_asset_filter_parse_rejects_non_text_codes() -> None:
    """Reject filter lists holding values other than asset code strings."""

    with pytest.raises(TypeError):
        job_asset_filter_parse([1, 2])
