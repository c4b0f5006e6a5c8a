"""Input record intake: classify JSON records and parse them into domain models.

Records are matched against a closed set of known shapes by their field
names. Unknown shapes are reported once per distinct field signature and
skipped rather than guessed at.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Final, Iterable, Mapping

from acb_ledger.domain import (
    UNRECOGNIZED_RECORD_CODE,
    DiagnosticEvent,
    DiagnosticSink,
    Trade,
    Transaction,
    domain_asset_normalize_code,
)

from .interfaces import (
    RECORD_KIND_TRADE,
    RECORD_KIND_TRANSACTION,
    RECORD_KIND_UNRECOGNIZED,
    InputRecordError,
    IntakeRecord,
)

_JOB_INTAKE_OPTIONAL_FIELDS: Final[frozenset[str]] = frozenset(
    {"exchange", "value", "fee_asset", "fee_amount", "fee_value"}
)
_JOB_INTAKE_TRADE_FIELDS: Final[frozenset[str]] = frozenset(
    {"base_asset", "quote_asset", "base_amount", "quote_amount", "sell", "time"}
)
_JOB_INTAKE_TRANSACTION_FIELDS: Final[frozenset[str]] = frozenset({"asset", "amount", "time"})

_JOB_INTAKE_CAMEL_CASE_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def job_intake_classify_record(record: Mapping[str, object]) -> str:
    """Return the record kind matching one record's field names.

    Args:
        record: JSON-compatible input record.

    Returns:
        str: `trade`, `transaction` or `unrecognized`.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    field_names = frozenset(_job_intake_normalize_key(key) for key in record)
    for kind, required_fields in (
        (RECORD_KIND_TRADE, _JOB_INTAKE_TRADE_FIELDS),
        (RECORD_KIND_TRANSACTION, _JOB_INTAKE_TRANSACTION_FIELDS),
    ):
        if required_fields <= field_names <= required_fields | _JOB_INTAKE_OPTIONAL_FIELDS:
            return kind
    return RECORD_KIND_UNRECOGNIZED


def job_intake_parse_record(record: Mapping[str, object], record_index: int | None = None) -> IntakeRecord:
    """Classify and parse one input record.

    Args:
        record: JSON-compatible input record using snake_case or camelCase keys.
        record_index: Optional record position used in error messages.

    Returns:
        IntakeRecord: Classified record with its parsed domain model.

    Raises:
        InputRecordError: Raised when a recognized record has invalid field values.
    """

    if not isinstance(record, Mapping):
        raise InputRecordError(f"record {record_index} must be a JSON object", record_index=record_index)

    normalized_record = {_job_intake_normalize_key(str(key)): value for key, value in record.items()}
    signature = "|".join(sorted(normalized_record))
    kind = job_intake_classify_record(normalized_record)

    try:
        if kind == RECORD_KIND_TRADE:
            return IntakeRecord(kind=kind, signature=signature, trade=_job_intake_parse_trade(normalized_record))
        if kind == RECORD_KIND_TRANSACTION:
            return IntakeRecord(
                kind=kind,
                signature=signature,
                transaction=_job_intake_parse_transaction(normalized_record),
            )
    except (ValueError, TypeError, InvalidOperation) as error:
        raise InputRecordError(f"record {record_index} is invalid: {error}", record_index=record_index) from error

    return IntakeRecord(kind=RECORD_KIND_UNRECOGNIZED, signature=signature)


def job_intake_parse_records(
    records: Iterable[Mapping[str, object]],
    diagnostic_sink: DiagnosticSink,
) -> list[IntakeRecord]:
    """Parse every input record, reporting each unrecognized signature once.

    Args:
        records: JSON-compatible input records in chronological order.
        diagnostic_sink: Receiver for unrecognized-record diagnostics.

    Returns:
        list[IntakeRecord]: Recognized records in input order.

    Raises:
        InputRecordError: Raised when any recognized record has invalid field values.
    """

    intake_records: list[IntakeRecord] = []
    reported_signatures: set[str] = set()
    for record_index, record in enumerate(records):
        intake_record = job_intake_parse_record(record, record_index=record_index)
        if intake_record.kind != RECORD_KIND_UNRECOGNIZED:
            intake_records.append(intake_record)
            continue

        if intake_record.signature in reported_signatures:
            continue
        reported_signatures.add(intake_record.signature)
        diagnostic_sink.diagnostic_emit(
            DiagnosticEvent(
                asset=None,
                kind=UNRECOGNIZED_RECORD_CODE,
                time=None,
                message=f'Unrecognized record fields: "{intake_record.signature}".',
                details={"record_index": record_index, "signature": intake_record.signature},
            )
        )
    return intake_records


def job_intake_parse_decimal(value: object, field_name: str) -> Decimal:
    """Parse one numeric field into a finite Decimal.

    Strings may contain thousands separators. Booleans are rejected.
    """

    if isinstance(value, bool) or value is None:
        raise ValueError(f"{field_name} must be numeric")
    if isinstance(value, Decimal):
        parsed_value = value
    elif isinstance(value, (int, float)):
        parsed_value = Decimal(str(value))
    elif isinstance(value, str):
        parsed_value = Decimal(value.replace(",", "").strip())
    else:
        raise ValueError(f"{field_name} must be numeric")

    if not parsed_value.is_finite():
        raise ValueError(f"{field_name} must be finite")
    return parsed_value


def job_intake_parse_time(value: object) -> datetime:
    """Parse one timestamp field into an offset-aware UTC datetime.

    Args:
        value: ISO-8601 text with offset, or UNIX epoch milliseconds.

    Returns:
        datetime: Offset-aware UTC timestamp.

    Raises:
        ValueError: Raised when the value is blank, malformed or offset-naive.
    """

    if isinstance(value, bool):
        raise ValueError("time must be ISO-8601 text or epoch milliseconds")
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError) as error:
            raise ValueError(f"invalid time={value}") from error
    if not isinstance(value, str) or not value.strip():
        raise ValueError("time must be a non-empty string")

    normalized_value = value.strip()
    if normalized_value.endswith("Z"):
        normalized_value = normalized_value[:-1] + "+00:00"
    try:
        parsed_value = datetime.fromisoformat(normalized_value)
    except ValueError as error:
        raise ValueError(f"invalid time={value}") from error

    if parsed_value.tzinfo is None or parsed_value.utcoffset() is None:
        raise ValueError("time must be offset-aware")
    return parsed_value.astimezone(timezone.utc)


def _job_intake_parse_trade(record: Mapping[str, object]) -> Trade:
    fee_amount, fee_value = _job_intake_parse_fee(record)
    return Trade(
        exchange=_job_intake_optional_text(record.get("exchange")),
        base_asset=domain_asset_normalize_code(str(record["base_asset"])),
        quote_asset=domain_asset_normalize_code(str(record["quote_asset"])),
        base_amount=abs(job_intake_parse_decimal(record["base_amount"], "base_amount")),
        quote_amount=abs(job_intake_parse_decimal(record["quote_amount"], "quote_amount")),
        value=_job_intake_optional_decimal(record.get("value"), "value"),
        sell=_job_intake_parse_sell(record["sell"]),
        time=job_intake_parse_time(record["time"]),
        fee_asset=_job_intake_optional_asset(record.get("fee_asset")),
        fee_amount=fee_amount,
        fee_value=fee_value,
    )


def _job_intake_parse_transaction(record: Mapping[str, object]) -> Transaction:
    fee_amount, fee_value = _job_intake_parse_fee(record)
    return Transaction(
        exchange=_job_intake_optional_text(record.get("exchange")),
        asset=domain_asset_normalize_code(str(record["asset"])),
        amount=job_intake_parse_decimal(record["amount"], "amount"),
        value=_job_intake_optional_decimal(record.get("value"), "value"),
        time=job_intake_parse_time(record["time"]),
        fee_asset=_job_intake_optional_asset(record.get("fee_asset")),
        fee_amount=fee_amount,
        fee_value=fee_value,
    )


def _job_intake_parse_fee(record: Mapping[str, object]) -> tuple[Decimal, Decimal | None]:
    fee_amount = _job_intake_optional_decimal(record.get("fee_amount"), "fee_amount") or Decimal("0")
    if fee_amount < Decimal("0"):
        raise ValueError("fee_amount must not be negative")

    fee_value = _job_intake_optional_decimal(record.get("fee_value"), "fee_value")
    # A fee with units but no value is unpriced; a record without any fee costs nothing.
    if fee_value is None and fee_amount == Decimal("0"):
        fee_value = Decimal("0")
    return fee_amount, fee_value


def _job_intake_parse_sell(value: object) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized_value = value.strip().lower()
        if normalized_value in {"true", "sell"}:
            return True
        if normalized_value in {"false", "buy"}:
            return False
    raise ValueError(f"sell must be a boolean, got {value!r}")


def _job_intake_optional_decimal(value: object, field_name: str) -> Decimal | None:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return job_intake_parse_decimal(value, field_name)


def _job_intake_optional_text(value: object) -> str | None:
    if value is None:
        return None
    normalized_value = str(value).strip()
    return normalized_value or None


def _job_intake_optional_asset(value: object) -> str | None:
    normalized_value = _job_intake_optional_text(value)
    if normalized_value is None:
        return None
    return domain_asset_normalize_code(normalized_value)


def _job_intake_normalize_key(key: str) -> str:
    return _JOB_INTAKE_CAMEL_CASE_BOUNDARY.sub("_", key.strip()).lower()
