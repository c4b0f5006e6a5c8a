"""Typed interfaces for job-layer run orchestration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from acb_ledger.domain import Forward, Trade, Transaction
from acb_ledger.ledger import CapitalGains

RECORD_KIND_TRADE: Final[str] = "trade"
RECORD_KIND_TRANSACTION: Final[str] = "transaction"
RECORD_KIND_UNRECOGNIZED: Final[str] = "unrecognized"


class InputRecordError(ValueError):
    """Raised when an input record has a recognized shape but unparseable fields.

    Attributes:
        record_index: Zero-based position of the record in the input.
    """

    def __init__(self, message: str, record_index: int | None = None):
        super().__init__(message)
        self.record_index = record_index


@dataclass(frozen=True)
class IntakeRecord:
    """One input record classified by its field signature.

    Attributes:
        kind: `trade`, `transaction` or `unrecognized`.
        signature: Sorted, `|`-joined field names of the source record.
        trade: Parsed trade for `trade` records.
        transaction: Parsed transaction for `transaction` records.
    """

    kind: str
    signature: str
    trade: Trade | None = None
    transaction: Transaction | None = None


@dataclass(frozen=True)
class CapitalGainsRunResult:
    """Result payload for one capital-gains run.

    Attributes:
        capital_gains: Finalized ledger snapshot.
        forward_by_asset_out: Forward seed for the next period.
        carry_forward_spec: Carry-forward specification text for the next period.
        diagnostics: Structured diagnostic payloads in emission order.
    """

    capital_gains: CapitalGains
    forward_by_asset_out: dict[str, Forward]
    carry_forward_spec: str
    diagnostics: list[dict[str, object]]
