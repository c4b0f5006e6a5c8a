"""Structured diagnostic events and sinks shared across ledger runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Final, Protocol

EMPTY_BALANCE_DISPOSITION_CODE: Final[str] = "EMPTY_BALANCE_DISPOSITION"
NEGATIVE_BALANCE_CODE: Final[str] = "NEGATIVE_BALANCE"
UNRECOGNIZED_RECORD_CODE: Final[str] = "UNRECOGNIZED_RECORD"


@dataclass(frozen=True)
class DiagnosticEvent:
    """One recoverable data-quality observation emitted during a run.

    Attributes:
        asset: Asset code the event refers to, if any.
        kind: Diagnostic code.
        time: Timestamp of the transaction that triggered the event, if any.
        message: Human-readable description.
        details: Optional structured details object.
    """

    asset: str | None
    kind: str
    time: datetime | None
    message: str
    details: dict[str, Any] | None = None

    def diagnostic_payload(self) -> dict[str, object]:
        """Build one JSON-compatible payload for this event.

        Returns:
            dict[str, object]: Structured diagnostic payload.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        event_payload: dict[str, object] = {
            "asset": self.asset,
            "kind": self.kind,
            "at_utc": None if self.time is None else self.time.astimezone(timezone.utc).isoformat(),
            "message": self.message,
        }
        if self.details is not None:
            event_payload["details"] = self.details
        return event_payload


class DiagnosticSink(Protocol):
    """Port definition for receiving diagnostic events."""

    def diagnostic_emit(self, event: DiagnosticEvent) -> None:
        """Receive one diagnostic event.

        Args:
            event: Diagnostic event to record.

        Returns:
            None: Sinks do not return values.

        Raises:
            RuntimeError: Raised when the sink cannot record the event.
        """


@dataclass
class DiagnosticCollector:
    """In-memory diagnostic sink preserving emission order."""

    events: list[DiagnosticEvent] = field(default_factory=list)

    def diagnostic_emit(self, event: DiagnosticEvent) -> None:
        self.events.append(event)

    def diagnostic_payloads(self) -> list[dict[str, object]]:
        """Return all collected events as JSON-compatible payloads."""

        return [event.diagnostic_payload() for event in self.events]

    def diagnostic_kinds(self) -> list[str]:
        return [event.kind for event in self.events]


class NullDiagnosticSink:
    """Diagnostic sink that discards every event."""

    def diagnostic_emit(self, event: DiagnosticEvent) -> None:
        _ = event


def domain_format_time(time: datetime | None) -> str:
    """Format one timestamp for diagnostic messages.

    Args:
        time: Offset-aware timestamp or None.

    Returns:
        str: `YYYY-MM-DD HH:MM` UTC text, or `unknown time`.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if time is None:
        return "unknown time"
    return time.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")
