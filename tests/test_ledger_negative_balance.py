"""Regression tests for negative-balance monitoring."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from acb_ledger.domain import NEGATIVE_BALANCE_CODE, DiagnosticCollector
from acb_ledger.ledger import NegativeBalanceMonitor

_T0 = datetime(2020, 6, 1, tzinfo=timezone.utc)


def test_ledger_negative_balance_monitor_tracks_first_and_minimum() -> None:
    """Record the first crossing once and follow the lowest later balance.

    Returns:
        None: Assertions validate recorded observations and emitted diagnostics.

    Raises:
        AssertionError: Raised when the monitor misrecords observations.
    """

    collector = DiagnosticCollector()
    monitor = NegativeBalanceMonitor(diagnostic_sink=collector)

    monitor.monitor_observe("eth", Decimal("-0.5"), _T0)
    monitor.monitor_observe("ETH", Decimal("-2"), _T0 + timedelta(hours=1))
    monitor.monitor_observe("ETH", Decimal("-1"), _T0 + timedelta(hours=2))
    monitor.monitor_observe("ETH", Decimal("3"), _T0 + timedelta(hours=3))

    record = monitor.monitor_records()["ETH"]
    assert record.first.balance == Decimal("-0.5")
    assert record.first.time == _T0
    assert record.minimum.balance == Decimal("-2")
    assert record.minimum.time == _T0 + timedelta(hours=1)
    assert collector.diagnostic_kinds() == [NEGATIVE_BALANCE_CODE]
    assert collector.diagnostic_payloads()[0]["asset"] == "ETH"
    assert collector.diagnostic_payloads()[0]["at_utc"] == "2020-06-01T00:00:00+00:00"


def test_ledger_negative_balance_monitor_ignores_rounding_noise() -> None:
    """Ignore balances within the negative tolerance."""

    collector = DiagnosticCollector()
    monitor = NegativeBalanceMonitor(diagnostic_sink=collector)

    monitor.monitor_observe("BTC", Decimal("-0.000000004"), _T0)
    monitor.monitor_observe("BTC", Decimal("-0.000000005"), _T0)

    assert monitor.monitor_records() == {}
    assert collector.events == []
