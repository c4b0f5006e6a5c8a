"""Tests for the `calculate` command-line run."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import pytest

from acb_ledger.config import AppSettings
from acb_ledger.main import main_load_records, main_run_calculate


def _calculate_arguments(input_path: Path, **overrides: object) -> argparse.Namespace:
    arguments = {
        "command": "calculate",
        "input_path": str(input_path),
        "forward_spec": None,
        "asset_filter": None,
        "strict_empty_disposals": None,
        "settle_foreign_fees": None,
    }
    arguments.update(overrides)
    return argparse.Namespace(**arguments)


def test_calculate_prints_snapshot_and_carry_forward_block(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Print the JSON snapshot to stdout and the carry-forward block to stderr.

    Args:
        tmp_path: Pytest temporary directory fixture.
        capsys: Pytest output capture fixture.

    Returns:
        None: Assertions validate exit code and printed output.

    Raises:
        AssertionError: Raised when output is unexpected.
    """

    input_path = tmp_path / "records.json"
    input_path.write_text(
        json.dumps(
            {
                "records": [
                    {"asset": "BTC", "amount": "-0.5", "value": "6000", "time": "2021-06-01T00:00:00Z"},
                ]
            }
        ),
        encoding="utf-8",
    )

    exit_code = main_run_calculate(
        _calculate_arguments(input_path, forward_spec="BTC:1:10000"),
        AppSettings(environment_name="test"),
    )

    captured = capsys.readouterr()
    assert exit_code == 0
    payload = json.loads(captured.out)
    assert payload["carry_forward"]["spec"] == "BTC:0.5:5000.00"
    assert "Carry forward to the next year:" in captured.err
    assert "--init=\\\nBTC:0.5:5000.00" in captured.err


def test_calculate_reports_diagnostics_and_errors(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Report diagnostics as `KIND: message` lines and fail under strict policy."""

    input_path = tmp_path / "records.json"
    input_path.write_text(
        json.dumps([{"asset": "DOGE", "amount": "-5", "value": "1", "time": "2021-01-01T00:00:00Z"}]),
        encoding="utf-8",
    )

    lenient_exit_code = main_run_calculate(_calculate_arguments(input_path), AppSettings(environment_name="test"))
    lenient_output = capsys.readouterr()
    strict_exit_code = main_run_calculate(
        _calculate_arguments(input_path, strict_empty_disposals=True),
        AppSettings(environment_name="test"),
    )
    strict_output = capsys.readouterr()

    assert lenient_exit_code == 0
    assert "EMPTY_BALANCE_DISPOSITION:" in lenient_output.err
    assert "NEGATIVE_BALANCE:" in lenient_output.err
    assert strict_exit_code == 1
    assert "ERROR:" in strict_output.err
    assert strict_output.out == ""


def test_calculate_rejects_missing_and_malformed_input(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Return exit code 1 for unreadable files and malformed forward specs."""

    input_path = tmp_path / "records.json"
    input_path.write_text("[]", encoding="utf-8")
    settings = AppSettings(environment_name="test")

    missing_exit_code = main_run_calculate(_calculate_arguments(tmp_path / "absent.json"), settings)
    malformed_exit_code = main_run_calculate(_calculate_arguments(input_path, forward_spec="BTC"), settings)

    assert missing_exit_code == 1
    assert malformed_exit_code == 1
    assert capsys.readouterr().err.count("ERROR:") == 2


def test_load_records_requires_record_array(tmp_path: Path) -> None:
    """Reject JSON documents that hold no record array."""

    input_path = tmp_path / "records.json"
    input_path.write_text(json.dumps({"rows": []}), encoding="utf-8")

    with pytest.raises(ValueError, match="JSON array"):
        main_load_records(str(input_path))
