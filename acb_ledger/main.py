"""Main module entrypoint for local runtime execution.

This module validates startup configuration and either launches the FastAPI
service or runs one capital-gains computation over a JSON record file.
"""

import argparse
import json
import sys

import uvicorn

from acb_ledger.api import api_serialize_capital_gains_run
from acb_ledger.bootstrap import bootstrap_create_application, bootstrap_create_engine_config
from acb_ledger.config import AppSettings, config_load_settings
from acb_ledger.domain import DiagnosticCollector, ForwardSpecError, forward_spec_format_block
from acb_ledger.jobs import InputRecordError, job_asset_filter_parse, job_capital_gains_run
from acb_ledger.ledger import LedgerError


def main() -> None:
    """Run selected runtime command with validated startup configuration.

    Returns:
        None: This function does not return a runtime value.

    Raises:
        SettingsLoadError: Raised when configuration validation fails.
    """

    argument_parser = argparse.ArgumentParser(description="Crypto ACB Ledger runtime entrypoint")
    argument_parser.add_argument(
        "command",
        nargs="?",
        default="api",
        choices=("api", "calculate"),
        help="Runtime command: `api` starts server, `calculate` computes capital gains for one record file",
        type=str,
    )
    argument_parser.add_argument(
        "input_path",
        nargs="?",
        help="JSON file holding chronologically ordered trade or transaction records for `calculate`",
        type=str,
    )
    argument_parser.add_argument(
        "--init",
        dest="forward_spec",
        type=str,
        help="Carry-forward specification `ASSET:balance:acb,...` overriding ACB_FORWARD_SPEC",
    )
    argument_parser.add_argument(
        "--assets",
        dest="asset_filter",
        type=str,
        help="Comma-separated asset codes to retain overriding ACB_ASSET_FILTER",
    )
    argument_parser.add_argument(
        "--strict-empty-disposals",
        dest="strict_empty_disposals",
        action="store_true",
        default=None,
        help="Abort when an asset is disposed from a zero balance",
    )
    argument_parser.add_argument(
        "--no-fee-settlement",
        dest="settle_foreign_fees",
        action="store_false",
        default=None,
        help="Do not reduce the ledger of an asset used to pay a fee on another asset",
    )
    parsed_arguments = argument_parser.parse_args()

    settings = config_load_settings()

    if parsed_arguments.command == "calculate":
        if not parsed_arguments.input_path:
            argument_parser.error("`calculate` requires an input_path")
        raise SystemExit(main_run_calculate(parsed_arguments, settings))

    application = bootstrap_create_application()
    uvicorn.run(
        application,
        host=settings.application_host,
        port=settings.application_port,
    )


def main_run_calculate(parsed_arguments: argparse.Namespace, settings: AppSettings) -> int:
    """Compute capital gains for one record file and print the result.

    Args:
        parsed_arguments: Parsed command-line arguments.
        settings: Validated runtime settings providing run defaults.

    Returns:
        int: Process exit code; 0 on success, 1 on input or ledger errors.

    Raises:
        RuntimeError: Input and ledger errors are reported through the exit code.
    """

    try:
        engine_config = bootstrap_create_engine_config(
            settings=settings,
            forward_spec=parsed_arguments.forward_spec,
            settle_foreign_fees=parsed_arguments.settle_foreign_fees,
            strict_empty_disposals=parsed_arguments.strict_empty_disposals,
        )
        asset_filter = job_asset_filter_parse(
            settings.acb_asset_filter if parsed_arguments.asset_filter is None else parsed_arguments.asset_filter
        )
        records = main_load_records(parsed_arguments.input_path)
    except (ForwardSpecError, OSError, ValueError) as error:
        print(f"ERROR: {error}", file=sys.stderr)
        return 1

    diagnostic_collector = DiagnosticCollector()
    try:
        run_result = job_capital_gains_run(
            records=records,
            config=engine_config,
            asset_filter=asset_filter,
            diagnostic_collector=diagnostic_collector,
        )
    except (InputRecordError, LedgerError) as error:
        main_print_diagnostics(diagnostic_collector)
        print(f"ERROR: {error}", file=sys.stderr)
        return 1

    main_print_diagnostics(diagnostic_collector)
    print(json.dumps(api_serialize_capital_gains_run(run_result), indent=2))
    carry_forward_block = forward_spec_format_block(run_result.forward_by_asset_out)
    if carry_forward_block:
        print("Carry forward to the next year:", file=sys.stderr)
        print(carry_forward_block, file=sys.stderr)
    return 0


def main_load_records(input_path: str) -> list[dict[str, object]]:
    """Load input records from a JSON array or an object with a `records` array.

    Args:
        input_path: Path of the JSON input file.

    Returns:
        list[dict[str, object]]: Input records in file order.

    Raises:
        OSError: Raised when the file cannot be read.
        ValueError: Raised when the file is not valid JSON or has no record array.
    """

    with open(input_path, encoding="utf-8") as input_file:
        payload = json.load(input_file)

    if isinstance(payload, dict):
        payload = payload.get("records")
    if not isinstance(payload, list):
        raise ValueError(f"{input_path} must hold a JSON array of records")
    return payload


def main_print_diagnostics(diagnostic_collector: DiagnosticCollector) -> None:
    """Print collected diagnostics to stderr, one `KIND: message` line each."""

    for event in diagnostic_collector.events:
        print(f"{event.kind}: {event.message}", file=sys.stderr)


if __name__ == "__main__":
    main()
