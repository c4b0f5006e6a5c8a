"""Job layer package for capital-gains run orchestration."""

from .asset_filter import job_asset_filter_parse, job_asset_filter_trades, job_asset_filter_transactions
from .capital_gains_run import job_capital_gains_engine_config, job_capital_gains_run, job_intake_transactions
from .interfaces import (
	RECORD_KIND_TRADE,
	RECORD_KIND_TRANSACTION,
	RECORD_KIND_UNRECOGNIZED,
	CapitalGainsRunResult,
	InputRecordError,
	IntakeRecord,
)
from .record_intake import (
	job_intake_classify_record,
	job_intake_parse_decimal,
	job_intake_parse_record,
	job_intake_parse_records,
	job_intake_parse_time,
)

__all__ = [
	"job_asset_filter_parse",
	"job_asset_filter_trades",
	"job_asset_filter_transactions",
	"job_capital_gains_engine_config",
	"job_capital_gains_run",
	"job_intake_transactions",
	"RECORD_KIND_TRADE",
	"RECORD_KIND_TRANSACTION",
	"RECORD_KIND_UNRECOGNIZED",
	"CapitalGainsRunResult",
	"InputRecordError",
	"IntakeRecord",
	"job_intake_classify_record",
	"job_intake_parse_decimal",
	"job_intake_parse_record",
	"job_intake_parse_records",
	"job_intake_parse_time",
]
