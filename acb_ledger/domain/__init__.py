"""Domain models used across application layer boundaries."""

from .assets import domain_asset_is_fiat, domain_asset_normalize_code, domain_asset_priority
from .diagnostics import (
	EMPTY_BALANCE_DISPOSITION_CODE,
	NEGATIVE_BALANCE_CODE,
	UNRECOGNIZED_RECORD_CODE,
	DiagnosticCollector,
	DiagnosticEvent,
	DiagnosticSink,
	NullDiagnosticSink,
	domain_format_time,
)
from .forward_spec import (
	ForwardSpecError,
	forward_spec_format,
	forward_spec_format_block,
	forward_spec_parse,
)
from .models import Forward, HealthStatus, Trade, Transaction
from .trade_transactions import domain_trade_split_transactions

__all__ = [
	"HealthStatus",
	"Forward",
	"Trade",
	"Transaction",
	"domain_asset_is_fiat",
	"domain_asset_normalize_code",
	"domain_asset_priority",
	"EMPTY_BALANCE_DISPOSITION_CODE",
	"NEGATIVE_BALANCE_CODE",
	"UNRECOGNIZED_RECORD_CODE",
	"DiagnosticCollector",
	"DiagnosticEvent",
	"DiagnosticSink",
	"NullDiagnosticSink",
	"domain_format_time",
	"ForwardSpecError",
	"forward_spec_format",
	"forward_spec_format_block",
	"forward_spec_parse",
	"domain_trade_split_transactions",
]
