"""Ledger layer package for ACB capital-gains computations."""

from .acb_engine import (
	LEDGER_STATE_ACCUMULATING,
	LEDGER_STATE_EMPTY,
	LEDGER_STATE_FINALIZED,
	AcbLedgerEngine,
)
from .aggregator import (
	aggregate_derive_forward,
	aggregate_dispositions,
	aggregate_finalize_ledgers,
	aggregate_taxable_gain,
)
from .disposition import (
	LedgerAdjustment,
	ledger_apply_adjustment,
	ledger_compute_fee_settlement,
	ledger_compute_transaction_adjustment,
	ledger_requires_fee_settlement,
)
from .errors import (
	EmptyBalanceDispositionError,
	LedgerError,
	LedgerFinalizedError,
	TransactionValueUnresolvedError,
)
from .interfaces import (
	LEDGER_NEGATIVE_BALANCE_TOLERANCE,
	LEDGER_TAXABLE_INCLUSION_RATE,
	AggregateDisposition,
	BalanceObservation,
	CapitalGains,
	Disposition,
	Ledger,
	LedgerEngineConfig,
	LedgerEnginePort,
	NegativeBalanceRecord,
)
from .negative_balance import NegativeBalanceMonitor
from .store import LedgerStore, ledger_normalize_forward

__all__ = [
	"AcbLedgerEngine",
	"LEDGER_STATE_EMPTY",
	"LEDGER_STATE_ACCUMULATING",
	"LEDGER_STATE_FINALIZED",
	"aggregate_derive_forward",
	"aggregate_dispositions",
	"aggregate_finalize_ledgers",
	"aggregate_taxable_gain",
	"LedgerAdjustment",
	"ledger_apply_adjustment",
	"ledger_compute_fee_settlement",
	"ledger_compute_transaction_adjustment",
	"ledger_requires_fee_settlement",
	"LedgerError",
	"EmptyBalanceDispositionError",
	"LedgerFinalizedError",
	"TransactionValueUnresolvedError",
	"LEDGER_NEGATIVE_BALANCE_TOLERANCE",
	"LEDGER_TAXABLE_INCLUSION_RATE",
	"AggregateDisposition",
	"BalanceObservation",
	"CapitalGains",
	"Disposition",
	"Ledger",
	"LedgerEngineConfig",
	"LedgerEnginePort",
	"NegativeBalanceRecord",
	"NegativeBalanceMonitor",
	"LedgerStore",
	"ledger_normalize_forward",
]
