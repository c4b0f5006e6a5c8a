"""Application bootstrap wiring for startup validation and dependency assembly."""

from fastapi import FastAPI

from acb_ledger.api import create_api_application
from acb_ledger.config import AppSettings, config_load_settings
from acb_ledger.jobs import job_capital_gains_engine_config
from acb_ledger.ledger import LedgerEngineConfig


def bootstrap_create_application() -> FastAPI:
    """Assemble the runtime application after validating startup configuration.

    Returns:
        FastAPI: Fully initialized FastAPI application instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    settings = config_load_settings()
    return create_api_application(settings=settings)


def bootstrap_create_engine_config(
    settings: AppSettings,
    forward_spec: str | None = None,
    settle_foreign_fees: bool | None = None,
    strict_empty_disposals: bool | None = None,
) -> LedgerEngineConfig:
    """Build ledger engine configuration from settings and optional overrides.

    Args:
        settings: Validated runtime settings.
        forward_spec: Optional carry-forward specification overriding `ACB_FORWARD_SPEC`.
        settle_foreign_fees: Optional override of `ACB_SETTLE_FOREIGN_FEES`.
        strict_empty_disposals: Optional override of `ACB_STRICT_EMPTY_DISPOSALS`.

    Returns:
        LedgerEngineConfig: Engine configuration for one run.

    Raises:
        ForwardSpecError: Raised when the carry-forward specification is malformed.
    """

    return job_capital_gains_engine_config(
        forward_spec=settings.acb_forward_spec if forward_spec is None else forward_spec,
        settle_foreign_fees=settings.acb_settle_foreign_fees if settle_foreign_fees is None else settle_foreign_fees,
        strict_empty_disposals=(
            settings.acb_strict_empty_disposals if strict_empty_disposals is None else strict_empty_disposals
        ),
    )
