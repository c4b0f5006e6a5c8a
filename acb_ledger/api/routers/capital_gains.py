"""Capital-gains API router composition for ledger run requests."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, status
from fastapi.responses import JSONResponse

from acb_ledger.config import AppSettings
from acb_ledger.domain import DiagnosticCollector, ForwardSpecError
from acb_ledger.jobs import (
    InputRecordError,
    job_asset_filter_parse,
    job_capital_gains_engine_config,
    job_capital_gains_run,
)
from acb_ledger.ledger import EmptyBalanceDispositionError, TransactionValueUnresolvedError

from ..serialization import api_serialize_capital_gains_run


def api_create_capital_gains_router(settings: AppSettings) -> APIRouter:
    """Create router exposing the capital-gains computation endpoint.

    Args:
        settings: Runtime settings providing run defaults and request limits.

    Returns:
        APIRouter: Router exposing `/capital-gains`.

    Raises:
        ValueError: Raised when settings is invalid.
    """

    if settings is None:
        raise ValueError("settings must not be None")

    router = APIRouter(prefix="/capital-gains", tags=["capital-gains"])

    @router.post("")
    def api_capital_gains_compute(request_body: dict[str, Any] = Body(...)) -> JSONResponse:
        """Compute capital gains for one chronologically ordered record list.

        Args:
            request_body: JSON object with `records`, optional `forward` spec text
                and optional `assets` filter list or comma-separated text.

        Returns:
            JSONResponse: Serialized run result, or an error payload.

        Raises:
            RuntimeError: Raised when computation fails unexpectedly.
        """

        records = request_body.get("records")
        if not isinstance(records, list):
            return _api_error_response(
                "INVALID_RECORDS",
                "records must be a JSON array",
                status.HTTP_400_BAD_REQUEST,
            )
        if len(records) > settings.api_max_records:
            return _api_error_response(
                "TOO_MANY_RECORDS",
                f"records must not exceed {settings.api_max_records} items",
                status.HTTP_400_BAD_REQUEST,
            )

        forward_spec = request_body.get("forward", settings.acb_forward_spec)
        if forward_spec is not None and not isinstance(forward_spec, str):
            return _api_error_response(
                "INVALID_FORWARD_SPEC",
                "forward must be ASSET:balance:acb text",
                status.HTTP_400_BAD_REQUEST,
            )

        try:
            engine_config = job_capital_gains_engine_config(
                forward_spec=forward_spec,
                settle_foreign_fees=settings.acb_settle_foreign_fees,
                strict_empty_disposals=settings.acb_strict_empty_disposals,
            )
            asset_filter = job_asset_filter_parse(request_body.get("assets", settings.acb_asset_filter))
        except ForwardSpecError as error:
            return _api_error_response("INVALID_FORWARD_SPEC", str(error), status.HTTP_400_BAD_REQUEST)
        except (ValueError, TypeError) as error:
            return _api_error_response("INVALID_ASSET_FILTER", str(error), status.HTTP_400_BAD_REQUEST)

        try:
            run_result = job_capital_gains_run(
                records=records,
                config=engine_config,
                asset_filter=asset_filter,
                diagnostic_collector=DiagnosticCollector(),
            )
        except InputRecordError as error:
            return _api_error_response("INVALID_RECORD", str(error), status.HTTP_400_BAD_REQUEST)
        except TransactionValueUnresolvedError as error:
            return _api_error_response("UNRESOLVED_VALUE", str(error), status.HTTP_422_UNPROCESSABLE_ENTITY)
        except EmptyBalanceDispositionError as error:
            return _api_error_response(
                "EMPTY_BALANCE_DISPOSITION",
                str(error),
                status.HTTP_422_UNPROCESSABLE_ENTITY,
            )

        return JSONResponse(content=api_serialize_capital_gains_run(run_result), status_code=status.HTTP_200_OK)

    return router


def _api_error_response(code: str, message: str, status_code: int) -> JSONResponse:
    payload = {
        "status": "error",
        "code": code,
        "message": message,
    }
    return JSONResponse(content=payload, status_code=status_code)


__all__ = ["api_create_capital_gains_router"]
