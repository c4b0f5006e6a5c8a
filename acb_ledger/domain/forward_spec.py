"""Carry-forward specification codec.

A carry-forward specification lists the opening state of each asset as
comma-separated `ASSET:balance:acb` triples, for example
`BTC:0.5:5000.00,ETH:2:1200.50`. The formatter emits the same text so one
period's output seeds the next period's run.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Final, Mapping

from .assets import domain_asset_normalize_code
from .models import Forward

FORWARD_SPEC_OPTION_PREFIX: Final[str] = "--init="

_FORWARD_SPEC_BALANCE_QUANTUM: Final[Decimal] = Decimal("0.00000001")
_FORWARD_SPEC_ACB_QUANTUM: Final[Decimal] = Decimal("0.01")


class ForwardSpecError(ValueError):
    """Raised when a carry-forward specification cannot be parsed."""


def forward_spec_parse(spec_text: str | None) -> dict[str, Forward]:
    """Parse one carry-forward specification into a forward map.

    Args:
        spec_text: Comma-separated `ASSET:balance:acb` triples. Blank text,
            line continuations and an optional `--init=` prefix are accepted.

    Returns:
        dict[str, Forward]: Forward seed keyed by canonical asset code, in
            specification order.

    Raises:
        ForwardSpecError: Raised when an entry is malformed or duplicated.
    """

    if spec_text is None:
        return {}

    normalized_text = spec_text.replace("\\\n", "").replace("\\", "").strip()
    if normalized_text.startswith(FORWARD_SPEC_OPTION_PREFIX):
        normalized_text = normalized_text[len(FORWARD_SPEC_OPTION_PREFIX):]

    forward_by_asset: dict[str, Forward] = {}
    for raw_entry in normalized_text.split(","):
        entry = raw_entry.strip()
        if not entry:
            continue

        parts = [part.strip() for part in entry.split(":")]
        if len(parts) != 3:
            raise ForwardSpecError(f"forward entry must be ASSET:balance:acb, got {entry!r}")

        asset_text, balance_text, acb_text = parts
        try:
            asset = domain_asset_normalize_code(asset_text)
        except ValueError as error:
            raise ForwardSpecError(f"forward entry has a blank asset: {entry!r}") from error

        if asset in forward_by_asset:
            raise ForwardSpecError(f"forward entry for asset={asset} is duplicated")

        forward_by_asset[asset] = Forward(
            balance=_forward_spec_parse_decimal(balance_text, "balance", entry),
            acb=_forward_spec_parse_decimal(acb_text, "acb", entry),
        )

    return forward_by_asset


def forward_spec_format(forward_by_asset: Mapping[str, Forward]) -> str:
    """Format one forward map as a carry-forward specification.

    Args:
        forward_by_asset: Forward state keyed by asset code.

    Returns:
        str: Comma-separated triples sorted by asset code; empty when no asset is carried.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return ",".join(
        f"{asset}:{forward_spec_format_balance(forward.balance)}:{forward_spec_format_acb(forward.acb)}"
        for asset, forward in sorted(forward_by_asset.items())
    )


def forward_spec_format_block(forward_by_asset: Mapping[str, Forward]) -> str:
    """Format the carry-forward code block printed at the end of a report.

    Each triple is placed on its own continuation line after the `--init=`
    option so the block can be pasted into the next period's command line.
    """

    if not forward_by_asset:
        return ""

    entries = forward_spec_format(forward_by_asset).split(",")
    lines = [FORWARD_SPEC_OPTION_PREFIX + "\\"]
    lines.extend(entry + ",\\" for entry in entries[:-1])
    lines.append(entries[-1])
    return "\n".join(lines)


def forward_spec_format_balance(balance: Decimal) -> str:
    """Format a balance with at most eight fractional digits and no trailing zeros."""

    rounded_text = format(_forward_spec_quantize(balance, _FORWARD_SPEC_BALANCE_QUANTUM), "f")
    if "." in rounded_text:
        rounded_text = rounded_text.rstrip("0").rstrip(".")
    if rounded_text in {"-0", ""}:
        return "0"
    return rounded_text


def forward_spec_format_acb(acb: Decimal) -> str:
    """Format an adjusted cost base with exactly two fractional digits."""

    rounded_text = format(_forward_spec_quantize(acb, _FORWARD_SPEC_ACB_QUANTUM), "f")
    if rounded_text == "-0.00":
        return "0.00"
    return rounded_text


def _forward_spec_quantize(value: Decimal, quantum: Decimal) -> Decimal:
    # Precision must hold every integer digit plus the quantum's fraction digits.
    required_precision = max(value.adjusted(), 0) + 2 - quantum.as_tuple().exponent
    with localcontext() as context:
        context.prec = max(context.prec, required_precision)
        return value.quantize(quantum, rounding=ROUND_HALF_UP)


def _forward_spec_parse_decimal(value_text: str, field_name: str, entry: str) -> Decimal:
    try:
        parsed_value = Decimal(value_text)
    except InvalidOperation as error:
        raise ForwardSpecError(f"forward entry {entry!r} has a non-numeric {field_name}={value_text!r}") from error

    if not parsed_value.is_finite():
        raise ForwardSpecError(f"forward entry {entry!r} has a non-finite {field_name}")
    return parsed_value


__all__ = [
    "FORWARD_SPEC_OPTION_PREFIX",
    "ForwardSpecError",
    "forward_spec_format",
    "forward_spec_format_acb",
    "forward_spec_format_balance",
    "forward_spec_format_block",
    "forward_spec_parse",
]
