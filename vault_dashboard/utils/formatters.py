"""Turn raw DeFindex values into display strings.

Amounts come in two conventions. Stroop amounts are integers with 7 implied
decimals and go through :func:`stroops_to_decimal` exactly once. Native decimal
values such as price-per-share are displayed as they are. The ``*_FIELDS``
tables below record which convention each API field uses; :func:`format_field`
picks the formatter from them.

None of these functions raise: unusable input renders as zero.
"""

import math
import re
from decimal import Context, Decimal, ROUND_HALF_UP
from typing import Any, Optional

from config import DashboardConfig

STROOPS_PER_UNIT = 10 ** DashboardConfig.STROOP_DECIMALS

STROOP_FIELDS = frozenset({
    "total_supply",
    "total_managed_funds",
    "total_amount",
    "period_deposits",
    "period_withdrawals",
    "deposits",
    "withdrawals",
    "net_deposits",
    "total_deposits",
    "total_withdrawals",
    "total_gains",
    "df_tokens",
    "underlying_balance",
})
DECIMAL_FIELDS = frozenset({"vault_pps"})
# Already percentages: 5.2 means 5.2%
PERCENT_FIELDS = frozenset({"apy", "annualized_return"})
# Fractions: 0.052 means 5.2%
FRACTION_FIELDS = frozenset({"pps_change", "pps_change_from_previous", "total_return"})
BPS_FIELDS = frozenset({"vault_fee", "defindex_fee"})

_NUMBER_PREFIX = re.compile(r'^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?')
# wide enough for any float to be quantized without overflow
_CONTEXT = Context(prec=400, rounding=ROUND_HALF_UP)


def parse_number(value: Any) -> Optional[float]:
    """Parse a number leniently, the way a browser's ``parseFloat`` does.

    Strings are read up to the first character that cannot continue a number,
    so ``"12.5 XLM"`` gives 12.5. Returns None for anything without a finite
    numeric value.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        match = _NUMBER_PREFIX.match(value)
        if not match:
            return None
        number = float(match.group(0))
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def _round(value: float, places: int) -> Decimal:
    """Round half-up on the shortest decimal form of ``value``."""
    return _CONTEXT.quantize(Decimal(repr(value)), Decimal(1).scaleb(-places))


def _strip_zeros(text: str) -> str:
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    if text in ('-0', ''):
        return '0'
    return text


def _drop_point_zero(text: str) -> str:
    return text[:-2] if text.endswith('.0') else text


def stroops_to_decimal(raw: Any) -> float:
    """Convert a stroop amount to display units (divide by 10^7)."""
    number = parse_number(raw)
    if number is None:
        return 0.0
    return number / STROOPS_PER_UNIT


def format_decimal(value: Any) -> str:
    """Format with at most 2 decimals, trailing zeros removed.

    >>> format_decimal(12.5)
    '12.5'
    >>> format_decimal(12.0)
    '12'
    """
    number = parse_number(value)
    if not number:
        return '0'
    return _strip_zeros(format(_round(number, 2), 'f'))


def format_amount(value: Any) -> str:
    """Format a native decimal amount such as price-per-share."""
    return format_decimal(value)


def format_with_commas(value: Any) -> str:
    """Like :func:`format_decimal`, with thousands separators in the integer part."""
    number = parse_number(value)
    if not number:
        return '0'
    return _strip_zeros(format(_round(number, 2), ',f'))


def format_stroops_with_commas(raw: Any) -> str:
    """Canonical display of a raw on-chain amount."""
    return format_with_commas(stroops_to_decimal(raw))


def format_compact(value: Any) -> str:
    """Format in compact notation with a K, M or B suffix."""
    number = parse_number(value)
    if not number:
        return '0'

    sign = '-' if number < 0 else ''
    magnitude = abs(number)

    if magnitude >= 1_000_000_000:
        return f"{sign}{_drop_point_zero(format(_round(magnitude / 1_000_000_000, 1), 'f'))}B"
    if magnitude >= 1_000_000:
        return f"{sign}{_drop_point_zero(format(_round(magnitude / 1_000_000, 1), 'f'))}M"
    if magnitude >= 1_000:
        thousands = magnitude / 1_000
        if thousands % 1 == 0:
            return f"{sign}{int(thousands)}K"
        return f"{sign}{_drop_point_zero(format(_round(thousands, 1), 'f'))}K"
    return f"{sign}{format_decimal(magnitude)}"


def format_stroops_compact(raw: Any) -> str:
    return format_compact(stroops_to_decimal(raw))


def format_percentage(value: Any) -> str:
    """Format a value that is already a percentage, e.g. 12.345 -> '12.35%'.

    Fractional rates must be multiplied by 100 first; see
    :func:`format_fraction_percentage`.
    """
    number = parse_number(value)
    if number is None:
        return '0.00%'
    return f"{format(_round(number, 2), 'f')}%"


def format_fraction_percentage(value: Any) -> str:
    """Format a fractional rate (0.0123 -> '1.23%'). Missing or zero gives N/A."""
    number = parse_number(value)
    if not number:
        return DashboardConfig.PLACEHOLDER
    return format_percentage(number * 100)


def format_bps(value: Any) -> str:
    """Format a fee in basis points (250 -> '2.50%')."""
    number = parse_number(value)
    if number is None:
        return DashboardConfig.PLACEHOLDER
    return format_percentage(number / 100)


def format_field(name: str, value: Any) -> str:
    """Format ``value`` according to the unit convention of API field ``name``.

    Raises:
        ValueError: if ``name`` is not a known amount, rate or fee field.
    """
    if name in STROOP_FIELDS:
        return format_stroops_with_commas(value)
    if name in DECIMAL_FIELDS:
        return format_amount(value)
    if name in PERCENT_FIELDS:
        return format_percentage(value)
    if name in FRACTION_FIELDS:
        return format_fraction_percentage(value)
    if name in BPS_FIELDS:
        return format_bps(value)
    raise ValueError(f"No display convention registered for field '{name}'")
