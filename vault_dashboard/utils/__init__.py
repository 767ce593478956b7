from .formatters import (
    parse_number,
    stroops_to_decimal,
    format_decimal,
    format_amount,
    format_with_commas,
    format_stroops_with_commas,
    format_compact,
    format_stroops_compact,
    format_percentage,
    format_fraction_percentage,
    format_bps,
    format_field,
)
from .chart import to_chart_series, date_label

__all__ = [
    "parse_number",
    "stroops_to_decimal",
    "format_decimal",
    "format_amount",
    "format_with_commas",
    "format_stroops_with_commas",
    "format_compact",
    "format_stroops_compact",
    "format_percentage",
    "format_fraction_percentage",
    "format_bps",
    "format_field",
    "to_chart_series",
    "date_label",
]
