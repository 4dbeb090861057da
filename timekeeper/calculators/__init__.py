"""Calculator modules for the time-accounting engine."""

from timekeeper.calculators.normalizer import (
    EntryPreview,
    NormalizationBatch,
    calculate_worked_hours,
    normalize,
    normalize_batch,
    normalize_record,
    preview_totals,
)
from timekeeper.calculators.time_utils import (
    ClockDuration,
    DecimalHours,
    ExtraDuration,
    calculate_shift_minutes,
    convert_time_to_minutes,
    extra_duration_to_hours,
    minutes_to_decimal_hours,
    parse_extra_duration,
    round_currency,
    round_hours,
    safe_decimal,
)

__all__ = [
    # normalizer
    "EntryPreview",
    "NormalizationBatch",
    "calculate_worked_hours",
    "normalize",
    "normalize_batch",
    "normalize_record",
    "preview_totals",
    # time_utils
    "ClockDuration",
    "DecimalHours",
    "ExtraDuration",
    "calculate_shift_minutes",
    "convert_time_to_minutes",
    "extra_duration_to_hours",
    "minutes_to_decimal_hours",
    "parse_extra_duration",
    "round_currency",
    "round_hours",
    "safe_decimal",
]
