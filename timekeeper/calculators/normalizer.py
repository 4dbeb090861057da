"""Time entry normalizer.

Converts one raw store entry into its computed projection:

    worked hours = exit - entry (time-of-day, 24h wrap across midnight)
    extra hours  = decimal hours or "HH:MM" canonicalized to decimal hours
    total hours  = worked + extra (full precision, rounded only for display)
    total pay    = daily rate + extra hours x extra rate (2 decimal places)

Normalization never fails on optional fields: malformed extra time or extra
rate counts as zero and is listed in ``NormalizedTimeEntry.adjustments``. Missing
required fields are a hard EntryValidationError raised by the reader.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Callable, Iterable, List, Mapping, Optional, Union

from timekeeper.calculators.time_utils import (
    calculate_shift_minutes,
    minutes_to_decimal_hours,
    parse_extra_duration,
    round_currency,
    round_hours,
    safe_decimal,
)
from timekeeper.models.base import FrozenDataModel
from timekeeper.models.time_entry import (
    Adjustment,
    NormalizedTimeEntry,
    RawTimeEntry,
    TimeEntryDraft,
)
from timekeeper.readers.date_values import parse_instant
from timekeeper.readers.time_entry_reader import TimeEntryReader
from timekeeper.utils.formatting import format_hours_clock
from timekeeper.validators.errors import EntryValidationError
from timekeeper.validators.validation_report import ValidationReport

logger = logging.getLogger(__name__)

EntryInput = Union[NormalizedTimeEntry, RawTimeEntry, Mapping[str, Any]]


class EntryPreview(FrozenDataModel):
    """Totals shown on the entry form before submitting to the store.

    All values are rounded to 2 decimal places.
    """

    worked_hours: Decimal
    extra_hours: Decimal
    total_hours: Decimal
    total_pay: Decimal
    extra_hours_formatted: str


@dataclass
class NormalizationBatch:
    """Result of normalizing many entries.

    Attributes:
        entries: Entries that were normalized, in input order
        warnings: ERROR issues for excluded entries, WARNING issues for
            entries kept with defaults applied
        skipped: Number of entries excluded because of hard errors
    """

    entries: List[NormalizedTimeEntry] = field(default_factory=list)
    warnings: ValidationReport = field(default_factory=ValidationReport)
    skipped: int = 0


def calculate_worked_hours(raw: RawTimeEntry) -> Decimal:
    """Decimal hours between clock-in and clock-out, 0 for open shifts."""
    if raw.exit_instant is None:
        return Decimal("0")
    minutes = calculate_shift_minutes(raw.entry_instant, raw.exit_instant)
    return minutes_to_decimal_hours(minutes)


def normalize(raw: RawTimeEntry) -> NormalizedTimeEntry:
    """Compute worked hours, extra hours, total hours and total pay.

    Pure function: the same raw entry always yields an equal result. A
    NormalizedTimeEntry may be passed back in; it is recomputed from its
    raw fields.

    Args:
        raw: Validated raw entry

    Returns:
        NormalizedTimeEntry carrying all raw fields plus derived values

    Example:
        >>> normalized = normalize(raw_entry)  # 09:00-17:30, "01:30" extra
        >>> normalized.worked_hours
        Decimal('8.5')
        >>> normalized.extra_hours_decimal
        Decimal('1.5')
    """
    # Extra-duration notes are recomputed; the ones made while reading stay
    adjustments: List[Adjustment] = [
        note for note in raw.adjustments if note.field != "extra_duration"
    ]

    worked_hours = calculate_worked_hours(raw)

    duration = parse_extra_duration(raw.extra_duration)
    if duration is None:
        extra_hours = Decimal("0")
        if raw.extra_duration is not None:
            adjustments.append(
                Adjustment(
                    field="extra_duration",
                    value=raw.extra_duration,
                    message=(
                        f"extra_duration {str(raw.extra_duration)!r} is not a "
                        f"valid duration; counted as 00:00"
                    ),
                )
            )
    else:
        extra_hours = duration.to_decimal_hours()

    daily_rate = safe_decimal(raw.daily_rate)
    extra_rate = safe_decimal(raw.extra_rate)

    total_hours = worked_hours + extra_hours
    total_pay = round_currency(daily_rate + extra_hours * extra_rate)

    return NormalizedTimeEntry(
        **_raw_values(raw),
        worked_hours=worked_hours,
        extra_hours_decimal=extra_hours,
        total_hours=total_hours,
        total_pay=total_pay,
        extra_hours_formatted=format_hours_clock(extra_hours),
        adjustments=tuple(adjustments),
    )


def normalize_record(
    record: EntryInput, reader: Optional[TimeEntryReader] = None
) -> NormalizedTimeEntry:
    """Read (if needed) and normalize a single entry.

    Args:
        record: Store record, RawTimeEntry or NormalizedTimeEntry
        reader: Reader used for store records (default: no directory)

    Returns:
        NormalizedTimeEntry

    Raises:
        EntryValidationError: If a store record lacks required fields
    """
    if isinstance(record, RawTimeEntry):
        return normalize(record)
    reader = reader or TimeEntryReader()
    return normalize(reader.read_record(record))


def normalize_batch(
    records: Iterable[EntryInput],
    reader: Optional[TimeEntryReader] = None,
    include: Optional[Callable[[NormalizedTimeEntry], bool]] = None,
) -> NormalizationBatch:
    """Normalize many entries, skipping the ones with hard errors.

    One bad record never aborts the batch: it is excluded and recorded as
    ERROR issues, while defaults applied to kept entries are recorded as
    WARNING issues.

    Args:
        records: Store records and/or entry models, in any mix
        reader: Reader used for store records (default: no directory)
        include: Keep only entries for which this returns True; dropped
            entries contribute no warnings

    Returns:
        NormalizationBatch with the normalized entries and the diagnostics
    """
    reader = reader or TimeEntryReader()
    batch = NormalizationBatch()

    for record in records:
        try:
            entry = normalize_record(record, reader)
        except EntryValidationError as e:
            logger.warning(f"Excluding time entry: {e}")
            batch.skipped += 1
            for issue in e.issues:
                batch.warnings.add_issue(issue)
            continue

        if include is not None and not include(entry):
            continue

        for adjustment in entry.adjustments:
            batch.warnings.add_warning(
                adjustment.field,
                adjustment.message,
                adjustment.value,
                {"entry_id": entry.id, "employee_id": entry.employee.id},
            )
        batch.entries.append(entry)

    logger.info(
        f"Normalized {len(batch.entries)} time entries "
        f"({batch.warnings.summary()})"
    )
    return batch


def preview_totals(draft: TimeEntryDraft) -> EntryPreview:
    """Preview the totals of an entry that has not been submitted yet.

    Args:
        draft: Create/update payload as typed on the entry form

    Returns:
        EntryPreview with every value rounded to 2 decimal places

    Example:
        >>> draft = TimeEntryDraft(
        ...     employee_id="emp-1", date=dt.date(2025, 11, 3),
        ...     entry_time=dt.time(9, 0), exit_time=dt.time(17, 0),
        ...     daily_rate=Decimal("100"), extra_hours="01:30",
        ...     extra_rate=Decimal("20"),
        ... )
        >>> preview_totals(draft).total_pay
        Decimal('130.00')
    """
    raw = RawTimeEntry(
        id="preview",
        employee={"id": draft.employee_id, "name": draft.employee_id},
        date=draft.date,
        entry_instant=parse_instant(draft.entry_time, on_date=draft.date),
        exit_instant=(
            parse_instant(draft.exit_time, on_date=draft.date)
            if draft.exit_time is not None
            else None
        ),
        daily_rate=draft.daily_rate,
        extra_duration=draft.extra_hours,
        extra_rate=draft.extra_rate,
    )
    normalized = normalize(raw)

    return EntryPreview(
        worked_hours=round_hours(normalized.worked_hours),
        extra_hours=round_hours(normalized.extra_hours_decimal),
        total_hours=round_hours(normalized.total_hours),
        total_pay=normalized.total_pay,
        extra_hours_formatted=normalized.extra_hours_formatted,
    )


def _raw_values(raw: RawTimeEntry) -> dict:
    # Shallow field copy keeps the nested EmployeeRef model intact
    return {
        name: getattr(raw, name)
        for name in RawTimeEntry.model_fields
        if name != "adjustments"
    }
