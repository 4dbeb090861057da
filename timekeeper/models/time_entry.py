"""Time entry data models.

This module defines the raw time entry as received from the external
time-entry store, the normalized projection computed from it, and the
draft payload used to create or update entries in the store.
"""

import datetime as dt
import math
import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union

from pydantic import ConfigDict, Field, field_validator, model_validator

from timekeeper.models.base import BaseDataModel, FrozenDataModel

NOTES_MAX_LENGTH = 500

_WHITESPACE_RUN = re.compile(r"\s+")


class ApprovalState(str, Enum):
    """Approval workflow state of a time entry."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    @classmethod
    def _missing_(cls, value: object) -> Optional["ApprovalState"]:
        # The store sends upper-case states ("PENDING")
        if isinstance(value, str):
            lowered = value.strip().lower()
            for member in cls:
                if member.value == lowered:
                    return member
        return None


def _is_nan(value: Any) -> bool:
    if isinstance(value, float):
        return math.isnan(value)
    if isinstance(value, Decimal):
        return value.is_nan()
    return False


def _read_rate(value: Any) -> Optional[Decimal]:
    """Non-negative finite amount, or None when the value cannot be used."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip().replace(",", ".")
    if not isinstance(value, (int, float, Decimal, str)):
        return None
    try:
        parsed = Decimal(str(value))
    except InvalidOperation:
        return None
    if not parsed.is_finite() or parsed < 0:
        return None
    return parsed


def clean_notes(value: Any) -> Optional[str]:
    """Collapse line breaks, tabs and repeated spaces and cap the length.

    Example:
        >>> clean_notes("  Stock\\r\\n\\ttake   day ")
        'Stock take day'
        >>> clean_notes("   ") is None
        True
    """
    if value is None:
        return None
    text = _WHITESPACE_RUN.sub(" ", str(value)).strip()
    return text[:NOTES_MAX_LENGTH] or None


class Adjustment(FrozenDataModel):
    """A soft default applied to an optional field instead of rejecting it.

    Attributes:
        field: Name of the adjusted field
        value: Value as received
        message: Human-readable description of the default
    """

    field: str
    value: Any = None
    message: str

    def __str__(self) -> str:
        return self.message


class EmployeeRef(BaseDataModel):
    """Identity of the employee a time entry belongs to.

    Attributes:
        id: Opaque employee identifier
        name: Display name
    """

    id: str = Field(..., min_length=1, description="Employee identifier")
    name: str = Field(..., min_length=1, description="Employee display name")

    @field_validator("id", "name")
    @classmethod
    def validate_not_empty(cls, v: str, info) -> str:
        """Reject empty or whitespace-only identity fields."""
        if not v or not v.strip():
            raise ValueError(f"{info.field_name} cannot be empty or whitespace")
        return v.strip()


class RawTimeEntry(BaseDataModel):
    """A single shift record as received from the time-entry store.

    Attributes:
        id: Opaque entry identifier
        employee: Employee this entry belongs to
        date: Calendar day the entry applies to
        entry_instant: Clock-in timestamp
        exit_instant: Clock-out timestamp, None while the shift is open
        daily_rate: Amount owed for a completed standard shift
        extra_duration: Extra time beyond the standard shift, either decimal
            hours or "HH:MM" text, kept as received
        extra_rate: Amount owed per extra hour
        notes: Optional free text, single line
        approval_state: Approval workflow state
        adjustments: Soft defaults applied to optional fields

    Example:
        >>> entry = RawTimeEntry(
        ...     id="e-1",
        ...     employee=EmployeeRef(id="emp-1", name="Ana"),
        ...     date=dt.date(2025, 11, 3),
        ...     entry_instant=dt.datetime(2025, 11, 3, 9, 0),
        ...     exit_instant=dt.datetime(2025, 11, 3, 17, 0),
        ...     daily_rate=Decimal("150"),
        ...     extra_duration="01:00",
        ...     extra_rate=Decimal("30"),
        ... )
        >>> entry.employee.name
        'Ana'
    """

    id: str = Field(..., min_length=1, description="Entry identifier")
    employee: EmployeeRef = Field(..., description="Employee reference")
    date: dt.date = Field(..., description="Calendar day of the shift")
    entry_instant: dt.datetime = Field(..., description="Clock-in timestamp")
    exit_instant: Optional[dt.datetime] = Field(None, description="Clock-out timestamp")
    daily_rate: Decimal = Field(..., ge=0, description="Standard shift compensation")
    extra_duration: Optional[Union[Decimal, str]] = Field(
        None, description="Extra time as decimal hours or HH:MM text"
    )
    extra_rate: Decimal = Field(Decimal("0"), ge=0, description="Rate per extra hour")
    notes: Optional[str] = Field(None, description="Optional notes")
    approval_state: ApprovalState = Field(
        ApprovalState.PENDING, description="Approval workflow state"
    )
    adjustments: Tuple[Adjustment, ...] = Field(
        (), description="Soft defaults applied to optional fields"
    )

    @model_validator(mode="before")
    @classmethod
    def default_unusable_extra_rate(cls, data: Any) -> Any:
        """Count negative or unreadable extra rates as zero and note it.

        Absent and NaN rates are zero without a note.
        """
        if not isinstance(data, dict) or "extra_rate" not in data:
            return data
        value = data["extra_rate"]
        if value is None or _is_nan(value):
            return {**data, "extra_rate": Decimal("0")}
        rate = _read_rate(value)
        if rate is not None:
            return {**data, "extra_rate": rate}

        adjustment = Adjustment(
            field="extra_rate",
            value=value,
            message=f"extra_rate {value!r} is not a valid rate; counted as 0",
        )
        return {
            **data,
            "extra_rate": Decimal("0"),
            "adjustments": (*data.get("adjustments", ()), adjustment),
        }

    @field_validator("daily_rate", mode="before")
    @classmethod
    def nan_rate_to_zero(cls, v: Any) -> Any:
        """Treat NaN as zero; a missing rate still fails validation."""
        return Decimal("0") if _is_nan(v) else v

    @field_validator("extra_duration", mode="before")
    @classmethod
    def clean_extra_duration(cls, v: Any) -> Any:
        """Drop NaN and blank values, keep everything else for the normalizer."""
        if v is None or _is_nan(v):
            return None
        if isinstance(v, bool):
            return None
        if isinstance(v, float):
            # Go through str so 2.25 stays Decimal("2.25")
            return Decimal(str(v))
        if isinstance(v, str):
            stripped = v.strip()
            return stripped or None
        return v

    @field_validator("notes", mode="before")
    @classmethod
    def collapse_notes(cls, v: Any) -> Optional[str]:
        return clean_notes(v)


class NormalizedTimeEntry(RawTimeEntry):
    """A raw entry plus the derived hour and pay values.

    Derived values are recomputed from the raw fields; instances are never
    persisted on their own.

    Attributes:
        worked_hours: Decimal hours between entry and exit (0 without exit)
        extra_hours_decimal: Extra time canonicalized to decimal hours
        total_hours: worked_hours + extra_hours_decimal at full precision
        total_pay: daily_rate + extra_hours_decimal * extra_rate, 2 places
        extra_hours_formatted: Extra time as "HH:MM"
    """

    model_config = ConfigDict(frozen=True, validate_assignment=False)

    worked_hours: Decimal
    extra_hours_decimal: Decimal
    total_hours: Decimal
    total_pay: Decimal
    extra_hours_formatted: str = "00:00"

    @property
    def display_total_hours(self) -> Decimal:
        """Total hours rounded to 2 decimal places for display."""
        return self.total_hours.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

    @property
    def has_adjustments(self) -> bool:
        return bool(self.adjustments)

    def raw_fields(self) -> Dict[str, Any]:
        """Return only the fields that belong to the raw entry."""
        return self.model_dump(include=set(RawTimeEntry.model_fields))


class TimeEntryDraft(BaseDataModel):
    """Create/update payload for the time-entry store.

    Times are wall-clock "HH:MM" strings as typed by the user; the store is
    the authority for persisted values, the normalizer only previews them.
    """

    employee_id: str = Field(..., min_length=1)
    date: dt.date
    entry_time: dt.time
    exit_time: Optional[dt.time] = None
    daily_rate: Decimal = Field(Decimal("0"), ge=0)
    extra_hours: Optional[str] = None
    extra_rate: Decimal = Field(Decimal("0"), ge=0)
    notes: Optional[str] = None
    approval_state: Optional[ApprovalState] = None

    @field_validator("notes", mode="before")
    @classmethod
    def collapse_notes(cls, v: Any) -> Optional[str]:
        return clean_notes(v)

    def to_payload(self) -> Dict[str, Any]:
        """Serialize using the store's field names.

        Optional fields the draft leaves empty are omitted; see
        ``cleared_fields`` for the ones an update must remove.

        Returns:
            Dictionary ready to be sent as JSON
        """
        payload: Dict[str, Any] = {
            "employee": self.employee_id,
            "date": self.date.isoformat(),
            "entryTime": self.entry_time.strftime("%H:%M"),
            "dailyRate": float(self.daily_rate),
            "extraHoursRate": float(self.extra_rate),
        }
        if self.exit_time is not None:
            payload["exitTime"] = self.exit_time.strftime("%H:%M")
        if self.extra_hours:
            payload["extraHoursFormatted"] = self.extra_hours
        if self.notes:
            payload["notes"] = self.notes
        if self.approval_state is not None:
            payload["status"] = self.approval_state.value.upper()
        return payload

    def cleared_fields(self) -> Tuple[str, ...]:
        """Store fields this draft leaves empty, so an update drops them."""
        cleared = []
        if self.exit_time is None:
            cleared.extend(["exitTime", "exitInstant"])
        if not self.extra_hours:
            cleared.extend(["extraHoursFormatted", "extraDuration", "extraHours"])
        if not self.notes:
            cleared.append("notes")
        return tuple(cleared)

    def to_update_payload(self) -> Dict[str, Any]:
        """Like ``to_payload`` with the cleared fields sent as null."""
        payload = self.to_payload()
        for name in self.cleared_fields():
            payload[name] = None
        return payload
