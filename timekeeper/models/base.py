"""Base model for all data models in the time-accounting engine.

This module provides a base Pydantic model with common configuration
shared by raw store records, normalized entries and report structures.
"""

from pydantic import BaseModel, ConfigDict


class BaseDataModel(BaseModel):
    """Base class for all data models.

    Provides common configuration for:
    - Validation with type checking
    - Serialization to/from dictionaries
    - Arbitrary types support for dates, times, decimals

    Example:
        >>> class Employee(BaseDataModel):
        ...     name: str
        >>> Employee(name="Ana").model_dump()
        {'name': 'Ana'}
    """

    model_config = ConfigDict(
        # Allow arbitrary types like Decimal, date, datetime
        arbitrary_types_allowed=True,
        # Validate on assignment to catch errors early
        validate_assignment=True,
        strict=False,
        extra="forbid",
        frozen=False,
    )


class FrozenDataModel(BaseDataModel):
    """Immutable variant for derived values that must not change once computed."""

    model_config = ConfigDict(frozen=True, validate_assignment=False)
