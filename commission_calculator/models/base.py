"""
Base model and errors shared by all commission records.

Records arrive as dicts, pydantic models or ORM rows exposing attributes.
They are validated once at the calculator boundary and are immutable afterwards.
"""

from collections.abc import Mapping
from decimal import Decimal
from typing import Any, ClassVar, Optional, Type

from pydantic import BaseModel, ConfigDict, ValidationError


class CommissionError(Exception):
    """Base class for every error raised by the commission calculator."""


class InvalidRecordError(CommissionError, ValueError):
    """Raised when an input record is missing fields or holds malformed values."""

    def __init__(self, record_type: str, message: str, errors: Optional[list] = None):
        self.record_type = record_type
        self.errors = errors or []
        self.message = f"Invalid {record_type}: {message}"
        super().__init__(self.message)


class InvalidRuleError(InvalidRecordError):
    """Raised for a malformed commission rule."""

    def __init__(self, message: str, errors: Optional[list] = None):
        super().__init__("rule", message, errors)


class InvalidConditionError(InvalidRecordError):
    """Raised for a malformed rule condition or split condition."""

    def __init__(self, message: str, errors: Optional[list] = None):
        super().__init__("condition", message, errors)


class InvalidTotalError(InvalidRecordError):
    """Raised for a malformed order total line."""

    def __init__(self, message: str, errors: Optional[list] = None):
        super().__init__("total", message, errors)


class CalculatorConfigurationError(CommissionError):
    """Raised when calculate() runs before the calculator is fully configured."""


def to_decimal(value: Any) -> Any:
    """Convert floats through their string form so 19.99 stays 19.99."""
    if isinstance(value, float):
        return Decimal(str(value))
    return value


def describe_validation_error(exc: ValidationError) -> str:
    """Flatten a pydantic ValidationError into a single readable line."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "record"
        parts.append(f"{location}: {error.get('msg')}")
    return "; ".join(parts)


class CommissionModel(BaseModel):
    """Base class for all commission records."""

    model_config = ConfigDict(
        from_attributes=True,
        frozen=True,
        populate_by_name=True,
    )

    error_class: ClassVar[Type[InvalidRecordError]] = InvalidRecordError

    @classmethod
    def coerce(cls, data: Any):
        """Validate a raw record (mapping or attribute object) into this model."""
        if isinstance(data, cls):
            return data
        try:
            if isinstance(data, (Mapping, BaseModel)):
                payload = data.model_dump() if isinstance(data, BaseModel) else dict(data)
                return cls.model_validate(payload)
            return cls.model_validate(data, from_attributes=True)
        except ValidationError as exc:
            raise cls.error_for(exc) from exc

    @classmethod
    def error_for(cls, exc: ValidationError) -> InvalidRecordError:
        return cls.error_class(describe_validation_error(exc), exc.errors())
