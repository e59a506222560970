"""
Integer and float schema implementations.
"""

import math
from typing import Any, Optional, Union

from .base import TypeSchema
from ..api import ErrorCode, ValidationErrors
from ..utils import Path, TypeUtils

Number = Union[int, float]

# value / divisor may miss a whole number by this much and still count
FLOAT_MULTIPLE_TOLERANCE = 1e-4


class NumberSchema(TypeSchema):
    """
    Schema for validating numeric values.

    Integers and floats are never interchangeable: an integer schema
    rejects floats and a float schema rejects integers.
    """

    def __init__(self, integer_only: bool = False):
        """
        Initialize a new number schema.

        Args:
            integer_only: Whether the schema validates ints instead of floats
        """
        super().__init__()
        self.integer_only = integer_only
        self._minimum: Optional[Number] = None
        self._maximum: Optional[Number] = None
        self._positive = False
        self._negative = False
        self._non_negative = False
        self._non_positive = False
        self._multiple_of: Optional[Number] = None

    def min(self, value: Number):
        self._minimum = value
        return self

    def max(self, value: Number):
        self._maximum = value
        return self

    def positive(self):
        """Require a value > 0."""
        self._positive = True
        return self

    def negative(self):
        """Require a value < 0."""
        self._negative = True
        return self

    def non_negative(self):
        """Require a value >= 0."""
        self._non_negative = True
        return self

    def non_positive(self):
        """Require a value <= 0."""
        self._non_positive = True
        return self

    def multiple_of(self, value: Number):
        """
        Require the value to be a multiple of the given number.

        Raises:
            ValueError: If the divisor is zero
        """
        if value == 0:
            raise ValueError("multiple_of divisor must not be zero")
        self._multiple_of = value
        return self

    def type_name(self) -> str:
        return "integer" if self.integer_only else "float"

    def _accepts(self, value: Any) -> bool:
        if self.integer_only:
            return TypeUtils.is_integer(value)
        return TypeUtils.is_float(value)

    def _type_error_message(self, value: Any) -> str:
        expected = "integer" if self.integer_only else "float"
        if TypeUtils.is_integer(value):
            return f"Expected {expected}, got integer"
        if TypeUtils.is_float(value):
            return f"Expected {expected}, got float"
        return f"Expected {expected}, got {TypeUtils.get_type_name(value)}"

    def _is_multiple(self, value: Number) -> bool:
        if self.integer_only and isinstance(self._multiple_of, int):
            return value % self._multiple_of == 0
        try:
            quotient = value / self._multiple_of
        except OverflowError:
            return False
        if not math.isfinite(quotient):
            return False
        fraction = abs(quotient - math.trunc(quotient))
        return fraction <= FLOAT_MULTIPLE_TOLERANCE or fraction >= 1 - FLOAT_MULTIPLE_TOLERANCE

    def _validate_type_specific(self, value: Any, path: Path, errors: ValidationErrors) -> None:
        if self._minimum is not None and value < self._minimum:
            self.add_error(errors, path, ErrorCode.TOO_SMALL,
                           f"Number must be greater than or equal to {self._minimum}, got {value}")

        if self._maximum is not None and value > self._maximum:
            self.add_error(errors, path, ErrorCode.TOO_BIG,
                           f"Number must be less than or equal to {self._maximum}, got {value}")

        if self._positive and value <= 0:
            self.add_error(errors, path, ErrorCode.TOO_SMALL,
                           f"Number must be positive (> 0), got {value}")

        if self._negative and value >= 0:
            self.add_error(errors, path, ErrorCode.TOO_BIG,
                           f"Number must be negative (< 0), got {value}")

        if self._non_negative and value < 0:
            self.add_error(errors, path, ErrorCode.TOO_SMALL,
                           f"Number must be non-negative (>= 0), got {value}")

        if self._non_positive and value > 0:
            self.add_error(errors, path, ErrorCode.TOO_BIG,
                           f"Number must be non-positive (<= 0), got {value}")

        # Reported as invalid_type
        if self._multiple_of is not None and not self._is_multiple(value):
            self.add_error(errors, path, ErrorCode.INVALID_TYPE,
                           f"Number must be a multiple of {self._multiple_of}, got {value}")

    def __str__(self) -> str:
        parts = []
        if self._minimum is not None:
            parts.append(f"min={self._minimum}")
        if self._maximum is not None:
            parts.append(f"max={self._maximum}")
        if self._multiple_of is not None:
            parts.append(f"multiple_of={self._multiple_of}")
        if self._nilable:
            parts.append("nilable")

        return f"{self.__class__.__name__}({', '.join(parts)})"


class IntSchema(NumberSchema):
    """Schema for int values (bool is not an int here)."""

    def __init__(self):
        super().__init__(integer_only=True)


class FloatSchema(NumberSchema):
    """Schema for float values."""

    def __init__(self):
        super().__init__(integer_only=False)


def Int() -> IntSchema:
    """Create a new integer schema."""
    return IntSchema()


def Float() -> FloatSchema:
    """Create a new float schema."""
    return FloatSchema()
