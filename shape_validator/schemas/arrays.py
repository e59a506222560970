"""
Array schema implementation.
"""

from typing import Any, Optional

from .base import CompositeSchema, Schema
from ..api import ErrorCode, ValidationErrors
from ..utils import Path, TypeUtils


class ArraySchema(CompositeSchema):
    """
    Schema for validating ordered sequences (list or tuple) whose elements
    all follow one element schema.
    """

    def __init__(self, element: Schema):
        """
        Initialize a new array schema.

        Args:
            element: Schema every element is validated against
        """
        super().__init__()
        self.element = self._check_child(element, "Array element schema")
        self._min_length: Optional[int] = None
        self._max_length: Optional[int] = None
        self._non_empty = False

    def min(self, length: int) -> "ArraySchema":
        self._min_length = length
        return self

    def max(self, length: int) -> "ArraySchema":
        self._max_length = length
        return self

    def non_empty(self) -> "ArraySchema":
        self._non_empty = True
        return self

    def type_name(self) -> str:
        return "array"

    def _accepts(self, value: Any) -> bool:
        return isinstance(value, (list, tuple))

    def _type_error_message(self, value: Any) -> str:
        return f"Expected array, got {TypeUtils.get_type_name(value)}"

    def _validate_type_specific(self, value: Any, path: Path, errors: ValidationErrors) -> None:
        length = len(value)

        if self._non_empty and length == 0:
            self.add_error(errors, path, ErrorCode.TOO_SMALL, "Array must not be empty")

        if self._min_length is not None and length < self._min_length:
            self.add_error(errors, path, ErrorCode.TOO_SMALL,
                           f"Array must have at least {self._min_length} element(s), got {length}")

        if self._max_length is not None and length > self._max_length:
            self.add_error(errors, path, ErrorCode.TOO_BIG,
                           f"Array must have at most {self._max_length} element(s), got {length}")

        if length and self._depth_exceeded(path, errors):
            return

        # Every element is validated, even after a failing one
        for i, item in enumerate(value):
            self._validate_child(self.element, item, path.append(i), errors)

    def __str__(self) -> str:
        parts = [f"element={self.element}"]
        if self._min_length is not None:
            parts.append(f"min={self._min_length}")
        if self._max_length is not None:
            parts.append(f"max={self._max_length}")
        if self._non_empty:
            parts.append("non_empty")

        return f"ArraySchema({', '.join(parts)})"


def Array(element: Schema) -> ArraySchema:
    """Create a new array schema."""
    return ArraySchema(element)
