"""
Boolean schema implementation.
"""

from typing import Any

from .base import TypeSchema
from ..api import ValidationErrors
from ..utils import Path, TypeUtils


class BoolSchema(TypeSchema):
    """
    Schema for validating boolean values.
    """

    def type_name(self) -> str:
        return "boolean"

    def _accepts(self, value: Any) -> bool:
        return isinstance(value, bool)

    def _type_error_message(self, value: Any) -> str:
        return f"Expected boolean, got {TypeUtils.get_type_name(value)}"

    def _validate_type_specific(self, value: Any, path: Path, errors: ValidationErrors) -> None:
        # No additional constraints for booleans
        pass

    def __str__(self) -> str:
        return "BoolSchema(nilable)" if self._nilable else "BoolSchema()"


def Bool() -> BoolSchema:
    """Create a new boolean schema."""
    return BoolSchema()
