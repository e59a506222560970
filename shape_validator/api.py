"""
Public API types for the shape validator: error codes, validation errors
and the error collection with its formatting helpers.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Union

from .utils import Path


class ErrorCode(str, Enum):
    """Enumeration of built-in validation error codes."""
    REQUIRED = "required"
    INVALID_TYPE = "invalid_type"
    TOO_SMALL = "too_small"
    TOO_BIG = "too_big"
    INVALID_STRING = "invalid_string"
    INVALID_ENUM_VALUE = "invalid_enum_value"
    UNRECOGNIZED_KEYS = "unrecognized_keys"
    CUSTOM_VALIDATION = "custom_validation"

    def __str__(self) -> str:
        return self.value


# Super refinements may use any string as a code
Code = Union[ErrorCode, str]


def code_value(code: Code) -> str:
    """Plain string form of an error code."""
    return code.value if isinstance(code, ErrorCode) else str(code)


@dataclass(frozen=True)
class ValidationError:
    """
    Represents a single validation failure.

    Attributes:
        path: Location of the value that failed validation
        code: The error code identifying the type of error
        message: Human-readable error message
        meta: Optional additional details supplied by a super refinement
    """
    path: Path
    code: Code
    message: str
    meta: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "path": list(self.path),
            "code": code_value(self.code),
            "message": self.message,
        }
        if self.meta:
            data["meta"] = dict(self.meta)
        return data

    def __str__(self) -> str:
        return f"Error at '{self.path}': {self.message}"


@dataclass
class FlattenedErrors:
    """
    Errors split into form-level and field-level messages.

    Attributes:
        form_errors: Messages of errors with an empty path
        field_errors: Messages grouped by field; array elements are grouped
            under their array field ("tags[0]" and "tags[1]" both go to "tags")
    """
    form_errors: List[str] = field(default_factory=list)
    field_errors: Dict[str, List[str]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "formErrors": list(self.form_errors),
            "fieldErrors": {key: list(messages) for key, messages in self.field_errors.items()},
        }


class ValidationErrors:
    """
    Ordered collection of validation errors.

    Errors are kept in discovery order. Validation never hands an empty
    collection back to the caller: a successful validation returns None.
    """

    def __init__(self, errors: Optional[List[ValidationError]] = None):
        self.errors: List[ValidationError] = list(errors or [])

    def add(self, path: Any, code: Code, message: str) -> None:
        """
        Add a new validation error.

        Args:
            path: Path of the failing value
            code: Error code
            message: Error message
        """
        self.add_with_meta(path, code, message, None)

    def add_with_meta(self,
                      path: Any,
                      code: Code,
                      message: str,
                      meta: Optional[Dict[str, Any]]) -> None:
        """
        Add a new validation error carrying metadata.

        Args:
            path: Path of the failing value
            code: Error code
            message: Error message
            meta: Additional details, or None
        """
        self.errors.append(ValidationError(
            path=Path.coerce(path),
            code=code,
            message=message,
            meta=dict(meta) if meta else None,
        ))

    def extend(self, other: Optional["ValidationErrors"]) -> None:
        """Append all errors of another collection, keeping their order."""
        if other is not None:
            self.errors.extend(other.errors)

    def or_none(self) -> Optional["ValidationErrors"]:
        """Return self, or None when the collection is empty."""
        return self if self.errors else None

    def __len__(self) -> int:
        return len(self.errors)

    def __iter__(self) -> Iterator[ValidationError]:
        return iter(self.errors)

    def __getitem__(self, index: int) -> ValidationError:
        return self.errors[index]

    def __bool__(self) -> bool:
        return bool(self.errors)

    def __str__(self) -> str:
        return "; ".join(error.message for error in self.errors)

    def __repr__(self) -> str:
        return f"ValidationErrors({len(self.errors)} error(s))"

    def format_errors(self) -> str:
        """
        Format all errors as a numbered, human-readable report.

        Returns:
            Multi-line report, or an empty string if there are no errors
        """
        if not self.errors:
            return ""

        lines = [f"Validation failed with {len(self.errors)} error(s):"]
        for i, error in enumerate(self.errors, start=1):
            lines.append(f"  {i}. [{error.path}] {error.message}")
        return "\n".join(lines) + "\n"

    def to_dict(self) -> Optional[Dict[str, Any]]:
        """
        Structured form of the errors, suitable for API responses.

        Returns:
            {"errors": [...], "count": n}, or None if there are no errors
        """
        if not self.errors:
            return None

        return {
            "errors": [error.to_dict() for error in self.errors],
            "count": len(self.errors),
        }

    def to_json(self, indent: Optional[int] = None) -> str:
        """Serialize to_dict() as JSON ("null" when empty)."""
        return json.dumps(self.to_dict(), indent=indent, default=str)

    def errors_by_path(self, path: Any) -> List[ValidationError]:
        """All errors whose path equals the given path exactly."""
        path = Path.coerce(path)
        return [error for error in self.errors if error.path == path]

    def errors_by_code(self, code: Code) -> List[ValidationError]:
        """All errors with the given code."""
        wanted = code_value(code)
        return [error for error in self.errors if code_value(error.code) == wanted]

    def group_by_path(self) -> Dict[Path, List[ValidationError]]:
        groups: Dict[Path, List[ValidationError]] = {}
        for error in self.errors:
            groups.setdefault(error.path, []).append(error)
        return groups

    def group_by_code(self) -> Dict[str, List[ValidationError]]:
        groups: Dict[str, List[ValidationError]] = {}
        for error in self.errors:
            groups.setdefault(code_value(error.code), []).append(error)
        return groups

    def flatten(self) -> FlattenedErrors:
        """
        Split errors into form errors and field errors.

        Errors with an empty path are form errors. All others are grouped by
        their rendered path, with array indices folded into the field that
        holds the array.

        Returns:
            FlattenedErrors
        """
        result = FlattenedErrors()
        for error in self.errors:
            if not error.path:
                result.form_errors.append(error.message)
            else:
                key = error.path.base_field()
                result.field_errors.setdefault(key, []).append(error.message)
        return result
