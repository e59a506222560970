"""
String schema implementation.
"""

import re
from typing import Any, List, Optional, Pattern

from .base import TypeSchema
from ..api import ErrorCode, ValidationErrors
from ..utils import Path, TypeUtils

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}\Z")
URL_PATTERN = re.compile(r"^https?://[^\s/$.?#].[^\s]*\Z")


class StringSchema(TypeSchema):
    """
    Schema for validating string values.
    """

    def __init__(self):
        super().__init__()
        self._min_length: Optional[int] = None
        self._max_length: Optional[int] = None
        self._email = False
        self._url = False
        self._regex: Optional[Pattern] = None
        self._regex_message: Optional[str] = None
        self._one_of: List[str] = []
        self._not_one_of: List[str] = []
        self._starts_with: Optional[str] = None
        self._ends_with: Optional[str] = None
        self._includes: Optional[str] = None

    def min(self, length: int) -> "StringSchema":
        self._min_length = length
        return self

    def max(self, length: int) -> "StringSchema":
        self._max_length = length
        return self

    def email(self) -> "StringSchema":
        self._email = True
        return self

    def url(self) -> "StringSchema":
        """Require an http(s) URL."""
        self._url = True
        return self

    def regex(self, pattern: str, message: Optional[str] = None) -> "StringSchema":
        """
        Require the string to match a regular expression.

        The pattern is searched for, so it must carry its own anchors to
        match the whole string.

        Args:
            pattern: Regular expression
            message: Message used verbatim when the string does not match

        Raises:
            ValueError: If the pattern does not compile
        """
        try:
            self._regex = re.compile(pattern)
        except re.error as e:
            raise ValueError(f"invalid regex pattern: {e}") from e
        self._regex_message = message
        return self

    def one_of(self, *options: str) -> "StringSchema":
        self._one_of = list(options)
        return self

    def not_one_of(self, *options: str) -> "StringSchema":
        self._not_one_of = list(options)
        return self

    def starts_with(self, prefix: str) -> "StringSchema":
        self._starts_with = prefix
        return self

    def ends_with(self, suffix: str) -> "StringSchema":
        self._ends_with = suffix
        return self

    def includes(self, substring: str) -> "StringSchema":
        self._includes = substring
        return self

    def type_name(self) -> str:
        return "string"

    def _accepts(self, value: Any) -> bool:
        return isinstance(value, str)

    def _type_error_message(self, value: Any) -> str:
        return f"Expected string, got {TypeUtils.get_type_name(value)}"

    def _validate_type_specific(self, value: Any, path: Path, errors: ValidationErrors) -> None:
        length = len(value)

        if self._min_length is not None and length < self._min_length:
            self.add_error(errors, path, ErrorCode.TOO_SMALL,
                           f"String must be at least {self._min_length} character(s) long, got {length}")

        if self._max_length is not None and length > self._max_length:
            self.add_error(errors, path, ErrorCode.TOO_BIG,
                           f"String must be at most {self._max_length} character(s) long, got {length}")

        if self._email and not EMAIL_PATTERN.search(value):
            self.add_error(errors, path, ErrorCode.INVALID_STRING, "Invalid email format")

        if self._url and not URL_PATTERN.search(value):
            self.add_error(errors, path, ErrorCode.INVALID_STRING, "Invalid URL format")

        if self._regex is not None and not self._regex.search(value):
            if self._regex_message:
                errors.add(path, ErrorCode.INVALID_STRING, self._regex_message)
            else:
                self.add_error(errors, path, ErrorCode.INVALID_STRING,
                               "String does not match required pattern")

        if self._one_of and value not in self._one_of:
            self.add_error(errors, path, ErrorCode.INVALID_ENUM_VALUE,
                           f"String must be one of: {', '.join(self._one_of)}")

        if self._not_one_of and value in self._not_one_of:
            self.add_error(errors, path, ErrorCode.INVALID_ENUM_VALUE,
                           f"String must not be one of: {', '.join(self._not_one_of)}")

        if self._starts_with is not None and not value.startswith(self._starts_with):
            self.add_error(errors, path, ErrorCode.INVALID_STRING,
                           f"String must start with '{self._starts_with}'")

        if self._ends_with is not None and not value.endswith(self._ends_with):
            self.add_error(errors, path, ErrorCode.INVALID_STRING,
                           f"String must end with '{self._ends_with}'")

        if self._includes is not None and self._includes not in value:
            self.add_error(errors, path, ErrorCode.INVALID_STRING,
                           f"String must include '{self._includes}'")

    def __str__(self) -> str:
        parts = []
        if self._min_length is not None:
            parts.append(f"min={self._min_length}")
        if self._max_length is not None:
            parts.append(f"max={self._max_length}")
        if self._email:
            parts.append("email")
        if self._url:
            parts.append("url")
        if self._regex is not None:
            parts.append(f"regex={self._regex.pattern}")
        if self._nilable:
            parts.append("nilable")

        return f"StringSchema({', '.join(parts)})"


def String() -> StringSchema:
    """Create a new string schema."""
    return StringSchema()
