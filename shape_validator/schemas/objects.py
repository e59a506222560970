"""
Object (keyed mapping) schema implementation.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Dict, Mapping as MappingType

from .base import CompositeSchema, Schema
from ..api import ErrorCode, ValidationErrors
from ..utils import Path, TypeUtils

# Field name -> schema
Shape = Dict[str, Schema]


class KeyedSchema(CompositeSchema, ABC):
    """
    Shared algorithm of schemas whose value is a set of named fields.

    Every field of the shape is validated; a missing field is validated
    as None, so a missing key and a key holding None fail the same way.
    In strict mode every key not in the shape is reported.
    """

    # Noun used in the unrecognized key message
    key_kind = "key"

    def __init__(self, shape: MappingType[str, Schema]):
        """
        Initialize a new keyed schema.

        Args:
            shape: Schema for each field name
        """
        super().__init__()
        if not isinstance(shape, Mapping):
            raise TypeError(f"Shape must be a mapping, got {type(shape).__name__}")
        self.shape: Shape = {
            str(name): self._check_child(schema, f"Schema for '{name}'")
            for name, schema in shape.items()
        }
        self._strict = False

    def strict(self):
        """Reject keys that are not part of the shape."""
        self._strict = True
        return self

    @property
    def is_strict(self) -> bool:
        return self._strict

    @abstractmethod
    def _fields(self, value: Any) -> Dict[str, Any]:
        """
        Get the fields present in a value, keyed by external name.

        Args:
            value: Value of the correct type

        Returns:
            Mapping of field name to field value
        """
        pass

    def _validate_type_specific(self, value: Any, path: Path, errors: ValidationErrors) -> None:
        fields = self._fields(value)

        if self.shape and self._depth_exceeded(path, errors):
            return

        for name, schema in self.shape.items():
            self._validate_child(schema, fields.get(name), path.append(name), errors)

        if self._strict:
            for name in fields:
                if name not in self.shape:
                    key_path = path.append(name)
                    self.add_error(errors, key_path, ErrorCode.UNRECOGNIZED_KEYS,
                                   f"Unrecognized {self.key_kind} '{name}'")

    def __str__(self) -> str:
        parts = [f"shape={list(self.shape.keys())}"]
        if self._strict:
            parts.append("strict")
        if self._nilable:
            parts.append("nilable")

        return f"{self.__class__.__name__}({', '.join(parts)})"


class MapSchema(KeyedSchema):
    """
    Schema for validating dynamic mappings such as decoded JSON objects.

    Keys are compared by their string form. Records (dataclass instances)
    are rejected; use RecordSchema for them.
    """

    def type_name(self) -> str:
        return "object"

    def _accepts(self, value: Any) -> bool:
        return isinstance(value, Mapping)

    def _type_error_message(self, value: Any) -> str:
        return f"Expected map, got {TypeUtils.get_type_name(value)}"

    def _fields(self, value: Any) -> Dict[str, Any]:
        return {str(key): item for key, item in value.items()}


def Map(shape: MappingType[str, Schema]) -> MapSchema:
    """Create a new object/map schema."""
    return MapSchema(shape)
