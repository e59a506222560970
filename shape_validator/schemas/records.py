"""
Record schema implementation.

A record is a dataclass instance. Its members are looked up by external
name, which a naming policy derives from the member name and the member's
dataclass metadata:

    @dataclass
    class User:
        full_name: str = field(metadata={"name": "name"})
        email: str = field(default="", metadata={"omitempty": True})
"""

import dataclasses
from typing import Any, Callable, Dict, Mapping, Optional

from .base import Schema
from .objects import KeyedSchema
from ..utils import TypeUtils

# (member_name, metadata) -> external name
NamingPolicy = Callable[[str, Mapping[str, Any]], str]

NAME_KEY = "name"
OMITEMPTY_KEY = "omitempty"


def default_field_name(member_name: str, metadata: Mapping[str, Any]) -> str:
    """
    Resolve the external name of a record member.

    An explicit "name" in the metadata wins ("-" counts as absent);
    otherwise the member name is used with its first letter lower-cased.

    Args:
        member_name: Attribute name of the member
        metadata: Dataclass field metadata

    Returns:
        External field name
    """
    name = metadata.get(NAME_KEY)
    if name and name != "-":
        return name
    return member_name[:1].lower() + member_name[1:]


def is_empty_value(value: Any) -> bool:
    """
    Check whether a value is the zero value of its type.

    Args:
        value: Member value

    Returns:
        True for None, empty strings and containers, 0, 0.0 and False
    """
    if value is None:
        return True
    if isinstance(value, (str, bytes, list, tuple, dict, set, frozenset)):
        return len(value) == 0
    if isinstance(value, (bool, int, float)):
        return value == 0
    return False


class RecordSchema(KeyedSchema):
    """
    Schema for validating dataclass instances.
    """

    key_kind = "field"

    def __init__(self, shape: Mapping[str, Schema], naming: Optional[NamingPolicy] = None):
        """
        Initialize a new record schema.

        Args:
            shape: Schema for each external field name
            naming: Policy resolving external names, default_field_name if None
        """
        super().__init__(shape)
        self._naming: NamingPolicy = naming or default_field_name

    def naming(self, policy: NamingPolicy) -> "RecordSchema":
        """Replace the policy that derives external field names."""
        if not callable(policy):
            raise TypeError("Naming policy must be callable")
        self._naming = policy
        return self

    def type_name(self) -> str:
        return "struct"

    def _accepts(self, value: Any) -> bool:
        return dataclasses.is_dataclass(value) and not isinstance(value, type)

    def _type_error_message(self, value: Any) -> str:
        return f"Expected struct, got {TypeUtils.get_type_name(value)}"

    def _fields(self, value: Any) -> Dict[str, Any]:
        fields: Dict[str, Any] = {}
        for member in dataclasses.fields(value):
            if member.name.startswith("_"):
                continue
            name = self._naming(member.name, member.metadata)
            member_value = getattr(value, member.name, None)
            if member.metadata.get(OMITEMPTY_KEY) and is_empty_value(member_value):
                member_value = None
            fields[name] = member_value
        return fields


def Record(shape: Mapping[str, Schema], naming: Optional[NamingPolicy] = None) -> RecordSchema:
    """Create a new record schema."""
    return RecordSchema(shape, naming)
