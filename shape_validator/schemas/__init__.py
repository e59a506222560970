"""
Schema package initialization.
"""

from .base import (
    MAX_DEPTH,
    BaseSchema,
    CompositeSchema,
    RefinementContext,
    Schema,
    TypeSchema,
)
from .strings import StringSchema, String
from .numbers import FLOAT_MULTIPLE_TOLERANCE, NumberSchema, IntSchema, FloatSchema, Int, Float
from .booleans import BoolSchema, Bool
from .arrays import ArraySchema, Array
from .objects import KeyedSchema, MapSchema, Map, Shape
from .records import RecordSchema, Record, default_field_name, is_empty_value

__all__ = [
    "MAX_DEPTH",
    "FLOAT_MULTIPLE_TOLERANCE",
    "Schema",
    "BaseSchema",
    "TypeSchema",
    "CompositeSchema",
    "RefinementContext",
    "StringSchema",
    "NumberSchema",
    "IntSchema",
    "FloatSchema",
    "BoolSchema",
    "ArraySchema",
    "KeyedSchema",
    "MapSchema",
    "RecordSchema",
    "Shape",
    "String",
    "Int",
    "Float",
    "Bool",
    "Array",
    "Map",
    "Record",
    "default_field_name",
    "is_empty_value",
]
