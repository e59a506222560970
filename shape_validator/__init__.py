#!/usr/bin/env python3
"""
Shape Validator

This package validates decoded data (scalars, lists and mappings, or
dataclass records) against schemas composed from chained constraints, and
reports failures with the path of every offending value.
"""

import logging

from .api import ErrorCode, ValidationError, ValidationErrors, FlattenedErrors
from .schemas import (
    Schema,
    RefinementContext,
    StringSchema,
    IntSchema,
    FloatSchema,
    BoolSchema,
    ArraySchema,
    MapSchema,
    RecordSchema,
    String,
    Int,
    Float,
    Bool,
    Array,
    Map,
    Record,
    Shape,
    default_field_name,
)
from .utils import Path, JsonPointer
from .validator import Validator, validate, describe_type
from .version import __version__

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s: %(message)s",
)
logger = logging.getLogger("shape_validator")

# Export public classes and functions
__all__ = [
    "ErrorCode",
    "ValidationError",
    "ValidationErrors",
    "FlattenedErrors",
    "Schema",
    "RefinementContext",
    "StringSchema",
    "IntSchema",
    "FloatSchema",
    "BoolSchema",
    "ArraySchema",
    "MapSchema",
    "RecordSchema",
    "String",
    "Int",
    "Float",
    "Bool",
    "Array",
    "Map",
    "Record",
    "Shape",
    "default_field_name",
    "Path",
    "JsonPointer",
    "Validator",
    "validate",
    "describe_type",
]
