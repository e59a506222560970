"""
Validator entry points.
"""

import logging
from typing import Any, Optional

from .api import ValidationErrors
from .schemas import Schema
from .utils import Path

logger = logging.getLogger("shape_validator")


class Validator:
    """
    Validates values against schemas.

    This class is a thin entry point over Schema.validate() that checks its
    arguments and logs each validation when verbose.
    """

    def __init__(self, verbose: bool = False):
        """
        Initialize a new validator.

        Args:
            verbose: Whether to log every validation at debug level
        """
        self.verbose = verbose

        if verbose:
            logger.setLevel(logging.DEBUG)

    def validate(self, value: Any, schema: Schema, path: Any = ()) -> Optional[ValidationErrors]:
        """
        Validate a value against a schema.

        Args:
            value: Already-decoded value to validate
            schema: Schema to validate against
            path: Path of the value when validating part of a larger document

        Returns:
            None if the value is valid, otherwise the errors found
        """
        if not isinstance(schema, Schema):
            raise TypeError(f"Expected a Schema, got {type(schema).__name__}")

        path = Path.coerce(path)
        if self.verbose:
            logger.debug(f"Validating against {schema} at '{path}'")

        errors = schema.validate(value, path)

        if self.verbose:
            if errors is None:
                logger.debug("Validation successful")
            else:
                logger.debug(f"Validation failed with {len(errors)} error(s)")
                for error in errors:
                    logger.debug(f"  - {error}")
        return errors

    def describe_type(self, schema: Schema) -> str:
        """
        Get the short type name of a schema.

        Args:
            schema: Schema to describe

        Returns:
            Name such as "string", "integer", "array", "object"
        """
        return schema.type_name()


_default_validator = Validator()


def validate(schema: Schema, value: Any, path: Any = ()) -> Optional[ValidationErrors]:
    """Validate a value against a schema; None means valid."""
    return _default_validator.validate(value, schema, path)


def describe_type(schema: Schema) -> str:
    return _default_validator.describe_type(schema)
