"""
Base schema classes for the shape validator.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from ..api import Code, ErrorCode, ValidationErrors, code_value
from ..utils import Path

# (path, code, default_message) -> message
ErrorFormatter = Callable[[Path, str, str], str]

# value -> (passed, message) or value -> passed
RefineFunc = Callable[[Any], Union[bool, Tuple[bool, str]]]

# (value, context) -> None
SuperRefineFunc = Callable[[Any, "RefinementContext"], None]

# Composites stop descending once a path is this long
MAX_DEPTH = 100


class RefinementContext:
    """
    Issue sink handed to a super refinement.

    It is bound to the path of the schema node that owns the refinement;
    every issue path is relative to that base path. A context lives for a
    single refinement call.
    """

    def __init__(self, errors: ValidationErrors, base_path: Path, schema: "BaseSchema"):
        """
        Initialize a new refinement context.

        Args:
            errors: Collection the issues are appended to
            base_path: Path of the value being refined
            schema: Schema owning the refinement, used to resolve missing messages
        """
        self._errors = errors
        self._schema = schema
        self.base_path = base_path

    def add_issue(self, path: Any, code: Code, message: Optional[str] = None) -> None:
        """
        Add a validation error at a path relative to the refined value.

        Args:
            path: Relative path: a segment, a sequence of segments, or () for the value itself
            code: Built-in or caller-defined error code
            message: Error message; resolved through the schema's messages if omitted
        """
        self.add_issue_with_meta(path, code, message, None)

    def add_issue_with_meta(self,
                            path: Any,
                            code: Code,
                            message: Optional[str],
                            meta: Optional[Dict[str, Any]]) -> None:
        """
        Add a validation error carrying metadata.

        Args:
            path: Relative path of the issue
            code: Built-in or caller-defined error code
            message: Error message; resolved through the schema's messages if omitted
            meta: Additional details for API consumers
        """
        full_path = self.base_path.extend(Path.coerce(path))
        if not message:
            message = self._schema.get_error_message(full_path, code, "Invalid input")
        self._errors.add_with_meta(full_path, code, message, meta)


class Schema(ABC):
    """
    Base class for all schemas.

    This is the capability every schema kind implements, so that composite
    schemas can hold any kind of child schema.
    """

    @abstractmethod
    def validate(self, value: Any, path: Any = ()) -> Optional[ValidationErrors]:
        """
        Validate a value against this schema.

        Args:
            value: Value to validate; None means "no value"
            path: Location of the value, empty at the top level

        Returns:
            None if the value is valid, otherwise a non-empty ValidationErrors
        """
        pass

    @abstractmethod
    def type_name(self) -> str:
        """
        Get the short name of this schema kind.

        Returns:
            Name such as "string" or "array"
        """
        pass

    def __str__(self) -> str:
        return f"{self.__class__.__name__}"

    def __repr__(self) -> str:
        return self.__str__()


class BaseSchema(Schema, ABC):
    """
    Common state of all built-in schemas: nilability, message overrides,
    message formatter and both kinds of refinements.

    Builder methods mutate the schema and return it so calls can be chained.
    A schema must not be changed once it is used for validation.
    """

    def __init__(self):
        self._nilable = False
        self._custom_errors: Dict[str, str] = {}
        self._error_formatter: Optional[ErrorFormatter] = None
        self._refinements: List[RefineFunc] = []
        self._super_refinements: List[SuperRefineFunc] = []

    def nilable(self):
        """Accept None as a valid value, skipping every other check."""
        self._nilable = True
        return self

    @property
    def is_nilable(self) -> bool:
        return self._nilable

    def custom_error(self, code: Code, message: str):
        """
        Replace the default message for an error code.

        Args:
            code: Error code the message applies to
            message: Message to use instead of the default
        """
        self._custom_errors[code_value(code)] = message
        return self

    def set_error_formatter(self, formatter: ErrorFormatter):
        """
        Set a function producing every message of this schema.

        The formatter receives (path, code, default_message) and takes
        precedence over messages set with custom_error().
        """
        if not callable(formatter):
            raise TypeError("Error formatter must be callable")
        self._error_formatter = formatter
        return self

    def refine(self, validator: RefineFunc):
        """
        Add a custom validation function.

        The function receives the value and returns (is_valid, message) or
        just is_valid. On failure a custom_validation error is added, using
        the returned message if it is not empty.
        """
        if not callable(validator):
            raise TypeError("Refinement must be callable")
        self._refinements.append(validator)
        return self

    def super_refine(self, validator: SuperRefineFunc):
        """
        Add a super refinement.

        The function receives the value and a RefinementContext and may add
        any number of errors, at any path below the value, with any code.
        """
        if not callable(validator):
            raise TypeError("Super refinement must be callable")
        self._super_refinements.append(validator)
        return self

    def get_error_message(self, path: Path, code: Code, default_message: str) -> str:
        """
        Resolve the message for an error.

        Args:
            path: Path of the failing value
            code: Error code
            default_message: Built-in message

        Returns:
            Formatter output, else the override for the code, else the default
        """
        if self._error_formatter is not None:
            return self._error_formatter(path, code_value(code), default_message)
        return self._custom_errors.get(code_value(code), default_message)

    def add_error(self, errors: ValidationErrors, path: Path, code: Code, default_message: str) -> None:
        errors.add(path, code, self.get_error_message(path, code, default_message))

    def _apply_refinements(self, value: Any, path: Path, errors: ValidationErrors) -> None:
        for refine in self._refinements:
            outcome = refine(value)
            if isinstance(outcome, tuple):
                valid, message = outcome
            else:
                valid, message = outcome, ""
            if not valid:
                if not message:
                    message = self.get_error_message(
                        path, ErrorCode.CUSTOM_VALIDATION, "Custom validation failed")
                errors.add(path, ErrorCode.CUSTOM_VALIDATION, message)

    def _apply_super_refinements(self, value: Any, path: Path, errors: ValidationErrors) -> None:
        for super_refine in self._super_refinements:
            super_refine(value, RefinementContext(errors, path, self))


class TypeSchema(BaseSchema, ABC):
    """
    Base class for schemas of a specific kind of value.

    Validation runs in a fixed order: absence, type check (stops on
    mismatch), type-specific constraints, refinements, super refinements.
    """

    def validate(self, value: Any, path: Any = ()) -> Optional[ValidationErrors]:
        path = Path.coerce(path)
        errors = ValidationErrors()

        if value is None:
            if self._nilable:
                return None
            self.add_error(errors, path, ErrorCode.REQUIRED, "Required")
            return errors

        if not self._validate_type(value, path, errors):
            return errors

        self._validate_type_specific(value, path, errors)

        self._apply_refinements(value, path, errors)
        self._apply_super_refinements(value, path, errors)

        return errors.or_none()

    def _validate_type(self, value: Any, path: Path, errors: ValidationErrors) -> bool:
        """
        Check that the value has the kind this schema expects.

        Args:
            value: Value to check (never None)
            path: Path of the value
            errors: Collection for the invalid_type error

        Returns:
            True if the value has the correct type
        """
        if self._accepts(value):
            return True
        self.add_error(errors, path, ErrorCode.INVALID_TYPE, self._type_error_message(value))
        return False

    @abstractmethod
    def _accepts(self, value: Any) -> bool:
        pass

    @abstractmethod
    def _type_error_message(self, value: Any) -> str:
        pass

    @abstractmethod
    def _validate_type_specific(self, value: Any, path: Path, errors: ValidationErrors) -> None:
        """
        Validate type-specific constraints.

        Every constraint runs, whether or not an earlier one failed.

        Args:
            value: Value to validate (guaranteed to be of the correct type)
            path: Path of the value
            errors: Collection the failures are added to
        """
        pass


class CompositeSchema(TypeSchema, ABC):
    """Base class for schemas with child schemas."""

    @staticmethod
    def _check_child(child: Any, where: str) -> Schema:
        if not isinstance(child, Schema):
            raise TypeError(f"{where} must be a Schema, got {type(child).__name__}")
        return child

    def _depth_exceeded(self, path: Path, errors: ValidationErrors) -> bool:
        """
        Report a too_big error instead of descending past MAX_DEPTH.

        Returns:
            True if the children of this node must not be validated
        """
        if len(path) < MAX_DEPTH:
            return False
        message = self.get_error_message(
            path, ErrorCode.TOO_BIG, f"Maximum nesting depth of {MAX_DEPTH} exceeded")
        errors.add_with_meta(path, ErrorCode.TOO_BIG, message, {"max_depth": MAX_DEPTH})
        return True

    @staticmethod
    def _validate_child(schema: Schema, value: Any, path: Path, errors: ValidationErrors) -> None:
        errors.extend(schema.validate(value, path))
