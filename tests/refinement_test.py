#!/usr/bin/env python3
"""
Tests for refinements, super refinements and message customisation.
"""
import pytest

from shape_validator import Array, Bool, ErrorCode, Float, Int, Map, String


class TestRefine:
    """Tests for simple refinements."""

    def test_refine_with_message(self):
        """Test that the returned message is used as is."""
        schema = String().refine(lambda v: (v.islower(), "Must be lowercase"))

        assert schema.validate("abc") is None

        errors = schema.validate("ABC")
        assert len(errors) == 1
        assert errors[0].code == ErrorCode.CUSTOM_VALIDATION
        assert errors[0].message == "Must be lowercase"

    def test_refine_default_message(self):
        """Test the default message when none is returned."""
        errors = String().refine(lambda v: (False, "")).validate("x")
        assert errors[0].message == "Custom validation failed"

    def test_refine_returning_bool(self):
        """Test refinements that return a plain bool."""
        schema = Int().refine(lambda v: v % 2 == 0)

        assert schema.validate(4) is None
        assert schema.validate(5)[0].message == "Custom validation failed"

    def test_refinements_run_in_order(self):
        """Test that every refinement runs, in declaration order."""
        schema = (String()
                  .refine(lambda v: (False, "first"))
                  .refine(lambda v: (True, "never"))
                  .refine(lambda v: (False, "third")))

        errors = schema.validate("x")
        assert [e.message for e in errors] == ["first", "third"]

    def test_refine_runs_after_constraints(self):
        """Test ordering of constraint and refinement errors."""
        schema = String().min(5).refine(lambda v: (False, "refined"))

        errors = schema.validate("abc")
        assert [e.code for e in errors] == [ErrorCode.TOO_SMALL, ErrorCode.CUSTOM_VALIDATION]

    def test_refine_not_run_on_type_error(self):
        """Test that refinements never see values of the wrong type."""
        calls = []
        schema = String().refine(lambda v: calls.append(v) or True)

        schema.validate(42)
        schema.validate(None)
        assert calls == []

    def test_refine_not_run_for_nilable_none(self):
        calls = []
        schema = Int().nilable().refine(lambda v: calls.append(v) or True)

        assert schema.validate(None) is None
        assert calls == []

    def test_refine_message_beats_override(self):
        """Test that a refinement message wins over the override table."""
        schema = (String()
                  .custom_error(ErrorCode.CUSTOM_VALIDATION, "Overridden")
                  .refine(lambda v: (False, "From refinement"))
                  .refine(lambda v: (False, "")))

        errors = schema.validate("x")
        assert [e.message for e in errors] == ["From refinement", "Overridden"]

    def test_refine_on_array(self):
        """Test that array refinements see the whole array."""
        schema = Array(Int()).refine(lambda v: (len(set(v)) == len(v), "Items must be unique"))

        assert schema.validate([1, 2, 3]) is None

        errors = schema.validate([1, 1])
        assert errors[0].path == ()
        assert errors[0].message == "Items must be unique"

    def test_refinement_must_be_callable(self):
        with pytest.raises(TypeError):
            String().refine("not callable")
        with pytest.raises(TypeError):
            String().super_refine(None)


class TestSuperRefine:
    """Tests for super refinements."""

    def test_string_super_refine(self):
        """Test adding several issues at the value itself."""
        def check(value, ctx):
            if len(value) < 5:
                ctx.add_issue([], ErrorCode.TOO_SMALL, "String must be at least 5 characters")
            if value == "forbidden":
                ctx.add_issue([], ErrorCode.INVALID_STRING, "This value is forbidden")

        schema = String().super_refine(check)

        assert schema.validate("hello") is None

        errors = schema.validate("hi")
        assert errors[0].code == ErrorCode.TOO_SMALL

        errors = schema.validate("forbidden")
        assert len(errors) == 1
        assert errors[0].message == "This value is forbidden"

    def test_password_confirmation(self):
        """Test a cross-field check reported on one field."""
        def passwords_match(value, ctx):
            password = value.get("password")
            confirm = value.get("confirm")
            if not isinstance(password, str) or not isinstance(confirm, str):
                return
            if password != confirm:
                ctx.add_issue(["confirm"], "password_mismatch", "Passwords do not match")

        schema = Map({
            "password": String().min(8),
            "confirm": String().min(8),
        }).super_refine(passwords_match)

        assert schema.validate({"password": "password123", "confirm": "password123"}) is None

        errors = schema.validate({"password": "password123", "confirm": "different123"})
        assert len(errors) == 1
        assert errors[0].path == ("confirm",)
        assert errors[0].code == "password_mismatch"
        assert errors[0].message == "Passwords do not match"

    def test_duplicate_index(self):
        """Test reporting an issue at an array index."""
        def no_duplicates(value, ctx):
            seen = set()
            for i, item in enumerate(value):
                if item in seen:
                    ctx.add_issue([i], ErrorCode.CUSTOM_VALIDATION, "Duplicate value found")
                    return
                seen.add(item)

        schema = Array(Int()).super_refine(no_duplicates)

        assert schema.validate([1, 2, 3]) is None

        errors = schema.validate([1, 2, 2])
        assert len(errors) == 1
        assert errors[0].path == (2,)
        assert errors[0].code == ErrorCode.CUSTOM_VALIDATION

    def test_multiple_issues(self):
        """Test several issues at different fields."""
        def check_range(value, ctx):
            start, end = value.get("start"), value.get("end")
            if not isinstance(start, int) or not isinstance(end, int):
                return
            if start >= end:
                ctx.add_issue("start", ErrorCode.TOO_BIG, "Start must be less than end")
            if end - start > 100:
                ctx.add_issue("end", ErrorCode.TOO_BIG, "Range must not exceed 100")

        schema = Map({"start": Int(), "end": Int()}).super_refine(check_range)

        errors = schema.validate({"start": 50, "end": 30})
        assert [(e.path, e.message) for e in errors] == [(("start",), "Start must be less than end")]

        errors = schema.validate({"start": 0, "end": 150})
        assert [(e.path, e.message) for e in errors] == [(("end",), "Range must not exceed 100")]

    def test_custom_code(self):
        """Test a caller-defined error code."""
        schema = Int().super_refine(
            lambda v, ctx: ctx.add_issue([], "odd_number", "Number must be even") if v % 2 else None)

        assert schema.validate(4) is None

        errors = schema.validate(5)
        assert errors[0].code == "odd_number"
        assert errors.errors_by_code("odd_number") == errors.errors

    def test_with_meta(self):
        """Test issues carrying metadata."""
        def check(value, ctx):
            if value > 10:
                ctx.add_issue_with_meta([], ErrorCode.TOO_BIG, "Too big", {"limit": 10, "actual": value})

        errors = Int().super_refine(check).validate(42)
        assert errors[0].meta == {"limit": 10, "actual": 42}
        assert errors.to_dict()["errors"][0]["meta"] == {"limit": 10, "actual": 42}

    def test_nested_path_below_base(self):
        """Test that issue paths are relative to the refined value."""
        def check(value, ctx):
            ctx.add_issue(["items", 0, "sku"], "bad_sku", "Unknown SKU")

        schema = Map({"order": Map({}).super_refine(check)})

        errors = schema.validate({"order": {}})
        assert errors[0].path == ("order", "items", 0, "sku")
        assert str(errors[0].path) == "order.items[0].sku"

    def test_missing_message_is_resolved(self):
        """Test that an issue without a message uses the schema's messages."""
        schema = String().super_refine(lambda v, ctx: ctx.add_issue([], "nope"))
        assert schema.validate("x")[0].message == "Invalid input"

        schema = (String()
                  .custom_error("nope", "Not allowed")
                  .super_refine(lambda v, ctx: ctx.add_issue([], "nope")))
        assert schema.validate("x")[0].message == "Not allowed"

    def test_super_refine_runs_after_refine(self):
        """Test ordering of refinement and super refinement errors."""
        schema = (Float()
                  .super_refine(lambda v, ctx: ctx.add_issue([], "super", "super"))
                  .refine(lambda v: (False, "simple")))

        errors = schema.validate(1.5)
        assert [e.message for e in errors] == ["simple", "super"]

    def test_super_refine_not_run_on_type_error(self):
        calls = []
        schema = Bool().super_refine(lambda v, ctx: calls.append(v))

        errors = schema.validate("true")
        assert len(errors) == 1
        assert calls == []


class TestErrorMessages:
    """Tests for message overrides and formatters."""

    def test_custom_error(self):
        """Test overriding the message of one code."""
        schema = String().min(5).custom_error(ErrorCode.TOO_SMALL, "Too short!")

        assert schema.validate("abc")[0].message == "Too short!"
        # Other codes keep their default
        assert schema.validate(None)[0].message == "Required"

    def test_custom_error_with_plain_code(self):
        schema = String().custom_error("required", "Please fill in this field")
        assert schema.validate(None)[0].message == "Please fill in this field"

    def test_error_formatter(self):
        """Test a formatter producing every message."""
        def formatter(path, code, default_message):
            return f"{path or 'value'}: {code}: {default_message}"

        schema = Int().min(10).set_error_formatter(formatter)

        errors = schema.validate(5, ["age"])
        assert errors[0].message == "age: too_small: Number must be greater than or equal to 10, got 5"

    def test_formatter_beats_override(self):
        """Test that the formatter takes precedence over overrides."""
        schema = (String()
                  .custom_error(ErrorCode.REQUIRED, "Overridden")
                  .set_error_formatter(lambda path, code, default: "Formatted"))

        assert schema.validate(None)[0].message == "Formatted"

    def test_regex_message_beats_formatter(self):
        """Test that the fixed regex message is used as is."""
        schema = (String()
                  .regex(r"^\d+$", "Digits only")
                  .set_error_formatter(lambda path, code, default: "Formatted"))

        assert schema.validate("abc")[0].message == "Digits only"

    def test_overrides_are_per_schema(self):
        """Test that overrides never leak to other schemas."""
        String().custom_error(ErrorCode.REQUIRED, "Custom")
        assert String().validate(None)[0].message == "Required"

    def test_unrecognized_key_message(self):
        """Test overriding the strict mode message."""
        schema = (Map({"name": String()})
                  .strict()
                  .custom_error(ErrorCode.UNRECOGNIZED_KEYS, "Unexpected field"))

        errors = schema.validate({"name": "x", "extra": 1})
        assert errors[0].message == "Unexpected field"

    def test_formatter_must_be_callable(self):
        with pytest.raises(TypeError):
            String().set_error_formatter("format")
