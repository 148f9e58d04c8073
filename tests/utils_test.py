#!/usr/bin/env python3
"""
Tests for utility classes, kinds and the decode context.
"""
import pytest

from const_value import ErrorCode, get_kind, registered_kinds
from const_value.context import ValidationContext
from const_value.kinds import BOOL, CHAR, I8, STR, U64
from const_value.utils import JsonPointer, TypeUtils


class TestJsonPointer:
    """Tests for JsonPointer class."""

    def test_from_parts(self):
        """Test creating a JSON Pointer from path parts."""
        assert JsonPointer.from_parts([]) == ""
        assert JsonPointer.from_parts(["foo"]) == "/foo"
        assert JsonPointer.from_parts(["foo", "bar"]) == "/foo/bar"
        assert JsonPointer.from_parts(["foo", "bar", "0"]) == "/foo/bar/0"

    def test_escape_part(self):
        """Test escaping path parts."""
        assert JsonPointer.escape_part("foo") == "foo"
        assert JsonPointer.escape_part("foo/bar") == "foo~1bar"
        assert JsonPointer.escape_part("foo~bar") == "foo~0bar"
        assert JsonPointer.escape_part("foo/bar~baz") == "foo~1bar~0baz"


class TestTypeUtils:
    """Tests for TypeUtils class."""

    def test_get_json_type(self):
        """Test getting JSON Schema types from Python values."""
        assert TypeUtils.get_json_type(None) == "null"
        assert TypeUtils.get_json_type(True) == "boolean"
        assert TypeUtils.get_json_type(42) == "integer"
        assert TypeUtils.get_json_type(4.2) == "number"
        assert TypeUtils.get_json_type("s") == "string"
        assert TypeUtils.get_json_type([]) == "array"
        assert TypeUtils.get_json_type({}) == "object"
        assert TypeUtils.get_json_type(object()) == "unknown"

    def test_describe(self):
        """Test describing values for error messages."""
        assert TypeUtils.describe("x") == "string 'x'"
        assert TypeUtils.describe(1) == "integer 1"
        assert TypeUtils.describe(False) == "boolean false"
        assert TypeUtils.describe(None) == "null"
        assert TypeUtils.describe([1, 2]) == "array"
        assert TypeUtils.describe(b"x") == "bytes"


class TestKinds:
    """Tests for the built-in primitive kinds."""

    def test_registry(self):
        """Built-in kinds are registered by name."""
        names = [kind.name for kind in registered_kinds()]
        for name in ["bool", "i8", "i16", "i32", "i64", "i128",
                     "u8", "u16", "u32", "u64", "u128", "char", "str"]:
            assert name in names
        assert get_kind("bool") is BOOL
        assert get_kind(BOOL) is BOOL
        with pytest.raises(ValueError):
            get_kind("f16")

    def test_integer_ranges(self):
        """Integer kinds know their bounds."""
        assert (I8.minimum, I8.maximum) == (-128, 127)
        assert (U64.minimum, U64.maximum) == (0, 2 ** 64 - 1)
        assert I8.check_literal(-128) == -128
        with pytest.raises(ValueError):
            U64.check_literal(2 ** 64)

    def test_json_types(self):
        """Each kind maps to a JSON type."""
        assert BOOL.json_type == "boolean"
        assert I8.json_type == "integer"
        assert CHAR.json_type == "string"
        assert STR.json_type == "string"

    def test_accepts(self):
        """Kinds accept only their own category of value."""
        assert BOOL.accepts(False)
        assert not BOOL.accepts(0)
        assert I8.accepts(1000)
        assert not I8.accepts(True)
        assert CHAR.accepts("a")
        assert not CHAR.accepts("ab")
        assert STR.accepts("")

    def test_repr(self):
        """Kinds show their name."""
        assert str(U64) == "u64"
        assert repr(CHAR) == "CharKind('char')"


class TestValidationContext:
    """Tests for the decode context."""

    def test_paths(self):
        """Paths are pushed and popped around nested values."""
        context = ValidationContext()
        assert context.path == ""
        with context.with_path("shapes"):
            with context.with_path(1):
                assert context.path == "/shapes/1"
            assert context.path == "/shapes"
        assert context.path == ""

    def test_path_restored_on_error(self):
        """Leaving a path context through an exception restores the path."""
        context = ValidationContext()
        with pytest.raises(RuntimeError):
            with context.with_path("a"):
                raise RuntimeError("boom")
        assert context.path == ""

    def test_branch_is_isolated(self):
        """A branch starts at the same path without sharing it."""
        context = ValidationContext(verbose=True)
        context.push_path("tag")
        branch = context.branch()
        branch.push_path("inner")
        assert context.path == "/tag"
        assert branch.path == "/tag/inner"
        assert branch.verbose

    def test_error(self):
        """Errors are located at the current path."""
        context = ValidationContext()
        with context.with_path("x"):
            error = context.error(ErrorCode.TYPE_ERROR, "Expected string, got integer", actual=1)
        assert error.path == "/x"
        assert error.causes == []
        assert str(error) == "Error at '/x': Expected string, got integer"
