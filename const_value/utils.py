"""
Utility classes and functions for const_value.
"""

from typing import Any, List


class JsonPointer:
    """
    Utility class for handling JSON Pointers (RFC 6901).

    Decode errors locate the offending value with a JSON Pointer.
    """

    @staticmethod
    def from_parts(parts: List[str]) -> str:
        """
        Create a JSON Pointer from path parts.

        Args:
            parts: List of path segments

        Returns:
            JSON Pointer string
        """
        if not parts:
            return ""

        return "/" + "/".join(JsonPointer.escape_part(part) for part in parts)

    @staticmethod
    def escape_part(part: str) -> str:
        """
        Escape a JSON Pointer path segment.

        Args:
            part: Path segment to escape

        Returns:
            Escaped path segment
        """
        # Replace ~ with ~0 and / with ~1
        return str(part).replace("~", "~0").replace("/", "~1")


class TypeUtils:
    """Utilities for naming the JSON type of tree values."""

    @staticmethod
    def get_json_type(value: Any) -> str:
        """
        Get the JSON Schema type for a Python value.

        Args:
            value: Python value

        Returns:
            JSON Schema type name
        """
        if value is None:
            return "null"
        elif isinstance(value, bool):
            return "boolean"
        elif isinstance(value, int):
            return "integer"
        elif isinstance(value, float):
            return "number"
        elif isinstance(value, str):
            return "string"
        elif isinstance(value, list):
            return "array"
        elif isinstance(value, dict):
            return "object"
        else:
            # Best effort for custom types
            return "unknown"

    @staticmethod
    def describe(value: Any) -> str:
        """
        Describe a value for error messages, e.g. ``string 'x'``.

        Args:
            value: Python value

        Returns:
            JSON type name, followed by the value itself for scalars
        """
        json_type = TypeUtils.get_json_type(value)
        if json_type in ("array", "object"):
            return json_type
        if json_type == "null":
            return "null"
        if json_type == "boolean":
            return f"boolean {'true' if value else 'false'}"
        if json_type == "unknown":
            return type(value).__name__
        return f"{json_type} {value!r}"


class SchemaKeywords:
    """Constants for JSON Schema keywords."""

    TYPE = "type"
    CONST = "const"

    # Array keywords
    ITEMS = "items"

    # Object keywords
    PROPERTIES = "properties"
    ADDITIONAL_PROPERTIES = "additionalProperties"
    REQUIRED = "required"

    # Schema composition
    ANY_OF = "anyOf"

    # Schema metadata
    SCHEMA = "$schema"
    TITLE = "title"
    DESCRIPTION = "description"
    DEFAULT = "default"
