"""
Public result types for constant-validating values.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, List, Optional


class ErrorCode(Enum):
    """Enumeration of decode error codes."""
    KIND_MISMATCH = auto()
    VALUE_MISMATCH = auto()
    END_OF_INPUT = auto()
    TYPE_ERROR = auto()
    REQUIRED_FIELD_MISSING = auto()
    UNKNOWN_FIELD = auto()
    UNION_NO_MATCH = auto()


@dataclass
class ValidationError:
    """
    Represents a decode failure with structured information.

    Attributes:
        code: The error code identifying the type of error
        path: JSON Pointer to the value that failed to decode
        message: Human-readable error message
        expected: What the decoder expected at this location
        actual: The value that was actually found
        causes: Nested errors, one list per rejected union variant
    """
    code: ErrorCode
    path: str
    message: str
    expected: Any = None
    actual: Any = None
    causes: List[List["ValidationError"]] = field(default_factory=list)

    def __str__(self) -> str:
        return f"Error at '{self.path}': {self.message}"


@dataclass
class ValidationResult:
    """
    Result of decoding a tree against a type.

    Attributes:
        valid: Whether decoding was successful
        errors: List of decode errors (if any)
        value: The decoded value when valid, otherwise None
    """
    valid: bool = True
    errors: List[ValidationError] = field(default_factory=list)
    value: Optional[Any] = None

    def __bool__(self) -> bool:
        return self.valid
