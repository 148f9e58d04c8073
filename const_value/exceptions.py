"""
Exception hierarchy for const_value.

Hierarchy
---------
ConstValueError
├── DecodeError
│   ├── KindMismatchError
│   └── ValueMismatchError
├── EncodeError
└── UnsupportedTypeError
"""

from typing import Any, Iterable, List, Optional

from .api import ErrorCode, ValidationError


class ConstValueError(Exception):
    """Base exception for all const_value errors."""


class DecodeError(ConstValueError, ValueError):
    """
    Raised when a value cannot be decoded.

    Carries every ValidationError collected while decoding, so a record
    with several bad fields reports all of them at once.
    """

    def __init__(self, errors: Iterable[ValidationError]):
        self.errors: List[ValidationError] = list(errors)
        super().__init__("\n".join(str(error) for error in self.errors))

    @property
    def code(self) -> Optional[ErrorCode]:
        """Error code of the first collected error."""
        return self.errors[0].code if self.errors else None


class KindMismatchError(DecodeError):
    """Raised when the source offered a value of the wrong primitive kind."""

    def __init__(self, path: str, expected: Any, actual: Any, message: str):
        self.expected = expected
        self.actual = actual
        super().__init__([ValidationError(
            code=ErrorCode.KIND_MISMATCH,
            path=path,
            message=message,
            expected=expected,
            actual=actual
        )])


class ValueMismatchError(DecodeError):
    """Raised when the source offered the right kind but the wrong constant."""

    def __init__(self, path: str, expected: Any, actual: Any, message: str):
        self.expected = expected
        self.actual = actual
        super().__init__([ValidationError(
            code=ErrorCode.VALUE_MISMATCH,
            path=path,
            message=message,
            expected=expected,
            actual=actual
        )])


class EncodeError(ConstValueError):
    """Raised when an object has no tree representation."""


class UnsupportedTypeError(ConstValueError, TypeError):
    """Raised when a type annotation cannot be decoded or described."""
