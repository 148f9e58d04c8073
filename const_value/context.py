"""
Decode context for the tree codec.
"""

from typing import Any, List, Optional

from .api import ErrorCode, ValidationError
from .utils import JsonPointer


class ValidationContext:
    """
    Context for decode operations.

    Tracks the JSON Pointer of the node being decoded so every error
    reports where it happened.
    """

    def __init__(self, verbose: bool = False):
        """
        Initialize a new decode context.

        Args:
            verbose: Whether to include additional details in errors
        """
        self.path_parts: List[str] = []
        self.verbose = verbose

    @property
    def path(self) -> str:
        """
        Get the current JSON Pointer path.

        Returns:
            JSON Pointer string for the current path
        """
        return JsonPointer.from_parts(self.path_parts)

    def push_path(self, part: Any) -> None:
        """
        Push a path part onto the current path.

        Args:
            part: Path segment to add
        """
        self.path_parts.append(str(part))

    def pop_path(self) -> None:
        """Remove the last path part from the current path."""
        if self.path_parts:
            self.path_parts.pop()

    def with_path(self, part: Any) -> "PathContext":
        """
        Context manager for adding a path part temporarily.

        Args:
            part: Path segment to add

        Returns:
            Context manager
        """
        return PathContext(self, part)

    def error(self,
              code: ErrorCode,
              message: str,
              expected: Any = None,
              actual: Any = None,
              causes: Optional[List[List[ValidationError]]] = None) -> ValidationError:
        """
        Build an error located at the current path.

        Args:
            code: Error code
            message: Error message
            expected: What was expected
            actual: What was found
            causes: Nested errors of rejected union variants

        Returns:
            The error
        """
        return ValidationError(
            code=code,
            path=self.path,
            message=message,
            expected=expected,
            actual=actual,
            causes=causes or []
        )

    def branch(self) -> "ValidationContext":
        """
        Create an isolated context for trying one union variant.

        Returns:
            A new context positioned at the current path
        """
        sub_context = ValidationContext(verbose=self.verbose)
        sub_context.path_parts = self.path_parts.copy()
        return sub_context

    def __str__(self) -> str:
        """String representation of the decode context."""
        return f"ValidationContext(path={self.path})"


class PathContext:
    """Context manager for temporarily adding a path part."""

    def __init__(self, context: ValidationContext, part: Any):
        """
        Initialize a new path context.

        Args:
            context: Decode context
            part: Path segment to add
        """
        self.context = context
        self.part = part

    def __enter__(self):
        """Add the path part when entering the context."""
        self.context.push_path(self.part)
        return self.context

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Remove the path part when exiting the context."""
        self.context.pop_path()
