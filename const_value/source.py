"""
Value sources and sinks.

A source yields raw primitive values to a decoder; a sink accepts the
primitive values an encoder writes. The constant-value core talks to
nothing else.
"""

from abc import ABC, abstractmethod
from typing import Any, Iterable, List

from .api import ErrorCode, ValidationError
from .exceptions import DecodeError


class ValueSource(ABC):
    """
    Base class for value sources.
    """

    path: str = ""

    @abstractmethod
    def read_value(self) -> Any:
        """
        Consume and return the next raw value.

        Returns:
            The next raw value

        Raises:
            DecodeError: If the source has no value left
        """
        pass

    def _exhausted(self) -> DecodeError:
        return DecodeError([ValidationError(
            code=ErrorCode.END_OF_INPUT,
            path=self.path,
            message="Unexpected end of input"
        )])


class ValueSink(ABC):
    """
    Base class for value sinks.
    """

    @abstractmethod
    def write_value(self, value: Any) -> Any:
        """
        Accept one primitive value.

        Args:
            value: Value to write

        Returns:
            Whatever the sink produces for the write
        """
        pass


class TreeSource(ValueSource):
    """
    Source over a single node of a structured-data tree.
    """

    def __init__(self, node: Any, path: str = ""):
        """
        Initialize a new tree source.

        Args:
            node: The tree node to yield
            path: JSON Pointer of the node
        """
        self.node = node
        self.path = path
        self._consumed = False

    def read_value(self) -> Any:
        if self._consumed:
            raise self._exhausted()
        self._consumed = True
        return self.node

    def __repr__(self) -> str:
        return f"TreeSource(path={self.path!r}, consumed={self._consumed})"


class SequenceSource(ValueSource):
    """
    Source over a stream of primitive values, read one at a time.
    """

    def __init__(self, values: Iterable[Any], path: str = ""):
        """
        Initialize a new sequence source.

        Args:
            values: Values to yield, in order
            path: JSON Pointer reported in diagnostics
        """
        self._values = iter(values)
        self.path = path

    def read_value(self) -> Any:
        try:
            return next(self._values)
        except StopIteration:
            raise self._exhausted() from None


class TreeSink(ValueSink):
    """
    Sink that collects written values as tree nodes.
    """

    def __init__(self):
        self.values: List[Any] = []

    def write_value(self, value: Any) -> Any:
        self.values.append(value)
        return value

    @property
    def value(self) -> Any:
        """The most recently written value."""
        if not self.values:
            raise LookupError("Nothing has been written to this sink")
        return self.values[-1]
