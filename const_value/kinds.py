"""
Primitive kinds a constant can be declared over.

Each kind knows how to recognize a raw value of its own category, how to
format a literal, and how to hand a literal to a sink. The constant-value
core only ever compares; everything kind-specific lives here.
"""

import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Union

from .exceptions import KindMismatchError
from .utils import TypeUtils


class Kind(ABC):
    """
    Base class for primitive kinds.

    A kind is identified by its name (``"bool"``, ``"i64"``, ...) and
    describes one category of wire primitive.
    """

    def __init__(self, name: str):
        """
        Initialize a new kind.

        Args:
            name: Registry name of the kind
        """
        self.name = name

    @property
    @abstractmethod
    def json_type(self) -> str:
        """
        Get the JSON Schema type for values of this kind.

        Returns:
            JSON Schema type name
        """
        pass

    @abstractmethod
    def accepts(self, value: Any) -> bool:
        """
        Check whether a raw value belongs to this kind.

        Args:
            value: Raw value read from a source

        Returns:
            True if the value is of this kind
        """
        pass

    def check_literal(self, literal: Any) -> Any:
        """
        Check that a literal can be bound as a constant of this kind.

        Args:
            literal: Literal to bind

        Returns:
            The literal, unchanged

        Raises:
            TypeError: If the literal is not of this kind
        """
        if not self.accepts(literal):
            raise TypeError(
                f"{literal!r} is not a valid {self.name} constant"
            )
        return literal

    def extract(self, raw: Any, path: str, expected: Any) -> Any:
        """
        Extract a value of this kind from a raw source value.

        Args:
            raw: Raw value read from a source
            path: JSON Pointer of the value, for diagnostics
            expected: The constant being decoded, for diagnostics

        Returns:
            The extracted value

        Raises:
            KindMismatchError: If the raw value is of another kind
        """
        if self.accepts(raw):
            return raw
        raise KindMismatchError(
            path,
            expected=self.name,
            actual=raw,
            message=(
                f"Expected {self.name} constant {self.expecting(expected)}, "
                f"got {TypeUtils.describe(raw)}"
            )
        )

    def format(self, value: Any) -> str:
        """
        Render a value in this kind's canonical textual form.

        Args:
            value: Value of this kind

        Returns:
            Text form of the value
        """
        return str(value)

    def expecting(self, value: Any) -> str:
        """Render a value the way it appears in error messages."""
        return self.format(value)

    def to_primitive(self, value: Any) -> Any:
        """Convert a value of this kind into what a sink receives."""
        return value

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r})"


class BoolKind(Kind):
    """Booleans. Integers are never accepted in place of a boolean."""

    def __init__(self):
        super().__init__("bool")

    @property
    def json_type(self) -> str:
        return "boolean"

    def accepts(self, value: Any) -> bool:
        return isinstance(value, bool)

    def format(self, value: Any) -> str:
        return "true" if value else "false"


class IntKind(Kind):
    """
    Fixed-width integers.

    Any Python ``int`` (other than ``bool``) is the right kind, whatever
    its magnitude. A value outside the width can never equal the bound
    constant, so it surfaces as a value mismatch rather than a kind one.
    """

    def __init__(self, name: str, bits: int, signed: bool):
        """
        Initialize a new integer kind.

        Args:
            name: Registry name of the kind
            bits: Width in bits
            signed: Whether the kind is two's-complement signed
        """
        super().__init__(name)
        self.bits = bits
        self.signed = signed
        if signed:
            self.minimum = -(1 << (bits - 1))
            self.maximum = (1 << (bits - 1)) - 1
        else:
            self.minimum = 0
            self.maximum = (1 << bits) - 1

    @property
    def json_type(self) -> str:
        return "integer"

    def accepts(self, value: Any) -> bool:
        return isinstance(value, int) and not isinstance(value, bool)

    def check_literal(self, literal: Any) -> Any:
        literal = super().check_literal(literal)
        if not self.minimum <= literal <= self.maximum:
            raise ValueError(
                f"{literal} is out of range for {self.name} "
                f"[{self.minimum}, {self.maximum}]"
            )
        return literal


class CharKind(Kind):
    """Single characters, carried on the wire as one-character strings."""

    def __init__(self):
        super().__init__("char")

    @property
    def json_type(self) -> str:
        return "string"

    def accepts(self, value: Any) -> bool:
        return isinstance(value, str) and len(value) == 1

    def expecting(self, value: Any) -> str:
        return f"'{value}'"


class StrKind(Kind):
    """Strings, the usual shape of a discriminant in JSON documents."""

    def __init__(self):
        super().__init__("str")

    @property
    def json_type(self) -> str:
        return "string"

    def accepts(self, value: Any) -> bool:
        return isinstance(value, str)

    def expecting(self, value: Any) -> str:
        return f'"{value}"'


_REGISTRY: Dict[str, Kind] = {}
_REGISTRY_LOCK = threading.Lock()


def register_kind(kind: Kind) -> Kind:
    """
    Register a kind under its name.

    Args:
        kind: Kind to register

    Returns:
        The registered kind

    Raises:
        ValueError: If a different kind is already registered under that name
    """
    with _REGISTRY_LOCK:
        existing = _REGISTRY.get(kind.name)
        if existing is not None and existing is not kind:
            raise ValueError(f"Kind '{kind.name}' is already registered")
        _REGISTRY[kind.name] = kind
    return kind


def get_kind(kind: Union[str, Kind]) -> Kind:
    """
    Look up a kind by name.

    Args:
        kind: Kind name, or a registered Kind which is returned as is

    Returns:
        The matching kind

    Raises:
        ValueError: If no kind is registered under the name, or the given
            Kind is not the one registered under its name
    """
    if isinstance(kind, Kind):
        # Bound constants are rebuilt by kind name when unpickled
        if _REGISTRY.get(kind.name) is not kind:
            raise ValueError(f"Kind '{kind.name}' is not registered; call register_kind() first")
        return kind
    try:
        return _REGISTRY[kind]
    except KeyError:
        raise ValueError(f"Unknown kind '{kind}'") from None


def registered_kinds() -> List[Kind]:
    """Return all registered kinds in registration order."""
    return list(_REGISTRY.values())


BOOL = register_kind(BoolKind())
I8 = register_kind(IntKind("i8", 8, signed=True))
I16 = register_kind(IntKind("i16", 16, signed=True))
I32 = register_kind(IntKind("i32", 32, signed=True))
I64 = register_kind(IntKind("i64", 64, signed=True))
I128 = register_kind(IntKind("i128", 128, signed=True))
U8 = register_kind(IntKind("u8", 8, signed=False))
U16 = register_kind(IntKind("u16", 16, signed=False))
U32 = register_kind(IntKind("u32", 32, signed=False))
U64 = register_kind(IntKind("u64", 64, signed=False))
U128 = register_kind(IntKind("u128", 128, signed=False))
CHAR = register_kind(CharKind())
STR = register_kind(StrKind())
