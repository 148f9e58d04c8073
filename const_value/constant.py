"""
Constant-validating values.

``ConstValue[kind, value]`` (or one of the per-kind aliases such as
``ConstBool[True]`` or ``ConstI64[1]``) is a class whose only legal value
is the bound constant. Decoding checks the incoming value against it;
encoding always writes it back.

    >>> ConstI64[2].decode(TreeSource(2))
    ConstI64[2]()
    >>> str(ConstBool[True].default())
    'true'
"""

import threading
from typing import Any, ClassVar, Dict, Optional, Tuple, Union

from .exceptions import ValueMismatchError
from .kinds import (
    Kind,
    get_kind,
    BOOL,
    I8,
    I16,
    I32,
    I64,
    I128,
    U8,
    U16,
    U32,
    U64,
    U128,
    CHAR,
    STR
)
from .source import ValueSink, ValueSource

_UNBOUND = object()

# (base class, kind name, literal type, literal) -> bound class
_BOUND_CLASSES: Dict[Tuple[type, str, type, Any], type] = {}
# kind name -> alias class declared with ``kind=...``
_ALIASES: Dict[str, type] = {}
_LOCK = threading.RLock()


class ConstValue:
    """
    A value that can only ever be one constant.

    Bind a kind and a literal with ``ConstValue[kind, value]``; kind
    aliases take the literal alone (``ConstBool[True]``). Decoding fails
    with KindMismatchError when the source offers another kind of value,
    and with ValueMismatchError when it offers the right kind but a
    different value.
    """

    __slots__ = ()

    kind: ClassVar[Optional[Kind]] = None
    value: ClassVar[Any] = _UNBOUND

    def __init_subclass__(cls, kind: Union[str, Kind, None] = None, **kwargs):
        super().__init_subclass__(**kwargs)
        if kind is None:
            return
        if cls.kind is not None:
            raise TypeError(f"{cls.__name__} already has kind {cls.kind}")
        cls.kind = get_kind(kind)
        with _LOCK:
            _ALIASES.setdefault(cls.kind.name, cls)

    def __class_getitem__(cls, params: Any) -> type:
        if cls.value is not _UNBOUND:
            raise TypeError(f"{cls.__name__} is already bound to a constant")

        if cls.kind is None:
            if not isinstance(params, tuple) or len(params) != 2:
                raise TypeError(
                    f"{cls.__name__}[...] takes a kind and a value, "
                    f"e.g. {cls.__name__}['i64', 1]"
                )
            kind, literal = get_kind(params[0]), params[1]
        else:
            kind, literal = cls.kind, params

        literal = kind.check_literal(literal)
        if cls is ConstValue:
            cls = _ALIASES.get(kind.name, ConstValue)
        return _bind(cls, kind, literal)

    def __new__(cls):
        instance = cls.__dict__.get("_instance")
        if instance is None:
            cls._binding()
            with _LOCK:
                instance = cls.__dict__.get("_instance")
                if instance is None:
                    instance = super().__new__(cls)
                    cls._instance = instance
        return instance

    @classmethod
    def _binding(cls) -> Tuple[Kind, Any]:
        if cls.kind is None or cls.value is _UNBOUND:
            raise TypeError(
                f"{cls.__name__} must be bound to a constant before use, "
                f"e.g. {cls.__name__}[...]"
            )
        return cls.kind, cls.value

    @classmethod
    def default(cls) -> "ConstValue":
        """
        Get the instance without reading anything.

        Returns:
            The singleton instance of this constant
        """
        return cls()

    @classmethod
    def decode(cls, source: ValueSource) -> "ConstValue":
        """
        Decode one value from a source.

        Args:
            source: Source to read exactly one value from

        Returns:
            The singleton instance of this constant

        Raises:
            KindMismatchError: If the value is not of this constant's kind
            ValueMismatchError: If the value differs from the constant
        """
        kind, expected = cls._binding()
        actual = kind.extract(source.read_value(), source.path, expected)
        if actual != expected:
            raise ValueMismatchError(
                source.path,
                expected=expected,
                actual=actual,
                message=(
                    f"Expected constant value {kind.expecting(expected)}, "
                    f"got {kind.expecting(actual)}"
                )
            )
        return cls()

    def encode(self, sink: ValueSink) -> Any:
        """
        Write the constant to a sink.

        Args:
            sink: Sink to write to

        Returns:
            Whatever the sink returns for the write
        """
        return sink.write_value(self.kind.to_primitive(self.value))

    def _key(self) -> Tuple[str, type, Any]:
        return (self.kind.name, type(self.value), self.value)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, ConstValue):
            return self._key() == other._key()
        return NotImplemented

    def __ne__(self, other: Any) -> bool:
        if isinstance(other, ConstValue):
            return self._key() != other._key()
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._key())

    # Only one value exists per instantiation, so ordering is always "equal".
    def __lt__(self, other: Any) -> bool:
        if isinstance(other, ConstValue) and self._key() == other._key():
            return False
        return NotImplemented

    def __gt__(self, other: Any) -> bool:
        if isinstance(other, ConstValue) and self._key() == other._key():
            return False
        return NotImplemented

    def __le__(self, other: Any) -> bool:
        if isinstance(other, ConstValue) and self._key() == other._key():
            return True
        return NotImplemented

    def __ge__(self, other: Any) -> bool:
        if isinstance(other, ConstValue) and self._key() == other._key():
            return True
        return NotImplemented

    def __copy__(self) -> "ConstValue":
        return self

    def __deepcopy__(self, memo: Dict[int, Any]) -> "ConstValue":
        return self

    def __reduce__(self):
        cls = type(self)
        if cls.__dict__.get("_generated"):
            return (_rebuild, (cls.__base__, cls.kind.name, cls.value))
        return (cls, ())

    def __str__(self) -> str:
        return self.kind.format(self.value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def _bind(base: type, kind: Kind, literal: Any) -> type:
    """
    Get the class for ``base`` bound to ``literal``, creating it once.

    Args:
        base: Unbound class being parameterized
        kind: Kind of the literal
        literal: Checked literal

    Returns:
        The bound class
    """
    key = (base, kind.name, type(literal), literal)
    with _LOCK:
        bound = _BOUND_CLASSES.get(key)
        if bound is None:
            if base is ConstValue:
                name = f"ConstValue[{kind.name!r}, {literal!r}]"
            else:
                name = f"{base.__name__}[{literal!r}]"
            bound = type(base)(name, (base,), {
                "__slots__": (),
                "__module__": base.__module__,
                "__qualname__": name,
                "__doc__": base.__doc__,
                "_generated": True,
                "kind": kind,
                "value": literal,
            })
            _BOUND_CLASSES[key] = bound
        return bound


def _rebuild(base: type, kind_name: str, literal: Any) -> ConstValue:
    if base is ConstValue:
        return ConstValue[kind_name, literal]()
    return base[literal]()


def is_const_type(tp: Any) -> bool:
    """
    Check whether an annotation is a bound constant type.

    Args:
        tp: Type annotation

    Returns:
        True if ``tp`` is a ConstValue class bound to a constant
    """
    return (
        isinstance(tp, type)
        and issubclass(tp, ConstValue)
        and tp.kind is not None
        and tp.value is not _UNBOUND
    )


class ConstBool(ConstValue, kind=BOOL):
    """
    A constant ``bool``.

    Decoding fails if the value is not the bound constant.
    """
    __slots__ = ()


class ConstI8(ConstValue, kind=I8):
    """A constant ``i8``. Decoding fails if the value is not the bound constant."""
    __slots__ = ()


class ConstI16(ConstValue, kind=I16):
    """A constant ``i16``. Decoding fails if the value is not the bound constant."""
    __slots__ = ()


class ConstI32(ConstValue, kind=I32):
    """A constant ``i32``. Decoding fails if the value is not the bound constant."""
    __slots__ = ()


class ConstI64(ConstValue, kind=I64):
    """A constant ``i64``. Decoding fails if the value is not the bound constant."""
    __slots__ = ()


class ConstI128(ConstValue, kind=I128):
    """A constant ``i128``. Decoding fails if the value is not the bound constant."""
    __slots__ = ()


class ConstU8(ConstValue, kind=U8):
    """A constant ``u8``. Decoding fails if the value is not the bound constant."""
    __slots__ = ()


class ConstU16(ConstValue, kind=U16):
    """A constant ``u16``. Decoding fails if the value is not the bound constant."""
    __slots__ = ()


class ConstU32(ConstValue, kind=U32):
    """A constant ``u32``. Decoding fails if the value is not the bound constant."""
    __slots__ = ()


class ConstU64(ConstValue, kind=U64):
    """A constant ``u64``. Decoding fails if the value is not the bound constant."""
    __slots__ = ()


class ConstU128(ConstValue, kind=U128):
    """A constant ``u128``. Decoding fails if the value is not the bound constant."""
    __slots__ = ()


class ConstChar(ConstValue, kind=CHAR):
    """
    A constant ``char``.

    The wire form is a one-character string; longer or empty strings are
    rejected as the wrong kind.
    """
    __slots__ = ()


class ConstStr(ConstValue, kind=STR):
    """A constant string, typically a discriminant field."""
    __slots__ = ()
