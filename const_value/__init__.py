"""
Constant-validating values

Types whose only legal value is one constant: decoding checks the incoming
value against it, encoding always writes it back. Useful as discriminants
in untagged unions or for defensive validation of fixed fields.
"""

import logging

from .api import ErrorCode, ValidationError, ValidationResult
from .codec import Decoder, Encoder, dumps, from_tree, loads, to_tree
from .constant import (
    ConstValue,
    ConstBool,
    ConstI8,
    ConstI16,
    ConstI32,
    ConstI64,
    ConstI128,
    ConstU8,
    ConstU16,
    ConstU32,
    ConstU64,
    ConstU128,
    ConstChar,
    ConstStr,
    is_const_type
)
from .exceptions import (
    ConstValueError,
    DecodeError,
    EncodeError,
    KindMismatchError,
    UnsupportedTypeError,
    ValueMismatchError
)
from .kinds import Kind, get_kind, register_kind, registered_kinds
from .schema import json_schema_for
from .source import SequenceSource, TreeSink, TreeSource, ValueSink, ValueSource
from .version import __version__

logger = logging.getLogger("const_value")
logger.addHandler(logging.NullHandler())

# Export public classes and functions
__all__ = [
    "ConstValue",
    "ConstBool",
    "ConstI8",
    "ConstI16",
    "ConstI32",
    "ConstI64",
    "ConstI128",
    "ConstU8",
    "ConstU16",
    "ConstU32",
    "ConstU64",
    "ConstU128",
    "ConstChar",
    "ConstStr",
    "is_const_type",
    "Kind",
    "get_kind",
    "register_kind",
    "registered_kinds",
    "ValueSource",
    "ValueSink",
    "TreeSource",
    "SequenceSource",
    "TreeSink",
    "Decoder",
    "Encoder",
    "from_tree",
    "to_tree",
    "loads",
    "dumps",
    "json_schema_for",
    "ErrorCode",
    "ValidationError",
    "ValidationResult",
    "ConstValueError",
    "DecodeError",
    "KindMismatchError",
    "ValueMismatchError",
    "EncodeError",
    "UnsupportedTypeError",
    "__version__",
]
