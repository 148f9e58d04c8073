"""
Tree codec: decodes JSON-compatible trees into typed values and back.

The codec walks type annotations (dataclasses, unions, lists, mappings
and primitives) and hands every constant-typed field to the constant's
own decode/encode through a TreeSource/TreeSink.
"""

import dataclasses
import json
import logging
import types
import typing
from typing import Any, Dict, List, Tuple

from .api import ErrorCode, ValidationError, ValidationResult
from .constant import ConstValue, is_const_type
from .context import ValidationContext
from .exceptions import DecodeError, EncodeError, UnsupportedTypeError
from .source import TreeSink, TreeSource
from .utils import TypeUtils

logger = logging.getLogger("const_value")

_NONE_TYPE = type(None)
_UNION_TYPES = tuple(
    t for t in (typing.Union, getattr(types, "UnionType", None)) if t is not None
)

# Python type -> JSON type name
PRIMITIVE_TYPES: Dict[type, str] = {
    bool: "boolean",
    int: "integer",
    float: "number",
    str: "string",
}


def type_name(tp: Any) -> str:
    """
    Get a readable name for a type annotation.

    Args:
        tp: Type annotation

    Returns:
        Name used in messages
    """
    if tp is None or tp is _NONE_TYPE:
        return "null"
    if isinstance(tp, type):
        return tp.__name__
    return repr(tp).replace("typing.", "")


def is_union(tp: Any) -> bool:
    """Check whether an annotation is a Union or Optional."""
    return typing.get_origin(tp) in _UNION_TYPES


def is_optional(tp: Any) -> bool:
    """Check whether an annotation is a union that admits None."""
    return is_union(tp) and _NONE_TYPE in typing.get_args(tp)


def is_record(tp: Any) -> bool:
    """Check whether an annotation is a dataclass type."""
    return isinstance(tp, type) and dataclasses.is_dataclass(tp)


def record_fields(tp: type) -> List[Tuple[dataclasses.Field, Any]]:
    """
    Get the init fields of a dataclass with their resolved annotations.

    Args:
        tp: Dataclass type

    Returns:
        List of (field, annotation) pairs in declaration order
    """
    hints = typing.get_type_hints(tp)
    return [
        (f, hints.get(f.name, Any))
        for f in dataclasses.fields(tp)
        if f.init
    ]


def has_default(f: dataclasses.Field) -> bool:
    """Check whether a dataclass field can be omitted."""
    return (f.default is not dataclasses.MISSING
            or f.default_factory is not dataclasses.MISSING)


class Decoder:
    """
    Decodes JSON-compatible trees against type annotations.

    Unions are untagged: each variant is tried in declaration order and
    the first one that decodes wins. A constant-typed field is what lets
    otherwise identical variants be told apart.
    """

    def __init__(self, verbose: bool = False, deny_unknown_fields: bool = False):
        """
        Initialize a new decoder.

        Args:
            verbose: Whether to log decode progress at debug level. This sets
                the shared ``const_value`` logger to DEBUG for the whole process.
            deny_unknown_fields: Whether keys with no matching record field are errors
        """
        self.verbose = verbose
        self.deny_unknown_fields = deny_unknown_fields

        if verbose:
            logger.setLevel(logging.DEBUG)

    def decode(self, data: Any, tp: Any) -> Any:
        """
        Decode a tree into a value of the given type.

        Args:
            data: JSON-compatible tree
            tp: Target type annotation

        Returns:
            The decoded value

        Raises:
            DecodeError: If the tree does not match the type
            UnsupportedTypeError: If the type cannot be decoded into
        """
        context = ValidationContext(verbose=self.verbose)
        return self._decode(data, tp, context)

    def validate(self, data: Any, tp: Any) -> ValidationResult:
        """
        Decode a tree, reporting failures instead of raising them.

        Args:
            data: JSON-compatible tree
            tp: Target type annotation

        Returns:
            ValidationResult holding the decoded value or the errors
        """
        try:
            value = self.decode(data, tp)
        except DecodeError as e:
            return ValidationResult(valid=False, errors=e.errors)
        return ValidationResult(valid=True, value=value)

    def _decode(self, node: Any, tp: Any, context: ValidationContext) -> Any:
        if tp is Any:
            return node
        if is_const_type(tp):
            return tp.decode(TreeSource(node, context.path))
        if tp is None or tp is _NONE_TYPE:
            return self._decode_null(node, context)
        if is_union(tp):
            return self._decode_union(node, typing.get_args(tp), context)
        if tp in PRIMITIVE_TYPES:
            return self._decode_primitive(node, tp, context)

        origin = typing.get_origin(tp)
        if tp is list or origin is list:
            args = typing.get_args(tp)
            return self._decode_list(node, args[0] if args else Any, context)
        if tp is dict or origin is dict:
            args = typing.get_args(tp)
            if args and args[0] not in (str, Any):
                raise UnsupportedTypeError(f"Mapping keys must be strings, not {type_name(args[0])}")
            return self._decode_dict(node, args[1] if args else Any, context)
        if is_record(tp):
            return self._decode_record(node, tp, context)

        raise UnsupportedTypeError(f"Cannot decode into {type_name(tp)}")

    def _type_error(self, expected: str, node: Any, context: ValidationContext) -> DecodeError:
        return DecodeError([context.error(
            ErrorCode.TYPE_ERROR,
            f"Expected {expected}, got {TypeUtils.get_json_type(node)}",
            expected=expected,
            actual=node
        )])

    def _decode_null(self, node: Any, context: ValidationContext) -> None:
        if node is not None:
            raise self._type_error("null", node, context)
        return None

    def _decode_primitive(self, node: Any, tp: type, context: ValidationContext) -> Any:
        if tp is bool:
            valid = isinstance(node, bool)
        elif tp is int:
            valid = isinstance(node, int) and not isinstance(node, bool)
        elif tp is float:
            valid = isinstance(node, (int, float)) and not isinstance(node, bool)
        else:
            valid = isinstance(node, str)

        if not valid:
            raise self._type_error(PRIMITIVE_TYPES[tp], node, context)
        return float(node) if tp is float else node

    def _decode_list(self, node: Any, item_type: Any, context: ValidationContext) -> List[Any]:
        if not isinstance(node, list):
            raise self._type_error("array", node, context)

        items = []
        errors: List[ValidationError] = []
        for i, item in enumerate(node):
            with context.with_path(i):
                try:
                    items.append(self._decode(item, item_type, context))
                except DecodeError as e:
                    errors.extend(e.errors)

        if errors:
            raise DecodeError(errors)
        return items

    def _decode_dict(self, node: Any, value_type: Any, context: ValidationContext) -> Dict[str, Any]:
        if not isinstance(node, dict):
            raise self._type_error("object", node, context)

        result = {}
        errors: List[ValidationError] = []
        for key, value in node.items():
            with context.with_path(key):
                try:
                    result[key] = self._decode(value, value_type, context)
                except DecodeError as e:
                    errors.extend(e.errors)

        if errors:
            raise DecodeError(errors)
        return result

    def _decode_record(self, node: Any, tp: type, context: ValidationContext) -> Any:
        if not isinstance(node, dict):
            raise self._type_error("object", node, context)

        kwargs = {}
        known = {f.name for f in dataclasses.fields(tp)}
        errors: List[ValidationError] = []

        # Decode every field so all errors are reported, not just the first
        for f, hint in record_fields(tp):
            if f.name in node:
                with context.with_path(f.name):
                    try:
                        kwargs[f.name] = self._decode(node[f.name], hint, context)
                    except DecodeError as e:
                        errors.extend(e.errors)
            elif has_default(f):
                continue
            elif is_optional(hint):
                kwargs[f.name] = None
            else:
                errors.append(context.error(
                    ErrorCode.REQUIRED_FIELD_MISSING,
                    f"Missing required field '{f.name}'",
                    expected=f.name
                ))

        if self.deny_unknown_fields:
            for key in node:
                if key not in known:
                    with context.with_path(key):
                        errors.append(context.error(
                            ErrorCode.UNKNOWN_FIELD,
                            f"Unknown field '{key}' for {tp.__name__}",
                            actual=node[key]
                        ))

        if errors:
            raise DecodeError(errors)

        # __post_init__ checks reject the record like any other mismatch
        try:
            value = tp(**kwargs)
        except (TypeError, ValueError) as e:
            raise DecodeError([context.error(
                ErrorCode.TYPE_ERROR,
                f"Cannot construct {tp.__name__}: {e}",
                expected=tp.__name__,
                actual=node
            )]) from e

        logger.debug(f"Decoded {tp.__name__} at '{context.path}'")
        return value

    def _decode_union(self, node: Any, variants: Tuple[Any, ...], context: ValidationContext) -> Any:
        causes: List[List[ValidationError]] = []

        for variant in variants:
            # Kind and value mismatches alike just mean "not this variant"
            sub_context = context.branch()
            try:
                value = self._decode(node, variant, sub_context)
            except DecodeError as e:
                logger.debug(f"Variant {type_name(variant)} rejected at '{context.path}': {e}")
                causes.append(e.errors)
                continue
            return value

        names = ", ".join(type_name(variant) for variant in variants)
        raise DecodeError([context.error(
            ErrorCode.UNION_NO_MATCH,
            f"Value does not match any of the variants: {names}",
            expected=[type_name(variant) for variant in variants],
            actual=node,
            causes=causes
        )])


class Encoder:
    """
    Encodes typed values into JSON-compatible trees.

    Constant-typed record fields always encode their bound constant,
    whatever object the field happens to hold.
    """

    def encode(self, obj: Any) -> Any:
        """
        Encode a value into a tree.

        Args:
            obj: Value to encode

        Returns:
            JSON-compatible tree

        Raises:
            EncodeError: If the value has no tree representation
        """
        if isinstance(obj, ConstValue):
            return obj.encode(TreeSink())
        if obj is None or isinstance(obj, (bool, int, float, str)):
            return obj
        if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
            return self._encode_record(obj)
        if isinstance(obj, (list, tuple)):
            return [self.encode(item) for item in obj]
        if isinstance(obj, dict):
            result = {}
            for key, value in obj.items():
                if not isinstance(key, str):
                    raise EncodeError(f"Mapping keys must be strings, not {type(key).__name__}")
                result[key] = self.encode(value)
            return result

        raise EncodeError(f"Cannot encode value of type {type(obj).__name__}")

    def _encode_record(self, obj: Any) -> Dict[str, Any]:
        tree = {}
        for f, hint in record_fields(type(obj)):
            if is_const_type(hint):
                tree[f.name] = hint.default().encode(TreeSink())
            else:
                tree[f.name] = self.encode(getattr(obj, f.name))
        return tree


_decoder = Decoder()
_encoder = Encoder()


def from_tree(data: Any, tp: Any) -> Any:
    """
    Decode a tree into a value of the given type.

    Args:
        data: JSON-compatible tree
        tp: Target type annotation

    Returns:
        The decoded value
    """
    return _decoder.decode(data, tp)


def to_tree(obj: Any) -> Any:
    """
    Encode a value into a JSON-compatible tree.

    Args:
        obj: Value to encode

    Returns:
        JSON-compatible tree
    """
    return _encoder.encode(obj)


def loads(text: str, tp: Any) -> Any:
    """
    Decode JSON text into a value of the given type.

    Args:
        text: JSON document
        tp: Target type annotation

    Returns:
        The decoded value

    Raises:
        json.JSONDecodeError: If the text is not valid JSON
        DecodeError: If the document does not match the type
    """
    return from_tree(json.loads(text), tp)


def dumps(obj: Any, **kwargs: Any) -> str:
    """
    Encode a value as JSON text.

    Args:
        obj: Value to encode
        **kwargs: Passed through to json.dumps

    Returns:
        JSON document
    """
    return json.dumps(to_tree(obj), **kwargs)
