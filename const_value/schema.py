"""
JSON Schema export for decodable types.
"""

import typing
from typing import Any, Dict, List

from .codec import (
    PRIMITIVE_TYPES,
    has_default,
    is_optional,
    is_record,
    is_union,
    record_fields,
    type_name
)
from .constant import is_const_type
from .exceptions import UnsupportedTypeError
from .utils import SchemaKeywords

DRAFT = "https://json-schema.org/draft/2020-12/schema"


def json_schema_for(tp: Any, deny_unknown_fields: bool = False) -> Dict[str, Any]:
    """
    Describe a type annotation as a JSON Schema.

    Constants become ``const`` keywords, so the schema accepts exactly
    what a Decoder accepts for the same type.

    Args:
        tp: Type annotation
        deny_unknown_fields: Whether records forbid additional properties

    Returns:
        JSON Schema document
    """
    schema = {SchemaKeywords.SCHEMA: DRAFT}
    schema.update(_schema(tp, deny_unknown_fields))
    return schema


def _schema(tp: Any, deny_unknown_fields: bool) -> Dict[str, Any]:
    if tp is Any:
        return {}
    if is_const_type(tp):
        return {
            SchemaKeywords.TYPE: tp.kind.json_type,
            SchemaKeywords.CONST: tp.kind.to_primitive(tp.value),
        }
    if tp is None or tp is type(None):
        return {SchemaKeywords.TYPE: "null"}
    if is_union(tp):
        return {SchemaKeywords.ANY_OF: [
            _schema(variant, deny_unknown_fields)
            for variant in typing.get_args(tp)
        ]}
    if tp in PRIMITIVE_TYPES:
        return {SchemaKeywords.TYPE: PRIMITIVE_TYPES[tp]}

    origin = typing.get_origin(tp)
    args = typing.get_args(tp)
    if tp is list or origin is list:
        schema = {SchemaKeywords.TYPE: "array"}
        if args and args[0] is not Any:
            schema[SchemaKeywords.ITEMS] = _schema(args[0], deny_unknown_fields)
        return schema
    if tp is dict or origin is dict:
        schema = {SchemaKeywords.TYPE: "object"}
        if args and args[1] is not Any:
            schema[SchemaKeywords.ADDITIONAL_PROPERTIES] = _schema(args[1], deny_unknown_fields)
        return schema
    if is_record(tp):
        return _record_schema(tp, deny_unknown_fields)

    raise UnsupportedTypeError(f"Cannot describe {type_name(tp)} as a JSON Schema")


def _record_schema(tp: type, deny_unknown_fields: bool) -> Dict[str, Any]:
    properties = {}
    required: List[str] = []
    for f, hint in record_fields(tp):
        properties[f.name] = _schema(hint, deny_unknown_fields)
        if not has_default(f) and not is_optional(hint):
            required.append(f.name)

    schema = {
        SchemaKeywords.TITLE: tp.__name__,
        SchemaKeywords.TYPE: "object",
        SchemaKeywords.PROPERTIES: properties,
    }
    if required:
        schema[SchemaKeywords.REQUIRED] = required
    if deny_unknown_fields:
        schema[SchemaKeywords.ADDITIONAL_PROPERTIES] = False
    return schema
