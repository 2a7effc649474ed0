"""
Schema algebra for form generation.

Immutable schema nodes, fluent constructor functions and an adapter that
builds schemas from dataclasses and type annotations.
"""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .nodes import (
        SchemaNode, StringNode, NumberNode, BooleanNode, DateNode, EnumNode,
        ArrayNode, ObjectNode, OptionalNode, NullableNode, DefaultNode,
        EffectNode, UnionNode, LiteralNode, AnyNode, Check, EMAIL, URL,
    )
    from .annotations import (
        schema_from_annotation, schema_from_dataclass, overrides_from_dataclass,
    )

_NODES = "schema_formgen.schema.nodes"
_ANNOTATIONS = "schema_formgen.schema.annotations"

_EXPORTS = {
    "SchemaNode": (_NODES, "SchemaNode"),
    "StringNode": (_NODES, "StringNode"),
    "NumberNode": (_NODES, "NumberNode"),
    "BooleanNode": (_NODES, "BooleanNode"),
    "DateNode": (_NODES, "DateNode"),
    "EnumNode": (_NODES, "EnumNode"),
    "ArrayNode": (_NODES, "ArrayNode"),
    "ObjectNode": (_NODES, "ObjectNode"),
    "OptionalNode": (_NODES, "OptionalNode"),
    "NullableNode": (_NODES, "NullableNode"),
    "DefaultNode": (_NODES, "DefaultNode"),
    "EffectNode": (_NODES, "EffectNode"),
    "UnionNode": (_NODES, "UnionNode"),
    "LiteralNode": (_NODES, "LiteralNode"),
    "AnyNode": (_NODES, "AnyNode"),
    "Check": (_NODES, "Check"),
    "EMAIL": (_NODES, "EMAIL"),
    "URL": (_NODES, "URL"),
    "schema_from_annotation": (_ANNOTATIONS, "schema_from_annotation"),
    "schema_from_dataclass": (_ANNOTATIONS, "schema_from_dataclass"),
    "overrides_from_dataclass": (_ANNOTATIONS, "overrides_from_dataclass"),
}


def __getattr__(name: str):
    if name in _EXPORTS:
        module_name, attr = _EXPORTS[name]
        module = importlib.import_module(module_name)
        value = getattr(module, attr)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = list(_EXPORTS.keys())
