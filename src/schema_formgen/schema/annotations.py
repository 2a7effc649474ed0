"""
Build schema nodes from Python type annotations.

Lets a dataclass act as the form schema, the same way parameter forms are
generated from dataclass fields and function signatures:

    @dataclass
    class Signup:
        name: str
        email: Annotated[str, EMAIL]
        website: Optional[str] = None
        role: Role = Role.EDITOR
        tags: list[str] = field(default_factory=list)

    schema = schema_from_dataclass(Signup)

Mapping rules:
- ``str`` → string, ``bool`` → boolean, ``int``/``float``/``Decimal`` → number
- ``date``/``datetime`` → date, ``Enum`` subclasses → enum
- ``Literal[x]`` → literal; ``Literal["a", "b"]`` → enum
- ``Optional[T]`` / ``T | None`` → nullable; other unions keep their order
- ``list``/``tuple``/``set``/``Sequence`` of ``T`` → array
- nested dataclasses → object
- ``Annotated[T, Check(...)]`` adds checks, ``Annotated[T, callable]`` adds a refinement
- fields with a default are wrapped in a default node, inside any nullable layer
"""

import dataclasses
import datetime
import logging
import types
from collections.abc import Sequence as AbcSequence, Set as AbcSet
from decimal import Decimal
from enum import Enum
from typing import (
    Annotated, Any, Dict, Literal, Type, Union, get_args, get_origin, get_type_hints,
)

from .nodes import (
    AnyNode, ArrayNode, BooleanNode, Check, DateNode, DefaultNode, EffectNode,
    EnumNode, LiteralNode, NullableNode, NumberNode, ObjectNode, SchemaNode,
    StringNode, UnionNode,
)

logger = logging.getLogger(__name__)

# Metadata key under which dataclass fields carry their FieldOverride
FORM_METADATA_KEY = "form"

_NONE_TYPE = type(None)
_SEQUENCE_ORIGINS = (list, tuple, set, frozenset, AbcSequence, AbcSet)
_NUMBER_TYPES = (int, float, Decimal)
_DATE_TYPES = (datetime.date, datetime.datetime)
# `X | Y` unions exist from Python 3.10 on
_UNION_TYPE = getattr(types, "UnionType", None)


def _is_union(tp: Any) -> bool:
    origin = get_origin(tp)
    return origin is Union or (_UNION_TYPE is not None and origin is _UNION_TYPE)


def _enum_values(enum_type: Type[Enum]) -> tuple:
    """Use member values when they are all strings, otherwise member names."""
    members = list(enum_type)
    if all(isinstance(member.value, str) for member in members):
        return tuple(member.value for member in members)
    return tuple(member.name for member in members)


def _apply_metadata(node: SchemaNode, metadata: tuple) -> SchemaNode:
    for item in metadata:
        if isinstance(item, Check):
            if isinstance(node, (StringNode, NumberNode)):
                node = dataclasses.replace(node, checks=node.checks + (item,))
            else:
                logger.debug(f"Ignoring {item} on non-leaf schema node {type(node).__name__}")
        elif callable(item):
            node = EffectNode(node, kind="refinement", fn=item)
    return node


def schema_from_annotation(annotation: Any) -> SchemaNode:
    """
    Convert a type annotation into a schema node.

    Args:
        annotation: Any annotation accepted by ``typing`` introspection

    Returns:
        The equivalent schema node; ``AnyNode`` for shapes with no counterpart

    Example:
        >>> schema_from_annotation(Optional[int])
        NullableNode(inner=NumberNode(checks=()))
    """
    origin = get_origin(annotation)

    if origin is Annotated:
        base, *metadata = get_args(annotation)
        return _apply_metadata(schema_from_annotation(base), tuple(metadata))

    if _is_union(annotation):
        args = get_args(annotation)
        non_none = [arg for arg in args if arg is not _NONE_TYPE]
        if len(non_none) == 1:
            inner = schema_from_annotation(non_none[0])
        else:
            inner = UnionNode(tuple(schema_from_annotation(arg) for arg in non_none))
        return NullableNode(inner) if len(non_none) < len(args) else inner

    if origin is Literal:
        values = get_args(annotation)
        if len(values) == 1:
            return LiteralNode(values[0])
        if all(isinstance(value, str) for value in values):
            return EnumNode(values)
        return UnionNode(tuple(LiteralNode(value) for value in values))

    if origin in _SEQUENCE_ORIGINS:
        args = [arg for arg in get_args(annotation) if arg is not Ellipsis]
        element = schema_from_annotation(args[0]) if args else AnyNode("unparameterized sequence")
        return ArrayNode(element)

    if annotation in (list, tuple, set, frozenset):
        return ArrayNode(AnyNode("unparameterized sequence"))

    if isinstance(annotation, type):
        # bool is a subclass of int, so it has to be checked first
        if issubclass(annotation, bool):
            return BooleanNode()
        if issubclass(annotation, Enum):
            return EnumNode(_enum_values(annotation))
        if issubclass(annotation, str):
            return StringNode()
        if issubclass(annotation, _NUMBER_TYPES):
            return NumberNode()
        if issubclass(annotation, _DATE_TYPES):
            return DateNode()
        if dataclasses.is_dataclass(annotation):
            return schema_from_dataclass(annotation)

    logger.debug(f"No schema shape for annotation {annotation!r}; using AnyNode")
    return AnyNode(repr(annotation))


def _field_default(dc_field: dataclasses.Field) -> Any:
    if dc_field.default is not dataclasses.MISSING:
        return dc_field.default
    if dc_field.default_factory is not dataclasses.MISSING:
        return dc_field.default_factory()
    return dataclasses.MISSING


def schema_from_dataclass(cls: Type) -> ObjectNode:
    """
    Build an object schema from a dataclass.

    Fields are resolved lazily so that a dataclass may reference itself
    through forward references.

    Raises:
        TypeError: If ``cls`` is not a dataclass type
    """
    if not (isinstance(cls, type) and dataclasses.is_dataclass(cls)):
        raise TypeError(f"{cls!r} is not a dataclass type")

    def build_fields() -> Dict[str, SchemaNode]:
        hints = get_type_hints(cls, include_extras=True)
        shape: Dict[str, SchemaNode] = {}
        for dc_field in dataclasses.fields(cls):
            if not dc_field.init:
                continue
            node = schema_from_annotation(hints.get(dc_field.name, Any))
            default = _field_default(dc_field)
            if default is not dataclasses.MISSING:
                # Nullable stays outermost so the field still reads as optional
                if isinstance(node, NullableNode):
                    node = NullableNode(DefaultNode(node.inner, default))
                else:
                    node = DefaultNode(node, default)
            shape[dc_field.name] = node
        return shape

    return ObjectNode(build_fields)


def overrides_from_dataclass(cls: Type) -> Dict[str, Any]:
    """
    Collect per-field overrides declared in dataclass field metadata.

    Example:
        @dataclass
        class Profile:
            bio: str = field(default="", metadata={"form": FieldOverride(explicit_type="textarea")})

        overrides_from_dataclass(Profile)  # {"bio": FieldOverride(explicit_type="textarea")}
    """
    if not dataclasses.is_dataclass(cls):
        raise TypeError(f"{cls!r} is not a dataclass type")
    return {
        dc_field.name: dc_field.metadata[FORM_METADATA_KEY]
        for dc_field in dataclasses.fields(cls)
        if FORM_METADATA_KEY in dc_field.metadata
    }
