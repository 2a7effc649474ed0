"""Constructor functions for schema nodes, meant to be imported as a namespace.

    >>> from schema_formgen.schema import builders as s
    >>> schema = s.obj(
    ...     name=s.string(),
    ...     email=s.string().email(),
    ...     website=s.string().url().optional().or_(s.literal("")),
    ...     role=s.enumeration("admin", "editor"),
    ... )
"""

from typing import Any, Callable, Mapping, Union

from .nodes import (
    ArrayNode, BooleanNode, DateNode, EnumNode, LiteralNode, NumberNode,
    ObjectNode, SchemaNode, StringNode, UnionNode,
)


def string() -> StringNode:
    return StringNode()


def number() -> NumberNode:
    return NumberNode()


def boolean() -> BooleanNode:
    return BooleanNode()


def date() -> DateNode:
    return DateNode()


def enumeration(*values: str) -> EnumNode:
    """Enum of string values; a single iterable argument is also accepted."""
    if len(values) == 1 and not isinstance(values[0], str):
        values = tuple(values[0])
    return EnumNode(values)


def literal(value: Any) -> LiteralNode:
    return LiteralNode(value)


def array(element: SchemaNode) -> ArrayNode:
    return ArrayNode(element)


def union(*options: SchemaNode) -> UnionNode:
    return UnionNode(options)


def obj(
    fields: Union[Mapping[str, SchemaNode], Callable[[], Mapping[str, SchemaNode]], None] = None,
    **named: SchemaNode,
) -> ObjectNode:
    """Object schema from a mapping, a lazy callable, or keyword arguments."""
    if fields is None:
        return ObjectNode(dict(named))
    if callable(fields):
        return ObjectNode(fields)
    merged = dict(fields)
    merged.update(named)
    return ObjectNode(merged)


