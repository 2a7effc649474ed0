"""
Schema node algebra.

A schema is a tree of immutable nodes describing the validated shape of form
values. Leaf shapes (string, number, boolean, date, enum) carry their checks;
wrapper shapes (optional, nullable, default, effect) carry exactly one inner
node; unions carry an ordered tuple of options where order is significant.

Nodes are built fluently:

    >>> from schema_formgen.schema import builders as s
    >>> s.string().email().optional().nullable()
    NullableNode(inner=OptionalNode(inner=StringNode(checks=(Check(kind='email', value=None),))))

The form engine never validates values against these nodes; it only inspects
their structure to classify fields for UI purposes.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Mapping, Optional, Tuple, Union


@dataclass(frozen=True)
class Check:
    """A validation marker attached to a leaf node (e.g. ``email``, ``min_length``)."""
    kind: str
    value: Any = None


EMAIL = Check("email")
URL = Check("url")


@dataclass(frozen=True)
class SchemaNode:
    """Base class for every schema shape."""

    def optional(self) -> "OptionalNode":
        return OptionalNode(self)

    def nullable(self) -> "NullableNode":
        return NullableNode(self)

    def default(self, value: Any) -> "DefaultNode":
        return DefaultNode(self, value)

    def refine(self, check: Callable[[Any], bool], message: Optional[str] = None) -> "EffectNode":
        return EffectNode(self, kind="refinement", fn=check, message=message)

    def transform(self, fn: Callable[[Any], Any]) -> "EffectNode":
        return EffectNode(self, kind="transform", fn=fn)

    def or_(self, other: "SchemaNode") -> "UnionNode":
        return UnionNode((self, other))


# ---------------------------------------------------------------------------
# Leaf shapes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class StringNode(SchemaNode):
    checks: Tuple[Check, ...] = ()

    def _with(self, check: Check) -> "StringNode":
        return replace(self, checks=self.checks + (check,))

    def email(self) -> "StringNode":
        return self._with(EMAIL)

    def url(self) -> "StringNode":
        return self._with(URL)

    def min_length(self, length: int) -> "StringNode":
        return self._with(Check("min_length", length))

    def max_length(self, length: int) -> "StringNode":
        return self._with(Check("max_length", length))

    def has_check(self, kind: str) -> bool:
        return any(check.kind == kind for check in self.checks)


@dataclass(frozen=True)
class NumberNode(SchemaNode):
    checks: Tuple[Check, ...] = ()

    def min(self, value: float) -> "NumberNode":
        return replace(self, checks=self.checks + (Check("min", value),))

    def max(self, value: float) -> "NumberNode":
        return replace(self, checks=self.checks + (Check("max", value),))

    def integer(self) -> "NumberNode":
        return replace(self, checks=self.checks + (Check("int"),))


@dataclass(frozen=True)
class BooleanNode(SchemaNode):
    pass


@dataclass(frozen=True)
class DateNode(SchemaNode):
    pass


@dataclass(frozen=True)
class EnumNode(SchemaNode):
    values: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "values", tuple(self.values))


@dataclass(frozen=True)
class LiteralNode(SchemaNode):
    value: Any = None


@dataclass(frozen=True)
class AnyNode(SchemaNode):
    """Shape the algebra cannot describe (``typing.Any``, mappings, custom classes)."""
    description: str = ""


# ---------------------------------------------------------------------------
# Composite shapes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ArrayNode(SchemaNode):
    element: SchemaNode = field(default_factory=AnyNode)


FieldsSource = Union[Mapping[str, SchemaNode], Callable[[], Mapping[str, SchemaNode]]]


@dataclass(frozen=True)
class ObjectNode(SchemaNode):
    """
    Object shape with named fields.

    ``fields`` may be a mapping or a zero-argument callable returning one,
    which allows self-referencing (lazy) schemas.
    """
    fields: FieldsSource = field(default_factory=dict)

    def shape(self) -> Mapping[str, SchemaNode]:
        source = self.fields
        return source() if callable(source) else source


@dataclass(frozen=True)
class UnionNode(SchemaNode):
    options: Tuple[SchemaNode, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "options", tuple(self.options))

    def or_(self, other: SchemaNode) -> "UnionNode":
        return UnionNode(self.options + (other,))


# ---------------------------------------------------------------------------
# Wrapper shapes (exactly one inner node)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class OptionalNode(SchemaNode):
    inner: SchemaNode


@dataclass(frozen=True)
class NullableNode(SchemaNode):
    inner: SchemaNode


@dataclass(frozen=True)
class DefaultNode(SchemaNode):
    inner: SchemaNode
    value: Any = None


@dataclass(frozen=True)
class EffectNode(SchemaNode):
    """Refinement, transform or cross-field check around an inner node."""
    inner: SchemaNode
    kind: str = "refinement"
    fn: Optional[Callable[..., Any]] = field(default=None, compare=False)
    message: Optional[str] = None


WRAPPER_NODE_TYPES = (OptionalNode, NullableNode, DefaultNode, EffectNode)
