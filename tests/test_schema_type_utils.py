"""Tests for unwrapping, optionality and shape extraction."""

import logging

import pytest

from schema_formgen.forms.exceptions import SchemaIntrospectionError
from schema_formgen.forms.schema_type_utils import SchemaTypeUtils
from schema_formgen.schema import builders as s
from schema_formgen.schema.nodes import (
    EMAIL, EnumNode, LiteralNode, NumberNode, OptionalNode, StringNode, UnionNode,
)


WRAPPED = [
    s.string(),
    s.string().optional(),
    s.string().nullable().optional(),
    s.number().default(3).nullable(),
    s.boolean().refine(lambda value: value),
    s.string().url().optional().or_(s.literal("")),
    s.literal("").or_(s.number()),
    s.literal("a").or_(s.literal("b")),
    s.array(s.string().optional()),
    s.enumeration("x", "y").transform(str.upper).optional(),
]


def test_unwrap_peels_every_wrapper_layer():
    node = s.string().email().refine(lambda v: "@" in v).default("a@b.c").nullable().optional()
    assert SchemaTypeUtils.unwrap(node) == StringNode((EMAIL,))


@pytest.mark.parametrize("node", WRAPPED)
def test_unwrap_is_idempotent(node):
    once = SchemaTypeUtils.unwrap(node)
    assert SchemaTypeUtils.unwrap(once) == once


def test_unwrap_skips_literal_union_options():
    assert SchemaTypeUtils.unwrap(s.literal("").or_(s.number().optional())) == NumberNode()


def test_unwrap_first_non_literal_option_wins():
    assert SchemaTypeUtils.unwrap(s.union(s.literal(""), s.string(), s.number())) == StringNode()


def test_unwrap_all_literal_union_returns_union():
    node = s.literal("a").or_(s.literal("b"))
    assert SchemaTypeUtils.unwrap(node) == node


def test_unwrap_does_not_descend_into_arrays():
    node = s.array(s.string().optional())
    assert SchemaTypeUtils.unwrap(node) == node


def test_unwrap_rejects_non_nodes():
    with pytest.raises(SchemaIntrospectionError):
        SchemaTypeUtils.unwrap("not a node")
    with pytest.raises(SchemaIntrospectionError):
        SchemaTypeUtils.unwrap(OptionalNode("broken"))


@pytest.mark.parametrize("inner", [s.string(), s.number(), s.literal(""), s.array(s.boolean())])
def test_optional_and_nullable_are_always_optional(inner):
    assert SchemaTypeUtils.is_optional(inner.optional())
    assert SchemaTypeUtils.is_optional(inner.nullable())


def test_union_with_literal_is_optional():
    assert SchemaTypeUtils.is_optional(s.string().or_(s.literal("")))
    assert SchemaTypeUtils.is_optional(s.literal(0).or_(s.number()))


def test_union_with_optional_option_is_optional():
    assert SchemaTypeUtils.is_optional(s.union(s.number(), s.string().optional()))
    assert SchemaTypeUtils.is_optional(s.union(s.number(), s.union(s.string(), s.literal(""))))


def test_plain_and_defaulted_nodes_are_not_optional():
    assert not SchemaTypeUtils.is_optional(s.string())
    assert not SchemaTypeUtils.is_optional(s.string().or_(s.number()))
    assert not SchemaTypeUtils.is_optional(s.string().default("x"))
    assert not SchemaTypeUtils.is_optional(s.string().optional().refine(bool))


def test_is_email_string():
    assert SchemaTypeUtils.is_email_string(s.string().email())
    assert not SchemaTypeUtils.is_email_string(s.string().url())
    assert not SchemaTypeUtils.is_email_string(EnumNode(("email",)))


def test_get_object_shape_peels_form_level_effects():
    schema = s.obj(password=s.string(), confirm=s.string()).refine(
        lambda values: values["password"] == values["confirm"], "Passwords differ"
    )
    assert list(SchemaTypeUtils.get_object_shape(schema)) == ["password", "confirm"]


def test_get_object_shape_resolves_lazy_fields():
    schema = s.obj(lambda: {"name": s.string()})
    assert SchemaTypeUtils.get_object_shape(schema) == {"name": StringNode()}


def test_get_object_shape_failure_logs_and_returns_empty(caplog):
    def broken():
        raise RuntimeError("boom")

    with caplog.at_level(logging.ERROR):
        assert SchemaTypeUtils.get_object_shape(s.obj(broken)) == {}
        assert SchemaTypeUtils.get_object_shape(s.string()) == {}

    messages = [record.getMessage() for record in caplog.records]
    assert any("boom" in message for message in messages)
    assert any("StringNode" in message for message in messages)


def test_union_options_are_kept_in_declaration_order():
    node = s.union(s.number(), s.string())
    assert isinstance(node, UnionNode)
    assert node.options[0] == NumberNode()
    assert isinstance(s.literal("").or_(s.string()).options[0], LiteralNode)
