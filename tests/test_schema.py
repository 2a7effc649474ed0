"""Tests for the schema node algebra and the annotation adapter."""

import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

import pytest

from schema_formgen.forms.field_override import FieldOverride
from schema_formgen.schema import builders as s
from schema_formgen.schema.annotations import (
    overrides_from_dataclass, schema_from_annotation, schema_from_dataclass,
)
from schema_formgen.schema.nodes import (
    EMAIL, AnyNode, ArrayNode, BooleanNode, Check, DateNode, DefaultNode, EffectNode,
    EnumNode, LiteralNode, NullableNode, NumberNode, ObjectNode, OptionalNode,
    StringNode, UnionNode,
)


class Role(Enum):
    ADMIN = "admin"
    EDITOR = "editor"


class Priority(Enum):
    LOW = 1
    HIGH = 2


@dataclass
class Address:
    street: str
    zip_code: Optional[str] = None


@dataclass
class Signup:
    name: str
    email: Annotated[str, EMAIL]
    age: Optional[int] = None
    role: Role = Role.EDITOR
    plan: Literal["free", "pro"] = "free"
    tags: List[str] = field(default_factory=list)
    newsletter: bool = False
    address: Optional[Address] = None
    bio: str = field(default="", metadata={"form": FieldOverride(explicit_type="textarea")})


def test_fluent_wrappers_nest_in_call_order():
    node = s.string().email().optional().nullable()
    assert node == NullableNode(OptionalNode(StringNode((EMAIL,))))


def test_string_checks_accumulate():
    node = s.string().min_length(2).max_length(10).url()
    assert node.checks == (Check("min_length", 2), Check("max_length", 10), Check("url"))
    assert node.has_check("url")
    assert not node.has_check("email")


def test_number_checks():
    node = s.number().min(0).max(5).integer()
    assert [check.kind for check in node.checks] == ["min", "max", "int"]


def test_union_or_extends_options():
    node = s.string().or_(s.number()).or_(s.literal(""))
    assert isinstance(node, UnionNode)
    assert node.options == (StringNode(), NumberNode(), LiteralNode(""))


def test_refine_and_transform_wrap_in_effects():
    check = lambda value: bool(value)
    refined = s.string().refine(check, "required")
    assert isinstance(refined, EffectNode)
    assert refined.kind == "refinement"
    assert refined.message == "required"
    assert s.number().transform(abs).kind == "transform"


def test_enumeration_accepts_varargs_or_iterable():
    assert s.enumeration("a", "b").values == ("a", "b")
    assert s.enumeration(["a", "b"]).values == ("a", "b")


def test_obj_from_kwargs_mapping_and_callable():
    assert s.obj(name=s.string()).shape() == {"name": StringNode()}
    assert s.obj({"a": s.boolean()}, b=s.date()).shape() == {"a": BooleanNode(), "b": DateNode()}
    lazy = s.obj(lambda: {"n": s.number()})
    assert lazy.shape() == {"n": NumberNode()}


def test_annotation_scalars():
    assert schema_from_annotation(str) == StringNode()
    assert schema_from_annotation(int) == NumberNode()
    assert schema_from_annotation(float) == NumberNode()
    assert schema_from_annotation(bool) == BooleanNode()


def test_annotation_optional_is_nullable():
    assert schema_from_annotation(Optional[int]) == NullableNode(NumberNode())
    assert schema_from_annotation(Union[str, int, None]) == NullableNode(
        UnionNode((StringNode(), NumberNode()))
    )


def test_annotation_literals():
    assert schema_from_annotation(Literal[""]) == LiteralNode("")
    assert schema_from_annotation(Literal["a", "b"]) == EnumNode(("a", "b"))
    assert schema_from_annotation(Literal[1, 2]) == UnionNode((LiteralNode(1), LiteralNode(2)))


def test_annotation_enums_use_string_values_or_names():
    assert schema_from_annotation(Role) == EnumNode(("admin", "editor"))
    assert schema_from_annotation(Priority) == EnumNode(("LOW", "HIGH"))


def test_annotation_sequences():
    assert schema_from_annotation(List[str]) == ArrayNode(StringNode())
    assert schema_from_annotation(list) == ArrayNode(AnyNode("unparameterized sequence"))


def test_annotation_annotated_adds_checks_and_refinements():
    assert schema_from_annotation(Annotated[str, EMAIL]) == StringNode((EMAIL,))
    refined = schema_from_annotation(Annotated[int, lambda value: value > 0])
    assert isinstance(refined, EffectNode)
    assert refined.inner == NumberNode()


def test_annotation_unknown_type_is_any():
    assert isinstance(schema_from_annotation(dict), AnyNode)


def test_schema_from_dataclass_shape():
    shape = schema_from_dataclass(Signup).shape()

    assert list(shape) == [
        "name", "email", "age", "role", "plan", "tags", "newsletter", "address", "bio",
    ]
    assert shape["name"] == StringNode()
    assert shape["email"] == StringNode((EMAIL,))
    assert shape["age"] == NullableNode(DefaultNode(NumberNode(), None))
    assert shape["role"] == DefaultNode(EnumNode(("admin", "editor")), Role.EDITOR)
    assert shape["plan"] == DefaultNode(EnumNode(("free", "pro")), "free")
    assert shape["tags"] == DefaultNode(ArrayNode(StringNode()), [])
    assert shape["newsletter"] == DefaultNode(BooleanNode(), False)


def test_schema_from_dataclass_nests_dataclasses():
    address = schema_from_dataclass(Signup).shape()["address"]
    assert isinstance(address, NullableNode)
    nested = address.inner.inner
    assert isinstance(nested, ObjectNode)
    assert nested.shape() == {
        "street": StringNode(),
        "zip_code": NullableNode(DefaultNode(StringNode(), None)),
    }


def test_schema_from_dataclass_rejects_non_dataclass():
    with pytest.raises(TypeError):
        schema_from_dataclass(Role)


def test_overrides_from_dataclass():
    assert overrides_from_dataclass(Signup) == {"bio": FieldOverride(explicit_type="textarea")}


@pytest.mark.parametrize("annotation, expected", [
    (str, False),
    (List[int], False),
    (Optional[int], True),
    (Union[str, int], True),
])
def test_union_detection(annotation, expected):
    from schema_formgen.schema.annotations import _is_union

    assert _is_union(annotation) is expected


@pytest.mark.skipif(sys.version_info < (3, 10), reason="PEP 604 unions need Python 3.10")
def test_annotation_pep604_union():
    assert schema_from_annotation(eval("int | None")) == NullableNode(NumberNode())
