"""Tests for field type resolution."""

import pytest

from schema_formgen.forms.field_classification import FieldClassification, classify
from schema_formgen.forms.field_override import FieldOverride
from schema_formgen.forms.field_type_resolver import resolve_field_type
from schema_formgen.forms.form_constants import BaseKind
from schema_formgen.schema import builders as s


@pytest.mark.parametrize("node, expected", [
    (s.string(), "text"),
    (s.string().email(), "email"),
    (s.string().url().optional(), "text"),
    (s.number(), "number"),
    (s.boolean(), "checkbox"),
    (s.date(), "date"),
    (s.enumeration("a", "b"), "select"),
    (s.array(s.string()), "text"),
    (s.obj(name=s.string()), "text"),
])
def test_inferred_field_types(node, expected):
    assert resolve_field_type(classify(node)) == expected


def test_explicit_type_wins():
    enum = FieldClassification(BaseKind.ENUM, enum_values=("a", "b"))
    assert resolve_field_type(enum, FieldOverride(explicit_type="radio")) == "radio"
    number = FieldClassification(BaseKind.NUMBER)
    assert resolve_field_type(number, FieldOverride(explicit_type="rating")) == "rating"


def test_override_without_explicit_type_falls_back_to_inference():
    email = classify(s.string().email())
    assert resolve_field_type(email, FieldOverride(label="Mail")) == "email"


def test_unknown_kind_is_text():
    assert resolve_field_type(FieldClassification(BaseKind.UNKNOWN)) == "text"
