"""Tests for default value synthesis."""

import logging

import pytest

from schema_formgen.forms.default_values import element_default_value, synthesize_default_values
from schema_formgen.forms.field_classification import FieldClassification
from schema_formgen.forms.field_override import FieldOverride
from schema_formgen.forms.form_constants import UNDEFINED, BaseKind

STRING = FieldClassification(BaseKind.STRING)
NUMBER = FieldClassification(BaseKind.NUMBER)
BOOLEAN = FieldClassification(BaseKind.BOOLEAN)
DATE = FieldClassification(BaseKind.DATE)
ENUM = FieldClassification(BaseKind.ENUM, enum_values=("a", "b"))
ARRAY = FieldClassification(BaseKind.ARRAY, element_classification=STRING)
UNKNOWN = FieldClassification(BaseKind.UNKNOWN)


def test_defaults_without_overrides():
    fields = {
        "name": STRING, "age": NUMBER, "active": BOOLEAN, "born": DATE,
        "role": ENUM, "tags": ARRAY, "extra": UNKNOWN,
    }
    assert synthesize_default_values(fields) == {
        "name": "", "age": None, "active": False, "born": None,
        "role": UNDEFINED, "tags": UNDEFINED, "extra": UNDEFINED,
    }


@pytest.mark.parametrize("override, expected_string, expected_number", [
    (FieldOverride(empty_as_null=True), None, None),
    (FieldOverride(empty_as_undefined=True), UNDEFINED, UNDEFINED),
    (FieldOverride(empty_as_zero=True), "", 0),
])
def test_empty_value_directives(override, expected_string, expected_number):
    assert element_default_value(STRING, override) == expected_string
    assert element_default_value(NUMBER, override) == expected_number


def test_number_default_null_vs_zero():
    fields = {"quantity": NUMBER}
    assert synthesize_default_values(fields) == {"quantity": None}
    assert synthesize_default_values(
        fields, overrides={"quantity": FieldOverride(empty_as_zero=True)}
    ) == {"quantity": 0}


def test_directive_precedence_null_over_undefined_over_zero():
    both = FieldOverride(empty_as_null=True, empty_as_zero=True)
    assert element_default_value(NUMBER, both) is None
    undefined_and_zero = FieldOverride(empty_as_undefined=True, empty_as_zero=True)
    assert element_default_value(NUMBER, undefined_and_zero) is UNDEFINED


def test_directives_do_not_apply_to_other_kinds():
    override = FieldOverride(empty_as_zero=True)
    assert element_default_value(BOOLEAN, override) is False
    assert element_default_value(DATE, override) is None
    assert element_default_value(ENUM, override) is UNDEFINED


def test_provided_values_win_verbatim():
    fields = {"count": NUMBER, "name": STRING, "role": ENUM}
    provided = {"count": 0, "name": None, "role": UNDEFINED}
    result = synthesize_default_values(
        fields, provided, {"count": FieldOverride(empty_as_null=True)}
    )
    assert result["count"] == 0
    assert result["name"] is None
    assert result["role"] is UNDEFINED


def test_result_is_total_and_keeps_extra_provided_keys():
    result = synthesize_default_values({"a": STRING, "b": BOOLEAN}, {"id": 7})
    assert result == {"a": "", "b": False, "id": 7}


def test_failure_logs_and_returns_empty(caplog):
    class BrokenFields(dict):
        def items(self):
            raise RuntimeError("bad shape")

    with caplog.at_level(logging.ERROR):
        assert synthesize_default_values(BrokenFields(x=STRING)) == {}
    assert "bad shape" in caplog.text
