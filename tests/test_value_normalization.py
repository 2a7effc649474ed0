"""Tests for empty-value normalization and date helpers."""

import datetime

import pytest

from schema_formgen.forms.field_override import FieldOverride
from schema_formgen.forms.form_constants import UNDEFINED
from schema_formgen.forms.value_normalization import (
    apply_empty_value_overrides, is_empty_string, normalize_change_value,
    normalize_date_to_iso, strip_undefined,
)

ZERO = FieldOverride(empty_as_zero=True)
NULL = FieldOverride(empty_as_null=True)
UNDEF = FieldOverride(empty_as_undefined=True)


def test_is_empty_string():
    assert is_empty_string("")
    assert is_empty_string("   \t")
    assert not is_empty_string(" x ")
    assert not is_empty_string(None)
    assert not is_empty_string(0)


def test_empty_as_zero_on_submit():
    assert apply_empty_value_overrides({"quantity": ""}, {"quantity": ZERO}) == {"quantity": 0}
    assert apply_empty_value_overrides({"quantity": UNDEFINED}, {"quantity": ZERO}) == {"quantity": 0}
    assert apply_empty_value_overrides({"quantity": None}, {"quantity": ZERO}) == {"quantity": 0}
    assert apply_empty_value_overrides({"quantity": 5}, {"quantity": ZERO}) == {"quantity": 5}


def test_empty_as_null_and_undefined_on_submit():
    values = {"a": "  ", "b": "", "c": "kept"}
    result = apply_empty_value_overrides(values, {"a": NULL, "b": UNDEF, "c": NULL})
    assert result["a"] is None
    assert result["b"] is UNDEFINED
    assert result["c"] == "kept"


def test_fields_without_override_pass_through():
    values = {"name": "", "age": None}
    result = apply_empty_value_overrides(values, {"other": ZERO})
    assert result == values
    assert result is not values


def test_input_mapping_is_not_modified():
    values = {"quantity": ""}
    apply_empty_value_overrides(values, {"quantity": ZERO})
    assert values == {"quantity": ""}


def test_submit_precedence_null_wins():
    both = FieldOverride(empty_as_null=True, empty_as_zero=True)
    assert apply_empty_value_overrides({"n": ""}, {"n": both}) == {"n": None}


@pytest.mark.parametrize("override, value, expected", [
    (NULL, "", None),
    (NULL, UNDEFINED, None),
    (NULL, "x", "x"),
    (UNDEF, "", UNDEFINED),
    (UNDEF, None, UNDEFINED),
    (ZERO, "", 0),
    (ZERO, None, 0),
    (ZERO, UNDEFINED, 0),
    (ZERO, 3, 3),
    (None, "", ""),
])
def test_normalize_change_value(override, value, expected):
    assert normalize_change_value(value, override) == expected


def test_strip_undefined():
    assert strip_undefined({"a": UNDEFINED, "b": None, "c": 0}) == {"b": None, "c": 0}


def test_undefined_sentinel():
    import copy

    assert not UNDEFINED
    assert repr(UNDEFINED) == "UNDEFINED"
    assert copy.deepcopy(UNDEFINED) is UNDEFINED
    assert type(UNDEFINED)() is UNDEFINED


def test_normalize_date_to_iso():
    assert normalize_date_to_iso(datetime.date(2024, 3, 15)) == "2024-03-15T00:00:00.000Z"
    assert normalize_date_to_iso(datetime.datetime(2024, 3, 15, 23, 59)) == "2024-03-15T00:00:00.000Z"
    assert normalize_date_to_iso("2024-03-15T10:30:00Z") == "2024-03-15T00:00:00.000Z"
    assert normalize_date_to_iso(None) is None
    assert normalize_date_to_iso("") is None


def test_normalize_date_to_iso_converts_aware_datetimes_to_utc():
    tz = datetime.timezone(datetime.timedelta(hours=2))
    value = datetime.datetime(2024, 3, 16, 1, 0, tzinfo=tz)
    assert normalize_date_to_iso(value) == "2024-03-15T00:00:00.000Z"


def test_overrides_are_hashable():
    with_props = FieldOverride(empty_as_zero=True, component_props={"steps": [1, 5]})
    same = FieldOverride(empty_as_zero=True, component_props={"steps": [1, 5]})

    assert hash(FieldOverride()) == hash(FieldOverride())
    assert hash(with_props) == hash(same)
    assert with_props == same
    assert with_props != FieldOverride(empty_as_zero=True)
    assert len({ZERO, NULL, UNDEF, FieldOverride(empty_as_zero=True)}) == 3
