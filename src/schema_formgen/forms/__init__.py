"""
Form engine.

Classification of schema fields, default value synthesis, field type
resolution, the component registry, empty-value normalization, array
fields and the headless ``SchemaForm``.
"""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .form_constants import BaseKind, CONSTANTS, UNDEFINED
    from .exceptions import SchemaFormError, SchemaIntrospectionError, ArrayIndexError
    from .schema_type_utils import SchemaTypeUtils
    from .field_classification import FieldClassification, FieldClassifier, classify, classify_shape
    from .field_override import FieldOverride, FieldOption, EmptyValuePolicy
    from .default_values import synthesize_default_values, element_default_value
    from .field_type_resolver import resolve_field_type
    from .component_registry import ComponentRegistry
    from .value_normalization import (
        apply_empty_value_overrides, normalize_change_value, strip_undefined, normalize_date_to_iso,
    )
    from .array_field import ArrayFieldResolver, ArrayAddStrategy
    from .translation import Translator
    from .form_setup import FormSetup, FormStyles, FormUI, get_form_setup, set_form_setup
    from .schema_form import SchemaForm, FieldBinding, FieldProps, FieldRender

_EXPORTS = {
    "BaseKind": ("schema_formgen.forms.form_constants", "BaseKind"),
    "CONSTANTS": ("schema_formgen.forms.form_constants", "CONSTANTS"),
    "UNDEFINED": ("schema_formgen.forms.form_constants", "UNDEFINED"),
    "SchemaFormError": ("schema_formgen.forms.exceptions", "SchemaFormError"),
    "SchemaIntrospectionError": ("schema_formgen.forms.exceptions", "SchemaIntrospectionError"),
    "ArrayIndexError": ("schema_formgen.forms.exceptions", "ArrayIndexError"),
    "SchemaTypeUtils": ("schema_formgen.forms.schema_type_utils", "SchemaTypeUtils"),
    "FieldClassification": ("schema_formgen.forms.field_classification", "FieldClassification"),
    "FieldClassifier": ("schema_formgen.forms.field_classification", "FieldClassifier"),
    "classify": ("schema_formgen.forms.field_classification", "classify"),
    "classify_shape": ("schema_formgen.forms.field_classification", "classify_shape"),
    "FieldOverride": ("schema_formgen.forms.field_override", "FieldOverride"),
    "FieldOption": ("schema_formgen.forms.field_override", "FieldOption"),
    "EmptyValuePolicy": ("schema_formgen.forms.field_override", "EmptyValuePolicy"),
    "synthesize_default_values": ("schema_formgen.forms.default_values", "synthesize_default_values"),
    "element_default_value": ("schema_formgen.forms.default_values", "element_default_value"),
    "resolve_field_type": ("schema_formgen.forms.field_type_resolver", "resolve_field_type"),
    "ComponentRegistry": ("schema_formgen.forms.component_registry", "ComponentRegistry"),
    "apply_empty_value_overrides": ("schema_formgen.forms.value_normalization", "apply_empty_value_overrides"),
    "normalize_change_value": ("schema_formgen.forms.value_normalization", "normalize_change_value"),
    "strip_undefined": ("schema_formgen.forms.value_normalization", "strip_undefined"),
    "normalize_date_to_iso": ("schema_formgen.forms.value_normalization", "normalize_date_to_iso"),
    "ArrayFieldResolver": ("schema_formgen.forms.array_field", "ArrayFieldResolver"),
    "ArrayAddStrategy": ("schema_formgen.forms.array_field", "ArrayAddStrategy"),
    "Translator": ("schema_formgen.forms.translation", "Translator"),
    "FormSetup": ("schema_formgen.forms.form_setup", "FormSetup"),
    "FormStyles": ("schema_formgen.forms.form_setup", "FormStyles"),
    "FormUI": ("schema_formgen.forms.form_setup", "FormUI"),
    "get_form_setup": ("schema_formgen.forms.form_setup", "get_form_setup"),
    "set_form_setup": ("schema_formgen.forms.form_setup", "set_form_setup"),
    "SchemaForm": ("schema_formgen.forms.schema_form", "SchemaForm"),
    "FieldBinding": ("schema_formgen.forms.schema_form", "FieldBinding"),
    "FieldProps": ("schema_formgen.forms.schema_form", "FieldProps"),
    "FieldRender": ("schema_formgen.forms.schema_form", "FieldRender"),
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
