"""
Field type resolution.

Maps a classification (plus optional override) to a field type tag. The
override always wins, even when no control is registered for its tag;
that condition surfaces later, at dispatch.
"""

from typing import Optional

from schema_formgen.forms.field_classification import FieldClassification
from schema_formgen.forms.field_override import FieldOverride
from schema_formgen.forms.form_constants import BaseKind, CONSTANTS

# Field type tags are an open vocabulary: built-in tags plus any tag a caller registers
FieldType = str

_KIND_FIELD_TYPES = {
    BaseKind.NUMBER: CONSTANTS.NUMBER,
    BaseKind.BOOLEAN: CONSTANTS.CHECKBOX,
    BaseKind.DATE: CONSTANTS.DATE,
    BaseKind.ENUM: CONSTANTS.SELECT,
}


def resolve_field_type(classification: FieldClassification,
                       override: Optional[FieldOverride] = None) -> FieldType:
    """
    Determine the field type from a classification and an override.

    Example:
        >>> resolve_field_type(FieldClassification(BaseKind.ENUM, enum_values=("a", "b")))
        'select'
        >>> resolve_field_type(FieldClassification(BaseKind.ENUM, enum_values=("a",)),
        ...                    FieldOverride(explicit_type="radio"))
        'radio'
    """
    if override is not None and override.explicit_type:
        return override.explicit_type

    if classification.base_kind is BaseKind.STRING:
        return CONSTANTS.EMAIL if classification.is_email_shaped else CONSTANTS.TEXT

    return _KIND_FIELD_TYPES.get(classification.base_kind, CONSTANTS.TEXT)
