"""
Default value synthesis.

Computes the initial value of every field from its classification and
override, then overlays caller-provided values. The per-kind policy:

    kind      no override   empty_as_zero   empty_as_null   empty_as_undefined
    string    ""            ""              None            UNDEFINED
    number    None          0               None            UNDEFINED
    boolean   False
    date      None
    enum      UNDEFINED
    other     UNDEFINED

Directives are resolved with precedence null > undefined > zero.
"""

import logging
from typing import Any, Dict, Mapping, Optional

from schema_formgen.forms.field_classification import FieldClassification
from schema_formgen.forms.field_override import EmptyValuePolicy, FieldOverride
from schema_formgen.forms.form_constants import BaseKind, UNDEFINED

logger = logging.getLogger(__name__)


def _string_default(policy: EmptyValuePolicy) -> Any:
    if policy is EmptyValuePolicy.NULL:
        return None
    if policy is EmptyValuePolicy.UNDEFINED:
        return UNDEFINED
    return ""


def _number_default(policy: EmptyValuePolicy) -> Any:
    if policy is EmptyValuePolicy.NULL:
        return None
    if policy is EmptyValuePolicy.UNDEFINED:
        return UNDEFINED
    if policy is EmptyValuePolicy.ZERO:
        return 0
    return None


_KIND_DEFAULTS = {
    BaseKind.STRING: _string_default,
    BaseKind.NUMBER: _number_default,
    BaseKind.BOOLEAN: lambda policy: False,
    BaseKind.DATE: lambda policy: None,
    BaseKind.ENUM: lambda policy: UNDEFINED,
}


def element_default_value(classification: FieldClassification,
                          override: Optional[FieldOverride] = None) -> Any:
    """
    Single-value default for one field (or one array element).

    Args:
        classification: Classification of the field or element
        override: Override whose empty-value directives apply

    Returns:
        The synthesized default value
    """
    policy = override.empty_value_policy if override is not None else EmptyValuePolicy.NONE
    factory = _KIND_DEFAULTS.get(classification.base_kind)
    if factory is None:
        return UNDEFINED
    return factory(policy)


def synthesize_default_values(
    fields: Mapping[str, FieldClassification],
    provided: Optional[Mapping[str, Any]] = None,
    overrides: Optional[Mapping[str, FieldOverride]] = None,
) -> Dict[str, Any]:
    """
    Compute a complete default value map.

    A field present in ``provided`` keeps the provided value verbatim, even
    when that value is None or UNDEFINED. Provided keys that are not schema
    fields are carried over as well.

    Never raises: on internal failure an empty mapping is returned and the
    error is logged.

    Example:
        >>> synthesize_default_values({"age": FieldClassification(BaseKind.NUMBER)})
        {'age': None}
    """
    provided = provided or {}
    overrides = overrides or {}
    try:
        defaults: Dict[str, Any] = {}
        for name, classification in fields.items():
            if name in provided:
                defaults[name] = provided[name]
                continue
            defaults[name] = element_default_value(classification, overrides.get(name))

        defaults.update(provided)
        return defaults
    except Exception as e:
        logger.error(f"Error initializing default values: {e}")
        return {}
