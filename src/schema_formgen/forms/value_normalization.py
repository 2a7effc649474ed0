"""
Empty-value normalization.

Two entry points share one notion of "empty":
- ``normalize_change_value`` runs on every control change
- ``apply_empty_value_overrides`` runs once on validated values before submit
"""

import datetime
import logging
from typing import Any, Dict, Mapping, Optional, Union

from schema_formgen.forms.field_override import EmptyValuePolicy, FieldOverride
from schema_formgen.forms.form_constants import UNDEFINED

logger = logging.getLogger(__name__)


def is_empty_string(value: Any) -> bool:
    """True for ``""`` and whitespace-only strings."""
    return isinstance(value, str) and value.strip() == ""


def _is_absent(value: Any) -> bool:
    return value is None or value is UNDEFINED or is_empty_string(value)


def apply_empty_value_overrides(values: Mapping[str, Any],
                                overrides: Mapping[str, FieldOverride]) -> Dict[str, Any]:
    """
    Apply empty-value directives to submitted values.

    - null: empty string → None
    - undefined: empty string → UNDEFINED
    - zero: empty string, None or UNDEFINED → 0

    Fields without an override are passed through unchanged. The input
    mapping is not modified.

    Example:
        >>> apply_empty_value_overrides({"quantity": ""}, {"quantity": FieldOverride(empty_as_zero=True)})
        {'quantity': 0}
    """
    transformed = dict(values)

    for name, value in values.items():
        override = overrides.get(name)
        if override is None:
            continue

        policy = override.empty_value_policy
        if policy is EmptyValuePolicy.NULL and is_empty_string(value):
            transformed[name] = None
        elif policy is EmptyValuePolicy.UNDEFINED and is_empty_string(value):
            transformed[name] = UNDEFINED
        elif policy is EmptyValuePolicy.ZERO and _is_absent(value):
            transformed[name] = 0

    return transformed


def normalize_change_value(value: Any, override: Optional[FieldOverride]) -> Any:
    """
    Normalize a value coming out of a control before it reaches form state.

    - null: ``""`` or UNDEFINED → None
    - undefined: ``""`` or None → UNDEFINED
    - zero: ``""``, None or UNDEFINED → 0
    """
    if override is None:
        return value

    policy = override.empty_value_policy
    if policy is EmptyValuePolicy.NULL and (value == "" or value is UNDEFINED):
        return None
    if policy is EmptyValuePolicy.UNDEFINED and (value == "" or value is None):
        return UNDEFINED
    if policy is EmptyValuePolicy.ZERO and (value == "" or value is None or value is UNDEFINED):
        return 0
    return value


def strip_undefined(values: Mapping[str, Any]) -> Dict[str, Any]:
    """Drop UNDEFINED entries, the way an absent key is omitted from a payload."""
    return {name: value for name, value in values.items() if value is not UNDEFINED}


def normalize_date_to_iso(value: Union[datetime.date, str, None]) -> Optional[str]:
    """
    Normalize a date to midnight UTC and return it as an ISO-8601 string.

    Naive datetimes are taken as UTC; aware ones are converted to UTC first.

    Example:
        >>> normalize_date_to_iso(datetime.datetime(2024, 3, 15, 14, 30, tzinfo=datetime.timezone.utc))
        '2024-03-15T00:00:00.000Z'
        >>> normalize_date_to_iso(None) is None
        True
    """
    if not value:
        return None

    if isinstance(value, str):
        value = datetime.datetime.fromisoformat(value.replace("Z", "+00:00"))

    if isinstance(value, datetime.datetime):
        if value.tzinfo is not None:
            value = value.astimezone(datetime.timezone.utc)
        day = value.date()
    else:
        day = value

    return f"{day.isoformat()}T00:00:00.000Z"
