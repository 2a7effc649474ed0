"""
Caller-supplied per-field configuration.

Overrides take precedence over everything the engine infers from the schema:
the control type, label, placeholder, options and empty-value handling.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Tuple, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldOption:
    """Option for select and radio fields."""
    label: str
    value: str


def options_from_values(values: Iterable[str]) -> Tuple[FieldOption, ...]:
    """Build options whose label equals their value."""
    return tuple(FieldOption(label=value, value=value) for value in values)


class EmptyValuePolicy(Enum):
    """How an empty value is represented for a field."""
    NONE = "none"
    NULL = "null"
    UNDEFINED = "undefined"
    ZERO = "zero"


@dataclass(frozen=True)
class FieldOverride:
    """
    Override configuration for a single field.

    Attributes:
        explicit_type: Field type tag that replaces the inferred one
        label: Label text (default: translation of the field name)
        placeholder: Placeholder text
        description: Help text displayed below the field
        disabled: Disable the field
        options: Options for select/radio fields, replacing inferred enum values
        empty_as_null: Represent empty values as None
        empty_as_undefined: Represent empty values as UNDEFINED
        empty_as_zero: Represent empty values as 0
        custom_renderer: Control used instead of the registered one
        hide_label: Hide the label
        component_props: Extra props passed through to the control
    """
    explicit_type: Optional[str] = None
    label: Optional[str] = None
    placeholder: Optional[str] = None
    description: Optional[str] = None
    disabled: bool = False
    options: Optional[Tuple[FieldOption, ...]] = None
    empty_as_null: bool = False
    empty_as_undefined: bool = False
    empty_as_zero: bool = False
    custom_renderer: Optional[Callable[..., Any]] = None
    hide_label: bool = False
    component_props: Dict[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        if self.options is not None:
            object.__setattr__(self, "options", tuple(
                option if isinstance(option, FieldOption) else FieldOption(**option)
                for option in self.options
            ))
        directives = [self.empty_as_null, self.empty_as_undefined, self.empty_as_zero]
        if sum(directives) > 1:
            logger.debug(
                f"Several empty-value directives set; resolving as {self.empty_value_policy.value}"
            )

    @property
    def empty_value_policy(self) -> EmptyValuePolicy:
        """Resolve the empty-value directives with precedence null > undefined > zero."""
        if self.empty_as_null:
            return EmptyValuePolicy.NULL
        if self.empty_as_undefined:
            return EmptyValuePolicy.UNDEFINED
        if self.empty_as_zero:
            return EmptyValuePolicy.ZERO
        return EmptyValuePolicy.NONE

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> "FieldOverride":
        """
        Build an override from a plain mapping, rejecting unknown keys.

        Raises:
            ValueError: If the mapping contains keys that are not override attributes
        """
        known = {f.name for f in fields(cls)}
        unknown = set(config) - known
        if unknown:
            raise ValueError(f"Invalid override keys: {sorted(unknown)}")
        return cls(**config)


OverrideLike = Union[FieldOverride, Mapping[str, Any]]


def coerce_overrides(overrides: Optional[Mapping[str, OverrideLike]]) -> Dict[str, FieldOverride]:
    """Normalize a name→override mapping whose values may be plain mappings."""
    if not overrides:
        return {}
    return {
        name: override if isinstance(override, FieldOverride) else FieldOverride.from_mapping(override)
        for name, override in overrides.items()
        if override is not None
    }
