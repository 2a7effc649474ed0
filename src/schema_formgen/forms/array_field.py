"""
Array field sub-resolution.

An array field is rendered as one control per element. The element control
type comes from resolving the element classification with the array field's
own override, so ``FieldOverride(explicit_type="radio")`` on a list of enums
gives one radio group per element.

Every item operation is pure: it returns a new list and never mutates the
sequence it was given. The host form state is notified by replacing the
whole value.

How the array grows depends on the element kind:
- enum elements offer only the options not already present
- every other kind appends the synthesized default element value
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, List, Optional, Sequence, Tuple

from schema_formgen.forms.default_values import element_default_value
from schema_formgen.forms.exceptions import ArrayIndexError
from schema_formgen.forms.field_classification import FieldClassification
from schema_formgen.forms.field_override import FieldOption, FieldOverride, options_from_values
from schema_formgen.forms.field_type_resolver import FieldType, resolve_field_type
from schema_formgen.forms.form_constants import BaseKind, CONSTANTS, UNDEFINED
from schema_formgen.services.strategy_dispatch_service import StrategyDispatchService

logger = logging.getLogger(__name__)


class ArrayAddStrategy(Enum):
    """How an array field grows."""
    APPEND_DEFAULT = "append_default"
    OFFER_REMAINING_OPTIONS = "offer_remaining_options"


# Element kind → add strategy; kinds not listed append a default
ADD_STRATEGY_BY_KIND = {
    BaseKind.ENUM: ArrayAddStrategy.OFFER_REMAINING_OPTIONS,
}


def as_sequence(value: Any) -> List[Any]:
    """Current array value as a fresh list; anything that is not a list or tuple is empty."""
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


class ArrayAddService(StrategyDispatchService[ArrayAddStrategy]):
    """Grows an array value according to the element kind."""

    def __init__(self):
        super().__init__()
        self._register_handlers({
            ArrayAddStrategy.APPEND_DEFAULT: self._append_default,
            ArrayAddStrategy.OFFER_REMAINING_OPTIONS: self._offer_remaining_option,
        })

    def _determine_strategy(self, resolver: "ArrayFieldResolver", sequence: Sequence[Any],
                            value: Any = UNDEFINED) -> ArrayAddStrategy:
        return resolver.add_strategy

    def _append_default(self, resolver: "ArrayFieldResolver", sequence: Sequence[Any],
                        value: Any = UNDEFINED) -> List[Any]:
        item = resolver.default_element_value() if value is UNDEFINED else value
        return list(sequence) + [item]

    def _offer_remaining_option(self, resolver: "ArrayFieldResolver", sequence: Sequence[Any],
                                value: Any = UNDEFINED) -> List[Any]:
        remaining = [option.value for option in resolver.available_options(sequence)]
        if not remaining:
            logger.debug(f"Array field '{resolver.name}' has no remaining options to add")
            return list(sequence)
        if value is UNDEFINED:
            value = remaining[0]
        elif value not in remaining:
            logger.warning(
                f"Option {value!r} is not available for array field '{resolver.name}'; "
                f"remaining options: {remaining}"
            )
            return list(sequence)
        return list(sequence) + [value]


_add_service: Optional[ArrayAddService] = None


def _get_add_service() -> ArrayAddService:
    global _add_service
    if _add_service is None:
        _add_service = ArrayAddService()
    return _add_service


class ArrayFieldResolver:
    """
    Applies classification and type resolution to an array field's elements.

    Example:
        resolver = ArrayFieldResolver("tags", classification, override)
        resolver.element_type            # "text"
        resolver.add_item(["a"])         # ["a", ""]
        resolver.remove_item(["a", "b", "c"], 1)  # ["a", "c"]
    """

    def __init__(self, name: str, classification: FieldClassification,
                 override: Optional[FieldOverride] = None):
        if classification.base_kind is not BaseKind.ARRAY:
            raise ValueError(
                f"Field '{name}' is classified as {classification.base_kind.value}, not array"
            )
        self.name = name
        self.classification = classification
        self.override = override
        self.element_classification = (
            classification.element_classification or FieldClassification(BaseKind.UNKNOWN)
        )
        self.element_type: FieldType = resolve_field_type(self.element_classification, override)

    @property
    def add_strategy(self) -> ArrayAddStrategy:
        return ADD_STRATEGY_BY_KIND.get(
            self.element_classification.base_kind, ArrayAddStrategy.APPEND_DEFAULT
        )

    @property
    def element_options(self) -> Optional[Tuple[FieldOption, ...]]:
        """Override options, else enum values of the element, else None."""
        if self.override is not None and self.override.options is not None:
            return self.override.options
        if self.element_classification.enum_values is not None:
            return options_from_values(self.element_classification.enum_values)
        return None

    def item_name(self, index: int) -> str:
        return f"{self.name}{CONSTANTS.ARRAY_INDEX_SEPARATOR}{index}"

    def default_element_value(self) -> Any:
        return element_default_value(self.element_classification, self.override)

    def available_options(self, sequence: Sequence[Any]) -> Tuple[FieldOption, ...]:
        """Element options whose value is not already in the sequence."""
        options = self.element_options or ()
        present = list(sequence)
        return tuple(option for option in options if option.value not in present)

    def can_add(self, sequence: Sequence[Any]) -> bool:
        if self.add_strategy is ArrayAddStrategy.OFFER_REMAINING_OPTIONS:
            return bool(self.available_options(sequence))
        return True

    def add_item(self, sequence: Sequence[Any], value: Any = UNDEFINED) -> List[Any]:
        """
        Return a new list grown by one element.

        For enum elements ``value`` must be one of the remaining options (the
        first remaining option when omitted); otherwise it defaults to the
        synthesized element default.
        """
        return _get_add_service().dispatch(self, sequence, value)

    def _check_index(self, sequence: Sequence[Any], index: int) -> None:
        if not 0 <= index < len(sequence):
            raise ArrayIndexError(
                f"Index {index} out of range for array field '{self.name}' of length {len(sequence)}"
            )

    def remove_item(self, sequence: Sequence[Any], index: int) -> List[Any]:
        """Return a new list without the element at ``index``; later elements shift down."""
        self._check_index(sequence, index)
        return [item for i, item in enumerate(sequence) if i != index]

    def replace_item(self, sequence: Sequence[Any], index: int, value: Any) -> List[Any]:
        """Return a new list with the element at ``index`` replaced."""
        self._check_index(sequence, index)
        updated = list(sequence)
        updated[index] = value
        return updated
