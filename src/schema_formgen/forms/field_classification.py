"""
Field classification: the UI-relevant summary of a schema node.

A classification is derived from a schema node once per schema change and
records the base kind, optionality, the email marker, enum values and, for
arrays, the classification of the element schema.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Tuple

from schema_formgen.forms.exceptions import SchemaIntrospectionError
from schema_formgen.forms.form_constants import BaseKind
from schema_formgen.forms.schema_type_utils import SchemaTypeUtils
from schema_formgen.schema.nodes import (
    ArrayNode, BooleanNode, DateNode, EnumNode, NumberNode, SchemaNode, StringNode,
)
from schema_formgen.services.schema_node_service_abc import SchemaNodeServiceABC

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldClassification:
    """
    Immutable classification of a single field.

    ``enum_values`` is present only for enum fields and
    ``element_classification`` only for array fields.
    """
    base_kind: BaseKind
    is_optional: bool = False
    is_email_shaped: bool = False
    enum_values: Optional[Tuple[str, ...]] = None
    element_classification: Optional["FieldClassification"] = None

    def __post_init__(self):
        if self.enum_values is not None and self.base_kind is not BaseKind.ENUM:
            raise ValueError(f"enum_values given for {self.base_kind.value} field")
        if self.element_classification is not None and self.base_kind is not BaseKind.ARRAY:
            raise ValueError(f"element_classification given for {self.base_kind.value} field")
        if self.is_email_shaped and self.base_kind is not BaseKind.STRING:
            raise ValueError(f"is_email_shaped given for {self.base_kind.value} field")

    @property
    def is_required(self) -> bool:
        return not self.is_optional


class FieldClassifier(SchemaNodeServiceABC):
    """
    Classifies schema nodes via per-shape handlers.

    Each ``_classify_<NodeClass>`` handler receives the unwrapped node and the
    optionality computed on the original node. Shapes without a handler
    (objects, literals, unions of literals, ``AnyNode``) classify as unknown.

    Example:
        >>> FieldClassifier().classify(StringNode().email().nullable().optional())
        FieldClassification(base_kind=<BaseKind.STRING: 'string'>, is_optional=True, is_email_shaped=True, ...)
    """

    def _get_handler_prefix(self) -> str:
        return '_classify_'

    def classify(self, node: SchemaNode) -> FieldClassification:
        """
        Classify a schema node.

        Malformed nodes never raise: they classify as unknown and a
        diagnostic is logged.
        """
        is_optional = SchemaTypeUtils.is_optional(node)
        try:
            unwrapped = SchemaTypeUtils.unwrap(node)
            return self.dispatch(unwrapped, is_optional)
        except SchemaIntrospectionError as e:
            logger.warning(f"Schema introspection failed, treating field as unknown: {e}")
            return FieldClassification(BaseKind.UNKNOWN, is_optional=is_optional)

    def _handle_unmatched(self, node: SchemaNode, is_optional: bool) -> FieldClassification:
        logger.warning(f"Unsupported schema shape {type(node).__name__}, treating field as unknown")
        return FieldClassification(BaseKind.UNKNOWN, is_optional=is_optional)

    def _classify_StringNode(self, node: StringNode, is_optional: bool) -> FieldClassification:
        return FieldClassification(
            BaseKind.STRING,
            is_optional=is_optional,
            is_email_shaped=SchemaTypeUtils.is_email_string(node),
        )

    def _classify_NumberNode(self, node: NumberNode, is_optional: bool) -> FieldClassification:
        return FieldClassification(BaseKind.NUMBER, is_optional=is_optional)

    def _classify_BooleanNode(self, node: BooleanNode, is_optional: bool) -> FieldClassification:
        return FieldClassification(BaseKind.BOOLEAN, is_optional=is_optional)

    def _classify_DateNode(self, node: DateNode, is_optional: bool) -> FieldClassification:
        return FieldClassification(BaseKind.DATE, is_optional=is_optional)

    def _classify_EnumNode(self, node: EnumNode, is_optional: bool) -> FieldClassification:
        return FieldClassification(
            BaseKind.ENUM,
            is_optional=is_optional,
            enum_values=tuple(node.values),
        )

    def _classify_ArrayNode(self, node: ArrayNode, is_optional: bool) -> FieldClassification:
        return FieldClassification(
            BaseKind.ARRAY,
            is_optional=is_optional,
            element_classification=self.classify(node.element),
        )


_classifier: Optional[FieldClassifier] = None


def classify(node: SchemaNode) -> FieldClassification:
    """Classify a schema node with the shared (stateless) classifier."""
    global _classifier
    if _classifier is None:
        _classifier = FieldClassifier()
    return _classifier.classify(node)


def classify_shape(shape: Mapping[str, SchemaNode]) -> Dict[str, FieldClassification]:
    """Classify every field of an object shape, preserving field order."""
    return {name: classify(node) for name, node in shape.items()}
