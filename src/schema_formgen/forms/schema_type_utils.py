"""
Schema type utilities for the form engine.

This module provides centralized schema-node inspection used by the
classifier, the default-value synthesizer and the form orchestrator:
wrapper unwrapping, optionality detection, email detection and object
shape extraction.
"""

import logging
from typing import Dict, Mapping

from schema_formgen.forms.exceptions import SchemaIntrospectionError
from schema_formgen.forms.form_constants import CONSTANTS
from schema_formgen.schema.nodes import (
    EffectNode, LiteralNode, NullableNode, ObjectNode, OptionalNode,
    SchemaNode, StringNode, UnionNode, WRAPPER_NODE_TYPES,
)

logger = logging.getLogger(__name__)


class SchemaTypeUtils:
    """
    Utility class for schema node inspection.

    Unwrapping and optionality are deliberately separate operations: the
    unwrapper skips literal union options to find the base shape, while the
    optionality check treats the same literals as an empty-value escape hatch.
    """

    @staticmethod
    def _require_node(node: object) -> SchemaNode:
        if not isinstance(node, SchemaNode):
            raise SchemaIntrospectionError(
                f"Expected a schema node, got {type(node).__name__}: {node!r}"
            )
        return node

    @staticmethod
    def unwrap(node: SchemaNode) -> SchemaNode:
        """
        Strip optional, nullable, default and effect layers to expose the base shape.

        When the peeled node is a union, the first option (in declaration order)
        whose unwrapped form is not a literal wins. If every option unwraps to a
        literal the union itself is returned, which classifies as unknown.

        Only the first non-literal option is considered; unions of several
        genuinely different shapes (e.g. string-or-number) resolve to the first.

        Args:
            node: The schema node to unwrap

        Returns:
            The underlying base node

        Raises:
            SchemaIntrospectionError: If the node or a wrapped inner node is not a schema node

        Example:
            >>> SchemaTypeUtils.unwrap(StringNode().url().optional().or_(LiteralNode("")))
            StringNode(checks=(Check(kind='url', value=None),))
        """
        current = SchemaTypeUtils._require_node(node)

        while isinstance(current, WRAPPER_NODE_TYPES):
            current = SchemaTypeUtils._require_node(current.inner)

        if isinstance(current, UnionNode):
            for option in current.options:
                unwrapped = SchemaTypeUtils.unwrap(option)
                if not isinstance(unwrapped, LiteralNode):
                    return unwrapped

        return current

    @staticmethod
    def is_optional(node: SchemaNode) -> bool:
        """
        Check whether the original (non-unwrapped) node accepts an empty value.

        True for optional and nullable nodes, and for unions where any option is
        a literal or is itself optional. Wrappers other than optional/nullable
        are not looked through.

        Example:
            >>> SchemaTypeUtils.is_optional(StringNode().or_(LiteralNode("")))
            True
            >>> SchemaTypeUtils.is_optional(StringNode().default("x"))
            False
        """
        if isinstance(node, (OptionalNode, NullableNode)):
            return True

        if isinstance(node, UnionNode):
            for option in node.options:
                if isinstance(option, LiteralNode):
                    return True
                if SchemaTypeUtils.is_optional(option):
                    return True

        return False

    @staticmethod
    def is_email_string(node: SchemaNode) -> bool:
        """Check if a string node carries an email-format check."""
        return isinstance(node, StringNode) and node.has_check(CONSTANTS.EMAIL_CHECK)

    @staticmethod
    def get_object_shape(schema: SchemaNode) -> Dict[str, SchemaNode]:
        """
        Extract the named fields of an object schema.

        Form-level effect layers (cross-field refinements) around the object are
        peeled first, and lazy field callables are resolved.

        Returns:
            Mapping of field name to schema node, or an empty mapping on failure
        """
        try:
            current = schema
            while isinstance(current, EffectNode):
                current = current.inner
            if not isinstance(current, ObjectNode):
                raise SchemaIntrospectionError(
                    f"Form schema must be an object schema, got {type(current).__name__}"
                )
            shape = current.shape()
            if not isinstance(shape, Mapping):
                raise SchemaIntrospectionError(
                    f"Object fields must be a mapping, got {type(shape).__name__}"
                )
            return dict(shape)
        except Exception as e:
            logger.error(f"Error getting schema shape: {e}")
            return {}
