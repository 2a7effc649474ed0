"""
Abstract base class for schema-node services with auto-discovery dispatch.

Services that behave differently per schema shape define one handler method
per node class instead of an if-elif chain over isinstance checks.

Pattern:
    Instead of:
        class MyService:
            def process(self, node):
                if isinstance(node, StringNode):
                    ...
                elif isinstance(node, NumberNode):
                    ...

    Use:
        class MyService(SchemaNodeServiceABC):
            def _get_handler_prefix(self) -> str:
                return '_process_'

            def _process_StringNode(self, node, ...):
                ...

            def _process_NumberNode(self, node, ...):
                ...

Handlers are looked up along the node's MRO, so a handler for a base class
also serves its subclasses. Nodes with no handler go to ``_handle_unmatched``.
"""

from typing import Any, Callable, Dict, Optional
from abc import ABC, abstractmethod
import logging

from schema_formgen.schema.nodes import SchemaNode

logger = logging.getLogger(__name__)


class SchemaNodeServiceABC(ABC):
    """
    Abstract base for schema-node services with auto-discovery dispatch.

    Subclasses must:
    1. Implement _get_handler_prefix() to return method prefix (e.g., '_classify_')
    2. Define handler methods following naming convention: {prefix}{NodeClassName}
    3. Implement _handle_unmatched() for shapes without a handler
    """

    def __init__(self):
        """Discover all methods matching {prefix}{NodeClassName}."""
        self._handlers: Dict[str, Callable] = {}
        prefix = self._get_handler_prefix()

        for attr_name in dir(self):
            if attr_name.startswith(prefix):
                class_name = attr_name[len(prefix):]
                handler = getattr(self, attr_name)
                if callable(handler):
                    self._handlers[class_name] = handler

        if self._handlers:
            logger.debug(
                f"{self.__class__.__name__} auto-discovered handlers: "
                f"{list(self._handlers.keys())}"
            )
        else:
            logger.warning(
                f"{self.__class__.__name__} found no handlers with prefix '{prefix}'. "
                f"Did you forget to define handler methods?"
            )

    @abstractmethod
    def _get_handler_prefix(self) -> str:
        """Return the method prefix for this service's handlers (with leading underscore)."""
        pass

    @abstractmethod
    def _handle_unmatched(self, node: SchemaNode, *args, **kwargs) -> Any:
        """Handle a node whose class (and bases) have no handler."""
        pass

    def _find_handler(self, node: SchemaNode) -> Optional[Callable]:
        for klass in type(node).__mro__:
            handler = self._handlers.get(klass.__name__)
            if handler is not None:
                return handler
        return None

    def dispatch(self, node: SchemaNode, *args, **kwargs) -> Any:
        """
        Auto-dispatch to the handler for the node's class.

        Args:
            node: Schema node to dispatch on
            *args: Additional positional arguments passed to handler
            **kwargs: Additional keyword arguments passed to handler

        Returns:
            Result from the handler method
        """
        handler = self._find_handler(node)
        if handler is None:
            return self._handle_unmatched(node, *args, **kwargs)
        return handler(node, *args, **kwargs)

    def has_handler(self, node: SchemaNode) -> bool:
        """Check if a handler exists for the given node."""
        return self._find_handler(node) is not None

    def get_supported_types(self) -> list[str]:
        """Get list of node class names that have handlers."""
        return list(self._handlers.keys())
