"""
Component registry: field type tag → control implementation.

A registry instance is created at application setup and passed to every
consumer. There are no built-in fallback controls: a type with no
registration renders nothing and logs a diagnostic.

Design:
- One control per type tag, last registration wins (logged)
- Type tags are an open vocabulary; built-in and custom tags are treated alike
- ``missing_essential_types()`` reports the recommended set that is unregistered
- Registration is not thread-safe; populate before concurrent reads begin
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional
import logging

from schema_formgen.forms.form_constants import CONSTANTS

logger = logging.getLogger(__name__)


class ComponentRegistry:
    """
    Mutable mapping from field type tag to control.

    A control is whatever the rendering collaborator instantiates or calls
    with a field's props bundle (a widget class, a factory function, ...).

    Example:
        registry = ComponentRegistry()
        registry.register("text", LineEditControl)
        registry.register_many({"select": ComboBoxControl, "checkbox": CheckBoxControl})
        registry.get("text")  # LineEditControl
    """

    def __init__(self, components: Optional[Mapping[str, Any]] = None):
        self._components: Dict[str, Any] = {}
        if components:
            self.register_many(components)

    def register(self, field_type: str, control: Any) -> None:
        """
        Register a control for a field type, replacing any previous one.

        Raises:
            ValueError: If field_type is empty or control is None
        """
        if not field_type:
            raise ValueError("Field type tag must be a non-empty string")
        if control is None:
            raise ValueError(f"Cannot register None as control for type '{field_type}'")

        existing = self._components.get(field_type)
        if existing is not None and existing is not control:
            logger.warning(
                f"Field type '{field_type}' already registered to "
                f"{getattr(existing, '__name__', existing)!r}; overwriting"
            )
        self._components[field_type] = control
        logger.debug(f"Registered control for field type '{field_type}'")

    def register_many(self, components: Mapping[str, Any]) -> None:
        """Register several controls at once; None entries are skipped."""
        for field_type, control in components.items():
            if control is not None:
                self.register(field_type, control)

    def get(self, field_type: str) -> Optional[Any]:
        """Get the control for a type, or None if unregistered."""
        return self._components.get(field_type)

    def has(self, field_type: str) -> bool:
        return field_type in self._components

    def list_types(self) -> List[str]:
        """Registered type tags in registration order."""
        return list(self._components.keys())

    def clear(self) -> None:
        self._components.clear()

    def missing_essential_types(self, essential: Iterable[str] = CONSTANTS.ESSENTIAL_FIELD_TYPES) -> List[str]:
        """Essential type tags with no registered control, sorted."""
        return sorted(field_type for field_type in essential if field_type not in self._components)

    def __contains__(self, field_type: str) -> bool:
        return self.has(field_type)

    def __len__(self) -> int:
        return len(self._components)
