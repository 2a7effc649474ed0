"""
Form constants for eliminating magic strings throughout the form engine.

This module centralizes the field type vocabulary, classification kinds,
translation keys and diagnostic message templates so that the classifier,
resolver, registry and form orchestrator share a single source of truth.
"""

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Tuple


class BaseKind(str, Enum):
    """UI-relevant base kind of a schema field."""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ENUM = "enum"
    ARRAY = "array"
    DATE = "date"
    UNKNOWN = "unknown"


class _Undefined:
    """Singleton marking a value that is absent rather than null."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return (_Undefined, ())


UNDEFINED = _Undefined()


@dataclass(frozen=True)
class FormConstants:
    """
    Centralized constants for the form engine.

    Categories:
    - Built-in field type tags and the essential registration set
    - Array item naming
    - Translation keys and their English defaults
    - Diagnostic message templates
    """

    # Built-in field type tags
    TEXT: str = "text"
    EMAIL: str = "email"
    PASSWORD: str = "password"
    NUMBER: str = "number"
    TEXTAREA: str = "textarea"
    SELECT: str = "select"
    CHECKBOX: str = "checkbox"
    RADIO: str = "radio"
    DATE: str = "date"
    TIME: str = "time"
    DATETIME_LOCAL: str = "datetime-local"
    TEL: str = "tel"
    URL: str = "url"
    COLOR: str = "color"
    FILE: str = "file"
    HIDDEN: str = "hidden"

    BUILTIN_FIELD_TYPES: Tuple[str, ...] = (
        "text", "email", "password", "number", "textarea", "select",
        "checkbox", "radio", "date", "time", "datetime-local", "tel",
        "url", "color", "file", "hidden",
    )

    # Types an application is expected to register at startup
    ESSENTIAL_FIELD_TYPES: FrozenSet[str] = frozenset({
        "text", "email", "number", "select", "checkbox", "date", "textarea",
    })

    # Schema check kinds
    EMAIL_CHECK: str = "email"
    URL_CHECK: str = "url"

    # Array item naming
    ARRAY_INDEX_SEPARATOR: str = "."

    # Translation keys
    TRANSLATION_NAMESPACE: str = "schemaForm."
    SUBMIT_KEY: str = "schemaForm.submit"
    SUBMITTING_KEY: str = "schemaForm.submitting"
    REQUIRED_KEY: str = "schemaForm.required"
    SELECT_PLACEHOLDER_KEY: str = "schemaForm.selectPlaceholder"

    # Default CSS hooks
    FORM_CLASS: str = "schema-form"
    FORM_ITEM_CLASS: str = "schema-form-item"
    LABEL_CLASS: str = "schema-form-label"
    LABEL_ERROR_CLASS: str = "schema-form-label-error"
    DESCRIPTION_CLASS: str = "schema-form-description"
    MESSAGE_CLASS: str = "schema-form-message"
    SUBMIT_BUTTON_CLASS: str = "schema-form-submit-btn"

    # Diagnostic message templates
    MISSING_CONTROL_MSG: str = (
        "No component registered for type '{}'. "
        "Register it with registry.register('{}', YourControl)."
    )
    MISSING_ELEMENT_CONTROL_MSG: str = (
        "No component registered for array element type '{}' (field '{}'). "
        "Register it with registry.register('{}', YourControl)."
    )
    UNKNOWN_FIELD_MSG: str = "Unknown field: {}"
    MISSING_ESSENTIAL_MSG: str = "Essential field type '{}' has no registered component"
    DOUBLE_INIT_MSG: str = "Form setup already initialized; ignoring repeated initialize() call"
    NO_SUBMIT_BUTTON_MSG: str = (
        "No submit button registered. Pass submit_button= to FormSetup.initialize()."
    )


# Create a singleton instance for easy access throughout the codebase
CONSTANTS = FormConstants()

DEFAULT_TRANSLATIONS = {
    CONSTANTS.SUBMIT_KEY: "Submit",
    CONSTANTS.SUBMITTING_KEY: "Submitting...",
    CONSTANTS.REQUIRED_KEY: "Required",
    CONSTANTS.SELECT_PLACEHOLDER_KEY: "Select...",
}
