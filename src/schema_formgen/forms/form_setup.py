"""
Application-level form configuration.

``FormSetup`` is built once at startup and handed to every ``SchemaForm``.
It owns the component registry, the translator, the submit-button control,
the error-behaviour callback, the form-UI parts and the CSS hooks.

Applications usually call ``initialize()`` once; a second call is ignored
with a warning so that a stray re-initialization cannot silently replace a
configured registry.
"""

from dataclasses import dataclass, field, fields, replace
from typing import Any, Callable, List, Mapping, Optional
import logging

from schema_formgen.forms.component_registry import ComponentRegistry
from schema_formgen.forms.form_constants import CONSTANTS
from schema_formgen.forms.translation import TranslationFunction, Translator

logger = logging.getLogger(__name__)

# (form, errors) -> None; runs on validation or submission failure
ErrorBehavior = Callable[[Any, Mapping[str, str]], None]


@dataclass
class FormStyles:
    """
    CSS class hooks, appended to the built-in class of each layout part.

    Attributes:
        form: Form container
        form_item: Wrapper around label, control, description and message
        label: Field label
        label_error: Field label when the field has an error
        description: Help text below the field
        error_message: Error message below the field
        submit_button: Submit button
        input: Passed to every control as ``class_name``
        array_container: Container of array items
        array_item: Wrapper of a single array item
        button: Array add and remove buttons
    """
    form: Optional[str] = None
    form_item: Optional[str] = None
    label: Optional[str] = None
    label_error: Optional[str] = None
    description: Optional[str] = None
    error_message: Optional[str] = None
    submit_button: Optional[str] = None
    input: Optional[str] = None
    array_container: Optional[str] = None
    array_item: Optional[str] = None
    button: Optional[str] = None

    def merged(self, other: "FormStyles") -> "FormStyles":
        """Copy with every hook that ``other`` sets taking precedence."""
        updates = {f.name: getattr(other, f.name) for f in fields(other)
                   if getattr(other, f.name) is not None}
        return replace(self, **updates)


def join_classes(*classes: Optional[str]) -> str:
    """Join CSS classes, skipping empty ones."""
    return " ".join(c for c in classes if c)


@dataclass(frozen=True)
class UIPart:
    """Output of the built-in layout parts: a role, its text and CSS classes."""
    role: str
    text: str
    class_name: str = ""


def default_label(text: str, required: bool = False, invalid: bool = False,
                  class_name: Optional[str] = None) -> UIPart:
    return UIPart(
        role="label",
        text=f"{text} *" if required else text,
        class_name=join_classes(
            CONSTANTS.LABEL_CLASS, class_name, CONSTANTS.LABEL_ERROR_CLASS if invalid else None
        ),
    )


def default_description(text: str, class_name: Optional[str] = None) -> UIPart:
    return UIPart(role="description", text=text,
                  class_name=join_classes(CONSTANTS.DESCRIPTION_CLASS, class_name))


def default_error_message(message: str, class_name: Optional[str] = None) -> UIPart:
    return UIPart(role="error_message", text=message,
                  class_name=join_classes(CONSTANTS.MESSAGE_CLASS, class_name))


@dataclass
class FormUI:
    """Layout parts drawn around every field; unset parts fall back to built-ins."""
    label: Optional[Callable[..., Any]] = None
    description: Optional[Callable[..., Any]] = None
    error_message: Optional[Callable[..., Any]] = None

    def merged(self, other: "FormUI") -> "FormUI":
        return FormUI(
            label=other.label or self.label,
            description=other.description or self.description,
            error_message=other.error_message or self.error_message,
        )

    def resolved(self) -> "FormUI":
        return FormUI(
            label=self.label or default_label,
            description=self.description or default_description,
            error_message=self.error_message or default_error_message,
        )


@dataclass
class FormSetup:
    """
    Configuration object shared by the forms of an application.

    Example:
        setup = FormSetup()
        setup.initialize(
            components=default_qt_controls(),
            submit_button=SubmitButton,
            on_error=lambda form, errors: logger.info(f"Invalid: {errors}"),
            styles=FormStyles(form_item="grid gap-2"),
        )
        form = SchemaForm(schema, setup=setup)
    """
    registry: ComponentRegistry = field(default_factory=ComponentRegistry)
    translator: Translator = field(default_factory=Translator)
    submit_button: Optional[Callable[..., Any]] = None
    on_error: Optional[ErrorBehavior] = None
    form_ui: FormUI = field(default_factory=FormUI)
    styles: FormStyles = field(default_factory=FormStyles)
    _initialized: bool = field(default=False, init=False, repr=False)

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(self,
                   translate: Optional[TranslationFunction] = None,
                   translations: Optional[Mapping[str, str]] = None,
                   components: Optional[Mapping[str, Any]] = None,
                   submit_button: Optional[Callable[..., Any]] = None,
                   on_error: Optional[ErrorBehavior] = None,
                   form_ui: Optional[FormUI] = None,
                   styles: Optional[FormStyles] = None) -> bool:
        """
        Configure the setup once.

        Returns:
            True if the configuration was applied, False if it was ignored
            because the setup had already been initialized
        """
        if self._initialized:
            logger.warning(CONSTANTS.DOUBLE_INIT_MSG)
            return False

        if translate is not None:
            self.translator.set_function(translate)
        if translations:
            self.translator.set_translations(translations)
        if components:
            self.registry.register_many(components)
        if submit_button is not None:
            self.submit_button = submit_button
        if on_error is not None:
            self.on_error = on_error
        if form_ui is not None:
            self.form_ui = self.form_ui.merged(form_ui)
        if styles is not None:
            self.styles = self.styles.merged(styles)

        self._initialized = True
        self.validate_essential_types()
        logger.debug(f"Form setup initialized with {len(self.registry)} components")
        return True

    def validate_essential_types(self) -> List[str]:
        """Warn for each essential field type without a control and return them."""
        missing = self.registry.missing_essential_types()
        for field_type in missing:
            logger.warning(CONSTANTS.MISSING_ESSENTIAL_MSG.format(field_type))
        return missing

    def run_error_behavior(self, form: Any, errors: Mapping[str, str]) -> None:
        if self.on_error is not None:
            self.on_error(form, errors)

    def reset(self) -> None:
        """Return to the unconfigured state."""
        self.registry.clear()
        self.translator.reset()
        self.submit_button = None
        self.on_error = None
        self.form_ui = FormUI()
        self.styles = FormStyles()
        self._initialized = False


# Process-default setup (set by application)
_form_setup: Optional[FormSetup] = None


def set_form_setup(setup: FormSetup) -> None:
    """Set the process-default form setup."""
    global _form_setup
    _form_setup = setup


def get_form_setup() -> FormSetup:
    """Get the process-default form setup, creating an empty one on first use."""
    global _form_setup
    if _form_setup is None:
        _form_setup = FormSetup()
    return _form_setup
