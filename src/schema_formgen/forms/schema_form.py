"""
Headless schema form.

``SchemaForm`` turns an object schema into everything a rendering layer
needs: the field list, per-field classifications, a complete default value
map, a props bundle per field, and the submit pipeline. It produces no
markup; controls from the component registry are called with the props
bundle and whatever they return is handed back in a ``FieldRender``.

Field values live in a host-side value map. By default the form keeps its
own (``values``); a caller that owns form state passes a ``FieldBinding``
per field instead.

Example:
    form = SchemaForm(
        obj(email=string().email(), age=number().optional()),
        overrides={"age": FieldOverride(empty_as_zero=True)},
        setup=setup,
    )
    form.default_values        # {'email': '', 'age': 0}
    rendered = form.render_field("email", "age")
    form.submit(on_submit=save)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Set, Tuple

from schema_formgen.forms.array_field import ArrayFieldResolver, as_sequence
from schema_formgen.forms.default_values import synthesize_default_values
from schema_formgen.forms.field_classification import FieldClassification, classify_shape
from schema_formgen.forms.field_override import (
    FieldOption, FieldOverride, OverrideLike, coerce_overrides, options_from_values,
)
from schema_formgen.forms.field_type_resolver import FieldType, resolve_field_type
from schema_formgen.forms.form_constants import BaseKind, CONSTANTS, UNDEFINED
from schema_formgen.forms.form_setup import FormSetup, get_form_setup, join_classes
from schema_formgen.forms.schema_type_utils import SchemaTypeUtils
from schema_formgen.forms.value_normalization import (
    apply_empty_value_overrides, normalize_change_value, strip_undefined,
)
from schema_formgen.schema.nodes import SchemaNode

logger = logging.getLogger(__name__)

# Tag reported for array fields; their controls are resolved per element
ARRAY_FIELD_TYPE = BaseKind.ARRAY.value

ManualErrorSetter = Callable[[Optional[Mapping[str, str]]], None]


def _noop(*args: Any) -> None:
    return None


@dataclass
class FieldBinding:
    """
    Host form-state view of one field.

    ``get_value`` reads the live value; without it array item callbacks work
    from ``value`` as it was when the field was rendered.
    """
    value: Any = UNDEFINED
    on_change: Callable[[Any], None] = _noop
    on_blur: Callable[[], None] = _noop
    error: Optional[str] = None
    get_value: Optional[Callable[[], Any]] = None

    def current(self) -> Any:
        return self.get_value() if self.get_value is not None else self.value


@dataclass(frozen=True)
class FieldProps:
    """Props bundle handed to a control."""
    name: str
    field_type: FieldType
    value: Any
    on_change: Callable[[Any], None]
    on_blur: Callable[[], None]
    label: str
    required: bool
    disabled: bool = False
    placeholder: Optional[str] = None
    options: Optional[Tuple[FieldOption, ...]] = None
    description: Optional[str] = None
    hide_label: bool = False
    class_name: Optional[str] = None
    component_props: Mapping[str, Any] = field(default_factory=dict)
    error: Optional[str] = None


@dataclass(frozen=True)
class ArrayItemRender:
    index: int
    props: FieldProps
    element: Any
    remove: Callable[[], None]


@dataclass(frozen=True)
class FieldRender:
    """
    Result of rendering one field.

    ``element`` is whatever the control returned. Hidden fields have no
    element. Array fields carry one ``ArrayItemRender`` per element plus an
    ``add_item`` callback.
    """
    name: str
    field_type: FieldType
    props: FieldProps
    element: Any = None
    hidden: bool = False
    items: Tuple[ArrayItemRender, ...] = ()
    add_item: Optional[Callable[..., None]] = None
    can_add: bool = False
    resolver: Optional[ArrayFieldResolver] = None

    @property
    def is_array(self) -> bool:
        return self.resolver is not None


@dataclass(frozen=True)
class SubmitButtonProps:
    label: str
    loading: bool = False
    disabled: bool = False
    class_name: str = ""


@dataclass(frozen=True)
class FallbackSubmitButton:
    """Returned by ``render_submit_button`` when no submit control is registered."""
    props: SubmitButtonProps


class SchemaForm:
    """Classification, defaults, props and submission for one object schema."""

    def __init__(self, schema: SchemaNode,
                 overrides: Optional[Mapping[str, OverrideLike]] = None,
                 default_values: Optional[Mapping[str, Any]] = None,
                 setup: Optional[FormSetup] = None,
                 disabled: bool = False):
        self.schema = schema
        self.setup = setup if setup is not None else get_form_setup()
        self.overrides: Dict[str, FieldOverride] = coerce_overrides(overrides)
        self.disabled = disabled

        self.shape: Dict[str, SchemaNode] = SchemaTypeUtils.get_object_shape(schema)
        self.classifications: Dict[str, FieldClassification] = classify_shape(self.shape)
        self.default_values: Dict[str, Any] = synthesize_default_values(
            self.classifications, default_values, self.overrides
        )

        self.values: Dict[str, Any] = dict(self.default_values)
        self.errors: Dict[str, str] = {}
        self.touched: Set[str] = set()
        self.is_fetching_defaults = False
        self.has_fetch_error = False
        self.is_submitting = False

    # ------------------------------------------------------------------
    # Schema analysis
    # ------------------------------------------------------------------

    @property
    def field_names(self) -> List[str]:
        return list(self.shape.keys())

    @property
    def is_disabled(self) -> bool:
        return self.disabled or self.is_fetching_defaults

    def _lookup(self, name: str) -> Optional[FieldClassification]:
        classification = self.classifications.get(name)
        if classification is None:
            logger.warning(CONSTANTS.UNKNOWN_FIELD_MSG.format(name))
        return classification

    def resolve_type(self, name: str) -> Optional[FieldType]:
        """Field type tag of a field; array fields report ``"array"``."""
        classification = self._lookup(name)
        if classification is None:
            return None
        if classification.base_kind is BaseKind.ARRAY:
            return ARRAY_FIELD_TYPE
        return resolve_field_type(classification, self.overrides.get(name))

    # ------------------------------------------------------------------
    # Host-side state
    # ------------------------------------------------------------------

    def set_value(self, name: str, value: Any) -> None:
        self.values[name] = value

    def mark_touched(self, name: str) -> None:
        self.touched.add(name)

    def binding(self, name: str) -> FieldBinding:
        """Binding onto the form's own value map."""
        return FieldBinding(
            value=self.values.get(name, UNDEFINED),
            on_change=lambda value: self.set_value(name, value),
            on_blur=lambda: self.mark_touched(name),
            error=self.errors.get(name),
            get_value=lambda: self.values.get(name, UNDEFINED),
        )

    def set_manual_errors(self, errors: Optional[Mapping[str, str]]) -> None:
        """Set field errors by name; None clears every error."""
        if errors is None:
            self.errors.clear()
            return
        self.errors.update(errors)

    # ------------------------------------------------------------------
    # Props
    # ------------------------------------------------------------------

    def _label(self, name: str, override: Optional[FieldOverride]) -> str:
        if override is not None and override.label is not None:
            return override.label
        return self.setup.translator(name)

    def _placeholder(self, field_type: FieldType, override: Optional[FieldOverride]) -> Optional[str]:
        if override is not None and override.placeholder is not None:
            return override.placeholder
        if field_type == CONSTANTS.SELECT:
            return self.setup.translator(CONSTANTS.SELECT_PLACEHOLDER_KEY)
        return None

    def _options(self, classification: FieldClassification,
                 override: Optional[FieldOverride]) -> Optional[Tuple[FieldOption, ...]]:
        if override is not None and override.options is not None:
            return override.options
        if classification.base_kind is BaseKind.ENUM and classification.enum_values is not None:
            return options_from_values(classification.enum_values)
        return None

    def _build_props(self, name: str, field_type: FieldType, classification: FieldClassification,
                     override: Optional[FieldOverride], binding: FieldBinding,
                     options: Optional[Tuple[FieldOption, ...]]) -> FieldProps:
        def on_change(value: Any) -> None:
            binding.on_change(normalize_change_value(value, override))

        return FieldProps(
            name=name,
            field_type=field_type,
            value=binding.value,
            on_change=on_change,
            on_blur=binding.on_blur,
            label=self._label(name, override),
            required=classification.is_required,
            disabled=self.is_disabled or (override is not None and override.disabled),
            placeholder=self._placeholder(field_type, override),
            options=options,
            description=override.description if override is not None else None,
            hide_label=override.hide_label if override is not None else False,
            class_name=self.setup.styles.input,
            component_props=dict(override.component_props) if override is not None else {},
            error=binding.error,
        )

    def field_props(self, name: str, binding: Optional[FieldBinding] = None) -> Optional[FieldProps]:
        """Props bundle for a field, or None (with a warning) for an unknown name."""
        classification = self._lookup(name)
        if classification is None:
            return None
        override = self.overrides.get(name)
        binding = binding if binding is not None else self.binding(name)
        if classification.base_kind is BaseKind.ARRAY:
            field_type = ARRAY_FIELD_TYPE
        else:
            field_type = resolve_field_type(classification, override)
        return self._build_props(name, field_type, classification, override, binding,
                                 self._options(classification, override))

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render_field(self, *names: str,
                     bindings: Optional[Mapping[str, FieldBinding]] = None) -> List[FieldRender]:
        """
        Render fields in the given order.

        Unknown names and fields whose control is not registered are skipped
        with a warning.
        """
        bindings = bindings or {}
        rendered = []
        for name in names:
            props = self.field_props(name, bindings.get(name))
            if props is None:
                continue
            result = self._render_one(name, props, bindings.get(name))
            if result is not None:
                rendered.append(result)
        return rendered

    def render_all(self, bindings: Optional[Mapping[str, FieldBinding]] = None) -> List[FieldRender]:
        return self.render_field(*self.field_names, bindings=bindings)

    def _render_one(self, name: str, props: FieldProps,
                    binding: Optional[FieldBinding]) -> Optional[FieldRender]:
        override = self.overrides.get(name)

        if override is not None and override.custom_renderer is not None:
            return FieldRender(name, props.field_type, props, element=override.custom_renderer(props))

        if props.field_type == CONSTANTS.HIDDEN:
            return FieldRender(name, props.field_type, props, hidden=True)

        if props.field_type == ARRAY_FIELD_TYPE:
            binding = binding if binding is not None else self.binding(name)
            return self._render_array(name, props, override, binding)

        control = self.setup.registry.get(props.field_type)
        if control is None:
            logger.warning(CONSTANTS.MISSING_CONTROL_MSG.format(props.field_type, props.field_type))
            return None
        return FieldRender(name, props.field_type, props, element=control(props))

    def _render_array(self, name: str, props: FieldProps, override: Optional[FieldOverride],
                      binding: FieldBinding) -> Optional[FieldRender]:
        resolver = ArrayFieldResolver(name, self.classifications[name], override)
        element_type = resolver.element_type
        control = self.setup.registry.get(element_type)
        if control is None:
            logger.warning(CONSTANTS.MISSING_ELEMENT_CONTROL_MSG.format(element_type, name, element_type))
            return None

        sequence = as_sequence(binding.value)
        element_options = resolver.element_options
        items = []
        for index, item in enumerate(sequence):
            item_props = FieldProps(
                name=resolver.item_name(index),
                field_type=element_type,
                value=item,
                on_change=lambda value, index=index: binding.on_change(
                    resolver.replace_item(as_sequence(binding.current()), index, value)),
                on_blur=binding.on_blur,
                label=props.label,
                required=props.required,
                disabled=props.disabled,
                placeholder=props.placeholder,
                options=element_options,
                hide_label=True,
                class_name=props.class_name,
                component_props=props.component_props,
            )
            items.append(ArrayItemRender(
                index=index,
                props=item_props,
                element=control(item_props),
                remove=lambda index=index: binding.on_change(
                    resolver.remove_item(as_sequence(binding.current()), index)),
            ))

        return FieldRender(
            name, ARRAY_FIELD_TYPE, props,
            items=tuple(items),
            add_item=lambda value=UNDEFINED: binding.on_change(
                resolver.add_item(as_sequence(binding.current()), value)),
            can_add=not props.disabled and resolver.can_add(sequence),
            resolver=resolver,
        )

    def render_submit_button(self, disabled: bool = False) -> Any:
        """
        Call the registered submit control, or return a ``FallbackSubmitButton``
        (with a warning) when none is registered.
        """
        translator = self.setup.translator
        props = SubmitButtonProps(
            label=translator(CONSTANTS.SUBMITTING_KEY if self.is_submitting else CONSTANTS.SUBMIT_KEY),
            loading=self.is_submitting,
            disabled=disabled or self.is_fetching_defaults or self.has_fetch_error or self.is_submitting,
            class_name=join_classes(CONSTANTS.SUBMIT_BUTTON_CLASS, self.setup.styles.submit_button),
        )
        if self.setup.submit_button is None:
            logger.warning(CONSTANTS.NO_SUBMIT_BUTTON_MSG)
            return FallbackSubmitButton(props)
        return self.setup.submit_button(props)

    def form_class_name(self, extra: Optional[str] = None) -> str:
        return join_classes(CONSTANTS.FORM_CLASS, self.setup.styles.form, extra)

    # ------------------------------------------------------------------
    # Default values
    # ------------------------------------------------------------------

    def apply_fetched_defaults(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """Reset the value map to the computed defaults overlaid by fetched data."""
        self.values = {**self.default_values, **data}
        return dict(self.values)

    def fetch_defaults(self, fetcher: Callable[[], Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
        """
        Load default values from ``fetcher``.

        Fields are disabled while fetching. A failing fetcher is logged and
        leaves the form in the fetch-error state, which disables submit.
        """
        self.begin_fetch()
        try:
            data = fetcher()
        except Exception as e:
            self.fail_fetch(e)
            return None
        return self.finish_fetch(data)

    def begin_fetch(self) -> None:
        """Enter the fetching state; used directly when the fetch runs off-thread."""
        self.is_fetching_defaults = True
        self.has_fetch_error = False

    def finish_fetch(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        self.is_fetching_defaults = False
        return self.apply_fetched_defaults(data)

    def fail_fetch(self, error: BaseException) -> None:
        self.is_fetching_defaults = False
        self.has_fetch_error = True
        logger.error(f"Error fetching default values: {error}")

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    def prepare_submission(self, values: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """Values as handed to a submit handler: empty-value overrides applied, UNDEFINED dropped."""
        values = self.values if values is None else values
        return strip_undefined(apply_empty_value_overrides(values, self.overrides))

    def handle_invalid(self, errors: Mapping[str, str]) -> None:
        """Record validation errors and run the configured error behaviour."""
        self.set_manual_errors(errors)
        self.setup.run_error_behavior(self, dict(self.errors))

    def submit(self, values: Optional[Mapping[str, Any]] = None,
               on_submit: Optional[Callable[[Dict[str, Any]], Any]] = None,
               on_success: Optional[Callable[[Any], None]] = None,
               on_submit_error: Optional[Callable[[ManualErrorSetter, Exception], None]] = None) -> Any:
        """
        Normalize values and hand them to ``on_submit``.

        When the handler raises, the configured error behaviour runs and
        ``on_submit_error`` receives ``set_manual_errors`` and the exception.
        Without an ``on_submit_error`` the exception propagates.

        Returns:
            The handler's response, or None when there is no handler or it failed
        """
        if on_submit is None:
            return None

        payload = self.prepare_submission(values)
        logger.debug(f"Submitting: {payload}")

        self.is_submitting = True
        try:
            response = on_submit(payload)
        except Exception as error:
            logger.debug(f"Submit error: {error}")
            self.setup.run_error_behavior(self, dict(self.errors))
            if on_submit_error is None:
                raise
            on_submit_error(self.set_manual_errors, error)
            return None
        finally:
            self.is_submitting = False

        logger.debug(f"Submit success: {response}")
        if on_success is not None:
            on_success(response)
        return response
