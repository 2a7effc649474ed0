"""
Qt rendering of a ``SchemaForm``.

``QtFormRenderer`` lays out one ``QFormLayout`` row per rendered field,
label part on the left, control plus description and error parts on the
right, followed by the submit button. Field values live in the form's own
value map; the renderer only rebuilds rows when the structure changes
(array length, errors after a submit, fetched defaults).
"""

import logging
from dataclasses import replace
from typing import Any, Callable, Dict, Mapping, Optional

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import QAbstractButton, QFormLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from schema_formgen.forms.array_field import as_sequence
from schema_formgen.forms.form_constants import CONSTANTS
from schema_formgen.forms.form_setup import FormStyles, FormUI, UIPart, join_classes
from schema_formgen.forms.schema_form import FallbackSubmitButton, FieldBinding, FieldRender, SchemaForm
from schema_formgen.qt.array_field_widget import ArrayFieldWidget
from schema_formgen.qt.background_task import BackgroundTask, BackgroundTaskManager

logger = logging.getLogger(__name__)


def as_widget(part: Any) -> QWidget:
    """Widget for a layout part: widgets pass through, anything else becomes a label."""
    if isinstance(part, QWidget):
        return part
    if isinstance(part, UIPart):
        label = QLabel(part.text)
        label.setObjectName(part.role)
        label.setProperty("class", part.class_name)
        label.setWordWrap(True)
        return label
    return QLabel("" if part is None else str(part))


class QtFormRenderer(QWidget):
    """
    Widget presenting a ``SchemaForm``.

    Signals:
        value_changed(name, value): a control changed a field value
        submitted(response): the submit handler returned
        submit_failed(error): the submit handler raised
        defaults_loaded(values): fetched defaults were applied
        defaults_failed(error): the defaults fetcher raised
    """

    value_changed = pyqtSignal(str, object)
    submitted = pyqtSignal(object)
    submit_failed = pyqtSignal(object)
    defaults_loaded = pyqtSignal(object)
    defaults_failed = pyqtSignal(object)

    def __init__(self, form: SchemaForm,
                 on_submit: Optional[Callable[[Dict[str, Any]], Any]] = None,
                 on_success: Optional[Callable[[Any], None]] = None,
                 on_submit_error: Optional[Callable[..., None]] = None,
                 parent=None):
        super().__init__(parent)
        self.form = form
        self._on_submit = on_submit
        self._on_success = on_success
        self._on_submit_error = on_submit_error

        self._layout = QVBoxLayout(self)
        self._form_layout = QFormLayout()
        self._layout.addLayout(self._form_layout)
        self.submit_button: Optional[QWidget] = None
        self.field_widgets: Dict[str, QWidget] = {}
        self._array_widgets: Dict[str, ArrayFieldWidget] = {}
        self._last_error: Optional[Exception] = None
        self._tasks = BackgroundTaskManager(owner=self)

        self.setProperty("class", form.form_class_name())
        self.build()

    @property
    def values(self) -> Dict[str, Any]:
        return dict(self.form.values)

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------

    def build(self) -> None:
        """(Re)create every row and the submit button."""
        self._clear()
        setup = self.form.setup
        ui = setup.form_ui.resolved()
        bindings = {name: self._binding(name) for name in self.form.field_names}
        for render in self.form.render_all(bindings):
            if render.hidden:
                continue
            self._add_row(render, ui, setup.styles)
        self._add_submit_button()

    def _clear(self) -> None:
        while self._form_layout.rowCount():
            self._form_layout.removeRow(0)
        if self.submit_button is not None:
            self._layout.removeWidget(self.submit_button)
            self.submit_button.deleteLater()
            self.submit_button = None
        self.field_widgets = {}
        self._array_widgets = {}

    def _binding(self, name: str) -> FieldBinding:
        binding = self.form.binding(name)

        def on_change(value: Any) -> None:
            previous = self.form.values.get(name)
            self.form.set_value(name, value)
            self.value_changed.emit(name, value)
            if name in self._array_widgets and len(as_sequence(value)) != len(as_sequence(previous)):
                self._refresh_array(name)

        return replace(binding, on_change=on_change)

    def _refresh_array(self, name: str) -> None:
        rendered = self.form.render_field(name, bindings={name: self._binding(name)})
        if rendered:
            self._array_widgets[name].set_render(rendered[0])

    def _add_row(self, render: FieldRender, ui: FormUI, styles: FormStyles) -> None:
        props = render.props
        if render.is_array:
            field_widget = ArrayFieldWidget(render, styles)
            self._array_widgets[render.name] = field_widget
        else:
            field_widget = as_widget(render.element)
        self.field_widgets[render.name] = field_widget

        container = QWidget()
        container.setProperty("class", join_classes(CONSTANTS.FORM_ITEM_CLASS, styles.form_item))
        column = QVBoxLayout(container)
        column.setContentsMargins(0, 0, 0, 0)
        column.addWidget(field_widget)
        if props.description:
            column.addWidget(as_widget(ui.description(props.description, class_name=styles.description)))
        if props.error:
            column.addWidget(as_widget(ui.error_message(props.error, class_name=styles.error_message)))

        if props.hide_label:
            self._form_layout.addRow(container)
            return
        label = as_widget(ui.label(
            props.label,
            required=props.required,
            invalid=props.error is not None,
            class_name=join_classes(styles.label, styles.label_error if props.error else None),
        ))
        self._form_layout.addRow(label, container)

    def _add_submit_button(self) -> None:
        rendered = self.form.render_submit_button()
        if isinstance(rendered, FallbackSubmitButton):
            button = QPushButton(rendered.props.label)
            button.setEnabled(not rendered.props.disabled)
            button.setProperty("class", rendered.props.class_name)
            rendered = button
        widget = as_widget(rendered)
        if isinstance(widget, QAbstractButton):
            widget.clicked.connect(lambda checked=False: self.submit())
        self.submit_button = widget
        self._layout.addWidget(widget)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def load_defaults(self, fetcher: Callable[[], Mapping[str, Any]]) -> BackgroundTask:
        """
        Fetch default values on a background thread and rebuild with them.

        Rows are rebuilt disabled, with submit disabled, before the thread
        starts. A newer call supersedes a fetch still in flight.
        """
        self.form.begin_fetch()
        self.build()
        return self._tasks.run(fetcher, on_success=self._on_defaults_ready, on_error=self._on_defaults_failed)

    def _is_stale(self) -> bool:
        return self.sender() is not self._tasks.current_task

    def _on_defaults_ready(self, data: Mapping[str, Any]) -> None:
        if self._is_stale():
            return
        values = self.form.finish_fetch(data)
        self.build()
        self.defaults_loaded.emit(values)

    def _on_defaults_failed(self, error: Exception) -> None:
        if self._is_stale():
            return
        self.form.fail_fetch(error)
        self.build()
        self.defaults_failed.emit(error)

    def closeEvent(self, event):
        self._tasks.cleanup()
        super().closeEvent(event)

    def _handle_submit_error(self, set_manual_errors: Callable, error: Exception) -> None:
        self._last_error = error
        if self._on_submit_error is not None:
            self._on_submit_error(set_manual_errors, error)
        self.submit_failed.emit(error)

    def submit(self) -> Any:
        """Submit the current values; rows are rebuilt afterwards to show errors."""
        if self._on_submit is None:
            logger.debug("Submit requested without a submit handler")
            return None
        self._last_error = None
        response = self.form.submit(
            on_submit=self._on_submit,
            on_success=self._on_success,
            on_submit_error=self._handle_submit_error,
        )
        if self._last_error is None:
            self.submitted.emit(response)
        self.build()
        return response
