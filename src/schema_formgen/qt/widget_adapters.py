"""
Qt controls that implement the control ABCs.

Each control is constructed from a ``FieldProps`` bundle, so a control class
can be registered directly in a ``ComponentRegistry``:

    registry.register_many(default_qt_controls())
    widget = registry.get("text")(props)

Normalizes Qt's inconsistent APIs:
- QLineEdit.text() vs QDoubleSpinBox.value() vs QComboBox.currentData()
- QLineEdit.setPlaceholderText() vs QDoubleSpinBox.setSpecialValueText()
- textChanged vs valueChanged vs currentIndexChanged
"""

import datetime
from abc import ABCMeta
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from PyQt6.QtCore import QDate, QDateTime, QObject, Qt, QTime
from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import (
    QButtonGroup, QCheckBox, QColorDialog, QComboBox, QDateEdit, QDateTimeEdit, QDoubleSpinBox,
    QFileDialog, QHBoxLayout, QLineEdit, QPlainTextEdit, QPushButton, QRadioButton, QTimeEdit,
    QVBoxLayout, QWidget,
)

from schema_formgen.forms.field_override import FieldOption
from schema_formgen.forms.form_constants import CONSTANTS, UNDEFINED
from schema_formgen.qt.widget_dispatcher import WidgetDispatcher
from schema_formgen.qt.widget_protocols import (
    ValueGettable, ValueSettable, PlaceholderCapable,
    OptionsConfigurable, ChangeSignalEmitter
)


# PyQt-specific metaclass that combines ABCMeta with Qt's metaclass
class PyQtWidgetMeta(type(QObject), ABCMeta):
    """Metaclass for PyQt widgets that need ABC support."""
    pass


# Lowest representable value doubles as the "no value" marker of spin boxes
NUMBER_RANGE = (-1e12, 1e12)
EMPTY_DATE = QDate(1752, 9, 14)
EMPTY_DATETIME = QDateTime(EMPTY_DATE, QTime(0, 0))
EMPTY_TIME = QTime(0, 0)


def _is_blank(value: Any) -> bool:
    return value is None or value is UNDEFINED or value == ""


def _bind(widget: QWidget, props: Any, blur_signal: Optional[Any] = None) -> None:
    WidgetDispatcher.bind_props(widget, props)
    if blur_signal is not None:
        blur_signal.connect(props.on_blur)


class TextInputControl(QLineEdit, ValueGettable, ValueSettable, PlaceholderCapable,
                       ChangeSignalEmitter, metaclass=PyQtWidgetMeta):
    """
    Single-line text input.

    Returns the raw text, so an emptied field reports ``""`` and the
    field's empty-value override decides what reaches form state.
    """

    _echo_mode = QLineEdit.EchoMode.Normal
    _input_hints = Qt.InputMethodHint.ImhNone

    def __init__(self, props=None, parent=None):
        super().__init__(parent)
        self.setEchoMode(self._echo_mode)
        self.setInputMethodHints(self._input_hints)
        if props is not None:
            _bind(self, props, self.editingFinished)

    def get_value(self) -> Any:
        return self.text()

    def set_value(self, value: Any) -> None:
        self.setText("" if _is_blank(value) else str(value))

    def set_placeholder(self, text: str) -> None:
        self.setPlaceholderText(text)

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        self.textChanged.connect(lambda: callback(self.get_value()))


class EmailInputControl(TextInputControl):
    _input_hints = Qt.InputMethodHint.ImhEmailCharactersOnly


class PasswordInputControl(TextInputControl):
    _echo_mode = QLineEdit.EchoMode.Password
    _input_hints = Qt.InputMethodHint.ImhHiddenText | Qt.InputMethodHint.ImhSensitiveData


class TelInputControl(TextInputControl):
    _input_hints = Qt.InputMethodHint.ImhDialableCharactersOnly


class UrlInputControl(TextInputControl):
    _input_hints = Qt.InputMethodHint.ImhUrlCharactersOnly


class TextAreaControl(QPlainTextEdit, ValueGettable, ValueSettable, PlaceholderCapable,
                      ChangeSignalEmitter, metaclass=PyQtWidgetMeta):
    """Multi-line text input."""

    def __init__(self, props=None, parent=None):
        super().__init__(parent)
        if props is not None:
            _bind(self, props)

    def get_value(self) -> Any:
        return self.toPlainText()

    def set_value(self, value: Any) -> None:
        self.setPlainText("" if _is_blank(value) else str(value))

    def set_placeholder(self, text: str) -> None:
        self.setPlaceholderText(text)

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        self.textChanged.connect(lambda: callback(self.get_value()))


class NumberInputControl(QDoubleSpinBox, ValueGettable, ValueSettable, PlaceholderCapable,
                         ChangeSignalEmitter, metaclass=PyQtWidgetMeta):
    """
    None-aware number input.

    The minimum of the range shows the special value text and reads back as
    None. ``component_props`` may set ``decimals``, ``minimum``, ``maximum``
    and ``step``.
    """

    def __init__(self, props=None, parent=None):
        super().__init__(parent)
        self.setSpecialValueText(" ")
        self.setRange(*NUMBER_RANGE)
        self.setDecimals(2)
        if props is not None:
            self.configure(props.component_props)
            _bind(self, props, self.editingFinished)

    def configure(self, component_props: Dict[str, Any]) -> None:
        if "decimals" in component_props:
            self.setDecimals(int(component_props["decimals"]))
        if "minimum" in component_props or "maximum" in component_props:
            # One step below the minimum is reserved for "no value"
            step = component_props.get("step", 1)
            minimum = component_props.get("minimum", NUMBER_RANGE[0] + step) - step
            self.setRange(minimum, component_props.get("maximum", NUMBER_RANGE[1]))
        if "step" in component_props:
            self.setSingleStep(component_props["step"])

    def get_value(self) -> Any:
        if self.value() == self.minimum() and self.specialValueText():
            return None
        value = self.value()
        return int(value) if self.decimals() == 0 or value.is_integer() else value

    def set_value(self, value: Any) -> None:
        if _is_blank(value):
            self.setValue(self.minimum())
        else:
            self.setValue(float(value))

    def set_placeholder(self, text: str) -> None:
        self.setSpecialValueText(text)

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        self.valueChanged.connect(lambda: callback(self.get_value()))


class CheckBoxControl(QCheckBox, ValueGettable, ValueSettable,
                      ChangeSignalEmitter, metaclass=PyQtWidgetMeta):
    """Returns bool values, treats None as False."""

    def __init__(self, props=None, parent=None):
        super().__init__(parent)
        if props is not None:
            _bind(self, props)

    def get_value(self) -> Any:
        return self.isChecked()

    def set_value(self, value: Any) -> None:
        self.setChecked(bool(value))

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        self.toggled.connect(lambda checked: callback(self.get_value()))


class SelectControl(QComboBox, ValueGettable, ValueSettable, PlaceholderCapable,
                    OptionsConfigurable, ChangeSignalEmitter, metaclass=PyQtWidgetMeta):
    """
    Dropdown storing option values in item data.

    No selection reads back as None.
    """

    def __init__(self, props=None, parent=None):
        super().__init__(parent)
        if props is not None:
            _bind(self, props)

    def get_value(self) -> Any:
        if self.currentIndex() < 0:
            return None
        return self.itemData(self.currentIndex())

    def set_value(self, value: Any) -> None:
        self.setCurrentIndex(self.findData(value) if not _is_blank(value) else -1)

    def set_placeholder(self, text: str) -> None:
        # Shown while nothing is selected
        self.setPlaceholderText(text)

    def set_options(self, options: Sequence[FieldOption]) -> None:
        self.blockSignals(True)
        try:
            self.clear()
            for option in options:
                self.addItem(option.label, option.value)
            self.setCurrentIndex(-1)
        finally:
            self.blockSignals(False)

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        self.currentIndexChanged.connect(lambda index: callback(self.get_value()))


class RadioGroupControl(QWidget, ValueGettable, ValueSettable, OptionsConfigurable,
                        ChangeSignalEmitter, metaclass=PyQtWidgetMeta):
    """Exclusive radio buttons, one per option."""

    def __init__(self, props=None, parent=None):
        super().__init__(parent)
        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(0, 0, 0, 0)
        self._group = QButtonGroup(self)
        self._buttons: List[Tuple[QRadioButton, str]] = []
        if props is not None:
            _bind(self, props)

    def get_value(self) -> Any:
        for button, value in self._buttons:
            if button.isChecked():
                return value
        return None

    def set_value(self, value: Any) -> None:
        # An exclusive group cannot be unchecked
        self._group.setExclusive(False)
        for button, option_value in self._buttons:
            button.setChecked(option_value == value)
        self._group.setExclusive(True)

    def set_options(self, options: Sequence[FieldOption]) -> None:
        for button, _ in self._buttons:
            self._group.removeButton(button)
            button.deleteLater()
        self._buttons = []
        for option in options:
            button = QRadioButton(option.label, self)
            self._group.addButton(button)
            self._layout.addWidget(button)
            self._buttons.append((button, option.value))

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        self._group.buttonClicked.connect(lambda button: callback(self.get_value()))


def _to_date(value: Any) -> datetime.date:
    if isinstance(value, str):
        value = datetime.datetime.fromisoformat(value.replace("Z", "+00:00"))
    if isinstance(value, datetime.datetime):
        return value.date()
    return value


class DateControl(QDateEdit, ValueGettable, ValueSettable, PlaceholderCapable,
                  ChangeSignalEmitter, metaclass=PyQtWidgetMeta):
    """
    None-aware date picker returning ``datetime.date``.

    Accepts date, datetime and ISO-8601 strings.
    """

    def __init__(self, props=None, parent=None):
        super().__init__(parent)
        self.setCalendarPopup(True)
        self.setMinimumDate(EMPTY_DATE)
        self.setSpecialValueText(" ")
        if props is not None:
            _bind(self, props, self.editingFinished)

    def get_value(self) -> Any:
        if self.date() == self.minimumDate():
            return None
        return self.date().toPyDate()

    def set_value(self, value: Any) -> None:
        if _is_blank(value):
            self.setDate(self.minimumDate())
            return
        day = _to_date(value)
        self.setDate(QDate(day.year, day.month, day.day))

    def set_placeholder(self, text: str) -> None:
        self.setSpecialValueText(text)

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        self.dateChanged.connect(lambda date: callback(self.get_value()))


class TimeControl(QTimeEdit, ValueGettable, ValueSettable, PlaceholderCapable,
                  ChangeSignalEmitter, metaclass=PyQtWidgetMeta):
    """
    None-aware time picker returning ``datetime.time``; accepts ``HH:MM[:SS]`` strings.

    The minimum time shows the special value text and reads back as None, so
    midnight itself is not selectable.
    """

    def __init__(self, props=None, parent=None):
        super().__init__(parent)
        self.setMinimumTime(EMPTY_TIME)
        self.setSpecialValueText(" ")
        if props is not None:
            _bind(self, props, self.editingFinished)

    def get_value(self) -> Any:
        if self.time() == self.minimumTime():
            return None
        return self.time().toPyTime()

    def set_value(self, value: Any) -> None:
        if _is_blank(value):
            self.setTime(self.minimumTime())
            return
        if isinstance(value, str):
            value = datetime.time.fromisoformat(value)
        self.setTime(QTime(value.hour, value.minute, value.second))

    def set_placeholder(self, text: str) -> None:
        self.setSpecialValueText(text)

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        self.timeChanged.connect(lambda time: callback(self.get_value()))


class DateTimeControl(QDateTimeEdit, ValueGettable, ValueSettable, PlaceholderCapable,
                      ChangeSignalEmitter, metaclass=PyQtWidgetMeta):
    """None-aware local date-time picker returning naive ``datetime.datetime``."""

    def __init__(self, props=None, parent=None):
        super().__init__(parent)
        self.setCalendarPopup(True)
        self.setMinimumDateTime(EMPTY_DATETIME)
        self.setSpecialValueText(" ")
        if props is not None:
            _bind(self, props, self.editingFinished)

    def get_value(self) -> Any:
        if self.dateTime() == self.minimumDateTime():
            return None
        return self.dateTime().toPyDateTime()

    def set_value(self, value: Any) -> None:
        if _is_blank(value):
            self.setDateTime(self.minimumDateTime())
            return
        if isinstance(value, str):
            value = datetime.datetime.fromisoformat(value)
        elif not isinstance(value, datetime.datetime):
            value = datetime.datetime(value.year, value.month, value.day)
        self.setDateTime(QDateTime(
            QDate(value.year, value.month, value.day),
            QTime(value.hour, value.minute, value.second),
        ))

    def set_placeholder(self, text: str) -> None:
        self.setSpecialValueText(text)

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        self.dateTimeChanged.connect(lambda value: callback(self.get_value()))


class _BrowseControl(QWidget, ValueGettable, ValueSettable, PlaceholderCapable,
                     ChangeSignalEmitter, metaclass=PyQtWidgetMeta):
    """
    Line edit with a browse button that opens a picker dialog.

    The text stays editable; a picker result replaces it. Subclasses
    implement ``_browse`` and return None when the dialog is cancelled.
    """

    def __init__(self, props=None, parent=None):
        super().__init__(parent)
        self.component_props: Dict[str, Any] = dict(props.component_props) if props is not None else {}

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(4)

        self.text_input = QLineEdit()
        layout.addWidget(self.text_input, 1)

        self.browse_button = QPushButton("…")
        self.browse_button.setMaximumWidth(30)
        self.browse_button.clicked.connect(self._on_browse)
        layout.addWidget(self.browse_button)

        if props is not None:
            _bind(self, props, self.text_input.editingFinished)

    def _on_browse(self) -> None:
        result = self._browse(self.text_input.text())
        if result:
            self.text_input.setText(result)

    def _browse(self, current: str) -> Optional[str]:
        raise NotImplementedError

    def get_value(self) -> Any:
        return self.text_input.text()

    def set_value(self, value: Any) -> None:
        self.text_input.setText("" if _is_blank(value) else str(value))

    def set_placeholder(self, text: str) -> None:
        self.text_input.setPlaceholderText(text)

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        self.text_input.textChanged.connect(lambda: callback(self.get_value()))


class ColorControl(_BrowseControl):
    """Color input holding a ``#rrggbb`` string."""

    def _browse(self, current: str) -> Optional[str]:
        initial = QColor(current) if QColor.isValidColorName(current) else QColor()
        color = QColorDialog.getColor(initial, self, "Select Color")
        return color.name() if color.isValid() else None


class FileControl(_BrowseControl):
    """
    File input holding the selected path as a string.

    ``component_props["accept"]`` limits the dialog to the given extensions,
    either a list or a comma-separated string such as ``".png,.jpg"``.
    """

    def file_filter(self) -> str:
        accept = self.component_props.get("accept")
        if not accept:
            return "All Files (*)"
        if isinstance(accept, str):
            accept = accept.split(",")
        patterns = " ".join(f"*.{ext.strip().lstrip('.')}" for ext in accept if ext.strip())
        return f"Files ({patterns});;All Files (*)"

    def _browse(self, current: str) -> Optional[str]:
        path, _ = QFileDialog.getOpenFileName(self, "Select File", current, self.file_filter())
        return path or None


class SubmitButtonControl(QPushButton):
    """Submit control built from ``SubmitButtonProps``."""

    def __init__(self, props=None, parent=None):
        super().__init__(parent)
        if props is not None:
            self.setText(props.label)
            self.setEnabled(not props.disabled)
            self.setProperty("class", props.class_name)
            self.setProperty("loading", props.loading)


def default_qt_controls() -> Dict[str, type]:
    """
    Field type → Qt control for the built-in types.

    Nothing registers these implicitly; pass the map to
    ``FormSetup.initialize(components=...)`` or ``ComponentRegistry.register_many``.
    """
    return {
        CONSTANTS.TEXT: TextInputControl,
        CONSTANTS.EMAIL: EmailInputControl,
        CONSTANTS.PASSWORD: PasswordInputControl,
        CONSTANTS.TEL: TelInputControl,
        CONSTANTS.URL: UrlInputControl,
        CONSTANTS.TEXTAREA: TextAreaControl,
        CONSTANTS.NUMBER: NumberInputControl,
        CONSTANTS.CHECKBOX: CheckBoxControl,
        CONSTANTS.SELECT: SelectControl,
        CONSTANTS.RADIO: RadioGroupControl,
        CONSTANTS.DATE: DateControl,
        CONSTANTS.TIME: TimeControl,
        CONSTANTS.DATETIME_LOCAL: DateTimeControl,
        CONSTANTS.COLOR: ColorControl,
        CONSTANTS.FILE: FileControl,
    }
