"""Tests for the Qt control adapters and the control dispatcher."""

import datetime

import pytest
from PyQt6.QtCore import QTime
from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import QColorDialog, QFileDialog, QLabel, QLineEdit, QRadioButton

from schema_formgen.forms.field_override import FieldOption
from schema_formgen.forms.form_constants import CONSTANTS, UNDEFINED
from schema_formgen.forms.schema_form import FieldProps, SubmitButtonProps
from schema_formgen.qt.widget_adapters import (
    CheckBoxControl, ColorControl, DateControl, DateTimeControl, FileControl, NumberInputControl,
    PasswordInputControl,
    RadioGroupControl, SelectControl, SubmitButtonControl, TextAreaControl, TextInputControl,
    TimeControl, default_qt_controls,
)
from schema_formgen.qt.widget_dispatcher import WidgetDispatcher
from schema_formgen.qt.widget_protocols import (
    ChangeSignalEmitter, OptionsConfigurable, ValueGettable, ValueSettable,
)

ROLES = (FieldOption("Admin", "admin"), FieldOption("Editor", "editor"))


def make_props(value=UNDEFINED, changes=None, **kwargs):
    changes = changes if changes is not None else []
    defaults = dict(
        name="field", field_type="text", value=value, on_change=changes.append,
        on_blur=lambda: None, label="Field", required=False,
    )
    defaults.update(kwargs)
    return FieldProps(**defaults)


class TestTextControls:

    def test_binds_props(self, qapp):
        control = TextInputControl(make_props(
            "hello", name="first_name", placeholder="Your name", class_name="w-full",
        ))
        assert control.get_value() == "hello"
        assert control.objectName() == "first_name"
        assert control.placeholderText() == "Your name"
        assert control.property("class") == "w-full"
        assert control.property("invalid") is False

    def test_reports_raw_text_changes(self, qapp):
        changes = []
        control = TextInputControl(make_props("", changes))
        assert changes == []

        control.setText("Ada")
        control.setText("")
        assert changes == ["Ada", ""]

    def test_blank_values_clear_the_control(self, qapp):
        control = TextInputControl(make_props(None))
        assert control.get_value() == ""
        control.set_value(42)
        assert control.get_value() == "42"
        control.set_value(UNDEFINED)
        assert control.get_value() == ""

    def test_error_and_disabled(self, qapp):
        control = TextInputControl(make_props("x", error="Required", disabled=True))
        assert control.property("invalid") is True
        assert control.toolTip() == "Required"
        assert not control.isEnabled()

    def test_password_echo_mode(self, qapp):
        assert PasswordInputControl(make_props("s3cret")).echoMode() == QLineEdit.EchoMode.Password

    def test_text_area(self, qapp):
        changes = []
        control = TextAreaControl(make_props("line one", changes, placeholder="Bio"))
        assert control.get_value() == "line one"
        control.setPlainText("line two")
        assert changes[-1] == "line two"


class TestNumberControl:

    def test_empty_reads_back_as_none(self, qapp):
        control = NumberInputControl(make_props(None))
        assert control.get_value() is None
        control.set_value(UNDEFINED)
        assert control.get_value() is None

    def test_values(self, qapp):
        control = NumberInputControl(make_props(5))
        assert control.get_value() == 5
        assert isinstance(control.get_value(), int)
        control.set_value(2.5)
        assert control.get_value() == 2.5

    def test_component_props_configure_range(self, qapp):
        control = NumberInputControl(make_props(
            3, component_props={"minimum": 0, "maximum": 10, "decimals": 0},
        ))
        assert control.get_value() == 3
        assert control.maximum() == 10
        control.set_value(None)
        assert control.get_value() is None
        control.set_value(0)
        assert control.get_value() == 0

    def test_reports_changes(self, qapp):
        changes = []
        control = NumberInputControl(make_props(1, changes))
        control.setValue(7)
        assert changes == [7]


class TestChoiceControls:

    def test_checkbox(self, qapp):
        changes = []
        control = CheckBoxControl(make_props(None, changes))
        assert control.get_value() is False
        control.setChecked(True)
        assert changes == [True]

    def test_select(self, qapp):
        changes = []
        control = SelectControl(make_props("editor", changes, options=ROLES, placeholder="Select..."))
        assert control.count() == 2
        assert control.itemText(0) == "Admin"
        assert control.get_value() == "editor"
        assert control.placeholderText() == "Select..."

        control.setCurrentIndex(0)
        assert changes == ["admin"]

    def test_select_without_value(self, qapp):
        control = SelectControl(make_props(UNDEFINED, options=ROLES))
        assert control.get_value() is None

    def test_radio_group(self, qapp):
        changes = []
        control = RadioGroupControl(make_props("editor", changes, options=ROLES))
        buttons = control.findChildren(QRadioButton)
        assert [button.text() for button in buttons] == ["Admin", "Editor"]
        assert control.get_value() == "editor"

        buttons[0].click()
        assert changes == ["admin"]
        control.set_value(None)
        assert control.get_value() is None


class TestDateControls:

    def test_date(self, qapp):
        control = DateControl(make_props("2024-03-15T00:00:00.000Z"))
        assert control.get_value() == datetime.date(2024, 3, 15)
        control.set_value(None)
        assert control.get_value() is None
        control.set_value(datetime.datetime(2023, 1, 2, 8, 0))
        assert control.get_value() == datetime.date(2023, 1, 2)

    def test_date_change_reports_date(self, qapp):
        changes = []
        control = DateControl(make_props(None, changes))
        control.set_value(datetime.date(2024, 5, 1))
        assert changes == [datetime.date(2024, 5, 1)]

    def test_time(self, qapp):
        control = TimeControl(make_props("14:30"))
        assert control.get_value() == datetime.time(14, 30)

    def test_blank_time_reads_back_as_none(self, qapp):
        changes = []
        control = TimeControl(make_props(None, changes, placeholder="--:--"))
        assert control.get_value() is None
        assert control.specialValueText() == "--:--"

        control.setTime(QTime(9, 15))
        assert changes == [datetime.time(9, 15)]
        control.set_value(UNDEFINED)
        assert control.get_value() is None
        assert changes[-1] is None

    def test_datetime(self, qapp):
        value = datetime.datetime(2024, 3, 15, 9, 45)
        control = DateTimeControl(make_props(value))
        assert control.get_value() == value
        control.set_value(None)
        assert control.get_value() is None


class TestDispatcher:

    def test_rejects_controls_without_capabilities(self, qapp):
        label = QLabel()
        with pytest.raises(TypeError, match="ValueGettable"):
            WidgetDispatcher.get_value(label)
        with pytest.raises(TypeError, match="ValueSettable"):
            WidgetDispatcher.set_value(label, "x")
        with pytest.raises(TypeError, match="PlaceholderCapable"):
            WidgetDispatcher.set_placeholder(label, "x")
        with pytest.raises(TypeError, match="OptionsConfigurable"):
            WidgetDispatcher.set_options(label, ROLES)
        with pytest.raises(TypeError, match="ChangeSignalEmitter"):
            WidgetDispatcher.connect_change_signal(label, print)

    def test_bind_props_requires_value_capability(self, qapp):
        with pytest.raises(TypeError):
            WidgetDispatcher.bind_props(QLabel(), make_props("x"))

    def test_bind_props_skips_unsupported_options(self, qapp):
        control = CheckBoxControl()
        WidgetDispatcher.bind_props(control, make_props(True, options=ROLES, placeholder="ignored"))
        assert WidgetDispatcher.get_value(control) is True

    def test_controls_declare_capabilities(self, qapp):
        select = SelectControl()
        assert isinstance(select, ValueGettable)
        assert isinstance(select, ValueSettable)
        assert isinstance(select, OptionsConfigurable)
        assert isinstance(select, ChangeSignalEmitter)
        assert not isinstance(TextInputControl(), OptionsConfigurable)


def test_submit_button_control(qapp):
    button = SubmitButtonControl(SubmitButtonProps(label="Save", disabled=True, class_name="primary"))
    assert button.text() == "Save"
    assert not button.isEnabled()
    assert button.property("class") == "primary"


def test_default_qt_controls_cover_essential_types():
    controls = default_qt_controls()
    assert CONSTANTS.ESSENTIAL_FIELD_TYPES <= set(controls)
    assert controls["radio"] is RadioGroupControl
    assert CONSTANTS.HIDDEN not in controls
    assert controls[CONSTANTS.COLOR] is ColorControl
    assert controls[CONSTANTS.FILE] is FileControl


class TestBrowseControls:

    def test_color_text_and_picker(self, qapp, monkeypatch):
        changes = []
        control = ColorControl(make_props("#112233", changes, name="accent", placeholder="#rrggbb"))
        assert control.get_value() == "#112233"
        assert control.objectName() == "accent"
        assert control.text_input.placeholderText() == "#rrggbb"

        seen = []

        def pick(initial, parent, title):
            seen.append(initial.name())
            return QColor("#ff8800")

        monkeypatch.setattr(QColorDialog, "getColor", staticmethod(pick))
        control.browse_button.click()
        assert seen == ["#112233"]
        assert control.get_value() == "#ff8800"
        assert changes == ["#ff8800"]

    def test_cancelled_color_picker_keeps_value(self, qapp, monkeypatch):
        control = ColorControl(make_props("#112233"))
        monkeypatch.setattr(QColorDialog, "getColor", staticmethod(lambda *args: QColor()))
        control.browse_button.click()
        assert control.get_value() == "#112233"

    def test_file_picker_sets_path(self, qapp, monkeypatch):
        changes = []
        control = FileControl(make_props(None, changes, component_props={"accept": ".png, .jpg"}))
        assert control.get_value() == ""
        assert control.file_filter() == "Files (*.png *.jpg);;All Files (*)"

        calls = []

        def pick(parent, title, directory, file_filter):
            calls.append(file_filter)
            return "/tmp/logo.png", file_filter

        monkeypatch.setattr(QFileDialog, "getOpenFileName", staticmethod(pick))
        control.browse_button.click()
        assert calls == ["Files (*.png *.jpg);;All Files (*)"]
        assert control.get_value() == "/tmp/logo.png"
        assert changes == ["/tmp/logo.png"]

    def test_file_filter_defaults_to_all_files(self, qapp):
        assert FileControl(make_props(None)).file_filter() == "All Files (*)"
        assert FileControl(make_props(None, component_props={"accept": ["pdf"]})).file_filter() == \
            "Files (*.pdf);;All Files (*)"

    def test_disabled_browse_control(self, qapp):
        control = FileControl(make_props("a.txt", disabled=True))
        assert not control.isEnabled()
        assert not control.browse_button.isEnabled()
