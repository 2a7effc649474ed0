"""
PyQt6 rendering of schema forms.

Control ABCs and adapters, a fail-loud dispatcher, the array field widget
and ``QtFormRenderer``.
"""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .widget_protocols import (
        ValueGettable, ValueSettable, PlaceholderCapable, OptionsConfigurable, ChangeSignalEmitter,
    )
    from .widget_dispatcher import WidgetDispatcher
    from .widget_adapters import default_qt_controls, SubmitButtonControl
    from .array_field_widget import ArrayFieldWidget
    from .background_task import BackgroundTask, BackgroundTaskManager
    from .form_renderer import QtFormRenderer

_EXPORTS = {
    "ValueGettable": ("schema_formgen.qt.widget_protocols", "ValueGettable"),
    "ValueSettable": ("schema_formgen.qt.widget_protocols", "ValueSettable"),
    "PlaceholderCapable": ("schema_formgen.qt.widget_protocols", "PlaceholderCapable"),
    "OptionsConfigurable": ("schema_formgen.qt.widget_protocols", "OptionsConfigurable"),
    "ChangeSignalEmitter": ("schema_formgen.qt.widget_protocols", "ChangeSignalEmitter"),
    "WidgetDispatcher": ("schema_formgen.qt.widget_dispatcher", "WidgetDispatcher"),
    "default_qt_controls": ("schema_formgen.qt.widget_adapters", "default_qt_controls"),
    "SubmitButtonControl": ("schema_formgen.qt.widget_adapters", "SubmitButtonControl"),
    "ArrayFieldWidget": ("schema_formgen.qt.array_field_widget", "ArrayFieldWidget"),
    "BackgroundTask": ("schema_formgen.qt.background_task", "BackgroundTask"),
    "BackgroundTaskManager": ("schema_formgen.qt.background_task", "BackgroundTaskManager"),
    "QtFormRenderer": ("schema_formgen.qt.form_renderer", "QtFormRenderer"),
}


def __getattr__(name: str):
    if name in _EXPORTS:
        module_name, attr = _EXPORTS[name]
        module = importlib.import_module(module_name)
        value = getattr(module, attr)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = list(_EXPORTS.keys())
