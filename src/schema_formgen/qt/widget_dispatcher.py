"""
Control dispatcher with fail-loud ABC checking.

All methods raise TypeError if a control doesn't implement the required ABC.
``bind_props`` is the one place a ``FieldProps`` bundle is applied to a
Qt control.
"""

from typing import Any, Callable, Sequence
import logging

from PyQt6.QtWidgets import QWidget

from schema_formgen.forms.field_override import FieldOption
from schema_formgen.qt.widget_protocols import (
    ValueGettable, ValueSettable, PlaceholderCapable,
    OptionsConfigurable, ChangeSignalEmitter
)

logger = logging.getLogger(__name__)


class WidgetDispatcher:
    """
    ABC-based control dispatch.

    Example:
        value = WidgetDispatcher.get_value(control)  # Raises TypeError if not ValueGettable
    """

    @staticmethod
    def get_value(widget: Any) -> Any:
        """
        Get value from a control.

        Raises:
            TypeError: If the control doesn't implement ValueGettable ABC
        """
        if not isinstance(widget, ValueGettable):
            raise TypeError(
                f"Widget {type(widget).__name__} does not implement ValueGettable ABC. "
                f"Add ValueGettable to widget's base classes and implement get_value() method."
            )
        return widget.get_value()

    @staticmethod
    def set_value(widget: Any, value: Any) -> None:
        """
        Set value on a control.

        Raises:
            TypeError: If the control doesn't implement ValueSettable ABC
        """
        if not isinstance(widget, ValueSettable):
            raise TypeError(
                f"Widget {type(widget).__name__} does not implement ValueSettable ABC. "
                f"Add ValueSettable to widget's base classes and implement set_value() method."
            )
        widget.set_value(value)

    @staticmethod
    def set_placeholder(widget: Any, text: str) -> None:
        if not isinstance(widget, PlaceholderCapable):
            raise TypeError(
                f"Widget {type(widget).__name__} does not implement PlaceholderCapable ABC. "
                f"Add PlaceholderCapable to widget's base classes and implement set_placeholder() method."
            )
        widget.set_placeholder(text)

    @staticmethod
    def set_options(widget: Any, options: Sequence[FieldOption]) -> None:
        if not isinstance(widget, OptionsConfigurable):
            raise TypeError(
                f"Widget {type(widget).__name__} does not implement OptionsConfigurable ABC. "
                f"Add OptionsConfigurable to widget's base classes and implement set_options() method."
            )
        widget.set_options(options)

    @staticmethod
    def connect_change_signal(widget: Any, callback: Callable[[Any], None]) -> None:
        if not isinstance(widget, ChangeSignalEmitter):
            raise TypeError(
                f"Widget {type(widget).__name__} does not implement ChangeSignalEmitter ABC. "
                f"Add ChangeSignalEmitter to widget's base classes and implement "
                f"connect_change_signal() method."
            )
        widget.connect_change_signal(callback)

    @staticmethod
    def bind_props(widget: QWidget, props: Any) -> None:
        """
        Apply a props bundle to a control.

        Options and placeholder are applied only when the props carry them and
        the control supports them; value and change signal are mandatory. The
        change signal is connected last so populating the control does not
        report changes.
        """
        widget.setObjectName(props.name)
        if props.class_name:
            widget.setProperty("class", props.class_name)
        widget.setProperty("invalid", props.error is not None)
        if props.error is not None:
            widget.setToolTip(props.error)

        if props.options is not None and isinstance(widget, OptionsConfigurable):
            widget.set_options(props.options)
        if props.placeholder and isinstance(widget, PlaceholderCapable):
            widget.set_placeholder(props.placeholder)

        WidgetDispatcher.set_value(widget, props.value)
        widget.setEnabled(not props.disabled)
        WidgetDispatcher.connect_change_signal(widget, props.on_change)
        logger.debug(f"Bound {type(widget).__name__} to field '{props.name}'")
