"""
Control ABC contracts for the Qt rendering layer.

Every control registered for a field type declares its capabilities by
inheritance, so the renderer never checks for method names. A text input is
ValueGettable + ValueSettable + PlaceholderCapable + ChangeSignalEmitter; a
dropdown adds OptionsConfigurable.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Sequence

from schema_formgen.forms.field_override import FieldOption


class ValueGettable(ABC):
    """
    ABC for controls that can return a value.

    All input controls must implement this to participate in value collection.
    """

    @abstractmethod
    def get_value(self) -> Any:
        """
        Get the current value from the control.

        Returns:
            The control's current value. None if no value set.
        """
        pass


class ValueSettable(ABC):
    """ABC for controls that can accept a value from form state."""

    @abstractmethod
    def set_value(self, value: Any) -> None:
        """
        Set the control's value.

        Args:
            value: The value to set. None and UNDEFINED clear the control.
        """
        pass


class PlaceholderCapable(ABC):
    """ABC for controls that can display placeholder text."""

    @abstractmethod
    def set_placeholder(self, text: str) -> None:
        pass


class OptionsConfigurable(ABC):
    """
    ABC for controls that choose from a list of options.

    Typically implemented by dropdowns and radio button groups.
    """

    @abstractmethod
    def set_options(self, options: Sequence[FieldOption]) -> None:
        """
        Replace the available options.

        Args:
            options: Options in display order; ``label`` is shown, ``value`` is stored
        """
        pass


class ChangeSignalEmitter(ABC):
    """
    ABC for controls that report value changes.

    Provides an explicit contract for signal connection, eliminating duck
    typing of signal names (textChanged vs valueChanged vs currentIndexChanged).
    """

    @abstractmethod
    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """
        Connect callback to the control's change signal.

        The callback receives the new value, as returned by ``get_value()``.
        """
        pass
