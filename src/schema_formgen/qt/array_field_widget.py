"""
Container widget for array fields.

Lays out one element control per item, each followed by a remove button,
and an add button below. The widget is rebuilt from a fresh ``FieldRender``
whenever the array length changes.
"""

import logging
from typing import List, Optional

from PyQt6.QtWidgets import QHBoxLayout, QPushButton, QVBoxLayout, QWidget

from schema_formgen.forms.form_setup import FormStyles
from schema_formgen.forms.schema_form import FieldRender

logger = logging.getLogger(__name__)

ADD_BUTTON_TEXT = "+"
REMOVE_BUTTON_TEXT = "×"


class ArrayFieldWidget(QWidget):
    """Item list with add and remove buttons for one array field."""

    def __init__(self, render: FieldRender, styles: Optional[FormStyles] = None, parent=None):
        super().__init__(parent)
        if not render.is_array:
            raise TypeError(f"Field '{render.name}' is not an array field")
        self._styles = styles or FormStyles()
        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(0, 0, 0, 0)
        self._rows: List[QWidget] = []
        self.add_button: Optional[QPushButton] = None
        self.remove_buttons: List[QPushButton] = []
        self.setObjectName(render.name)
        if self._styles.array_container:
            self.setProperty("class", self._styles.array_container)
        self.set_render(render)

    @property
    def item_widgets(self) -> List[QWidget]:
        return [item.element for item in self.render.items]

    def set_render(self, render: FieldRender) -> None:
        """Replace every row with the items of ``render``."""
        self.render = render
        self._clear()

        for item in render.items:
            row = QWidget(self)
            row_layout = QHBoxLayout(row)
            row_layout.setContentsMargins(0, 0, 0, 0)
            if self._styles.array_item:
                row.setProperty("class", self._styles.array_item)
            row_layout.addWidget(item.element, 1)

            remove_button = QPushButton(REMOVE_BUTTON_TEXT, row)
            remove_button.setAccessibleName("Remove item")
            remove_button.setEnabled(not item.props.disabled)
            if self._styles.button:
                remove_button.setProperty("class", self._styles.button)
            remove_button.clicked.connect(lambda checked=False, remove=item.remove: remove())
            row_layout.addWidget(remove_button)

            self._layout.addWidget(row)
            self._rows.append(row)
            self.remove_buttons.append(remove_button)

        self.add_button = QPushButton(ADD_BUTTON_TEXT, self)
        self.add_button.setAccessibleName("Add item")
        self.add_button.setEnabled(render.can_add)
        if self._styles.button:
            self.add_button.setProperty("class", self._styles.button)
        self.add_button.clicked.connect(lambda checked=False: render.add_item())
        self._layout.addWidget(self.add_button)
        logger.debug(f"Array field '{render.name}' rendered with {len(render.items)} items")

    def _clear(self) -> None:
        for row in self._rows:
            self._layout.removeWidget(row)
            row.deleteLater()
        if self.add_button is not None:
            self._layout.removeWidget(self.add_button)
            self.add_button.deleteLater()
        self._rows = []
        self.remove_buttons = []
        self.add_button = None
