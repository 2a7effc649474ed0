"""pytest configuration and fixtures for schema-formgen tests."""

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt6.QtWidgets import QApplication

from schema_formgen.forms.form_constants import CONSTANTS
from schema_formgen.forms.form_setup import FormSetup


@pytest.fixture(scope="session")
def qapp():
    """Create QApplication instance for tests."""
    app = QApplication.instance() or QApplication([])
    yield app
    # Don't quit - may cause issues with other tests


def echo_control(props):
    """Headless control: returns the props bundle it was called with."""
    return props


@pytest.fixture
def setup():
    """Fresh, unconfigured form setup."""
    return FormSetup()


@pytest.fixture
def headless_setup():
    """Form setup with an echo control for every built-in type and a submit button."""
    setup = FormSetup()
    setup.initialize(
        components={field_type: echo_control for field_type in CONSTANTS.BUILTIN_FIELD_TYPES},
        submit_button=lambda props: ("submit", props),
    )
    return setup
