# tests/conftest.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from unittest.mock import MagicMock

import pytest

from tests.toolkit import FakeCheckBox, FakeContext, FakeFormContainer, FakeScreen, FakeTextField, RecordingValidator


def pytest_configure(config):
    """Register custom marks."""
    config.addinivalue_line("markers", "property: mark test as a property-based test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")


@pytest.fixture
def recording_validator():
    """The RecordingValidator type with a clean call log."""
    RecordingValidator.calls = []
    yield RecordingValidator
    RecordingValidator.calls = []


@pytest.fixture
def engine(recording_validator):
    """A default engine that also knows the "recorded" rule kind."""
    from formguard.engine import ValidationEngine

    e = ValidationEngine()
    e.register_validator(recording_validator)
    return e


@pytest.fixture
def context():
    return FakeContext()


@pytest.fixture
def text_field():
    return FakeTextField("email", "")


@pytest.fixture
def check_box():
    return FakeCheckBox("agree", checked=False)


@pytest.fixture
def form(text_field, check_box):
    """A form container holding a text field and a check box."""
    return FakeFormContainer("form", children=[text_field, check_box])


@pytest.fixture
def screen(text_field, check_box):
    return FakeScreen(text_field, check_box)


@pytest.fixture
def callback():
    """A callback mock receiving (success, failures)."""
    return MagicMock()
