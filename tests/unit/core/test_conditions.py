# tests/unit/core/test_conditions.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from unittest.mock import MagicMock

import pytest

from formguard.adapters import DefaultFieldAdapterResolver
from formguard.core.conditions import ConditionEvaluator, ConditionScope, resolve_scope
from formguard.core.errors import ConditionInstantiationError, ConfigurationError, UnknownScopeError
from formguard.validators import IsChecked, IsNotEmpty, when
from tests.toolkit import FakeCheckBox, FakeFormContainer, FakePage, FakeScreen, FakeTextField


class NeedsArgument:
    def __init__(self, argument):
        pass

    def evaluate(self, value):
        return True


@pytest.fixture
def evaluator():
    return ConditionEvaluator(DefaultFieldAdapterResolver())


def test_resolve_scope():
    assert resolve_scope(FakeScreen()) is ConditionScope.SCREEN
    assert resolve_scope(FakeFormContainer()) is ConditionScope.WIDGET
    assert resolve_scope(FakePage(FakeFormContainer())) is ConditionScope.CONTAINER


def test_unknown_scope_is_fatal(evaluator):
    with pytest.raises(UnknownScopeError):
        resolve_scope(object())
    with pytest.raises(UnknownScopeError):
        evaluator.evaluate(object(), when("agree", IsChecked))


@pytest.mark.parametrize("checked", [True, False])
def test_evaluate_on_screen(evaluator, checked):
    screen = FakeScreen(FakeCheckBox("agree", checked=checked))
    assert evaluator.evaluate(screen, when("agree", IsChecked)) is checked


def test_evaluate_on_widget_scope(evaluator):
    form = FakeFormContainer(children=[FakeTextField("nickname", "neo")])
    assert evaluator.evaluate(form, when("nickname", IsNotEmpty)) is True


def test_evaluate_on_container_scope(evaluator):
    page = FakePage(FakeFormContainer(children=[FakeTextField("nickname", "  ")]))
    assert evaluator.evaluate(page, when("nickname", IsNotEmpty)) is False


def test_container_without_view(evaluator):
    with pytest.raises(ConfigurationError):
        evaluator.evaluate(FakePage(None), when("nickname", IsNotEmpty))


def test_missing_condition_widget(evaluator):
    with pytest.raises(ConfigurationError) as exc_info:
        evaluator.evaluate(FakeScreen(), when("agree", IsChecked))
    assert "'agree'" in str(exc_info.value)


def test_condition_instantiation_failure(evaluator):
    screen = FakeScreen(FakeCheckBox("agree", checked=True))
    with pytest.raises(ConditionInstantiationError) as exc_info:
        evaluator.evaluate(screen, when("agree", NeedsArgument))
    assert isinstance(exc_info.value.__cause__, TypeError)


def test_value_is_read_in_condition_mode():
    adapter = MagicMock()
    adapter.get_value.return_value = True
    resolver = MagicMock()
    resolver.get_adapter.return_value = adapter
    box = FakeCheckBox("agree")
    screen = FakeScreen(box)

    assert ConditionEvaluator(resolver).evaluate(screen, when("agree", IsChecked)) is True
    resolver.get_adapter.assert_called_once_with(box, None)
    adapter.get_value.assert_called_once_with(None, screen, box)
