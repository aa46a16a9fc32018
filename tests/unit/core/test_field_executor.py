# tests/unit/core/test_field_executor.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import pytest
from hypothesis import given
from hypothesis import strategies as st

from formguard.adapters import DefaultFieldAdapterResolver
from formguard.core.executor import ValidationExecutor, ValidationFailure, sort_failures
from formguard.core.fields import FieldDiscovery, FieldSpec
from formguard.core.registry import ValidatorRegistry
from formguard.validators import IsChecked, min_length, not_empty, when
from tests.toolkit import FakeCheckBox, FakeContext, FakeScreen, FakeTextField, RecordingValidator, recorded


def make_executor():
    registry = ValidatorRegistry()
    registry.register(RecordingValidator)
    resolver = DefaultFieldAdapterResolver()
    return ValidationExecutor(FieldDiscovery(registry), resolver)


def make_screen(*specs, widgets=(), checked=False):
    """Build a screen declaring ``specs``; every spec name gets a text field."""

    class Screen(FakeScreen):
        __form_fields__ = specs

    screen = Screen()
    fields = {spec.name: FakeTextField(spec.name, "") for spec in specs}
    for name, widget in fields.items():
        setattr(screen, name, widget)
    FakeScreen.__init__(screen, *fields.values(), FakeCheckBox("agree", checked=checked), *widgets)
    return screen


def record_for(executor, screen, name):
    widget = getattr(screen, name)
    return executor.discovery.get_fields_for_target(screen)[widget], widget


def test_first_failing_rule_wins(recording_validator):
    executor = make_executor()
    screen = make_screen(
        FieldSpec("f", recorded("first", passes=True, order=1), recorded("second", passes=False, order=2),
                  recorded("third", passes=False, order=3))
    )
    record, widget = record_for(executor, screen, "f")

    failure = executor.validate_field(FakeContext(), screen, record, widget)

    assert failure == ValidationFailure(widget, "second failed", 2)
    assert [tag for tag, _ in recording_validator.calls] == ["first", "second"]


def test_sorted_rules_run_in_order():
    executor = make_executor()
    screen = make_screen(FieldSpec("f", min_length(3, order=2), not_empty(order=1)))
    record, widget = record_for(executor, screen, "f")

    failure = executor.validate_field(FakeContext(), screen, record, widget)

    assert failure.order == 1
    assert failure.message == "This field is required"


def test_passing_field_returns_none(recording_validator):
    executor = make_executor()
    screen = make_screen(FieldSpec("f", recorded("a"), recorded("b")))
    record, widget = record_for(executor, screen, "f")
    assert executor.validate_field(FakeContext(), screen, record, widget) is None
    assert len(recording_validator.calls) == 2


def test_all_rules_condition_false_skips_field(recording_validator):
    executor = make_executor()
    screen = make_screen(
        FieldSpec("f", recorded("a", passes=False), recorded("b", passes=False), when("agree", IsChecked)),
        checked=False,
    )
    record, widget = record_for(executor, screen, "f")
    assert executor.validate_field(FakeContext(), screen, record, widget) is None
    assert recording_validator.calls == []


def test_all_rules_condition_true_runs_rules():
    executor = make_executor()
    screen = make_screen(FieldSpec("f", recorded("a", passes=False), when("agree", IsChecked)), checked=True)
    record, widget = record_for(executor, screen, "f")
    assert executor.validate_field(FakeContext(), screen, record, widget).message == "a failed"


def test_single_kind_condition_false_skips_only_that_rule():
    executor = make_executor()
    screen = make_screen(
        FieldSpec("f", min_length(5, order=1), not_empty(order=2), when("agree", IsChecked, gates="min_length")),
        checked=False,
    )
    record, widget = record_for(executor, screen, "f")

    failure = executor.validate_field(FakeContext(), screen, record, widget)

    assert failure is not None
    assert failure.order == 2


def test_single_kind_condition_true_runs_that_rule():
    executor = make_executor()
    screen = make_screen(
        FieldSpec("f", min_length(5, order=1), not_empty(order=2), when("agree", IsChecked, gates="min_length")),
        checked=True,
    )
    record, widget = record_for(executor, screen, "f")
    assert executor.validate_field(FakeContext(), screen, record, widget).order == 1


def test_validate_target_collects_and_sorts():
    executor = make_executor()
    screen = make_screen(
        FieldSpec("a", recorded("a", passes=False, order=5)),
        FieldSpec("b", recorded("b", passes=True, order=1)),
        FieldSpec("c", recorded("c", passes=False, order=2)),
        FieldSpec("d", recorded("d", passes=False, order=5)),
    )

    result = executor.validate_target(FakeContext(), screen)

    assert result.success is False
    assert [f.message for f in result.failures] == ["c failed", "a failed", "d failed"]


def test_validate_target_ties_keep_field_order():
    executor = make_executor()
    screen = make_screen(
        FieldSpec("a", recorded("a", passes=False, order=5)),
        FieldSpec("b", recorded("b", passes=False, order=1)),
        FieldSpec("c", recorded("c", passes=False, order=5)),
    )
    result = executor.validate_target(FakeContext(), screen)
    assert [f.message for f in result.failures] == ["b failed", "a failed", "c failed"]


def test_validate_target_without_fields():
    result = make_executor().validate_target(FakeContext(), FakeScreen())
    assert result.success is True
    assert result.failures == ()


@pytest.mark.property
@given(orders=st.lists(st.integers(min_value=-5, max_value=5), max_size=30))
def test_sort_failures_is_stable(orders):
    failures = [ValidationFailure(widget=i, message=str(i), order=o) for i, o in enumerate(orders)]
    result = sort_failures(failures)
    assert [f.order for f in result] == sorted(orders)
    for earlier, later in zip(result, result[1:]):
        if earlier.order == later.order:
            assert earlier.widget < later.widget
