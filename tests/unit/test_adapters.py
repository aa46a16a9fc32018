# tests/unit/test_adapters.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import pytest

from formguard.adapters import CheckedStateAdapter, DefaultFieldAdapterResolver, ValueAdapter
from formguard.core.errors import ConfigurationError
from formguard.validators import checked, min_length
from tests.toolkit import FakeCheckBox, FakeTextField, FakeWidget


class Spinner:
    def __init__(self, amount):
        self.widget_id = "spinner"
        self._amount = amount

    def get_value(self):
        return self._amount


class Label:
    def __init__(self, text):
        self.widget_id = "label"
        self.text = text


class Switch:
    widget_id = "switch"

    def __init__(self, on):
        self._on = on

    def is_checked(self):
        return self._on


class Blank:
    widget_id = "blank"


class UpperAdapter:
    def get_value(self, rule, target, widget):
        return str(widget.value).upper()


def test_value_adapter_prefers_getter():
    assert ValueAdapter().get_value(None, None, Spinner(7)) == 7


def test_value_adapter_reads_conventional_attributes():
    adapter = ValueAdapter()
    assert adapter.get_value(None, None, FakeTextField("a", "hi")) == "hi"
    assert adapter.get_value(None, None, Label("caption")) == "caption"
    assert adapter.get_value(None, None, FakeCheckBox("c", True)) is True


def test_value_adapter_without_accessor():
    with pytest.raises(ConfigurationError):
        ValueAdapter().get_value(None, None, Blank())


def test_checked_state_adapter():
    adapter = CheckedStateAdapter()
    assert adapter.get_value(None, None, Switch(1)) is True
    assert adapter.get_value(None, None, FakeCheckBox("c", False)) is False
    with pytest.raises(ConfigurationError):
        adapter.get_value(None, None, Blank())


def test_resolver_defaults():
    resolver = DefaultFieldAdapterResolver()
    assert isinstance(resolver.get_adapter(FakeTextField("a"), "min_length"), ValueAdapter)
    assert isinstance(resolver.get_adapter(FakeTextField("a"), None), ValueAdapter)
    assert isinstance(resolver.get_adapter(Switch(True), checked().kind), CheckedStateAdapter)


def test_resolver_lookup_order():
    resolver = DefaultFieldAdapterResolver()
    by_kind = UpperAdapter()
    by_type = UpperAdapter()
    by_both = UpperAdapter()
    resolver.register(by_kind, rule_kind="min_length")
    resolver.register(by_type, widget_type=FakeWidget)
    resolver.register(by_both, widget_type=FakeWidget, rule_kind="min_length")

    field = FakeTextField("a", "x")
    assert resolver.get_adapter(field, "min_length") is by_both
    assert resolver.get_adapter(field, "max_length") is by_type
    assert resolver.get_adapter(Label("x"), min_length(1).kind) is by_kind
    assert isinstance(resolver.get_adapter(Label("x"), "max_length"), ValueAdapter)


def test_register_rejects_bad_arguments():
    resolver = DefaultFieldAdapterResolver()
    with pytest.raises(ValueError):
        resolver.register(None, widget_type=FakeWidget)
    with pytest.raises(ValueError):
        resolver.register(UpperAdapter())
