# formguard/core/errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details


class FormGuardError(Exception):
    """
    Base exception class for errors raised by the form validation engine.
    """


class ConfigurationError(FormGuardError):
    """
    Raised when validation rules, conditions or fields are configured in a way
    the engine cannot execute. These errors are fatal for the validation pass
    and are never reported through a validation callback.
    """


class ValidatorInstantiationError(ConfigurationError):
    """
    Raised when a registered validator type cannot be constructed without
    arguments.
    """


class ConditionInstantiationError(ConfigurationError):
    """
    Raised when a condition evaluator type named by a condition descriptor
    cannot be constructed without arguments.
    """


class FieldAccessError(ConfigurationError):
    """
    Raised when a declared field cannot be read from its target.
    """


class UnknownScopeError(ConfigurationError):
    """
    Raised when a target is neither a screen, a view container nor a widget
    scope, so condition widgets cannot be looked up on it.
    """
