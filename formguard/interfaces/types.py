# formguard/interfaces/types.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import Any, Callable, List

WidgetID = Any
RuleKind = str
Order = int

# Callback Types
ValidationCallback = Callable[[bool, List[Any]], None]
FocusListener = Callable[[Any, Any], None]
WidgetGetter = Callable[[Any], Any]
