"""
Wrappable categories

The closed set of built-in categories a value can be wrapped under.

A category is matched on the value's real type (type(value)), never on a
class name string and never on a spoofable __class__ attribute. A user class
called `list` or `Array` is therefore just an opaque object.
"""

import datetime
import numbers
import re
from typing import Any, Optional, Tuple


NUMBER = 'Number'
STRING = 'String'
ARRAY = 'Array'
OBJECT = 'Object'
DATE = 'Date'
REGEXP = 'RegExp'

# Order matters: the first match wins
_CATEGORY_TYPES: Tuple[Tuple[str, Tuple[type, ...]], ...] = (
    (NUMBER, (numbers.Number,)),
    (STRING, (str,)),
    (ARRAY, (list, tuple)),
    (DATE, (datetime.date, datetime.time, datetime.timedelta)),
    (REGEXP, (re.Pattern,)),
    (OBJECT, (dict,)),
)

CATEGORIES: Tuple[str, ...] = tuple(name for name, _ in _CATEGORY_TYPES)


def is_passthrough(value: Any) -> bool:
    """True for results that are never wrapped (booleans and None)"""
    return value is None or type(value) is bool


def category_of(value: Any) -> Optional[str]:
    """
    Get the recognized category of a value.

    Args:
        value: Any value

    Returns:
        Category name, or None for booleans, None and unrecognized
        (user-defined) types
    """
    if is_passthrough(value):
        return None

    value_type = type(value)
    for name, types in _CATEGORY_TYPES:
        if issubclass(value_type, types):
            return name
    return None


def is_category(name: str) -> bool:
    """True if name is one of the recognized categories"""
    return name in CATEGORIES
