"""
Native capability adapters

Maps a raw value to the native operations a chainable can forward to.

Two sources, checked in order:
- Methods of the raw value itself ('abc'.upper, [1, 2].copy, (5).bit_length)
- Built-in functions that apply to the raw value's category
  (format, str, len, round, ...), called with the raw value first

Non-callable attributes and private names (leading underscore) are never
native methods. Lookups go through the type, so a value's own
__getattribute__ and __getattr__ are never run.
"""

import functools
import inspect
from typing import Any, Callable, Dict, List, Optional

from ..core.categories import ARRAY, DATE, NUMBER, OBJECT, REGEXP, STRING


# Built-ins every category gets
_COMMON_BUILTINS: Dict[str, Callable] = {
    'str': str,
    'repr': repr,
    'format': format,
    'hash': hash,
}

_CATEGORY_BUILTINS: Dict[str, Dict[str, Callable]] = {
    NUMBER: {
        'abs': abs,
        'round': round,
        'divmod': divmod,
        'pow': pow,
        'int': int,
        'float': float,
        'complex': complex,
        'hex': hex,
        'oct': oct,
        'bin': bin,
        'chr': chr,
    },
    STRING: {
        'len': len,
        'ord': ord,
        'int': int,
        'float': float,
        'list': list,
        'sorted': sorted,
        'min': min,
        'max': max,
    },
    ARRAY: {
        'len': len,
        'list': list,
        'tuple': tuple,
        'sorted': sorted,
        'sum': sum,
        'min': min,
        'max': max,
        'any': any,
        'all': all,
    },
    OBJECT: {
        'len': len,
        'list': list,
        'sorted': sorted,
        'dict': dict,
    },
    DATE: {},
    REGEXP: {},
}


def builtins_for(category: str) -> Dict[str, Callable]:
    """Get the built-in functions applicable to a category"""
    table = dict(_COMMON_BUILTINS)
    table.update(_CATEGORY_BUILTINS.get(category, {}))
    return table


def _static_attribute(raw: Any, name: str) -> Any:
    """
    Look a name up on a raw value without running its own __getattribute__.

    Attributes found on the type are bound to raw; attributes stored on the
    instance come back as they are.
    """
    try:
        attr = inspect.getattr_static(raw, name)
    except AttributeError:
        return None

    try:
        own = object.__getattribute__(raw, '__dict__')
    except AttributeError:
        own = {}
    if name in own and own[name] is attr:
        return attr

    binder = getattr(type(attr), '__get__', None)
    if binder is None:
        return attr
    return binder(attr, raw, type(raw))


def find_native(raw: Any, category: str, name: str) -> Optional[Callable]:
    """
    Find a native operation for a raw value.

    Args:
        raw: The raw (unwrapped) value
        category: Category the value is wrapped under
        name: Method name

    Returns:
        A callable taking the forwarded arguments, or None
    """
    if name.startswith('_'):
        return None

    attr = _static_attribute(raw, name)
    if attr is not None and callable(attr):
        return attr

    builtin = builtins_for(category).get(name)
    if builtin is not None:
        return functools.partial(builtin, raw)

    return None


def native_names(raw: Any, category: str) -> List[str]:
    """List native method names available for a raw value"""
    names = set(builtins_for(category))

    candidates = set(dir(type(raw)))
    try:
        candidates.update(object.__getattribute__(raw, '__dict__'))
    except AttributeError:
        pass

    for name in candidates:
        if name.startswith('_'):
            continue
        if callable(_static_attribute(raw, name)):
            names.add(name)
    return sorted(names)
