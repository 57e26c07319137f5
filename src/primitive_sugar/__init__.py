"""
Primitive Sugar: chainable wrappers for native Python values.

Wrap a number, string, list, dict (or any value) in a chainable and call
your own methods and the value's native methods in one fluent chain:

    >>> from primitive_sugar import Sugar
    >>>
    >>> Sugar.create_namespace('Number')
    >>> Sugar.create_namespace('String')
    >>> Sugar.Number.define_instance('add', lambda n, m: n + m)
    >>> Sugar.String.define_instance('add', lambda s, t: s + t)
    >>>
    >>> Sugar.Number.new(5).add(5).format('.2f').add('px').raw
    '10.00px'

Chainables behave like their raw value under Python's operators:

    >>> two = Sugar.Number.new(2)
    >>> two + 1, 2 == two, -two
    (3, True, -2)

Core Philosophy:
- Methods live in one namespace per category (Number, String, Array, ...)
- Each call resolves against the category of the current value
- Booleans and None are never wrapped
- Categories are matched by real type, never by class name
"""

from .config import SugarConfig, get_config, reload_config
from .core.errors import (
    DuplicateDefinitionError,
    InvocationError,
    MethodNotFoundError,
    SugarError,
    UnknownNamespaceError,
)
from .core.namespace import Namespace
from .core.registry import NamespaceRegistry, Sugar
from .runtime.chainable import Chainable, unwrap

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Sugar",
    "NamespaceRegistry",
    "Namespace",
    "Chainable",
    "unwrap",
    "SugarConfig",
    "get_config",
    "reload_config",
    "SugarError",
    "InvocationError",
    "DuplicateDefinitionError",
    "MethodNotFoundError",
    "UnknownNamespaceError",
]
