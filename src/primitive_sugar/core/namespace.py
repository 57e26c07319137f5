"""
Namespace

A namespace is the method table of one wrappable category (Number, String,
Object, Array, Date, RegExp).

    Sugar.Number.define_instance('add', lambda n, m: n + m)
    Sugar.Number.new(5).add(5).raw   # 10
    Sugar.Number.add(5, 5)           # 10 (static access)
    del Sugar.Number.add

Instance methods receive the raw value as their first argument. Static
methods are only reachable on the namespace itself. Both tables share one
name space: a name is defined at most once.
"""

from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from .errors import DuplicateDefinitionError, InvocationError, MethodNotFoundError
from .self_logger import SelfLogger


MethodDefs = Union[str, Mapping[str, Callable]]


class Namespace:
    """
    Method table for one category.

    Created by a NamespaceRegistry; not meant to be constructed directly.
    """

    def __init__(self, name: str, registry: Any, logger: SelfLogger):
        """
        Initialize namespace.

        Args:
            name: Category name (e.g. 'Number')
            registry: Owning NamespaceRegistry
            logger: The namespace's own self-logger
        """
        self.name = name
        self.logger = logger
        self._registry = registry
        self._instance_methods: Dict[str, Callable] = {}
        self._static_methods: Dict[str, Callable] = {}

    # Construction

    def new(self, value: Any = None):
        """
        Wrap a value in a chainable of this namespace.

        The value is stored unchanged (no coercion, no unwrapping).
        """
        return self._registry.chainable_class(self.name)(value)

    def __call__(self, *args, **kwargs):
        raise InvocationError(
            f"Namespace {self.name} is not callable; "
            f"use Sugar.{self.name}.new(value) to create a chainable"
        )

    # Definition

    def define_instance(self, methods: MethodDefs, fn: Optional[Callable] = None) -> None:
        """
        Define one or more instance methods.

        Args:
            methods: Method name, or a mapping of name -> function
            fn: Function when a single name is given

        Raises:
            DuplicateDefinitionError: If a name is already defined or reserved
        """
        for name, method in self._normalize(methods, fn).items():
            self._define(self._instance_methods, 'instance', name, method)

    def define_static(self, methods: MethodDefs, fn: Optional[Callable] = None) -> None:
        """
        Define one or more static methods (namespace-level only).

        Raises:
            DuplicateDefinitionError: If a name is already defined or reserved
        """
        for name, method in self._normalize(methods, fn).items():
            self._define(self._static_methods, 'static', name, method)

    def delete_instance(self, name: str) -> None:
        """Remove an instance method"""
        self._delete(self._instance_methods, 'instance', name)

    def delete_static(self, name: str) -> None:
        """Remove a static method"""
        self._delete(self._static_methods, 'static', name)

    # Introspection

    def get_instance(self, name: str) -> Optional[Callable]:
        """Get a registered instance method, or None"""
        return self._instance_methods.get(name)

    def has_instance(self, name: str) -> bool:
        """True if an instance method with this name is registered"""
        return name in self._instance_methods

    def instance_methods(self) -> List[str]:
        """Get registered instance method names"""
        return sorted(self._instance_methods)

    def static_methods(self) -> List[str]:
        """Get registered static method names"""
        return sorted(self._static_methods)

    def get_logs(self, level=None, limit=None, offset=0, **filters) -> List[Dict[str, Any]]:
        """Get this namespace's own log entries"""
        return self.logger.get_logs(level=level, limit=limit, offset=offset, **filters)

    # Attribute protocol: static access and `del Sugar.Number.add`

    def __getattr__(self, name: str) -> Callable:
        if name.startswith('_'):
            raise AttributeError(name)
        try:
            return self.__dict__['_instance_methods'][name]
        except KeyError:
            pass
        try:
            return self.__dict__['_static_methods'][name]
        except KeyError:
            pass
        raise MethodNotFoundError(
            f"Namespace {self.__dict__.get('name')} has no method '{name}'"
        )

    def __delattr__(self, name: str) -> None:
        if name in self._instance_methods:
            self.delete_instance(name)
        elif name in self._static_methods:
            self.delete_static(name)
        elif name.startswith('_'):
            object.__delattr__(self, name)
        else:
            self._delete(self._instance_methods, 'instance', name)

    def __dir__(self):
        return sorted(set(super().__dir__()) | set(self._instance_methods) | set(self._static_methods))

    def __repr__(self) -> str:
        return f'<Namespace {self.name}>'

    # Internals

    @staticmethod
    def _normalize(methods: MethodDefs, fn: Optional[Callable]) -> Dict[str, Callable]:
        if isinstance(methods, str):
            if fn is None:
                raise TypeError(f"define of '{methods}' requires a function")
            return {methods: fn}
        if fn is not None:
            raise TypeError("fn must not be given together with a mapping of methods")
        return dict(methods)

    def _define(self, table: Dict[str, Callable], kind: str, name: str, fn: Callable) -> None:
        if not isinstance(name, str) or not name.isidentifier() or name.startswith('_'):
            raise ValueError(
                f"Invalid method name {name!r}: must be a public identifier"
            )
        if not callable(fn):
            raise TypeError(f"Method '{name}' must be callable, got {type(fn).__name__}")

        with self._registry.lock:
            if name in self._instance_methods or name in self._static_methods:
                self.logger.error(
                    f"Rejected duplicate definition of '{name}'",
                    method=name,
                    kind=kind,
                    status='duplicate',
                )
                raise DuplicateDefinitionError(
                    f"'{name}' is already defined in namespace {self.name}; "
                    f"delete it before redefining"
                )
            if name in _reserved_names():
                self.logger.error(
                    f"Rejected reserved name '{name}'",
                    method=name,
                    kind=kind,
                    status='reserved',
                )
                raise DuplicateDefinitionError(
                    f"'{name}' is reserved by the chainable API and cannot be "
                    f"defined in namespace {self.name}"
                )
            table[name] = fn

        self.logger.info(f'Defined {kind} method {name}', method=name, kind=kind)

    def _delete(self, table: Dict[str, Callable], kind: str, name: str) -> None:
        with self._registry.lock:
            if name not in table:
                raise MethodNotFoundError(
                    f"Namespace {self.name} has no {kind} method '{name}'"
                )
            del table[name]

        self.logger.info(f'Deleted {kind} method {name}', method=name, kind=kind)


_RESERVED: Optional[frozenset] = None


def _reserved_names() -> frozenset:
    """Public names of the namespace and chainable APIs"""
    global _RESERVED
    if _RESERVED is None:
        from ..runtime.chainable import Chainable

        names = {n for n in dir(Namespace) if not n.startswith('_')}
        names |= {n for n in dir(Chainable) if not n.startswith('_')}
        names |= {'name', 'logger'}
        _RESERVED = frozenset(names)
    return _RESERVED
