"""
Chainable

A chainable wraps one raw value and exposes a fluent method interface:

    Sugar.Number.new(5).add(5).format('.2f').add('px').raw  # '10.00px'

Method resolution (per call, against the current raw value):
1. Instance methods registered in the chainable's namespace
2. Native methods of the raw value / built-ins for its category
3. MethodNotFoundError

Results are re-wrapped by the owning registry: booleans and None come back
bare, everything else as a new chainable of the result's own category.

Operators behave as they would on the raw value and return plain values.
In-place operators are not defined, so `v += 1` rebinds v to a plain value.
"""

import copy
import functools
import math
import operator
from typing import Any, Callable, List

from ..core.errors import InvocationError, MethodNotFoundError
from ..interfaces.natives import find_native, native_names


def unwrap(value: Any) -> Any:
    """Get the raw value of a chainable, or the value itself"""
    if issubclass(type(value), Chainable):
        return value._raw
    return value


def _binary(op: Callable) -> Callable:
    def method(self, other):
        return op(self._raw, unwrap(other))
    method.__name__ = f'__{op.__name__.strip("_")}__'
    return method


def _reflected(op: Callable) -> Callable:
    def method(self, other):
        return op(unwrap(other), self._raw)
    method.__name__ = f'__r{op.__name__.strip("_")}__'
    return method


def _unary(op: Callable) -> Callable:
    def method(self):
        return op(self._raw)
    method.__name__ = f'__{op.__name__.strip("_")}__'
    return method


class Chainable:
    """
    Wrapper around a single raw value.

    Concrete chainables are per-category subclasses created by a
    NamespaceRegistry (see NamespaceRegistry.chainable_class); they carry the
    namespace name and the owning registry as class attributes, so an
    instance holds nothing but its raw value.
    """

    __slots__ = ('_raw',)

    namespace_name: str = ''
    registry: Any = None

    def __new__(cls, raw: Any = None):
        if cls.registry is None:
            raise InvocationError(
                "Chainable cannot be constructed directly; "
                "use Sugar.<Namespace>.new(value)"
            )
        return super().__new__(cls)

    def __init__(self, raw: Any = None):
        object.__setattr__(self, '_raw', raw)

    @property
    def raw(self) -> Any:
        """The wrapped value, unchanged"""
        return self._raw

    def value_of(self) -> Any:
        """Return the raw value without any further unboxing"""
        return self._raw

    def methods(self) -> List[str]:
        """List method names callable on this chainable"""
        names = set(native_names(self._raw, self.namespace_name))
        namespace = self.registry.find_namespace(self.namespace_name)
        if namespace is not None:
            names.update(namespace.instance_methods())
        return sorted(names)

    def __getattr__(self, name: str) -> Callable:
        if name.startswith('_'):
            raise AttributeError(name)
        return self._resolve(name)

    def _resolve(self, name: str) -> Callable:
        registry = self.registry
        namespace = registry.find_namespace(self.namespace_name)
        raw = self._raw

        if namespace is not None:
            fn = namespace.get_instance(name)
            if fn is not None:
                return self._chain(fn, name, namespace, receiver=True)

        native = find_native(raw, self.namespace_name, name)
        if native is not None:
            return self._chain(native, name, namespace, receiver=False)

        message = (
            f"'{name}' is not an instance method of namespace "
            f"{self.namespace_name} or a native method of {type(raw).__name__}"
        )
        if namespace is not None:
            namespace.logger.error(message, method=name, status='not_found')
        raise MethodNotFoundError(message)

    def _chain(self, fn: Callable, name: str, namespace, receiver: bool) -> Callable:
        """Bind fn to the raw value and wrap its result"""
        raw = self._raw
        wrap = self.registry.wrap

        if receiver:
            def call(*args, **kwargs):
                return fn(raw, *args, **kwargs)
        else:
            call = fn

        @functools.wraps(fn)
        def chained(*args, **kwargs):
            if namespace is not None and namespace.logger.is_enabled_for('DEBUG'):
                namespace.logger.debug(
                    f'Calling {name}',
                    method=name,
                    native=not receiver,
                    arg_count=len(args) + len(kwargs),
                )
            return wrap(call(*args, **kwargs))

        chained.__name__ = name
        return chained

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(
            f"Chainable is immutable; cannot set {name!r}"
        )

    def __delattr__(self, name: str) -> None:
        raise AttributeError(
            f"Chainable is immutable; cannot delete {name!r}"
        )

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self._raw!r})'

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return type(self)(copy.deepcopy(self._raw, memo))

    # Coercion

    def __str__(self) -> str:
        return str(self._raw)

    def __format__(self, format_spec: str) -> str:
        return format(self._raw, format_spec)

    def __bytes__(self) -> bytes:
        return bytes(self._raw)

    def __bool__(self) -> bool:
        return bool(self._raw)

    def __hash__(self) -> int:
        return hash(self._raw)

    def __int__(self) -> int:
        return int(self._raw)

    def __float__(self) -> float:
        return float(self._raw)

    def __complex__(self) -> complex:
        return complex(self._raw)

    def __index__(self) -> int:
        return operator.index(self._raw)

    def __round__(self, ndigits=None):
        if ndigits is None:
            return round(self._raw)
        return round(self._raw, ndigits)

    def __trunc__(self):
        return math.trunc(self._raw)

    def __floor__(self):
        return math.floor(self._raw)

    def __ceil__(self):
        return math.ceil(self._raw)

    # Comparison

    __eq__ = _binary(operator.eq)
    __ne__ = _binary(operator.ne)
    __lt__ = _binary(operator.lt)
    __le__ = _binary(operator.le)
    __gt__ = _binary(operator.gt)
    __ge__ = _binary(operator.ge)

    # Arithmetic

    __add__ = _binary(operator.add)
    __radd__ = _reflected(operator.add)
    __sub__ = _binary(operator.sub)
    __rsub__ = _reflected(operator.sub)
    __mul__ = _binary(operator.mul)
    __rmul__ = _reflected(operator.mul)
    __truediv__ = _binary(operator.truediv)
    __rtruediv__ = _reflected(operator.truediv)
    __floordiv__ = _binary(operator.floordiv)
    __rfloordiv__ = _reflected(operator.floordiv)
    __mod__ = _binary(operator.mod)
    __rmod__ = _reflected(operator.mod)
    __divmod__ = _binary(divmod)
    __rdivmod__ = _reflected(divmod)

    def __pow__(self, other, modulo=None):
        if modulo is None:
            return self._raw ** unwrap(other)
        return pow(self._raw, unwrap(other), unwrap(modulo))

    __rpow__ = _reflected(operator.pow)

    # Bitwise

    __and__ = _binary(operator.and_)
    __rand__ = _reflected(operator.and_)
    __or__ = _binary(operator.or_)
    __ror__ = _reflected(operator.or_)
    __xor__ = _binary(operator.xor)
    __rxor__ = _reflected(operator.xor)
    __lshift__ = _binary(operator.lshift)
    __rlshift__ = _reflected(operator.lshift)
    __rshift__ = _binary(operator.rshift)
    __rrshift__ = _reflected(operator.rshift)

    # Unary

    __neg__ = _unary(operator.neg)
    __pos__ = _unary(operator.pos)
    __invert__ = _unary(operator.invert)
    __abs__ = _unary(abs)

    # Container protocol

    def __len__(self) -> int:
        return len(self._raw)

    def __iter__(self):
        return iter(self._raw)

    def __contains__(self, item) -> bool:
        return unwrap(item) in self._raw

    def __getitem__(self, key):
        return self._raw[unwrap(key)]
