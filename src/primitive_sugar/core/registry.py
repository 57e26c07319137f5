"""
Namespace Registry

Process-wide registry of namespaces, one per wrappable category.

The registry:
- Creates namespaces on demand (explicitly or lazily while wrapping)
- Owns one chainable class per category
- Applies the wrapping policy to method results
- Tears namespaces down for test isolation (drop_namespace, reset)

Mutations are serialized by a re-entrant lock (single writer). Lookups are
plain dictionary reads.
"""

import threading
from typing import Any, Dict, List, Optional

from ..config import SugarConfig, get_config
from ..runtime.chainable import Chainable
from .categories import CATEGORIES, OBJECT, category_of, is_category, is_passthrough
from .errors import UnknownNamespaceError
from .namespace import Namespace
from .self_logger import SelfLogger


class NamespaceRegistry:
    """
    Registry of namespaces.

    Initialized namespaces are exposed as attributes:

        Sugar.create_namespace('Number')
        Sugar.Number.new(1)
        hasattr(Sugar, 'Array')   # False until created or lazily initialized
    """

    def __init__(self, config: Optional[SugarConfig] = None):
        """
        Initialize registry.

        Args:
            config: Configuration for namespace self-logging
                    (default: global get_config() at namespace creation)
        """
        self.lock = threading.RLock()
        self._config = config
        self._namespaces: Dict[str, Namespace] = {}
        self._chainable_classes: Dict[str, type] = {}

    @property
    def config(self) -> SugarConfig:
        return self._config or get_config()

    # Namespaces

    def create_namespace(self, name: str) -> Namespace:
        """
        Create the namespace for a category (or return the existing one).

        Raises:
            UnknownNamespaceError: If name is not a recognized category
        """
        return self._ensure_namespace(name, lazy=False)

    def get_namespace(self, name: str) -> Namespace:
        """
        Get an initialized namespace.

        Raises:
            UnknownNamespaceError: If the namespace is not initialized
        """
        namespace = self._namespaces.get(name)
        if namespace is None:
            raise UnknownNamespaceError(f"Namespace {name} is not initialized")
        return namespace

    def find_namespace(self, name: str) -> Optional[Namespace]:
        """Get an initialized namespace, or None"""
        return self._namespaces.get(name)

    def has_namespace(self, name: str) -> bool:
        """True if the namespace is initialized"""
        return name in self._namespaces

    def namespaces(self) -> List[str]:
        """Get initialized namespace names"""
        return sorted(self._namespaces)

    def drop_namespace(self, name: str) -> None:
        """
        Tear down one namespace (its methods are forgotten).

        Raises:
            UnknownNamespaceError: If the namespace is not initialized
        """
        with self.lock:
            namespace = self.get_namespace(name)
            del self._namespaces[name]

        namespace.logger.warning(
            f'Namespace {name} dropped',
            instance_methods=len(namespace.instance_methods()),
            static_methods=len(namespace.static_methods()),
        )

    def reset(self) -> None:
        """Tear down every namespace"""
        with self.lock:
            for name in list(self._namespaces):
                self.drop_namespace(name)

    def _ensure_namespace(self, name: str, lazy: bool) -> Namespace:
        namespace = self._namespaces.get(name)
        if namespace is not None:
            return namespace

        if not is_category(name):
            raise UnknownNamespaceError(
                f"Unknown namespace {name!r}; expected one of {', '.join(CATEGORIES)}"
            )

        with self.lock:
            # Another writer may have won the race
            namespace = self._namespaces.get(name)
            if namespace is not None:
                return namespace

            namespace = Namespace(name, registry=self, logger=self._make_logger(name))
            self._namespaces[name] = namespace

        namespace.logger.info(f'Namespace {name} initialized', lazy=lazy)
        return namespace

    def _make_logger(self, name: str) -> SelfLogger:
        config = self.config
        return SelfLogger(
            object_id=name,
            base_dir=config.log_dir,
            min_level=config.log_level,
            max_entries=config.max_log_entries,
        )

    # Chainables

    def chainable_class(self, name: str) -> type:
        """
        Get the chainable class for a category.

        Chainable classes exist independently of namespace initialization,
        so opaque values can be wrapped without creating a namespace.
        """
        cls = self._chainable_classes.get(name)
        if cls is not None:
            return cls

        if not is_category(name):
            raise UnknownNamespaceError(
                f"Unknown namespace {name!r}; expected one of {', '.join(CATEGORIES)}"
            )

        with self.lock:
            cls = self._chainable_classes.get(name)
            if cls is None:
                cls = type(
                    f'{name}Chainable',
                    (Chainable,),
                    {
                        '__slots__': (),
                        '__module__': Chainable.__module__,
                        'namespace_name': name,
                        'registry': self,
                    },
                )
                self._chainable_classes[name] = cls
        return cls

    def wrap(self, value: Any) -> Any:
        """
        Apply the wrapping policy to a value.

        - True, False and None are returned bare
        - Chainables are returned as they are
        - Values of a recognized category are wrapped under it, initializing
          that namespace if needed
        - Anything else (user-defined types) is wrapped as an opaque Object
          without initializing any namespace
        """
        if is_passthrough(value):
            return value
        if issubclass(type(value), Chainable):
            return value

        category = category_of(value)
        if category is None:
            return self.chainable_class(OBJECT)(value)

        self._ensure_namespace(category, lazy=True)
        return self.chainable_class(category)(value)

    def chain(self, value: Any) -> Chainable:
        """Wrap any value, booleans and None included (as opaque Objects)"""
        wrapped = self.wrap(value)
        if is_passthrough(wrapped):
            return self.chainable_class(OBJECT)(wrapped)
        return wrapped

    # Attribute access: Sugar.Number

    def __getattr__(self, name: str) -> Namespace:
        if name.startswith('_'):
            raise AttributeError(name)
        namespace = self.__dict__.get('_namespaces', {}).get(name)
        if namespace is None:
            raise AttributeError(f"Namespace {name} is not initialized")
        return namespace

    def __dir__(self):
        return sorted(set(super().__dir__()) | set(self._namespaces))

    def __repr__(self) -> str:
        return f'<NamespaceRegistry {self.namespaces()}>'


# Global instance
Sugar = NamespaceRegistry()
