"""Service registry: materializes declared bindings into live services.

Subclasses declare factory methods with ``@register`` and call
``initialize()`` once constructed:

```python
class AppRegistry(ServiceRegistry):
    def __init__(self):
        super().__init__()
        self.initialize()

    @register(Logger)
    def make_logger(self) -> Logger:
        return Logger()

    @register(Cache, lazy=True)
    def make_cache(self) -> Cache:
        return Cache(self.get("Logger::default"))
```

The most recently constructed registry is the active one; resolved fields
read from it.
"""

from types import MappingProxyType
from typing import Any, Callable, Dict, FrozenSet, List, Mapping, Optional

from loguru import logger

from ..errors import DisposalError, ServiceNotFoundError
from .protocols import Disposable
from .table import Binding, BindingTable, clear_registry, get_binding_table

# Registry read by resolved fields
_active_registry: Optional["ServiceRegistry"] = None


def get_active_registry() -> Optional["ServiceRegistry"]:
    """Get the registry resolved fields currently read from."""
    return _active_registry


def _set_active_registry(registry: Optional["ServiceRegistry"]) -> None:
    global _active_registry
    _active_registry = registry


def reset_registry() -> None:
    """Forget the active registry and clear the binding table."""
    _set_active_registry(None)
    clear_registry()


class ServiceRegistry:
    """Central registry for all service instances and factories."""

    def __init__(self, table: Optional[BindingTable] = None):
        """Install this registry as the active one.

        Args:
            table: Binding table to materialize, defaults to the process table
        """
        self._table = table if table is not None else get_binding_table()
        self._instances: Dict[str, Any] = {}
        self._factories: Dict[str, Callable[[], Any]] = {}
        self._initialized = False

        previous = get_active_registry()
        _set_active_registry(self)
        if previous is not None and previous is not self:
            logger.debug(
                f"Replaced active registry {type(previous).__name__} "
                f"with {type(self).__name__}"
            )

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def instances(self) -> Mapping[str, Any]:
        """Read-only view of materialized services."""
        return MappingProxyType(self._instances)

    @property
    def pending(self) -> FrozenSet[str]:
        """Keys of lazy services not yet materialized."""
        return frozenset(self._factories)

    def initialize(self) -> None:
        """Create eager services and install lazy factories.

        Eager factories run in declaration order and each result is stored
        before the next factory runs, so a factory may ``get`` services
        declared before it.

        If a factory raises, the services created before it are kept and a
        later call resumes with the remaining bindings.
        """
        if self._initialized:
            logger.warning(f"{type(self).__name__} is already initialized")
            return

        for binding in self._table.eager_bindings():
            if binding.key in self._instances:
                continue
            self._instances[binding.key] = self._call_factory(binding)
            logger.debug(f"Created eager service {binding.key}")

        for binding in self._table.lazy_bindings():
            self._factories[binding.key] = self._lazy_factory(binding)

        self._initialized = True
        logger.debug(
            f"Initialized {type(self).__name__}: {len(self._instances)} eager, "
            f"{len(self._factories)} lazy"
        )

    def _call_factory(self, binding: Binding) -> Any:
        return getattr(self, binding.method_name)()

    def _lazy_factory(self, binding: Binding) -> Callable[[], Any]:
        key = binding.key

        def produce() -> Any:
            if key in self._instances:
                return self._instances[key]

            instance = self._call_factory(binding)
            self._instances[key] = instance
            self._factories.pop(key, None)
            logger.debug(f"Created lazy service {key}")
            return instance

        return produce

    def get(self, key: str) -> Any:
        """Get a service by key, creating a lazy one on first use.

        Args:
            key: Service key, see ``service_key``

        Returns:
            The service instance

        Raises:
            ServiceNotFoundError: If nothing is registered under the key
        """
        if key in self._instances:
            return self._instances[key]

        factory = self._factories.get(key)
        if factory is not None:
            instance = factory()
            self._instances[key] = instance
            self._factories.pop(key, None)
            return instance

        raise ServiceNotFoundError(key)

    def has(self, key: str) -> bool:
        """Check whether a key is materialized or pending."""
        return key in self._instances or key in self._factories

    def is_materialized(self, key: str) -> bool:
        return key in self._instances

    def destroy(self) -> None:
        """Dispose every materialized service and clear all state.

        Every disposal hook runs once even if another one fails; failures
        are raised together afterwards.

        Raises:
            DisposalError: If one or more disposal hooks raised
        """
        failures: List[BaseException] = []
        failed_keys: List[str] = []

        try:
            for key, instance in list(self._instances.items()):
                if not isinstance(instance, Disposable):
                    continue
                try:
                    instance.on_dispose()
                    logger.debug(f"Disposed service {key}")
                except Exception as e:
                    failures.append(e)
                    failed_keys.append(key)
        finally:
            self._instances.clear()
            self._factories.clear()
            self._initialized = False

        if failures:
            raise DisposalError(failures, keys=failed_keys)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(instances={len(self._instances)}, "
            f"pending={len(self._factories)})"
        )
