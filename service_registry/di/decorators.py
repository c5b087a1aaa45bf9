"""Declarative registration and resolution.

``register`` marks a registry method as a service factory while the class is
being defined. ``resolve`` declares a field that looks its service up on
first read and keeps it on the instance afterwards:

```python
class Controller:
    cache = resolve(Cache)
    primary_db = resolve(Database, name="primary")
```
"""

from typing import Any, Callable, Generic, Optional, Type, TypeVar, Union

from loguru import logger

from ..errors import NotReadyError
from .registry import ServiceRegistry, get_active_registry
from .table import DEFAULT_NAME, BindingTable, get_binding_table, service_key

T = TypeVar("T")
F = TypeVar("F", bound=Callable[..., Any])


def register(
    owner: Union[Type[Any], str],
    *,
    name: str = DEFAULT_NAME,
    lazy: bool = False,
    table: Optional[BindingTable] = None,
) -> Callable[[F], F]:
    """
    Mark a registry method as the factory for a service.

    Args:
        owner: Type of the produced service, or its name
        name: Logical name distinguishing several services of one type
        lazy: Create the service on first resolution instead of at initialize
        table: Binding table to record into, defaults to the process table

    Returns:
        Decorator leaving the method unchanged

    Raises:
        DuplicateMethodError: If the method name is already bound
        DuplicateKeyError: If ``owner``/``name`` is already bound
    """
    key = service_key(owner, name)

    def decorator(method: F) -> F:
        qualname = getattr(method, "__qualname__", method.__name__)
        defined_in = qualname.rsplit(".", 1)[0] if "." in qualname else None

        target = table if table is not None else get_binding_table()
        binding = target.record(method.__name__, key, lazy, defined_in=defined_in)
        method._di_binding = binding
        return method

    return decorator


class Resolved(Generic[T]):
    """Field resolved from a service registry on first read.

    The resolved service is cached in the reading instance's ``__dict__``;
    the field is read-only.
    """

    def __init__(
        self,
        owner: Union[Type[T], str],
        name: str = DEFAULT_NAME,
        registry: Optional[ServiceRegistry] = None,
    ):
        self.owner = owner
        self.name = name
        self.registry = registry
        self.attr_name: Optional[str] = None

    @property
    def key(self) -> str:
        return service_key(self.owner, self.name)

    def __set_name__(self, owner_cls: type, attr_name: str) -> None:
        self.attr_name = attr_name

    def __get__(self, instance: Any, owner_cls: Optional[type] = None) -> Any:
        if instance is None:
            return self
        if self.attr_name is None:
            raise TypeError("resolve() must be assigned in a class body")

        cache = instance.__dict__
        if self.attr_name in cache:
            return cache[self.attr_name]

        key = self.key
        registry = self.registry
        if registry is None:
            registry = get_active_registry()
        if registry is None:
            raise NotReadyError(key)

        value = registry.get(key)
        cache[self.attr_name] = value
        logger.debug(f"Resolved {type(instance).__name__}.{self.attr_name} -> {key}")
        return value

    def __set__(self, instance: Any, value: Any) -> None:
        raise AttributeError(
            f"'{self.attr_name}' is resolved from the service registry and is read-only"
        )

    def __repr__(self) -> str:
        return f"Resolved({self.key!r})"


def resolve(
    owner: Union[Type[T], str],
    *,
    name: str = DEFAULT_NAME,
    registry: Optional[ServiceRegistry] = None,
) -> Resolved[T]:
    """
    Declare a field resolved from the service registry.

    Args:
        owner: Type of the service to resolve, or its name
        name: Logical name the service was registered under
        registry: Registry to read from instead of the active one

    Returns:
        Descriptor to assign as a class attribute
    """
    return Resolved(owner, name, registry)
