"""Process-wide table of declared service factory bindings.

Bindings are recorded while registry classes are being defined, before any
registry instance exists. The table is shared by every ServiceRegistry
subclass in the process and is never cleared by a registry's teardown.
"""

from dataclasses import dataclass
from itertools import chain
from typing import Dict, Iterator, List, Optional, Union

from loguru import logger

from ..errors import ConfigurationError, DuplicateKeyError, DuplicateMethodError

DEFAULT_NAME = "default"


def service_key(owner: Union[type, str], name: str = DEFAULT_NAME) -> str:
    """Build the key identifying one service slot.

    Args:
        owner: Owning type, or its name
        name: Logical service name

    Returns:
        Key of the form ``"<Owner>::<name>"``
    """
    owner_name = owner if isinstance(owner, str) else owner.__name__
    return f"{owner_name}::{name}"


@dataclass(frozen=True)
class Binding:
    """A factory method bound to a service key."""
    method_name: str
    key: str
    lazy: bool = False
    defined_in: Optional[str] = None


class BindingTable:
    """Eager and lazy bindings, keyed by factory method.

    With ``qualify_method_names`` off, two registry classes declaring a
    factory method with the same name collide even if their keys differ.
    """

    def __init__(self, qualify_method_names: bool = False):
        self._eager: Dict[str, Binding] = {}
        self._lazy: Dict[str, Binding] = {}
        self._qualify_method_names = qualify_method_names

    @property
    def qualify_method_names(self) -> bool:
        return self._qualify_method_names

    @qualify_method_names.setter
    def qualify_method_names(self, enabled: bool) -> None:
        if enabled == self._qualify_method_names:
            return
        if len(self):
            raise ConfigurationError(
                "Method name qualification cannot change after bindings are recorded",
                field_path="registry.qualify_method_names",
                invalid_value=enabled,
            ).with_suggestion("Apply registry settings before importing registry classes")
        self._qualify_method_names = enabled

    def _slot(self, method_name: str, defined_in: Optional[str]) -> str:
        if self._qualify_method_names and defined_in:
            return f"{defined_in}.{method_name}"
        return method_name

    def record(
        self,
        method_name: str,
        key: str,
        lazy: bool = False,
        *,
        defined_in: Optional[str] = None,
    ) -> Binding:
        """Record a factory binding.

        Args:
            method_name: Name of the factory method on the registry class
            key: Service key the factory produces
            lazy: Whether the service is created on first resolution
            defined_in: Qualified name of the class defining the method

        Returns:
            The recorded binding

        Raises:
            DuplicateMethodError: If the method is already bound
            DuplicateKeyError: If the key is already bound
        """
        slot = self._slot(method_name, defined_in)
        if slot in self._eager or slot in self._lazy:
            raise DuplicateMethodError(method_name, key=key)

        if self.has_key(key):
            raise DuplicateKeyError(key, method_name=method_name)

        binding = Binding(method_name, key, lazy, defined_in)
        if lazy:
            self._lazy[slot] = binding
        else:
            self._eager[slot] = binding

        logger.debug(
            f"Recorded {'lazy' if lazy else 'eager'} binding: {method_name} -> {key}"
        )
        return binding

    def has_key(self, key: str) -> bool:
        return any(binding.key == key for binding in self)

    def eager_bindings(self) -> List[Binding]:
        """Eager bindings in declaration order."""
        return list(self._eager.values())

    def lazy_bindings(self) -> List[Binding]:
        """Lazy bindings in declaration order."""
        return list(self._lazy.values())

    def clear(self) -> None:
        """Drop every binding (mainly for testing)."""
        self._eager.clear()
        self._lazy.clear()

    def __iter__(self) -> Iterator[Binding]:
        return chain(self._eager.values(), self._lazy.values())

    def __len__(self) -> int:
        return len(self._eager) + len(self._lazy)

    def __contains__(self, method_name: object) -> bool:
        return any(binding.method_name == method_name for binding in self)


# Global table shared by all registry classes
_table = BindingTable()


def get_binding_table() -> BindingTable:
    """Get the process-wide binding table."""
    return _table


def clear_registry() -> None:
    """Clear the process-wide binding table (mainly for testing)."""
    _table.clear()
