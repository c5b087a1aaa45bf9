"""Capabilities the registry consumes from the services it produces."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class Disposable(Protocol):
    """Service with a teardown hook, called once by ``ServiceRegistry.destroy``."""

    def on_dispose(self) -> None:
        ...


class Injectable:
    """Optional base class for services.

    Any object can be registered; subclasses override ``on_dispose`` to
    release resources at teardown.
    """

    def on_dispose(self) -> None:
        return None
