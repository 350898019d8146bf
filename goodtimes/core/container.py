"""
Service container for goodtimes.

A process-wide registry mapping interfaces (ILogger, IPresenter) to
dependency-injector providers. ``bootstrap()`` fills it once per CLI
invocation; services look their collaborators up lazily so they also work
unbootstrapped, e.g. in tests.
"""

from collections.abc import Callable
from typing import ClassVar, Optional, TypeVar

from dependency_injector import providers

T = TypeVar("T")


class ServiceContainer:
    """Interface -> provider registry with a single global instance."""

    _instance: ClassVar[Optional["ServiceContainer"]] = None

    def __init__(self) -> None:
        self._providers: dict[type, providers.Provider] = {}

    @classmethod
    def get_instance(cls) -> "ServiceContainer":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the global instance and every registration with it."""
        cls._instance = None

    def register_singleton(
        self,
        interface: type[T],
        implementation: T | None = None,
        factory: Callable[[], T] | None = None,
    ) -> None:
        """
        Bind ``interface`` to one shared object.

        Args:
            interface: Abstract type used as the lookup key
            implementation: Ready-made instance
            factory: Called on first resolve instead, for lazy setup

        Raises:
            ValueError: If neither implementation nor factory is given
        """
        if implementation is not None:
            provider: providers.Provider = providers.Object(implementation)
        elif factory is not None:
            provider = providers.Singleton(factory)
        else:
            raise ValueError("Must provide either implementation or factory")
        self._providers[interface] = provider

    def is_registered(self, interface: type) -> bool:
        return interface in self._providers

    def resolve(self, interface: type[T]) -> T:
        """
        Return the object bound to ``interface``.

        Raises:
            KeyError: If nothing is registered for it
        """
        try:
            provider = self._providers[interface]
        except KeyError:
            raise KeyError(f"No provider registered for: {interface.__name__}") from None
        return provider()

    def try_resolve(self, interface: type[T]) -> T | None:
        """Like :meth:`resolve`, but None when nothing is registered."""
        if not self.is_registered(interface):
            return None
        return self.resolve(interface)


def get_container() -> ServiceContainer:
    """Get the global service container instance."""
    return ServiceContainer.get_instance()


def resolve(interface: type[T]) -> T:
    """Resolve a service from the global container."""
    return get_container().resolve(interface)


def try_resolve(interface: type[T]) -> T | None:
    """Try to resolve a service, returning None if not registered."""
    return get_container().try_resolve(interface)
