"""
Application bootstrap for goodtimes.

Initializes the DI container with the logger and presenter.
This module should be called once at application startup.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .container import ServiceContainer, get_container
from .interfaces.logger import ILogger
from .interfaces.presenter import IPresenter

if TYPE_CHECKING:
    from .settings import GoodtimesSettings

_initialized = False


def bootstrap(settings: GoodtimesSettings) -> ServiceContainer:
    """
    Bootstrap the goodtimes application.

    Args:
        settings: Loaded settings; the logging section configures ILogger

    Returns:
        Initialized ServiceContainer
    """
    global _initialized

    container = get_container()

    if _initialized:
        return container

    from ..presenters.console import ConsolePresenter
    from ..services.logging import GoodtimesLogger

    container.register_singleton(IPresenter, implementation=ConsolePresenter())  # type: ignore[type-abstract]

    log_cfg = settings.logging

    def create_logger() -> ILogger:
        return GoodtimesLogger(
            level=log_cfg.level,
            console_enabled=log_cfg.console,
            file_enabled=log_cfg.file,
        )

    container.register_singleton(ILogger, factory=create_logger)  # type: ignore[type-abstract]

    _initialized = True
    return container


def reset() -> None:
    """
    Reset the application state.

    Useful for testing to ensure clean state between tests.
    """
    global _initialized
    ServiceContainer.reset()
    _initialized = False


def is_initialized() -> bool:
    """Check if the application has been bootstrapped."""
    return _initialized
