"""Application lifecycle events."""

import asyncio
import logging
from enum import Enum
from typing import Self

from .types import LifecycleListener

logger = logging.getLogger(__name__)


class LifecycleState(str, Enum):
    """States the host application moves through."""

    RESUMED = "resumed"
    INACTIVE = "inactive"
    HIDDEN = "hidden"
    PAUSED = "paused"
    DETACHED = "detached"


class AppLifecycle:
    """Event source the host drives with lifecycle transitions.

    Listeners are async callables receiving the new state. The host calls
    ``emit`` whenever the application changes state.

    Example:
        >>> lifecycle = AppLifecycle()
        >>> async def on_change(state: LifecycleState) -> None:
        ...     print(state.value)
        >>> lifecycle.add_listener(on_change)
    """

    def __init__(self: Self) -> None:
        """Initialize an event source without listeners."""
        self._listeners: list[LifecycleListener] = []

    @property
    def listeners(self: Self) -> list[LifecycleListener]:
        """Currently registered listeners."""
        return list(self._listeners)

    def add_listener(self: Self, listener: LifecycleListener) -> None:
        """Register a listener.

        Args:
            listener: Callable invoked on every state change.
        """
        self._listeners.append(listener)

    def remove_listener(self: Self, listener: LifecycleListener) -> None:
        """Remove a previously registered listener.

        Removing a listener that is not registered does nothing.
        """
        if listener in self._listeners:
            self._listeners.remove(listener)

    async def emit(self: Self, state: LifecycleState) -> None:
        """Notify every listener of a state change.

        Listeners run concurrently. The first listener error is raised to
        the caller once all listeners have finished.

        Args:
            state: The state the application moved to.
        """
        logger.debug("Lifecycle state changed: %s", state.value)
        results = await asyncio.gather(
            *(listener(state) for listener in self.listeners),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
