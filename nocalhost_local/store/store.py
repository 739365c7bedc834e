"""Store module for holding application state while commands run."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class StateChange:
    """Notification describing a change to a single state key."""

    app_name: str
    key: str
    value: Any
    """The new value, or None when the key was removed."""

    removed: bool = False
    subject: Any = None
    """Opaque reference to the thing a UI should re-render."""


class AppStateStore(ABC):
    """Abstract base class for the process wide application state store with listener support."""

    @abstractmethod
    def get(self, app_name: str, key: str) -> Any | None:
        """Return the value stored for the key, or None when absent."""

    @abstractmethod
    def set(
        self,
        app_name: str,
        key: str,
        value: Any,
        refresh: bool = False,
        subject: Any = None,
    ) -> None:
        """Store a value, notifying listeners when refresh is requested."""

    @abstractmethod
    def delete(
        self,
        app_name: str,
        key: str,
        refresh: bool = False,
        subject: Any = None,
    ) -> None:
        """Remove a value if present, notifying listeners when refresh is requested."""

    @abstractmethod
    def keys(self, app_name: str) -> list[str]:
        """List the state keys currently held for an application."""

    @abstractmethod
    def clear_app(self, app_name: str, refresh: bool = False) -> None:
        """Drop all state held for an application."""

    @abstractmethod
    def add_listener(
        self, callback: Callable[[StateChange], None]
    ) -> Callable[[], None]:
        """Register a callback invoked for every notified change.

        Returns a callable that can be called to remove the listener.
        """
