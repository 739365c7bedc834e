"""Module for in memory application state store."""

from collections import defaultdict
from collections.abc import Callable
import logging
from typing import Any, DefaultDict

from .store import AppStateStore, StateChange

_LOGGER = logging.getLogger(__name__)


class InMemoryAppStateStore(AppStateStore):
    """In-memory implementation of the AppStateStore interface.

    State lives for the lifetime of the process and is never persisted.
    """

    def __init__(self) -> None:
        """Initialize the InMemoryAppStateStore."""
        self._state: DefaultDict[str, dict[str, Any]] = defaultdict(dict)
        self._listeners: list[Callable[[StateChange], None]] = []

    def get(self, app_name: str, key: str) -> Any | None:
        """Return the value stored for the key, or None when absent."""
        if (app_state := self._state.get(app_name)) is None:
            return None
        return app_state.get(key)

    def set(
        self,
        app_name: str,
        key: str,
        value: Any,
        refresh: bool = False,
        subject: Any = None,
    ) -> None:
        """Store a value, notifying listeners when refresh is requested."""
        _LOGGER.debug("Setting state %s[%s] = %s", app_name, key, value)
        self._state[app_name][key] = value
        if refresh:
            self._fire_event(
                StateChange(app_name=app_name, key=key, value=value, subject=subject)
            )

    def delete(
        self,
        app_name: str,
        key: str,
        refresh: bool = False,
        subject: Any = None,
    ) -> None:
        """Remove a value if present, notifying listeners when refresh is requested."""
        if (app_state := self._state.get(app_name)) is None or key not in app_state:
            return
        _LOGGER.debug("Deleting state %s[%s]", app_name, key)
        del app_state[key]
        if not app_state:
            del self._state[app_name]
        if refresh:
            self._fire_event(
                StateChange(
                    app_name=app_name, key=key, value=None, removed=True, subject=subject
                )
            )

    def keys(self, app_name: str) -> list[str]:
        """List the state keys currently held for an application."""
        return list(self._state.get(app_name, {}))

    def clear_app(self, app_name: str, refresh: bool = False) -> None:
        """Drop all state held for an application."""
        for key in self.keys(app_name):
            self.delete(app_name, key, refresh=refresh)

    def add_listener(
        self, callback: Callable[[StateChange], None]
    ) -> Callable[[], None]:
        """Register a callback invoked for every notified change."""

        def remove() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        self._listeners.append(callback)
        return remove

    def _fire_event(self, change: StateChange) -> None:
        for cb in list(self._listeners):  # Iterate over a copy for safe removal
            try:
                cb(change)
            except Exception:
                _LOGGER.exception("State listener callback failed for %s", change.key)
