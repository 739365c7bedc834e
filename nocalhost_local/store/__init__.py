"""
The store module holds the runtime state of applications and their workloads.

- State is keyed by application name and then by an arbitrary state key,
  conventionally derived from a ResourceIdentity plus a suffix such as `_status`.
- Writes are last-write-wins per key and may notify listeners so that a UI
  can re-render only the affected subject.

This abstract interface allows for various implementations (in-memory, persistent, etc.).
"""

from .store import AppStateStore, StateChange
from .in_memory import InMemoryAppStateStore
from .status import WorkloadStatus, get_status, set_status

__all__ = [
    "AppStateStore",
    "StateChange",
    "InMemoryAppStateStore",
    "WorkloadStatus",
    "get_status",
    "set_status",
]
