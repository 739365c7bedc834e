"""Tests for workload status helpers."""

from nocalhost_local.identity import ResourceIdentity, status_key
from nocalhost_local.store import (
    InMemoryAppStateStore,
    StateChange,
    WorkloadStatus,
    get_status,
    set_status,
)


def test_set_status(identity: ResourceIdentity) -> None:
    """Test setting and clearing the status of a workload."""
    store = InMemoryAppStateStore()
    events: list[StateChange] = []
    store.add_listener(events.append)

    set_status(store, identity, WorkloadStatus.DEVELOPING, subject="node")
    assert get_status(store, identity) == "Developing"
    assert store.get("demo", status_key(identity)) == "Developing"

    set_status(store, identity, None, subject="node")
    assert get_status(store, identity) is None

    assert [(e.value, e.removed, e.subject) for e in events] == [
        ("Developing", False, "node"),
        (None, True, "node"),
    ]
