"""Tests for the format library."""

from io import StringIO

import pytest

from nocalhost_local.identity import ResourceIdentity
from nocalhost_local.store import InMemoryAppStateStore, WorkloadStatus, set_status
from nocalhost_local.tool.format import StateFormatter, describe_key, table_lines


def test_table_lines_empty() -> None:
    """Tests with no columns."""
    assert list(table_lines([], [])) == []


def test_table_lines_no_rows() -> None:
    """Tests with a header only."""
    assert list(table_lines(["a", "b", "c"], [])) == ["A    B    C"]


def test_table_lines_rows() -> None:
    """Tests columns are aligned on the widest value."""
    assert list(
        table_lines(["protocol", "uri"], [["nocalhost-rw", "nocalhost-rw://nh/x"]])
    ) == [
        "PROTOCOL        URI",
        "nocalhost-rw    nocalhost-rw://nh/x",
    ]


@pytest.mark.parametrize(
    ("key", "expected"),
    [
        ("demo/ns1/Deployment/web_status", ("ns1/Deployment/web", "status")),
        ("_status", ("-", "status")),
        ("installed", ("-", "installed")),
        ("other/ns1/Job/migrate_status", ("other/ns1/Job/migrate", "status")),
    ],
    ids=["workload-status", "app-status", "app-field", "foreign-app"],
)
def test_describe_key(key: str, expected: tuple[str, str]) -> None:
    """Test splitting state keys into resource and field."""
    assert describe_key("demo", key) == expected


def test_state_formatter() -> None:
    """Test printing the state of one application."""
    store = InMemoryAppStateStore()
    identity = ResourceIdentity(
        app_name="demo", namespace="ns1", kind="Deployment", name="web"
    )
    store.set("demo", "installed", True)
    set_status(store, identity, WorkloadStatus.DEVELOPING)
    store.set("other", "installed", True)

    out = StringIO()
    assert StateFormatter(store, "demo").print(file=out)
    assert out.getvalue().splitlines() == [
        "RESOURCE              FIELD        VALUE",
        "-                     installed    True",
        "ns1/Deployment/web    status       Developing",
    ]


def test_state_formatter_empty() -> None:
    """Test nothing is printed for an application without state."""
    out = StringIO()
    assert not StateFormatter(InMemoryAppStateStore(), "demo").print(file=out)
    assert out.getvalue() == ""
