"""Tests for resource identities."""

import pytest

from nocalhost_local.exceptions import InputException
from nocalhost_local.identity import (
    AppTarget,
    ResourceIdentity,
    TargetKind,
    WorkloadTarget,
    derive_key,
    status_key,
)


def test_derive_key(identity: ResourceIdentity) -> None:
    """Test the key includes every field."""
    assert derive_key(identity) == "demo/ns1/Deployment/web"
    assert status_key(identity) == "demo/ns1/Deployment/web_status"


def test_derive_key_distinct() -> None:
    """Test identities that differ in any field get different keys."""
    base = ResourceIdentity("demo", "ns1", "Deployment", "web")
    others = [
        ResourceIdentity("demo2", "ns1", "Deployment", "web"),
        ResourceIdentity("demo", "ns2", "Deployment", "web"),
        ResourceIdentity("demo", "ns1", "StatefulSet", "web"),
        ResourceIdentity("demo", "ns1", "Deployment", "Web"),
    ]
    keys = {derive_key(base), *[derive_key(other) for other in others]}
    assert len(keys) == 5


def test_identity_equality() -> None:
    """Test identities compare by value and are case-sensitive."""
    assert ResourceIdentity("demo", "ns1", "Deployment", "web") == ResourceIdentity(
        "demo", "ns1", "Deployment", "web"
    )
    assert ResourceIdentity("demo", "ns1", "Deployment", "web") != ResourceIdentity(
        "demo", "ns1", "deployment", "web"
    )


@pytest.mark.parametrize(
    ("fields", "match"),
    [
        (("demo", "ns1", "Deployment", ""), "missing name"),
        (("", "ns1", "Deployment", "web"), "missing app_name"),
        (("demo", "ns/1", "Deployment", "web"), "namespace may not contain"),
        (("demo", "ns1", "Deployment", "a/b"), "name may not contain"),
    ],
)
def test_invalid_identity(fields: tuple[str, str, str, str], match: str) -> None:
    """Test identities that would produce ambiguous keys are rejected."""
    with pytest.raises(InputException, match=match):
        ResourceIdentity(*fields)


def test_target_kinds(workload: WorkloadTarget, app: AppTarget) -> None:
    """Test targets are tagged with their kind."""
    assert workload.target_kind == TargetKind.WORKLOAD
    assert app.target_kind == TargetKind.APPLICATION
    assert workload.app_name == "demo"
    assert workload.kind == "Deployment"
