"""Tests for building targets from command line flags."""

from argparse import ArgumentParser

import pytest

from nocalhost_local.config import DEFAULT_KUBE_CONFIG_FULLPATH, UserConfig
from nocalhost_local.exceptions import InputException
from nocalhost_local.identity import TargetKind
from nocalhost_local.tool import selector


def test_workload_flags() -> None:
    """Test parsing workload flags into a target."""
    parser = ArgumentParser()
    selector.add_workload_flags(parser)
    args = parser.parse_args(["web", "-k", "StatefulSet", "-a", "demo"])
    target = selector.build_workload_target(UserConfig(), **vars(args))
    assert target.target_kind == TargetKind.WORKLOAD
    assert target.app_name == "demo"
    assert target.namespace == "default"
    assert target.kind == "StatefulSet"
    assert target.name == "web"
    assert target.kube_config_path == str(DEFAULT_KUBE_CONFIG_FULLPATH)


def test_selected_app() -> None:
    """Test the selected application and kube config are used by default."""
    user_config = UserConfig(selected_app="bookinfo", current_kube_config="/tmp/kc")
    target = selector.build_app_target(user_config, namespace="ns1")
    assert target.target_kind == TargetKind.APPLICATION
    assert target.app_name == "bookinfo"
    assert target.kube_config_path == "/tmp/kc"
    assert target.url is None


def test_no_app() -> None:
    """Test an application must be selected."""
    with pytest.raises(InputException, match="you must select one app"):
        selector.build_app_target(UserConfig())
