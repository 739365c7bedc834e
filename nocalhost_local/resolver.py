"""Resolution of the authoritative config source for a workload.

A workload config is either loaded from stored data (a local override file or
a config map, reconciled by nhctl) or is a generated default. The resolver asks
nhctl which one applies and encodes the answer, together with every parameter
needed to regenerate the content, into a virtual document URI:

    nocalhost://nh/config/app/demo/services/web.yaml?appName=demo&nodeName=web&...

The URI is the only thing handed to the document provider, so it must carry
the full context of the workload. Resolution is never cached.
"""

from dataclasses import dataclass
from enum import StrEnum
import logging
from urllib.parse import parse_qs, quote, unquote, urlencode, urlsplit, urlunsplit

from .exceptions import CommandException, InputException, ResolutionError
from .identity import ResourceIdentity, WorkloadTarget, derive_key
from .nhctl import Nhctl

_LOGGER = logging.getLogger(__name__)

__all__ = [
    "Protocol",
    "ConfigResolution",
    "ConfigResolver",
    "DocumentParams",
]

CONFIG_AUTHORITY = "nh"
CONFIG_SUFFIX = ".yaml"


class Protocol(StrEnum):
    """Scheme of a config document URI."""

    EDITABLE = "nocalhost"
    """Config resolved from stored data that can be saved back."""

    DEFAULT = "nocalhost-rw"
    """Generated default config, not intended to be saved."""


@dataclass(frozen=True)
class DocumentParams:
    """Parameters carried by a config document URI."""

    app_name: str
    node_name: str
    resource_type: str
    id: str
    kube_config_path: str
    namespace: str

    @classmethod
    def from_target(cls, target: WorkloadTarget) -> "DocumentParams":
        """Return the parameters describing a workload."""
        return cls(
            app_name=target.app_name,
            node_name=target.name,
            resource_type=target.kind,
            id=derive_key(target.identity),
            kube_config_path=target.kube_config_path,
            namespace=target.namespace,
        )

    @property
    def target(self) -> WorkloadTarget:
        """The workload the document describes."""
        return WorkloadTarget(
            identity=ResourceIdentity(
                app_name=self.app_name,
                namespace=self.namespace,
                kind=self.resource_type,
                name=self.node_name,
            ),
            kube_config_path=self.kube_config_path,
        )

    def to_uri(self, protocol: Protocol) -> str:
        """Render the config document URI for the protocol."""
        path = (
            f"/config/app/{quote(self.app_name, safe='')}"
            f"/services/{quote(self.node_name, safe='')}{CONFIG_SUFFIX}"
        )
        query = urlencode(
            {
                "appName": self.app_name,
                "nodeName": self.node_name,
                "resourceType": self.resource_type,
                "id": self.id,
                "kubeConfigPath": self.kube_config_path,
                "namespace": self.namespace,
            },
            quote_via=quote,
        )
        return urlunsplit((str(protocol), CONFIG_AUTHORITY, path, query, ""))

    @classmethod
    def from_uri(cls, uri: str) -> "DocumentParams":
        """Parse the parameters out of a config document URI."""
        parts = urlsplit(uri)
        if parts.netloc != CONFIG_AUTHORITY or not parts.path.startswith("/config/"):
            raise InputException(f"Not a config document URI: {uri}")
        query = parse_qs(parts.query, keep_blank_values=True)
        values: dict[str, str] = {}
        for param, attr in _QUERY_PARAMS.items():
            if len(found := query.get(param, [])) != 1:
                raise InputException(
                    f"Config document URI must have exactly one '{param}': {uri}"
                )
            values[attr] = found[0]
        params = cls(**values)
        if params.id != derive_key(params.target.identity):
            raise InputException(
                f"Config document URI id does not match its workload: {uri}"
            )
        return params


_QUERY_PARAMS = {
    "appName": "app_name",
    "nodeName": "node_name",
    "resourceType": "resource_type",
    "id": "id",
    "kubeConfigPath": "kube_config_path",
    "namespace": "namespace",
}


def document_name(uri: str) -> str:
    """Return the file name shown for a document URI."""
    return unquote(urlsplit(uri).path.rsplit("/", 1)[-1])


@dataclass(frozen=True)
class ConfigResolution:
    """The resolved config source of a workload."""

    protocol: Protocol
    uri: str

    @property
    def editable(self) -> bool:
        return self.protocol == Protocol.EDITABLE


class ConfigResolver:
    """Determines which config source is authoritative for a workload."""

    def __init__(self, nhctl: Nhctl) -> None:
        """Initialize ConfigResolver."""
        self._nhctl = nhctl

    async def resolve(self, target: WorkloadTarget) -> ConfigResolution:
        """Resolve the config document of the workload.

        A workload with either a local override or a config map override gets
        the editable protocol; precedence between the two is left to nhctl.
        """
        try:
            profile = await self._nhctl.describe(target)
        except CommandException as err:
            raise ResolutionError(str(target.identity), str(err)) from err
        protocol = Protocol.DEFAULT
        if profile.localconfigloaded or profile.cmconfigloaded:
            protocol = Protocol.EDITABLE
        _LOGGER.debug(
            "Resolved %s (local=%s, configmap=%s) to %s",
            target.identity,
            profile.localconfigloaded,
            profile.cmconfigloaded,
            protocol,
        )
        uri = DocumentParams.from_target(target).to_uri(protocol)
        return ConfigResolution(protocol=protocol, uri=uri)
