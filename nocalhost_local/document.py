"""Virtual documents materialized on demand from a URI.

Content is never read from a conventional file. Opening a URI produced by the
`ConfigResolver`, `resource_uri` or `app_uri` asks nhctl or kubectl for the
content, so what is shown always reflects the current state of the cluster.
"""

from collections.abc import Awaitable, Callable
import logging
from urllib.parse import (
    SplitResult,
    parse_qs,
    quote,
    unquote,
    urlencode,
    urlsplit,
    urlunsplit,
)

import yaml

from .exceptions import (
    CommandException,
    InputException,
    MaterializationError,
    ReadOnlyDocumentError,
)
from .identity import WorkloadTarget
from .kubectl import Kubectl
from .nhctl import Nhctl
from .resolver import CONFIG_AUTHORITY, DocumentParams, Protocol, document_name

_LOGGER = logging.getLogger(__name__)

__all__ = [
    "VirtualDocumentProvider",
    "resource_uri",
    "app_uri",
]

RESOURCE_AUTHORITY = "k8s"
RESOURCE_PREFIX = "/loadResource/"
APP_PREFIX = "/app/"
SUFFIX = ".yaml"


def _context_query(namespace: str, kube_config_path: str) -> str:
    return urlencode(
        {"namespace": namespace, "kubeConfigPath": kube_config_path},
        quote_via=quote,
    )


def resource_uri(kind: str, name: str, namespace: str, kube_config_path: str) -> str:
    """Return the URI of the raw yaml view of a kubernetes resource."""
    path = f"{RESOURCE_PREFIX}{quote(kind, safe='')}/{quote(name, safe='')}{SUFFIX}"
    return urlunsplit(
        (
            str(Protocol.EDITABLE),
            RESOURCE_AUTHORITY,
            path,
            _context_query(namespace, kube_config_path),
            "",
        )
    )


def app_uri(app_name: str, namespace: str, kube_config_path: str) -> str:
    """Return the URI of the config of a whole application."""
    path = f"{APP_PREFIX}{quote(app_name, safe='')}{SUFFIX}"
    return urlunsplit(
        (
            str(Protocol.EDITABLE),
            CONFIG_AUTHORITY,
            path,
            _context_query(namespace, kube_config_path),
            "",
        )
    )


def _context(parts: SplitResult, uri: str) -> tuple[str, str]:
    query = parse_qs(parts.query, keep_blank_values=True)
    if any(
        len(query.get(param, [])) != 1 for param in ("namespace", "kubeConfigPath")
    ):
        raise MaterializationError(f"Document URI is missing its context: {uri}")
    return query["namespace"][0], query["kubeConfigPath"][0]


class VirtualDocumentProvider:
    """Produces the text of virtual documents."""

    def __init__(self, nhctl: Nhctl, kubectl: Kubectl) -> None:
        """Initialize VirtualDocumentProvider."""
        self._nhctl = nhctl
        self._kubectl = kubectl
        self._loaders: dict[Protocol, Callable[[WorkloadTarget], Awaitable[str]]] = {
            Protocol.EDITABLE: nhctl.get_config,
            Protocol.DEFAULT: nhctl.get_config_template,
        }

    async def provide_content(self, uri: str) -> str:
        """Return the content of the document addressed by the URI.

        Reading never modifies the underlying source. Failures to reach the
        source raise MaterializationError rather than returning empty content.
        """
        _LOGGER.debug("Providing content for %s", uri)
        parts = urlsplit(uri)
        try:
            if parts.netloc == RESOURCE_AUTHORITY:
                return await self._resource_content(parts, uri)
            if parts.path.startswith(APP_PREFIX):
                return await self._app_content(parts, uri)
            protocol, target = _parse_config_uri(uri)
            return await self._loaders[protocol](target)
        except CommandException as err:
            raise MaterializationError(
                f"Unable to load {document_name(uri)}: {err}"
            ) from err

    async def save_content(self, uri: str, content: str) -> None:
        """Write an edited workload config document back to its source."""
        parts = urlsplit(uri)
        if parts.netloc == RESOURCE_AUTHORITY or parts.path.startswith(APP_PREFIX):
            raise ReadOnlyDocumentError(f"{document_name(uri)} is a read-only view")
        protocol, target = _parse_config_uri(uri)
        if protocol != Protocol.EDITABLE:
            raise ReadOnlyDocumentError(
                f"{document_name(uri)} is a generated default and can't be saved"
            )
        try:
            yaml.safe_load(content)
        except yaml.YAMLError as err:
            raise InputException(
                f"Invalid yaml in {document_name(uri)}: {err}"
            ) from err
        _LOGGER.info("Saving config for %s", target.identity)
        await self._nhctl.edit_config(target, content)

    async def _resource_content(self, parts: SplitResult, uri: str) -> str:
        segments = parts.path.removeprefix(RESOURCE_PREFIX).split("/")
        if (
            not parts.path.startswith(RESOURCE_PREFIX)
            or len(segments) != 2
            or not segments[1].endswith(SUFFIX)
        ):
            raise MaterializationError(f"Invalid resource document URI: {uri}")
        namespace, kube_config_path = _context(parts, uri)
        return await self._kubectl.get_yaml(
            unquote(segments[0]),
            unquote(segments[1].removesuffix(SUFFIX)),
            namespace,
            kube_config_path,
        )

    async def _app_content(self, parts: SplitResult, uri: str) -> str:
        name = parts.path.removeprefix(APP_PREFIX)
        if "/" in name or not name.endswith(SUFFIX):
            raise MaterializationError(f"Invalid application document URI: {uri}")
        namespace, kube_config_path = _context(parts, uri)
        return await self._nhctl.get_app_config(
            unquote(name.removesuffix(SUFFIX)), namespace, kube_config_path
        )


def _parse_config_uri(uri: str) -> tuple[Protocol, WorkloadTarget]:
    try:
        protocol = Protocol(urlsplit(uri).scheme)
    except ValueError as err:
        raise MaterializationError(f"Unsupported document scheme: {uri}") from err
    try:
        return protocol, DocumentParams.from_uri(uri).target
    except InputException as err:
        raise MaterializationError(str(err)) from err
