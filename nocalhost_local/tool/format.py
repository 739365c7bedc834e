"""Console tables for nocalhost-local output."""

from collections.abc import Iterator
import sys
from typing import TextIO

from nocalhost_local.identity import KEY_SEPARATOR, STATUS_SUFFIX
from nocalhost_local.store import AppStateStore

GAP = "    "

# Resource column for state that belongs to the application itself
APP_RESOURCE = "-"


def table_lines(headers: list[str], rows: list[list[str]]) -> Iterator[str]:
    """Yield the header and rows aligned on columns."""
    if not headers:
        return
    table = [[header.upper() for header in headers], *rows]
    widths = [max(len(row[col]) for row in table) for col in range(len(headers))]
    for row in table:
        cells = [value.ljust(width) for value, width in zip(row, widths)]
        yield GAP.join(cells).rstrip()


def describe_key(app_name: str, key: str) -> tuple[str, str]:
    """Split a state key into the resource it belongs to and its field.

    Workload status keys such as `demo/ns1/Deployment/web_status` become
    `("ns1/Deployment/web", "status")`. Keys of the application itself, such
    as `installed`, have no resource.
    """
    resource, field = "", key
    if key.endswith(STATUS_SUFFIX):
        resource, field = key[: -len(STATUS_SUFFIX)], "status"
    prefix = f"{app_name}{KEY_SEPARATOR}"
    if resource.startswith(prefix):
        resource = resource[len(prefix) :]
    return resource or APP_RESOURCE, field


class StateFormatter:
    """Prints the state held for one application."""

    HEADERS = ["resource", "field", "value"]

    def __init__(self, store: AppStateStore, app_name: str) -> None:
        """Initialize StateFormatter."""
        self._store = store
        self._app_name = app_name

    def rows(self) -> list[list[str]]:
        """Return the state entries sorted by resource and field."""
        rows = []
        for key in self._store.keys(self._app_name):
            resource, field = describe_key(self._app_name, key)
            rows.append([resource, field, str(self._store.get(self._app_name, key))])
        return sorted(rows)

    def format(self) -> Iterator[str]:
        """Format the state as a table, nothing if there is no state."""
        if rows := self.rows():
            yield from table_lines(self.HEADERS, rows)

    def print(self, file: TextIO = sys.stdout) -> bool:
        """Print the table, returning False if there was nothing to print."""
        printed = False
        for line in self.format():
            print(line, file=file)
            printed = True
        return printed
