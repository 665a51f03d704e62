"""Parsers for the text output of `p4 info` and `p4 clients`."""

import logging

from p4edit.core.constant import CLIENTS_FIELD_SEPARATOR
from p4edit.core.types import ClientRow, ServerInfo

logger = logging.getLogger(__name__)

# `p4 info` labels mapped to ServerInfo field names.
INFO_FIELDS: dict[str, str] = {
    "User name": "user_name",
    "Client name": "client_name",
    "Client host": "client_host",
    "Client root": "client_root",
    "Current directory": "current_directory",
    "Peer address": "peer_address",
    "Client address": "client_address",
    "Server address": "server_address",
    "Server root": "server_root",
    "Server date": "server_date",
    "Server uptime": "server_uptime",
    "Server version": "server_version",
    "Server ID": "server_id",
    "ServerID": "server_id",
    "Server services": "server_services",
    "Server license": "server_license",
    "Server license-ip": "server_license_ip",
    "Case Handling": "case_handling",
}


def parse_info(raw: str) -> ServerInfo:
    """Parse `p4 info` output.

    Every line is split on its first ": ". Known labels are copied into the
    matching field, unknown labels are ignored. Any subset of fields, in any
    order, is accepted.

    Args:
        raw: Raw stdout of `p4 info`.

    Returns:
        ServerInfo with the discovered fields set.
    """
    values: dict[str, str | list[str]] = {}

    for line in raw.splitlines():
        if ": " not in line:
            continue
        label, value = line.split(": ", 1)
        field_name = INFO_FIELDS.get(label.strip())
        if field_name is None:
            continue
        value = value.strip()
        if field_name == "server_services":
            values[field_name] = value.split()
        else:
            values[field_name] = value

    return ServerInfo(**values)


def parse_clients(raw: str) -> list[ClientRow]:
    """Parse scripted `p4 clients -F %client%;%Root%;%Host%` output.

    Rows with fewer than three fields are skipped with a warning. If a row has
    more than three fields the extra separators are assumed to belong to the
    root path.

    Args:
        raw: Raw stdout of `p4 clients`.

    Returns:
        Client rows in output order.
    """
    rows: list[ClientRow] = []

    for line in raw.rstrip("\r\n").splitlines():
        line = line.strip()
        if not line:
            continue

        fields = line.split(CLIENTS_FIELD_SEPARATOR)
        if len(fields) < 3:
            logger.warning(f"Skipping malformed clients row: {line!r}")
            continue

        client, *root_parts, host = fields
        rows.append(
            ClientRow(
                client=client.strip(),
                root=CLIENTS_FIELD_SEPARATOR.join(root_parts).strip(),
                host=host.strip(),
            )
        )

    return rows
