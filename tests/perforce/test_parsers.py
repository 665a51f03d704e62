"""Tests for p4edit.perforce.parsers module."""

import logging

import pytest

from p4edit.core.types import ClientRow
from p4edit.perforce.parsers import parse_clients, parse_info

P4_INFO_OUTPUT = """\
User name: bob
Client name: bob-ws
Client host: devbox
Client root: /home/bob/ws
Current directory: /home/bob/ws/src
Peer address: 10.0.0.5:51234
Client address: 10.0.0.5
Server address: perforce:1666
Server root: /p4/root
Server date: 2024/05/01 10:00:00 +0000 UTC
Server uptime: 120:05:33
Server version: P4D/LINUX26X86_64/2023.2/2513900 (2023/12/12)
ServerID: master
Server services: standard commit-server
Server license: Example Corp 100 users (expires 2025/01/01)
Server license-ip: 10.0.0.1
Case Handling: sensitive
"""


class TestParseInfo:
    """Tests for parse_info function."""

    def test_full_output(self) -> None:
        """Test parsing complete p4 info output."""
        info = parse_info(P4_INFO_OUTPUT)

        assert info.user_name == "bob"
        assert info.client_name == "bob-ws"
        assert info.client_host == "devbox"
        assert info.client_root == "/home/bob/ws"
        assert info.current_directory == "/home/bob/ws/src"
        assert info.peer_address == "10.0.0.5:51234"
        assert info.client_address == "10.0.0.5"
        assert info.server_address == "perforce:1666"
        assert info.server_root == "/p4/root"
        assert info.server_date == "2024/05/01 10:00:00 +0000 UTC"
        assert info.server_uptime == "120:05:33"
        assert info.server_version == "P4D/LINUX26X86_64/2023.2/2513900 (2023/12/12)"
        assert info.server_id == "master"
        assert info.server_services == ["standard", "commit-server"]
        assert info.server_license == "Example Corp 100 users (expires 2025/01/01)"
        assert info.server_license_ip == "10.0.0.1"
        assert info.case_handling == "sensitive"

    def test_subset_of_fields(self) -> None:
        """Test parsing a subset of fields."""
        info = parse_info("Client name: foo\nUser name: bob\n")

        assert info.client_name == "foo"
        assert info.user_name == "bob"
        assert info.model_dump(exclude_none=True) == {
            "client_name": "foo",
            "user_name": "bob",
        }

    def test_empty_input(self) -> None:
        """Test parsing empty info output."""
        info = parse_info("")
        assert info.is_empty is True
        assert all(value is None for value in info.model_dump().values())

    def test_unknown_labels_and_noise_ignored(self) -> None:
        """Test that unknown labels and noise lines are ignored."""
        info = parse_info("Client unknown.\nBroker address: x:1666\nUser name: bob\n")
        assert info.model_dump(exclude_none=True) == {"user_name": "bob"}

    def test_splits_on_first_separator_only(self) -> None:
        """Test that values may contain ': '."""
        info = parse_info("Client root: C:\\work: sandbox\n")
        assert info.client_root == "C:\\work: sandbox"

    def test_values_trimmed(self) -> None:
        """Test that values are trimmed."""
        info = parse_info("Client name:    spaced   \r\n")
        assert info.client_name == "spaced"

    def test_label_match_is_exact(self) -> None:
        """Test that labels must match exactly."""
        info = parse_info("client name: lower\n")
        assert info.client_name is None


class TestParseClients:
    """Tests for parse_clients function."""

    def test_rows_in_order(self) -> None:
        """Test that rows keep output order."""
        rows = parse_clients("clientA;/root/a;hostX\nclientB;/root/b;hostY\n")

        assert rows == [
            ClientRow(client="clientA", root="/root/a", host="hostX"),
            ClientRow(client="clientB", root="/root/b", host="hostY"),
        ]

    def test_malformed_row_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test that rows with too few fields are skipped."""
        raw = "clientA;/root/a;hostX\nbroken;/root/b\nclientC;/root/c;hostZ\n"

        with caplog.at_level(logging.WARNING, logger="p4edit.perforce.parsers"):
            rows = parse_clients(raw)

        assert [row.client for row in rows] == ["clientA", "clientC"]
        assert "broken;/root/b" in caplog.text

    def test_empty_lines_ignored(self) -> None:
        """Test that empty lines are skipped."""
        rows = parse_clients("\nclientA;/root/a;hostX\n\n")
        assert len(rows) == 1

    def test_empty_input(self) -> None:
        """Test parsing empty clients output."""
        assert parse_clients("") == []

    def test_empty_host(self) -> None:
        """Test a row with an empty host."""
        rows = parse_clients("clientA;/root/a;\n")
        assert rows == [ClientRow(client="clientA", root="/root/a", host="")]

    def test_separator_inside_root(self) -> None:
        """Test that extra separators stay in the root."""
        rows = parse_clients("clientA;/root/odd;name;hostX\n")
        assert rows == [ClientRow(client="clientA", root="/root/odd;name", host="hostX")]

    def test_windows_line_endings(self) -> None:
        """Test parsing CRLF output."""
        rows = parse_clients("clientA;C:\\ws;hostX\r\nclientB;D:\\ws;hostY\r\n")
        assert [row.root for row in rows] == ["C:\\ws", "D:\\ws"]
        assert rows[1].host == "hostY"
