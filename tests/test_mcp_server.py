"""Tests for MCP server tool wrappers.

Mocks at MondayClient level. Verifies each tool calls the correct
client method and that errors are converted to dicts.
"""

import pytest

mcp_mod = pytest.importorskip("monday_cli.mcp_server", reason="mcp package not installed")

import importlib  # noqa: E402
from unittest.mock import MagicMock, patch  # noqa: E402

from monday_cli.builders import (  # noqa: E402
    Checkbox,
    DateTime,
    DropdownIds,
    People,
    PersonTeam,
    StatusIndex,
)
from monday_cli.exceptions import CliError, SetupError, UnknownColumnError  # noqa: E402

_core = importlib.import_module("monday_cli.mcp_server._core")
_tools_write = importlib.import_module("monday_cli.mcp_server._tools_write")


@pytest.fixture(autouse=True)
def _reset_client_cache():
    """Reset the cached MondayClient between tests."""
    _core._client = None
    yield
    _core._client = None


def _mock_client(**method_returns):
    client = MagicMock()
    for name, val in method_returns.items():
        getattr(client, name).return_value = val
    return client


# ---------------------------------------------------------------------------
# Read tools
# ---------------------------------------------------------------------------


class TestReadTools:
    @patch("monday_cli.mcp_server._core.MondayClient")
    def test_get_me(self, MockClient):
        MockClient.return_value = _mock_client(get_me={"id": 1, "name": "Ada"})
        result = mcp_mod.get_me()
        assert result["name"] == "Ada"
        assert result["ok"] is True
        assert result["schema_version"] == "1.0"

    @patch("monday_cli.mcp_server._core.MondayClient")
    def test_list_boards_returns_list(self, MockClient):
        MockClient.return_value = _mock_client(get_boards=[{"id": "1", "name": "Roadmap"}])
        assert mcp_mod.list_boards() == [{"id": "1", "name": "Roadmap"}]

    @patch("monday_cli.mcp_server._core.MondayClient")
    def test_list_items_defaults(self, MockClient):
        client = _mock_client(list_items={"board_id": "1", "items": [], "total_count": 0})
        MockClient.return_value = client
        result = mcp_mod.list_items("1")
        assert result["total_count"] == 0
        client.list_items.assert_called_once_with(
            board_id="1", group_id=None, with_labels=True, limit=50
        )

    @patch("monday_cli.mcp_server._core.MondayClient")
    def test_list_labels(self, MockClient):
        client = _mock_client(list_labels=[{"index": "0", "name": "Done"}])
        MockClient.return_value = client
        assert mcp_mod.list_labels("1", "status") == [{"index": "0", "name": "Done"}]
        client.list_labels.assert_called_once_with(board_id="1", column_id="status")

    @patch("monday_cli.mcp_server._core.MondayClient")
    def test_invalid_board_id_never_reaches_client(self, MockClient):
        result = mcp_mod.list_columns("abc")
        assert result["ok"] is False
        assert "numeric id" in result["error"]
        MockClient.assert_not_called()


# ---------------------------------------------------------------------------
# Write tools
# ---------------------------------------------------------------------------


class TestCreateItem:
    @patch("monday_cli.mcp_server._core.MondayClient")
    def test_assembles_column_values(self, MockClient):
        client = _mock_client(create_item={"ok": True, "item_id": "555"})
        MockClient.return_value = client
        result = mcp_mod.create_item(
            "123",
            "topics",
            "New item",
            text={"notes": "hi"},
            dates={"due": "2019-05-22", "start": "2019-05-20 09:00:00"},
            statuses={"status": 2},
            checkboxes={"done": True},
            people={"owner": [11, 22]},
            dropdowns={"tags": [5]},
        )
        assert result["item_id"] == "555"
        values = client.create_item.call_args.kwargs["column_values"]
        assert values == {
            "notes": "hi",
            "due": DateTime("2019-05-22", ""),
            "start": DateTime("2019-05-20", "09:00:00"),
            "status": StatusIndex(2),
            "done": Checkbox("true"),
            "owner": People((PersonTeam(11), PersonTeam(22))),
            "tags": DropdownIds((5,)),
        }

    @patch("monday_cli.mcp_server._core.MondayClient")
    def test_no_values(self, MockClient):
        client = _mock_client(create_item={"ok": True, "item_id": "1"})
        MockClient.return_value = client
        mcp_mod.create_item("123", "topics", "x")
        assert client.create_item.call_args.kwargs["column_values"] is None

    @patch("monday_cli.mcp_server._core.MondayClient")
    def test_duplicate_column(self, MockClient):
        result = mcp_mod.create_item("123", "topics", "x", text={"a": "1"}, statuses={"a": 1})
        assert result["ok"] is False
        assert "more than once" in result["error"]
        MockClient.assert_not_called()

    def test_name_too_long(self):
        result = mcp_mod.create_item("123", "topics", "x" * (_tools_write._MAX_NAME_LEN + 1))
        assert result["ok"] is False

    @patch("monday_cli.mcp_server._core.MondayClient")
    def test_create_update(self, MockClient):
        client = _mock_client(create_update={"ok": True, "update_id": "9", "item_id": "42"})
        MockClient.return_value = client
        assert mcp_mod.create_update("42", "hello")["update_id"] == "9"
        client.create_update.assert_called_once_with(item_id="42", body="hello")

    def test_create_update_empty_body(self):
        assert mcp_mod.create_update("42", "")["ok"] is False


# ---------------------------------------------------------------------------
# Error conversion and response contract
# ---------------------------------------------------------------------------


class TestCallErrors:
    @patch("monday_cli.mcp_server._core.MondayClient")
    def test_setup_error(self, MockClient):
        MockClient.side_effect = SetupError("[SETUP_NEEDED] No API token configured.")
        result = mcp_mod.get_me()
        assert result["ok"] is False
        assert result["type"] == "setup"

    @patch("monday_cli.mcp_server._core.MondayClient")
    def test_codec_error(self, MockClient):
        client = MagicMock()
        client.list_items.side_effect = UnknownColumnError("ghost")
        MockClient.return_value = client
        result = mcp_mod.list_items("1")
        assert result["ok"] is False
        assert "Invalid column id - ghost" in result["error"]
        assert result["error_detail"]["type"] == "error"

    @patch("monday_cli.mcp_server._core.MondayClient")
    def test_unexpected_error(self, MockClient):
        client = MagicMock()
        client.get_boards.side_effect = RuntimeError("kaboom")
        MockClient.return_value = client
        result = mcp_mod.list_boards()
        assert result["ok"] is False
        assert "Unexpected error: kaboom" in result["error"]

    def test_unknown_method(self):
        result = _core._call("raw_query", query="query { me { id } }")
        assert result["ok"] is False
        assert "Unknown method" in result["error"]

    @patch("monday_cli.mcp_server._core.MondayClient")
    def test_client_is_cached(self, MockClient):
        MockClient.return_value = _mock_client(get_boards=[])
        mcp_mod.list_boards()
        mcp_mod.list_boards()
        MockClient.assert_called_once()


class TestFinalizeToolResult:
    def test_envelope_mode_wraps_lists(self, monkeypatch):
        monkeypatch.setattr(_core, "MCP_RESPONSE_MODE", "envelope")
        assert _core._finalize_tool_result([1]) == {
            "ok": True,
            "schema_version": "1.0",
            "data": [1],
        }

    def test_envelope_mode_wraps_dicts(self, monkeypatch):
        monkeypatch.setattr(_core, "MCP_RESPONSE_MODE", "envelope")
        result = _core._finalize_tool_result({"item_id": "1"})
        assert result == {"ok": True, "schema_version": "1.0", "data": {"item_id": "1"}}

    def test_errors_pass_through_envelope_mode(self, monkeypatch):
        monkeypatch.setattr(_core, "MCP_RESPONSE_MODE", "envelope")
        err = _core._contract_error("[ERROR] nope")
        assert _core._finalize_tool_result(err)["ok"] is False

    def test_legacy_error_gets_detail(self):
        result = _core._finalize_tool_result({"ok": False, "error": CliError("x")})
        assert result["error"] == "x"
        assert result["error_detail"] == {"type": "error", "message": "x"}
