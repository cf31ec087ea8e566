"""MCP server exposing MondayClient methods as tools.

Package structure:
  __init__.py       — FastMCP init, register() calls, re-exports
  __main__.py       — ``python -m monday_cli.mcp_server`` entry point
  _core.py          — Client caching, _call dispatcher, response contract, id validation
  _tools_read.py    — 7 account/board/item read tools
  _tools_write.py   — 2 mutation tools

Run: python -m monday_cli.mcp_server
Requires: pip install .[mcp]
"""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from monday_cli.mcp_server import _tools_read, _tools_write

mcp = FastMCP(
    "monday",
    instructions=(
        "monday.com board tools. Board and item ids are numeric strings. "
        "Call list_columns before writing to learn column ids and types, and "
        "list_labels for status/dropdown indices. Decoded values: text, status, "
        "checkbox and date columns are strings; people and dropdown columns are "
        "lists of id strings."
    ),
)

for _mod in [_tools_read, _tools_write]:
    _mod.register(mcp)

# ---------------------------------------------------------------------------
# Re-exports (tests import via mcp_mod.xxx)
# ---------------------------------------------------------------------------

from monday_cli.mcp_server._core import (  # noqa: E402, F401
    _call,
    _contract_error,
    _finalize_tool_result,
    _get_client,
    _validate_id,
)
from monday_cli.mcp_server._tools_read import (  # noqa: E402, F401
    get_me,
    list_boards,
    list_columns,
    list_groups,
    list_items,
    list_labels,
    list_users,
)
from monday_cli.mcp_server._tools_write import create_item, create_update  # noqa: E402, F401


def main():
    """Run the MCP server (stdio transport)."""
    mcp.run()
