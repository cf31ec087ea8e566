"""Read tools: account, boards, columns, labels, and decoded items."""

from __future__ import annotations

from monday_cli import CliError
from monday_cli.mcp_server._core import (
    _call,
    _contract_error,
    _finalize_tool_result,
    _validate_id,
)


def get_me() -> dict:
    """Get the user that owns the API token.

    Returns:
        Dict with id, name, email.
    """
    return _finalize_tool_result(_call("get_me"))


def list_users() -> list | dict:
    """List all users. Their ids are what create_item's ``people`` argument takes."""
    return _finalize_tool_result(_call("get_users"))


def list_boards() -> list | dict:
    """List all boards (id, name)."""
    return _finalize_tool_result(_call("get_boards"))


def list_groups(board_id: str) -> list | dict:
    """List the groups (id, title) of a board."""
    try:
        board_id = _validate_id(board_id)
    except CliError as e:
        return _finalize_tool_result(_contract_error(str(e), "error"))
    return _finalize_tool_result(_call("get_groups", board_id=board_id))


def list_columns(board_id: str) -> list | dict:
    """List a board's columns with id, title, type and whether values can be decoded."""
    try:
        board_id = _validate_id(board_id)
    except CliError as e:
        return _finalize_tool_result(_contract_error(str(e), "error"))
    return _finalize_tool_result(_call("list_columns", board_id=board_id))


def list_labels(board_id: str, column_id: str) -> list | dict:
    """List the labels of a status or dropdown column.

    Returns:
        List of {index, name}. For status columns ``index`` is what
        create_item's ``statuses`` takes; for dropdowns it is the label id.
    """
    try:
        board_id = _validate_id(board_id)
    except CliError as e:
        return _finalize_tool_result(_contract_error(str(e), "error"))
    return _finalize_tool_result(_call("list_labels", board_id=board_id, column_id=column_id))


def list_items(
    board_id: str,
    group_id: str | None = None,
    with_labels: bool = True,
    limit: int = 50,
) -> dict:
    """List a board's items with decoded column values.

    Scalar columns (text, status, checkbox, date) decode to strings;
    people and dropdown columns decode to lists of id strings.

    Args:
        group_id: Only items in this group.
        with_labels: Add ``<column>_labels`` entries with label names.
        limit: Maximum number of items returned (default 50).

    Returns:
        Dict with board_id, items, total_count.
    """
    try:
        board_id = _validate_id(board_id)
    except CliError as e:
        return _finalize_tool_result(_contract_error(str(e), "error"))
    return _finalize_tool_result(
        _call(
            "list_items",
            board_id=board_id,
            group_id=group_id,
            with_labels=with_labels,
            limit=max(1, limit),
        )
    )


def register(mcp):
    """Register all read tools with the FastMCP instance."""
    mcp.tool()(get_me)
    mcp.tool()(list_users)
    mcp.tool()(list_boards)
    mcp.tool()(list_groups)
    mcp.tool()(list_columns)
    mcp.tool()(list_labels)
    mcp.tool()(list_items)
