"""Write tools: item creation and updates."""

from __future__ import annotations

from monday_cli import CliError
from monday_cli.builders import (
    build_checkbox,
    build_date,
    build_date_time,
    build_dropdown,
    build_people,
    build_status_index,
)
from monday_cli.mcp_server._core import (
    _call,
    _contract_error,
    _finalize_tool_result,
    _validate_id,
)

_MAX_NAME_LEN = 255
_MAX_BODY_LEN = 20000


def _assemble_column_values(text, dates, statuses, checkboxes, people, dropdowns):
    values: dict = {}

    def _put(column_id, value):
        if column_id in values:
            raise CliError(f"[ERROR] Column '{column_id}' is set more than once.")
        values[column_id] = value

    for column_id, value in (text or {}).items():
        _put(column_id, str(value))
    for column_id, value in (dates or {}).items():
        date, _, time = str(value).partition(" ")
        _put(column_id, build_date_time(date, time) if time else build_date(date))
    for column_id, index in (statuses or {}).items():
        _put(column_id, build_status_index(index))
    for column_id, checked in (checkboxes or {}).items():
        if isinstance(checked, bool):
            checked = "true" if checked else "false"
        _put(column_id, build_checkbox(checked))
    for column_id, ids in (people or {}).items():
        _put(column_id, build_people(*ids))
    for column_id, ids in (dropdowns or {}).items():
        _put(column_id, build_dropdown(*ids))
    return values


def create_item(
    board_id: str,
    group_id: str,
    name: str,
    text: dict[str, str] | None = None,
    dates: dict[str, str] | None = None,
    statuses: dict[str, int] | None = None,
    checkboxes: dict[str, bool] | None = None,
    people: dict[str, list[int]] | None = None,
    dropdowns: dict[str, list[int]] | None = None,
) -> dict:
    """Create an item in a board group. Every value argument maps column id → value.

    Args:
        text: Plain text columns.
        dates: 'YYYY-MM-DD' or 'YYYY-MM-DD HH:MM:SS'.
        statuses: Status label index (see list_labels).
        checkboxes: True/False.
        people: User ids (see list_users).
        dropdowns: Dropdown label ids (see list_labels).

    Returns:
        Dict with ok, item_id, board_id, group_id, name.
    """
    try:
        board_id = _validate_id(board_id)
        if not name or len(name) > _MAX_NAME_LEN:
            raise CliError(f"[ERROR] name must be 1-{_MAX_NAME_LEN} characters.")
        values = _assemble_column_values(text, dates, statuses, checkboxes, people, dropdowns)
    except CliError as e:
        return _finalize_tool_result(_contract_error(str(e), "error"))
    return _finalize_tool_result(
        _call(
            "create_item",
            board_id=board_id,
            group_id=group_id,
            item_name=name,
            column_values=values or None,
        )
    )


def create_update(item_id: str, body: str) -> dict:
    """Post an update (comment) on an item.

    Returns:
        Dict with ok, update_id, item_id.
    """
    try:
        item_id = _validate_id(item_id, "item_id")
        if not body or len(body) > _MAX_BODY_LEN:
            raise CliError(f"[ERROR] body must be 1-{_MAX_BODY_LEN} characters.")
    except CliError as e:
        return _finalize_tool_result(_contract_error(str(e), "error"))
    return _finalize_tool_result(_call("create_update", item_id=item_id, body=body))


def register(mcp):
    """Register all write tools with the FastMCP instance."""
    mcp.tool()(create_item)
    mcp.tool()(create_update)
