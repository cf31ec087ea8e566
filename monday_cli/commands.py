"""
Command implementations for monday-cli.
Each cmd_*() function receives an argparse.Namespace and handles one CLI command.

Business logic lives in client.py (MondayClient). These thin wrappers
handle argparse → keyword args, format selection, and formatter dispatch.
"""

from monday_cli._utils import _parse_int_list, _split_assignment
from monday_cli.builders import (
    build_checkbox,
    build_date,
    build_date_time,
    build_dropdown,
    build_people,
    build_status_index,
)
from monday_cli.client import MondayClient
from monday_cli.exceptions import CliError
from monday_cli.formatters import (
    format_boards_table,
    format_columns_table,
    format_groups_table,
    format_items_table,
    format_labels_table,
    format_me_table,
    format_users_table,
    mutation_response,
    output,
)


def _client():
    # cli.main has already validated the token.
    return MondayClient(validate_token=False)


# ---------------------------------------------------------------------------
# Column value flags (add-item)
# ---------------------------------------------------------------------------


def _date_value(raw):
    parts = raw.split()
    if len(parts) == 1:
        return build_date(parts[0])
    if len(parts) == 2:
        return build_date_time(parts[0], parts[1])
    raise CliError(f"[ERROR] --date expects 'YYYY-MM-DD' or 'YYYY-MM-DD HH:MM:SS', got '{raw}'.")


def _status_value(raw):
    try:
        index = int(raw)
    except ValueError as e:
        raise CliError(f"[ERROR] --status expects a label index, got '{raw}'.") from e
    return build_status_index(index)


_VALUE_FLAGS = (
    ("text", "--text", lambda raw: raw),
    ("date", "--date", _date_value),
    ("status", "--status", _status_value),
    ("checkbox", "--checkbox", build_checkbox),
    ("people", "--people", lambda raw: build_people(*_parse_int_list(raw, "--people"))),
    ("dropdown", "--dropdown", lambda raw: build_dropdown(*_parse_int_list(raw, "--dropdown"))),
)


def _collect_column_values(ns):
    """Turn repeated COLUMN=VALUE flags into a {column_id: built value} mapping."""
    values = {}
    for attr, flag, build in _VALUE_FLAGS:
        for raw in getattr(ns, attr, None) or []:
            column_id, value = _split_assignment(raw, flag)
            if column_id in values:
                raise CliError(f"[ERROR] Column '{column_id}' is set more than once.")
            values[column_id] = build(value)
    return values


# ---------------------------------------------------------------------------
# Read commands
# ---------------------------------------------------------------------------


def cmd_me(ns):
    output(_client().get_me(), format_me_table, ns.format)


def cmd_users(ns):
    output(_client().get_users(), format_users_table, ns.format)


def cmd_boards(ns):
    output(_client().get_boards(), format_boards_table, ns.format)


def cmd_groups(ns):
    output(_client().get_groups(ns.board_id), format_groups_table, ns.format)


def cmd_columns(ns):
    client = _client()
    if ns.format == "json" and ns.raw:
        output([c.to_dict() for c in client.get_columns(ns.board_id)], fmt=ns.format)
        return
    output(client.list_columns(ns.board_id), format_columns_table, ns.format)


def cmd_labels(ns):
    output(_client().list_labels(ns.board_id, ns.column_id), format_labels_table, ns.format)


def cmd_items(ns):
    result = _client().list_items(
        ns.board_id,
        group_id=ns.group,
        with_labels=ns.labels,
        limit=ns.limit,
    )
    output(result, format_items_table, ns.format)


def cmd_query(ns):
    output(_client().raw_query(ns.graphql, ns.vars), fmt=ns.format)


# ---------------------------------------------------------------------------
# Mutation commands
# ---------------------------------------------------------------------------


def cmd_add_item(ns):
    values = _collect_column_values(ns)
    result = _client().create_item(ns.board_id, ns.group_id, ns.name, values or None)
    if result.get("dry_run"):
        output(result, fmt="json")
        return
    mutation_response(
        "Created item",
        result["item_id"],
        f"'{ns.name}' in group {ns.group_id}",
        fmt=ns.format,
    )


def cmd_update(ns):
    result = _client().create_update(ns.item_id, ns.body)
    if result.get("dry_run"):
        output(result, fmt="json")
        return
    mutation_response(
        "Posted update",
        result["update_id"],
        f"on item {ns.item_id}",
        fmt=ns.format,
    )
