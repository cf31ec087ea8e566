"""
MondayClient — public Python API for monday.com boards and items.

Single entry point for programmatic use, the CLI commands, and the MCP
server. Board metadata comes back as typed models (Column, ColumnCatalog,
Item); everything else as flat dicts suitable for JSON serialization.
"""

from __future__ import annotations

import re
from typing import Any

from monday_cli import boards, config
from monday_cli.api import _check_token, _safe_json_parse, graphql_request
from monday_cli.catalog import ColumnCatalog
from monday_cli.codec import decode_item_row, supports
from monday_cli.exceptions import CliError
from monday_cli.labels import LabelCatalog, LabelEntry, label_catalogs_for
from monday_cli.models import Column, Item

# Strings and comments can hide braces and keywords from the operation scan.
_GRAPHQL_IGNORED_RE = re.compile(r'"""(?:\\.|[^\\])*?"""|"(?:\\.|[^"\\\n])*"|#[^\n\r]*', re.S)
_GRAPHQL_TOKEN_RE = re.compile(r"[{}]|[_A-Za-z][_0-9A-Za-z]*")


def _operation_kinds(query):
    """Keyword opening each top-level definition of a GraphQL document.

    The anonymous `{ ... }` shorthand counts as "query".
    """
    kinds = []
    depth = 0
    at_definition = True
    for match in _GRAPHQL_TOKEN_RE.finditer(_GRAPHQL_IGNORED_RE.sub(" ", query)):
        token = match.group()
        if token == "{":
            if depth == 0 and at_definition:
                kinds.append("query")
                at_definition = False
            depth += 1
        elif token == "}":
            depth = max(0, depth - 1)
            at_definition = depth == 0
        elif depth == 0 and at_definition:
            kinds.append(token)
            at_definition = False
    return kinds


class MondayClient:
    """Public API surface for monday.com work management.

    Raises CliError (or one of its subclasses) on failure; codec problems
    surface as CodecError subclasses.
    """

    def __init__(self, *, validate_token=True):
        """Initialize the client.

        Args:
            validate_token: If True, check the API token with a ``me``
                query before returning. Set to False for offline use
                and tests.
        """
        if validate_token:
            _check_token()

    # -------------------------------------------------------------------
    # Account / workspace reads
    # -------------------------------------------------------------------

    def get_me(self) -> dict[str, Any]:
        """Return the user that owns the API token (id, name, email)."""
        return boards.get_me()  # type: ignore[no-any-return]

    def get_users(self) -> list[dict[str, Any]]:
        """List all users visible to the token. Ids are ints."""
        return boards.list_users()  # type: ignore[no-any-return]

    def get_boards(self) -> list[dict[str, Any]]:
        return boards.list_boards()  # type: ignore[no-any-return]

    def get_groups(self, board_id) -> list[dict[str, Any]]:
        return boards.list_groups(board_id)  # type: ignore[no-any-return]

    # -------------------------------------------------------------------
    # Column metadata
    # -------------------------------------------------------------------

    def get_columns(self, board_id) -> list[Column]:
        return boards.list_columns(board_id)  # type: ignore[no-any-return]

    def create_column_catalog(self, board_id) -> ColumnCatalog:
        """Fetch a board's columns once and build its catalog."""
        return ColumnCatalog.build(self.get_columns(board_id))

    def list_columns(self, board_id) -> list[dict[str, Any]]:
        """Column rows for display, flagged with whether the codec can decode them."""
        return [
            {"id": c.id, "title": c.title, "type": c.type, "supported": supports(c)}
            for c in self.get_columns(board_id)
        ]

    def get_labels(self, board_id, column_id: str) -> list[LabelEntry]:
        """Labels of one status or dropdown column."""
        catalog = self.create_column_catalog(board_id)
        column = catalog.get(column_id)
        if column is None:
            raise CliError(
                f"[ERROR] Column '{column_id}' not found on board {board_id}. "
                f"Available: {', '.join(catalog.ids()) or 'none'}"
            )
        return list(LabelCatalog.from_column(column).entries)

    def list_labels(self, board_id, column_id: str) -> list[dict[str, Any]]:
        return [entry.to_dict() for entry in self.get_labels(board_id, column_id)]

    # -------------------------------------------------------------------
    # Items
    # -------------------------------------------------------------------

    def get_items(self, board_id) -> list[Item]:
        """All items on a board with their raw column values."""
        return boards.list_items(board_id)  # type: ignore[no-any-return]

    def list_items(
        self,
        board_id,
        *,
        group_id: str | None = None,
        with_labels: bool = False,
        limit: int | None = None,
    ) -> dict[str, Any]:
        """Decoded items of a board.

        Fetches the column catalog and the items, then decodes every
        supported column value. Unsupported column types are skipped.

        Args:
            group_id: Only return items from this group.
            with_labels: Add ``<column>_labels`` entries with label names
                for status and dropdown columns.
            limit: Truncate the result after N items.

        Returns:
            dict with board_id, items (list of rows), total_count.
        """
        columns = self.get_columns(board_id)
        catalog = ColumnCatalog.build(columns)
        labels = label_catalogs_for(catalog) if with_labels else None
        items = self.get_items(board_id)
        if group_id:
            items = [i for i in items if i.group_id == group_id]
        total = len(items)
        if limit is not None:
            items = items[:limit]
        return {
            "board_id": str(board_id),
            "items": [decode_item_row(catalog, item, labels) for item in items],
            "total_count": total,
        }

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------

    def add_item(self, board_id, group_id: str, item_name: str, column_values=None) -> str:
        """Create an item and return its id.

        Args:
            column_values: ``{column_id: value}`` where values are plain
                strings or objects from monday_cli.builders.
        """
        item_id = boards.create_item(board_id, group_id, item_name, column_values)
        return item_id  # type: ignore[no-any-return]

    def create_item(
        self, board_id, group_id: str, item_name: str, column_values=None
    ) -> dict[str, Any]:
        """Like add_item, but returns a result dict. Honors --dry-run."""
        if config.RUNTIME_DRY_RUN:
            return {
                "ok": True,
                "dry_run": True,
                "mutation": "create_item",
                "variables": boards.build_create_item_variables(
                    board_id, group_id, item_name, column_values
                ),
            }
        item_id = self.add_item(board_id, group_id, item_name, column_values)
        return {
            "ok": True,
            "item_id": item_id,
            "board_id": str(board_id),
            "group_id": group_id,
            "name": item_name,
        }

    def add_item_update(self, item_id, body: str) -> str:
        """Post an update on an item and return the update id."""
        return boards.create_update(item_id, body)  # type: ignore[no-any-return]

    def create_update(self, item_id, body: str) -> dict[str, Any]:
        if config.RUNTIME_DRY_RUN:
            return {
                "ok": True,
                "dry_run": True,
                "mutation": "create_update",
                "variables": {"itemId": str(item_id), "body": body},
            }
        update_id = self.add_item_update(item_id, body)
        return {"ok": True, "update_id": update_id, "item_id": str(item_id)}

    # -------------------------------------------------------------------
    # Raw API
    # -------------------------------------------------------------------

    def raw_query(self, query: str, variables: dict | str | None = None) -> dict[str, Any]:
        """Execute a raw GraphQL query (not a mutation) and return its data."""
        if not (query or "").strip():
            raise CliError("[ERROR] Query cannot be empty.")
        if {"mutation", "subscription"} & set(_operation_kinds(query)):
            raise CliError("[ERROR] raw_query only runs queries; use the item commands to write.")
        if isinstance(variables, str):
            variables = _safe_json_parse(variables, "variables")
        if variables is not None and not isinstance(variables, dict):
            raise CliError("[ERROR] Variables must be a JSON object.")
        return graphql_request(query, variables)  # type: ignore[no-any-return]
