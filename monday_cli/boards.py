"""
GraphQL documents and thin request helpers for users, boards, groups,
columns, items, and updates.

Each helper shapes one request and unwraps its response envelope.
"""

from monday_cli import config
from monday_cli._utils import _as_int, _validate_id
from monday_cli.api import _log_http_event, graphql_request
from monday_cli.builders import encode_column_values
from monday_cli.exceptions import CliError, DecodeError
from monday_cli.models import Column, Item

ME_QUERY = """
query {
    me { id name email }
}
"""

USERS_QUERY = """
query {
    users { id name email }
}
"""

BOARDS_QUERY = """
query {
    boards { id name }
}
"""

GROUPS_QUERY = """
query ($boardId: [ID!]) {
    boards (ids: $boardId) {
        groups { id title }
    }
}
"""

COLUMNS_QUERY = """
query ($boardId: [ID!]) {
    boards (ids: $boardId) {
        columns { id title type settings_str }
    }
}
"""

_ITEM_FIELDS = """
    cursor
    items {
        id
        name
        group { id }
        column_values { id value }
    }
"""

ITEMS_QUERY = (
    """
query ($boardId: [ID!], $limit: Int!) {
    boards (ids: $boardId) {
        items_page (limit: $limit) {"""
    + _ITEM_FIELDS
    + """        }
    }
}
"""
)

NEXT_ITEMS_QUERY = (
    """
query ($cursor: String!, $limit: Int!) {
    next_items_page (cursor: $cursor, limit: $limit) {"""
    + _ITEM_FIELDS
    + """    }
}
"""
)

CREATE_ITEM_MUTATION = """
mutation ($boardId: ID!, $groupId: String!, $itemName: String!, $colValues: JSON) {
    create_item (board_id: $boardId, group_id: $groupId, item_name: $itemName,
                 column_values: $colValues) {
        id
    }
}
"""

CREATE_UPDATE_MUTATION = """
mutation ($itemId: ID!, $body: String!) {
    create_update (item_id: $itemId, body: $body) {
        id
    }
}
"""

# Upper bound on items_page follow-ups, so a misbehaving cursor cannot loop forever.
_MAX_ITEM_PAGES = 1000


# ---------------------------------------------------------------------------
# Response helpers
# ---------------------------------------------------------------------------


def _expect_list(value, context):
    if value is None:
        return []
    if isinstance(value, list):
        return value
    raise DecodeError(
        f"[ERROR] Unexpected {context} response shape: expected list, got {type(value).__name__}."
    )


def _first_board(data, board_id):
    boards = _expect_list(data.get("boards"), "boards")
    if not boards:
        raise CliError(f"[ERROR] Board '{board_id}' not found (or not visible to this token).")
    board = boards[0]
    if not isinstance(board, dict):
        raise DecodeError("[ERROR] Unexpected board record in response.")
    return board


def _user_row(user):
    return {
        "id": _as_int(user.get("id")),
        "name": user.get("name") or "",
        "email": user.get("email") or "",
    }


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------


def get_me():
    me = graphql_request(ME_QUERY).get("me")
    if not isinstance(me, dict):
        raise DecodeError("[ERROR] 'me' query returned no user.")
    return _user_row(me)


def list_users():
    users = _expect_list(graphql_request(USERS_QUERY).get("users"), "users")
    return [_user_row(u) for u in users if isinstance(u, dict)]


def list_boards():
    boards = _expect_list(graphql_request(BOARDS_QUERY).get("boards"), "boards")
    return [
        {"id": str(b.get("id") or ""), "name": b.get("name") or ""}
        for b in boards
        if isinstance(b, dict)
    ]


def list_groups(board_id):
    board_id = _validate_id(board_id)
    board = _first_board(graphql_request(GROUPS_QUERY, {"boardId": [board_id]}), board_id)
    return [
        {"id": str(g.get("id") or ""), "title": g.get("title") or ""}
        for g in _expect_list(board.get("groups"), "groups")
        if isinstance(g, dict)
    ]


def list_columns(board_id):
    board_id = _validate_id(board_id)
    board = _first_board(graphql_request(COLUMNS_QUERY, {"boardId": [board_id]}), board_id)
    return [Column.from_dict(c) for c in _expect_list(board.get("columns"), "columns")]


def _page_items(page, context):
    if not isinstance(page, dict):
        raise DecodeError(f"[ERROR] Unexpected {context} response: missing page object.")
    items = [Item.from_dict(i) for i in _expect_list(page.get("items"), "items")]
    return items, page.get("cursor")


def list_items(board_id):
    """Fetch every item on a board, following items_page cursors."""
    board_id = _validate_id(board_id)
    limit = config.ITEMS_PAGE_LIMIT
    board = _first_board(
        graphql_request(ITEMS_QUERY, {"boardId": [board_id], "limit": limit}), board_id
    )
    items, cursor = _page_items(board.get("items_page"), "items_page")
    pages = 1
    while cursor:
        if pages >= _MAX_ITEM_PAGES:
            raise CliError(
                f"[ERROR] Board '{board_id}' has more than {_MAX_ITEM_PAGES} item pages; "
                "raise MONDAY_ITEMS_PAGE_LIMIT."
            )
        data = graphql_request(NEXT_ITEMS_QUERY, {"cursor": cursor, "limit": limit})
        more, cursor = _page_items(data.get("next_items_page"), "next_items_page")
        items.extend(more)
        pages += 1
    return items


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------


def build_create_item_variables(board_id, group_id, item_name, column_values=None):
    """Variables for CREATE_ITEM_MUTATION, with column values JSON-encoded."""
    board_id = _validate_id(board_id)
    if not group_id:
        raise CliError("[ERROR] Group id is required.")
    if not (item_name or "").strip():
        raise CliError("[ERROR] Item name cannot be empty.")
    variables = {"boardId": board_id, "groupId": group_id, "itemName": item_name}
    if column_values:
        variables["colValues"] = encode_column_values(column_values)
    return variables


def create_item(board_id, group_id, item_name, column_values=None):
    """Create one item and return its id."""
    variables = build_create_item_variables(board_id, group_id, item_name, column_values)
    _log_http_event(
        phase="mutation_payload",
        mutation="create_item",
        column_values=variables.get("colValues", ""),
    )
    data = graphql_request(CREATE_ITEM_MUTATION, variables, mutation=True)
    created = data.get("create_item")
    if not isinstance(created, dict) or not created.get("id"):
        raise DecodeError("[ERROR] create_item response did not include an item id.")
    return str(created["id"])


def create_update(item_id, body):
    """Post an update (comment) on an item and return the update id."""
    item_id = _validate_id(item_id, "item_id")
    if not (body or "").strip():
        raise CliError("[ERROR] Update body cannot be empty.")
    data = graphql_request(
        CREATE_UPDATE_MUTATION, {"itemId": item_id, "body": body}, mutation=True
    )
    created = data.get("create_update")
    if not isinstance(created, dict) or not created.get("id"):
        raise DecodeError("[ERROR] create_update response did not include an update id.")
    return str(created["id"])
