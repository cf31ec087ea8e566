"""Tests for client.py — MondayClient public API.

Mocks at the boards module level so each method's decoding and shaping
is exercised without HTTP.
"""

import json
from unittest.mock import patch

import pytest

from monday_cli import config
from monday_cli.builders import build_status_index
from monday_cli.client import MondayClient, _operation_kinds
from monday_cli.exceptions import CliError, UnsupportedColumnTypeError
from monday_cli.labels import LabelEntry
from monday_cli.models import Column, ColumnValue, Item

_COLUMNS = [
    Column("name", "Name", "name"),
    Column("status", "Status", "color", json.dumps({"labels": {"0": "Done", "1": "Stuck"}})),
    Column("owner", "Owner", "multiple-person"),
    Column("notes", "Notes", "text"),
    Column("estimate", "Estimate", "numeric"),
]

_ITEMS = [
    Item(
        "1",
        "topics",
        "First",
        (
            ColumnValue("status", '{"index": 1}'),
            ColumnValue("owner", '{"personsAndTeams":[{"id":11,"kind":"person"}]}'),
            ColumnValue("estimate", '"3"'),
        ),
    ),
    Item("2", "done", "Second", (ColumnValue("notes", "hello"),)),
    Item("3", "topics", "Third", (ColumnValue("status", ""),)),
]


@pytest.fixture
def client():
    return MondayClient(validate_token=False)


class TestInit:
    @patch("monday_cli.client._check_token")
    def test_validates_token_by_default(self, mock_check):
        MondayClient()
        mock_check.assert_called_once()

    @patch("monday_cli.client._check_token")
    def test_skip_validation(self, mock_check):
        MondayClient(validate_token=False)
        mock_check.assert_not_called()


class TestReads:
    @patch("monday_cli.client.boards.list_boards")
    def test_get_boards(self, mock_boards, client):
        mock_boards.return_value = [{"id": "1", "name": "Roadmap"}]
        assert client.get_boards() == [{"id": "1", "name": "Roadmap"}]

    @patch("monday_cli.client.boards.list_groups")
    def test_get_groups(self, mock_groups, client):
        mock_groups.return_value = [{"id": "topics", "title": "Topics"}]
        assert client.get_groups("123") == [{"id": "topics", "title": "Topics"}]
        mock_groups.assert_called_once_with("123")

    @patch("monday_cli.client.boards.list_columns", return_value=_COLUMNS)
    def test_create_column_catalog(self, _mock, client):
        catalog = client.create_column_catalog("123")
        assert catalog.ids() == ["name", "status", "owner", "notes", "estimate"]

    @patch("monday_cli.client.boards.list_columns", return_value=_COLUMNS)
    def test_list_columns_flags_support(self, _mock, client):
        rows = {r["id"]: r for r in client.list_columns("123")}
        assert rows["status"]["supported"] is True
        assert rows["estimate"]["supported"] is False
        assert rows["name"]["supported"] is False


class TestLabels:
    @patch("monday_cli.client.boards.list_columns", return_value=_COLUMNS)
    def test_get_labels(self, _mock, client):
        assert set(client.get_labels("123", "status")) == {
            LabelEntry("0", "Done"),
            LabelEntry("1", "Stuck"),
        }

    @patch("monday_cli.client.boards.list_columns", return_value=_COLUMNS)
    def test_list_labels_dicts(self, _mock, client):
        assert {"index": "1", "name": "Stuck"} in client.list_labels("123", "status")

    @patch("monday_cli.client.boards.list_columns", return_value=_COLUMNS)
    def test_unknown_column(self, _mock, client):
        with pytest.raises(CliError) as exc_info:
            client.get_labels("123", "nope")
        msg = str(exc_info.value)
        assert "'nope' not found" in msg
        assert "status" in msg

    @patch("monday_cli.client.boards.list_columns", return_value=_COLUMNS)
    def test_non_label_column(self, _mock, client):
        with pytest.raises(UnsupportedColumnTypeError):
            client.get_labels("123", "notes")


class TestListItems:
    @patch("monday_cli.client.boards.list_items", return_value=_ITEMS)
    @patch("monday_cli.client.boards.list_columns", return_value=_COLUMNS)
    def test_decodes_and_skips_unsupported(self, _cols, _items, client):
        result = client.list_items("123")
        assert result["board_id"] == "123"
        assert result["total_count"] == 3
        first = result["items"][0]
        assert first["values"] == {"status": "1", "owner": ["11"]}
        assert result["items"][1]["values"] == {"notes": "hello"}
        assert result["items"][2]["values"] == {"status": ""}

    @patch("monday_cli.client.boards.list_items", return_value=_ITEMS)
    @patch("monday_cli.client.boards.list_columns", return_value=_COLUMNS)
    def test_group_filter(self, _cols, _items, client):
        result = client.list_items("123", group_id="topics")
        assert [i["id"] for i in result["items"]] == ["1", "3"]
        assert result["total_count"] == 2

    @patch("monday_cli.client.boards.list_items", return_value=_ITEMS)
    @patch("monday_cli.client.boards.list_columns", return_value=_COLUMNS)
    def test_limit_keeps_total(self, _cols, _items, client):
        result = client.list_items("123", limit=1)
        assert len(result["items"]) == 1
        assert result["total_count"] == 3

    @patch("monday_cli.client.boards.list_items", return_value=_ITEMS)
    @patch("monday_cli.client.boards.list_columns", return_value=_COLUMNS)
    def test_with_labels(self, _cols, _items, client):
        result = client.list_items("123", with_labels=True)
        assert result["items"][0]["values"]["status_labels"] == ["Stuck"]
        assert "status_labels" not in result["items"][2]["values"]


class TestMutations:
    @patch("monday_cli.client.boards.create_item", return_value="555")
    def test_create_item(self, mock_create, client):
        values = {"status": build_status_index(1)}
        result = client.create_item("123", "topics", "New", values)
        assert result == {
            "ok": True,
            "item_id": "555",
            "board_id": "123",
            "group_id": "topics",
            "name": "New",
        }
        mock_create.assert_called_once_with("123", "topics", "New", values)

    @patch("monday_cli.client.boards.create_item", return_value="555")
    def test_add_item_returns_id(self, _mock, client):
        assert client.add_item("123", "topics", "New") == "555"

    @patch("monday_cli.client.boards.create_item")
    def test_create_item_dry_run(self, mock_create, client, monkeypatch):
        monkeypatch.setattr(config, "RUNTIME_DRY_RUN", True)
        result = client.create_item("123", "topics", "New", {"status": build_status_index(1)})
        mock_create.assert_not_called()
        assert result["dry_run"] is True
        assert json.loads(result["variables"]["colValues"]) == {"status": {"index": 1}}

    @patch("monday_cli.client.boards.create_update", return_value="900")
    def test_create_update(self, _mock, client):
        assert client.create_update("42", "hi") == {
            "ok": True,
            "update_id": "900",
            "item_id": "42",
        }

    @patch("monday_cli.client.boards.create_update")
    def test_create_update_dry_run(self, mock_update, client, monkeypatch):
        monkeypatch.setattr(config, "RUNTIME_DRY_RUN", True)
        result = client.create_update("42", "hi")
        mock_update.assert_not_called()
        assert result["variables"] == {"itemId": "42", "body": "hi"}


class TestRawQuery:
    @patch("monday_cli.client.graphql_request", return_value={"boards": []})
    def test_runs_query(self, mock_gql, client):
        assert client.raw_query("query { boards { id } }", '{"a": 1}') == {"boards": []}
        mock_gql.assert_called_once_with("query { boards { id } }", {"a": 1})

    def test_rejects_empty(self, client):
        with pytest.raises(CliError):
            client.raw_query("  ")

    def test_rejects_mutations(self, client):
        with pytest.raises(CliError):
            client.raw_query("mutation { create_item { id } }")

    @pytest.mark.parametrize(
        "query",
        [
            '# create one\nmutation { create_item(item_name: "x") { id } }',
            "query A { me { id } }\nmutation B { delete_item(item_id: 1) { id } }",
            "subscription { item_created { id } }",
        ],
    )
    @patch("monday_cli.client.graphql_request")
    def test_rejects_hidden_writes(self, mock_gql, client, query):
        with pytest.raises(CliError):
            client.raw_query(query)
        mock_gql.assert_not_called()

    @patch("monday_cli.client.graphql_request", return_value={"items": []})
    def test_mutation_word_in_string_or_comment(self, mock_gql, client):
        query = (
            '# no mutation here\n'
            '{ items(ids: [1]) { name } updates(body: "mutation }") { id } }'
        )
        assert client.raw_query(query) == {"items": []}

    def test_rejects_non_object_variables(self, client):
        with pytest.raises(CliError):
            client.raw_query("query { me { id } }", "[1, 2]")


class TestOperationKinds:
    def test_shorthand_is_query(self):
        assert _operation_kinds("{ me { id } }") == ["query"]

    def test_named_operations_and_fragments(self):
        doc = "query Q($id: [ID!]) { items(ids: $id) { ...F } }\nfragment F on Item { id }"
        assert _operation_kinds(doc) == ["query", "fragment"]

    def test_comments_and_block_strings_ignored(self):
        doc = '# mutation\nquery { a(text: """ } mutation { """) { id } }'
        assert _operation_kinds(doc) == ["query"]
