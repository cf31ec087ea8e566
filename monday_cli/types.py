"""Typed response definitions for MondayClient methods.

These TypedDicts document the shape of dicts returned by public API methods.
They are optional — runtime behavior is unchanged (plain dicts).
"""

from __future__ import annotations

from typing import Any, TypedDict


class UserRow(TypedDict):
    id: int | str
    name: str
    email: str


class BoardRow(TypedDict):
    id: str
    name: str


class GroupRow(TypedDict):
    id: str
    title: str


class ColumnRow(TypedDict):
    """Return row of MondayClient.list_columns()."""

    id: str
    title: str
    type: str
    supported: bool


class LabelRow(TypedDict):
    index: str
    name: str


class ItemRow(TypedDict):
    """One decoded item. ``values`` maps column id to a string or list of strings."""

    id: str
    group_id: str
    name: str
    values: dict[str, Any]


class ItemListResult(TypedDict):
    """Return type of MondayClient.list_items()."""

    board_id: str
    items: list[ItemRow]
    total_count: int


class CreateItemResult(TypedDict):
    ok: bool
    item_id: str
    board_id: str
    group_id: str
    name: str


class CreateUpdateResult(TypedDict):
    ok: bool
    update_id: str
    item_id: str
