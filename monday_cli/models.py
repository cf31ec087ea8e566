"""
Typed models for board metadata and item payloads returned by the API.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from monday_cli.exceptions import DecodeError


class ColumnType(str, Enum):
    """Column type tags the value codec knows how to read."""

    TEXT = "text"
    COLOR = "color"  # status
    BOOLEAN = "boolean"  # checkbox
    DATE = "date"
    MULTIPLE_PERSON = "multiple-person"
    DROPDOWN = "dropdown"

    @classmethod
    def parse(cls, tag) -> ColumnType | None:
        """Resolve a wire tag (or a member) to a ColumnType, None if unsupported."""
        if isinstance(tag, cls):
            return tag
        try:
            return cls(tag)
        except ValueError:
            return None


def _require_dict(value, context):
    if isinstance(value, dict):
        return value
    raise DecodeError(
        f"[ERROR] Unexpected {context} shape: expected JSON object, got {type(value).__name__}."
    )


@dataclass(frozen=True)
class Column:
    """One board column. ``type`` is kept exactly as the API sent it."""

    id: str
    title: str
    type: str
    settings_str: str = ""

    @property
    def column_type(self) -> ColumnType | None:
        return ColumnType.parse(self.type)

    @classmethod
    def from_dict(cls, data) -> Column:
        data = _require_dict(data, "column")
        if not data.get("id"):
            raise DecodeError("[ERROR] Column record is missing its id.")
        return cls(
            id=str(data["id"]),
            title=data.get("title") or "",
            type=data.get("type") or "",
            settings_str=data.get("settings_str") or "",
        )

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "type": self.type,
            "settings_str": self.settings_str,
        }


@dataclass(frozen=True)
class ColumnValue:
    """One item's raw value for one column. An empty string means unset."""

    column_id: str
    value: str = ""

    @classmethod
    def from_dict(cls, data) -> ColumnValue:
        data = _require_dict(data, "column value")
        raw = data.get("value")
        # The API sends JSON null for columns that were never set.
        if raw is None:
            raw = ""
        elif not isinstance(raw, str):
            raise DecodeError(
                f"[ERROR] Column value for '{data.get('id')}' is not a string "
                f"(got {type(raw).__name__})."
            )
        return cls(column_id=str(data.get("id") or ""), value=raw)


@dataclass(frozen=True)
class Item:
    id: str
    group_id: str
    name: str
    column_values: tuple[ColumnValue, ...] = ()

    @classmethod
    def from_dict(cls, data) -> Item:
        data = _require_dict(data, "item")
        group = data.get("group") or {}
        return cls(
            id=str(data.get("id") or ""),
            group_id=str(group.get("id") or "") if isinstance(group, dict) else "",
            name=data.get("name") or "",
            column_values=tuple(
                ColumnValue.from_dict(cv) for cv in (data.get("column_values") or [])
            ),
        )

    def value_for(self, column_id) -> ColumnValue | None:
        for cv in self.column_values:
            if cv.column_id == column_id:
                return cv
        return None
