"""
Label catalogs for status (color) and dropdown columns.

Both column types keep their option table in the column's ``settings_str``,
in different shapes:

    color     {"labels": {"0": "Done", ...}, "label_positions_v2": {"0": 0, ...}}
    dropdown  {"labels": [{"id": 5, "name": "Red"}, ...]}

decode_labels() normalizes both to LabelEntry(index, name) pairs.
"""

from __future__ import annotations

import json
from dataclasses import dataclass

from monday_cli.exceptions import MalformedValueError, UnsupportedColumnTypeError
from monday_cli.models import Column, ColumnType

_LABEL_TYPES = (ColumnType.COLOR, ColumnType.DROPDOWN)


@dataclass(frozen=True)
class LabelEntry:
    index: str
    name: str

    def to_dict(self):
        return {"index": self.index, "name": self.name}


def _malformed(column_type, detail):
    return MalformedValueError(
        f"Malformed {column_type.value} settings: {detail}.",
        column_type=column_type.value,
    )


def _decode_color_labels(settings):
    labels = settings.get("labels")
    if labels is None:
        return []
    if not isinstance(labels, dict):
        raise _malformed(ColumnType.COLOR, "'labels' should be an object")
    positions = settings.get("label_positions_v2")
    if positions is not None and not isinstance(positions, dict):
        raise _malformed(ColumnType.COLOR, "'label_positions_v2' should be an object")
    entries = []
    for index, name in labels.items():
        if not isinstance(name, str):
            raise _malformed(ColumnType.COLOR, f"label {index!r} should be a string")
        entries.append(LabelEntry(index=str(index), name=name))
    return entries


def _decode_dropdown_labels(settings):
    labels = settings.get("labels")
    if labels is None:
        return []
    if not isinstance(labels, list):
        raise _malformed(ColumnType.DROPDOWN, "'labels' should be a list")
    entries = []
    for label in labels:
        if not isinstance(label, dict):
            raise _malformed(ColumnType.DROPDOWN, "each label should be an object")
        label_id = label.get("id")
        if isinstance(label_id, bool) or not isinstance(label_id, int):
            raise _malformed(ColumnType.DROPDOWN, "label 'id' should be an integer")
        name = label.get("name")
        if not isinstance(name, str):
            raise _malformed(ColumnType.DROPDOWN, f"label {label_id} 'name' should be a string")
        entries.append(LabelEntry(index=str(label_id), name=name))
    return entries


_LABEL_DECODERS = {
    ColumnType.COLOR: _decode_color_labels,
    ColumnType.DROPDOWN: _decode_dropdown_labels,
}


def decode_labels(settings_str: str, column_type) -> list[LabelEntry]:
    """Return the (index, name) labels defined in a column's settings string.

    Color labels come back in document order, which the API does not
    promise to be meaningful; sort by index for stable display. Dropdown
    labels keep their source order.
    """
    resolved = ColumnType.parse(column_type)
    if resolved is None or resolved not in _LABEL_TYPES:
        tag = column_type.value if isinstance(column_type, ColumnType) else column_type
        raise UnsupportedColumnTypeError(tag)
    try:
        settings = json.loads(settings_str)
    except (json.JSONDecodeError, TypeError) as e:
        raise _malformed(resolved, "not valid JSON") from e
    if not isinstance(settings, dict):
        raise _malformed(resolved, f"expected JSON object, got {type(settings).__name__}")
    return _LABEL_DECODERS[resolved](settings)


@dataclass(frozen=True)
class LabelCatalog:
    """Label lookup for one status or dropdown column."""

    column_id: str
    entries: tuple[LabelEntry, ...] = ()

    @classmethod
    def from_column(cls, column: Column) -> LabelCatalog:
        try:
            entries = decode_labels(column.settings_str, column.type)
        except (MalformedValueError, UnsupportedColumnTypeError) as e:
            e.column_id = column.id
            raise
        return cls(column_id=column.id, entries=tuple(entries))

    def name_for(self, index) -> str | None:
        index = str(index)
        for entry in self.entries:
            if entry.index == index:
                return entry.name
        return None

    def resolve(self, decoded) -> list[str]:
        """Map a decoded value's indices to label names; unknown ones pass through."""
        names = []
        for index in decoded.as_list():
            name = self.name_for(index)
            names.append(name if name is not None else index)
        return names

    def sorted_entries(self) -> list[LabelEntry]:
        """Entries ordered by index, numerically where the index is a number."""

        def _key(entry):
            return (0, int(entry.index), "") if entry.index.isdigit() else (1, 0, entry.index)

        return sorted(self.entries, key=_key)


def label_catalogs_for(columns) -> dict[str, LabelCatalog]:
    """Build LabelCatalogs for every status/dropdown column in *columns*."""
    out = {}
    for column in columns:
        if column.column_type in _LABEL_TYPES:
            out[column.id] = LabelCatalog.from_column(column)
    return out
