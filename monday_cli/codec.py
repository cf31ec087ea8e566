"""
Column value codec — turns an item's raw column values into application values.

The API returns every column value as an opaque JSON string. What that string
means depends on the column's type, which comes from the board's column
metadata (see ColumnCatalog). Decoding yields one of two shapes:

    Scalar     text, status index, checkbox state, date
    ListValue  person ids, dropdown label ids

The shape is fixed by the column type. An unset value always decodes to
``Scalar("")``.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass

from monday_cli.catalog import ColumnCatalog
from monday_cli.exceptions import (
    MalformedValueError,
    UnknownColumnError,
    UnsupportedColumnTypeError,
)
from monday_cli.models import Column, ColumnType, ColumnValue, Item

# ---------------------------------------------------------------------------
# Decoded values
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Scalar:
    value: str = ""

    def as_list(self) -> list[str]:
        return [self.value] if self.value else []

    def to_json(self):
        return self.value


@dataclass(frozen=True)
class ListValue:
    values: tuple[str, ...] = ()

    def as_list(self) -> list[str]:
        return list(self.values)

    def to_json(self):
        return list(self.values)


DecodedValue = Scalar | ListValue

EMPTY = Scalar("")

# ---------------------------------------------------------------------------
# JSON shape helpers
# ---------------------------------------------------------------------------


def _load_object(raw, column):
    try:
        parsed = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as e:
        raise MalformedValueError(
            f"Malformed {column.type} value for column '{column.id}': not valid JSON.",
            column_id=column.id,
            column_type=column.type,
        ) from e
    if not isinstance(parsed, dict):
        raise MalformedValueError(
            f"Malformed {column.type} value for column '{column.id}': "
            f"expected JSON object, got {type(parsed).__name__}.",
            column_id=column.id,
            column_type=column.type,
        )
    return parsed


def _mismatch(column, field, expected, got):
    return MalformedValueError(
        f"Malformed {column.type} value for column '{column.id}': "
        f"'{field}' should be {expected}, got {type(got).__name__}.",
        column_id=column.id,
        column_type=column.type,
    )


def _int_field(obj, field, column):
    value = obj.get(field)
    if isinstance(value, bool) or not isinstance(value, int):
        raise _mismatch(column, field, "an integer", value)
    return value


def _optional_str_field(obj, field, column):
    value = obj.get(field)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise _mismatch(column, field, "a string", value)
    return value


def _optional_list_field(obj, field, column):
    value = obj.get(field)
    if value is None:
        return []
    if not isinstance(value, list):
        raise _mismatch(column, field, "a list", value)
    return value


# ---------------------------------------------------------------------------
# Per-type decoders
# ---------------------------------------------------------------------------


def _decode_text(raw, column):
    return Scalar(raw)


def _decode_color(raw, column):
    return Scalar(str(_int_field(_load_object(raw, column), "index", column)))


def _decode_boolean(raw, column):
    # Unchecked boxes sometimes arrive without the field at all.
    return Scalar(_optional_str_field(_load_object(raw, column), "checked", column))


def _decode_date(raw, column):
    obj = _load_object(raw, column)
    _optional_str_field(obj, "time", column)
    return Scalar(_optional_str_field(obj, "date", column))


def _decode_people(raw, column):
    entries = _optional_list_field(_load_object(raw, column), "personsAndTeams", column)
    ids = []
    for entry in entries:
        if not isinstance(entry, dict):
            raise _mismatch(column, "personsAndTeams[]", "an object", entry)
        _optional_str_field(entry, "kind", column)
        ids.append(str(_int_field(entry, "id", column)))
    return ListValue(tuple(ids))


def _decode_dropdown(raw, column):
    ids = []
    for value in _optional_list_field(_load_object(raw, column), "ids", column):
        if isinstance(value, bool) or not isinstance(value, int):
            raise _mismatch(column, "ids[]", "an integer", value)
        ids.append(str(value))
    return ListValue(tuple(ids))


_DECODERS: dict[ColumnType, Callable[[str, Column], DecodedValue]] = {
    ColumnType.TEXT: _decode_text,
    ColumnType.COLOR: _decode_color,
    ColumnType.BOOLEAN: _decode_boolean,
    ColumnType.DATE: _decode_date,
    ColumnType.MULTIPLE_PERSON: _decode_people,
    ColumnType.DROPDOWN: _decode_dropdown,
}

_missing = set(ColumnType) - set(_DECODERS)
if _missing:
    raise RuntimeError(f"No decoder registered for: {sorted(t.value for t in _missing)}")

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def is_unset(raw) -> bool:
    """True for the empty value. ColumnValue already maps a wire null to ""."""
    return raw is None or raw == ""


def decode_value(catalog: ColumnCatalog, column_value: ColumnValue) -> DecodedValue:
    """Decode one raw column value using the board's column catalog.

    Raises UnknownColumnError, UnsupportedColumnTypeError or MalformedValueError.
    """
    raw = column_value.value
    if is_unset(raw):
        return EMPTY
    column = catalog.get(column_value.column_id)
    if column is None:
        raise UnknownColumnError(column_value.column_id)
    column_type = column.column_type
    if column_type is None:
        raise UnsupportedColumnTypeError(column.type, column_id=column.id)
    return _DECODERS[column_type](raw, column)


def supports(column: Column) -> bool:
    return column.column_type is not None


def decode_item(
    catalog: ColumnCatalog, item: Item, *, skip_unsupported=False
) -> dict[str, DecodedValue]:
    """Decode every column value of an item, keyed by column id.

    With ``skip_unsupported`` set, values of columns whose type has no
    decoder are left out instead of raising.
    """
    decoded: dict[str, DecodedValue] = {}
    for cv in item.column_values:
        if skip_unsupported and not is_unset(cv.value):
            column = catalog.get(cv.column_id)
            if column is not None and not supports(column):
                continue
        decoded[cv.column_id] = decode_value(catalog, cv)
    return decoded


def decode_item_row(catalog: ColumnCatalog, item: Item, labels=None, *, skip_unsupported=True):
    """Flatten an item into a JSON-ready dict.

    ``labels`` maps column id to a LabelCatalog; when given, status and
    dropdown values gain a ``<column_id>_labels`` entry with label names.
    """
    values = {}
    for column_id, decoded in decode_item(
        catalog, item, skip_unsupported=skip_unsupported
    ).items():
        values[column_id] = decoded.to_json()
        label_catalog = (labels or {}).get(column_id)
        if label_catalog is not None and decoded.as_list():
            values[f"{column_id}_labels"] = label_catalog.resolve(decoded)
    return {
        "id": item.id,
        "group_id": item.group_id,
        "name": item.name,
        "values": values,
    }
