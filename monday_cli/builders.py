"""
Builders for outbound column values.

Each builder returns a small frozen wire object whose ``to_wire()`` gives
the exact JSON shape the API expects for that column type. Builders do not
know column ids; callers assemble ``{column_id: built_value}`` and pass it
to ``encode_column_values`` (or straight to ``MondayClient.add_item``):

    column_values = {
        "text": "have a nice day",
        "date": build_date("2019-05-22"),
        "status": build_status_index(2),
        "people": build_people(123456, 987654),
    }
"""

from __future__ import annotations

import json
from dataclasses import dataclass

from monday_cli.exceptions import CliError

# ---------------------------------------------------------------------------
# Wire objects
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DateTime:
    date: str
    time: str = ""

    def to_wire(self):
        return {"date": self.date, "time": self.time}


@dataclass(frozen=True)
class StatusIndex:
    index: int

    def to_wire(self):
        return {"index": self.index}


@dataclass(frozen=True)
class PersonTeam:
    id: int
    kind: str = "person"  # "person" or "team"

    def to_wire(self):
        return {"id": self.id, "kind": self.kind}


@dataclass(frozen=True)
class People:
    persons_and_teams: tuple[PersonTeam, ...] = ()

    def to_wire(self):
        return {"personsAndTeams": [p.to_wire() for p in self.persons_and_teams]}


@dataclass(frozen=True)
class Checkbox:
    checked: str

    def to_wire(self):
        return {"checked": self.checked}


@dataclass(frozen=True)
class DropdownIds:
    ids: tuple[int, ...] = ()

    def to_wire(self):
        return {"ids": list(self.ids)}


WireValue = DateTime | StatusIndex | People | Checkbox | DropdownIds

# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def _require_int(value, what):
    # bool is an int subclass; True/False are never valid ids or indices.
    if isinstance(value, bool) or not isinstance(value, int):
        raise CliError(f"[ERROR] {what} must be an integer, got {value!r}.")
    return value


def build_date(date: str) -> DateTime:
    return DateTime(date=date)


def build_date_time(date: str, time: str) -> DateTime:
    return DateTime(date=date, time=time)


def build_status_index(index: int) -> StatusIndex:
    """Status (color) column value. The index is not checked against the
    column's labels; use LabelCatalog for that."""
    _require_int(index, "Status index")
    if index < 0:
        raise CliError(f"[ERROR] Status index must be non-negative, got {index}.")
    return StatusIndex(index=index)


def build_checkbox(checked: str) -> Checkbox:
    """Checkbox value. Passed through verbatim, like the decoder reads it."""
    return Checkbox(checked=checked)


def build_people(*user_ids: int) -> People:
    return People(
        persons_and_teams=tuple(
            PersonTeam(id=_require_int(uid, "User id"), kind="person") for uid in user_ids
        )
    )


def build_dropdown(*label_ids: int) -> DropdownIds:
    return DropdownIds(ids=tuple(_require_int(lid, "Dropdown label id") for lid in label_ids))


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


def _to_wire(value):
    if hasattr(value, "to_wire"):
        return value.to_wire()
    return value


def encode_value(value) -> str:
    """Encode one value the way it appears in a column value's ``value`` field.

    Text columns carry plain strings, which pass through unchanged.
    """
    if isinstance(value, str):
        return value
    return json.dumps(_to_wire(value), ensure_ascii=False)


def encode_column_values(column_values) -> str:
    """Serialize ``{column_id: value}`` as the single JSON document create_item takes."""
    if not isinstance(column_values, dict):
        raise CliError(
            "[ERROR] Column values must be a mapping of column id to value, "
            f"got {type(column_values).__name__}."
        )
    return json.dumps(
        {str(cid): _to_wire(value) for cid, value in column_values.items()},
        ensure_ascii=False,
    )
