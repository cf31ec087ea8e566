"""Column catalog — read-only column id → Column lookup for one board.

Built once per board from a columns fetch and passed explicitly into the
value codec. There is no module-level cache: callers hold the catalog for
as long as they work with that board.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from types import MappingProxyType

from monday_cli.models import Column


class ColumnCatalog:
    """Immutable lookup from column id to column metadata.

    Duplicate ids in the source sequence overwrite earlier entries
    (last one wins).
    """

    __slots__ = ("_columns",)

    def __init__(self, columns: Iterable[Column] = ()):
        by_id: dict[str, Column] = {}
        for column in columns:
            by_id[column.id] = column
        object.__setattr__(self, "_columns", MappingProxyType(by_id))

    @classmethod
    def build(cls, columns: Iterable[Column]) -> ColumnCatalog:
        return cls(columns)

    def __setattr__(self, name, value):
        raise AttributeError("ColumnCatalog is read-only")

    def get(self, column_id: str) -> Column | None:
        return self._columns.get(column_id)

    def __contains__(self, column_id) -> bool:
        return column_id in self._columns

    def __len__(self) -> int:
        return len(self._columns)

    def __iter__(self) -> Iterator[Column]:
        return iter(self._columns.values())

    def ids(self) -> list[str]:
        return list(self._columns)

    def __repr__(self):
        return f"ColumnCatalog({list(self._columns)!r})"
