"""
Plain-text table rendering shared by the table formatters.

Column widths follow the rows being printed: a column is as wide as its
widest cell or header, up to the column's ``limit``. The last column is
never padded. Id columns are clipped from the left so the distinguishing
tail of a long id stays visible; other columns are clipped on the right.
"""

import re
from dataclasses import dataclass

_ESCAPES_RE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]|[\x00-\x08\x0b-\x1f\x7f]")

ELLIPSIS = "…"
LABELS_SHOWN = 5


@dataclass(frozen=True)
class TableColumn:
    title: str
    limit: int = 40
    keep_tail: bool = False


def cell_text(value) -> str:
    """Single-line text for one cell. Empty values and empty lists show as "-"."""
    if isinstance(value, (list, tuple)):
        if not value:
            return "-"
        value = ", ".join(str(v) for v in value)
    if value is None or value == "":
        return "-"
    text = str(value).replace("\n", " ").replace("\t", " ")
    return _ESCAPES_RE.sub("", text)


def clip(text: str, limit: int, keep_tail: bool = False) -> str:
    if len(text) <= limit:
        return text
    if limit < 2:
        return ELLIPSIS[:limit]
    if keep_tail:
        return ELLIPSIS + text[-(limit - 1) :]
    return text[: limit - 1] + ELLIPSIS


def join_labels(values, shown=LABELS_SHOWN) -> list:
    """First *shown* entries of a label or people list, then a count of the rest."""
    values = list(values)
    if len(values) <= shown:
        return values
    return values[:shown] + [f"+{len(values) - shown} more"]


def _line(texts, widths):
    padded = [text.ljust(width) for text, width in zip(texts[:-1], widths[:-1])]
    return "  ".join(padded + [texts[-1]])


def render_table(columns, rows, footer=None) -> str:
    """Render *rows* (sequences of cell values) under TableColumn headers."""
    cells = [[cell_text(value) for value in row] for row in rows]
    widths = []
    for i, column in enumerate(columns):
        cap = max(column.limit, len(column.title))
        widest = max([len(column.title)] + [len(row[i]) for row in cells])
        widths.append(min(widest, cap))
    lines = [
        _line([column.title for column in columns], widths),
        "  ".join("-" * width for width in widths),
    ]
    for row in cells:
        clipped = [
            clip(text, width, column.keep_tail)
            for text, width, column in zip(row, widths, columns)
        ]
        lines.append(_line(clipped, widths))
    if footer:
        lines.extend(["", footer])
    return "\n".join(lines)
