"""Output formatting package for monday-cli.

Re-exports all public names so consumers can do:
    from monday_cli.formatters import format_items_table
"""

from monday_cli.formatters._core import mutation_response, output, pretty_print
from monday_cli.formatters._entities import (
    format_boards_table,
    format_columns_table,
    format_groups_table,
    format_labels_table,
    format_me_table,
    format_users_table,
)
from monday_cli.formatters._items import format_items_table
from monday_cli.formatters._table import (
    TableColumn,
    cell_text,
    clip,
    join_labels,
    render_table,
)

__all__ = [
    "TableColumn",
    "cell_text",
    "clip",
    "format_boards_table",
    "format_columns_table",
    "format_groups_table",
    "format_items_table",
    "format_labels_table",
    "format_me_table",
    "format_users_table",
    "join_labels",
    "mutation_response",
    "output",
    "pretty_print",
    "render_table",
]
