"""Table formatter for decoded board items."""

from monday_cli.formatters._table import TableColumn, cell_text, join_labels, render_table

_ITEM_COLUMNS = [
    TableColumn("Id", 14, keep_tail=True),
    TableColumn("Group", 20, keep_tail=True),
    TableColumn("Name", 60),
]


def format_items_table(result):
    """Render list_items() output: one line per item, then its values indented."""
    items = result.get("items", [])
    rows = [(item.get("id"), item.get("group_id"), item.get("name")) for item in items]
    lines = [render_table(_ITEM_COLUMNS, rows), ""]
    for item in items:
        values = item.get("values") or {}
        if not values:
            continue
        lines.append(f"{item.get('id', '')} {cell_text(item.get('name'))}")
        for column_id, value in values.items():
            if isinstance(value, list):
                value = join_labels(value)
            lines.append(f"    {column_id:<24} {cell_text(value)}")
    total = result.get("total_count", len(items))
    shown = f" (showing {len(items)})" if total != len(items) else ""
    lines.append(f"Total: {total} items{shown}")
    return "\n".join(lines)
