"""Table formatters for users, boards, groups, columns, and labels."""

from monday_cli.formatters._table import TableColumn, cell_text, render_table


def format_me_table(me):
    return (
        f"User: {cell_text(me.get('name'))}\n"
        f"Id: {me.get('id', '')}\n"
        f"Email: {cell_text(me.get('email'))}"
    )


def format_users_table(users):
    rows = [(u.get("id"), u.get("name"), u.get("email")) for u in users]
    columns = [TableColumn("Id", 12), TableColumn("Name", 30), TableColumn("Email", 50)]
    return render_table(columns, rows, f"Total: {len(users)} users")


def format_boards_table(boards):
    rows = [(b.get("id"), b.get("name")) for b in boards]
    columns = [TableColumn("Id", 14, keep_tail=True), TableColumn("Name", 60)]
    return render_table(columns, rows, f"Total: {len(boards)} boards")


def format_groups_table(groups):
    rows = [(g.get("id"), g.get("title")) for g in groups]
    columns = [TableColumn("Id", 24, keep_tail=True), TableColumn("Title", 60)]
    return render_table(columns, rows, f"Total: {len(groups)} groups")


def format_columns_table(columns):
    rows = [
        (c.get("id"), c.get("type"), "yes" if c.get("supported") else "-", c.get("title"))
        for c in columns
    ]
    layout = [
        TableColumn("Id", 22, keep_tail=True),
        TableColumn("Type", 18),
        TableColumn("Decoded", 7),
        TableColumn("Title", 60),
    ]
    return render_table(layout, rows, f"Total: {len(columns)} columns")


def format_labels_table(labels):
    rows = [(lab.get("index"), lab.get("name")) for lab in labels]
    columns = [TableColumn("Index", 8), TableColumn("Name", 60)]
    return render_table(columns, rows, f"Total: {len(labels)} labels")
