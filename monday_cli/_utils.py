"""
Shared pure-utility functions for monday-cli.

These helpers have no business logic and no side effects.
"""

from monday_cli.exceptions import CliError


def _validate_id(value, field="board_id"):
    """Return *value* as a string of digits, or raise CliError."""
    text = str(value).strip() if value is not None else ""
    if isinstance(value, bool) or not text.isdigit():
        raise CliError(f"[ERROR] {field} must be a numeric id, got: {value!r}")
    return text


def _as_int(value):
    """Turn a numeric API id ("123" or 123) into an int; leave anything else alone."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return value


def _parse_int_list(raw, field):
    """Parse "1,2, 3" into [1, 2, 3]. Raises CliError on non-integers."""
    out = []
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            out.append(int(part))
        except ValueError as e:
            raise CliError(
                f"[ERROR] {field} expects comma-separated integers, got '{part}'."
            ) from e
    return out


def _split_assignment(raw, flag):
    """Split a COLUMN=VALUE argument."""
    if "=" not in raw:
        raise CliError(f"[ERROR] {flag} expects COLUMN=VALUE, got '{raw}'.")
    column_id, value = raw.split("=", 1)
    column_id = column_id.strip()
    if not column_id:
        raise CliError(f"[ERROR] {flag} is missing the column id in '{raw}'.")
    return column_id, value.strip()
