"""
monday-cli exception hierarchy.

All custom exceptions live here to avoid circular imports.
"""


class CliError(Exception):
    """Exit code 1 — validation, not-found, network, parse errors."""

    exit_code = 1


class SetupError(CliError):
    """Exit code 2 — missing or rejected API token."""

    exit_code = 2


class HTTPError(Exception):
    """Raised by _http_request for HTTP errors that callers want to handle."""

    def __init__(self, code, reason, body, headers=None):
        self.code = code
        self.reason = reason
        self.body = body
        self.headers = headers or {}


class NetworkError(CliError):
    """Transport failure: timeout, connection refused, HTTP or GraphQL error."""


class DecodeError(CliError):
    """The API answered, but not with the JSON shape we asked for."""


# ---------------------------------------------------------------------------
# Column value codec
# ---------------------------------------------------------------------------


class CodecError(CliError):
    """Base class for column value / label decoding failures."""


class UnknownColumnError(CodecError):
    def __init__(self, column_id):
        self.column_id = column_id
        super().__init__(f"[ERROR] Invalid column id - {column_id}")


class UnsupportedColumnTypeError(CodecError):
    def __init__(self, column_type, column_id=None):
        self.column_type = column_type
        self.column_id = column_id
        where = f" (column {column_id})" if column_id else ""
        super().__init__(f"[ERROR] Value type not handled - {column_type}{where}")


class MalformedValueError(CodecError):
    def __init__(self, message, column_id=None, column_type=None):
        self.column_id = column_id
        self.column_type = column_type
        super().__init__(f"[ERROR] {message}")
