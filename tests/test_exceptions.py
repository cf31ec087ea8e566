"""Tests for exceptions.py — hierarchy, exit codes, and messages."""

from monday_cli.exceptions import (
    CliError,
    CodecError,
    DecodeError,
    HTTPError,
    MalformedValueError,
    NetworkError,
    SetupError,
    UnknownColumnError,
    UnsupportedColumnTypeError,
)


class TestExitCodes:
    def test_cli_error(self):
        assert CliError("x").exit_code == 1

    def test_setup_error(self):
        assert SetupError("x").exit_code == 2
        assert isinstance(SetupError("x"), CliError)

    def test_transport_errors_are_cli_errors(self):
        assert issubclass(NetworkError, CliError)
        assert issubclass(DecodeError, CliError)
        assert NetworkError("x").exit_code == 1


class TestHTTPError:
    def test_attributes(self):
        e = HTTPError(404, "Not Found", "body")
        assert e.code == 404
        assert e.reason == "Not Found"
        assert e.body == "body"
        assert e.headers == {}

    def test_not_a_cli_error(self):
        assert not issubclass(HTTPError, CliError)


class TestCodecErrors:
    def test_unknown_column_message(self):
        e = UnknownColumnError("status")
        assert str(e) == "[ERROR] Invalid column id - status"
        assert isinstance(e, CodecError)

    def test_unsupported_type_message(self):
        assert str(UnsupportedColumnTypeError("numeric")) == (
            "[ERROR] Value type not handled - numeric"
        )

    def test_unsupported_type_with_column(self):
        e = UnsupportedColumnTypeError("numeric", column_id="n1")
        assert str(e) == "[ERROR] Value type not handled - numeric (column n1)"
        assert e.column_id == "n1"

    def test_malformed_value(self):
        e = MalformedValueError("bad date", column_id="d1", column_type="date")
        assert str(e) == "[ERROR] bad date"
        assert (e.column_id, e.column_type) == ("d1", "date")
        assert e.exit_code == 1
