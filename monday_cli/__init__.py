"""monday-cli — typed monday.com client, column value codec, and CLI."""

from monday_cli.builders import (
    build_checkbox,
    build_date,
    build_date_time,
    build_dropdown,
    build_people,
    build_status_index,
    encode_column_values,
    encode_value,
)
from monday_cli.catalog import ColumnCatalog
from monday_cli.client import MondayClient
from monday_cli.codec import DecodedValue, ListValue, Scalar, decode_item, decode_value
from monday_cli.config import VERSION
from monday_cli.exceptions import (
    CliError,
    CodecError,
    DecodeError,
    MalformedValueError,
    NetworkError,
    SetupError,
    UnknownColumnError,
    UnsupportedColumnTypeError,
)
from monday_cli.labels import LabelCatalog, LabelEntry, decode_labels
from monday_cli.models import Column, ColumnType, ColumnValue, Item
from monday_cli.types import (
    BoardRow,
    ColumnRow,
    CreateItemResult,
    CreateUpdateResult,
    GroupRow,
    ItemListResult,
    ItemRow,
    LabelRow,
    UserRow,
)

__all__ = [
    "VERSION",
    "MondayClient",
    "CliError",
    "SetupError",
    "NetworkError",
    "DecodeError",
    "CodecError",
    "UnknownColumnError",
    "UnsupportedColumnTypeError",
    "MalformedValueError",
    "Column",
    "ColumnCatalog",
    "ColumnType",
    "ColumnValue",
    "Item",
    "DecodedValue",
    "Scalar",
    "ListValue",
    "decode_value",
    "decode_item",
    "LabelCatalog",
    "LabelEntry",
    "decode_labels",
    "build_checkbox",
    "build_date",
    "build_date_time",
    "build_dropdown",
    "build_people",
    "build_status_index",
    "encode_column_values",
    "encode_value",
    "BoardRow",
    "ColumnRow",
    "CreateItemResult",
    "CreateUpdateResult",
    "GroupRow",
    "ItemListResult",
    "ItemRow",
    "LabelRow",
    "UserRow",
]
