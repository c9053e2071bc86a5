"""Parsers turning configuration files into environment entries."""

from envcascade.parsers.keyvalue import iter_key_values, load_key_value_file, scan_line
from envcascade.parsers.sink import write_entry
from envcascade.parsers.structured import (
    flatten,
    flatten_into,
    format_scalar,
    read_json_document,
    read_yaml_document,
    serialize_sequence,
)

__all__ = [
    "scan_line",
    "iter_key_values",
    "load_key_value_file",
    "flatten",
    "flatten_into",
    "format_scalar",
    "serialize_sequence",
    "read_json_document",
    "read_yaml_document",
    "write_entry",
]
