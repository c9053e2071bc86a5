"""JSON and YAML documents flattened into dotted environment keys.

A document such as::

    database:
      host: db.local
      port: 5432
    features: [search, export]

becomes the entries ``database.host=db.local``, ``database.port=5432`` and
``features=["search","export"]``. Entries are produced in document order.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Iterator, Mapping, MutableMapping, Optional, Tuple, Union

import yaml

from envcascade.exceptions import DocumentFormatError, ParseError
from envcascade.logger import Logger

from .sink import write_entry


def format_scalar(value: Any) -> str:
    """Render a scalar leaf the way it is stored in the environment.

    Booleans become ``true``/``false``, None becomes ``null``, integral
    floats drop their ``.0`` and other floats use the shortest repr that
    round-trips. Strings pass through; anything else goes through ``str``.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        text = repr(value)
        return text[:-2] if text.endswith(".0") else text
    return str(value)


def _json_ready(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {format_scalar(k): _json_ready(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_ready(v) for v in value]
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return int(value)
    return value


def serialize_sequence(items: Any) -> str:
    """Compact JSON array text, e.g. ``[1,2,"three"]``.

    Integral floats are written without a fraction (``1.0`` -> ``1``) and
    object keys inside the array are sorted. Other floats keep Python's
    shortest repr, so ``0.00001`` is written as ``1e-05``.

    Raises:
        TypeError: An element has no JSON form (e.g. a YAML date)
        ValueError: An element is NaN or infinite
    """
    return json.dumps(
        _json_ready(list(items)),
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
        sort_keys=True,
    )


def flatten(
    tree: Mapping[Any, Any],
    prefix: str = "",
    strict: bool = False,
    logger: Optional[Logger] = None,
) -> Iterator[Tuple[str, str]]:
    """Yield ``(dotted_key, value)`` for every leaf of ``tree``.

    Mappings recurse without an entry of their own, sequences are emitted
    as compact JSON arrays and scalars through :func:`format_scalar`. A
    sequence that cannot be serialized is dropped, or raises ParseError
    when ``strict`` is set.
    """
    for key, value in tree.items():
        key = format_scalar(key)
        full_key = f"{prefix}.{key}" if prefix else key

        if isinstance(value, Mapping):
            yield from flatten(value, full_key, strict=strict, logger=logger)
        elif isinstance(value, (list, tuple)):
            try:
                yield full_key, serialize_sequence(value)
            except (TypeError, ValueError) as exc:
                if strict:
                    raise ParseError(
                        "Sequence cannot be serialized",
                        code="UNSERIALIZABLE_SEQUENCE",
                        details={"key": full_key, "reason": str(exc)},
                    ) from exc
                if logger is not None:
                    logger.warning("Dropped unserializable sequence", key=full_key)
        else:
            yield full_key, format_scalar(value)


def flatten_into(
    tree: Mapping[Any, Any],
    environ: MutableMapping[str, str],
    strict: bool = False,
    logger: Optional[Logger] = None,
) -> int:
    """Flatten ``tree`` and write each entry as soon as it is produced.

    Returns:
        Number of entries written
    """
    written = 0
    for key, value in flatten(tree, strict=strict, logger=logger):
        if write_entry(environ, key, value, logger):
            written += 1
    return written


_YAML_TAG = "tag:yaml.org,2002:"
_YAML11_ONLY_TAGS = frozenset(_YAML_TAG + name for name in ("bool", "int", "float", "timestamp"))


class CoreSchemaLoader(yaml.SafeLoader):
    """SafeLoader resolving plain scalars by the YAML 1.2 core schema.

    Only ``true``/``false`` (in three casings) are booleans, integers are
    decimal, ``0o`` octal or ``0x`` hex, and there are no base-60 numbers
    or implicit timestamps. ``yes``, ``on`` and ``12:30`` stay strings.
    """

    yaml_implicit_resolvers = {
        first: [
            (tag, regexp)
            for tag, regexp in resolvers
            if tag not in _YAML11_ONLY_TAGS
        ]
        for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
    }

    def construct_core_int(self, node: yaml.ScalarNode) -> int:
        value = self.construct_scalar(node)
        if value.startswith("0o"):
            return int(value[2:], 8)
        if value.startswith("0x"):
            return int(value[2:], 16)
        return int(value)


CoreSchemaLoader.add_implicit_resolver(
    _YAML_TAG + "bool",
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)
CoreSchemaLoader.add_implicit_resolver(
    _YAML_TAG + "int",
    re.compile(r"^(?:[-+]?[0-9]+|0o[0-7]+|0x[0-9a-fA-F]+)$"),
    list("-+0123456789"),
)
CoreSchemaLoader.add_implicit_resolver(
    _YAML_TAG + "float",
    re.compile(
        r"^(?:[-+]?(?:\.[0-9]+|[0-9]+(?:\.[0-9]*)?)(?:[eE][-+]?[0-9]+)?"
        r"|[-+]?\.(?:inf|Inf|INF)|\.(?:nan|NaN|NAN))$"
    ),
    list("-+.0123456789"),
)
CoreSchemaLoader.add_constructor(_YAML_TAG + "int", CoreSchemaLoader.construct_core_int)


def _require_mapping(data: Any, path: Union[str, Path]) -> Mapping[Any, Any]:
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise DocumentFormatError(
            "Document root must be a mapping",
            details={"path": str(path), "root_type": type(data).__name__},
        )
    return data


def read_json_document(path: Union[str, Path]) -> Mapping[Any, Any]:
    """Parse a JSON file whose root is an object; a ``null`` root is ``{}``.

    Raises:
        OSError: The file cannot be opened or read
        json.JSONDecodeError: The text is not valid JSON
        DocumentFormatError: The root is not an object
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    return _require_mapping(data, path)


def read_yaml_document(path: Union[str, Path]) -> Mapping[Any, Any]:
    """Parse a YAML file whose root is a mapping; an empty document is ``{}``.

    Raises:
        OSError: The file cannot be opened or read
        yaml.YAMLError: The text is not valid YAML
        DocumentFormatError: The root is not a mapping
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.load(f, Loader=CoreSchemaLoader)
    return _require_mapping(data, path)
