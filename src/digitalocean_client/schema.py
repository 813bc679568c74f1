"""Binding of JSON objects to frozen dataclass records.

A record is a ``@dataclass(frozen=True)``. Fields without a default are
required; fields with a default are optional and take that default when the
member is absent. Members the record does not declare are ignored, so new
provider fields never break decoding.

Supported annotations:

| Annotation | JSON accepted |
|------------|---------------|
| `str`, `bool` | string, boolean |
| `int` | integer (not boolean) |
| `float` | integer or float (not boolean) |
| `datetime` | ISO 8601 string, `Z` suffix allowed |
| `Any` | anything |
| `X \\| None` | null or X |
| `list[X]`, `tuple[X, ...]` | array (decoded to list / tuple) |
| `dict[str, X]` | object |
| nested record | object |

Example:
    ```python
    @dataclass(frozen=True)
    class Region:
        slug: str
        name: str
        available: bool = False

    region = decode_record(Region, {"slug": "nyc3", "name": "New York 3"})
    ```
"""

import dataclasses
import types
from datetime import datetime
from functools import cache
from typing import Any, TypeVar, Union, get_args, get_origin, get_type_hints

from digitalocean_client.errors.exceptions import DecodeError, NullFieldError

T = TypeVar("T")

_MISSING = object()


def _join(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def _json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _mismatch(expected: str, value: Any, path: str) -> DecodeError:
    return DecodeError(f"expected {expected} at '{path or '<root>'}', got {_json_type(value)}", field_path=path or None)


@cache
def _record_fields(cls: type) -> tuple[tuple[str, Any, bool], ...]:
    """(name, annotation, required) for each init field of a record class."""
    hints = get_type_hints(cls)
    result = []
    for f in dataclasses.fields(cls):
        if not f.init:
            continue
        required = f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING
        result.append((f.name, hints[f.name], required))
    return tuple(result)


def is_record(tp: Any) -> bool:
    return isinstance(tp, type) and dataclasses.is_dataclass(tp)


def decode_record(cls: type[T], data: Any, path: str = "") -> T:
    """Bind a JSON object to a record class.

    Args:
        cls: Dataclass record type
        data: Parsed JSON value
        path: Location of `data` in the response, used in error messages

    Returns:
        Record instance

    Raises:
        DecodeError: Missing required member or JSON type mismatch
        NullFieldError: null given for a non-optional member
    """
    if not is_record(cls):
        raise TypeError(f"{cls!r} is not a dataclass record")
    if not isinstance(data, dict):
        raise _mismatch(f"object for {cls.__name__}", data, path)

    kwargs = {}
    for name, annotation, required in _record_fields(cls):
        field_path = _join(path, name)
        raw = data.get(name, _MISSING)
        if raw is _MISSING:
            if required:
                raise DecodeError(f"missing required field '{field_path}' for {cls.__name__}", field_path=field_path)
            continue
        kwargs[name] = decode_value(annotation, raw, field_path)

    return cls(**kwargs)


def decode_value(tp: Any, value: Any, path: str = "") -> Any:
    """Decode a JSON value against a type annotation."""
    if tp is Any:
        return value

    origin = get_origin(tp)

    if origin is Union or origin is types.UnionType:
        args = get_args(tp)
        if value is None:
            if type(None) in args:
                return None
            raise NullFieldError(f"null is not allowed at '{path}'", field_path=path)
        non_null = [arg for arg in args if arg is not type(None)]
        if len(non_null) == 1:
            return decode_value(non_null[0], value, path)
        for arg in non_null:
            try:
                return decode_value(arg, value, path)
            except DecodeError:
                continue
        raise _mismatch(" | ".join(getattr(a, "__name__", str(a)) for a in non_null), value, path)

    if value is None:
        raise NullFieldError(f"null is not allowed at '{path}'", field_path=path)

    if origin in (list, tuple):
        if not isinstance(value, list):
            raise _mismatch("array", value, path)
        args = get_args(tp)
        if origin is tuple and len(args) == 2 and args[1] is Ellipsis:
            item_type = args[0]
        elif origin is list and args:
            item_type = args[0]
        else:
            raise TypeError(f"unsupported sequence annotation {tp!r} at '{path}'")
        items = [decode_value(item_type, item, f"{path}[{i}]") for i, item in enumerate(value)]
        return tuple(items) if origin is tuple else items

    if origin is dict:
        if not isinstance(value, dict):
            raise _mismatch("object", value, path)
        _, value_type = get_args(tp) or (str, Any)
        return {key: decode_value(value_type, item, _join(path, key)) for key, item in value.items()}

    if tp is dict:
        if not isinstance(value, dict):
            raise _mismatch("object", value, path)
        return dict(value)

    if is_record(tp):
        return decode_record(tp, value, path)

    if tp is bool:
        if not isinstance(value, bool):
            raise _mismatch("boolean", value, path)
        return value

    if tp is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise _mismatch("integer", value, path)
        return value

    if tp is float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise _mismatch("number", value, path)
        return float(value)

    if tp is str:
        if not isinstance(value, str):
            raise _mismatch("string", value, path)
        return value

    if tp is datetime:
        if not isinstance(value, str):
            raise _mismatch("ISO 8601 timestamp", value, path)
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            raise DecodeError(f"invalid timestamp {value!r} at '{path}'", field_path=path) from None

    raise TypeError(f"unsupported annotation {tp!r} at '{path}'")
