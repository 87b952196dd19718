"""Decode and encode records against a compiled schema.

Decoding reads the declared fields in order and stops there; trailing bytes
are ignored so programs can append fields without breaking older readers.
Post-process transforms may be lossy (for example null stripping), so
``decode(encode(x)) == x`` is only guaranteed for fields they leave alone.
"""

from typing import Any, Dict

from construct import ConstructError

from .errors import MalformedAccountData
from .schema import Encoding, Nested, OptionOf, Schema, VecOf, get_transform


def decode(schema: Schema, buffer: bytes) -> Any:
    try:
        parsed = schema.layout.parse(bytes(buffer))
    except (ConstructError, UnicodeDecodeError) as exc:
        raise MalformedAccountData(
            f"Unable to decode {schema.name} from {len(buffer)} bytes: {exc}",
            {"schema": schema.name, "length": len(buffer)},
        ) from exc
    return _build_record(schema, parsed)


def encode(schema: Schema, record: Any) -> bytes:
    return schema.layout.build(_layout_values(schema, record))


def _build_record(schema: Schema, parsed) -> Any:
    values: Dict[str, Any] = {
        f.name: _to_python(schema, f.encoding, parsed[f.name]) for f in schema.fields
    }
    if schema.post_process is not None:
        values = get_transform(schema.post_process)(values)
    return schema.record(**values)


def _to_python(schema: Schema, encoding: Encoding, value: Any) -> Any:
    if isinstance(encoding, OptionOf):
        return None if value is None else _to_python(schema, encoding.inner, value)
    if isinstance(encoding, VecOf):
        return tuple(_to_python(schema, encoding.inner, item) for item in value)
    if isinstance(encoding, Nested):
        return _build_record(schema.nested[encoding.schema], value)
    return value


def _layout_values(schema: Schema, record: Any) -> Dict[str, Any]:
    return {f.name: _from_python(schema, f.encoding, getattr(record, f.name)) for f in schema.fields}


def _from_python(schema: Schema, encoding: Encoding, value: Any) -> Any:
    if isinstance(encoding, OptionOf):
        return None if value is None else _from_python(schema, encoding.inner, value)
    if isinstance(encoding, VecOf):
        return [_from_python(schema, encoding.inner, item) for item in value]
    if isinstance(encoding, Nested):
        return _layout_values(schema.nested[encoding.schema], value)
    return value
