"""Binary schema registry.

A schema is plain immutable data: an ordered tuple of fields, each pairing a
name with an encoding, plus the nested schemas it references and the name of
an optional post-process transform. ``define_schema`` validates the
declaration and compiles it to a borsh layout exactly once.
"""

import dataclasses
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, Tuple, Union

import borsh_construct as borsh
from construct import Adapter, Bytes, Construct, If, Int8ul, Struct, this
from solders.pubkey import Pubkey

from .errors import SchemaDefinitionError


@dataclass(frozen=True)
class Int:
    bits: int

    def __post_init__(self) -> None:
        if self.bits not in (8, 16, 32, 64):
            raise SchemaDefinitionError(f"Unsupported integer width: {self.bits}")


@dataclass(frozen=True)
class Flag:
    """Single byte, zero is False."""


@dataclass(frozen=True)
class Str:
    """u32 length prefix followed by UTF-8 bytes."""


@dataclass(frozen=True)
class FixedBytes:
    size: int


@dataclass(frozen=True)
class PubkeyStr:
    """32 raw bytes surfaced as a base58 string."""


@dataclass(frozen=True)
class OptionOf:
    inner: "Encoding"


@dataclass(frozen=True)
class VecOf:
    inner: "Encoding"


@dataclass(frozen=True)
class Nested:
    schema: str


Encoding = Union[Int, Flag, Str, FixedBytes, PubkeyStr, OptionOf, VecOf, Nested]

U8 = Int(8)
U16 = Int(16)
U32 = Int(32)
U64 = Int(64)
BOOL = Flag()
STRING = Str()
PUBKEY = PubkeyStr()


@dataclass(frozen=True)
class Field:
    name: str
    encoding: Encoding


@dataclass(frozen=True, eq=False)
class Schema:
    name: str
    record: type
    fields: Tuple[Field, ...]
    nested: Mapping[str, "Schema"]
    post_process: Optional[str]
    layout: Construct = field(repr=False)


Transform = Callable[[Dict[str, Any]], Dict[str, Any]]

_TRANSFORMS: Dict[str, Transform] = {}


def register_transform(name: str) -> Callable[[Transform], Transform]:
    def decorator(fn: Transform) -> Transform:
        if name in _TRANSFORMS:
            raise SchemaDefinitionError(f"Transform {name!r} is already registered")
        _TRANSFORMS[name] = fn
        return fn

    return decorator


def get_transform(name: str) -> Transform:
    try:
        return _TRANSFORMS[name]
    except KeyError:
        raise SchemaDefinitionError(f"Unknown transform {name!r}") from None


class _PubkeyString(Adapter):
    def __init__(self) -> None:
        super().__init__(Bytes(32))

    def _decode(self, obj, context, path):
        return str(Pubkey.from_bytes(bytes(obj)))

    def _encode(self, obj, context, path):
        return bytes(Pubkey.from_string(str(obj)))


class _Presence(Adapter):
    """One presence byte; any non-zero value means the payload follows."""

    def __init__(self, subcon: Construct) -> None:
        super().__init__(Struct("present" / Int8ul, "value" / If(this.present != 0, subcon)))

    def _decode(self, obj, context, path):
        return obj.value if obj.present else None

    def _encode(self, obj, context, path):
        return {"present": 0 if obj is None else 1, "value": obj}


class _PaddedBytes(Adapter):
    def __init__(self, size: int) -> None:
        super().__init__(Bytes(size))
        self._size = size

    def _decode(self, obj, context, path):
        return bytes(obj)

    def _encode(self, obj, context, path):
        raw = obj.encode("utf-8") if isinstance(obj, str) else bytes(obj)
        return raw[: self._size].ljust(self._size, b"\x00")


_INT_LAYOUTS = {8: borsh.U8, 16: borsh.U16, 32: borsh.U32, 64: borsh.U64}
_PUBKEY_LAYOUT = _PubkeyString()


def _references(encoding: Encoding):
    if isinstance(encoding, Nested):
        yield encoding.schema
    elif isinstance(encoding, (OptionOf, VecOf)):
        yield from _references(encoding.inner)


def _compile(encoding: Encoding, nested: Mapping[str, Schema]) -> Construct:
    if isinstance(encoding, Int):
        return _INT_LAYOUTS[encoding.bits]
    if isinstance(encoding, Flag):
        return borsh.Bool
    if isinstance(encoding, Str):
        return borsh.String
    if isinstance(encoding, FixedBytes):
        return _PaddedBytes(encoding.size)
    if isinstance(encoding, PubkeyStr):
        return _PUBKEY_LAYOUT
    if isinstance(encoding, OptionOf):
        return _Presence(_compile(encoding.inner, nested))
    if isinstance(encoding, VecOf):
        return borsh.Vec(_compile(encoding.inner, nested))
    if isinstance(encoding, Nested):
        return nested[encoding.schema].layout
    raise SchemaDefinitionError(f"Unsupported encoding: {encoding!r}")


def define_schema(
    name: str,
    record: type,
    fields: Sequence[Field],
    nested: Sequence[Schema] = (),
    post_process: Optional[str] = None,
) -> Schema:
    """Validate a schema declaration and compile its layout.

    Every ``Nested`` reference must name a schema passed in ``nested``, the
    field names must match the record dataclass one to one, and
    ``post_process`` (when given) must already be registered. Violations
    raise ``SchemaDefinitionError`` here rather than on first decode.
    """
    fields = tuple(fields)
    nested_by_name = MappingProxyType({schema.name: schema for schema in nested})

    names = [f.name for f in fields]
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        raise SchemaDefinitionError(f"{name}: duplicate fields {duplicates}")

    for f in fields:
        for ref in _references(f.encoding):
            if ref not in nested_by_name:
                raise SchemaDefinitionError(
                    f"{name}.{f.name} references schema {ref!r} which was not supplied",
                    {"schema": name, "field": f.name, "missing": ref},
                )

    if not dataclasses.is_dataclass(record):
        raise SchemaDefinitionError(f"{name}: record type {record!r} is not a dataclass")
    record_fields = {f.name for f in dataclasses.fields(record)}
    if record_fields != set(names):
        raise SchemaDefinitionError(
            f"{name}: record fields {sorted(record_fields)} do not match schema fields {sorted(names)}"
        )

    if post_process is not None:
        get_transform(post_process)

    layout = borsh.CStruct(*[f.name / _compile(f.encoding, nested_by_name) for f in fields])
    return Schema(
        name=name,
        record=record,
        fields=fields,
        nested=nested_by_name,
        post_process=post_process,
        layout=layout,
    )
