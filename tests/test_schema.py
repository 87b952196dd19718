from dataclasses import FrozenInstanceError, dataclass
from typing import Optional, Tuple

import pytest

from plexkit.errors import PlexError, SchemaDefinitionError
from plexkit.layouts import CREATOR_SCHEMA, METADATA_DATA_SCHEMA, METADATA_SCHEMA
from plexkit.schema import (
    PUBKEY,
    U8,
    U32,
    Field,
    Int,
    Nested,
    OptionOf,
    VecOf,
    define_schema,
    get_transform,
    register_transform,
)


@dataclass(frozen=True)
class Point:
    x: int
    y: int


@dataclass(frozen=True)
class Path:
    points: Optional[Tuple[Point, ...]]


def test_missing_nested_schema_fails_at_definition():
    with pytest.raises(SchemaDefinitionError) as excinfo:
        define_schema("Path", Path, [Field("points", OptionOf(VecOf(Nested("Point"))))])
    assert excinfo.value.details["missing"] == "Point"


def test_nested_reference_resolves():
    point = define_schema("Point", Point, [Field("x", U32), Field("y", U32)])
    path = define_schema("Path", Path, [Field("points", OptionOf(VecOf(Nested("Point"))))], nested=[point])
    assert path.nested["Point"] is point
    assert [f.name for f in path.fields] == ["points"]


def test_unknown_post_process_is_rejected():
    with pytest.raises(SchemaDefinitionError):
        define_schema("Point", Point, [Field("x", U32), Field("y", U32)], post_process="no.such.transform")


def test_duplicate_fields_are_rejected():
    with pytest.raises(SchemaDefinitionError):
        define_schema("Point", Point, [Field("x", U32), Field("x", U32)])


def test_record_fields_must_match():
    with pytest.raises(SchemaDefinitionError):
        define_schema("Point", Point, [Field("x", U32), Field("z", U32)])


def test_record_must_be_a_dataclass():
    with pytest.raises(SchemaDefinitionError):
        define_schema("Tuple", tuple, [Field("x", U8)])


def test_unsupported_integer_width():
    with pytest.raises(SchemaDefinitionError):
        Int(24)


def test_transform_names_are_unique():
    with pytest.raises(SchemaDefinitionError):
        register_transform("metadata.strip_nulls")(lambda values: values)


def test_get_transform_unknown():
    with pytest.raises(SchemaDefinitionError):
        get_transform("missing")


def test_schema_definition_error_is_plex_error():
    assert issubclass(SchemaDefinitionError, PlexError)
    assert SchemaDefinitionError("bad").code == "schema_definition"


def test_metadata_schema_shape():
    assert METADATA_SCHEMA.nested["MetadataData"] is METADATA_DATA_SCHEMA
    assert METADATA_DATA_SCHEMA.nested["Creator"] is CREATOR_SCHEMA
    assert METADATA_DATA_SCHEMA.post_process == "metadata.strip_nulls"
    assert CREATOR_SCHEMA.fields[0] == Field("address", PUBKEY)


def test_schemas_are_immutable():
    with pytest.raises(FrozenInstanceError):
        METADATA_SCHEMA.name = "Other"
    with pytest.raises(TypeError):
        METADATA_SCHEMA.nested["Other"] = METADATA_SCHEMA
