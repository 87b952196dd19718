"""On-chain layouts for every supported record type.

Byte 0 of every account is its discriminator and is decoded as the first
field. Schemas are built once at import time and shared read-only.
"""

from typing import Any, Dict

from .records import (
    Creator,
    Distribution,
    DistributionType,
    Edition,
    MasterEditionV1,
    MasterEditionV2,
    Metadata,
    MetadataData,
    PackAccountType,
    PackCard,
    PackSet,
    PackSetState,
    SafetyDepositBox,
    VaultKey,
)
from .schema import (
    BOOL,
    PUBKEY,
    STRING,
    U8,
    U16,
    U32,
    U64,
    Field,
    FixedBytes,
    Nested,
    OptionOf,
    VecOf,
    define_schema,
    register_transform,
)

PACK_SET_NAME_SIZE = 32


def _known(enum_type, value: int):
    try:
        return enum_type(value)
    except ValueError:
        return value


@register_transform("metadata.strip_nulls")
def strip_metadata_nulls(values: Dict[str, Any]) -> Dict[str, Any]:
    # Every NUL goes, not just the padding after the first one.
    return {
        **values,
        "name": values["name"].replace("\x00", ""),
        "symbol": values["symbol"].replace("\x00", ""),
        "uri": values["uri"].replace("\x00", ""),
    }


@register_transform("pack_card.distribution_type")
def name_distribution_type(values: Dict[str, Any]) -> Dict[str, Any]:
    return {**values, "type": _known(DistributionType, values["type"])}


@register_transform("pack_card.stamp")
def stamp_pack_card(values: Dict[str, Any]) -> Dict[str, Any]:
    return {**values, "account_type": PackAccountType.PACK_CARD}


def trim_fixed_name(raw: bytes) -> str:
    """Cut a fixed-size name at its first NUL; anything after it is dropped."""
    return raw.split(b"\x00", 1)[0].decode("utf-8", errors="replace")


@register_transform("pack_set.normalize")
def normalize_pack_set(values: Dict[str, Any]) -> Dict[str, Any]:
    return {
        **values,
        "account_type": PackAccountType.PACK_SET,
        "name": trim_fixed_name(values["name"]),
        "state": _known(PackSetState, values["state"]),
    }


@register_transform("safety_deposit_box.stamp")
def stamp_safety_deposit_box(values: Dict[str, Any]) -> Dict[str, Any]:
    return {**values, "key": VaultKey.SAFETY_DEPOSIT_BOX_V1}


CREATOR_SCHEMA = define_schema(
    "Creator",
    Creator,
    [
        Field("address", PUBKEY),
        Field("verified", BOOL),
        Field("share", U8),
    ],
)

METADATA_DATA_SCHEMA = define_schema(
    "MetadataData",
    MetadataData,
    [
        Field("name", STRING),
        Field("symbol", STRING),
        Field("uri", STRING),
        Field("seller_fee_basis_points", U16),
        Field("creators", OptionOf(VecOf(Nested("Creator")))),
    ],
    nested=[CREATOR_SCHEMA],
    post_process="metadata.strip_nulls",
)

METADATA_SCHEMA = define_schema(
    "Metadata",
    Metadata,
    [
        Field("key", U8),
        Field("update_authority", PUBKEY),
        Field("mint", PUBKEY),
        Field("data", Nested("MetadataData")),
        Field("primary_sale_happened", BOOL),
        Field("is_mutable", BOOL),
    ],
    nested=[METADATA_DATA_SCHEMA],
)

EDITION_SCHEMA = define_schema(
    "Edition",
    Edition,
    [
        Field("key", U8),
        Field("parent", PUBKEY),
        Field("edition", U64),
    ],
)

MASTER_EDITION_V1_SCHEMA = define_schema(
    "MasterEditionV1",
    MasterEditionV1,
    [
        Field("key", U8),
        Field("supply", U64),
        Field("max_supply", OptionOf(U64)),
        Field("printing_mint", PUBKEY),
        Field("one_time_printing_authorization_mint", PUBKEY),
    ],
)

MASTER_EDITION_V2_SCHEMA = define_schema(
    "MasterEditionV2",
    MasterEditionV2,
    [
        Field("key", U8),
        Field("supply", U64),
        Field("max_supply", OptionOf(U64)),
    ],
)

DISTRIBUTION_SCHEMA = define_schema(
    "Distribution",
    Distribution,
    [
        Field("type", U8),
        Field("value", U64),
    ],
    post_process="pack_card.distribution_type",
)

PACK_CARD_SCHEMA = define_schema(
    "PackCard",
    PackCard,
    [
        Field("account_type", U8),
        Field("pack_set", PUBKEY),
        Field("master", PUBKEY),
        Field("metadata", PUBKEY),
        Field("token_account", PUBKEY),
        Field("max_supply", OptionOf(U32)),
        Field("distribution", Nested("Distribution")),
        Field("current_supply", U32),
    ],
    nested=[DISTRIBUTION_SCHEMA],
    post_process="pack_card.stamp",
)

PACK_SET_SCHEMA = define_schema(
    "PackSet",
    PackSet,
    [
        Field("account_type", U8),
        Field("name", FixedBytes(PACK_SET_NAME_SIZE)),
        Field("authority", PUBKEY),
        Field("minting_authority", PUBKEY),
        Field("total_packs", U32),
        Field("pack_cards", U32),
        Field("pack_vouchers", U32),
        Field("mutable", BOOL),
        Field("state", U8),
    ],
    post_process="pack_set.normalize",
)

SAFETY_DEPOSIT_BOX_SCHEMA = define_schema(
    "SafetyDepositBox",
    SafetyDepositBox,
    [
        Field("key", U8),
        Field("vault", PUBKEY),
        Field("token_mint", PUBKEY),
        Field("store", PUBKEY),
        Field("order", U8),
    ],
    post_process="safety_deposit_box.stamp",
)
