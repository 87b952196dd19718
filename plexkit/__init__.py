"""plexkit - decode metadata, NFT pack and vault accounts from the Solana ledger."""

from .accounts import CAPABILITIES, Account, AccountKind, get_pda, is_recognized, load_account, route_edition
from .codec import decode, encode
from .config import Settings, get_settings
from .envelope import AccountEnvelope
from .errors import (
    InvalidAccountData,
    InvalidOwner,
    InvalidSeeds,
    MalformedAccountData,
    PlexError,
    SchemaDefinitionError,
)
from .ledger import InMemoryLedger, Ledger, MemcmpFilter, RpcLedger
from .programs import (
    METADATA_PROGRAM_ID,
    NFT_PACKS_PROGRAM_ID,
    VAULT_PROGRAM_ID,
    derive_address,
    edition_pda,
    metadata_pda,
    pack_card_pda,
    safety_deposit_box_pda,
)
from .queries import (
    fetch_account,
    fetch_edition,
    fetch_many,
    fetch_metadata,
    metadata_by_update_authority,
    pack_cards_for_set,
    safety_deposit_boxes_for_vault,
)
from .schema import Field, define_schema, register_transform

__version__ = "0.1.0"

__all__ = [
    "Account",
    "AccountEnvelope",
    "AccountKind",
    "CAPABILITIES",
    "Field",
    "InMemoryLedger",
    "InvalidAccountData",
    "InvalidOwner",
    "InvalidSeeds",
    "Ledger",
    "MalformedAccountData",
    "MemcmpFilter",
    "METADATA_PROGRAM_ID",
    "NFT_PACKS_PROGRAM_ID",
    "PlexError",
    "RpcLedger",
    "SchemaDefinitionError",
    "Settings",
    "VAULT_PROGRAM_ID",
    "decode",
    "define_schema",
    "derive_address",
    "edition_pda",
    "encode",
    "fetch_account",
    "fetch_edition",
    "fetch_many",
    "fetch_metadata",
    "get_pda",
    "get_settings",
    "is_recognized",
    "load_account",
    "metadata_by_update_authority",
    "metadata_pda",
    "pack_card_pda",
    "pack_cards_for_set",
    "register_transform",
    "route_edition",
    "safety_deposit_box_pda",
]
