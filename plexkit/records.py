"""Decoded on-chain records for the metadata, NFT packs and vault programs.

Public keys are kept as base58 strings. Arrays decode to tuples so that a
record stays immutable once built.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Tuple, Union


class MetadataKey(IntEnum):
    UNINITIALIZED = 0
    EDITION_V1 = 1
    MASTER_EDITION_V1 = 2
    RESERVATION_LIST_V1 = 3
    METADATA_V1 = 4
    RESERVATION_LIST_V2 = 5
    MASTER_EDITION_V2 = 6
    EDITION_MARKER = 7


class PackAccountType(IntEnum):
    UNINITIALIZED = 0
    PACK_SET = 1
    PACK_CARD = 2
    PACK_VOUCHER = 3
    PROVING_PROCESS = 4


class VaultKey(IntEnum):
    UNINITIALIZED = 0
    SAFETY_DEPOSIT_BOX_V1 = 1
    EXTERNAL_PRICE_ACCOUNT_V1 = 2
    VAULT_V1 = 3


class PackSetState(IntEnum):
    NOT_ACTIVATED = 0
    ACTIVATED = 1
    DEACTIVATED = 2


class DistributionType(IntEnum):
    FIXED_NUMBER = 0
    PROBABILITY_BASED = 1


@dataclass(frozen=True)
class Creator:
    address: str
    verified: bool
    share: int


@dataclass(frozen=True)
class MetadataData:
    name: str
    symbol: str
    uri: str
    seller_fee_basis_points: int
    creators: Optional[Tuple[Creator, ...]]


@dataclass(frozen=True)
class Metadata:
    key: int
    update_authority: str
    mint: str
    data: MetadataData
    primary_sale_happened: bool
    is_mutable: bool


@dataclass(frozen=True)
class Edition:
    key: int
    parent: str
    edition: int


@dataclass(frozen=True)
class MasterEditionV1:
    key: int
    supply: int
    max_supply: Optional[int]
    printing_mint: str
    one_time_printing_authorization_mint: str


@dataclass(frozen=True)
class MasterEditionV2:
    key: int
    supply: int
    max_supply: Optional[int]


MasterEdition = Union[MasterEditionV1, MasterEditionV2]


@dataclass(frozen=True)
class Distribution:
    type: Union[DistributionType, int]
    # u64 on chain; Python ints carry the full range.
    value: int


@dataclass(frozen=True)
class PackCard:
    account_type: int
    pack_set: str
    master: str
    metadata: str
    token_account: str
    max_supply: Optional[int]
    distribution: Distribution
    current_supply: int


@dataclass(frozen=True)
class PackSet:
    account_type: int
    name: str
    authority: str
    minting_authority: str
    total_packs: int
    pack_cards: int
    pack_vouchers: int
    mutable: bool
    state: Union[PackSetState, int]


@dataclass(frozen=True)
class SafetyDepositBox:
    key: int
    vault: str
    token_mint: str
    store: str
    order: int
