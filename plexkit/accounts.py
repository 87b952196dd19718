"""Gate decoded records behind owner and discriminator checks.

Each ``AccountKind`` has one row in ``CAPABILITIES``: the program that must
own the account and the discriminator values it accepts, each mapped to the
schema that decodes it. ``load_account`` is the only way to turn an
envelope into an ``Account``.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from .codec import decode
from .envelope import AccountEnvelope
from .errors import InvalidAccountData, InvalidOwner
from .layouts import (
    EDITION_SCHEMA,
    MASTER_EDITION_V1_SCHEMA,
    MASTER_EDITION_V2_SCHEMA,
    METADATA_SCHEMA,
    PACK_CARD_SCHEMA,
    PACK_SET_SCHEMA,
    SAFETY_DEPOSIT_BOX_SCHEMA,
)
from .programs import (
    METADATA_PROGRAM_ID,
    NFT_PACKS_PROGRAM_ID,
    VAULT_PROGRAM_ID,
    AnyPubkey,
    edition_pda,
    metadata_pda,
    pack_card_pda,
    safety_deposit_box_pda,
)
from .records import MetadataKey, PackAccountType, VaultKey
from .schema import Schema


class AccountKind(str, Enum):
    METADATA = "metadata"
    EDITION = "edition"
    MASTER_EDITION = "master_edition"
    PACK_CARD = "pack_card"
    PACK_SET = "pack_set"
    SAFETY_DEPOSIT_BOX = "safety_deposit_box"


@dataclass(frozen=True, eq=False)
class Capability:
    program: str
    schemas: Mapping[int, Schema]

    @property
    def discriminators(self) -> Tuple[int, ...]:
        return tuple(self.schemas)


def _capability(program, schemas: Dict[int, Schema]) -> Capability:
    return Capability(program=str(program), schemas=MappingProxyType(schemas))


CAPABILITIES: Mapping[AccountKind, Capability] = MappingProxyType(
    {
        AccountKind.METADATA: _capability(
            METADATA_PROGRAM_ID, {MetadataKey.METADATA_V1: METADATA_SCHEMA}
        ),
        AccountKind.EDITION: _capability(
            METADATA_PROGRAM_ID, {MetadataKey.EDITION_V1: EDITION_SCHEMA}
        ),
        AccountKind.MASTER_EDITION: _capability(
            METADATA_PROGRAM_ID,
            {
                MetadataKey.MASTER_EDITION_V1: MASTER_EDITION_V1_SCHEMA,
                MetadataKey.MASTER_EDITION_V2: MASTER_EDITION_V2_SCHEMA,
            },
        ),
        AccountKind.PACK_CARD: _capability(
            NFT_PACKS_PROGRAM_ID, {PackAccountType.PACK_CARD: PACK_CARD_SCHEMA}
        ),
        AccountKind.PACK_SET: _capability(
            NFT_PACKS_PROGRAM_ID, {PackAccountType.PACK_SET: PACK_SET_SCHEMA}
        ),
        AccountKind.SAFETY_DEPOSIT_BOX: _capability(
            VAULT_PROGRAM_ID, {VaultKey.SAFETY_DEPOSIT_BOX_V1: SAFETY_DEPOSIT_BOX_SCHEMA}
        ),
    }
)

_PDA_HELPERS: Mapping[AccountKind, Callable[..., str]] = MappingProxyType(
    {
        AccountKind.METADATA: metadata_pda,
        AccountKind.EDITION: edition_pda,
        AccountKind.MASTER_EDITION: edition_pda,
        AccountKind.PACK_CARD: pack_card_pda,
        AccountKind.SAFETY_DEPOSIT_BOX: safety_deposit_box_pda,
    }
)


@dataclass(frozen=True)
class Account:
    address: str
    kind: AccountKind
    owner: str
    length: int
    data: Any


def discriminator_of(buffer: bytes) -> Optional[int]:
    return buffer[0] if buffer else None


def is_recognized(kind: AccountKind, buffer: bytes) -> bool:
    return discriminator_of(buffer) in CAPABILITIES[kind].schemas


def load_account(kind: AccountKind, address: AnyPubkey, envelope: AccountEnvelope) -> Account:
    capability = CAPABILITIES[kind]
    address = str(address)
    if envelope.owner != capability.program:
        raise InvalidOwner(address, envelope.owner, capability.program)

    discriminator = discriminator_of(envelope.data)
    schema = capability.schemas.get(discriminator)
    if schema is None:
        raise InvalidAccountData(address, discriminator, capability.discriminators)

    return Account(
        address=address,
        kind=kind,
        owner=envelope.owner,
        length=envelope.length,
        data=decode(schema, envelope.data),
    )


def get_pda(kind: AccountKind, *seed_inputs) -> str:
    try:
        helper = _PDA_HELPERS[kind]
    except KeyError:
        raise ValueError(f"{kind.value} accounts are not program derived") from None
    return helper(*seed_inputs)


def route_edition(address: AnyPubkey, envelope: AccountEnvelope) -> Optional[Account]:
    """Build an Edition or MasterEdition from an edition PDA, based on its first byte."""
    for kind in (AccountKind.EDITION, AccountKind.MASTER_EDITION):
        if is_recognized(kind, envelope.data):
            return load_account(kind, address, envelope)
    return None
