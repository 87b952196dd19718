import logging
from typing import List, Optional, Sequence

from .accounts import CAPABILITIES, Account, AccountKind, load_account, route_edition
from .errors import PlexError
from .ledger import Ledger, MemcmpFilter
from .programs import AnyPubkey, edition_pda, metadata_pda, to_pubkey

logger = logging.getLogger("plexkit.queries")

# Parent key sits right after the one-byte discriminator.
PARENT_OFFSET = 1


async def fetch_account(ledger: Ledger, kind: AccountKind, address: AnyPubkey) -> Optional[Account]:
    envelope = await ledger.fetch_account(address)
    if envelope is None:
        return None
    return load_account(kind, address, envelope)


async def fetch_many(
    ledger: Ledger,
    kind: AccountKind,
    filters: Sequence[MemcmpFilter] = (),
    strict: bool = True,
) -> List[Account]:
    """Load every account of ``kind`` matching ``filters``.

    One request is made per recognized discriminator, each with that byte
    matched at offset 0 ahead of the caller's filters. With ``strict`` off,
    accounts that fail validation or decoding are logged and skipped instead
    of aborting the whole batch.
    """
    capability = CAPABILITIES[kind]
    found: List[Account] = []
    for discriminator in capability.discriminators:
        keyed = await ledger.fetch_accounts_by_filter(
            capability.program, [MemcmpFilter(0, bytes([discriminator])), *filters]
        )
        for address, envelope in keyed:
            try:
                found.append(load_account(kind, address, envelope))
            except PlexError as exc:
                if strict:
                    raise
                logger.warning("account_skipped kind=%s address=%s code=%s", kind.value, address, exc.code, exc_info=True)
    return found


async def fetch_metadata(ledger: Ledger, mint: AnyPubkey) -> Optional[Account]:
    return await fetch_account(ledger, AccountKind.METADATA, metadata_pda(mint))


async def fetch_edition(ledger: Ledger, metadata: Account) -> Optional[Account]:
    """Resolve the Edition or MasterEdition that belongs to a metadata account."""
    address = edition_pda(metadata.data.mint)
    envelope = await ledger.fetch_account(address)
    if envelope is None:
        return None
    return route_edition(address, envelope)


def _parent_filter(parent: AnyPubkey) -> MemcmpFilter:
    return MemcmpFilter(PARENT_OFFSET, bytes(to_pubkey(parent)))


async def pack_cards_for_set(ledger: Ledger, pack_set: AnyPubkey, strict: bool = True) -> List[Account]:
    return await fetch_many(ledger, AccountKind.PACK_CARD, [_parent_filter(pack_set)], strict)


async def safety_deposit_boxes_for_vault(ledger: Ledger, vault: AnyPubkey, strict: bool = True) -> List[Account]:
    return await fetch_many(ledger, AccountKind.SAFETY_DEPOSIT_BOX, [_parent_filter(vault)], strict)


async def metadata_by_update_authority(
    ledger: Ledger, update_authority: AnyPubkey, strict: bool = True
) -> List[Account]:
    return await fetch_many(ledger, AccountKind.METADATA, [_parent_filter(update_authority)], strict)
