from typing import Sequence, Tuple, Union

from solders.pubkey import Pubkey

from .errors import InvalidSeeds

METADATA_PROGRAM_ID = Pubkey.from_string("metaqbxxUerdq28cj1RbAWkYQm3ybzjb6a8bQ518x1s")
VAULT_PROGRAM_ID = Pubkey.from_string("vau1zxA2LbssAUEF7Gpw91zMM1LvXrvpzJtmZ58rPsn")
NFT_PACKS_PROGRAM_ID = Pubkey.from_string("packFeFNZzMfD9aVWL7QbGz1WcU7R9zpf6pvNsw2BLu")

METADATA_PREFIX = b"metadata"
EDITION_SUFFIX = b"edition"
VAULT_PREFIX = b"vault"
PACK_CARD_PREFIX = b"card"

# The bump byte is appended as one more seed, so callers get one fewer.
MAX_SEEDS = 15
MAX_SEED_LEN = 32

AnyPubkey = Union[Pubkey, str]


def to_pubkey(value: AnyPubkey) -> Pubkey:
    if isinstance(value, Pubkey):
        return value
    return Pubkey.from_string(value)


def derive_address(program: AnyPubkey, seeds: Sequence[bytes]) -> Tuple[str, int]:
    """Find the program address for ``seeds`` and the bump that produced it.

    Bumps are tried from 255 downward until the hash falls off the ed25519
    curve, so the result never has a private key.
    """
    if len(seeds) > MAX_SEEDS:
        raise InvalidSeeds(f"At most {MAX_SEEDS} seeds are allowed, got {len(seeds)}")
    for index, seed in enumerate(seeds):
        if len(seed) > MAX_SEED_LEN:
            raise InvalidSeeds(f"Seed {index} is {len(seed)} bytes, limit is {MAX_SEED_LEN}")
    address, bump = Pubkey.find_program_address([bytes(seed) for seed in seeds], to_pubkey(program))
    return str(address), bump


def metadata_pda(mint: AnyPubkey) -> str:
    return derive_address(
        METADATA_PROGRAM_ID, [METADATA_PREFIX, bytes(METADATA_PROGRAM_ID), bytes(to_pubkey(mint))]
    )[0]


def edition_pda(mint: AnyPubkey) -> str:
    return derive_address(
        METADATA_PROGRAM_ID,
        [METADATA_PREFIX, bytes(METADATA_PROGRAM_ID), bytes(to_pubkey(mint)), EDITION_SUFFIX],
    )[0]


def pack_card_pda(pack_set: AnyPubkey, index: int) -> str:
    # The index is seeded as its decimal text, not as a little-endian integer.
    return derive_address(
        NFT_PACKS_PROGRAM_ID, [PACK_CARD_PREFIX, bytes(to_pubkey(pack_set)), str(index).encode()]
    )[0]


def safety_deposit_box_pda(vault: AnyPubkey, mint: AnyPubkey) -> str:
    return derive_address(
        VAULT_PROGRAM_ID, [VAULT_PREFIX, bytes(to_pubkey(vault)), bytes(to_pubkey(mint))]
    )[0]
