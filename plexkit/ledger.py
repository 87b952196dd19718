"""Ledger access: fetch single accounts and filtered program accounts.

The library never retries; RPC and transport errors reach the caller
unchanged.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Protocol, Sequence, Tuple

import base58
from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment
from solana.rpc.types import MemcmpOpts

from .config import Settings, get_settings
from .envelope import AccountEnvelope
from .programs import AnyPubkey, to_pubkey

logger = logging.getLogger("plexkit.ledger")


@dataclass(frozen=True)
class MemcmpFilter:
    """Match ``data`` against the account buffer starting at ``offset``."""

    offset: int
    data: bytes

    def matches(self, buffer: bytes) -> bool:
        return buffer[self.offset : self.offset + len(self.data)] == self.data


KeyedEnvelope = Tuple[str, AccountEnvelope]


class Ledger(Protocol):
    async def fetch_account(self, address: AnyPubkey) -> Optional[AccountEnvelope]:
        ...

    async def fetch_accounts_by_filter(
        self, program: AnyPubkey, filters: Sequence[MemcmpFilter]
    ) -> List[KeyedEnvelope]:
        ...


class RpcLedger:
    def __init__(self, client: AsyncClient, commitment: Optional[str] = None):
        self.client = client
        self.commitment = Commitment(commitment) if commitment else None

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "RpcLedger":
        settings = settings or get_settings()
        client = AsyncClient(settings.rpc_url, timeout=settings.rpc_timeout)
        return cls(client, settings.commitment)

    async def close(self) -> None:
        await self.client.close()

    async def __aenter__(self) -> "RpcLedger":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def fetch_account(self, address: AnyPubkey) -> Optional[AccountEnvelope]:
        resp = await self.client.get_account_info(
            to_pubkey(address), commitment=self.commitment, encoding="base64"
        )
        found = resp.value is not None
        logger.debug("account_fetch address=%s found=%s", address, found)
        if not found:
            return None
        return AccountEnvelope.from_account(resp.value)

    async def fetch_accounts_by_filter(
        self, program: AnyPubkey, filters: Sequence[MemcmpFilter]
    ) -> List[KeyedEnvelope]:
        memcmps = [
            MemcmpOpts(offset=f.offset, bytes=base58.b58encode(f.data).decode("ascii")) for f in filters
        ]
        resp = await self.client.get_program_accounts(
            to_pubkey(program),
            commitment=self.commitment,
            encoding="base64",
            filters=memcmps,
        )
        accounts = resp.value or []
        logger.debug("program_accounts_fetch program=%s filters=%s count=%s", program, len(memcmps), len(accounts))
        return [(str(keyed.pubkey), AccountEnvelope.from_account(keyed.account)) for keyed in accounts]


class InMemoryLedger:
    """Dict-backed ledger for tests and offline tooling."""

    def __init__(self, accounts: Optional[Dict[str, AccountEnvelope]] = None):
        self.accounts: Dict[str, AccountEnvelope] = dict(accounts or {})

    def put(self, address: AnyPubkey, envelope: AccountEnvelope) -> None:
        self.accounts[str(address)] = envelope

    async def fetch_account(self, address: AnyPubkey) -> Optional[AccountEnvelope]:
        return self.accounts.get(str(address))

    async def fetch_accounts_by_filter(
        self, program: AnyPubkey, filters: Sequence[MemcmpFilter]
    ) -> List[KeyedEnvelope]:
        program = str(program)
        return [
            (address, envelope)
            for address, envelope in self.accounts.items()
            if envelope.owner == program and all(f.matches(envelope.data) for f in filters)
        ]
