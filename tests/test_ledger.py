from types import SimpleNamespace

import base58
import pytest
from solders.account import Account

from builders import key, pack_card_bytes
from plexkit.accounts import AccountKind
from plexkit.config import Settings
from plexkit.envelope import AccountEnvelope
from plexkit.ledger import MemcmpFilter, RpcLedger
from plexkit.programs import NFT_PACKS_PROGRAM_ID
from plexkit.queries import pack_cards_for_set


def solders_account(data: bytes, owner=NFT_PACKS_PROGRAM_ID) -> Account:
    return Account(lamports=2039280, data=data, owner=owner, executable=False, rent_epoch=361)


class FakeClient:
    def __init__(self, account=None, keyed=()):
        self.account = account
        self.keyed = list(keyed)
        self.calls = []
        self.closed = False

    async def get_account_info(self, pubkey, commitment=None, encoding="base64"):
        self.calls.append(("get_account_info", pubkey, commitment, encoding))
        return SimpleNamespace(value=self.account)

    async def get_program_accounts(self, pubkey, commitment=None, encoding="base64", filters=None):
        self.calls.append(("get_program_accounts", pubkey, commitment, filters))
        return SimpleNamespace(value=[SimpleNamespace(pubkey=k, account=a) for k, a in self.keyed])

    async def close(self):
        self.closed = True


def test_envelope_from_account():
    envelope = AccountEnvelope.from_account(solders_account(b"\x02\x03"))
    assert envelope == AccountEnvelope(
        owner=str(NFT_PACKS_PROGRAM_ID), data=b"\x02\x03", lamports=2039280, executable=False, rent_epoch=361
    )
    assert envelope.length == 2


@pytest.mark.asyncio
async def test_fetch_account_builds_envelope():
    client = FakeClient(account=solders_account(b"\x01"))
    ledger = RpcLedger(client, "confirmed")
    envelope = await ledger.fetch_account(str(key(1)))
    assert envelope.owner == str(NFT_PACKS_PROGRAM_ID)
    assert envelope.data == b"\x01"
    name, pubkey, commitment, encoding = client.calls[0]
    assert pubkey == key(1)
    assert commitment == "confirmed"
    assert encoding == "base64"


@pytest.mark.asyncio
async def test_fetch_account_missing():
    ledger = RpcLedger(FakeClient(account=None))
    assert await ledger.fetch_account(key(1)) is None


@pytest.mark.asyncio
async def test_filters_are_base58_memcmps():
    client = FakeClient(keyed=[(key(60), solders_account(pack_card_bytes(key(5))))])
    ledger = RpcLedger(client)
    result = await ledger.fetch_accounts_by_filter(
        NFT_PACKS_PROGRAM_ID, [MemcmpFilter(0, b"\x02"), MemcmpFilter(1, bytes(key(5)))]
    )
    assert result[0][0] == str(key(60))
    _, program, _, filters = client.calls[0]
    assert program == NFT_PACKS_PROGRAM_ID
    assert [(f.offset, f.bytes) for f in filters] == [
        (0, base58.b58encode(b"\x02").decode()),
        (1, str(key(5))),
    ]


@pytest.mark.asyncio
async def test_query_through_rpc_ledger():
    client = FakeClient(keyed=[(key(60), solders_account(pack_card_bytes(key(5))))])
    async with RpcLedger(client) as ledger:
        cards = await pack_cards_for_set(ledger, key(5))
    assert client.closed
    assert [card.kind for card in cards] == [AccountKind.PACK_CARD]
    assert cards[0].data.pack_set == str(key(5))


@pytest.mark.asyncio
async def test_from_settings_uses_preferred_endpoint():
    ledger = RpcLedger.from_settings(Settings(solana_rpc="http://127.0.0.1:8899", helius_rpc_url=""))
    try:
        assert ledger.commitment == "confirmed"
    finally:
        await ledger.close()
