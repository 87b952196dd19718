#!/usr/bin/env python3
"""
Fetch one account and print its decoded record as JSON.

  python scripts/inspect_account.py metadata <address> [--edition]
  python scripts/inspect_account.py pack_set <address> --cards

RPC endpoint comes from SOLANA_RPC / HELIUS_RPC_URL (or .env).
"""

import argparse
import asyncio
import dataclasses
import json
import logging
import sys
from typing import List, Optional

from plexkit import AccountKind, PlexError, RpcLedger, fetch_account, fetch_edition, get_settings, pack_cards_for_set
from plexkit.accounts import Account


def account_to_dict(account: Account) -> dict:
    return {
        "address": account.address,
        "kind": account.kind.value,
        "owner": account.owner,
        "length": account.length,
        "data": dataclasses.asdict(account.data),
    }


async def inspect(kind: AccountKind, address: str, edition: bool, cards: bool) -> int:
    async with RpcLedger.from_settings() as ledger:
        account = await fetch_account(ledger, kind, address)
        if account is None:
            print(f"Account {address} not found on-chain")
            return 1
        result = {"account": account_to_dict(account)}
        if edition and kind == AccountKind.METADATA:
            companion = await fetch_edition(ledger, account)
            result["edition"] = account_to_dict(companion) if companion else None
        if cards and kind == AccountKind.PACK_SET:
            result["cards"] = [account_to_dict(card) for card in await pack_cards_for_set(ledger, address)]
    print(json.dumps(result, indent=2))
    return 0


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Decode a metadata, pack or vault account.")
    parser.add_argument("kind", choices=[kind.value for kind in AccountKind], help="Account type to decode as")
    parser.add_argument("address", help="Base58 account address")
    parser.add_argument("--edition", action="store_true", help="Also resolve the edition of a metadata account")
    parser.add_argument("--cards", action="store_true", help="Also list the cards of a pack set")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)
    args = parse_args(argv)
    try:
        return asyncio.run(inspect(AccountKind(args.kind), args.address, args.edition, args.cards))
    except PlexError as exc:
        print(f"{exc.code}: {exc}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
