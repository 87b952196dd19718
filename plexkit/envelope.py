from dataclasses import dataclass

from solders.account import Account


@dataclass(frozen=True)
class AccountEnvelope:
    """Raw account state as fetched from the ledger. A newer read is a new envelope."""

    owner: str
    data: bytes
    lamports: int = 0
    executable: bool = False
    rent_epoch: int = 0

    @classmethod
    def from_account(cls, account: Account) -> "AccountEnvelope":
        return cls(
            owner=str(account.owner),
            data=bytes(account.data),
            lamports=account.lamports,
            executable=account.executable,
            rent_epoch=account.rent_epoch,
        )

    @property
    def length(self) -> int:
        return len(self.data)
