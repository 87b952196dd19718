"""
plexkit error types.
"""

from typing import Any, Optional


class PlexError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class SchemaDefinitionError(PlexError):
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("schema_definition", message, details)


class InvalidOwner(PlexError):
    """The account is owned by a different program than the one expected for its type."""

    def __init__(self, address: str, owner: str, expected: str):
        super().__init__(
            "invalid_owner",
            f"Account {address} is owned by {owner}, expected {expected}",
            {"address": address, "owner": owner, "expected": expected},
        )


class InvalidAccountData(PlexError):
    """The leading discriminator byte is missing or not one the account type recognizes."""

    def __init__(self, address: str, discriminator: Optional[int], expected: tuple[int, ...]):
        shown = "none" if discriminator is None else str(discriminator)
        super().__init__(
            "invalid_account_data",
            f"Account {address} has discriminator {shown}, expected one of {list(expected)}",
            {"address": address, "discriminator": discriminator, "expected": list(expected)},
        )


class MalformedAccountData(PlexError):
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("malformed_account_data", message, details)


class InvalidSeeds(PlexError):
    def __init__(self, message: str):
        super().__init__("invalid_seeds", message)
