from typing import Protocol, runtime_checkable

from eth_account import Account
from eth_account.signers.local import LocalAccount

from graph_subscriptions import constants as gcst
from graph_subscriptions.security.tickets.address import Address
from graph_subscriptions.security.tickets.models import Signature


@runtime_checkable
class TicketSigner(Protocol):
    """
    Anything that can sign a 32 byte digest for a known address.

    Key management lives outside this package; tickets only ever see this interface.
    """

    address: Address

    def sign_hash(self, digest: bytes) -> Signature: ...


class LocalAccountSigner:
    """Signs digests with an in-memory `eth_account` key."""

    def __init__(self, account: LocalAccount) -> None:
        self._account = account
        self.address = Address.from_hex(account.address)

    @classmethod
    def from_key(cls, private_key: str | bytes) -> "LocalAccountSigner":
        return cls(Account.from_key(private_key))

    def sign_hash(self, digest: bytes) -> Signature:
        if len(digest) != gcst.DIGEST_LENGTH:
            raise ValueError(f"Expected a {gcst.DIGEST_LENGTH} byte digest, got {len(digest)} bytes")
        signed = self._account.unsafe_sign_hash(digest)
        return Signature(bytes(signed.signature))

    def __repr__(self) -> str:
        return f"LocalAccountSigner(address={self.address.checksum})"
