from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from graph_subscriptions import constants as gcst
from graph_subscriptions.security.tickets.address import Address
from graph_subscriptions.security.tickets.errors import InvalidSignatureLengthError


class TicketPayload(BaseModel):
    """
    The signed body of a ticket.

    Optional fields that are None are left out of the serialized payload entirely,
    and contribute no line to the verification message.

    Attributes:
        chain_id (int): EIP-155 ID for the chain on which the contract is deployed.
        contract (Address): Address of the subscriptions contract.
        signer (Address): Address associated with the secret key used to sign the ticket.
        user (Address | None): Required when the authorized `signer` is not the `user` associated
            with a subscription. When omitted, the `signer` is implied to be equal to the `user`.
        name (str | None): Optional nice name.
        allowed_subgraphs (str | None): Comma-separated list of subgraphs that can be queried with this ticket.
        allowed_deployments (str | None): Comma-separated list of subgraph deployments that can be queried
            with this ticket.
        allowed_domains (str | None): Comma-separated list of origin domains that can send queries with
            this ticket.
    """

    model_config = ConfigDict(frozen=True, strict=True, extra="forbid")

    chain_id: Annotated[int, Field(ge=0, le=gcst.U64_MAX)]
    contract: Address
    signer: Address
    user: Address | None = None
    name: str | None = None
    # Reserved for later: id, max_uses and expiration, to limit ticket reuse.
    allowed_subgraphs: str | None = None
    allowed_deployments: str | None = None
    allowed_domains: str | None = None

    @property
    def effective_user(self) -> Address:
        """The subscription owner the ticket acts for."""
        return self.user if self.user is not None else self.signer


class Signature(bytes):
    """
    A 65 byte recoverable ECDSA signature: r (32 bytes), s (32 bytes), then v.
    """

    def __new__(cls, value: bytes) -> "Signature":
        if len(value) != gcst.SIGNATURE_LENGTH:
            raise InvalidSignatureLengthError(len(value), gcst.SIGNATURE_LENGTH)
        return super().__new__(cls, value)

    @classmethod
    def from_bytes(cls, value: bytes) -> "Signature":
        return cls(value)

    @property
    def r(self) -> int:
        return int.from_bytes(self[:32], "big")

    @property
    def s(self) -> int:
        return int.from_bytes(self[32:64], "big")

    @property
    def v(self) -> int:
        return self[64]

    def __repr__(self) -> str:
        return f"Signature('0x{self.hex()}')"
