from dataclasses import dataclass

from graph_subscriptions.chain_interactions.subscriptions import SubscriptionsContract
from graph_subscriptions.security.tickets.address import Address
from graph_subscriptions.security.tickets.models import TicketPayload
from graph_subscriptions.security.tickets.signers import LocalAccountSigner


@dataclass
class Config:
    chain_id: int
    contract: Address
    signer: LocalAccountSigner | None
    subscriptions_contract: SubscriptionsContract | None

    def new_payload(self, **fields: str | Address | None) -> TicketPayload:
        """A payload scoped to the configured chain and contract, for the configured signer."""
        if self.signer is None:
            raise ValueError("No ticket signer configured, can't issue tickets")
        return TicketPayload(chain_id=self.chain_id, contract=self.contract, signer=self.signer.address, **fields)
