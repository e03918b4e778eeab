"""
Reads subscription terms from the subscriptions contract.
"""

from tenacity import retry, stop_after_attempt, wait_exponential
from web3 import Web3

from graph_subscriptions.chain_interactions.models import Subscription
from graph_subscriptions.logging_utils import get_logger
from graph_subscriptions.security.tickets.address import Address

logger = get_logger(__name__)

# Only the getter we use: subscriptions(address) -> (start, end, rate)
SUBSCRIPTIONS_ABI = [
    {
        "type": "function",
        "name": "subscriptions",
        "stateMutability": "view",
        "inputs": [{"name": "user", "type": "address"}],
        "outputs": [
            {"name": "start", "type": "int64"},
            {"name": "end", "type": "int64"},
            {"name": "rate", "type": "uint128"},
        ],
    }
]


class SubscriptionsContract:
    def __init__(self, w3: Web3, address: Address) -> None:
        self.address = address
        self.contract = w3.eth.contract(address=Web3.to_checksum_address(str(address)), abi=SUBSCRIPTIONS_ABI)

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=4),
        reraise=True,
    )
    def get_subscription_terms(self, user: Address) -> tuple[int, int, int]:
        start, end, rate = self.contract.functions.subscriptions(user.checksum).call()
        return int(start), int(end), int(rate)

    def get_subscription(self, user: Address) -> Subscription:
        terms = self.get_subscription_terms(user)
        logger.debug(f"Subscription terms for {user}: {terms}")
        return Subscription.from_contract_terms(terms)


def get_subscriptions_contract(rpc_url: str, address: Address) -> SubscriptionsContract:
    w3 = Web3(Web3.HTTPProvider(rpc_url))
    logger.info(f"Reading subscriptions from {address.checksum} via {rpc_url}")
    return SubscriptionsContract(w3, address)
