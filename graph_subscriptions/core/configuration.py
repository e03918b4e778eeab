import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

from graph_subscriptions import constants as gcst
from graph_subscriptions.chain_interactions import chain_utils
from graph_subscriptions.chain_interactions.subscriptions import get_subscriptions_contract
from graph_subscriptions.core.models.config import Config
from graph_subscriptions.logging_utils import get_logger
from graph_subscriptions.security.tickets.address import Address
from graph_subscriptions.security.tickets.signers import LocalAccountSigner

logger = get_logger(__name__)

load_dotenv()


def _load_signer() -> LocalAccountSigner | None:
    private_key = os.getenv(gcst.TICKET_SIGNER_PRIVATE_KEY)
    if private_key:
        return chain_utils.load_signer(private_key)

    key_file = os.getenv(gcst.TICKET_SIGNER_KEY_FILE)
    if key_file:
        return chain_utils.load_signer_from_key_file(Path(key_file))

    logger.warning("No ticket signer configured, tickets can only be verified")
    return None


@lru_cache
def factory_config() -> Config:
    chain_id = int(os.getenv(gcst.CHAIN_ID, gcst.DEFAULT_CHAIN_ID))
    contract = Address.from_hex(os.getenv(gcst.SUBSCRIPTIONS_CONTRACT, gcst.DEFAULT_SUBSCRIPTIONS_CONTRACT))
    rpc_url = os.getenv(gcst.RPC_URL)

    subscriptions_contract = get_subscriptions_contract(rpc_url, contract) if rpc_url else None

    return Config(
        chain_id=chain_id,
        contract=contract,
        signer=_load_signer(),
        subscriptions_contract=subscriptions_contract,
    )
