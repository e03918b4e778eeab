import pytest

from graph_subscriptions.security.tickets.address import Address
from graph_subscriptions.security.tickets.models import TicketPayload
from graph_subscriptions.security.tickets.signers import LocalAccountSigner

# Well known local dev keys, never use them anywhere real
TEST_PRIVATE_KEY = "0x4f3edf983ac636a65a842ce7c78d9aa706d3b113bce9c46f30d7d21715b23b1d"
OTHER_PRIVATE_KEY = "0x6cbed15c793ce57650b9877cf6fa156fbef513c4e6134f022a85b1ffdd59b2a1"

CONTRACT = "0xe7f1725E7734CE288F8367e1Bb143E90bb3F0512"
USER = "0x3C44CdDdB6a900fa2b585dd299e03d12FA4293BC"


@pytest.fixture
def signer() -> LocalAccountSigner:
    return LocalAccountSigner.from_key(TEST_PRIVATE_KEY)


@pytest.fixture
def other_signer() -> LocalAccountSigner:
    return LocalAccountSigner.from_key(OTHER_PRIVATE_KEY)


@pytest.fixture
def contract() -> Address:
    return Address.from_hex(CONTRACT)


@pytest.fixture
def payload(signer: LocalAccountSigner, contract: Address) -> TicketPayload:
    return TicketPayload(chain_id=1337, contract=contract, signer=signer.address)


@pytest.fixture
def full_payload(signer: LocalAccountSigner, contract: Address) -> TicketPayload:
    return TicketPayload(
        chain_id=42161,
        contract=contract,
        signer=signer.address,
        user=Address.from_hex(USER),
        name="my ticket",
        allowed_subgraphs="subgraph-a,subgraph-b",
        allowed_deployments="QmDeployment",
        allowed_domains="example.com,*.example.org",
    )
