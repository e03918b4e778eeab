ADDRESS_LENGTH = 20
SIGNATURE_LENGTH = 65
RECOVERY_IDS = (27, 28)
DIGEST_LENGTH = 32

# Prefix of the personal-message hash, followed by the decimal message length
ETHEREUM_MESSAGE_PREFIX = b"\x19Ethereum Signed Message:\n"

U64_MAX = 2**64 - 1
U128_MAX = 2**128 - 1

# Local dev network
DEFAULT_CHAIN_ID = 1337
DEFAULT_SUBSCRIPTIONS_CONTRACT = "0xe7f1725E7734CE288F8367e1Bb143E90bb3F0512"

# Env vars
TICKET_SIGNER_PRIVATE_KEY = "TICKET_SIGNER_PRIVATE_KEY"
TICKET_SIGNER_KEY_FILE = "TICKET_SIGNER_KEY_FILE"
CHAIN_ID = "CHAIN_ID"
SUBSCRIPTIONS_CONTRACT = "SUBSCRIPTIONS_CONTRACT"
RPC_URL = "RPC_URL"
