from pathlib import Path

from eth_keys.exceptions import ValidationError as EthKeysValidationError

from graph_subscriptions.logging_utils import get_logger
from graph_subscriptions.security.tickets.signers import LocalAccountSigner

logger = get_logger(__name__)


def load_signer(private_key: str) -> LocalAccountSigner:
    try:
        signer = LocalAccountSigner.from_key(private_key.strip())
    except (ValueError, EthKeysValidationError) as e:
        # Never echo the key itself
        raise ValueError("Failed to load signer: invalid private key") from e
    logger.info(f"Loaded ticket signer {signer.address.checksum}")
    return signer


def load_signer_from_key_file(file_path: Path) -> LocalAccountSigner:
    try:
        with open(file_path, "r") as file:
            private_key = file.read()
    except OSError as e:
        raise ValueError(f"Failed to load signer: {str(e)}") from e
    logger.info(f"Loaded private key from {file_path}")
    return load_signer(private_key)
