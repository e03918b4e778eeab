import base64
import binascii
import re

import cbor2
from eth_account import Account
from eth_account.messages import encode_defunct
from eth_keys.exceptions import BadSignature
from eth_keys.exceptions import ValidationError as EthKeysValidationError
from eth_utils import keccak
from pydantic import ValidationError

from graph_subscriptions import constants as gcst
from graph_subscriptions.logging_utils import get_logger
from graph_subscriptions.security.tickets.address import Address
from graph_subscriptions.security.tickets.errors import (
    InvalidAddressError,
    InvalidEncodingError,
    InvalidPayloadError,
    InvalidSignatureLengthError,
    SignatureMismatchError,
    TicketError,
)
from graph_subscriptions.security.tickets.models import Signature, TicketPayload
from graph_subscriptions.security.tickets.signers import TicketSigner

logger = get_logger(__name__)

_BASE64_URL_NOPAD = re.compile(rb"[A-Za-z0-9_-]*")


def verification_message(payload: TicketPayload) -> str:
  """
  Builds the message that gets signed for a payload.

  One "<field>: <value>" line per field that is present, in alphabetical order of
  field names. Absent optional fields produce no line, so presence alone changes
  the message. Values are written verbatim, callers must keep newlines out of them.

  Args:
      payload (TicketPayload): The payload to describe.

  Returns:
      str: The verification message, each line terminated by a newline.
  """
  fields: list[tuple[str, str | None]] = [
    ("allowed_deployments", payload.allowed_deployments),
    ("allowed_domains", payload.allowed_domains),
    ("allowed_subgraphs", payload.allowed_subgraphs),
    ("chain_id", str(payload.chain_id)),
    ("contract", str(payload.contract)),
    ("name", payload.name),
    ("signer", str(payload.signer)),
    ("user", None if payload.user is None else str(payload.user)),
  ]
  return "".join(f"{name}: {value}\n" for name, value in fields if value is not None)

def message_hash(message: str) -> bytes:
  """
  Hashes a message the way personal_sign does: keccak256 over the
  "\\x19Ethereum Signed Message:\\n" prefix, the decimal byte length, then the message.

  Args:
      message (str): The message, encoded as UTF-8 before hashing.

  Returns:
      bytes: The 32 byte digest.
  """
  message_bytes = message.encode()
  return keccak(gcst.ETHEREUM_MESSAGE_PREFIX + str(len(message_bytes)).encode() + message_bytes)

def serialize_payload(payload: TicketPayload) -> bytes:
  """
  Encodes a payload as a CBOR map of its present fields, in declared order, with
  addresses as raw byte strings.
  """
  return cbor2.dumps(payload.model_dump(exclude_none=True))

def deserialize_payload(data: bytes) -> TicketPayload:
  """
  Decodes a payload written by `serialize_payload`.

  Raises:
      InvalidPayloadError: If the bytes aren't exactly the canonical CBOR map of a valid payload.
  """
  try:
    decoded = cbor2.loads(data)
  except (cbor2.CBORDecodeError, EOFError, ValueError) as e:
    raise InvalidPayloadError(str(e) or type(e).__name__) from e

  if not isinstance(decoded, dict):
    raise InvalidPayloadError(f"expected a map, got {type(decoded).__name__}")

  try:
    payload = TicketPayload.model_validate(decoded)
  except ValidationError as e:
    raise InvalidPayloadError(str(e)) from e

  # Trailing bytes, reordered fields and non-minimal lengths all fail here
  if serialize_payload(payload) != data:
    raise InvalidPayloadError("non-canonical payload encoding")
  return payload

def sign(payload: TicketPayload, signer: TicketSigner) -> Signature:
  """
  Signs the payload's verification message.

  The signer's address is deliberately not compared to `payload.signer` here,
  that check happens on the verifying side.

  Args:
      payload (TicketPayload): The payload to sign.
      signer (TicketSigner): The signing capability.

  Returns:
      Signature: The 65 byte signature.
  """
  return signer.sign_hash(message_hash(verification_message(payload)))

def verify(payload: TicketPayload, signature: Signature) -> Address:
  """
  Recovers the address that produced `signature` over the payload and checks it is
  the payload's claimed signer.

  Args:
      payload (TicketPayload): The payload the signature claims to cover.
      signature (Signature): The signature to check.

  Returns:
      Address: The authenticated signer.

  Raises:
      SignatureMismatchError: If no address can be recovered, or it isn't `payload.signer`.
  """
  # Only the plain 27/28 recovery ids are produced when signing a hash
  if signature.v not in gcst.RECOVERY_IDS:
    raise SignatureMismatchError(str(payload.signer))

  # Same personal-message hash as message_hash
  signable = encode_defunct(text=verification_message(payload))
  try:
    recovered = Address.from_hex(Account.recover_message(signable, signature=bytes(signature)))
  except (BadSignature, EthKeysValidationError, InvalidAddressError, ValueError) as e:
    raise SignatureMismatchError(str(payload.signer)) from e

  if recovered != payload.signer:
    raise SignatureMismatchError(str(payload.signer), str(recovered))
  return payload.signer

def encode(payload: TicketPayload, signer: TicketSigner) -> bytes:
  """Serialized payload followed directly by its 65 byte signature."""
  return serialize_payload(payload) + bytes(sign(payload, signer))

def to_ticket_base64(payload: TicketPayload, signer: TicketSigner) -> str:
  """
  Mints a ticket: the encoded, signed payload as URL-safe base64 without padding.

  Args:
      payload (TicketPayload): The payload to issue.
      signer (TicketSigner): The signing capability for `payload.signer`.

  Returns:
      str: The ticket.
  """
  ticket = _b64encode(encode(payload, signer))
  logger.debug(f"Issued ticket for signer {payload.signer} on chain {payload.chain_id}")
  return ticket

def from_ticket_base64(ticket: str) -> tuple[TicketPayload, Signature]:
  """
  Decodes and verifies a ticket. Nothing in the payload should be trusted unless this returns.

  Args:
      ticket (str): The ticket, as produced by `to_ticket_base64`.

  Returns:
      tuple[TicketPayload, Signature]: The verified payload and its signature.

  Raises:
      InvalidEncodingError: If the ticket isn't canonical URL-safe, unpadded base64.
      InvalidSignatureLengthError: If the decoded ticket is too short to hold a signature.
      InvalidPayloadError: If the payload bytes can't be deserialized.
      SignatureMismatchError: If the signature wasn't made by the payload's signer.
  """
  try:
    payload, signature = _decode_ticket(ticket)
  except TicketError as e:
    logger.warning(f"Rejected ticket: {e}")
    raise

  logger.debug(f"Verified ticket for signer {payload.signer}")
  return payload, signature

def _decode_ticket(ticket: str) -> tuple[TicketPayload, Signature]:
  data = _b64decode(ticket)

  # The signature has a fixed size, so it's read from the tail
  if len(data) < gcst.SIGNATURE_LENGTH:
    raise InvalidSignatureLengthError(len(data), gcst.SIGNATURE_LENGTH)
  signature_start = len(data) - gcst.SIGNATURE_LENGTH
  signature = Signature(data[signature_start:])

  payload = deserialize_payload(data[:signature_start])
  verify(payload, signature)
  return payload, signature

def _b64encode(data: bytes) -> str:
  return base64.urlsafe_b64encode(data).rstrip(b"=").decode()

def _b64decode(ticket: str) -> bytes:
  try:
    raw = ticket.encode("ascii")
  except (UnicodeEncodeError, AttributeError) as e:
    raise InvalidEncodingError("not an ascii string") from e

  if not _BASE64_URL_NOPAD.fullmatch(raw):
    raise InvalidEncodingError("invalid characters")
  if len(raw) % 4 == 1:
    raise InvalidEncodingError("invalid length")

  try:
    data = base64.urlsafe_b64decode(raw + b"=" * (-len(raw) % 4))
  except binascii.Error as e:
    raise InvalidEncodingError(str(e)) from e

  # Reject trailing bits that re-encode differently
  if _b64encode(data) != ticket:
    raise InvalidEncodingError("non-canonical encoding")
  return data
