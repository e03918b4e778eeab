"""
Account addresses, and how they cross serialization boundaries.

An address is written as its display string (0x-prefixed lowercase hex) when the
target format is human readable, and as its raw 20 bytes otherwise. Which one is
used is decided by the pydantic serialization / validation mode, so callers never
have to pass it around.
"""

from typing import Any

from eth_utils import is_hex_address, to_canonical_address, to_checksum_address
from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from graph_subscriptions import constants as gcst
from graph_subscriptions.security.tickets.errors import InvalidAddressError


class Address(bytes):
    """
    A 20 byte account address.

    str() gives the canonical display string, which is also what goes into the
    verification message. Use `checksum` when showing an address to a human.
    """

    def __new__(cls, value: bytes) -> "Address":
        if not isinstance(value, (bytes, bytearray)):
            raise InvalidAddressError(value, "expected bytes")
        if len(value) != gcst.ADDRESS_LENGTH:
            raise InvalidAddressError(value, f"expected {gcst.ADDRESS_LENGTH} bytes, got {len(value)}")
        return super().__new__(cls, value)

    @classmethod
    def from_bytes(cls, value: bytes) -> "Address":
        return cls(value)

    @classmethod
    def from_hex(cls, value: str) -> "Address":
        if not isinstance(value, str) or not is_hex_address(value):
            raise InvalidAddressError(value)
        return cls(to_canonical_address(value))

    @property
    def checksum(self) -> str:
        return to_checksum_address(bytes(self))

    def __str__(self) -> str:
        return "0x" + self.hex()

    def __repr__(self) -> str:
        return f"Address('{self}')"

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: GetCoreSchemaHandler) -> core_schema.CoreSchema:
        return core_schema.with_info_plain_validator_function(
            _validate_address,
            serialization=core_schema.plain_serializer_function_ser_schema(_serialize_address, info_arg=True),
        )


def _validate_address(value: Any, info: core_schema.ValidationInfo) -> Address:
    if isinstance(value, Address):
        return value

    if info.mode == "json":
        if not isinstance(value, str):
            raise InvalidAddressError(value, "expected a hex string")
        return Address.from_hex(value)

    # Binary formats carry the raw bytes, nothing else
    if not isinstance(value, (bytes, bytearray)):
        raise InvalidAddressError(value, f"expected {gcst.ADDRESS_LENGTH} raw bytes")
    return Address.from_bytes(value)


def _serialize_address(value: Address, info: core_schema.SerializationInfo) -> str | bytes:
    if info.mode_is_json():
        return str(value)
    return bytes(value)
