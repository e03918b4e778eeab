class TicketError(Exception):
    """Base class for ticket-related exceptions."""
    pass

class InvalidEncodingError(TicketError):
    """Raised when a ticket string is not valid URL-safe, unpadded base64."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid ticket encoding (base64 URL, nopad): {reason}")

class InvalidSignatureLengthError(TicketError):
    """Raised when there are not enough bytes to hold a signature."""

    def __init__(self, length: int, expected: int):
        self.length = length
        self.expected = expected
        super().__init__(f"Invalid signature: expected {expected} bytes, got {length}.")

class InvalidPayloadError(TicketError):
    """Raised when the payload portion of a ticket can't be deserialized."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid ticket payload: {reason}")

class InvalidAddressError(TicketError, ValueError):
    """Raised when an address literal or byte string is malformed."""

    def __init__(self, value: object, reason: str = "not a 20 byte hex address"):
        self.value = value
        super().__init__(f"Invalid address {value!r}: {reason}")

class SignatureMismatchError(TicketError):
    """
    Raised when the address recovered from a signature is not the payload's claimed signer.

    `recovered` is None when no address could be recovered from the signature at all.
    """

    def __init__(self, expected: str, recovered: str | None = None):
        self.expected = expected
        self.recovered = recovered
        if recovered is None:
            message = f"Failed to recover signer, expected {expected}."
        else:
            message = f"Recovered signer {recovered} does not match claim {expected}."
        super().__init__(message)
