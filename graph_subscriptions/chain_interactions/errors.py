class InvalidTimestampError(ValueError):
    """Raised when a contract timestamp can't be represented as a calendar instant."""

    def __init__(self, timestamp: object):
        self.timestamp = timestamp
        super().__init__(f"Invalid timestamp {timestamp!r}")
