from datetime import datetime, timedelta, timezone
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from graph_subscriptions import constants as gcst
from graph_subscriptions.chain_interactions.errors import InvalidTimestampError

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _to_datetime(timestamp: int) -> datetime:
    if isinstance(timestamp, bool) or not isinstance(timestamp, int) or not 0 <= timestamp <= gcst.U64_MAX:
        raise InvalidTimestampError(timestamp)
    try:
        return _EPOCH + timedelta(seconds=timestamp)
    except OverflowError as e:
        raise InvalidTimestampError(timestamp) from e


class Subscription(BaseModel):
    """
    Subscription terms as stored in the subscriptions contract.

    Not part of a ticket: tickets say who may query, this says what they paid for.
    """

    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime
    rate: Annotated[int, Field(ge=0, le=gcst.U128_MAX)]

    @classmethod
    def from_contract_terms(cls, terms: tuple[int, int, int]) -> "Subscription":
        start, end, rate = terms
        return cls(start=_to_datetime(start), end=_to_datetime(end), rate=rate)

    def is_active(self, at: datetime | None = None) -> bool:
        at = at or datetime.now(timezone.utc)
        return self.start <= at < self.end
