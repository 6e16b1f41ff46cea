"""Order schemas, including the joined order/competition/progress record."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import Field

from ringtone_account.api.schemas.common import UpstreamModel
from ringtone_account.api.schemas.competitions import CompetitionSummary
from ringtone_account.api.schemas.tickets import Ticket


class Order(UpstreamModel):
    """One purchase covering one or more tickets or plays of a competition."""

    id: str
    competition_id: str
    quantity: int = 0
    total_amount: Decimal = Decimal("0")
    payment_method: str | None = None
    wallet_amount: Decimal | None = None
    points_amount: Decimal | None = None
    cashflows_amount: Decimal | None = None
    status: str = "pending"
    created_at: datetime | None = None
    updated_at: datetime | None = None


class OrderRecord(UpstreamModel):
    """Order joined with its competition summary and play progress.

    The platform nests the joined rows under plural keys (``orders``,
    ``competitions``).
    """

    order: Order = Field(alias="orders")
    competition: CompetitionSummary | None = Field(default=None, alias="competitions")
    tickets: list[Ticket] = Field(default_factory=list)
    remaining_plays: int | None = None
