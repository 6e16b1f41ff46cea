"""Competition catalogue schemas."""

from __future__ import annotations

from decimal import Decimal

from ringtone_account.api.schemas.common import UpstreamModel


class Competition(UpstreamModel):
    """Competition reference data used for ticket grouping lookups."""

    id: str
    title: str
    image_url: str | None = None
    type: str = "raffle"
    ticket_price: Decimal = Decimal("0")


class CompetitionSummary(UpstreamModel):
    """Competition columns joined onto an order record."""

    title: str | None = None
    image_url: str | None = None
    ticket_price: Decimal | None = None
    type: str | None = None
