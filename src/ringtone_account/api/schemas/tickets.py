"""Ticket entity schemas."""

from __future__ import annotations

from datetime import datetime

from ringtone_account.api.schemas.common import UpstreamModel


class Ticket(UpstreamModel):
    """A single purchased entry into a competition."""

    id: str
    competition_id: str
    ticket_number: str | None = None
    is_winner: bool = False
    created_at: datetime | None = None
