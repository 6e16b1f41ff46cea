"""Entries grouping: a user's tickets bucketed by competition.

Grouping rules:
  1. Tickets whose competition is not in the catalogue are dropped.
  2. Tickets inside a group are ordered newest first.
  3. Groups are ordered by their newest ticket, newest first.

A missing ``created_at`` counts as the epoch, so undated tickets (and groups
holding only undated tickets) sort last.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from ringtone_account.api.schemas.competitions import Competition
from ringtone_account.api.schemas.tickets import Ticket

logger = logging.getLogger(__name__)


@dataclass
class GroupedEntry:
    """A competition paired with the tickets the user holds for it."""

    competition: Competition
    tickets: list[Ticket] = field(default_factory=list)

    @property
    def latest_ticket_at(self) -> datetime | None:
        return self.tickets[0].created_at if self.tickets else None

    @property
    def winning_tickets(self) -> list[Ticket]:
        return [t for t in self.tickets if t.is_winner]


def timestamp_or_epoch(value: datetime | None) -> float:
    """Sort key for optional timestamps; ``None`` maps to epoch 0."""
    if value is None:
        return 0.0
    return value.timestamp()


def group_tickets_by_competition(
    tickets: Iterable[Ticket],
    competitions: Iterable[Competition],
) -> list[GroupedEntry]:
    """Group tickets by competition, most recently active competition first.

    Pure function: neither input is mutated. On duplicate competition ids the
    last one in ``competitions`` wins.
    """
    competition_map: dict[str, Competition] = {c.id: c for c in competitions}
    groups: dict[str, GroupedEntry] = {}
    dropped = 0

    for ticket in tickets:
        competition = competition_map.get(ticket.competition_id)
        if competition is None:
            dropped += 1
            continue
        group = groups.get(competition.id)
        if group is None:
            groups[competition.id] = GroupedEntry(competition=competition, tickets=[ticket])
        else:
            group.tickets.append(ticket)

    if dropped:
        logger.debug("Dropped %d ticket(s) with no matching competition", dropped)

    for group in groups.values():
        group.tickets.sort(key=lambda t: timestamp_or_epoch(t.created_at), reverse=True)

    return sorted(
        groups.values(),
        key=lambda g: timestamp_or_epoch(g.latest_ticket_at),
        reverse=True,
    )


def _plural(count: int, singular: str, plural: str) -> str:
    return singular if count == 1 else plural


def summarize_entries(
    tickets: list[Ticket],
    groups: list[GroupedEntry],
) -> dict[str, Any]:
    """Headline numbers for the entries tab.

    ``total_entries`` counts every ticket the platform returned, including
    those whose competition could not be resolved.
    """
    total_entries = len(tickets)
    total_competitions = len(groups)
    return {
        "total_entries": total_entries,
        "entries_label": _plural(total_entries, "entry", "entries"),
        "total_competitions": total_competitions,
        "competitions_label": _plural(total_competitions, "competition", "competitions"),
        "winning_entries": sum(len(g.winning_tickets) for g in groups),
    }
