"""Order history: in-progress game detection, partitioning and pagination.

An order is an *incomplete game* while it belongs to an interactive
competition (spin or scratch), has been paid for, and still has unplayed
chances left. Everything else is a settled order shown in the paginated
history table.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from ringtone_account.api.schemas.common import PaginationMeta
from ringtone_account.api.schemas.orders import OrderRecord
from ringtone_account.core.constants import (
    INTERACTIVE_COMPETITION_TYPES,
    INTERACTIVE_GAME_LABELS,
    ORDER_REFERENCE_LENGTH,
    ORDER_STATUS_COMPLETED,
    ORDERS_PER_PAGE,
)

T = TypeVar("T")


@dataclass
class OrderPartition:
    """Disjoint split of a user's orders."""

    incomplete_games: list[OrderRecord] = field(default_factory=list)
    settled_orders: list[OrderRecord] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.incomplete_games) + len(self.settled_orders)


@dataclass
class PageWindow(Generic[T]):
    """One page of a list plus the numbers the pager controls need."""

    items: list[T]
    page: int
    page_size: int
    total_items: int
    total_pages: int

    @property
    def display_total_pages(self) -> int:
        """An empty list still shows as "page 1 of 1"."""
        return max(1, self.total_pages)

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    def meta(self) -> dict[str, Any]:
        return PaginationMeta(
            page=self.page,
            limit=self.page_size,
            total_items=self.total_items,
            total_pages=self.display_total_pages,
            has_previous=self.has_previous,
            has_next=self.has_next,
        ).model_dump()


# ── Classification ──────────────────────────────────────────────────


def is_incomplete_game(record: OrderRecord) -> bool:
    """True while a paid spin/scratch order still has plays remaining."""
    competition_type = record.competition.type if record.competition else None
    return (
        competition_type in INTERACTIVE_COMPETITION_TYPES
        and record.order.status == ORDER_STATUS_COMPLETED
        and (record.remaining_plays or 0) > 0
    )


def partition_orders(records: Iterable[OrderRecord]) -> OrderPartition:
    """Split orders into resumable games and settled orders.

    Every record lands in exactly one list; relative order is preserved.
    """
    partition = OrderPartition()
    for record in records:
        if is_incomplete_game(record):
            partition.incomplete_games.append(record)
        else:
            partition.settled_orders.append(record)
    return partition


# ── Pagination ──────────────────────────────────────────────────────


def total_pages_for(count: int, page_size: int = ORDERS_PER_PAGE) -> int:
    if page_size < 1:
        raise ValueError("page_size must be >= 1")
    return math.ceil(count / page_size)


def clamp_page(page: int, total_pages: int) -> int:
    """Clamp a requested page into ``[1, max(1, total_pages)]``."""
    return min(max(1, page), max(1, total_pages))


def paginate(
    items: Sequence[T],
    page: int,
    page_size: int = ORDERS_PER_PAGE,
) -> PageWindow[T]:
    """Return the 1-based ``page`` of ``items``.

    Out-of-range pages never raise; they yield an empty slice. Callers that
    want the nearest valid page should pass the result of ``clamp_page``.
    """
    total_pages = total_pages_for(len(items), page_size)
    start = max(0, (page - 1) * page_size)
    end = max(start, page * page_size)
    return PageWindow(
        items=list(items[start:end]),
        page=page,
        page_size=page_size,
        total_items=len(items),
        total_pages=total_pages,
    )


def show_pagination(partition: OrderPartition, page_size: int = ORDERS_PER_PAGE) -> bool:
    """Pager is visible once the user has more orders than fit on one page.

    The count includes incomplete games, which are not part of the paged
    table.
    """
    return partition.total > page_size


# ── Display helpers ─────────────────────────────────────────────────


def game_progress(record: OrderRecord) -> dict[str, Any]:
    """Remaining plays as a fraction of the quantity purchased."""
    remaining = record.remaining_plays or 0
    quantity = record.order.quantity
    percent = (remaining / quantity) * 100 if quantity > 0 else 0.0
    competition_type = record.competition.type if record.competition else None
    return {
        "remaining_plays": remaining,
        "quantity": quantity,
        "percent_remaining": round(percent, 2),
        "game_label": INTERACTIVE_GAME_LABELS.get(
            competition_type or "", INTERACTIVE_GAME_LABELS["scratch"]
        ),
    }


def resume_game_path(record: OrderRecord) -> str:
    """Client route that reopens the game for an incomplete order."""
    game = "spin" if record.competition and record.competition.type == "spin" else "scratch"
    return f"/{game}/{record.order.competition_id}/{record.order.id}"


def order_reference(order_id: str) -> str:
    """Short customer-facing order number, e.g. ``#A1B2C3D4``."""
    return f"#{order_id[-ORDER_REFERENCE_LENGTH:].upper()}"


def status_label(status: str) -> str:
    return status[:1].upper() + status[1:]
