"""Account area service: builds the per-tab view models.

Each view fetches the collections it needs from the platform API and runs
them through the pure grouping, partitioning and classification helpers.
Views tolerate any collection being empty (e.g. competitions not loaded
yet) and recompute everything on every call.

Mutations (profile, password, logout, top-up) are validated here and then
forwarded to the platform unchanged.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any

from ringtone_account.api.schemas.account import (
    AddressForm,
    PasswordChange,
    ProfileUpdate,
    UserProfile,
)
from ringtone_account.api.schemas.orders import OrderRecord
from ringtone_account.core.constants import (
    ORDERS_PER_PAGE,
    TOP_UP_MAX_AMOUNT,
    TOP_UP_MIN_AMOUNT,
    TOP_UP_PRESET_AMOUNTS,
    TRANSACTION_FILTER_ALL,
    TRANSACTION_TYPES,
)
from ringtone_account.services.entries import group_tickets_by_competition, summarize_entries
from ringtone_account.services.orders import (
    clamp_page,
    game_progress,
    order_reference,
    paginate,
    partition_orders,
    resume_game_path,
    show_pagination,
    status_label,
    total_pages_for,
)
from ringtone_account.services.referrals import build_referral_link
from ringtone_account.services.transactions import (
    filter_by_type,
    format_money,
    points_row,
    points_to_pounds,
    points_transactions,
    recent_transactions,
    transaction_row,
)

logger = logging.getLogger(__name__)


class AccountError(Exception):
    """Account service error with HTTP status hint."""

    def __init__(self, detail: str, status_code: int = 400) -> None:
        self.detail = detail
        self.status_code = status_code
        super().__init__(detail)


def _incomplete_game_card(record: OrderRecord) -> dict[str, Any]:
    competition = record.competition
    return {
        "order_id": record.order.id,
        "competition_id": record.order.competition_id,
        "title": (competition.title if competition else None) or "Unknown Competition",
        "image_url": competition.image_url if competition else None,
        "progress": game_progress(record),
        "resume_path": resume_game_path(record),
    }


def _order_row(record: OrderRecord) -> dict[str, Any]:
    competition = record.competition
    order = record.order
    return {
        "order_id": order.id,
        "reference": order_reference(order.id),
        "competition_id": order.competition_id,
        "title": (competition.title if competition else None) or "Competition",
        "image_url": competition.image_url if competition else None,
        "quantity": order.quantity,
        "status": order.status,
        "status_label": status_label(order.status),
        "total": format_money(order.total_amount),
        "payment_method": order.payment_method,
        "created_at": order.created_at,
    }


class AccountService:
    """Composes platform data into account tab views.

    Receives the platform client via __init__; no global state.
    """

    def __init__(
        self,
        client: Any,
        site_origin: str,
        orders_per_page: int = ORDERS_PER_PAGE,
    ) -> None:
        self.client = client
        self.site_origin = site_origin
        self.orders_per_page = orders_per_page

    # ── Views ───────────────────────────────────────────────────────

    def wallet_view(self, token: str, filter_type: str = TRANSACTION_FILTER_ALL) -> dict[str, Any]:
        """Balance, top-up presets and the most recent filtered transactions."""
        user = self.client.get_user(token)
        transactions = self.client.get_transactions(token)
        filtered = filter_by_type(transactions, filter_type)
        if filter_type == TRANSACTION_FILTER_ALL:
            empty_message = "No transactions yet"
        else:
            empty_message = f"No {filter_type} transactions"
        return {
            "balance": format_money(user.balance),
            "filter_type": filter_type,
            "filter_options": [TRANSACTION_FILTER_ALL, *TRANSACTION_TYPES],
            "top_up_presets": TOP_UP_PRESET_AMOUNTS,
            "transactions": [transaction_row(t) for t in recent_transactions(filtered)],
            "total_matching": len(filtered),
            "empty_message": empty_message if not filtered else None,
        }

    def orders_view(self, token: str, page: int = 1) -> dict[str, Any]:
        """Resumable games plus one page of settled orders.

        The requested page is clamped into range before slicing.
        """
        partition = partition_orders(self.client.get_orders(token))
        settled = partition.settled_orders
        total_pages = total_pages_for(len(settled), self.orders_per_page)
        current = clamp_page(page, total_pages)
        if current != page:
            logger.debug("Clamped orders page %d to %d of %d", page, current, total_pages)
        window = paginate(settled, current, self.orders_per_page)
        return {
            "incomplete_games": [_incomplete_game_card(r) for r in partition.incomplete_games],
            "orders": [_order_row(r) for r in window.items],
            "has_orders": partition.total > 0,
            "show_pagination": show_pagination(partition, self.orders_per_page),
            "pagination": window.meta(),
        }

    def entries_view(self, token: str) -> dict[str, Any]:
        """User's tickets grouped by competition, newest activity first."""
        tickets = self.client.get_tickets(token)
        competitions = self.client.get_competitions(token)
        groups = group_tickets_by_competition(tickets, competitions)
        return {
            "summary": summarize_entries(tickets, groups),
            "groups": [
                {
                    "competition": {
                        "id": g.competition.id,
                        "title": g.competition.title,
                        "image_url": g.competition.image_url,
                        "type": g.competition.type,
                    },
                    "ticket_count": len(g.tickets),
                    "tickets": [
                        {
                            "id": t.id,
                            "ticket_number": t.ticket_number,
                            "is_winner": t.is_winner,
                            "created_at": t.created_at,
                        }
                        for t in g.tickets
                    ],
                }
                for g in groups
            ],
        }

    def points_view(self, token: str) -> dict[str, Any]:
        user = self.client.get_user(token)
        history = points_transactions(self.client.get_transactions(token))
        return {
            "points": user.ringtone_points,
            "equivalent_value": format_money(points_to_pounds(user.ringtone_points)),
            "transactions": [points_row(t) for t in history],
        }

    def referral_view(self, token: str, origin: str | None = None) -> dict[str, Any]:
        code = self.client.get_referral_code(token)
        stats = self.client.get_referral_stats(token)
        link = build_referral_link(code, origin or self.site_origin)
        logger.debug("Built referral link", extra={"referral_link": link})
        return {
            "referral_code": code,
            "referral_link": link,
            "total_referrals": stats.total_referrals,
            "total_earned": format_money(stats.total_earned),
            "referrals": [r.model_dump() for r in stats.referrals],
        }

    def account_view(self, token: str) -> dict[str, Any]:
        user = self.client.get_user(token)
        return {
            **_profile_dict(user),
            "balance": format_money(user.balance),
        }

    # ── Mutations ───────────────────────────────────────────────────

    def top_up(self, token: str, amount: Decimal) -> str:
        """Start a wallet top-up checkout and return the payment redirect URL."""
        if amount < TOP_UP_MIN_AMOUNT:
            raise AccountError(f"Minimum top-up amount is £{TOP_UP_MIN_AMOUNT}")
        if amount > TOP_UP_MAX_AMOUNT:
            raise AccountError(f"Maximum top-up amount is £{TOP_UP_MAX_AMOUNT}")

        checkout = self.client.start_top_up_checkout(token, float(amount))
        if not checkout.redirect_url:
            logger.error("Top-up checkout returned no redirect URL")
            raise AccountError("Failed to get checkout URL", status_code=502)
        logger.info("Started wallet top-up checkout for £%s", amount)
        return checkout.redirect_url

    def update_profile(self, token: str, update: ProfileUpdate) -> dict[str, Any]:
        if not update.model_dump(exclude_none=True):
            raise AccountError("Nothing to update")
        return _profile_dict(self.client.update_user(token, update))

    def change_password(self, token: str, change: PasswordChange) -> None:
        if not change.password:
            raise AccountError("Password is required")
        self.client.change_password(token, change.password)

    def logout(self, token: str) -> None:
        self.client.logout(token)

    def save_address(self, address: AddressForm) -> dict[str, Any]:
        """Validate a delivery address.

        The platform has no address endpoint yet, so a valid form is
        acknowledged without being stored.
        """
        if not (address.street.strip() and address.city.strip() and address.postcode.strip()):
            raise AccountError("Please fill in all required fields")
        return {
            "message": "Address Management Coming Soon",
            "detail": {"saved": False, "address": address.model_dump()},
        }


def _profile_dict(user: UserProfile) -> dict[str, Any]:
    return {
        "id": user.id,
        "email": user.email,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "ringtone_points": user.ringtone_points,
    }
