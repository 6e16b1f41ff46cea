"""Domain constants for the account area."""

from __future__ import annotations

# ── Transaction Types ───────────────────────────────────────────────
TRANSACTION_TYPES: list[str] = ["deposit", "withdrawal", "purchase", "prize", "referral"]
TRANSACTION_FILTER_ALL = "all"

# Rendered with "+"; every other type is rendered as a debit
CREDIT_TRANSACTION_TYPES: frozenset[str] = frozenset({"deposit", "prize", "referral"})

# Case-insensitive description keywords marking a loyalty points transaction
POINTS_DESCRIPTION_KEYWORDS: tuple[str, ...] = ("ringtone", "points")

WALLET_RECENT_TRANSACTIONS = 10

# ── Loyalty Points ──────────────────────────────────────────────────
POINTS_PER_POUND = 100

# ── Competitions ────────────────────────────────────────────────────
INTERACTIVE_COMPETITION_TYPES: frozenset[str] = frozenset({"spin", "scratch"})

INTERACTIVE_GAME_LABELS: dict[str, str] = {
    "spin": "Spin Wheel",
    "scratch": "Scratch Card",
}

# ── Orders ──────────────────────────────────────────────────────────
ORDER_STATUS_COMPLETED = "completed"
ORDERS_PER_PAGE = 15
ORDER_REFERENCE_LENGTH = 8

# ── Wallet Top-ups (GBP) ────────────────────────────────────────────
TOP_UP_MIN_AMOUNT = 5
TOP_UP_MAX_AMOUNT = 1_000
TOP_UP_PRESET_AMOUNTS: list[int] = [10, 25, 50, 100]

# ── Account ─────────────────────────────────────────────────────────
DEFAULT_COUNTRY = "United Kingdom"
LOGIN_URL = "/api/login"

CURRENCY_SYMBOL = "£"

# ── Account Tabs ────────────────────────────────────────────────────
ROUTE_TO_TAB: dict[str, str] = {
    "/wallet": "wallet",
    "/orders": "orders",
    "/entries": "entries",
    "/ringtone-points": "points",
    "/referral": "referral",
    "/account": "account",
    "/address": "address",
}
