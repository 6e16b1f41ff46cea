"""Account tab selection from the current client path."""

from __future__ import annotations

from collections.abc import Mapping

from ringtone_account.core.constants import ROUTE_TO_TAB


def active_tab(path: str, mapping: Mapping[str, str] = ROUTE_TO_TAB) -> str | None:
    """Tab key for ``path``, or None when the path is not an account tab."""
    normalized = path.rstrip("/") or "/"
    return mapping.get(normalized)


def tab_links(mapping: Mapping[str, str] = ROUTE_TO_TAB) -> list[dict[str, str]]:
    return [{"path": path, "tab": tab} for path, tab in mapping.items()]
