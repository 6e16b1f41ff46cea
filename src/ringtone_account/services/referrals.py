"""Referral link building and the copy-to-clipboard action."""

from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class ClipboardError(Exception):
    """The clipboard rejected a write."""


class Clipboard(Protocol):
    def write_text(self, text: str) -> None: ...


def build_referral_link(code: str | None, origin: str) -> str:
    """Shareable registration link for ``code``; empty when there is no code."""
    if not code:
        return ""
    return f"{origin.rstrip('/')}/register?ref={code}"


def copy_referral_link(link: str, clipboard: Clipboard) -> bool:
    """Write ``link`` to ``clipboard``.

    Returns whether the copy happened so the caller can show the matching
    notification. An empty link is a no-op.
    """
    if not link:
        return False
    try:
        clipboard.write_text(link)
    except ClipboardError:
        logger.warning("Could not copy referral link to clipboard", exc_info=True)
        return False
    return True
