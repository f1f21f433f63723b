"""
Redirect handling for Link Platform.

A redirect moves through two states:

    resolving --(code unknown)--> terminal: not found   (NotFoundError)
    resolving --(code known)----> increment click ----> terminal: redirect

Ordering is fixed: lookup, then increment, then respond with the target URL
read at lookup time (never re-read after the increment).

Increment failures are strict: the request fails and no redirect is issued.
    - StorageError from the backend propagates (HTTP 500).
    - A link deleted between lookup and increment is reported as NotFoundError.
"""

import logging
from dataclasses import dataclass

from ..errors import NotFoundError
from ..storage.base import BaseStorage
from .link_manager import NOT_FOUND_MESSAGE

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class RedirectOutcome:
    """Terminal 'redirect' state: where to send the caller."""

    code: str
    target_url: str
    total_clicks: int


class RedirectHandler:
    def __init__(self, storage: BaseStorage):
        self.storage = storage

    def resolve(self, code: str) -> RedirectOutcome:
        """
        Look up `code`, record one click, and return the redirect target.

        Raises:
            NotFoundError: Unknown code, or the link vanished before the click was recorded.
            StorageError: The backend failed during lookup or increment.
        """
        link = self.storage.find_by_code(code)
        if link is None:
            raise NotFoundError(NOT_FOUND_MESSAGE)

        updated = self.storage.increment_click(code)
        if updated is None:
            log.warning("Link %s disappeared before its click was recorded", code)
            raise NotFoundError(NOT_FOUND_MESSAGE)

        log.debug("Redirect %s -> %s (clicks=%d)", code, link.target_url, updated.total_clicks)
        return RedirectOutcome(code=code, target_url=link.target_url, total_clicks=updated.total_clicks)
