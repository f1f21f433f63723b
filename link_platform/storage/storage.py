"""
Storage module for Link Platform (in-memory implementation).

Responsibilities:
    - Save links keyed by code and reject duplicate codes
    - Track click counts and last-click timestamps
    - Provide point lookup, delete, substring search and listing

Design:
    - This is an in-memory reference implementation that satisfies the BaseStorage contract.
    - It is intentionally simple to keep unit/integration tests fast and deterministic.
    - A single lock serializes every mutation, so FastAPI's threadpool can run
      concurrent redirects against one instance without lost updates.
    - For production, use the PostgreSQL backend (`db_storage.DBStorage`).

LLM Prompt Example:
    "Explain how this in-memory storage can be swapped for a database-backed layer
     (Postgres) without changing the manager or API code, by adhering to a
     narrow, explicit BaseStorage interface."
"""

import threading
from dataclasses import replace
from typing import Dict, Iterable, List, Optional

from ..errors import DUPLICATE_CODE_MESSAGE, ConflictError
from ..models import Link, utcnow
from .base import BaseStorage


class Storage(BaseStorage):
    name = "memory"

    def __init__(self):
        """
        Initialize empty storage.

        Internal schema:
            self.links = { code: Link(...) }   # insertion-ordered
        """
        self.links: Dict[str, Link] = {}
        self._lock = threading.Lock()

    def create(self, code: str, target_url: str) -> Link:
        """
        Insert a new link.

        Rules:
            - Code must not exist yet (no overwrite, no upsert).

        Raises:
            ConflictError: If the code is already stored.
        """
        with self._lock:
            if code in self.links:
                raise ConflictError(DUPLICATE_CODE_MESSAGE)
            link = Link.new(code, target_url, now=utcnow())
            self.links[code] = link
            return link

    def find_by_code(self, code: str) -> Optional[Link]:
        return self.links.get(code)

    def increment_click(self, code: str) -> Optional[Link]:
        """
        Add one click to `code`.

        Returns:
            Optional[Link]: Updated record, or None if the code is unknown.
        """
        with self._lock:
            current = self.links.get(code)
            if current is None:
                return None
            now = utcnow()
            updated = replace(
                current,
                total_clicks=current.total_clicks + 1,
                last_clicked=now,
                updated_at=now,
            )
            self.links[code] = updated
            return updated

    def delete(self, code: str) -> bool:
        with self._lock:
            return self.links.pop(code, None) is not None

    def search(self, term: str) -> List[Link]:
        """
        Case-insensitive substring match against code or target URL.

        Example:
            >>> s = Storage(); _ = s.create("abc123", "https://Google.com")
            >>> [l.code for l in s.search("goo")]
            ['abc123']
        """
        needle = term.casefold()
        with self._lock:
            candidates = list(self.links.values())
        return self._newest_first(
            link for link in candidates
            if needle in link.code.casefold() or needle in link.target_url.casefold()
        )

    def list_all(self) -> List[Link]:
        with self._lock:
            candidates = list(self.links.values())
        return self._newest_first(candidates)

    @staticmethod
    def _newest_first(links: Iterable[Link]) -> List[Link]:
        # Reverse insertion order first: the stable sort then keeps later inserts
        # ahead of earlier ones that share a timestamp.
        return sorted(reversed(list(links)), key=lambda link: link.created_at, reverse=True)
