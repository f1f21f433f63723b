"""
Base storage interface for Link Platform.

Purpose:
    Define a small, stable contract that multiple storage backends
    (in-memory, PostgreSQL) can implement without requiring changes to
    business logic.

Contract notes:
    - `create` is the only place code uniqueness is enforced; the check and
      the insert must be one atomic step inside the backend.
    - `increment_click` bumps `total_clicks`, `last_clicked` and
      `updated_at` in a single operation so concurrent redirects never lose
      an update.
    - Lookups return `None` / `False` for absent codes. Translating that into
      NotFoundError is the manager's job.

Testing & Coverage:
    These are abstract methods and are not executed directly in tests.
    We annotate them with `# pragma: no cover` so coverage tools don't
    penalize the project for un-runnable abstract declarations.

LLM Prompt Example:
    "Show how a narrow, explicit storage interface enables dependency
    injection and easy backend swapping without touching service code."
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models import Link


class BaseStorage(ABC):
    """Abstract base class for storage backends."""

    #: Short backend name reported by /health and the boot log.
    name: str = "base"

    @abstractmethod  # pragma: no cover
    def create(self, code: str, target_url: str) -> Link:
        """
        Persist a new link with zero clicks.

        Returns:
            Link: The stored record (with backend-assigned timestamps).

        Raises:
            ConflictError: If `code` is already taken.
            StorageError: If the backend fails.

        LLM Prompt Example:
            "Design an insert that is conflict-safe under concurrency with a
            primary key and ON CONFLICT DO NOTHING RETURNING."
        """
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def find_by_code(self, code: str) -> Optional[Link]:
        """Return the link stored under `code`, or None."""
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def increment_click(self, code: str) -> Optional[Link]:
        """
        Atomically add one click and stamp `last_clicked` with the current time.

        Returns:
            Optional[Link]: The updated record, or None if the code does not exist.

        LLM Prompt Example:
            "Explain how to make increments atomic with a single SQL UPDATE
            (SET clicks = clicks + 1) and how that prevents lost updates."
        """
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def delete(self, code: str) -> bool:
        """Remove a link. Returns False if it did not exist."""
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def search(self, term: str) -> List[Link]:
        """
        Case-insensitive substring match against code or target URL.

        Returns:
            List[Link]: Matches ordered by creation time, newest first.
                        Empty list when nothing matches.
        """
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def list_all(self) -> List[Link]:
        """Every link, newest first."""
        raise NotImplementedError

    def ping(self) -> bool:
        """Liveness probe for /health. In-process backends are always alive."""
        return True
