"""
LinkManager module for Link Platform.

Responsibilities:
    - Validate target URLs and caller-supplied codes before any store access
    - Allocate short codes: accept a supplied code or generate a random one
    - Guarantee code uniqueness (conflict on supplied codes, bounded retry on generated ones)
    - Expose lookup, delete, listing and search with NotFound semantics

Design notes:
    - Supplied codes are never swapped for another code: a taken code is a ConflictError.
    - Generated codes are checked against the store and inserted with the store's atomic
      create; a collision at either step burns one attempt. After `max_attempts`
      the manager gives up with CodeSpaceExhaustedError.
    - Storage and strategy are injected dependencies; no module-level state.

LLM Prompt Example:
    "Explain how bounded retries on random code generation keep a URL shortener
    correct under collisions without relying on the generator to be unique."
"""

import logging
from typing import List, Optional

from ..config import settings
from ..errors import (
    DUPLICATE_CODE_MESSAGE,
    CodeSpaceExhaustedError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from ..models import Link
from ..storage.base import BaseStorage
from .strategies import BaseStrategy, get_strategy_from_config
from .validation import RESERVED_CODES, ValidationResult, validate_code, validate_target_url

log = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Link not found"


def _require(result: ValidationResult) -> str:
    """Unwrap a validation result or raise ValidationError with its message."""
    if not result.ok:
        raise ValidationError(result.error or "Invalid request")
    return result.value


class LinkManager:
    """
    Coordinates creation and lookup rules for links.

    LLM Prompt Example:
        "Show how DI enables swapping storage backends and code strategies
        without touching business logic or routes."
    """

    def __init__(
        self,
        storage: BaseStorage,
        code_strategy: Optional[BaseStrategy] = None,
        max_attempts: Optional[int] = None,
    ):
        """
        Initialize LinkManager with a storage backend.

        Args:
            storage (BaseStorage): Backend storage instance.
            code_strategy (Optional[BaseStrategy]): Code generator; resolved from config when omitted.
            max_attempts (Optional[int]): Generated-code attempts before giving up
                (defaults to LINK_MAX_CODE_ATTEMPTS).
        """
        self.storage = storage
        self.code_strategy = code_strategy or get_strategy_from_config()
        self.max_attempts = max(1, max_attempts if max_attempts is not None else settings.MAX_CODE_ATTEMPTS)

    # ---------------------------------------------------------------------
    # Creation
    # ---------------------------------------------------------------------
    def create_link(self, target_url: str, code: Optional[str] = None) -> Link:
        """
        Create a link for `target_url`, optionally under a caller-supplied code.

        Rules:
            - Validate the URL (http/https with host), then the code if given.
              Both checks happen before the store is touched.
            - Supplied code: must match 6-8 alphanumerics; if taken -> ConflictError.
            - No code: generate random 6-char codes until one is free,
              at most `max_attempts` times.

        Returns:
            Link: The stored record (totalClicks=0, lastClicked=None).

        Raises:
            ValidationError: Malformed URL or code.
            ConflictError: Supplied code already exists.
            CodeSpaceExhaustedError: Every generated candidate collided.
        """
        url = _require(validate_target_url(target_url))

        if code is not None:
            code = _require(validate_code(code))
            if self.storage.find_by_code(code) is not None:
                raise ConflictError(DUPLICATE_CODE_MESSAGE)
            # create() re-checks atomically; a concurrent winner surfaces as ConflictError here too.
            link = self.storage.create(code, url)
        else:
            link = self._create_with_generated_code(url)

        log.info("Created link %s -> %s", link.code, link.target_url)
        return link

    def _create_with_generated_code(self, url: str) -> Link:
        for attempt in range(1, self.max_attempts + 1):
            candidate = self.code_strategy.generate()
            if candidate in RESERVED_CODES or self.storage.find_by_code(candidate) is not None:
                log.warning("Generated code %s collides (attempt %d/%d)", candidate, attempt, self.max_attempts)
                continue
            try:
                return self.storage.create(candidate, url)
            except ConflictError:
                log.warning(
                    "Generated code %s was taken concurrently (attempt %d/%d)",
                    candidate, attempt, self.max_attempts,
                )
        raise CodeSpaceExhaustedError(
            f"Could not allocate a unique code after {self.max_attempts} attempts"
        )

    # ---------------------------------------------------------------------
    # Queries & deletion
    # ---------------------------------------------------------------------
    def get_link(self, code: str) -> Link:
        link = self.storage.find_by_code(code)
        if link is None:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        return link

    def delete_link(self, code: str) -> None:
        """Delete `code`; a missing code raises NotFoundError and changes nothing."""
        if not self.storage.delete(code):
            raise NotFoundError(NOT_FOUND_MESSAGE)
        log.info("Deleted link %s", code)

    def list_links(self, search: Optional[str] = None) -> List[Link]:
        """All links newest first, or only those whose code/URL contains `search`."""
        if search:
            return self.storage.search(search)
        return self.storage.list_all()
