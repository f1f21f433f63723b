"""
Strategies for short-code generation in link_platform.

Provided strategies:
- RandomStrategy: uniform random Base62 code of length L (default 6), drawn
  from `random.SystemRandom`. Uniqueness is not the strategy's concern; the
  manager checks the store and retries.

Configuration (via link_platform.config.settings):
- CODE_STRATEGY: "random" (default)
- CODE_LENGTH: generated length (default 6; clamped 6..8)

Best practices:
- Centralize all configuration in `link_platform.config.settings`.
- Keep strategies stateless so one instance can serve every request thread.
"""

import logging
import random
import string
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Optional, Type

from link_platform.config import CODE_MAX_LENGTH, CODE_MIN_LENGTH, settings

log = logging.getLogger(__name__)

ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits


def _safe_len(length: Optional[int]) -> int:
    """Resolve desired code length from arg or config, clamped to [6, 8]."""
    L = int(length) if length is not None else int(settings.CODE_LENGTH)
    return max(CODE_MIN_LENGTH, min(CODE_MAX_LENGTH, L))


class BaseStrategy(ABC):
    """Abstract base for code generation strategies."""

    @abstractmethod
    def generate(self, length: Optional[int] = None) -> str:
        """Return one candidate code of `length` characters."""
        raise NotImplementedError


@dataclass(frozen=True)
class RandomStrategy(BaseStrategy):
    """Uniform random codes over the 62-character alphanumeric alphabet."""

    length: int = 6
    _rng: random.SystemRandom = field(default_factory=random.SystemRandom, repr=False, compare=False)

    def generate(self, length: Optional[int] = None) -> str:
        L = _safe_len(length if length is not None else self.length)
        return "".join(self._rng.choice(ALPHABET) for _ in range(L))


# Strategy registry and factory
STRATEGY_REGISTRY: Dict[str, Type[BaseStrategy]] = {
    "random": RandomStrategy,
    "rand": RandomStrategy,
}


def get_strategy_from_config(name: Optional[str] = None, length: Optional[int] = None) -> BaseStrategy:
    """
    Resolve the active strategy from parameter or settings.CODE_STRATEGY.
    Unknown names fall back to "random" with a warning.
    `length` overrides settings.CODE_LENGTH (still clamped to [6, 8]).
    """
    key = (name or settings.CODE_STRATEGY or "random").strip().lower()
    cls = STRATEGY_REGISTRY.get(key)
    if cls is None:
        log.warning("Unknown code strategy %r; falling back to 'random'", key)
        cls = RandomStrategy
    log.debug("Using code strategy: %s -> %s", key, cls.__name__)
    return cls(length=_safe_len(length))
