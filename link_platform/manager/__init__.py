"""Business logic: code allocation, link lifecycle and redirects."""

from .link_manager import LinkManager
from .redirect_handler import RedirectHandler, RedirectOutcome

__all__ = ["LinkManager", "RedirectHandler", "RedirectOutcome"]
