"""
Input validation for Link Platform.

Validators never raise. Each returns a tagged `ValidationResult` so callers
decide what a failure means; `LinkManager` turns failures into
`ValidationError` before it touches storage.

    >>> validate_code("mylink1").ok
    True
    >>> validate_code("bad-code").error
    'Code must be 6-8 alphanumeric characters'
"""

import ipaddress
import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse

CODE_PATTERN = re.compile(r"[A-Za-z0-9]{6,8}")
HOST_PATTERN = re.compile(r"[A-Za-z0-9.-]+")
_FORBIDDEN_CHARS = re.compile(r"[\s\x00-\x1f\x7f]")
MAX_URL_LENGTH = 2048

# Paths served by the app itself at the top level; a link with one of these
# codes could never be reached through GET /{code}.
RESERVED_CODES = frozenset({"health"})


@dataclass(frozen=True)
class ValidationResult:
    ok: bool
    value: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, value: str) -> "ValidationResult":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: str) -> "ValidationResult":
        return cls(ok=False, error=error)


def validate_target_url(url: Optional[str]) -> ValidationResult:
    """
    Accept only absolute http/https URLs with a host.

    Rejecting other schemes keeps `javascript:` and `data:` targets out of
    redirects. Whitespace and control characters are refused anywhere in the
    URL, and the host must be a DNS name (IDNs allowed) or an IP literal.
    """
    if not url or not isinstance(url, str):
        return ValidationResult.failure("targetUrl is required")
    if len(url) > MAX_URL_LENGTH:
        return ValidationResult.failure(f"URL is too long (max {MAX_URL_LENGTH} characters)")
    if _FORBIDDEN_CHARS.search(url):
        return ValidationResult.failure("Invalid URL format")
    try:
        parsed = urlparse(url)
        # Accessing .port validates the port component (raises ValueError when malformed).
        parsed.port
    except ValueError:
        return ValidationResult.failure("Invalid URL format")
    if parsed.scheme not in {"http", "https"} or not parsed.hostname:
        return ValidationResult.failure("Invalid URL format")
    if not _valid_host(parsed.hostname):
        return ValidationResult.failure("Invalid URL format")
    return ValidationResult.success(url)


def _valid_host(host: str) -> bool:
    try:
        ipaddress.ip_address(host)
        return True
    except ValueError:
        pass
    try:
        ascii_host = host.encode("idna").decode("ascii")
    except UnicodeError:
        return False
    return bool(HOST_PATTERN.fullmatch(ascii_host)) and not ascii_host.startswith(("-", "."))


def validate_code(code: Optional[str]) -> ValidationResult:
    """Check a caller-supplied code against the 6-8 alphanumeric rule."""
    if not isinstance(code, str) or not CODE_PATTERN.fullmatch(code):
        return ValidationResult.failure("Code must be 6-8 alphanumeric characters")
    if code in RESERVED_CODES:
        return ValidationResult.failure(f"Code '{code}' is reserved")
    return ValidationResult.success(code)
