"""
Unit tests for link_platform.manager.validation.

Covers:
    - Code pattern: 6-8 ASCII alphanumerics, nothing else
    - Reserved codes
    - Target URL: http/https with a host, length cap
"""

import pytest

from link_platform.manager.validation import (
    MAX_URL_LENGTH,
    ValidationResult,
    validate_code,
    validate_target_url,
)


@pytest.mark.parametrize("code", ["abc123", "ABCDEFG", "a1B2c3D4", "000000"])
def test_valid_codes(code):
    result = validate_code(code)
    assert result.ok is True
    assert result.value == code
    assert result.error is None


@pytest.mark.parametrize(
    "code",
    [
        "abc12",        # too short
        "abc123456",    # too long
        "bad-cd",       # hyphen
        "has spc",      # space
        "abc12_",       # underscore
        "äbc123",       # non-ASCII letter
        "abc123\n",     # trailing newline must not sneak past the pattern
        "",
    ],
)
def test_invalid_codes(code):
    result = validate_code(code)
    assert result.ok is False
    assert result.error == "Code must be 6-8 alphanumeric characters"


def test_reserved_code_rejected():
    result = validate_code("health")
    assert result.ok is False
    assert "reserved" in result.error


@pytest.mark.parametrize(
    "url",
    [
        "https://example.com",
        "http://example.com/path?q=1#frag",
        "https://sub.example.co.uk:8443/a/b",
        "http://127.0.0.1:8000/health",
        "http://[::1]:8080/",
        "https://bücher.de/katalog",
        "https://example.com/search?q=a%20b",
    ],
)
def test_valid_urls(url):
    assert validate_target_url(url) == ValidationResult(ok=True, value=url)


@pytest.mark.parametrize(
    "url",
    [
        "not-a-url",
        "ftp://files.example.com",
        "javascript:alert(1)",
        "https://",
        "https:///missing-host",
        "https://example.com:notaport/",
        "https://exa mple.com",
        "https://exa_mple.com",
        "https://ex<a>mple.com/",
        "https://-example.com",
        "https://example.com/pa th",
        "https://example.com/\tpath",
        "https://example.com/\x00",
        "https://example.com\n",
    ],
)
def test_invalid_urls(url):
    result = validate_target_url(url)
    assert result.ok is False
    assert result.error == "Invalid URL format"


@pytest.mark.parametrize("url", [None, ""])
def test_missing_url(url):
    result = validate_target_url(url)
    assert result.ok is False
    assert result.error == "targetUrl is required"


def test_url_too_long():
    url = "https://example.com/" + "a" * MAX_URL_LENGTH
    result = validate_target_url(url)
    assert result.ok is False
    assert "too long" in result.error
