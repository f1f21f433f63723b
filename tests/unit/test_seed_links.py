"""
Unit tests for the seed script's code generation (no database needed).
"""

import pytest

from link_platform.manager.validation import validate_code
from seed_links import base62, make_code, prefix_error


def test_base62():
    assert base62(0) == "A"
    assert base62(61) == "9"
    assert base62(62) == "BA"


@pytest.mark.parametrize("prefix", ["mk", "", "Z9", "abcd"])
def test_seeded_codes_are_valid_link_codes(prefix):
    assert prefix_error(prefix) is None
    for n in (0, 1, 1_000_000, 14_000_000):
        code = make_code(prefix, n)
        assert len(code) == 8
        assert validate_code(code).ok, code


@pytest.mark.parametrize("prefix", ["m-", "m k", "m_", "äb", "mk!"])
def test_prefix_outside_code_alphabet_rejected(prefix):
    assert prefix_error(prefix) == "--prefix must be ASCII letters and digits"


def test_prefix_too_long_rejected():
    assert "at least 4 counter characters" in prefix_error("abcde")
