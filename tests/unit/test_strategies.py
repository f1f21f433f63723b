"""
Unit tests for link_platform.manager.strategies.
"""

import re

from link_platform.manager.strategies import (
    ALPHABET,
    RandomStrategy,
    get_strategy_from_config,
)

CODE_PATTERN = re.compile(r"^[0-9a-zA-Z]+$")


def test_alphabet_is_62_unique_alphanumerics():
    assert len(ALPHABET) == 62
    assert len(set(ALPHABET)) == 62
    assert CODE_PATTERN.match(ALPHABET)


def test_random_strategy_length_charset_and_diversity():
    r = RandomStrategy()
    samples = [r.generate() for _ in range(200)]
    assert all(len(x) == 6 and CODE_PATTERN.match(x) for x in samples)
    assert len(set(samples)) > 190  # 62^6 space; repeats in 200 draws are vanishingly rare


def test_random_strategy_length_is_clamped():
    r = RandomStrategy()
    assert len(r.generate(length=2)) == 6
    assert len(r.generate(length=7)) == 7
    assert len(r.generate(length=40)) == 8


def test_factory_returns_random_strategy_with_requested_length():
    s = get_strategy_from_config("random", length=8)
    assert isinstance(s, RandomStrategy)
    assert len(s.generate()) == 8


def test_factory_unknown_name_falls_back_to_random():
    s = get_strategy_from_config("sha256")
    assert isinstance(s, RandomStrategy)
