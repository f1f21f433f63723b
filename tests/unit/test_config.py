import pytest

from link_platform.config import load_settings


def test_defaults(monkeypatch):
    for name in (
        "LINK_STORAGE_BACKEND",
        "LINK_DB_DSN",
        "LINK_DB_INIT_SCHEMA",
        "LINK_CODE_STRATEGY",
        "LINK_CODE_LENGTH",
        "LINK_MAX_CODE_ATTEMPTS",
        "LINK_REDIRECT_STATUS",
        "LINK_LOG_LEVEL",
        "LINK_LOG_JSON",
    ):
        monkeypatch.delenv(name, raising=False)

    s = load_settings()

    assert s.STORAGE_BACKEND == "memory"
    assert s.DB_DSN == ""
    assert s.DB_INIT_SCHEMA is False
    assert s.CODE_STRATEGY == "random"
    assert s.CODE_LENGTH == 6
    assert s.MAX_CODE_ATTEMPTS == 5
    assert s.REDIRECT_STATUS == 302
    assert s.LOG_LEVEL == "INFO"
    assert s.LOG_JSON is False


@pytest.mark.parametrize("raw,expected", [("2", 6), ("7", 7), ("99", 8), ("junk", 6)])
def test_code_length_is_clamped(monkeypatch, raw, expected):
    monkeypatch.setenv("LINK_CODE_LENGTH", raw)
    assert load_settings().CODE_LENGTH == expected


@pytest.mark.parametrize("raw,expected", [("307", 307), ("301", 301), ("200", 302), ("abc", 302)])
def test_redirect_status_whitelist(monkeypatch, raw, expected):
    monkeypatch.setenv("LINK_REDIRECT_STATUS", raw)
    assert load_settings().REDIRECT_STATUS == expected


def test_max_attempts_floor(monkeypatch):
    monkeypatch.setenv("LINK_MAX_CODE_ATTEMPTS", "0")
    assert load_settings().MAX_CODE_ATTEMPTS == 1


def test_bool_flags(monkeypatch):
    monkeypatch.setenv("LINK_DB_INIT_SCHEMA", "true")
    monkeypatch.setenv("LINK_LOG_JSON", "1")
    s = load_settings()
    assert s.DB_INIT_SCHEMA is True
    assert s.LOG_JSON is True


def test_backend_is_normalized(monkeypatch):
    monkeypatch.setenv("LINK_STORAGE_BACKEND", "  Postgres ")
    assert load_settings().STORAGE_BACKEND == "postgres"
