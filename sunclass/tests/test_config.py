"""
Configuration parsing and the startup security check.

Requirements:
- Defaults apply when variables are unset.
- Malformed URLs and out-of-range timeouts are rejected.
- Prod-like environments refuse plain-http Classroom API URLs.
"""
import pytest

from sunclass.classroom.config import DEFAULT_BASE_URL, is_prod_like, load_api_config
from sunclass.web.auth_utils import cookie_opts
from sunclass.web.config import ensure_secure_config_on_startup


def test_defaults_when_unset(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("CLASSROOM_API_BASE_URL", raising=False)
    monkeypatch.delenv("SUNCLASS_ENV", raising=False)

    cfg = load_api_config()

    assert cfg.base_url == DEFAULT_BASE_URL
    assert cfg.timeout_seconds == 10.0
    assert cfg.environment == "dev"
    assert cfg.is_prod_like is False


def test_trailing_slash_is_trimmed(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("CLASSROOM_API_BASE_URL", "https://classroom.example.org/api/")

    assert load_api_config().base_url == "https://classroom.example.org/api"


@pytest.mark.parametrize("url", ["localhost:8081/api", "ftp://x/api", "not a url"])
def test_invalid_base_url_is_rejected(monkeypatch: pytest.MonkeyPatch, url):
    monkeypatch.setenv("CLASSROOM_API_BASE_URL", url)

    with pytest.raises(ValueError):
        load_api_config()


@pytest.mark.parametrize("raw", ["abc", "0", "-1", "301"])
def test_invalid_timeout_is_rejected(monkeypatch: pytest.MonkeyPatch, raw):
    monkeypatch.setenv("CLASSROOM_API_TIMEOUT_SECONDS", raw)

    with pytest.raises(ValueError):
        load_api_config()


def test_startup_refuses_invalid_config(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("CLASSROOM_API_TIMEOUT_SECONDS", "abc")

    with pytest.raises(SystemExit):
        ensure_secure_config_on_startup()


def test_startup_refuses_http_in_prod(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("SUNCLASS_ENV", "prod")
    monkeypatch.setenv("CLASSROOM_API_BASE_URL", "http://classroom.internal/api")

    with pytest.raises(SystemExit):
        ensure_secure_config_on_startup()


def test_startup_allows_https_in_prod(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("SUNCLASS_ENV", "production")
    monkeypatch.setenv("CLASSROOM_API_BASE_URL", "https://classroom.example.org/api")

    ensure_secure_config_on_startup()


def test_cookie_flags_follow_environment():
    assert is_prod_like("stage") is True
    assert cookie_opts("dev") == {"secure": False, "samesite": "strict"}
    assert cookie_opts("prod")["secure"] is True
