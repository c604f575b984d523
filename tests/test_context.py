"""Session context: token expiry and persistence."""

import base64
import json

import pytest

from focusmode import config
from focusmode.context import SessionContext, token_expiry
from focusmode.models.stats import User


def _jwt(claims: dict) -> str:
    payload = base64.urlsafe_b64encode(json.dumps(claims).encode()).rstrip(b"=").decode()
    return f"eyJhbGciOiJIUzI1NiJ9.{payload}.signature"


@pytest.fixture(autouse=True)
def focusmode_home(tmp_path, monkeypatch):
    monkeypatch.setenv("FOCUSMODE_HOME", str(tmp_path / "home"))
    return tmp_path / "home"


def test_no_token_is_logged_out():
    assert not SessionContext().is_logged_in()


def test_opaque_token_is_logged_in():
    assert SessionContext(token="opaque").is_logged_in()


def test_expired_jwt_is_logged_out():
    token = _jwt({"id": 1, "exp": 1_000})
    assert token_expiry(token) == 1_000
    assert not SessionContext(token=token).is_logged_in(now=2_000)
    assert SessionContext(token=token).is_logged_in(now=500)


def test_sign_in_persists_to_config():
    context = SessionContext.from_config()
    context.sign_in("abc", User(id=3, name="Ana", email="ana@example.com"))

    restored = SessionContext.from_config()
    assert restored.token == "abc"
    assert restored.user.email == "ana@example.com"

    restored.sign_out()
    assert "access_token" not in config.load_config()
    assert not SessionContext.from_config().is_logged_in()


def test_sign_out_keeps_other_settings():
    config.save_config({"base_url": "http://api.test", "access_token": "abc"})
    SessionContext.from_config().sign_out()
    assert config.load_config() == {"base_url": "http://api.test"}


def test_corrupt_config_reads_empty(focusmode_home):
    focusmode_home.mkdir(parents=True)
    (focusmode_home / "config.json").write_text("{oops")
    assert config.load_config() == {}


def test_base_url_env_override(monkeypatch):
    assert config.base_url({}) == config.DEFAULT_BASE_URL
    assert config.base_url({"base_url": "http://saved.test"}) == "http://saved.test"
    monkeypatch.setenv("FOCUSMODE_BASE_URL", "http://env.test")
    assert config.base_url({"base_url": "http://saved.test"}) == "http://env.test"
