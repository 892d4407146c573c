import pytest

from cardmarketclient.config import credentials_from_env, debug_from_env
from cardmarketclient.errors import ConfigError
from cardmarketclient.signature import Credentials, SignatureEngine

VARIABLES = (
    "APP_TOKEN",
    "APP_SECRET",
    "ACCESS_TOKEN",
    "ACCESS_TOKEN_SECRET",
    "DEBUG",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in VARIABLES:
        monkeypatch.delenv(f"CARDMARKET_{name}", raising=False)
        monkeypatch.delenv(f"MKM_{name}", raising=False)


def test_credentials_from_env(monkeypatch):
    monkeypatch.setenv("CARDMARKET_APP_TOKEN", "key")
    monkeypatch.setenv("CARDMARKET_APP_SECRET", "secret")
    monkeypatch.setenv("CARDMARKET_ACCESS_TOKEN", "token")
    monkeypatch.setenv("CARDMARKET_ACCESS_TOKEN_SECRET", "tokensecret")

    assert credentials_from_env() == Credentials("key", "secret", "token", "tokensecret")


def test_secrets_default_to_empty(monkeypatch):
    monkeypatch.setenv("MKM_APP_TOKEN", "key")
    monkeypatch.setenv("MKM_ACCESS_TOKEN", "token")

    credentials = credentials_from_env(prefix="MKM")

    assert credentials == Credentials("key", "", "token", "")
    assert SignatureEngine.from_credentials(credentials).credentials == credentials


@pytest.mark.parametrize("missing", ["CARDMARKET_APP_TOKEN", "CARDMARKET_ACCESS_TOKEN"])
def test_missing_token(monkeypatch, missing):
    monkeypatch.setenv("CARDMARKET_APP_TOKEN", "key")
    monkeypatch.setenv("CARDMARKET_ACCESS_TOKEN", "token")
    monkeypatch.setenv(missing, "")

    with pytest.raises(ConfigError):
        credentials_from_env()


@pytest.mark.parametrize(
    "value,expected",
    [("1", True), ("true", True), ("YES", True), ("0", False), ("", False)],
)
def test_debug_from_env(monkeypatch, value, expected):
    monkeypatch.setenv("CARDMARKET_DEBUG", value)
    assert debug_from_env() is expected
