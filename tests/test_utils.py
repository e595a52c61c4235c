import pytest

from nethermind.hooklens.config import AnalyzerConfig
from nethermind.hooklens.exceptions import InvalidTransactionHash
from nethermind.hooklens.utils import parse_hex_int, validate_transaction_hash
from tests.utils import HOOK, TX_HASH


def test_validate_transaction_hash():
    assert validate_transaction_hash(TX_HASH.upper().replace("0X", "0x")) == TX_HASH


@pytest.mark.parametrize(
    "transaction_hash",
    ["", "0x1234", "ab" * 33, "0x" + "ab" * 33, "0x" + "zz" * 32, "0X" + "ab" * 32],
)
def test_invalid_transaction_hashes(transaction_hash):
    with pytest.raises(InvalidTransactionHash):
        validate_transaction_hash(transaction_hash)


def test_parse_hex_int():
    assert parse_hex_int("0x0") == 0
    assert parse_hex_int("0xff") == 255
    assert parse_hex_int("42") == 42
    assert parse_hex_int(7) == 7
    assert parse_hex_int(None) == 0


def test_config_normalizes_addresses():
    config = AnalyzerConfig(
        manager_address="0x1F98400000000000000000000000000000000004",
        known_hooks={HOOK.upper().replace("0X", "0x"): "Hook"},
    )

    assert config.manager_address == "0x1f98400000000000000000000000000000000004"
    assert config.is_known_hook(HOOK)
    assert not config.is_known_hook(None)


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("JSON_RPC", "http://node:8545")
    monkeypatch.setenv("API_KEY", "secret")
    monkeypatch.delenv("SCHEMA_API_URL", raising=False)

    config = AnalyzerConfig.from_env(schema_timeout=3.0)

    assert config.json_rpc == "http://node:8545"
    assert config.schema_api_key == "secret"
    assert config.schema_api_url == "https://api.uniscan.xyz/api"
    assert config.schema_timeout == 3.0
