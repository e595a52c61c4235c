import random

import pytest
from eth_utils import to_checksum_address

from nethermind.hooklens.config import AnalyzerConfig

from tests.utils import HOOK

ERC20_ABI = [
    {
        "type": "function",
        "name": "transfer",
        "inputs": [{"name": "to", "type": "address"}, {"name": "amount", "type": "uint256"}],
        "outputs": [{"name": "", "type": "bool"}],
        "stateMutability": "nonpayable",
    },
    {
        "type": "function",
        "name": "balanceOf",
        "inputs": [{"name": "account", "type": "address"}],
        "outputs": [{"name": "balance", "type": "uint256"}],
        "stateMutability": "view",
    },
    {
        "type": "event",
        "name": "Transfer",
        "anonymous": False,
        "inputs": [
            {"name": "from", "type": "address", "indexed": True},
            {"name": "to", "type": "address", "indexed": True},
            {"name": "value", "type": "uint256", "indexed": False},
        ],
    },
]


@pytest.fixture(name="random_address")
def fixture_random_address():
    def _generate_random_address():
        return to_checksum_address(random.randbytes(20).hex())

    return _generate_random_address


@pytest.fixture(name="config")
def fixture_config() -> AnalyzerConfig:
    return AnalyzerConfig(json_rpc="http://localhost:8545", schema_lookup_enabled=True)


@pytest.fixture(name="known_hook_config")
def fixture_known_hook_config() -> AnalyzerConfig:
    return AnalyzerConfig(json_rpc="http://localhost:8545", known_hooks={HOOK.upper().replace("0X", "0x"): "TestHook"})


@pytest.fixture(name="erc20_abi")
def fixture_erc20_abi() -> list[dict]:
    return ERC20_ABI
