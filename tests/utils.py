from typing import Any

from eth_abi import encode
from eth_utils import function_signature_to_4byte_selector

from nethermind.hooklens.types import CallNode

POOL_MANAGER = "0x1f98400000000000000000000000000000000004"
ROUTER = "0x66a9893cc07d91d95644aedd05d03f95e1dba8af"
SENDER = "0xd8da6bf26964af9d7eed9e03e53415d37aa96045"
TOKEN_0 = "0x078d782b760474a361dda0af3839290b0ef57ad6"
TOKEN_1 = "0x4200000000000000000000000000000000000006"

# low bits 0x081 -> beforeSwap (bit 0) and beforeInitialize (bit 7)
HOOK = "0x7f2a9c0d1e3b4a5c6d7e8f90a1b2c3d4e5f60081"

TX_HASH = "0x" + "ab" * 32

SWAP_PARAMS_TYPE = "(address,bool,int256,uint160,bytes,uint256,bytes,bytes)"
POOL_KEY_TYPE = "(address,address,uint24,int24,bytes32)"


def encode_call(function_name: str, types: list[str], values: list[Any]) -> bytes:
    """ABI encodes calldata, including the 4 byte selector"""
    selector = function_signature_to_4byte_selector(f"{function_name}({','.join(types)})")
    return selector + encode(types, values)


def initialize_calldata(hooks: str = HOOK) -> bytes:
    return encode_call(
        "initialize",
        ["address", "address", "uint24", "int24", "address"],
        [TOKEN_0, TOKEN_1, 3000, 60, hooks],
    )


def swap_params(pool: str = TOKEN_0, hook_data: bytes = b"\x01\x02") -> tuple:
    return (pool, True, -(10**18), 2**96, hook_data, 0, b"", b"")


def swap_calldata(hook_data: bytes = b"\x01\x02") -> bytes:
    return encode_call("swap", [SWAP_PARAMS_TYPE], [swap_params(hook_data=hook_data)])


def make_node(
    to_address: str | None,
    from_address: str = SENDER,
    input_data: bytes = b"",
    output_data: bytes = b"",
    calls: tuple[CallNode, ...] = (),
    value: int = 0,
    gas_used: int = 21000,
    call_type: str = "CALL",
) -> CallNode:
    return CallNode(
        call_type=call_type,
        from_address=from_address,
        to_address=to_address,
        input=input_data,
        output=output_data,
        value=value,
        gas_used=gas_used,
        calls=calls,
    )


class FakeSchemaSource:
    """In memory schema source that records every lookup"""

    def __init__(self, abis: dict[str, list[dict[str, Any]]] | None = None):
        self.abis = {address.lower(): abi for address, abi in (abis or {}).items()}
        self.requests: list[str] = []

    async def fetch_abi(self, address: str) -> list[dict[str, Any]] | None:
        self.requests.append(address)
        return self.abis.get(address.lower())


class FakeTraceSource:
    """In memory trace source returning a fixed root node, or raising a fixed error"""

    def __init__(self, root: CallNode | None = None, error: Exception | None = None):
        self.root = root
        self.error = error
        self.requests: list[str] = []

    async def fetch(self, transaction_hash: str) -> CallNode | None:
        self.requests.append(transaction_hash)
        if self.error is not None:
            raise self.error
        return self.root
