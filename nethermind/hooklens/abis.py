"""
Static ABIs for the PoolManager and the hook lifecycle interface.  The hook interface is used to decode calls to a
hook contract that has no verified ABI on the block explorer.
"""
from typing import Any

from eth_typing import ABI, ABIFunction

POOL_MANAGER_ABI_NAME = "PoolManager"
HOOK_INTERFACE_ABI_NAME = "IHooks"


def _param(name: str, typ: str) -> dict[str, Any]:
    return {"name": name, "type": typ}


def _tuple(name: str, components: list[dict[str, Any]]) -> dict[str, Any]:
    return {"name": name, "type": "tuple", "components": components}


def _function(name: str, inputs: list[dict[str, Any]], outputs: list[dict[str, Any]]) -> ABIFunction:
    return {  # type: ignore[return-value]
        "type": "function",
        "name": name,
        "inputs": inputs,
        "outputs": outputs,
        "stateMutability": "nonpayable",
    }


SWAP_PARAMS = [
    _param("pool", "address"),
    _param("zeroForOne", "bool"),
    _param("amountSpecified", "int256"),
    _param("sqrtPriceLimitX96", "uint160"),
    _param("hookData", "bytes"),
    _param("flash", "uint256"),
    _param("permitOptions", "bytes"),
    _param("collectOptions", "bytes"),
]

MODIFY_LIQUIDITY_PARAMS = [
    _param("pool", "address"),
    _param("tickLower", "int24"),
    _param("tickUpper", "int24"),
    _param("liquidityDelta", "int256"),
    _param("hookData", "bytes"),
    _param("usePermit", "bool"),
    _param("permitOptions", "bytes"),
]

DONATE_PARAMS = [
    _param("pool", "address"),
    _param("amount0", "uint256"),
    _param("amount1", "uint256"),
    _param("hookData", "bytes"),
]

POOL_KEY = [
    _param("currency0", "address"),
    _param("currency1", "address"),
    _param("fee", "uint24"),
    _param("tickSpacing", "int24"),
    _param("salt", "bytes32"),
]

POOL_MANAGER_ABI: ABI = [
    _function(
        "initialize",
        [
            _param("currency0", "address"),
            _param("currency1", "address"),
            _param("fee", "uint24"),
            _param("tickSpacing", "int24"),
            _param("hooks", "address"),
        ],
        [_param("pool", "address")],
    ),
    _function(
        "swap",
        [_tuple("params", SWAP_PARAMS)],
        [
            _param("amount0Delta", "int256"),
            _param("amount1Delta", "int256"),
            _param("sqrtPriceX96", "uint160"),
            _param("liquidity", "uint256"),
            _param("tick", "int24"),
        ],
    ),
    _function(
        "modifyLiquidity",
        [_tuple("params", MODIFY_LIQUIDITY_PARAMS)],
        [_param("amount0", "int256"), _param("amount1", "int256")],
    ),
    _function(
        "donate",
        DONATE_PARAMS,
        [_param("actualAmount0", "int256"), _param("actualAmount1", "int256")],
    ),
    _function(
        "collect",
        [
            _tuple(
                "params",
                [
                    _param("pool", "address"),
                    _param("tickLower", "int24"),
                    _param("tickUpper", "int24"),
                    _param("amount0", "uint128"),
                    _param("amount1", "uint128"),
                ],
            )
        ],
        [_param("actualAmount0", "uint256"), _param("actualAmount1", "uint256")],
    ),
]

_SELECTOR_RETURN = [_param("", "bytes4")]

HOOK_INTERFACE_ABI: ABI = [
    _function(
        "beforeInitialize",
        [
            _param("sender", "address"),
            _tuple("poolKey", POOL_KEY),
            _param("sqrtPriceX96", "uint160"),
            _param("hookData", "bytes"),
        ],
        _SELECTOR_RETURN,
    ),
    _function(
        "afterInitialize",
        [
            _param("sender", "address"),
            _tuple("poolKey", POOL_KEY),
            _param("sqrtPriceX96", "uint160"),
            _param("amount0Delta", "int256"),
            _param("amount1Delta", "int256"),
            _param("hookData", "bytes"),
        ],
        _SELECTOR_RETURN,
    ),
    _function(
        "beforeAddLiquidity",
        [_param("sender", "address"), _tuple("params", MODIFY_LIQUIDITY_PARAMS)],
        _SELECTOR_RETURN,
    ),
    _function(
        "afterAddLiquidity",
        [_param("sender", "address"), _tuple("params", MODIFY_LIQUIDITY_PARAMS)],
        _SELECTOR_RETURN,
    ),
    _function(
        "beforeRemoveLiquidity",
        [_param("sender", "address"), _tuple("params", MODIFY_LIQUIDITY_PARAMS)],
        _SELECTOR_RETURN,
    ),
    _function(
        "afterRemoveLiquidity",
        [_param("sender", "address"), _tuple("params", MODIFY_LIQUIDITY_PARAMS)],
        _SELECTOR_RETURN,
    ),
    _function(
        "beforeSwap",
        [_param("sender", "address"), _tuple("params", SWAP_PARAMS)],
        [_param("lpFeeOverride", "uint256")],
    ),
    _function(
        "afterSwap",
        [
            _param("sender", "address"),
            _tuple("params", SWAP_PARAMS),
            _param("amount0Delta", "int256"),
            _param("amount1Delta", "int256"),
        ],
        [_param("hookDelta", "bytes4")],
    ),
    _function(
        "beforeDonate",
        [_param("sender", "address"), _tuple("params", DONATE_PARAMS)],
        _SELECTOR_RETURN,
    ),
    _function(
        "afterDonate",
        [
            _param("sender", "address"),
            _tuple("params", DONATE_PARAMS),
            _param("actualAmount0", "int256"),
            _param("actualAmount1", "int256"),
        ],
        _SELECTOR_RETURN,
    ),
]
