import pytest

from nethermind.hooklens.decoding.resolver import InterfaceResolver
from nethermind.hooklens.trace.detector import HookAddressDetector
from tests.utils import (
    HOOK,
    POOL_MANAGER,
    ROUTER,
    TOKEN_0,
    TOKEN_1,
    initialize_calldata,
    make_node,
    swap_calldata,
)


def _detector(config) -> HookAddressDetector:
    return HookAddressDetector(config, InterfaceResolver(config).manager_schema)


def test_hooks_argument_is_returned_lowercase(config, monkeypatch):
    detector = _detector(config)
    monkeypatch.setattr(detector, "infer_from_call_graph", lambda root: pytest.fail("phase 2 should not run"))
    root = make_node(
        POOL_MANAGER,
        input_data=initialize_calldata(HOOK),
        calls=(make_node(TOKEN_0, from_address=POOL_MANAGER),),
    )

    assert detector.detect(root) == HOOK


def test_manager_call_nested_below_router(config):
    root = make_node(
        ROUTER,
        calls=(
            make_node(TOKEN_0, from_address=ROUTER),
            make_node(POOL_MANAGER, from_address=ROUTER, input_data=initialize_calldata(HOOK)),
        ),
    )

    assert _detector(config).detect(root) == HOOK


def test_hook_data_struct_selects_known_hook_child(known_hook_config):
    root = make_node(
        POOL_MANAGER,
        input_data=swap_calldata(),
        calls=(
            make_node(TOKEN_0, from_address=POOL_MANAGER),
            make_node(HOOK, from_address=POOL_MANAGER),
        ),
    )

    assert _detector(known_hook_config).detect_from_calldata(root) == HOOK


def test_hook_data_struct_without_known_hook(config):
    root = make_node(
        POOL_MANAGER,
        input_data=swap_calldata(),
        calls=(make_node(TOKEN_0, from_address=POOL_MANAGER),),
    )
    detector = _detector(config)

    assert detector.detect_from_calldata(root) is None
    assert detector.detect(root) == TOKEN_0


def test_structural_fallback_uses_first_manager_call(config):
    root = make_node(
        ROUTER,
        calls=(
            make_node(
                POOL_MANAGER,
                from_address=ROUTER,
                input_data=bytes.fromhex("48c89491"),
                calls=(
                    make_node(HOOK.upper().replace("0X", "0x"), from_address=POOL_MANAGER),
                    make_node(TOKEN_1, from_address=POOL_MANAGER),
                ),
            ),
        ),
    )

    assert _detector(config).detect(root) == HOOK


def test_decode_errors_are_ignored(config):
    root = make_node(
        POOL_MANAGER,
        input_data=initialize_calldata(HOOK)[:68],
        calls=(make_node(TOKEN_1, from_address=POOL_MANAGER),),
    )

    assert _detector(config).detect(root) == TOKEN_1


def test_no_hook_detected(config):
    root = make_node(ROUTER, calls=(make_node(TOKEN_0, from_address=ROUTER),))

    assert _detector(config).detect(root) is None
    assert _detector(config).detect(None) is None
