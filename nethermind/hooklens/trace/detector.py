import logging
from typing import Any

from nethermind.hooklens.config import AnalyzerConfig
from nethermind.hooklens.decoding.schema import InterfaceSchema
from nethermind.hooklens.exceptions import DecodingError
from nethermind.hooklens.types import CallNode

from .walker import iter_preorder

root_logger = logging.getLogger("nethermind")
logger = root_logger.getChild("hooklens").getChild("detector")

HOOKS_FIELD = "hooks"
HOOK_DATA_FIELD = "hookData"


def _find_hooks_value(params: list[dict[str, Any]], values: dict[str, Any]) -> str | None:
    """Searches decoded parameters, and the fields of tuple parameters, for an address named ``hooks``"""
    for param in params:
        name = param.get("name")
        if name == HOOKS_FIELD and param["type"] == "address":
            return values[name].lower()
        if param["type"] == "tuple" and isinstance(values.get(name), dict):
            nested = _find_hooks_value(param.get("components", []), values[name])
            if nested:
                return nested
    return None


def _has_hook_data_struct(params: list[dict[str, Any]]) -> bool:
    return any(
        param["type"] == "tuple" and any(c.get("name") == HOOK_DATA_FIELD for c in param.get("components", []))
        for param in params
    )


class HookAddressDetector:
    """
    Heuristically locates the hook contract of a transaction.  Detection runs once per transaction, before any
    call is decoded, and returns at most one lowercase address.

    Phase 1 decodes PoolManager calls and reads the ``hooks`` argument, or, for calls passing a struct with
    ``hookData``, picks the first direct child call targeting a known hook.  Phase 2 assumes the first call made by
    the PoolManager targets the hook.  Neither phase can tell apart a hook from an unrelated contract that matches
    the same pattern.
    """

    def __init__(self, config: AnalyzerConfig, manager_schema: InterfaceSchema):
        self.config = config
        self.manager_schema = manager_schema

    def detect(self, root: CallNode | None) -> str | None:
        """Runs both detection phases, returning the first address found"""
        if root is None:
            return None

        hook_address = self.detect_from_calldata(root)
        if hook_address:
            logger.debug(f"Detected hook {hook_address} from PoolManager calldata")
            return hook_address

        hook_address = self.infer_from_call_graph(root)
        if hook_address:
            logger.debug(f"Inferred hook {hook_address} from first PoolManager outward call")
        return hook_address

    def detect_from_calldata(self, root: CallNode) -> str | None:
        """Phase 1: depth first search for a hook address inside decoded PoolManager calls"""
        for node, _ in iter_preorder(root):
            hook_address = self._check_node(node)
            if hook_address:
                return hook_address
        return None

    def infer_from_call_graph(self, root: CallNode) -> str | None:
        """Phase 2: returns the target of the first call made by the PoolManager"""
        for node, _ in iter_preorder(root):
            if node.from_address.lower() == self.config.manager_address and node.to_address:
                return node.to_address.lower()
        return None

    def _check_node(self, node: CallNode) -> str | None:
        if (node.to_address or "").lower() == self.config.manager_address:
            decoder = self.manager_schema.get_decoder(node.input)
            if decoder is not None:
                try:
                    decoded = decoder.decode_input(node.input)
                except DecodingError as e:
                    logger.debug(f"Could not decode PoolManager call while detecting hook: {e}")
                else:
                    hook_address = _find_hooks_value(decoder.input_params, decoded.inputs)
                    if hook_address:
                        return hook_address

                    # hookData is not decoded, so known hooks called by the PoolManager are used instead
                    if _has_hook_data_struct(decoder.input_params):
                        for child in node.calls:
                            if self.config.is_known_hook(child.to_address):
                                return child.to_address.lower()  # type: ignore[union-attr]

        if node.from_address.lower() == self.config.manager_address and self.config.is_known_hook(node.to_address):
            return node.to_address.lower()  # type: ignore[union-attr]

        return None
