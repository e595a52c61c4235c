import logging
from typing import Any

from eth_utils import from_wei

from nethermind.hooklens.config import HOOK_LIFECYCLE_FUNCTION_NAMES
from nethermind.hooklens.exceptions import DecodingError
from nethermind.hooklens.types import CallNode, CallRole, DecodedCall

from .resolver import InterfaceResolver
from .utils import unknown_function_label

root_logger = logging.getLogger("nethermind")
logger = root_logger.getChild("hooklens").getChild("decoding")


def format_ether(value: int) -> str:
    """
    Formats a wei value as a decimal ether string

    >>> format_ether(1500000000000000000)
    '1.5'
    >>> format_ether(0)
    '0'
    """
    ether = from_wei(value, "ether")
    if isinstance(ether, int):
        return str(ether)
    return format(ether.normalize(), "f")


class CallDecoder:
    """
    Decodes the calldata and return data of trace frames.  Decoding never raises: calls that cannot be decoded
    are labeled with their function selector and returned with empty parameter and return maps.
    """

    def __init__(self, resolver: InterfaceResolver):
        self.resolver = resolver

    async def decode(self, node: CallNode, role: CallRole, depth: int = 0) -> DecodedCall:
        """
        Decode a single call.

        :param node: Trace frame to decode
        :param role: Role of the called contract
        :param depth: Depth of the frame inside the call tree
        """
        schema = await self.resolver.resolve_for_role(node.to_address, role)

        function_name = unknown_function_label(node.input)
        params: dict[str, Any] = {}
        returns: dict[str, Any] = {}

        decoder = schema.get_decoder(node.input) if schema else None
        if decoder is not None:
            try:
                decoded = decoder.decode_input(node.input)
            except DecodingError as e:
                logger.debug(f"Could not decode input of call to {node.to_address}: {e}")
            else:
                function_name = decoded.name
                params = decoded.inputs

                if node.output and decoder.has_outputs:
                    try:
                        returns = decoder.decode_output(node.output)
                    except DecodingError as e:
                        logger.debug(f"Could not decode output of {decoded.function_signature}: {e}")
        elif schema is not None:
            logger.debug(f"Selector of call to {node.to_address} not found in ABI {schema.abi_name}")

        return DecodedCall(
            call_type=node.call_type,
            from_address=node.from_address,
            to_address=node.to_address,
            value=format_ether(node.value),
            gas_used=node.gas_used,
            depth=depth,
            function_name=function_name,
            params=params,
            returns=returns,
            role=role,
            is_hook_lifecycle_event=function_name in HOOK_LIFECYCLE_FUNCTION_NAMES,
        )
