import logging
from typing import Any

from eth_typing import ABI

from nethermind.hooklens.exceptions import DecodingError

from .function_decoders import EVMFunctionDecoder
from .utils import filter_functions

root_logger = logging.getLogger("nethermind")
logger = root_logger.getChild("hooklens").getChild("decoding")


class InterfaceSchema:
    """
    Set of function decoders for a single contract interface, keyed by 4 byte selector.  Schemas are immutable
    once constructed, and can be safely shared between concurrent analyses.
    """

    abi_name: str
    """ Name of the ABI, or the address the ABI was fetched for """

    function_decoders: dict[bytes, EVMFunctionDecoder]
    """ Dictionary mapping function selectors to decoders """

    def __init__(self, abi_name: str, abi_data: ABI | list[dict[str, Any]]):
        self.abi_name = abi_name
        self.function_decoders = {}

        for abi_function in filter_functions(abi_data):  # type: ignore[arg-type]
            decoder = EVMFunctionDecoder(abi_function, abi_name)
            if decoder.signature in self.function_decoders:
                logger.debug(
                    f"Duplicate selector 0x{decoder.signature.hex()} in ABI {abi_name}.  "
                    f"Keeping {self.function_decoders[decoder.signature].function_signature}"
                )
                continue
            self.function_decoders[decoder.signature] = decoder

        if not self.function_decoders:
            raise DecodingError(f"ABI {abi_name} does not define any functions")

        logger.debug(f"Loaded {len(self.function_decoders)} functions for ABI {abi_name}")

    def __repr__(self) -> str:
        return f"InterfaceSchema({self.abi_name!r}, functions={len(self.function_decoders)})"

    def get_decoder(self, calldata: bytes) -> EVMFunctionDecoder | None:
        """Returns the decoder for the selector of the calldata, or None if the selector is not in the ABI"""
        if len(calldata) < 4:
            return None
        return self.function_decoders.get(bytes(calldata[:4]))

    def get_function(self, name: str) -> EVMFunctionDecoder | None:
        """Returns the first decoder with the given function name"""
        for decoder in self.function_decoders.values():
            if decoder.name == name:
                return decoder
        return None

    def get_all_decoded_functions(self, full_signature: bool = True) -> list[str]:
        """Returns a list of all function signatures"""
        return [decoder.id_str(full_signature) for decoder in self.function_decoders.values()]
