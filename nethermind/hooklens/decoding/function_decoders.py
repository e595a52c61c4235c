import logging
from dataclasses import dataclass
from typing import Any

from eth_typing import ABIFunction
from eth_utils import function_signature_to_4byte_selector

from nethermind.hooklens.exceptions import DecodingError

from .utils import (
    abi_to_signature,
    collapse_if_tuple,
    decode_evm_abi_from_types,
    normalize_abi_value,
)

root_logger = logging.getLogger("nethermind")
logger = root_logger.getChild("hooklens").getChild("decoding")


@dataclass(frozen=True)
class DecodedFunction:
    """Function Decoding Result"""

    abi_name: str
    name: str
    function_signature: str

    inputs: dict[str, Any]


class EVMFunctionDecoder:
    """
    Represents a single EVM function selector.  Parses input & output types to efficiently decode
    calldata and return data of trace frames calling this selector
    """

    name: str
    abi_name: str
    function_signature: str
    signature: bytes

    _abi_function: ABIFunction
    _input_types: list[str]
    _output_types: list[str]

    def __init__(self, abi_function: ABIFunction, abi_name: str):
        self.abi_name = abi_name
        self.name = abi_function["name"]
        self._abi_function = abi_function

        self._input_types = [collapse_if_tuple(param) for param in abi_function.get("inputs", [])]
        self._output_types = [collapse_if_tuple(param) for param in abi_function.get("outputs", [])]

        self.function_signature = abi_to_signature(abi_function)
        self.signature = function_signature_to_4byte_selector(self.function_signature)

    @property
    def input_params(self) -> list[dict[str, Any]]:
        """ABI input parameters in declaration order"""
        return list(self._abi_function.get("inputs", []))  # type: ignore[arg-type]

    @property
    def output_params(self) -> list[dict[str, Any]]:
        """ABI output parameters in declaration order"""
        return list(self._abi_function.get("outputs", []))  # type: ignore[arg-type]

    @property
    def has_outputs(self) -> bool:
        """True if the function declares return values"""
        return len(self._output_types) > 0

    def decode_input(self, calldata: bytes) -> DecodedFunction:
        """
        Decodes calldata, including the 4 byte selector, into a dictionary of parameter names to values.

        :param calldata: Full calldata of the call
        :raises DecodingError: if the selector does not match or the data is malformed
        """
        if calldata[:4] != self.signature:
            raise DecodingError(
                f"Selector 0x{calldata[:4].hex()} does not match {self.function_signature} in ABI {self.abi_name}"
            )

        decoded_input = decode_evm_abi_from_types(self._input_types, calldata[4:])
        if decoded_input is None:
            raise DecodingError(f"Error Decoding {self.function_signature} For Input 0x{calldata.hex()}")

        return DecodedFunction(
            abi_name=self.abi_name,
            name=self.name,
            function_signature=self.function_signature,
            inputs=self._name_values(self.input_params, decoded_input, "_input"),
        )

    def decode_output(self, result: bytes) -> dict[str, Any]:
        """
        Decodes the return data of a call.  Unnamed return values are keyed as ``_output{index}``

        :param result: Return data of the call
        :raises DecodingError: if the data is malformed
        """
        decoded_output = decode_evm_abi_from_types(self._output_types, result)
        if decoded_output is None:
            raise DecodingError(f"Error Decoding {self.function_signature} for Function Result 0x{result.hex()}")

        return self._name_values(self.output_params, decoded_output, "_output")

    @staticmethod
    def _name_values(params: list[dict[str, Any]], values: tuple[Any, ...], prefix: str) -> dict[str, Any]:
        return {
            param.get("name") or f"{prefix}{index}": normalize_abi_value(param, value)
            for index, (param, value) in enumerate(zip(params, values, strict=True))
        }

    def id_str(self, full_signature: bool = True) -> str:
        """
        Returns ID string for function.  If full_signature is True, returns the function name & parameter types.
        If full_signature is false, returns function name
        """
        if full_signature:
            return self.function_signature
        return self.name
