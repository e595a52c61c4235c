import logging
import traceback
from typing import Any

from eth_abi import decode as eth_abi_decode
from eth_abi.exceptions import InsufficientDataBytes, NonEmptyPaddingBytes
from eth_typing import ABI, ABIComponent, ABIFunction
from eth_utils import encode_hex, to_checksum_address

root_logger = logging.getLogger("nethermind")
logger = root_logger.getChild("hooklens").getChild("decoding")


def abi_to_signature(abi: ABIFunction) -> str:
    """
    Converts ABI to signature.

    >>> abi_to_signature({"type": "function", "name": "transfer", "inputs": [
    ...     {"name": "to", "type": "address"}, {"name": "amount", "type": "uint256"}
    ... ]})
    'transfer(address,uint256)'

    """
    collapsed = [collapse_if_tuple(abi_input) for abi_input in abi.get("inputs", [])]
    return f"{abi['name']}({','.join(collapsed)})"


def collapse_if_tuple(abi_params: ABIComponent | dict[str, Any]) -> str:
    """
    Converts a tuple from a dict to a parenthesized list of its types.

    >>> collapse_if_tuple(
    ...     {
    ...         'components': [
    ...             {'name': 'anAddress', 'type': 'address'},
    ...             {'name': 'anInt', 'type': 'uint256'},
    ...             {'name': 'someBytes', 'type': 'bytes'},
    ...         ],
    ...         'type': 'tuple',
    ...     }
    ... )
    '(address,uint256,bytes)'
    """

    typ = abi_params["type"]
    if not isinstance(typ, str):
        raise TypeError(f"The 'type' must be a string, but got {typ} of type {type(typ)}")

    if not typ.startswith("tuple"):
        return typ

    delimited = ",".join(collapse_if_tuple(c) for c in abi_params["components"])  # type: ignore
    # Whatever comes after "tuple" is the array dims.  The ABI spec states that
    # this will have the form "", "[]", or "[k]".
    array_dim = typ[5:]
    return f"({delimited}){array_dim}"


def filter_functions(contract_abi: ABI) -> list[ABIFunction]:
    """Filters out all non-function ABIs"""
    return [
        abi for abi in contract_abi if isinstance(abi, dict) and abi.get("type") == "function"  # type: ignore[misc]
    ]


def unknown_function_label(calldata: bytes) -> str:
    """
    Label used for calls that cannot be decoded.  Includes the 4 byte selector if the calldata contains one

    >>> unknown_function_label(bytes.fromhex("a9059cbb0000"))
    'Unknown (0xa9059cbb...)'
    >>> unknown_function_label(b"")
    'Unknown'
    """
    if len(calldata) < 4:
        return "Unknown"
    return f"Unknown ({encode_hex(calldata[:4])}...)"


def decode_evm_abi_from_types(types: list[str], data: bytes | bytearray) -> tuple[Any, ...] | None:
    """
    Decodes ABI data from types and data bytes.  Properly Handles various decoding errors by logging and
    returning none.

    :param types:
    :param data:
    :return:
    """
    try:
        return eth_abi_decode(types, data)
    except InsufficientDataBytes:
        logger.debug(f"Insufficient data bytes while decoding {data.hex()} for types {types}")
        return None
    except NonEmptyPaddingBytes:
        logger.debug(f"Non-empty padding bytes while decoding {data.hex()} for types {types}")
        return None
    except OverflowError:
        logger.debug(f"Overflow error while decoding {data.hex()} for types {types}")
        return None
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.error(
            f"Unknown error while decoding {data.hex()} for types {types}: "
            f"{traceback.format_exception(type(e), e, e.__traceback__)}"
        )
        return None


def normalize_abi_value(abi_param: ABIComponent | dict[str, Any], value: Any) -> Any:
    """
    Converts a value returned by eth_abi into a JSON safe value.  Integers are converted to decimal strings so
    uint256 values never lose precision, bytes are hex encoded, addresses are checksummed, and tuples are
    converted into dictionaries keyed by their component names.
    """
    typ: str = abi_param["type"]

    if typ.endswith("]"):
        inner_param = {**abi_param, "type": typ[: typ.rindex("[")]}
        return [normalize_abi_value(inner_param, item) for item in value]

    match typ:
        case "tuple":
            components = abi_param.get("components", [])
            return {
                component.get("name") or f"_field{index}": normalize_abi_value(component, item)
                for index, (component, item) in enumerate(zip(components, value, strict=True))
            }
        case "address":
            return to_checksum_address(value)
        case "bool" | "string":
            return value
        case _ if typ.startswith(("uint", "int", "fixed", "ufixed")):
            return str(value)
        case _ if typ.startswith("bytes"):
            return encode_hex(value)
        case _ if isinstance(value, (bytes, bytearray)):
            return encode_hex(value)
        case _:
            return value
