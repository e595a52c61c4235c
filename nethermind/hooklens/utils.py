import re

from nethermind.hooklens.exceptions import InvalidTransactionHash

TRANSACTION_HASH_PATTERN = re.compile(r"^0x[0-9a-fA-F]{64}$")
ADDRESS_PATTERN = re.compile(r"^0x[0-9a-fA-F]{40}$")


def validate_transaction_hash(transaction_hash: str) -> str:
    """
    Checks that a transaction hash is a 0x prefixed, 66 character hex string.

    >>> validate_transaction_hash("0x" + "Ab" * 32)
    '0xabababababababababababababababababababababababababababababababab'

    :param transaction_hash: hash to validate
    :return: lowercase transaction hash
    :raises InvalidTransactionHash: if the hash is malformed
    """
    if not isinstance(transaction_hash, str) or not TRANSACTION_HASH_PATTERN.match(transaction_hash):
        raise InvalidTransactionHash(
            f"Invalid transaction hash {transaction_hash!r}.  Must be a 0x-prefixed 66-character hex string"
        )
    return transaction_hash.lower()


def is_hex_address(address: str | None) -> bool:
    """
    Returns True if the value is a 0x prefixed, 20 byte hex address

    >>> is_hex_address("0x1f98400000000000000000000000000000000004")
    True
    >>> is_hex_address("0x1f984")
    False
    """
    return isinstance(address, str) and ADDRESS_PATTERN.match(address) is not None


def parse_hex_int(value: str | int | None) -> int:
    """
    Parses the hex quantities returned by JSON RPC nodes

    >>> parse_hex_int("0x1a")
    26
    >>> parse_hex_int(None)
    0
    """
    if value is None or value == "":
        return 0
    if isinstance(value, int):
        return value
    if value.startswith(("0x", "0X")):
        return int(value, 16)
    return int(value)
