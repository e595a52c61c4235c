import asyncio
import logging
from typing import Any

import aiohttp
from aiohttp.client_exceptions import ContentTypeError
from eth_utils import decode_hex

from nethermind.hooklens.config import AnalyzerConfig
from nethermind.hooklens.exceptions import TraceFetchError
from nethermind.hooklens.types import CallNode
from nethermind.hooklens.utils import parse_hex_int

root_logger = logging.getLogger("nethermind")
logger = root_logger.getChild("hooklens").getChild("trace")

DEFAULT_HEADERS = {"Content-Type": "application/json"}

# pylint: disable=raise-missing-from


def _frame_to_node(frame: dict[str, Any], children: tuple[CallNode, ...]) -> CallNode:
    to_address = frame.get("to")
    return CallNode(
        call_type=frame.get("type", "CALL"),
        from_address=(frame.get("from") or "").lower(),
        to_address=to_address.lower() if to_address else None,
        input=decode_hex(frame.get("input") or "0x"),
        output=decode_hex(frame.get("output") or "0x"),
        value=parse_hex_int(frame.get("value")),
        gas_used=parse_hex_int(frame.get("gasUsed")),
        calls=children,
    )


def parse_call_tree(raw_trace: dict[str, Any]) -> CallNode:
    """
    Converts a callTracer response into a tree of CallNodes.  Frames are parsed with an explicit stack, so deeply
    nested traces cannot exhaust the interpreter stack.

    :param raw_trace: Top level frame returned by ``debug_traceTransaction`` with the callTracer
    :return: Root CallNode
    """
    # (frame, parent index) in pre-order
    ordered: list[tuple[dict[str, Any], int]] = []
    stack: list[tuple[dict[str, Any], int]] = [(raw_trace, -1)]
    while stack:
        frame, parent = stack.pop()
        index = len(ordered)
        ordered.append((frame, parent))
        for child in reversed(frame.get("calls") or []):
            stack.append((child, index))

    children: list[list[CallNode]] = [[] for _ in ordered]
    node = None
    for index in range(len(ordered) - 1, -1, -1):
        frame, parent = ordered[index]
        node = _frame_to_node(frame, tuple(reversed(children[index])))
        if parent >= 0:
            children[parent].append(node)

    assert node is not None
    return node


class TraceFetcher:
    """Fetches call trees from a JSON RPC node supporting ``debug_traceTransaction``"""

    json_rpc: str
    timeout: float

    def __init__(self, config: AnalyzerConfig):
        if not config.json_rpc:
            raise TraceFetchError("JSON RPC url not configured.  Set with '--json-rpc' or the JSON_RPC variable")
        self.json_rpc = config.json_rpc
        self.timeout = config.trace_timeout

    def _request(self, transaction_hash: str) -> dict[str, Any]:
        return {
            "jsonrpc": "2.0",
            "id": 1,
            "method": "debug_traceTransaction",
            "params": [transaction_hash, {"tracer": "callTracer", "timeout": f"{int(self.timeout)}s"}],
        }

    async def fetch(self, transaction_hash: str) -> CallNode | None:
        """
        Fetch and parse the call tree of a transaction.

        :param transaction_hash: Validated transaction hash
        :return: Root CallNode, or None if the node returned an empty trace
        :raises TraceFetchError: if the request fails or the node returns an error
        """
        raw_trace = await self._post(self._request(transaction_hash))
        if not raw_trace:
            logger.info(f"Empty trace returned for {transaction_hash}")
            return None

        try:
            return parse_call_tree(raw_trace)
        except (AttributeError, TypeError, ValueError) as e:
            raise TraceFetchError(f"Malformed trace returned for {transaction_hash}: {e}") from e

    async def _post(self, request: dict[str, Any]) -> Any:
        aiohttp_timeout = aiohttp.ClientTimeout(total=self.timeout)
        try:
            async with aiohttp.ClientSession(headers=DEFAULT_HEADERS, timeout=aiohttp_timeout) as session:
                async with session.post(self.json_rpc, json=request) as response:
                    try:
                        response_json = await response.json()
                    except ContentTypeError:
                        raise TraceFetchError(
                            f"Unexpected response from {self.json_rpc} (status {response.status}): "
                            f"{(await response.text())[:200]}"
                        )
        except asyncio.TimeoutError:
            raise TraceFetchError(f"Timeout Error for RPC Host {self.json_rpc}")
        except aiohttp.ClientError as e:
            raise TraceFetchError(f"Could not connect to RPC {self.json_rpc}: {e}")

        if "error" in response_json:
            logger.debug(f"Error in RPC response: {response_json}")
            error = response_json["error"]
            message = error.get("message") if isinstance(error, dict) else error
            raise TraceFetchError(f"Error in RPC response: {message}")

        return response_json.get("result")
