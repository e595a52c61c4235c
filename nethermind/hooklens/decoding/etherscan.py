import asyncio
import json
import logging
from typing import Any

import aiohttp
from aiohttp.client_exceptions import ContentTypeError
from eth_utils import to_checksum_address

from nethermind.hooklens.config import AnalyzerConfig
from nethermind.hooklens.exceptions import SchemaResolutionError

root_logger = logging.getLogger("nethermind")
logger = root_logger.getChild("hooklens").getChild("decoding").getChild("etherscan")

DEFAULT_HEADERS = {"Content-Type": "application/json"}

# pylint: disable=raise-missing-from


def parse_getabi_response(response_json: dict[str, Any], address: str) -> list[dict[str, Any]] | None:
    """
    Parses the response of an Etherscan compatible ``getabi`` query.

    :param response_json: JSON body of the API response
    :param address: Address the ABI was requested for, used for logging
    :return: ABI as a list of dictionaries, or None if the contract has no verified ABI
    :raises SchemaResolutionError: if the ABI returned by the API is not valid JSON
    """
    if response_json.get("status") != "1" or not response_json.get("result"):
        logger.debug(f"No ABI available for {address}: {response_json.get('result') or response_json.get('message')}")
        return None

    try:
        abi = json.loads(response_json["result"])
    except (TypeError, json.JSONDecodeError):
        raise SchemaResolutionError(f"ABI returned for {address} is not valid JSON")

    if not isinstance(abi, list) or len(abi) == 0:
        logger.debug(f"Empty ABI returned for {address}")
        return None

    return abi


class EtherscanSchemaSource:
    """
    Fetches verified contract ABIs from an Etherscan compatible block explorer API.  Every failure mode is
    reported as a missing ABI, so lookups never interrupt the decoding of a trace.
    """

    api_url: str
    api_key: str | None
    timeout: float

    def __init__(self, config: AnalyzerConfig):
        self.api_url = config.schema_api_url
        self.api_key = config.schema_api_key
        self.timeout = config.schema_timeout

    async def fetch_abi(self, address: str) -> list[dict[str, Any]] | None:
        """
        Fetch the ABI for an address.  Returns None if the contract is unverified, the API responds with an error,
        or the request times out.
        """
        try:
            return await self._query_abi(address)
        except SchemaResolutionError as e:
            logger.warning(f"ABI lookup for {address} failed: {e}")
            return None

    async def _query_abi(self, address: str) -> list[dict[str, Any]] | None:
        try:
            checksum_address = to_checksum_address(address)
        except ValueError:
            raise SchemaResolutionError(f"Invalid address {address}")

        params = {"module": "contract", "action": "getabi", "address": checksum_address}
        if self.api_key:
            params["apikey"] = self.api_key

        aiohttp_timeout = aiohttp.ClientTimeout(total=self.timeout)
        try:
            async with aiohttp.ClientSession(headers=DEFAULT_HEADERS, timeout=aiohttp_timeout) as session:
                async with session.get(self.api_url, params=params) as response:
                    if response.status != 200:
                        raise SchemaResolutionError(f"Unexpected Response Status Code ({response.status})")
                    try:
                        response_json = await response.json()
                    except (ContentTypeError, json.JSONDecodeError):
                        raise SchemaResolutionError("Response is not JSON")
                    if not isinstance(response_json, dict):
                        raise SchemaResolutionError(f"Unexpected response body: {str(response_json)[:200]}")
        except asyncio.TimeoutError:
            raise SchemaResolutionError(f"Timed out after {self.timeout} seconds")
        except aiohttp.ClientError as e:
            raise SchemaResolutionError(f"{e.__class__.__name__}: {e}")

        return parse_getabi_response(response_json, checksum_address)
