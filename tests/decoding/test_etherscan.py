import asyncio
import json

import pytest
from aiohttp import web

from nethermind.hooklens.config import AnalyzerConfig
from nethermind.hooklens.decoding.etherscan import (
    EtherscanSchemaSource,
    parse_getabi_response,
)
from nethermind.hooklens.exceptions import SchemaResolutionError
from tests.server import serve
from tests.utils import TOKEN_0


def test_parse_verified_abi(erc20_abi):
    response = {"status": "1", "message": "OK", "result": json.dumps(erc20_abi)}

    assert parse_getabi_response(response, TOKEN_0) == erc20_abi


def test_parse_unverified_contract():
    response = {"status": "0", "message": "NOTOK", "result": "Contract source code not verified"}

    assert parse_getabi_response(response, TOKEN_0) is None


def test_parse_empty_abi():
    assert parse_getabi_response({"status": "1", "message": "OK", "result": "[]"}, TOKEN_0) is None


def test_parse_malformed_abi():
    with pytest.raises(SchemaResolutionError):
        parse_getabi_response({"status": "1", "message": "OK", "result": "{not json"}, TOKEN_0)


def _fetch(handler, address: str = TOKEN_0, **config_kwargs):
    async def _run():
        async with serve(handler, "GET") as url:
            source = EtherscanSchemaSource(
                AnalyzerConfig(schema_api_url=url, schema_api_key="test-key", **config_kwargs)
            )
            return await source.fetch_abi(address)

    return asyncio.run(_run())


def test_fetch_abi_from_api(erc20_abi):
    received = {}

    async def handler(request: web.Request) -> web.Response:
        received.update(request.query)
        return web.json_response({"status": "1", "message": "OK", "result": json.dumps(erc20_abi)})

    assert _fetch(handler) == erc20_abi
    assert received["module"] == "contract"
    assert received["action"] == "getabi"
    assert received["apikey"] == "test-key"
    assert received["address"].lower() == TOKEN_0


def test_server_error_returns_none():
    async def handler(request: web.Request) -> web.Response:
        return web.Response(status=503, text="unavailable")

    assert _fetch(handler) is None


def test_timeout_returns_none(erc20_abi):
    async def handler(request: web.Request) -> web.Response:
        await asyncio.sleep(1)
        return web.json_response({"status": "1", "message": "OK", "result": json.dumps(erc20_abi)})

    assert _fetch(handler, schema_timeout=0.1) is None


def test_invalid_address_returns_none():
    async def handler(request: web.Request) -> web.Response:
        raise AssertionError("no request should be sent")

    assert _fetch(handler, address="0x1234") is None


def test_non_object_response_returns_none():
    async def handler(request: web.Request) -> web.Response:
        return web.json_response(["Max rate limit reached"])

    assert _fetch(handler) is None
