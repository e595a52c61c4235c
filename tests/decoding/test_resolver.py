import asyncio

from nethermind.hooklens.config import AnalyzerConfig
from nethermind.hooklens.decoding.resolver import InterfaceResolver, SchemaCache
from nethermind.hooklens.decoding.schema import InterfaceSchema
from nethermind.hooklens.types import CallRole
from tests.utils import HOOK, POOL_MANAGER, TOKEN_0, FakeSchemaSource


def test_manager_resolves_from_static_registry(config):
    source = FakeSchemaSource()
    resolver = InterfaceResolver(config, schema_source=source)

    schema = asyncio.run(resolver.resolve(POOL_MANAGER.upper().replace("0X", "0x")))

    assert schema is resolver.manager_schema
    assert schema.get_function("initialize") is not None
    assert source.requests == []


def test_remote_schema_is_cached(config, erc20_abi):
    source = FakeSchemaSource({TOKEN_0: erc20_abi})
    resolver = InterfaceResolver(config, schema_source=source)

    first = asyncio.run(resolver.resolve(TOKEN_0))
    second = asyncio.run(resolver.resolve(TOKEN_0))

    assert first is second
    assert source.requests == [TOKEN_0]
    assert TOKEN_0 in resolver.cache


def test_missing_schema_is_not_cached(config):
    source = FakeSchemaSource()
    resolver = InterfaceResolver(config, schema_source=source)

    assert asyncio.run(resolver.resolve(TOKEN_0)) is None
    assert asyncio.run(resolver.resolve(TOKEN_0)) is None
    assert len(source.requests) == 2
    assert len(resolver.cache) == 0


def test_unusable_remote_abi_resolves_to_none(config, erc20_abi):
    events_only = [item for item in erc20_abi if item["type"] == "event"]
    resolver = InterfaceResolver(config, schema_source=FakeSchemaSource({TOKEN_0: events_only}))

    assert asyncio.run(resolver.resolve(TOKEN_0)) is None


def test_hook_role_falls_back_to_hook_interface(config):
    resolver = InterfaceResolver(config, schema_source=FakeSchemaSource())

    hook_schema = asyncio.run(resolver.resolve_for_role(HOOK, CallRole.hook))
    external_schema = asyncio.run(resolver.resolve_for_role(HOOK, CallRole.external))

    assert hook_schema is resolver.hook_schema
    assert hook_schema.get_function("beforeSwap") is not None
    assert external_schema is None


def test_verified_hook_abi_takes_precedence(config, erc20_abi):
    resolver = InterfaceResolver(config, schema_source=FakeSchemaSource({HOOK: erc20_abi}))

    schema = asyncio.run(resolver.resolve_for_role(HOOK, CallRole.hook))

    assert schema is not resolver.hook_schema
    assert schema.get_function("transfer") is not None


def test_remote_lookup_disabled(erc20_abi):
    source = FakeSchemaSource({TOKEN_0: erc20_abi})
    resolver = InterfaceResolver(AnalyzerConfig(schema_lookup_enabled=False), schema_source=source)

    assert asyncio.run(resolver.resolve(TOKEN_0)) is None
    assert source.requests == []


def test_missing_address_is_not_resolved(config):
    source = FakeSchemaSource()
    resolver = InterfaceResolver(config, schema_source=source)

    assert asyncio.run(resolver.resolve(None)) is None
    assert source.requests == []


def test_cache_insert_is_idempotent(erc20_abi):
    cache = SchemaCache()
    first = InterfaceSchema("first", erc20_abi)
    second = InterfaceSchema("second", erc20_abi)

    assert cache.put(TOKEN_0, first) is first
    assert cache.put(TOKEN_0.upper().replace("0X", "0x"), second) is first
    assert cache.get(TOKEN_0) is first


def test_cache_shared_between_resolvers(config, erc20_abi):
    cache = SchemaCache()
    source = FakeSchemaSource({TOKEN_0: erc20_abi})

    asyncio.run(InterfaceResolver(config, schema_source=source, cache=cache).resolve(TOKEN_0))
    asyncio.run(InterfaceResolver(config, schema_source=source, cache=cache).resolve(TOKEN_0))

    assert source.requests == [TOKEN_0]


def test_human_readable_abi_resolves_to_none(config):
    source = FakeSchemaSource({TOKEN_0: ["function transfer(address,uint256)"]})
    resolver = InterfaceResolver(config, schema_source=source)

    assert asyncio.run(resolver.resolve(TOKEN_0)) is None
    assert TOKEN_0 not in resolver.cache


def test_resolver_without_schema_source(config):
    resolver = InterfaceResolver(config)

    assert asyncio.run(resolver.resolve(TOKEN_0)) is None
    assert asyncio.run(resolver._from_remote(TOKEN_0)) is None  # pylint: disable=protected-access
