import logging
import threading
from typing import Awaitable, Callable

from nethermind.hooklens.abis import (
    HOOK_INTERFACE_ABI,
    HOOK_INTERFACE_ABI_NAME,
    POOL_MANAGER_ABI,
    POOL_MANAGER_ABI_NAME,
)
from nethermind.hooklens.config import AnalyzerConfig
from nethermind.hooklens.exceptions import DecodingError
from nethermind.hooklens.types import CallRole

from .base import SchemaSource
from .schema import InterfaceSchema

root_logger = logging.getLogger("nethermind")
logger = root_logger.getChild("hooklens").getChild("resolver")

ResolutionStrategy = Callable[[str], Awaitable[InterfaceSchema | None]]


class SchemaCache:
    """
    Thread safe cache of resolved schemas.  Inserts are idempotent, so concurrent resolutions of the same address
    keep the first stored schema.
    """

    def __init__(self):
        self._schemas: dict[str, InterfaceSchema] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._schemas)

    def __contains__(self, address: str) -> bool:
        with self._lock:
            return address.lower() in self._schemas

    def get(self, address: str) -> InterfaceSchema | None:
        """Returns the cached schema for an address"""
        with self._lock:
            return self._schemas.get(address.lower())

    def put(self, address: str, schema: InterfaceSchema) -> InterfaceSchema:
        """Caches the schema for an address, returning the schema that is stored after the insert"""
        with self._lock:
            return self._schemas.setdefault(address.lower(), schema)


class InterfaceResolver:
    """
    Resolves the ABI used to decode calls to a contract address.  Resolution strategies are tried in order, and
    the first strategy returning a schema wins:

        1. Static registry of the PoolManager ABI
        2. Process wide cache of previously fetched ABIs
        3. Remote lookup through a :class:`SchemaSource`.  Successful lookups are cached permanently

    If every strategy fails for a contract classified as a Hook, the static hook lifecycle interface is used.
    """

    config: AnalyzerConfig
    hook_schema: InterfaceSchema
    """ Fixed IHooks schema, used when a hook contract has no verified ABI """

    cache: SchemaCache

    def __init__(
        self,
        config: AnalyzerConfig,
        schema_source: SchemaSource | None = None,
        cache: SchemaCache | None = None,
    ):
        self.config = config
        self.schema_source = schema_source
        self.cache = cache if cache is not None else SchemaCache()

        self.hook_schema = InterfaceSchema(HOOK_INTERFACE_ABI_NAME, HOOK_INTERFACE_ABI)
        self.static_registry: dict[str, InterfaceSchema] = {
            config.manager_address: InterfaceSchema(POOL_MANAGER_ABI_NAME, POOL_MANAGER_ABI),
        }

        self.strategies: list[ResolutionStrategy] = [self._from_registry, self._from_cache]
        if schema_source is not None and config.schema_lookup_enabled:
            self.strategies.append(self._from_remote)

    @property
    def manager_schema(self) -> InterfaceSchema:
        """Static schema of the PoolManager"""
        return self.static_registry[self.config.manager_address]

    async def resolve(self, address: str | None) -> InterfaceSchema | None:
        """
        Resolve the schema for a contract address.

        :param address: Contract address.  None for contract creations without a target
        :return: Schema, or None if no strategy could resolve the address
        """
        if not address:
            return None

        address = address.lower()
        for strategy in self.strategies:
            schema = await strategy(address)
            if schema is not None:
                return schema

        logger.debug(f"No schema resolved for {address}")
        return None

    async def resolve_for_role(self, address: str | None, role: CallRole) -> InterfaceSchema | None:
        """Resolve the schema for an address, falling back to the hook interface for calls to hooks"""
        schema = await self.resolve(address)
        if schema is None and role == CallRole.hook:
            logger.debug(f"Using {HOOK_INTERFACE_ABI_NAME} interface to decode hook {address}")
            return self.hook_schema
        return schema

    async def _from_registry(self, address: str) -> InterfaceSchema | None:
        return self.static_registry.get(address)

    async def _from_cache(self, address: str) -> InterfaceSchema | None:
        return self.cache.get(address)

    async def _from_remote(self, address: str) -> InterfaceSchema | None:
        if self.schema_source is None:
            return None

        abi = await self.schema_source.fetch_abi(address)
        if abi is None:
            return None

        try:
            schema = InterfaceSchema(address, abi)
        except (DecodingError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"ABI fetched for {address} could not be loaded: {e}")
            return None

        logger.info(f"Fetched and cached ABI for {address}")
        return self.cache.put(address, schema)
