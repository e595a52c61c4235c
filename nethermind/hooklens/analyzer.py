import asyncio
import logging
from typing import Sequence

from nethermind.hooklens.config import AnalyzerConfig
from nethermind.hooklens.decoding.base import SchemaSource
from nethermind.hooklens.decoding.call_decoder import CallDecoder
from nethermind.hooklens.decoding.etherscan import EtherscanSchemaSource
from nethermind.hooklens.decoding.resolver import InterfaceResolver, SchemaCache
from nethermind.hooklens.exceptions import TraceFetchError
from nethermind.hooklens.permissions import PermissionDecoder
from nethermind.hooklens.trace.base import TraceSource
from nethermind.hooklens.trace.classifier import CallTypeClassifier
from nethermind.hooklens.trace.detector import HookAddressDetector
from nethermind.hooklens.trace.fetcher import TraceFetcher
from nethermind.hooklens.trace.walker import TraceWalker
from nethermind.hooklens.types import AnalysisResult
from nethermind.hooklens.utils import validate_transaction_hash

root_logger = logging.getLogger("nethermind")
logger = root_logger.getChild("hooklens").getChild("analyzer")


class TraceAnalyzer:
    """
    Analyzes the call trace of Uniswap V4 transactions.  For each transaction, the hook contract is detected,
    every call in the trace is decoded, and the hook permissions are read from the hook address.

    The schema cache is shared by every analysis run through the same analyzer, while detected hooks, decoded
    calls and permissions are local to each transaction.
    """

    config: AnalyzerConfig

    def __init__(
        self,
        config: AnalyzerConfig,
        trace_source: TraceSource | None = None,
        schema_source: SchemaSource | None = None,
        schema_cache: SchemaCache | None = None,
    ):
        self.config = config
        self.trace_source = trace_source if trace_source is not None else TraceFetcher(config)

        if schema_source is None and config.schema_lookup_enabled:
            schema_source = EtherscanSchemaSource(config)

        self.resolver = InterfaceResolver(config, schema_source=schema_source, cache=schema_cache)
        self.classifier = CallTypeClassifier(config)
        self.detector = HookAddressDetector(config, self.resolver.manager_schema)
        self.walker = TraceWalker(self.classifier, CallDecoder(self.resolver))
        self.permission_decoder = PermissionDecoder(config)

    async def analyze(self, transaction_hash: str) -> AnalysisResult:
        """
        Analyze a single transaction.

        :param transaction_hash: 0x prefixed transaction hash
        :raises InvalidTransactionHash: if the hash is malformed.  Raised before any request is made
        :raises TraceFetchError: if the trace cannot be fetched
        """
        transaction_hash = validate_transaction_hash(transaction_hash)
        logger.info(f"Tracing transaction {transaction_hash}")

        try:
            root = await self.trace_source.fetch(transaction_hash)
        except TraceFetchError:
            logger.error(f"Failed to fetch trace for {transaction_hash}")
            raise
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error(f"Failed to fetch trace for {transaction_hash}: {e}")
            raise TraceFetchError(f"Trace failed: {e}") from e

        hook_address = self.detector.detect(root)
        decoded_calls = await self.walker.walk(root, hook_address)
        permissions = self.permission_decoder.decode(hook_address)

        logger.info(f"Processed trace for {transaction_hash}.  Found {len(decoded_calls)} calls")
        logger.info(f"Detected Hook Address: {hook_address or 'None'}")

        return AnalysisResult(
            success=True,
            transaction_hash=transaction_hash,
            trace=decoded_calls,
            detected_hook_address=hook_address,
            hook_permissions=permissions,
        )

    async def analyze_many(self, transaction_hashes: Sequence[str]) -> list[AnalysisResult | Exception]:
        """
        Analyze multiple transactions concurrently, running at most ``config.max_concurrency`` analyses at once.
        Results are returned in the order of the input hashes.  Failed analyses return their exception in place
        of a result.
        """
        semaphore = asyncio.Semaphore(max(self.config.max_concurrency, 1))

        async def _bounded_analyze(transaction_hash: str) -> AnalysisResult:
            async with semaphore:
                return await self.analyze(transaction_hash)

        return [
            *await asyncio.gather(
                *[_bounded_analyze(tx_hash) for tx_hash in transaction_hashes],
                return_exceptions=True,
            )
        ]


def analyze_transaction(transaction_hash: str, config: AnalyzerConfig | None = None) -> AnalysisResult:
    """
    Synchronous helper that analyzes one transaction using a fresh analyzer.

    >>> result = analyze_transaction("0x...", AnalyzerConfig(json_rpc="http://localhost:8545"))  # doctest: +SKIP
    """
    validate_transaction_hash(transaction_hash)
    analyzer = TraceAnalyzer(config if config is not None else AnalyzerConfig.from_env())
    return asyncio.run(analyzer.analyze(transaction_hash))
