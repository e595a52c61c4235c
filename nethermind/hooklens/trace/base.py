from typing import Protocol

from nethermind.hooklens.types import CallNode


class TraceSource(Protocol):
    """Abstract Protocol for sources of transaction call trees"""

    async def fetch(self, transaction_hash: str) -> CallNode | None:
        """Fetch the root call of a transaction.  Returns None if the transaction has no trace"""
        raise NotImplementedError()
