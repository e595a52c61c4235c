from typing import Any, Protocol


class SchemaSource(Protocol):
    """Abstract Protocol for remote ABI sources"""

    async def fetch_abi(self, address: str) -> list[dict[str, Any]] | None:
        """Fetch the verified ABI for a contract address.  Returns None if no ABI is available"""
        raise NotImplementedError()
