from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# pylint: disable=invalid-name


class CallRole(Enum):
    """Semantic role of the contract receiving a call"""

    pool_manager = "PoolManager"
    hook = "Hook"
    external = "External"


@dataclass(frozen=True, slots=True)
class CallNode:
    """
    Single frame of a callTracer trace.  Children are stored in execution order, and nodes are never modified
    after the trace is parsed.
    """

    call_type: str
    from_address: str
    to_address: str | None
    input: bytes
    output: bytes
    value: int
    gas_used: int
    calls: tuple["CallNode", ...] = ()


@dataclass(frozen=True, slots=True)
class DecodedCall:
    """Decoded call trace frame, with the depth of the frame inside the call tree"""

    call_type: str
    from_address: str
    to_address: str | None
    value: str
    gas_used: int
    depth: int

    function_name: str
    params: dict[str, Any]
    returns: dict[str, Any]

    role: CallRole
    is_hook_lifecycle_event: bool

    def to_dict(self) -> dict[str, Any]:
        """Returns a JSON serializable representation of the decoded call"""
        return {
            "type": self.call_type,
            "from": self.from_address,
            "to": self.to_address,
            "value": self.value,
            "gasUsed": self.gas_used,
            "depth": self.depth,
            "functionName": self.function_name,
            "params": self.params,
            "returns": self.returns,
            "callType": self.role.value,
            "isHookLifecycleEvent": self.is_hook_lifecycle_event,
        }


@dataclass(slots=True)
class AnalysisResult:
    """Result of analyzing a single transaction"""

    success: bool
    transaction_hash: str
    trace: list[DecodedCall] = field(default_factory=list)
    detected_hook_address: str | None = None
    hook_permissions: dict[str, bool] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Returns a JSON serializable representation of the analysis"""
        return {
            "success": self.success,
            "transactionHash": self.transaction_hash,
            "trace": [call.to_dict() for call in self.trace],
            "detectedHookAddress": self.detected_hook_address,
            "hookPermissions": dict(self.hook_permissions),
        }
