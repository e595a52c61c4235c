from .classifier import CallTypeClassifier
from .detector import HookAddressDetector
from .fetcher import TraceFetcher, parse_call_tree
from .walker import TraceWalker, iter_preorder

__all__ = [
    "CallTypeClassifier",
    "HookAddressDetector",
    "TraceFetcher",
    "TraceWalker",
    "iter_preorder",
    "parse_call_tree",
]
