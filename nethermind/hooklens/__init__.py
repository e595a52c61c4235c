from nethermind.hooklens.analyzer import TraceAnalyzer, analyze_transaction
from nethermind.hooklens.config import AnalyzerConfig
from nethermind.hooklens.types import AnalysisResult, CallNode, CallRole, DecodedCall

__all__ = [
    "AnalysisResult",
    "AnalyzerConfig",
    "CallNode",
    "CallRole",
    "DecodedCall",
    "TraceAnalyzer",
    "analyze_transaction",
]
