from .trace import AnalysisResult, CallNode, CallRole, DecodedCall

__all__ = ["AnalysisResult", "CallNode", "CallRole", "DecodedCall"]
