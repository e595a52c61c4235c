from nethermind.hooklens.config import AnalyzerConfig
from nethermind.hooklens.types import CallNode, CallRole


class CallTypeClassifier:
    """
    Assigns a role to each call based only on the called address.  Roles are never inherited from parent
    calls, so the same node always receives the same role wherever it appears in the tree.
    """

    def __init__(self, config: AnalyzerConfig):
        self.config = config

    def classify(self, node: CallNode, detected_hook_address: str | None) -> CallRole:
        """
        Classify a call.

        :param node: Call to classify
        :param detected_hook_address: Hook address detected for the transaction, if any
        """
        to_address = (node.to_address or "").lower()

        if to_address == self.config.manager_address:
            return CallRole.pool_manager
        if detected_hook_address and to_address == detected_hook_address.lower():
            return CallRole.hook
        if self.config.is_known_hook(to_address):
            return CallRole.hook
        return CallRole.external
