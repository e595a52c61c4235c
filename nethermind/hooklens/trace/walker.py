import logging
from typing import Iterator

from nethermind.hooklens.decoding.call_decoder import CallDecoder
from nethermind.hooklens.types import CallNode, DecodedCall

from .classifier import CallTypeClassifier

root_logger = logging.getLogger("nethermind")
logger = root_logger.getChild("hooklens").getChild("walker")


def iter_preorder(root: CallNode) -> Iterator[tuple[CallNode, int]]:
    """
    Yields (node, depth) for every node of the tree, parents before children and children in execution order.
    Uses an explicit stack, so trace depth is not limited by the recursion limit.
    """
    stack: list[tuple[CallNode, int]] = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        yield node, depth
        for child in reversed(node.calls):
            stack.append((child, depth + 1))


class TraceWalker:
    """Walks a call tree, classifying and decoding every call"""

    def __init__(self, classifier: CallTypeClassifier, decoder: CallDecoder):
        self.classifier = classifier
        self.decoder = decoder

    async def walk(self, root: CallNode | None, detected_hook_address: str | None) -> list[DecodedCall]:
        """
        Decode every call of the tree in pre-order.  Each call is decoded exactly once, including calls
        that cannot be decoded.

        :param root: Root call of the transaction
        :param detected_hook_address: Hook address detected for the whole transaction
        :return: Flat list of decoded calls with their depths
        """
        if root is None:
            return []

        decoded_calls = []
        for node, depth in iter_preorder(root):
            role = self.classifier.classify(node, detected_hook_address)
            decoded_calls.append(await self.decoder.decode(node, role, depth))

        logger.debug(f"Decoded {len(decoded_calls)} calls")
        return decoded_calls
