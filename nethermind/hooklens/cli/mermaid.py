import re
from typing import Sequence

from nethermind.hooklens.types import CallRole, DecodedCall

EMPTY_DIAGRAM = "graph TD\n  A[No trace data available] --> B[No diagram generated]"

_UNSAFE_LABEL_CHARS = re.compile(r"[^a-zA-Z0-9\s:.,-]")
_WHITESPACE = re.compile(r"\s+")

LIFECYCLE_STYLE = "fill:#c8f0c8,stroke:#008000,stroke-width:2px,color:#000;"


def sanitize_label(text: object, max_length: int = 40) -> str:
    """
    Strips characters that break mermaid node labels and truncates the label

    >>> sanitize_label('swap {"zeroForOne": true}', 12)
    'swap zeroFor...'
    """
    sanitized = _WHITESPACE.sub(" ", str(text))
    sanitized = _UNSAFE_LABEL_CHARS.sub("", sanitized)
    if len(sanitized) > max_length:
        sanitized = sanitized[:max_length] + "..."
    return sanitized.strip()


def _format_values(values: dict) -> str:
    return ", ".join(f"{key}: {value}" for key, value in values.items())


def _node_shape(call: DecodedCall, label: str) -> str:
    if call.is_hook_lifecycle_event:
        return "{{" + label + "}}"
    match call.role:
        case CallRole.pool_manager:
            return f"({label})"
        case CallRole.hook:
            return "{" + label + "}"
        case _:
            return f"[{label}]"


def generate_mermaid_diagram(calls: Sequence[DecodedCall], detected_hook_address: str | None = None) -> str:
    """
    Renders decoded calls as a mermaid flowchart.  The tree structure is rebuilt from the depth of each call,
    connecting every call to the closest preceding call one level above it.

    :param calls: Decoded calls in pre-order
    :param detected_hook_address: Hook address shown in the legend
    :return: mermaid ``graph TD`` source
    """
    if not calls:
        return EMPTY_DIAGRAM

    lines = ["graph TD", "  subgraph Actors", "    PM[PoolManager]"]
    if detected_hook_address:
        lines.append(f"    HO[Hook: {detected_hook_address[:8]}...]")
    lines += ["    EXT[External Account]", "  end", ""]

    start_node = "N0"
    lines.append(f'  {start_node}("Tx Start: {calls[0].from_address[:8]}...")')

    # parents[d] is the node id of the most recent call at depth d
    parents: list[str] = []
    lifecycle_nodes = []
    for index, call in enumerate(calls, start=1):
        node_id = f"N{index}"

        label = sanitize_label(call.function_name, 30)
        details = []
        if call.params:
            details.append(f"P: {sanitize_label(_format_values(call.params))}")
        if call.returns:
            details.append(f"R: {sanitize_label(_format_values(call.returns))}")
        if details:
            label += "<br>" + "<br>".join(details)

        lines.append(f"  {node_id}{_node_shape(call, label)}")

        del parents[call.depth :]
        parent_id = parents[-1] if parents else start_node
        lines.append(f"  {parent_id} --> {node_id}")
        parents.append(node_id)

        if call.is_hook_lifecycle_event:
            lifecycle_nodes.append(node_id)

    end_node = f"N{len(calls) + 1}"
    lines.append(f"  {end_node}[Tx End]")
    lines.append(f"  N{len(calls)} --> {end_node}")

    lines += [
        "",
        "style PM fill:#f9f,stroke:#333,stroke-width:2px",
        "style HO fill:#ccf,stroke:#333,stroke-width:2px",
        "style EXT fill:#fcf,stroke:#333,stroke-width:2px",
    ]
    lines += [f"  style {node_id} {LIFECYCLE_STYLE}" for node_id in lifecycle_nodes]

    return "\n".join(lines) + "\n"
