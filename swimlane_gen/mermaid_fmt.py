from __future__ import annotations

import json
import re
from typing import Any

from .constants import RESERVED_ID_PREFIX, RESERVED_IDS

# Characters allowed in emitted node/subgraph ids.
MERMAID_ID_UNSAFE_RE = re.compile(r"[^A-Za-z0-9_-]")
_NEWLINE_RE = re.compile(r"\r\n|\r|\n")


def mermaid_block(code: str) -> str:
    """Wrap Mermaid source in a Markdown Mermaid code fence."""
    return "```mermaid\n" + code.rstrip() + "\n```\n"


def mm_sanitize_id(value: str) -> str:
    """Turn a document id into a Mermaid-safe node/subgraph id.

    Unsafe characters become `_`. Ids that collide with flowchart keywords
    (checked case-insensitively) get the reserved-id prefix, so a step with id
    `end` is never emitted as a bare `end` that closes the enclosing subgraph.
    """
    sanitized = MERMAID_ID_UNSAFE_RE.sub("_", str(value))
    if sanitized.lower() in RESERVED_IDS:
        sanitized = f"{RESERVED_ID_PREFIX}{sanitized}"
    return sanitized


def mm_label(text: str) -> str:
    """Escape text for Mermaid node and subgraph labels."""
    out = str(text).replace('"', "#quot;")
    return _NEWLINE_RE.sub("<br/>", out)


def mm_edge_label(text: str) -> str:
    """Format a Mermaid *edge label* (the text inside `-->|...|`) safely."""
    return mm_label(text).replace("|", "#124;")


def mm_init(**config_sections: Any) -> str:
    # Stable JSON: sorted keys + compact separators.
    payload = json.dumps(config_sections, sort_keys=True, separators=(",", ":"))
    return f"%%{{init:{payload}}}%%"


def mm_subgraph_open(subgraph_id: str, title: str) -> str:
    return f'    subgraph {subgraph_id}["{mm_label(title)}"]'


def mm_subgraph_close() -> str:
    return "    end"


def mm_rect_node(node_id: str, label: str) -> str:
    return f'{node_id}["{mm_label(label)}"]'


def mm_circle_node(node_id: str, label: str) -> str:
    return f'{node_id}(("{mm_label(label)}"))'


def mm_diamond_node(node_id: str, label: str) -> str:
    return f'{node_id}{{"{mm_label(label)}"}}'


def mm_with_classes(node: str, class_names: list[str]) -> str:
    """Attach classes with the `:::` shorthand (`a:::x:y` applies both)."""
    if not class_names:
        return node
    return f"{node}:::{':'.join(class_names)}"


def mm_flow_edge(src: str, dst: str, label: str | None = None) -> str:
    if label:
        return f"    {src} -->|{mm_edge_label(label)}| {dst}"
    return f"    {src} --> {dst}"


def mm_class_def(class_name: str, style: str) -> str:
    return f"    classDef {class_name} {style}"
