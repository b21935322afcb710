# swimlane_gen/constants.py
from __future__ import annotations

STEP_TYPES: tuple[str, ...] = ("action", "decision", "start", "end")
CONTROL_TYPES: tuple[str, ...] = ("preventive", "detective", "corrective")
RISK_SEVERITIES: tuple[str, ...] = ("low", "medium", "high")
FLOW_TYPES: tuple[str, ...] = ("normal", "conditional")

# Collections a process document must carry (in wire order).
DOCUMENT_COLLECTIONS: tuple[str, ...] = (
    "actors",
    "steps",
    "decisions",
    "controls",
    "risks",
    "flows",
)

# Display-length bounds; they keep the rendered diagram readable.
LABEL_MAX_LEN = 60
ANNOTATION_DESCRIPTION_MAX_LEN = 50

GRAPH_HEADER = "graph TB"

# Words with structural meaning in flowchart syntax. `end` closes a subgraph.
RESERVED_IDS: frozenset[str] = frozenset(
    {
        "start",
        "end",
        "subgraph",
        "graph",
        "flowchart",
        "direction",
        "class",
        "classdef",
        "style",
        "linkstyle",
        "click",
        "call",
        "default",
    }
)
RESERVED_ID_PREFIX = "node_"

CONTROL_CLASS = "controlStyle"
RISK_CLASS = "riskStyle"

CLASS_STYLES: tuple[tuple[str, str], ...] = (
    (CONTROL_CLASS, "fill:#E3F2FD,stroke:#1976D2,stroke-width:2px"),
    (RISK_CLASS, "fill:#FFF3E0,stroke:#F57C00,stroke-width:2px"),
)

THEMES: tuple[str, ...] = ("default", "dark", "forest", "neutral")

OUT_DIR_DEFAULT = "diagrams"
