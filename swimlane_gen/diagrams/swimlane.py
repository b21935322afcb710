# swimlane_gen/diagrams/swimlane.py
from __future__ import annotations

from typing import Any, Optional

from ..constants import CLASS_STYLES, CONTROL_CLASS, GRAPH_HEADER, RISK_CLASS
from ..mermaid_fmt import (
    mm_circle_node,
    mm_class_def,
    mm_diamond_node,
    mm_flow_edge,
    mm_init,
    mm_rect_node,
    mm_sanitize_id,
    mm_subgraph_close,
    mm_subgraph_open,
    mm_with_classes,
)
from ..model_view import (
    as_list,
    build_actor_index,
    build_flow_graph,
    build_step_index,
    find_start_step,
    mappings,
)
from ..schema import ProcessDocument


class InvalidProcessDocument(ValueError):
    """Raised when the compiler is handed something that is not a process document."""


def actor_order_by_flow(doc: dict[str, Any]) -> list[dict[str, Any]]:
    """Order actors by first appearance along the flow from the start step.

    Depth-first walk over the flow adjacency list, each step visited once and
    successors taken in `flows` order. Actors never reached follow in
    `actors` array order.
    """
    actors = build_actor_index(doc)
    steps = build_step_index(doc)
    graph = build_flow_graph(doc)

    order: list[dict[str, Any]] = []
    seen: set[str] = set()

    def add(actor_id: Any) -> None:
        if isinstance(actor_id, str) and actor_id in actors and actor_id not in seen:
            order.append(actors[actor_id])
            seen.add(actor_id)

    start = find_start_step(doc)
    if start is not None and isinstance(start.get("id"), str):
        visited: set[str] = set()
        stack: list[str] = [start["id"]]
        while stack:
            step_id = stack.pop()
            if step_id in visited:
                continue
            visited.add(step_id)

            step = steps.get(step_id)
            if step is not None:
                add(step.get("actorId"))

            # Reversed so the first successor is popped first (preorder).
            stack.extend(reversed(graph.get(step_id, [])))

    for actor in mappings(doc.get("actors")):
        add(actor.get("id"))

    return order


def _node_definition(step: dict[str, Any]) -> str:
    node_id = mm_sanitize_id(step.get("id", ""))
    label = str(step.get("label", ""))

    step_type = step.get("type")
    if step_type in ("start", "end"):
        node = mm_circle_node(node_id, label)
    elif step_type == "decision":
        node = mm_diamond_node(node_id, label)
    else:
        node = mm_rect_node(node_id, label)

    classes: list[str] = []
    if as_list(step.get("controls")):
        classes.append(CONTROL_CLASS)
    if as_list(step.get("risks")):
        classes.append(RISK_CLASS)

    return mm_with_classes(node, classes)


def _swimlane_title(actor: dict[str, Any]) -> str:
    name = str(actor.get("name", ""))
    department = actor.get("department")
    if department:
        return f"{name} - {department}"
    return name


def gen_swimlanes(doc: dict[str, Any]) -> list[str]:
    """One subgraph per actor holding that actor's steps in document order."""
    steps_by_actor: dict[str, list[dict[str, Any]]] = {}
    for step in mappings(doc.get("steps")):
        actor_id = step.get("actorId")
        if isinstance(actor_id, str):
            steps_by_actor.setdefault(actor_id, []).append(step)

    lines: list[str] = []
    for actor in actor_order_by_flow(doc):
        lane_steps = steps_by_actor.get(actor["id"], [])
        if not lane_steps:
            continue

        lines.append(mm_subgraph_open(mm_sanitize_id(actor["id"]), _swimlane_title(actor)))
        for step in lane_steps:
            lines.append(f"        {_node_definition(step)}")
        lines.append(mm_subgraph_close())
        lines.append("")

    return lines


def gen_flows(doc: dict[str, Any]) -> list[str]:
    """One edge per flow; a non-empty `label` (not `type`) makes it a labelled edge."""
    lines: list[str] = []
    for flow in mappings(doc.get("flows")):
        label = flow.get("label")
        lines.append(
            mm_flow_edge(
                mm_sanitize_id(flow.get("from", "")),
                mm_sanitize_id(flow.get("to", "")),
                str(label) if label else None,
            )
        )
    return lines


def gen_styles() -> list[str]:
    return [mm_class_def(name, style) for name, style in CLASS_STYLES]


def compile_process(doc: ProcessDocument, theme: Optional[str] = None) -> str:
    """Compile a validated process document into Mermaid flowchart source.

    Only guards against a missing `actors`/`steps`; run `validate_process()`
    first, dangling references are not re-checked here.
    """
    if not isinstance(doc, dict) or not all(
        isinstance(doc.get(key), list) for key in ("actors", "steps")
    ):
        raise InvalidProcessDocument("Invalid ProcessSchema: missing required fields")

    lines: list[str] = []
    if theme:
        lines.append(mm_init(theme=theme))

    lines.append(GRAPH_HEADER)
    lines.append("")

    lines.extend(gen_swimlanes(doc))
    lines.append("")

    lines.extend(gen_flows(doc))
    lines.append("")

    lines.extend(gen_styles())

    return "\n".join(lines)
