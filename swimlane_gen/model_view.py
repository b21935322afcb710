from __future__ import annotations

from typing import Any


def as_list(value: Any) -> list[Any]:
    """Return `value` if it is a list, else an empty list."""
    return value if isinstance(value, list) else []


def mappings(value: Any) -> list[dict[str, Any]]:
    """Keep only the mapping items of a collection."""
    return [item for item in as_list(value) if isinstance(item, dict)]


def build_actor_index(doc: dict[str, Any]) -> dict[str, dict[str, Any]]:
    """Index actors by id; the first declaration of a repeated id wins."""
    index: dict[str, dict[str, Any]] = {}
    for actor in mappings(doc.get("actors")):
        actor_id = actor.get("id")
        if isinstance(actor_id, str) and actor_id and actor_id not in index:
            index[actor_id] = actor
    return index


def build_step_index(doc: dict[str, Any]) -> dict[str, dict[str, Any]]:
    """Index steps by id; the first declaration of a repeated id wins."""
    index: dict[str, dict[str, Any]] = {}
    for step in mappings(doc.get("steps")):
        step_id = step.get("id")
        if isinstance(step_id, str) and step_id and step_id not in index:
            index[step_id] = step
    return index


def build_flow_graph(doc: dict[str, Any]) -> dict[str, list[str]]:
    """Adjacency list `from -> [to, ...]`, successors in `flows` order."""
    graph: dict[str, list[str]] = {}
    for flow in mappings(doc.get("flows")):
        src, dst = flow.get("from"), flow.get("to")
        if isinstance(src, str) and isinstance(dst, str):
            graph.setdefault(src, []).append(dst)
    return graph


def find_start_step(doc: dict[str, Any]) -> dict[str, Any] | None:
    """First step typed `start`, if any."""
    for step in mappings(doc.get("steps")):
        if step.get("type") == "start":
            return step
    return None


def steps_referencing(doc: dict[str, Any], key: str, annotation_id: str) -> list[dict[str, Any]]:
    """Steps whose `controls`/`risks` list (per `key`) contains `annotation_id`."""
    return [
        step
        for step in mappings(doc.get("steps"))
        if annotation_id in as_list(step.get(key))
    ]
