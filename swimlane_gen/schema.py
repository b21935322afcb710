# swimlane_gen/schema.py
"""Shape of a process document.

Documents travel as plain JSON mappings; these TypedDicts describe the wire
keys. Nothing here converts or copies a document.
"""
from __future__ import annotations

from typing import Any, Literal, TypedDict

from .constants import DOCUMENT_COLLECTIONS

StepType = Literal["action", "decision", "start", "end"]
ControlType = Literal["preventive", "detective", "corrective"]
Severity = Literal["low", "medium", "high"]
FlowType = Literal["normal", "conditional"]


class _ActorBase(TypedDict):
    id: str
    name: str


class Actor(_ActorBase, total=False):
    department: str


class Position(TypedDict, total=False):
    x: float
    y: float


class _StepBase(TypedDict):
    id: str
    type: StepType
    label: str
    actorId: str
    controls: list[str]
    risks: list[str]


class ProcessStep(_StepBase, total=False):
    description: str
    position: Position


class DecisionOutcome(TypedDict):
    label: str
    nextStepId: str


class Decision(TypedDict):
    id: str
    stepId: str
    criteria: str
    outcomes: list[DecisionOutcome]


class Control(TypedDict):
    id: str
    type: ControlType
    description: str
    detailedDescription: str


class Risk(TypedDict):
    id: str
    description: str
    severity: Severity
    detailedDescription: str


# `from` is a keyword, so Flow uses the functional syntax.
_FlowBase = TypedDict("_FlowBase", {"from": str, "to": str, "type": FlowType})


class Flow(_FlowBase, total=False):
    label: str


class ProcessDocument(TypedDict):
    processName: str
    processId: str
    lastUpdated: str
    actors: list[Actor]
    steps: list[ProcessStep]
    decisions: list[Decision]
    controls: list[Control]
    risks: list[Risk]
    flows: list[Flow]


def is_process_document(obj: Any) -> bool:
    """Structural check: right top-level keys with the right container types."""
    if not isinstance(obj, dict):
        return False
    if not isinstance(obj.get("processName"), str):
        return False
    if not isinstance(obj.get("processId"), str):
        return False
    return all(isinstance(obj.get(key), list) for key in DOCUMENT_COLLECTIONS)
