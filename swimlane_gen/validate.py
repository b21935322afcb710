# swimlane_gen/validate.py
from __future__ import annotations

from collections.abc import Callable, Hashable
from dataclasses import dataclass, field
from typing import Any, Literal, Optional, Tuple

from .constants import (
    ANNOTATION_DESCRIPTION_MAX_LEN,
    CONTROL_TYPES,
    FLOW_TYPES,
    LABEL_MAX_LEN,
    RISK_SEVERITIES,
    STEP_TYPES,
)
from .model_view import as_list

Severity = Literal["error", "warning"]


@dataclass(frozen=True)
class ValidationIssue:
    """Structured validation issue for callers that want more than strings."""

    severity: Severity
    code: str
    message: str
    path: str = ""
    hint: Optional[str] = None


@dataclass(frozen=True)
class ValidateConfig:
    """Validation configuration.

    Only errors gate compilation. Warnings cover things the diagram survives
    (a decision with a single labelled branch, a dangling control id) and can
    be promoted with `escalate` or silenced with `ignore`.
    """

    # Rule controls
    ignore: set[str] = field(default_factory=set)
    escalate: set[str] = field(default_factory=set)

    # Soft checks
    check_decision_branches: bool = True
    check_annotation_refs: bool = True
    check_display_lengths: bool = True


def validate_process_issues(
    doc: Any, cfg: Optional[ValidateConfig] = None
) -> list[ValidationIssue]:
    """Return structured validation issues for a process document.

    This is the canonical validator. `validate_process()` keeps only the
    error messages. Never raises on malformed input; every problem found is
    reported.
    """

    cfg = cfg or ValidateConfig()
    issues: list[ValidationIssue] = []

    def emit(
        severity: Severity,
        code: str,
        message: str,
        path: str = "",
        hint: Optional[str] = None,
    ) -> None:
        if code in cfg.ignore:
            return
        final_severity: Severity = (
            "error" if (severity == "warning" and code in cfg.escalate) else severity
        )
        issues.append(
            ValidationIssue(
                severity=final_severity,
                code=code,
                message=message,
                path=path,
                hint=hint,
            )
        )

    if not isinstance(doc, dict):
        emit("error", "E_DOCUMENT_NOT_MAPPING", "process document must be an object")
        doc = {}

    # --- document header + collection types ---
    if not doc.get("processName"):
        emit("error", "E_PROCESS_NAME_MISSING", "processName is required", path="/processName")
    if not doc.get("processId"):
        emit("error", "E_PROCESS_ID_MISSING", "processId is required", path="/processId")
    for section in ("actors", "steps", "flows"):
        if not isinstance(doc.get(section), list):
            emit(
                "error",
                "E_SECTION_NOT_LIST",
                f"{section} must be an array",
                path=f"/{section}",
            )
    for section in ("decisions", "controls", "risks"):
        value = doc.get(section)
        if value is not None and not isinstance(value, list):
            emit(
                "warning",
                "W_SECTION_NOT_LIST",
                f"{section} must be an array; ignoring it",
                path=f"/{section}",
            )

    actors = as_list(doc.get("actors"))
    steps = as_list(doc.get("steps"))
    flows = as_list(doc.get("flows"))

    # --- actors ---
    actor_ids: set[Any] = set()
    for i, actor in enumerate(actors):
        if not isinstance(actor, dict):
            emit(
                "error",
                "E_ACTOR_NOT_MAPPING",
                f"actors[{i}] must be an object",
                path=f"/actors/{i}",
            )
            continue
        actor_id = actor.get("id")
        if not actor_id:
            emit("error", "E_ACTOR_ID_MISSING", f"actors[{i}].id is required", path=f"/actors/{i}/id")
        else:
            if not isinstance(actor_id, str):
                emit(
                    "error",
                    "E_ACTOR_ID_NOT_STRING",
                    f"actors[{i}].id must be a string",
                    path=f"/actors/{i}/id",
                    hint="Quote the id in YAML (e.g. id: \"001\")",
                )
            # Recorded anyway so steps naming the same value are not also dangling.
            if isinstance(actor_id, Hashable):
                actor_ids.add(actor_id)
        if not actor.get("name"):
            emit(
                "error",
                "E_ACTOR_NAME_MISSING",
                f"actors[{i}].name is required",
                path=f"/actors/{i}/name",
            )

    # --- steps ---
    step_ids: set[Any] = set()
    for i, step in enumerate(steps):
        if not isinstance(step, dict):
            emit(
                "error",
                "E_STEP_NOT_MAPPING",
                f"steps[{i}] must be an object",
                path=f"/steps/{i}",
            )
            continue

        step_id = step.get("id")
        if not step_id:
            emit("error", "E_STEP_ID_MISSING", f"steps[{i}].id is required", path=f"/steps/{i}/id")
        else:
            if not isinstance(step_id, str):
                emit(
                    "error",
                    "E_STEP_ID_NOT_STRING",
                    f"steps[{i}].id must be a string",
                    path=f"/steps/{i}/id",
                    hint="Quote the id in YAML (e.g. id: \"001\")",
                )
            if isinstance(step_id, Hashable):
                if step_id in step_ids:
                    emit(
                        "error",
                        "E_STEP_DUPLICATE_ID",
                        f"Duplicate step ID: {step_id}",
                        path=f"/steps/{i}/id",
                    )
                step_ids.add(step_id)

        if step.get("type") not in STEP_TYPES:
            emit(
                "error",
                "E_STEP_TYPE_INVALID",
                f"steps[{i}].type must be action|decision|start|end",
                path=f"/steps/{i}/type",
            )

        label = step.get("label")
        if not label:
            emit(
                "error",
                "E_STEP_LABEL_MISSING",
                f"steps[{i}].label is required",
                path=f"/steps/{i}/label",
            )
        elif (
            cfg.check_display_lengths
            and isinstance(label, str)
            and len(label) > LABEL_MAX_LEN
        ):
            emit(
                "warning",
                "W_STEP_LABEL_TOO_LONG",
                f"steps[{i}].label is longer than {LABEL_MAX_LEN} characters",
                path=f"/steps/{i}/label",
                hint="Move detail into the step description",
            )

        actor_id = step.get("actorId")
        if not actor_id:
            emit(
                "error",
                "E_STEP_ACTOR_MISSING",
                f"steps[{i}].actorId is required",
                path=f"/steps/{i}/actorId",
            )
        elif not _known(actor_id, actor_ids):
            emit(
                "error",
                "E_STEP_ACTOR_UNKNOWN",
                f'steps[{i}].actorId "{actor_id}" references non-existent actor',
                path=f"/steps/{i}/actorId",
            )

    # --- flows ---
    for i, flow in enumerate(flows):
        if not isinstance(flow, dict):
            emit(
                "error",
                "E_FLOW_NOT_MAPPING",
                f"flows[{i}] must be an object",
                path=f"/flows/{i}",
            )
            continue

        for end in ("from", "to"):
            ref = flow.get(end)
            if not ref:
                emit(
                    "error",
                    "E_FLOW_ENDPOINT_MISSING",
                    f"flows[{i}].{end} is required",
                    path=f"/flows/{i}/{end}",
                )
        for end in ("from", "to"):
            ref = flow.get(end)
            if ref and not _known(ref, step_ids):
                emit(
                    "error",
                    "E_FLOW_ENDPOINT_UNKNOWN",
                    f'flows[{i}].{end} "{ref}" references non-existent step',
                    path=f"/flows/{i}/{end}",
                )

        flow_type = flow.get("type")
        if flow_type is not None and flow_type not in FLOW_TYPES:
            emit(
                "warning",
                "W_FLOW_TYPE_INVALID",
                f"flows[{i}].type must be normal|conditional",
                path=f"/flows/{i}/type",
            )
        elif flow_type == "conditional" and not flow.get("label"):
            emit(
                "warning",
                "W_FLOW_CONDITIONAL_UNLABELED",
                f"flows[{i}] is conditional but has no label; it renders as a plain arrow",
                path=f"/flows/{i}/label",
            )

    # --- start / end ---
    typed_steps = [s for s in steps if isinstance(s, dict)]
    start_count = sum(1 for s in typed_steps if s.get("type") == "start")
    if start_count == 0:
        emit("error", "E_START_MISSING", "Process must have exactly one start node", path="/steps")
    elif start_count > 1:
        emit(
            "error",
            "E_START_MULTIPLE",
            "Process must have exactly one start node (found multiple)",
            path="/steps",
        )

    if not any(s.get("type") == "end" for s in typed_steps):
        emit("error", "E_END_MISSING", "Process must have at least one end node", path="/steps")

    # --- soft checks ---
    if cfg.check_decision_branches:
        labelled_out: dict[Any, int] = {}
        for flow in flows:
            if (
                isinstance(flow, dict)
                and flow.get("label")
                and isinstance(flow.get("from"), Hashable)
            ):
                labelled_out[flow["from"]] = labelled_out.get(flow["from"], 0) + 1

        for i, step in enumerate(typed_steps):
            if step.get("type") != "decision" or not isinstance(step.get("id"), Hashable):
                continue
            count = labelled_out.get(step["id"], 0)
            if count < 2:
                emit(
                    "warning",
                    "W_DECISION_BRANCHES",
                    f"decision step {step['id']!r} has {count} labelled outgoing "
                    "flow(s); expected at least 2",
                    path=f"/steps/{i}",
                    hint="Label each branch (e.g. Approved / Rejected)",
                )

    step_types = {
        s["id"]: s.get("type") for s in typed_steps if isinstance(s.get("id"), Hashable)
    }
    for i, decision in enumerate(as_list(doc.get("decisions"))):
        if not isinstance(decision, dict):
            emit(
                "warning",
                "W_DECISIONS_ITEM_NOT_MAPPING",
                "decisions contains a non-mapping item; skipping",
                path=f"/decisions/{i}",
            )
            continue

        ref = decision.get("stepId")
        if not _known(ref, step_ids):
            emit(
                "warning",
                "W_DECISION_STEP_UNKNOWN",
                f"decisions[{i}].stepId {ref!r} references non-existent step",
                path=f"/decisions/{i}/stepId",
            )
        elif step_types.get(ref) != "decision":
            emit(
                "warning",
                "W_DECISION_STEP_NOT_DECISION",
                f"decisions[{i}].stepId {ref!r} is not a decision step",
                path=f"/decisions/{i}/stepId",
            )

        for j, outcome in enumerate(as_list(decision.get("outcomes"))):
            if not isinstance(outcome, dict):
                continue
            nxt = outcome.get("nextStepId")
            if not _known(nxt, step_ids):
                emit(
                    "warning",
                    "W_DECISION_OUTCOME_STEP_UNKNOWN",
                    f"decisions[{i}].outcomes[{j}].nextStepId {nxt!r} references "
                    "non-existent step",
                    path=f"/decisions/{i}/outcomes/{j}/nextStepId",
                )

    control_ids = _check_annotations(
        doc, "controls", "type", CONTROL_TYPES, emit, cfg.check_display_lengths
    )
    risk_ids = _check_annotations(
        doc, "risks", "severity", RISK_SEVERITIES, emit, cfg.check_display_lengths
    )

    if cfg.check_annotation_refs:
        for i, step in enumerate(steps):
            if not isinstance(step, dict):
                continue
            for key, known, code in (
                ("controls", control_ids, "W_STEP_CONTROL_UNKNOWN"),
                ("risks", risk_ids, "W_STEP_RISK_UNKNOWN"),
            ):
                for ref in as_list(step.get(key)):
                    if not _known(ref, known):
                        emit(
                            "warning",
                            code,
                            f"steps[{i}].{key} references unknown id {ref!r}",
                            path=f"/steps/{i}/{key}",
                        )

    return issues


def _known(ref: Any, ids: set[Any]) -> bool:
    return isinstance(ref, Hashable) and ref in ids


def _check_annotations(
    doc: dict[str, Any],
    section: str,
    kind_key: str,
    allowed: tuple[str, ...],
    emit: Callable[..., None],
    check_lengths: bool,
) -> set[str]:
    """Check controls/risks entries; return the ids declared in `section`."""
    ids: set[str] = set()
    for i, item in enumerate(as_list(doc.get(section))):
        if not isinstance(item, dict):
            emit(
                "warning",
                "W_SECTION_ITEM_NOT_MAPPING",
                f"{section} contains a non-mapping item; skipping",
                path=f"/{section}/{i}",
            )
            continue

        item_id = item.get("id")
        if isinstance(item_id, str) and item_id:
            ids.add(item_id)

        if item.get(kind_key) not in allowed:
            emit(
                "warning",
                f"W_{section[:-1].upper()}_{kind_key.upper()}_INVALID",
                f"{section}[{i}].{kind_key} must be {'|'.join(allowed)}",
                path=f"/{section}/{i}/{kind_key}",
            )

        description = item.get("description")
        if (
            check_lengths
            and isinstance(description, str)
            and len(description) > ANNOTATION_DESCRIPTION_MAX_LEN
        ):
            emit(
                "warning",
                f"W_{section[:-1].upper()}_DESCRIPTION_TOO_LONG",
                f"{section}[{i}].description is longer than "
                f"{ANNOTATION_DESCRIPTION_MAX_LEN} characters",
                path=f"/{section}/{i}/description",
                hint="Keep the short description brief; use detailedDescription",
            )
    return ids


def validate_process_report(
    doc: Any, cfg: Optional[ValidateConfig] = None
) -> Tuple[list[str], list[str]]:
    """Split issues into `(errors, warnings)` message lists."""
    issues = validate_process_issues(doc, cfg)
    errors = [iss.message for iss in issues if iss.severity == "error"]
    warnings = [iss.message for iss in issues if iss.severity == "warning"]
    return errors, warnings


def validate_process(doc: Any) -> list[str]:
    """Return error messages for a process document; empty means safe to compile."""
    errors, _ = validate_process_report(doc)
    return errors
