from __future__ import annotations

from typing import Any

from ..model_view import mappings, steps_referencing


def _md_table_cell(text: Any) -> str:
    """Escape a string for use in a Markdown table cell."""
    s = str(text or "").replace("\r", " ").replace("\n", " ").strip()
    # Escape table separators.
    s = s.replace("|", "\\|")
    return s


def _detail(item: dict[str, Any]) -> str:
    # Only worth a column entry when it says more than the short description.
    detailed = item.get("detailedDescription") or ""
    if detailed == item.get("description"):
        return ""
    return detailed


def _associated(doc: dict[str, Any], key: str, item_id: Any) -> str:
    labels = [str(step.get("label", "")) for step in steps_referencing(doc, key, item_id)]
    return ", ".join(labels)


def _section(
    doc: dict[str, Any], title: str, key: str, kind_key: str, kind_header: str
) -> list[str]:
    items = mappings(doc.get(key))
    if not items:
        return []

    lines = [
        f"## {title} ({len(items)})",
        "",
        f"| id | {kind_header} | description | details | associated steps |",
        "|---|---|---|---|---|",
    ]
    for item in items:
        cells = [
            item.get("id"),
            str(item.get(kind_key) or "").capitalize(),
            item.get("description"),
            _detail(item),
            _associated(doc, key, item.get("id")),
        ]
        lines.append("| " + " | ".join(_md_table_cell(c) for c in cells) + " |")
    lines.append("")
    return lines


def gen_controls_risks_summary(doc: dict[str, Any]) -> str:
    """Markdown tables of the document's controls and risks.

    Each row lists the labels of the steps that reference the control or
    risk. Returns an empty string when there is nothing to summarize.
    """
    lines = _section(doc, "Controls", "controls", "type", "type")
    lines += _section(doc, "Risks", "risks", "severity", "severity")
    return "\n".join(lines)
