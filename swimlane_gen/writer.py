from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from .mermaid_fmt import mermaid_block


def document_meta_line(doc: dict[str, Any]) -> Optional[str]:
    """Italic provenance line (`processId`, `lastUpdated`) for generated pages."""
    parts: list[str] = []
    if doc.get("processId"):
        parts.append(f"process `{doc['processId']}`")
    if doc.get("lastUpdated"):
        parts.append(f"last updated {doc['lastUpdated']}")
    if not parts:
        return None
    return "_Generated from " + ", ".join(parts) + "._"


def write_md(
    path: Path,
    title: str,
    body: str,
    *,
    mermaid: bool = True,
    meta_line: Optional[str] = None,
) -> None:
    """Write a titled Markdown page.

    With `mermaid=True` the body is wrapped in a Mermaid code fence, otherwise
    it is written as Markdown.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    content = f"# {title}\n\n"
    if meta_line:
        content += f"{meta_line}\n\n"
    if mermaid:
        content += mermaid_block(body)
    else:
        content += (body or "").rstrip() + "\n"
    path.write_text(content, encoding="utf-8")
