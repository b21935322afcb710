# swimlane_gen/extract.py
"""Pull a process document out of a language-model reply.

Replies carry the document in a fenced ```json block. The fence line may be
tagged `<UPDATED>` or `<UNCHANGED>` to say whether the document differs from
the previous turn; callers use that to decide whether to recompile.
"""
from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Optional

from .schema import ProcessDocument, is_process_document

UPDATED_TAG = "<UPDATED>"
UNCHANGED_TAG = "<UNCHANGED>"

_JSON_FENCE_RE = re.compile(
    r"```json[ \t]*(?:<UPDATED>|<UNCHANGED>)?[ \t]*\r?\n(.*?)\r?\n```", re.DOTALL
)
_TRAILING_COMMA_RE = re.compile(r",(\s*[}\]])")
_LINE_COMMENT_RE = re.compile(r"^\s*//.*$", re.MULTILINE)
_BLOCK_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)


@dataclass(frozen=True)
class ExtractedProcess:
    document: Optional[ProcessDocument]
    updated: bool


def repair_json(raw: str) -> str:
    """Fix the usual model slips: trailing commas and `//` / `/* */` comments."""
    repaired = _BLOCK_COMMENT_RE.sub("", raw)
    repaired = _LINE_COMMENT_RE.sub("", repaired)
    return _TRAILING_COMMA_RE.sub(r"\1", repaired)


def _parse(raw: str) -> tuple[Any, bool]:
    """Return (value, repaired). Raises json.JSONDecodeError if repair fails too."""
    try:
        return json.loads(raw), False
    except json.JSONDecodeError:
        return json.loads(repair_json(raw)), True


def extract_process_json(text: str) -> ExtractedProcess:
    """Extract the first fenced JSON process document from `text`.

    `updated` is True when the reply is tagged `<UPDATED>`, or carries a
    document and no `<UNCHANGED>` tag. A block that does not parse, even after
    repair, or that is not shaped like a process document, yields no document.
    """
    has_updated = UPDATED_TAG in text
    has_unchanged = UNCHANGED_TAG in text

    match = _JSON_FENCE_RE.search(text)
    if not match:
        return ExtractedProcess(document=None, updated=has_updated)

    try:
        parsed, repaired = _parse(match.group(1))
    except json.JSONDecodeError:
        return ExtractedProcess(document=None, updated=False)

    if not is_process_document(parsed):
        return ExtractedProcess(document=None, updated=False)

    if repaired:
        return ExtractedProcess(document=parsed, updated=has_updated)
    return ExtractedProcess(document=parsed, updated=has_updated or not has_unchanged)


def strip_process_json(text: str) -> str:
    """Remove fenced JSON blocks, leaving only the prose meant for the user."""
    return _JSON_FENCE_RE.sub("", text).strip()
