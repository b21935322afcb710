# swimlane_gen/io.py
from __future__ import annotations

import json
import re
import sys
from pathlib import Path
from typing import Any

import yaml

from .extract import extract_process_json

YAML_SUFFIXES = (".yaml", ".yml")
RESPONSE_SUFFIXES = (".md", ".txt")

# Free-text fields that hand-written YAML tends to leave unquoted.
_TEXT_KEYS = (
    "processName|name|department|label|description|detailedDescription|criteria"
)
_TEXT_FIELD_RE = re.compile(rf"^(\s*(?:-\s*)?(?:{_TEXT_KEYS}):\s*)(.+)$")


def _sanitize_yaml_for_pyyaml(raw: str) -> tuple[str, list[tuple[int, str, str]]]:
    """Return (sanitized_yaml, changes).

    Each change is (line_number_1_based, original_line, new_line).
    """
    changes: list[tuple[int, str, str]] = []
    out_lines: list[str] = []

    for i, line in enumerate(raw.splitlines(), start=1):
        match = _TEXT_FIELD_RE.match(line)
        if not match:
            out_lines.append(line)
            continue

        prefix, value = match.group(1), match.group(2)

        # Already quoted or a block scalar.
        if value.startswith(("'", '"', "|", ">")):
            out_lines.append(line)
            continue

        # "Review: manager sign-off" is not a plain scalar for PyYAML.
        body, comment = value, ""
        m = re.match(r"^(.*?)(\s+#.*)$", value)
        if m:
            body, comment = m.group(1), m.group(2)

        if re.search(r":(?=\s|$)", body):
            escaped = body.replace("\\", "\\\\").replace('"', '\\"')
            new_line = f'{prefix}"{escaped}"{comment}'
            out_lines.append(new_line)
            changes.append((i, line, new_line))
        else:
            out_lines.append(line)

    sanitized = "\n".join(out_lines) + ("\n" if raw.endswith("\n") else "")
    return sanitized, changes


def _load_yaml(path: Path, raw: str) -> Any:
    changes: list[tuple[int, str, str]] = []
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError:
        sanitized, changes = _sanitize_yaml_for_pyyaml(raw)
        try:
            data = yaml.safe_load(sanitized)
        except yaml.YAMLError as e2:
            raise ValueError(f"Failed to parse YAML {path}: {e2}") from e2

    if changes:
        print(
            f"warning: parsed {path} after quoting {len(changes)} line(s); "
            "consider quoting text values containing ': '",
            file=sys.stderr,
        )
        for (ln, old, new) in changes[:10]:
            print(f"warning: {path}:{ln}: {old}", file=sys.stderr)
            print(f"warning: {path}:{ln}: {new}", file=sys.stderr)
        if len(changes) > 10:
            print(f"warning: (and {len(changes) - 10} more)", file=sys.stderr)
    return data


def load_process(path: Path) -> dict[str, Any]:
    """Load a process document from JSON, YAML, or a saved model reply.

    Replies (`.md`/`.txt`) must hold a fenced ```json block shaped like a
    process document.
    """
    if not path.exists():
        raise FileNotFoundError(str(path))

    raw = path.read_text(encoding="utf-8")
    suffix = path.suffix.lower()

    if suffix in RESPONSE_SUFFIXES:
        extracted = extract_process_json(raw)
        if extracted.document is None:
            raise ValueError(f"No process document found in {path}")
        return extracted.document

    if suffix in YAML_SUFFIXES:
        data = _load_yaml(path, raw)
    else:
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ValueError(f"Failed to parse JSON {path}: {e}") from e

    if not isinstance(data, dict):
        raise TypeError(
            f"Top-level document must be a mapping in {path}, got {type(data).__name__}"
        )

    return data
