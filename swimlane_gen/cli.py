# swimlane_gen/cli.py
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from .constants import OUT_DIR_DEFAULT, THEMES
from .diagrams.registry import RenderConfig, selected_diagrams
from .diagrams.swimlane import compile_process
from .io import load_process
from .validate import ValidateConfig, validate_process_report
from .writer import document_meta_line, write_md


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="swimlane-gen",
        description="Generate a Mermaid swimlane flowchart from a process document.",
    )
    parser.add_argument(
        "document",
        type=Path,
        help=(
            "Process document (.json, .yaml/.yml) or a saved model reply "
            "(.md/.txt) containing a fenced ```json block."
        ),
    )
    parser.add_argument(
        "--out-dir",
        type=Path,
        default=Path(OUT_DIR_DEFAULT),
        help="Output directory for generated markdown",
    )
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print the raw Mermaid source instead of writing markdown files.",
    )
    parser.add_argument(
        "--theme",
        type=str,
        choices=THEMES,
        default=None,
        help="Emit a Mermaid init directive selecting this theme.",
    )
    parser.add_argument(
        "--summary",
        action="store_true",
        help="Also write a controls and risks summary page.",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help=(
            "Fail generation on validation warnings (e.g., decisions with a single "
            "labelled branch, unknown control ids). Errors always fail."
        ),
    )
    parser.add_argument(
        "--ignore",
        action="append",
        default=[],
        metavar="CODE",
        help="Validation issue code to ignore (repeatable), e.g. W_DECISION_BRANCHES.",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    """CLI entrypoint."""
    args = _build_parser().parse_args(argv)

    try:
        doc = load_process(args.document)
    except (FileNotFoundError, ValueError, TypeError) as e:
        print(f"error: {e}", file=sys.stderr)
        raise SystemExit(2) from e

    errors, warnings = validate_process_report(doc, ValidateConfig(ignore=set(args.ignore)))
    for warning in warnings:
        print(f"warning: {warning}", file=sys.stderr)

    if errors or (args.strict and warnings):
        for error in errors:
            print(f"error: {error}", file=sys.stderr)
        raise SystemExit(2)

    if args.stdout:
        print(compile_process(doc, theme=args.theme))
        return

    out_dir: Path = args.out_dir
    cfg = RenderConfig(theme=args.theme, include_summary=args.summary)
    process_name = str(doc.get("processName"))
    meta_line = document_meta_line(doc)

    for spec in selected_diagrams(cfg):
        body = spec.render(doc, cfg)
        if spec.markdown and not body:
            print(f"warning: {spec.diagram_id}: nothing to write", file=sys.stderr)
            continue
        write_md(
            out_dir / spec.filename,
            f"{spec.title}: {process_name}",
            body,
            mermaid=not spec.markdown,
            meta_line=meta_line,
        )


if __name__ == "__main__":
    main()
