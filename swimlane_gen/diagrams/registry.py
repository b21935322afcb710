from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from .summary import gen_controls_risks_summary
from .swimlane import compile_process

Document = dict[str, Any]
RenderFn = Callable[[Document, "RenderConfig"], str]


@dataclass(frozen=True)
class RenderConfig:
    theme: Optional[str] = None
    include_summary: bool = False


@dataclass(frozen=True)
class DiagramSpec:
    diagram_id: str
    title: str
    filename: str
    render: RenderFn
    # False: wrap output in a Mermaid block; True: write it as Markdown body.
    markdown: bool = False
    optional: bool = False


def _render_swimlane(doc: Document, cfg: RenderConfig) -> str:
    return compile_process(doc, theme=cfg.theme)


def _render_summary(doc: Document, _: RenderConfig) -> str:
    return gen_controls_risks_summary(doc)


DIAGRAMS: list[DiagramSpec] = [
    DiagramSpec(
        diagram_id="swimlane",
        title="Process swimlanes",
        filename="swimlane.md",
        render=_render_swimlane,
    ),
    DiagramSpec(
        diagram_id="controls_risks",
        title="Controls and risks",
        filename="controls_risks.md",
        render=_render_summary,
        markdown=True,
        optional=True,
    ),
]


def selected_diagrams(cfg: RenderConfig) -> list[DiagramSpec]:
    """Diagrams to write for `cfg`; optional ones only when asked for."""
    return [spec for spec in DIAGRAMS if not spec.optional or cfg.include_summary]
