"""Compile process documents into Mermaid swimlane flowcharts."""
from __future__ import annotations

from .diagrams.swimlane import InvalidProcessDocument, actor_order_by_flow, compile_process
from .validate import (
    ValidateConfig,
    ValidationIssue,
    validate_process,
    validate_process_issues,
    validate_process_report,
)

__all__ = [
    "InvalidProcessDocument",
    "ValidateConfig",
    "ValidationIssue",
    "actor_order_by_flow",
    "compile_process",
    "validate_process",
    "validate_process_issues",
    "validate_process_report",
]
