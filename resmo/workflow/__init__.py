"""Workflow: status state machine and the orchestrated recruiter/candidate operations."""

from .engine import WorkflowEngine, log_email_sender
from .status_machine import (
    PIPELINE_ORDER,
    TERMINAL_STATUSES,
    allowed_targets,
    can_transition,
    ensure_transition,
    is_terminal,
    transition,
)

__all__ = [
    "WorkflowEngine",
    "log_email_sender",
    "PIPELINE_ORDER",
    "TERMINAL_STATUSES",
    "allowed_targets",
    "can_transition",
    "ensure_transition",
    "is_terminal",
    "transition",
]
