"""
Activation log context.

Holds the project, scope and target server of the scope migration that is
currently running, so that log records can be enriched with them.
"""

import contextlib
import contextvars
from dataclasses import dataclass
from typing import Iterator, Optional


@dataclass(frozen=True)
class ActivationContext:
    """Identifies the scope migration in progress."""

    project_name: str
    scope_name: str
    server_name: str


activation_context: contextvars.ContextVar[Optional[ActivationContext]] = contextvars.ContextVar(
    "activation_context", default=None
)


def get_current_activation() -> Optional[ActivationContext]:
    """
    Get the scope migration in progress.

    Returns:
        ActivationContext or None outside of a migration
    """
    return activation_context.get(None)


@contextlib.contextmanager
def bind_activation(project_name: str, scope_name: str, server_name: str) -> Iterator[ActivationContext]:
    """
    Bind an activation context for the duration of a block.

    Usage:
        with bind_activation("project", "WEBEDIT", "JettyA"):
            ...
    """
    context = ActivationContext(project_name, scope_name, server_name)
    token = activation_context.set(context)
    try:
        yield context
    finally:
        activation_context.reset(token)
