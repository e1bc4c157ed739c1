"""
Web server activation domain events.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from core.domain.events import DomainEvent


@dataclass(frozen=True)
class WebServerActivated(DomainEvent):
    """Event raised when a scope was migrated to a new web server."""

    project_name: str
    scope_name: str
    server_name: str
    previous_server: Optional[str] = None

    @property
    def aggregate_id(self) -> str:
        return f"{self.project_name}:{self.scope_name}"


@dataclass(frozen=True)
class WebServerActivationSkipped(DomainEvent):
    """Event raised when a scope did not need a migration."""

    project_name: str
    scope_name: str
    server_name: str
    active_server: Optional[str] = None

    @property
    def aggregate_id(self) -> str:
        return f"{self.project_name}:{self.scope_name}"


@dataclass(frozen=True)
class WebServerRecoveryPerformed(DomainEvent):
    """Event raised after a failed migration was rolled back."""

    project_name: str
    scope_name: str
    failed_server: str
    restored_server: Optional[str]
    complete: bool
    errors: Tuple[str, ...] = ()

    @property
    def aggregate_id(self) -> str:
        return f"{self.project_name}:{self.scope_name}"
