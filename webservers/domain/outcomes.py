"""
Migration outcome domain objects.

Per-scope results of a web server activation and the aggregate result
returned to callers.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from webservers.domain.web_app_identifier import WebAppIdentifier


class MigrationOutcome(Enum):
    """
    Outcome of a single scope migration.

    FAILED means the scope could not be inspected and was left untouched.
    """

    SKIPPED = "skipped"
    MIGRATED = "migrated"
    RECOVERED = "recovered"
    RECOVERY_FAILED = "recovery_failed"
    FAILED = "failed"

    def __str__(self) -> str:
        return self.value


class RecoveryStep(Enum):
    """Steps of the recovery of a failed scope migration."""

    UNDEPLOY = "undeploy"
    REASSIGN = "reassign"
    REDEPLOY = "redeploy"

    def __str__(self) -> str:
        return self.value


@dataclass
class RecoveryReport:
    """
    Errors collected while recovering a scope.

    Recovery runs all its steps; every failing step adds an entry.
    """

    errors: List[Tuple[RecoveryStep, str]] = field(default_factory=list)

    def add_error(self, step: RecoveryStep, message: str) -> None:
        self.errors.append((step, message))

    @property
    def is_complete(self) -> bool:
        """True if every recovery step succeeded."""
        return not self.errors

    @property
    def outcome(self) -> MigrationOutcome:
        return MigrationOutcome.RECOVERED if self.is_complete else MigrationOutcome.RECOVERY_FAILED


@dataclass(frozen=True)
class ScopeMigrationResult:
    """Result of processing one scope of an activation request."""

    identifier: WebAppIdentifier
    outcome: MigrationOutcome
    previous_server: Optional[str] = None
    target_server: Optional[str] = None
    failure: Optional[str] = None
    recovery_errors: Tuple[Tuple[RecoveryStep, str], ...] = ()

    @property
    def scope_name(self) -> str:
        return self.identifier.scope_name

    @property
    def failed(self) -> bool:
        return self.outcome in (
            MigrationOutcome.RECOVERED,
            MigrationOutcome.RECOVERY_FAILED,
            MigrationOutcome.FAILED,
        )


@dataclass(frozen=True)
class ActivationResult:
    """
    Aggregate result of an activation request.

    success is False only when the preconditions failed; scopes that
    failed and were recovered are reported in scope_results.
    """

    success: bool
    scope_results: Tuple[ScopeMigrationResult, ...] = ()

    def __bool__(self) -> bool:
        return self.success

    def with_outcome(self, outcome: MigrationOutcome) -> List[ScopeMigrationResult]:
        return [result for result in self.scope_results if result.outcome is outcome]

    @property
    def migrated(self) -> List[ScopeMigrationResult]:
        return self.with_outcome(MigrationOutcome.MIGRATED)

    @property
    def skipped(self) -> List[ScopeMigrationResult]:
        return self.with_outcome(MigrationOutcome.SKIPPED)

    @property
    def failed(self) -> List[ScopeMigrationResult]:
        return [result for result in self.scope_results if result.failed]

    @property
    def has_failures(self) -> bool:
        return bool(self.failed)
