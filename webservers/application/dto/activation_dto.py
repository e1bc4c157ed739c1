"""
Web server activation DTOs.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from webservers.domain.outcomes import ActivationResult, ScopeMigrationResult


@dataclass
class ScopeMigrationDTO:
    """DTO for the outcome of one scope."""

    scope: str
    outcome: str
    previous_server: Optional[str]
    target_server: Optional[str]
    failure: Optional[str]
    recovery_errors: List[str]
    failed: bool = False

    @classmethod
    def from_result(cls, result: ScopeMigrationResult) -> "ScopeMigrationDTO":
        return cls(
            scope=str(result.identifier),
            outcome=str(result.outcome),
            previous_server=result.previous_server,
            target_server=result.target_server,
            failure=result.failure,
            recovery_errors=[f"{step}: {message}" for step, message in result.recovery_errors],
            failed=result.failed,
        )


@dataclass
class ActivationResponseDTO:
    """DTO for the response of a web server activation."""

    success: bool
    project_name: str
    server_name: str
    message: str
    scopes: List[ScopeMigrationDTO] = field(default_factory=list)

    @property
    def has_failures(self) -> bool:
        return any(scope.failed for scope in self.scopes)

    @classmethod
    def from_result(
        cls, result: ActivationResult, project_name: str, server_name: str
    ) -> "ActivationResponseDTO":
        if not result.success:
            message = "Web server activation failed."
        elif result.has_failures:
            message = (
                f"Web server activation finished with {len(result.failed)} failed scope(s). "
                "Please verify the deployments of these scopes."
            )
        else:
            message = "Web server activation finished successfully."
        return cls(
            success=result.success,
            project_name=project_name,
            server_name=server_name,
            message=message,
            scopes=[ScopeMigrationDTO.from_result(scope) for scope in result.scope_results],
        )
