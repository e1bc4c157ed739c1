"""
WebServerActivator.

Activates a web server for the web app scopes of a project and migrates
the deployed web apps to it. A scope migration runs

    undeploy -> reassign active web server -> deploy

and any failing step triggers a best-effort recovery to the web server
that was active before.
"""

import contextlib
import logging
from typing import AsyncGenerator, Awaitable, Callable, List, Optional

from core.domain.events import EventBus
from core.domain.exceptions import ExecutionError, ProjectLockError, WebAppPermissionDeniedError
from core.domain.value_objects import WebAppId
from core.infrastructure.activation_context import bind_activation
from core.infrastructure.events import event_bus as default_event_bus
from core.metrics import (
    activation_requests_total,
    recovery_step_failures_total,
    scope_activations_total,
    scope_migration_duration_seconds,
)
from webservers.domain.activation_request import ActivationRequest
from webservers.domain.events import (
    WebServerActivated,
    WebServerActivationSkipped,
    WebServerRecoveryPerformed,
)
from webservers.domain.outcomes import (
    ActivationResult,
    MigrationOutcome,
    RecoveryReport,
    RecoveryStep,
    ScopeMigrationResult,
)
from webservers.domain.services import ActivationPreconditions, WebServerActivationPolicy
from webservers.domain.web_app_identifier import WebAppIdentifier
from webservers.ports.connection import Connection
from webservers.ports.module_admin_agent import ModuleAdminAgent
from webservers.ports.project import Project

logger = logging.getLogger(__name__)


@contextlib.asynccontextmanager
async def project_lock(project: Project) -> AsyncGenerator[Project, None]:
    """
    Hold the project lock for the duration of a block.

    The project is unlocked on every exit path, including a failing lock().

    Usage:
        async with project_lock(project):
            await project.set_active_web_server("WEBEDIT", "Jetty")
            await project.save()
    """
    try:
        await project.lock()
        yield project
    finally:
        logger.debug("Unlocking project %s", project.name)
        await project.unlock()


class WebServerActivator:
    """Activates a web server for given project scopes."""

    def __init__(self, event_bus: Optional[EventBus] = None):
        """Initialize activator with the event bus to publish to."""
        self.event_bus = event_bus or default_event_bus

    async def activate_web_server(
        self, connection: Connection, request: ActivationRequest
    ) -> ActivationResult:
        """
        Activate a web server for the project and scopes of a request.

        Args:
            connection: Established connection to the remote server
            request: Activation request

        Returns:
            ActivationResult; success is False if the preconditions
            are not fulfilled, in which case no scope is touched
        """
        if not await ActivationPreconditions.are_fulfilled(connection, request):
            logger.error("Preconditions for web server activation are not fulfilled!")
            activation_requests_total.labels(result="precondition_failed").inc()
            return ActivationResult(success=False)

        results = await self._perform_web_server_activation(connection, request)

        result = ActivationResult(success=True, scope_results=tuple(results))
        activation_requests_total.labels(
            result="with_failures" if result.has_failures else "completed"
        ).inc()
        return result

    async def _perform_web_server_activation(
        self, connection: Connection, request: ActivationRequest
    ) -> List[ScopeMigrationResult]:
        module_admin_agent = connection.module_admin_agent()
        project = await connection.get_project_by_name(request.project_name)

        results = []
        for scope in request.scopes:
            with bind_activation(project.name, scope.scope_name, request.server_name):
                with scope_migration_duration_seconds.labels(scope=scope.scope_name).time():
                    result = await self.activate_scope(
                        project,
                        module_admin_agent,
                        scope,
                        request.server_name,
                        request.force_activation,
                    )
            scope_activations_total.labels(scope=scope.scope_name, outcome=str(result.outcome)).inc()
            results.append(result)
        return results

    async def activate_scope(
        self,
        project: Project,
        module_admin_agent: ModuleAdminAgent,
        scope: WebAppIdentifier,
        server_name: str,
        force_activation: bool,
    ) -> ScopeMigrationResult:
        """
        Activate the web server for a single scope if necessary.

        Args:
            project: Project the scope belongs to
            module_admin_agent: Agent used to deploy and undeploy
            scope: Web app scope
            server_name: Web server that should become active
            force_activation: Whether an existing assignment may be overwritten

        Returns:
            ScopeMigrationResult of the scope
        """
        scope_name = scope.scope_name
        try:
            old_server_name = await project.get_active_web_server(scope_name)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error(
                "Could not read the active web server of scope %s: %s",
                scope_name,
                e,
                exc_info=True,
            )
            return ScopeMigrationResult(
                identifier=scope,
                outcome=MigrationOutcome.FAILED,
                target_server=server_name,
                failure=f"Could not read active web server: {e}",
            )

        if not WebServerActivationPolicy.should_activate_web_server(
            old_server_name, server_name, force_activation, scope_name, project.name
        ):
            logger.info("Skip activation for scope %s", scope_name)
            await self._publish(
                WebServerActivationSkipped(
                    project_name=project.name,
                    scope_name=scope_name,
                    server_name=server_name,
                    active_server=old_server_name or None,
                )
            )
            return ScopeMigrationResult(
                identifier=scope,
                outcome=MigrationOutcome.SKIPPED,
                previous_server=old_server_name or None,
                target_server=server_name,
            )

        return await self.migrate_scope(
            project, module_admin_agent, scope, old_server_name, server_name
        )

    async def migrate_scope(
        self,
        project: Project,
        module_admin_agent: ModuleAdminAgent,
        scope: WebAppIdentifier,
        old_server_name: Optional[str],
        server_name: str,
    ) -> ScopeMigrationResult:
        """
        Move a scope from its current web server to a new one.

        Never raises: failures are logged and followed by a recovery
        to old_server_name.
        """
        scope_name = scope.scope_name
        web_app_id = scope.create_web_app_id(project)

        failure = await self._undeploy_web_app(project, module_admin_agent, scope, web_app_id)
        if failure:
            return await self._fail_and_recover(
                project, module_admin_agent, scope, old_server_name, server_name, failure
            )

        try:
            await self.set_active_web_server(server_name, project, scope_name)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error(
                "Could not set '%s' as active web server for scope %s: %s",
                server_name,
                scope_name,
                e,
                exc_info=True,
            )
            return await self._fail_and_recover(
                project, module_admin_agent, scope, old_server_name, server_name, str(e)
            )

        failure = await self._deploy_web_app(project, module_admin_agent, scope, web_app_id)
        if failure:
            return await self._fail_and_recover(
                project, module_admin_agent, scope, old_server_name, server_name, failure
            )

        logger.info(
            "Activated web server '%s' for scope %s of project '%s' (previously '%s').",
            server_name,
            scope_name,
            project.name,
            old_server_name or "",
        )
        await self._publish(
            WebServerActivated(
                project_name=project.name,
                scope_name=scope_name,
                server_name=server_name,
                previous_server=old_server_name,
            )
        )
        return ScopeMigrationResult(
            identifier=scope,
            outcome=MigrationOutcome.MIGRATED,
            previous_server=old_server_name,
            target_server=server_name,
        )

    async def set_active_web_server(self, server_name: Optional[str], project: Project, scope_name: str) -> None:
        """
        Set and persist the active web server of a scope under the project lock.

        Raises:
            ExecutionError: If the project cannot be locked or saved
        """
        logger.debug("Try setting %s as active web server.", server_name)
        try:
            async with project_lock(project):
                await project.set_active_web_server(scope_name, server_name)
                await project.save()
        except ProjectLockError as e:
            logger.error("Cannot lock and save project!", exc_info=True)
            raise ExecutionError(
                f"{server_name} could not be set as active web server for scope '{scope_name}'"
            ) from e

    async def recover_deployment_for_scope(
        self,
        project: Project,
        module_admin_agent: ModuleAdminAgent,
        scope: WebAppIdentifier,
        old_server_name: Optional[str],
    ) -> RecoveryReport:
        """
        Restore the web server configuration a scope had before its migration.

        Every step runs even if a previous one failed. The final remote
        state is not verified.

        Args:
            project: Project the scope belongs to
            module_admin_agent: Agent used to deploy and undeploy
            scope: Web app scope
            old_server_name: Active web server observed before the migration,
                restored as is; None or empty means there was none

        Returns:
            RecoveryReport with the errors of failed steps
        """
        scope_name = scope.scope_name
        web_app_id = scope.create_web_app_id(project)
        report = RecoveryReport()
        logger.warning(
            "Trying to recover web server '%s' for scope %s.", old_server_name or "", scope_name
        )

        failure = await self._undeploy_web_app(project, module_admin_agent, scope, web_app_id)
        if failure:
            report.add_error(RecoveryStep.UNDEPLOY, failure)

        try:
            await self.set_active_web_server(old_server_name, project, scope_name)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error(
                "Could not restore '%s' as active web server for scope %s: %s",
                old_server_name or "",
                scope_name,
                e,
                exc_info=True,
            )
            report.add_error(RecoveryStep.REASSIGN, str(e))

        if old_server_name:
            failure = await self._deploy_web_app(project, module_admin_agent, scope, web_app_id)
            if failure:
                report.add_error(RecoveryStep.REDEPLOY, failure)
        else:
            logger.info(
                "Scope %s had no active web server before, skipping redeployment.", scope_name
            )

        for step, _ in report.errors:
            recovery_step_failures_total.labels(step=str(step)).inc()

        logger.warning(
            "Recovery for scope %s finished %s. Please verify manually that web app %s "
            "is deployed on web server '%s'.",
            scope_name,
            "without errors" if report.is_complete else f"with {len(report.errors)} error(s)",
            web_app_id,
            old_server_name or "",
        )
        return report

    async def _fail_and_recover(
        self,
        project: Project,
        module_admin_agent: ModuleAdminAgent,
        scope: WebAppIdentifier,
        old_server_name: Optional[str],
        server_name: str,
        failure: str,
    ) -> ScopeMigrationResult:
        logger.error(
            "Activation of web server '%s' for scope %s failed: %s",
            server_name,
            scope.scope_name,
            failure,
        )
        report = await self.recover_deployment_for_scope(
            project, module_admin_agent, scope, old_server_name
        )
        errors = tuple(report.errors)
        await self._publish(
            WebServerRecoveryPerformed(
                project_name=project.name,
                scope_name=scope.scope_name,
                failed_server=server_name,
                restored_server=old_server_name,
                complete=report.is_complete,
                errors=tuple(f"{step}: {message}" for step, message in errors),
            )
        )
        return ScopeMigrationResult(
            identifier=scope,
            outcome=report.outcome,
            previous_server=old_server_name,
            target_server=server_name,
            failure=failure,
            recovery_errors=errors,
        )

    async def _publish(self, event) -> None:
        try:
            await self.event_bus.publish(event)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Could not publish %s: %s", event.event_type, e, exc_info=True)

    async def _deploy_web_app(
        self,
        project: Project,
        module_admin_agent: ModuleAdminAgent,
        scope: WebAppIdentifier,
        web_app_id: WebAppId,
    ) -> Optional[str]:
        return await self._run_deployment(
            "deploy", module_admin_agent.deploy_web_app, project, scope, web_app_id
        )

    async def _undeploy_web_app(
        self,
        project: Project,
        module_admin_agent: ModuleAdminAgent,
        scope: WebAppIdentifier,
        web_app_id: WebAppId,
    ) -> Optional[str]:
        return await self._run_deployment(
            "undeploy", module_admin_agent.undeploy_web_app, project, scope, web_app_id
        )

    async def _run_deployment(
        self,
        action: str,
        operation: Callable[[WebAppId], Awaitable[bool]],
        project: Project,
        scope: WebAppIdentifier,
        web_app_id: WebAppId,
    ) -> Optional[str]:
        """
        Run a deploy or undeploy.

        Returns:
            None on success, otherwise a description of the failure
        """
        logger.debug("Trying to %s web app %s.", action, web_app_id)
        try:
            if await operation(web_app_id):
                logger.debug("Successfully ran %s of web app %s.", action, web_app_id)
                return None
            failure = f"Could not {action} web app {web_app_id}"
            logger.error("%s.", failure)
            return failure
        except WebAppPermissionDeniedError as e:
            if scope.is_global:
                logger.error(
                    "Permission denied to %s global web app %s. "
                    "Server administrator rights are required: %s",
                    action,
                    web_app_id,
                    e,
                )
            else:
                logger.error(
                    "Permission denied to %s web app %s. "
                    "Project administrator rights for project '%s' are required: %s",
                    action,
                    web_app_id,
                    project.name,
                    e,
                )
            return f"Permission denied to {action} web app {web_app_id}"
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Error trying to %s web app %s: %s", action, web_app_id, e, exc_info=True)
            return f"Could not {action} web app {web_app_id}: {e}"
