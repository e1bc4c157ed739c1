"""
In-memory implementation of the remote server ports.

Simulates projects, their active web server mapping and the web app
deployments of a server. Used for development and testing.
"""

import itertools
import logging
from typing import Dict, List, Mapping, Optional, Sequence, Set, Tuple

from core.domain.exceptions import ProjectLockError, WebAppPermissionDeniedError
from core.domain.value_objects import WebAppId, WebScope
from webservers.ports.connection import Connection
from webservers.ports.module_admin_agent import ModuleAdminAgent
from webservers.ports.project import Project

logger = logging.getLogger(__name__)


class InMemoryServer:
    """
    State of a simulated remote server.

    deployments maps a web server name to the web apps deployed on it.
    """

    def __init__(self):
        self.projects: Dict[str, "InMemoryProject"] = {}
        self.deployments: Dict[str, Set[WebAppId]] = {}
        self.global_web_server: Optional[str] = None
        self.agent = InMemoryModuleAdminAgent(self)
        self._ids = itertools.count(1)

    def add_project(
        self, name: str, active_web_servers: Optional[Mapping[str, str]] = None
    ) -> "InMemoryProject":
        project = InMemoryProject(self, next(self._ids), name, active_web_servers)
        self.projects[name] = project
        if project.saved_web_servers.get(str(WebScope.GLOBAL)):
            self.global_web_server = project.saved_web_servers[str(WebScope.GLOBAL)]
        return project

    def project_by_id(self, project_id: int) -> Optional["InMemoryProject"]:
        return next((p for p in self.projects.values() if p.id == project_id), None)

    def active_server_of(self, web_app_id: WebAppId) -> Optional[str]:
        """Web server a web app is deployed to, based on saved project state."""
        if web_app_id.is_global:
            return self.global_web_server
        project = self.project_by_id(web_app_id.project_id)
        if project is None:
            return None
        return project.saved_web_servers.get(str(web_app_id.scope)) or None

    def deployed_on(self, server_name: str) -> Set[WebAppId]:
        return self.deployments.get(server_name, set())


class InMemoryProject(Project):
    """
    Simulated project.

    Changes made while locked only become visible to other sessions
    after save(); unlock() discards unsaved changes. A scope without
    active web server has no entry in the mapping.
    """

    def __init__(
        self,
        server: InMemoryServer,
        project_id: int,
        name: str,
        active_web_servers: Optional[Mapping[str, str]] = None,
    ):
        self._server = server
        self._id = project_id
        self._name = name
        self.saved_web_servers: Dict[str, Optional[str]] = dict(active_web_servers or {})
        self._pending: Optional[Dict[str, Optional[str]]] = None
        self.locked_elsewhere = False
        self.lock_count = 0
        self.unlock_count = 0
        self.save_count = 0

    @property
    def id(self) -> int:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_locked(self) -> bool:
        return self._pending is not None

    async def get_active_web_server(self, scope_name: str) -> Optional[str]:
        mapping = self._pending if self.is_locked else self.saved_web_servers
        return mapping.get(scope_name)

    async def set_active_web_server(self, scope_name: str, server_name: Optional[str]) -> None:
        if not self.is_locked:
            raise ProjectLockError(f"Project '{self._name}' must be locked to change web servers")
        if server_name is None:
            self._pending.pop(scope_name, None)
        else:
            self._pending[scope_name] = server_name

    async def lock(self) -> None:
        self.lock_count += 1
        if self.locked_elsewhere:
            raise ProjectLockError(f"Project '{self._name}' is locked by another session")
        if self._pending is None:
            self._pending = dict(self.saved_web_servers)

    async def unlock(self) -> None:
        self.unlock_count += 1
        self._pending = None

    async def save(self) -> None:
        if not self.is_locked:
            raise ProjectLockError(f"Project '{self._name}' is not locked")
        global_scope = str(WebScope.GLOBAL)
        touches_global = global_scope in self.saved_web_servers or global_scope in self._pending
        self.saved_web_servers = dict(self._pending)
        self.save_count += 1
        if touches_global:
            self._server.global_web_server = self.saved_web_servers.get(global_scope) or None
        logger.debug("Saved project %s: %s", self._name, self.saved_web_servers)


class InMemoryModuleAdminAgent(ModuleAdminAgent):
    """
    Simulated deployment agent.

    Deploys to the web server active for the web app's scope. Servers in
    failing_servers reject deployments, servers in undeploy_failing_servers
    reject undeployments; permission_denied makes every call raise
    WebAppPermissionDeniedError.
    """

    def __init__(self, server: InMemoryServer):
        self._server = server
        self.failing_servers: Set[str] = set()
        self.undeploy_failing_servers: Set[str] = set()
        self.permission_denied = False
        self.calls: List[Tuple[str, WebAppId, Optional[str]]] = []

    async def deploy_web_app(self, web_app_id: WebAppId) -> bool:
        target = self._server.active_server_of(web_app_id)
        self.calls.append(("deploy", web_app_id, target))
        self._check_permission("deploy", web_app_id)
        if not target or target in self.failing_servers:
            return False
        self._server.deployments.setdefault(target, set()).add(web_app_id)
        return True

    async def undeploy_web_app(self, web_app_id: WebAppId) -> bool:
        target = self._server.active_server_of(web_app_id)
        self.calls.append(("undeploy", web_app_id, target))
        self._check_permission("undeploy", web_app_id)
        if not target:
            return True
        if target in self.undeploy_failing_servers:
            return False
        self._server.deployments.get(target, set()).discard(web_app_id)
        return True

    def _check_permission(self, action: str, web_app_id: WebAppId) -> None:
        if self.permission_denied:
            raise WebAppPermissionDeniedError(f"Not allowed to {action} {web_app_id}")


class InMemoryConnection(Connection):
    """Connection to an InMemoryServer."""

    def __init__(self, server: Optional[InMemoryServer] = None):
        self.server = server or InMemoryServer()
        self._connected = False

    @classmethod
    def from_config(cls, projects: Optional[Mapping[str, Mapping[str, str]]] = None) -> "InMemoryConnection":
        """
        Create a connection to a server seeded with projects.

        Args:
            projects: Project name -> {scope name: active web server}
        """
        server = InMemoryServer()
        for name, web_servers in (projects or {}).items():
            server.add_project(name, web_servers)
        return cls(server)

    async def connect(self) -> None:
        self._connected = True
        logger.debug("Connected to in-memory server")

    async def disconnect(self) -> None:
        self._connected = False
        logger.debug("Disconnected from in-memory server")

    async def is_connected(self) -> bool:
        return self._connected

    async def get_projects(self) -> Sequence[Project]:
        return list(self.server.projects.values())

    async def get_project_by_name(self, name: str) -> Optional[Project]:
        return self.server.projects.get(name)

    def module_admin_agent(self) -> ModuleAdminAgent:
        return self.server.agent


def create_in_memory_connection(
    projects: Optional[Mapping[str, Mapping[str, str]]] = None
) -> InMemoryConnection:
    """Connection factory for settings.WEB_SERVER_ACTIVATION."""
    return InMemoryConnection.from_config(projects)
