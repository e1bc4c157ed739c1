"""
Connection port (interface).

Entry point to the remote server: projects and the module admin agent
are obtained through an established connection.
"""
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from webservers.ports.module_admin_agent import ModuleAdminAgent
from webservers.ports.project import Project


class Connection(ABC):
    """
    Abstract connection to the remote server.

    Can be used as an async context manager, which connects on entry
    and always disconnects on exit.
    """

    @abstractmethod
    async def connect(self) -> None:
        """Establish the connection."""
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the connection."""
        pass

    @abstractmethod
    async def is_connected(self) -> bool:
        """Check whether the connection is established."""
        pass

    @abstractmethod
    async def get_projects(self) -> Sequence[Project]:
        """
        List all projects on the server.

        Returns:
            Sequence of projects, possibly empty
        """
        pass

    @abstractmethod
    async def get_project_by_name(self, name: str) -> Optional[Project]:
        """
        Find a project by name.

        Args:
            name: Project name

        Returns:
            Project or None if not found
        """
        pass

    @abstractmethod
    def module_admin_agent(self) -> ModuleAdminAgent:
        """Get the deployment agent of this connection."""
        pass

    async def __aenter__(self) -> "Connection":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.disconnect()
