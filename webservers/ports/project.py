"""
Project port (interface).

This defines the contract for reading and changing the web server
configuration of a project on the remote server.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from typing import Optional


class Project(ABC):
    """
    Abstract handle of a project on the remote server.

    The active web server mapping may only be changed while the
    project is locked, and changes only persist after save().
    """

    @property
    @abstractmethod
    def id(self) -> int:
        """Numeric project id on the remote server."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Project name."""

    @abstractmethod
    async def get_active_web_server(self, scope_name: str) -> Optional[str]:
        """
        Get the active web server of a scope.

        Args:
            scope_name: Name of the web scope, e.g. "WEBEDIT"

        Returns:
            Web server name, or None/"" if no server is active
        """
        pass

    @abstractmethod
    async def set_active_web_server(self, scope_name: str, server_name: Optional[str]) -> None:
        """
        Set the active web server of a scope.

        Args:
            scope_name: Name of the web scope
            server_name: Web server name, None to clear the assignment
        """
        pass

    @abstractmethod
    async def lock(self) -> None:
        """
        Lock the project for changes.

        Raises:
            ProjectLockError: If the project cannot be locked
        """
        pass

    @abstractmethod
    async def unlock(self) -> None:
        """Release the project lock."""
        pass

    @abstractmethod
    async def save(self) -> None:
        """
        Persist pending changes.

        Raises:
            ProjectLockError: If the project is not locked by this session
        """
        pass
