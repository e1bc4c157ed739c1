"""
Module admin agent port (interface).

Deploys and undeploys web applications on the web server that is
currently active for their scope.
"""
from abc import ABC, abstractmethod

from core.domain.value_objects import WebAppId


class ModuleAdminAgent(ABC):
    """Abstract deployment agent of the remote server."""

    @abstractmethod
    async def deploy_web_app(self, web_app_id: WebAppId) -> bool:
        """
        Deploy a web app to its active web server.

        Args:
            web_app_id: Web app to deploy

        Returns:
            True if the deployment succeeded, False otherwise

        Raises:
            WebAppPermissionDeniedError: If the session lacks the required rights
        """
        pass

    @abstractmethod
    async def undeploy_web_app(self, web_app_id: WebAppId) -> bool:
        """
        Undeploy a web app from its active web server.

        Args:
            web_app_id: Web app to undeploy

        Returns:
            True if the undeployment succeeded, False otherwise

        Raises:
            WebAppPermissionDeniedError: If the session lacks the required rights
        """
        pass
