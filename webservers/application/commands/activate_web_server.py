"""
ActivateWebServerCommand.

Command to activate a web server for a number of web app scopes of a project.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class ActivateWebServerCommand:
    """Command to activate a web server for project scopes."""

    project_name: Optional[str]
    server_name: Optional[str]
    web_app_scopes: Optional[str]
    force_activation: bool = False
