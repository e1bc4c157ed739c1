"""
Web app identifier domain objects.

A web app identifier names one web application binding of a project:
either a project-local web app (preview, staging, webedit) or a
global web app that is shared by all projects.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List

from core.domain.value_objects import WebAppId, WebScope
from webservers.ports.project import Project

_GLOBAL_PATTERN = re.compile(r"^global\((?P<web_app_id>.*)\)$", re.IGNORECASE)


class WebAppIdentifier(ABC):
    """Identifies one web app binding of a project."""

    @property
    @abstractmethod
    def scope(self) -> WebScope:
        """Web scope of the web app."""

    @property
    def scope_name(self) -> str:
        """Key of the web app in the project's active web server mapping."""
        return str(self.scope)

    @property
    def is_global(self) -> bool:
        return self.scope is WebScope.GLOBAL

    @abstractmethod
    def create_web_app_id(self, project: Project) -> WebAppId:
        """
        Resolve the deployable web app id.

        Args:
            project: Project the web app belongs to

        Returns:
            WebAppId to deploy or undeploy
        """


@dataclass(frozen=True)
class ProjectWebAppIdentifier(WebAppIdentifier):
    """Project-local web app of a single scope."""

    web_scope: WebScope

    def __post_init__(self):
        """Validate scope."""
        if self.web_scope is WebScope.GLOBAL:
            raise ValueError("Use GlobalWebAppIdentifier for global web apps")

    @property
    def scope(self) -> WebScope:
        return self.web_scope

    def create_web_app_id(self, project: Project) -> WebAppId:
        return WebAppId.for_project(project.id, self.web_scope)

    def __str__(self) -> str:
        return self.scope_name


@dataclass(frozen=True)
class GlobalWebAppIdentifier(WebAppIdentifier):
    """Global web app, identified by its global web app id."""

    global_web_app_id: str

    def __post_init__(self):
        """Validate global web app id."""
        if not self.global_web_app_id or not self.global_web_app_id.strip():
            raise ValueError("Global web app id cannot be empty")

    @property
    def scope(self) -> WebScope:
        return WebScope.GLOBAL

    def create_web_app_id(self, project: Project) -> WebAppId:
        return WebAppId.for_global(self.global_web_app_id)

    def __str__(self) -> str:
        return f"global({self.global_web_app_id})"


PREVIEW = ProjectWebAppIdentifier(WebScope.PREVIEW)
STAGING = ProjectWebAppIdentifier(WebScope.STAGING)
WEBEDIT = ProjectWebAppIdentifier(WebScope.WEBEDIT)


def parse_web_app_scope(value: str) -> WebAppIdentifier:
    """
    Parse a single web app scope.

    Args:
        value: Scope name like "WEBEDIT" or "global(fs5root)", case-insensitive

    Returns:
        WebAppIdentifier for the value

    Raises:
        ValueError: If the value is not a known scope
    """
    text = value.strip()
    match = _GLOBAL_PATTERN.match(text)
    if match:
        return GlobalWebAppIdentifier(match.group("web_app_id").strip())

    try:
        scope = WebScope[text.upper()]
    except KeyError:
        scope = None
    if scope is None or scope is WebScope.GLOBAL:
        allowed = ", ".join(s.name for s in WebScope if s is not WebScope.GLOBAL)
        raise ValueError(
            f"Unknown web app scope '{text}'. Allowed values are {allowed} or global(<WebAppId>)"
        )
    return ProjectWebAppIdentifier(scope)


def parse_web_app_scopes(value: str) -> List[WebAppIdentifier]:
    """
    Parse a comma-separated list of web app scopes.

    Order and duplicates are kept.

    Args:
        value: e.g. "WEBEDIT, preview, global(fs5root)"

    Returns:
        List of WebAppIdentifier

    Raises:
        ValueError: If the list is empty or contains an unknown scope
    """
    parts = [part for part in value.split(",") if part.strip()]
    if not parts:
        raise ValueError("No web app scopes given")
    return [parse_web_app_scope(part) for part in parts]
