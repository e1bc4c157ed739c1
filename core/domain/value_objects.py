"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
from abc import ABC
from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.

    Value objects are immutable and compared by value.
    """

    def __eq__(self, other):
        """Compare value objects by their attributes."""
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self):
        """Make value objects hashable."""
        return hash(tuple(sorted(self.__dict__.items())))


class WebScope(Enum):
    """Web scope of a web application."""

    GLOBAL = "global"
    PREVIEW = "preview"
    STAGING = "staging"
    WEBEDIT = "webedit"

    def __str__(self) -> str:
        """Return scope name as used by the active web server mapping."""
        return self.name


@dataclass(frozen=True)
class WebAppId(ValueObject):
    """
    Deployable web application id.

    Global web apps are addressed by their global id, project web apps
    by project id and scope.
    """

    scope: WebScope
    project_id: Optional[int] = None
    global_web_app_id: Optional[str] = None

    def __post_init__(self):
        """Validate that the id matches its scope."""
        if self.scope is WebScope.GLOBAL:
            if not self.global_web_app_id:
                raise ValueError("Global web app id cannot be empty")
            if self.project_id is not None:
                raise ValueError("Global web app id cannot reference a project")
        else:
            if self.project_id is None:
                raise ValueError(f"Project id is required for scope {self.scope}")
            if self.global_web_app_id is not None:
                raise ValueError(f"Scope {self.scope} cannot have a global web app id")

    @classmethod
    def for_project(cls, project_id: int, scope: WebScope) -> "WebAppId":
        """Create the id of a project-local web app."""
        return cls(scope=scope, project_id=project_id)

    @classmethod
    def for_global(cls, global_web_app_id: str) -> "WebAppId":
        """Create the id of a global web app."""
        return cls(scope=WebScope.GLOBAL, global_web_app_id=global_web_app_id)

    @property
    def is_global(self) -> bool:
        return self.scope is WebScope.GLOBAL

    def __str__(self) -> str:
        """Return a readable id."""
        if self.is_global:
            return f"global({self.global_web_app_id})"
        return f"{self.scope}@project:{self.project_id}"
