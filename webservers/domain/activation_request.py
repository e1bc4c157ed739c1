"""
Activation request domain object.

Describes one web server activation: which web server should become
active for which web app scopes of which project.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from webservers.domain.web_app_identifier import WebAppIdentifier


@dataclass(frozen=True)
class ActivationRequest:
    """
    Immutable web server activation request.

    Scopes are processed in the given order; duplicates are processed
    again. Contents are validated by the activation preconditions,
    not on construction.
    """

    project_name: str
    server_name: str
    scopes: Tuple[Optional[WebAppIdentifier], ...]
    force_activation: bool

    @classmethod
    def builder(cls) -> "ActivationRequestBuilder":
        """Start building a request."""
        return ActivationRequestBuilder()


class ActivationRequestBuilder:
    """Builder for ActivationRequest; every field must be supplied."""

    _UNSET = object()

    def __init__(self):
        self._project_name = self._UNSET
        self._server_name = self._UNSET
        self._scopes = self._UNSET
        self._force_activation = self._UNSET

    def at_project_name(self, project_name: str) -> "ActivationRequestBuilder":
        self._project_name = project_name
        return self

    def with_server_name(self, server_name: str) -> "ActivationRequestBuilder":
        self._server_name = server_name
        return self

    def for_scopes(self, scopes: Iterable[Optional[WebAppIdentifier]]) -> "ActivationRequestBuilder":
        self._scopes = tuple(scopes)
        return self

    def with_force_activation(self, force_activation: bool) -> "ActivationRequestBuilder":
        self._force_activation = bool(force_activation)
        return self

    def build(self) -> ActivationRequest:
        """
        Build the request.

        Raises:
            ValueError: If a field was never supplied
        """
        missing = [
            name
            for name, value in (
                ("project_name", self._project_name),
                ("server_name", self._server_name),
                ("scopes", self._scopes),
                ("force_activation", self._force_activation),
            )
            if value is self._UNSET
        ]
        if missing:
            raise ValueError(f"Missing activation request field(s): {', '.join(missing)}")
        return ActivationRequest(
            project_name=self._project_name,
            server_name=self._server_name,
            scopes=self._scopes,
            force_activation=self._force_activation,
        )
