"""
Unit tests for ActivationRequest and its builder.
"""
import dataclasses

import pytest

from webservers.domain.activation_request import ActivationRequest
from webservers.domain.web_app_identifier import PREVIEW, WEBEDIT


class TestActivationRequestBuilder:
    """Tests for ActivationRequestBuilder."""

    def test_build_complete_request(self):
        """Test building a request with all fields."""
        request = (
            ActivationRequest.builder()
            .at_project_name("Demo")
            .with_server_name("JettyA")
            .for_scopes([WEBEDIT, PREVIEW, WEBEDIT])
            .with_force_activation(True)
            .build()
        )

        assert request.project_name == "Demo"
        assert request.server_name == "JettyA"
        assert request.scopes == (WEBEDIT, PREVIEW, WEBEDIT)
        assert request.force_activation is True

    def test_missing_fields(self):
        """Test build fails until every field was supplied."""
        builder = ActivationRequest.builder().at_project_name("Demo").for_scopes([WEBEDIT])

        with pytest.raises(ValueError, match="server_name, force_activation"):
            builder.build()

    def test_empty_values_are_not_validated(self):
        """Test emptiness is left to the preconditions."""
        request = (
            ActivationRequest.builder()
            .at_project_name("")
            .with_server_name("")
            .for_scopes([None])
            .with_force_activation(False)
            .build()
        )

        assert request.project_name == ""
        assert request.scopes == (None,)

    def test_request_is_immutable(self, make_request):
        """Test request cannot be changed after construction."""
        request = make_request()

        with pytest.raises(dataclasses.FrozenInstanceError):
            request.server_name = "JettyB"

    def test_scopes_are_copied(self):
        """Test later changes of the input list do not leak into the request."""
        scopes = [WEBEDIT]
        request = (
            ActivationRequest.builder()
            .at_project_name("Demo")
            .with_server_name("JettyA")
            .for_scopes(scopes)
            .with_force_activation(False)
            .build()
        )
        scopes.append(PREVIEW)

        assert request.scopes == (WEBEDIT,)
