"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions.
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class WebServerActivationException(DomainException):
    """Base exception for web server activation errors."""

    pass


class InvalidActivationParameterError(WebServerActivationException):
    """Raised when an activation request is missing a required parameter."""

    def __init__(self, message: str = "Invalid activation parameter"):
        super().__init__(message, code="INVALID_ACTIVATION_PARAMETER")


class ActivationPreconditionError(WebServerActivationException):
    """Raised when the remote server state does not allow an activation."""

    def __init__(self, message: str = "Preconditions for web server activation are not fulfilled"):
        super().__init__(message, code="ACTIVATION_PRECONDITION_FAILED")


class ExecutionError(WebServerActivationException):
    """Raised when a step of a web server migration could not be executed."""

    def __init__(self, message: str = "Web server migration step failed"):
        super().__init__(message, code="EXECUTION_FAILED")


class RemoteServerException(DomainException):
    """Base exception for errors reported by the remote server."""

    pass


class ProjectLockError(RemoteServerException):
    """Raised when a project cannot be locked or saved."""

    def __init__(self, message: str = "Project could not be locked"):
        super().__init__(message, code="PROJECT_LOCK_FAILED")


class WebAppPermissionDeniedError(RemoteServerException):
    """Raised when the remote server denies a deploy or undeploy."""

    def __init__(self, message: str = "Permission denied"):
        super().__init__(message, code="WEB_APP_PERMISSION_DENIED")
