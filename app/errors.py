"""
Application Errors

Error types raised by the backend client and the admin authorization gate.
"""


class BackendError(Exception):
    """A call to the hosted backend failed.

    ``message`` is the backend's own message and is what end users see.
    """

    def __init__(self, message, code=None, status=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status = status

    def __str__(self):
        return self.message


class ConfigurationError(Exception):
    """Required configuration is missing; raised at startup."""


class AuthorizationError(Exception):
    """The current session may not enter the admin dashboard."""
