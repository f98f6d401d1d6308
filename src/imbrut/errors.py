"""Exception hierarchy for imbrut."""

from __future__ import annotations


class ImbrutError(Exception):
    """Base class for errors the CLI reports to the user."""


class ConfigurationError(ImbrutError):
    """Missing or malformed configuration; raised before any request is sent."""


class UnsupportedAuthType(ConfigurationError):
    """The target asks for an authentication mode the HTTP checker cannot attach."""

    def __init__(self, auth_type: str):
        super().__init__(f"Unsupported authentication type: {auth_type}")
        self.auth_type = auth_type


class CredentialFileError(ImbrutError, OSError):
    """A credential file could not be opened."""


class TransportError(ImbrutError):
    """A request could not be sent or its response could not be read."""


class TooManyTransportErrors(TransportError):
    """The run recorded more transport errors than the configured limit."""


class LogicFault(Exception):
    """Internal wiring error. Never caused by user configuration."""
