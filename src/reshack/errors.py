"""Application-level exception types for reshack."""

from __future__ import annotations


class ReshackError(Exception):
    """Base exception for reshack."""


class ConfigurationError(ReshackError):
    """Raised when startup configuration is unusable."""


class OperationValidationError(ReshackError):
    """Raised when an operation is missing a parameter or got an invalid one."""

    def __init__(self, message: str, *, parameter: str | None = None) -> None:
        super().__init__(message)
        self.parameter = parameter


class MissingParameterError(OperationValidationError):
    """Raised when a required operation parameter is absent."""

    def __init__(self, parameter: str) -> None:
        super().__init__(f"missing required parameter: {parameter}", parameter=parameter)


class UnknownOperationError(ReshackError):
    """Raised when a call names an operation nobody registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class ArtifactReadError(ReshackError):
    """Raised when a temporary extraction artifact cannot be read back."""


class OperationFailedError(ReshackError):
    """Raised at the protocol boundary to flag a rendered error result."""
