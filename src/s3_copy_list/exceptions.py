# src/s3_copy_list/exceptions.py
"""Custom exceptions for the s3-copy-list application."""


class S3CopyListError(Exception):
    """Base exception for all application-specific errors."""

    pass


class ConfigError(S3CopyListError):
    """Raised for configuration-related issues."""

    pass


class ToolUnavailableError(S3CopyListError):
    """Raised when the object-store client executable cannot be located."""

    pass


class MalformedPairError(S3CopyListError):
    """Raised when a copy pair has no usable source/destination separator."""

    pass


class InvalidEndpointError(S3CopyListError):
    """Raised when a source or destination fails the endpoint checks."""

    pass


class TransferError(S3CopyListError):
    """Raised when a copy or sync operation exits with a non-zero status."""

    def __init__(self, source: str, destination: str, exit_code: int) -> None:
        super().__init__(
            f"Failed to copy {source} to {destination} (exit code: {exit_code})"
        )
        self.source: str = source
        self.destination: str = destination
        self.exit_code: int = exit_code
