"""Exceptions raised while driving the Apollo CLI."""

from typing import Any


class ApolloToolError(Exception):
    """Base class for every error raised by gql-apollo."""


class ToolNotFound(ApolloToolError):
    """The Apollo CLI binary is missing from the expected location."""

    def __init__(self, path: Any):
        super().__init__(f"Apollo CLI not found at {path}")
        self.path = path


class ToolExecutionFailed(ApolloToolError):
    """The Apollo CLI exited with a non-zero status."""

    def __init__(self, exit_code: int, output: str):
        message = f"Apollo CLI exited with status {exit_code}"
        if output.strip():
            message = f"{message}: {output.strip()}"
        super().__init__(message)
        self.exit_code = exit_code
        self.output = output


class ToolTimedOut(ApolloToolError):
    """The Apollo CLI did not finish before the timeout elapsed."""

    def __init__(self, timeout: float, output: str = ""):
        super().__init__(f"Apollo CLI timed out after {timeout} seconds")
        self.timeout = timeout
        self.output = output


class MalformedSchemaDocument(ApolloToolError):
    """A JSON document emitted by the CLI does not have the expected shape."""

    def __init__(self, field_name: str | None, detail: str):
        if field_name:
            message = f"Malformed schema document at '{field_name}': {detail}"
        else:
            message = f"Malformed schema document: {detail}"
        super().__init__(message)
        self.field_name = field_name
        self.detail = detail


class CLIDownloadFailed(ApolloToolError):
    """The Apollo CLI bundle could not be downloaded."""

    def __init__(self, url: str, detail: str):
        super().__init__(f"Failed to download Apollo CLI from {url}: {detail}")
        self.url = url
        self.detail = detail


class ChecksumMismatch(ApolloToolError):
    """The downloaded Apollo CLI bundle does not match its expected SHA-256."""

    def __init__(self, expected: str, actual: str):
        super().__init__(f"Apollo CLI checksum mismatch: expected {expected}, got {actual}")
        self.expected = expected
        self.actual = actual


class CLIExtractionFailed(ApolloToolError):
    """The Apollo CLI bundle could not be unpacked."""

    def __init__(self, path: Any, detail: str):
        super().__init__(f"Failed to extract Apollo CLI from {path}: {detail}")
        self.path = path
        self.detail = detail
