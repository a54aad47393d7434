"""Exception types raised while building a resource index."""

from __future__ import annotations

from pathlib import Path


class ResourceIndexError(Exception):
    """Base class for all resindex errors."""


class TraversalError(ResourceIndexError):
    """A resource directory does not exist or cannot be read."""

    def __init__(self, path: Path, cause: BaseException | str) -> None:
        self.path: Path = path
        self.cause: BaseException | str = cause
        super().__init__(f"Cannot read resource directory {path}: {cause}")


class RunError(ResourceIndexError):
    """
    Fatal failure of a whole index run. Wraps the first error encountered and
    names the operation and path that failed. The original error is available
    as `__cause__`.
    """

    def __init__(self, operation: str, path: Path, message: str) -> None:
        self.operation: str = operation
        self.path: Path = path
        super().__init__(f"Failed to {operation} {path}: {message}")


class ConfigError(ResourceIndexError, ValueError):
    """Malformed configuration file content."""
