"""Error types shared across the package."""


class VibeError(Exception):
    """Base class for errors reported to the user."""
    pass


class NotFoundError(VibeError):
    """Raised when a category or template id is unknown."""
    pass


class SourceMissingError(VibeError):
    """Raised when a registered template document is absent from disk."""
    pass


class RepositoryUnavailableError(VibeError):
    """Raised when there is no usable git repository."""
    pass


class ValidationError(VibeError):
    """Raised for invalid arguments or malformed stored data."""
    pass


class SubprocessFailureError(VibeError):
    """Raised when an external command exits non-zero."""

    def __init__(self, command: str, returncode: int, stderr: str = ""):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        message = f"Command failed ({returncode}): {command}"
        if stderr.strip():
            message += f"\n{stderr.strip()}"
        super().__init__(message)
