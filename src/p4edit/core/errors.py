"""Exception hierarchy for p4edit."""


class P4EditError(Exception):
    """Base class for all p4edit errors."""

    pass


class NoWorkspaceFolderError(P4EditError):
    """Raised when a path is not under any known workspace root."""

    pass


class NoClientBindingError(P4EditError):
    """Raised when a client-scoped command runs before the root is resolved."""

    pass


class ProcessLaunchError(P4EditError):
    """Raised when the p4 program could not be started."""

    pass


class CommandFailedError(P4EditError):
    """Raised when a p4 command exits with a non-zero status."""

    def __init__(
        self, message: str, stderr: str = "", exit_code: int | None = None
    ) -> None:
        super().__init__(message)
        self.stderr = stderr
        self.exit_code = exit_code


class CommandTimeoutError(CommandFailedError):
    """Raised when a p4 command did not finish within the configured timeout."""

    pass


class ParseIncompleteError(P4EditError):
    """Raised when command output contained no usable data."""

    pass


class ResolutionError(P4EditError):
    """Raised when no client could be determined for a workspace root."""

    pass
