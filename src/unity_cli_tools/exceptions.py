"""Unity-specific exceptions.

Every error raised by this library derives from UnityError, so callers can
catch one type. Each subclass carries a stable ``code`` string for logging
and programmatic checks.
"""


class UnityError(Exception):
    """Base exception for Unity Hub and Unity Editor operations."""

    code = "UNITY_ERROR"

    def __init__(self, message: str, context: dict | None = None):
        """Initialize with message and optional context.

        Args:
            message: Human-readable error message
            context: Optional dict with additional context (versions, paths, etc.)
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}


class UnityHubNotFoundError(UnityError):
    """Unity Hub executable is not available."""

    code = "UNITY_HUB_NOT_FOUND"

    def __init__(self, message: str = "Unity Hub is not available", context: dict | None = None):
        super().__init__(message, context)


class UnityEditorNotFoundError(UnityError):
    """Requested Unity Editor version is not installed."""

    code = "UNITY_EDITOR_NOT_FOUND"

    def __init__(self, version: str, path: str | None = None):
        location = f" at path: {path}" if path else ""
        super().__init__(
            f"Unity Editor version {version} not found{location}",
            context={"version": version, "path": path},
        )


class UnityCommandError(UnityError):
    """A Unity Hub or Unity Editor command failed."""

    code = "UNITY_COMMAND_ERROR"

    def __init__(
        self,
        message: str,
        stdout: str = "",
        stderr: str = "",
        exit_code: int | None = None,
        context: dict | None = None,
    ):
        super().__init__(message, context)
        self.stdout = stdout
        self.stderr = stderr
        self.exit_code = exit_code


class UnityInstallationError(UnityError):
    """Editor or module installation failed.

    When raised from an installation pipeline, ``events`` holds the
    error events the hub reported.
    """

    code = "UNITY_INSTALLATION_ERROR"

    def __init__(self, message: str, events: list | None = None, context: dict | None = None):
        super().__init__(message, context)
        self.events = events or []


class InstallationCancelledError(UnityError):
    """Caller stopped tracking an installation."""

    code = "UNITY_INSTALLATION_CANCELLED"

    def __init__(self, message: str = "Cancelled", context: dict | None = None):
        super().__init__(message, context)


class UnityProjectError(UnityError):
    """Project operation failed."""

    code = "UNITY_PROJECT_ERROR"


class InvalidArgumentError(UnityError):
    """Invalid argument passed to a Unity operation."""

    code = "INVALID_ARGUMENT"


class UnsupportedPlatformError(UnityError):
    """No Unity path table exists for the current platform."""

    code = "UNSUPPORTED_PLATFORM"
