"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.

Remote fetch failures have no exception class: a failed fetch degrades to
zero-valued metrics and is reported through logging, never raised.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class UsageError(ApplicationError):
    """Raised when command-line options are missing, unknown or malformed."""

    def __init__(self, message: str = "Invalid usage") -> None:
        super().__init__(message, code="CLI_USAGE_ERROR")


class CacheError(ApplicationError):
    """Raised when the result cache file cannot be opened, locked or written."""

    def __init__(self, message: str = "Cache error", path: str | None = None) -> None:
        self.path = path
        super().__init__(message, code="SYS_CACHE_ERROR")


class ConfigurationError(ApplicationError):
    """Raised when a configuration file exists but cannot be loaded or validated."""

    def __init__(self, message: str = "Invalid configuration") -> None:
        super().__init__(message, code="SYS_CONFIG_ERROR")
