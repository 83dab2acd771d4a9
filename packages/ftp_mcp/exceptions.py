"""Custom exceptions for the FTP MCP server."""


class FtpMcpError(Exception):
    """Base exception for the FTP MCP server."""
    pass


class ConfigurationError(FtpMcpError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str, missing_key: str = ""):
        super().__init__(message)
        self.missing_key = missing_key


class FTPOperationError(FtpMcpError):
    """Raised when any stage of an FTP operation fails.

    Connection, protocol and local I/O faults all surface as this one
    error. ``operation`` names what was attempted and ``original_error``
    keeps the underlying exception.
    """

    def __init__(self, operation: str, original_error: Exception = None):
        self.operation = operation
        self.original_error = original_error
        super().__init__(str(self))

    @property
    def underlying_message(self) -> str:
        """Text of the wrapped error, or its type name if it has none."""
        if self.original_error is None:
            return "unknown error"
        return str(self.original_error) or type(self.original_error).__name__

    def __str__(self) -> str:
        return f"Failed to {self.operation}: {self.underlying_message}"
