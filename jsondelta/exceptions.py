"""Custom exceptions for the jsondelta engine."""


class JsonDeltaError(Exception):
    """Base exception for jsondelta errors."""
    pass


class ConfigurationError(JsonDeltaError):
    """Raised when a diff configuration option cannot be used."""
    def __init__(self, option: str, message: str, path: str = None):
        where = f" at path: {path}" if path else ""
        super().__init__(f"Invalid option '{option}'{where}: {message}")
        self.option = option
        self.message = message
        self.path = path


class ConfigParseError(JsonDeltaError):
    """Raised when a configuration or input document cannot be parsed."""
    def __init__(self, message: str, line: int = None, column: int = None, reason: str = None):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column
        self.reason = reason


class MaxDepthExceededError(JsonDeltaError):
    """Raised when maximum recursion depth is exceeded."""
    def __init__(self, depth: int, path: str):
        super().__init__(f"Maximum depth ({depth}) exceeded at path: {path}")
        self.depth = depth
        self.path = path


class PayloadSizeError(JsonDeltaError):
    """Raised when payload size exceeds limit."""
    def __init__(self, size_mb: float, limit_mb: float):
        super().__init__(f"Payload size ({size_mb:.2f}MB) exceeds limit ({limit_mb}MB)")
        self.size_mb = size_mb
        self.limit_mb = limit_mb
