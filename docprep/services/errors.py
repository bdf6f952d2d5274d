"""Error types raised by the cleaning, processing, and config layers."""


class DocprepError(Exception):
    """Base class for all docprep errors."""


class PatternCompileError(DocprepError):
    """Raised when a built-in filter pattern fails to compile. Fatal at construction."""

    def __init__(self, pattern: str, reason: str):
        super().__init__(f"Invalid regular expression {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason


class ConfigError(DocprepError, ValueError):
    """Raised for unknown profiles, unreadable config files, or unknown pattern catalogs."""


class DocumentError(DocprepError):
    """Raised when a document cannot be loaded: not_found, outside_root, too_large, undecodable."""

    def __init__(self, message: str, reason: str = "unreadable"):
        super().__init__(message)
        self.reason = reason


class ValidationError(DocprepError, ValueError):
    """Raised when a loaded document fails validation against the processing config."""
