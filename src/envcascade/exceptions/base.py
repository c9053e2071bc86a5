"""Base exception classes for envcascade.

Every envcascade exception carries structured error information:
- code: Machine-readable error identifier
- message: Human-readable error description
- details: Additional context for debugging
"""

from typing import Any, Dict, Optional


class EnvCascadeError(Exception):
    """Base exception for all envcascade errors.

    Attributes:
        code: Machine-readable error code (e.g., "NO_FILE_LOADED")
        message: Human-readable error message
        details: Optional additional context
    """

    default_code: str = "ENVCASCADE_ERROR"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        """Initialize error with structured information.

        Args:
            message: Human-readable error message
            code: Machine-readable error code (defaults to the class default_code)
            details: Optional additional context
        """
        self.code = code or self.default_code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.code}: {self.message} (details: {self.details})"
        return f"{self.code}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class LoadError(EnvCascadeError):
    """Raised when none of the candidate files could be loaded.

    Per-candidate failure reasons are deliberately not carried; only the
    candidate list is recorded in details.
    """

    default_code = "NO_FILE_LOADED"


class DocumentFormatError(EnvCascadeError):
    """Raised when a structured document does not have a mapping at its root."""

    default_code = "INVALID_DOCUMENT_ROOT"


class ParseError(EnvCascadeError):
    """Raised by strict-mode parsing for input the lenient parser would skip."""

    default_code = "PARSE_ERROR"


class UnsupportedFormatError(EnvCascadeError):
    """Raised for an unknown file format name or value."""

    default_code = "UNSUPPORTED_FORMAT"


class ConfigurationError(EnvCascadeError):
    """Raised when envcascade's own settings are invalid."""

    default_code = "INVALID_CONFIGURATION"
