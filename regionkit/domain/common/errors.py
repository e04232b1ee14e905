#regionkit/domain/common/errors.py

"""
Error types shared by the annotation layer.

Region Store operations never raise for missing preconditions; they degrade
to no-ops. The errors below are used by the application layer, which reports
failures through Result objects instead of exceptions.
"""
from enum import Enum
from typing import Optional, Dict, Any


class ErrorCategory(Enum):
    """Categories of errors in the annotation layer."""
    VALIDATION = "Validation"
    CONFIGURATION = "Configuration"
    KEYBINDING = "Keybinding"
    SELECTION = "Selection"
    UNKNOWN = "Unknown"


class ErrorSeverity(Enum):
    """Severity levels for errors."""
    INFO = "Info"
    WARNING = "Warning"
    ERROR = "Error"
    CRITICAL = "Critical"


class DomainError:
    """
    Structured error information carried by a failed Result.

    Attributes:
        message: Human-readable error message
        category: Error category
        severity: Error severity
        code: Optional error code for programmatic handling
        details: Additional context (annotation id, quartile index, ...)
        inner_error: Original exception, if any
    """

    def __init__(self,
                 message: str,
                 category: ErrorCategory = ErrorCategory.UNKNOWN,
                 severity: ErrorSeverity = ErrorSeverity.ERROR,
                 code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None,
                 inner_error: Optional[Exception] = None):
        self.message = message
        self.category = category
        self.severity = severity
        self.code = code
        self.details = details or {}
        self.inner_error = inner_error

    @staticmethod
    def from_exception(ex: Exception,
                       category: ErrorCategory = ErrorCategory.UNKNOWN,
                       severity: ErrorSeverity = ErrorSeverity.ERROR) -> 'DomainError':
        """
        Wrap an exception into a domain error.

        Args:
            ex: The exception
            category: Error category
            severity: Error severity

        Returns:
            A DomainError instance
        """
        return DomainError(message=str(ex), category=category, severity=severity, inner_error=ex)

    def __str__(self) -> str:
        return f"{self.category.value} Error: {self.message}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, code={self.code!r})"


class ValidationError(DomainError):
    """Invalid input from the UI (unknown filter type, quartile out of range, ...)."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 inner_error: Optional[Exception] = None, code: Optional[str] = None):
        super().__init__(
            message=message,
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.WARNING,
            code=code,
            details=details,
            inner_error=inner_error
        )


class ConfigurationError(DomainError):
    """Error for configuration issues."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 inner_error: Optional[Exception] = None, code: Optional[str] = None):
        super().__init__(
            message=message,
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.ERROR,
            code=code,
            details=details,
            inner_error=inner_error
        )


class KeybindingError(DomainError):
    """Error raised while registering or releasing key bindings."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 inner_error: Optional[Exception] = None, code: Optional[str] = None):
        super().__init__(
            message=message,
            category=ErrorCategory.KEYBINDING,
            severity=ErrorSeverity.ERROR,
            code=code,
            details=details,
            inner_error=inner_error
        )


class SelectionError(DomainError):
    """No annotation (or no region) is available for the requested action."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 inner_error: Optional[Exception] = None, code: Optional[str] = None):
        super().__init__(
            message=message,
            category=ErrorCategory.SELECTION,
            severity=ErrorSeverity.WARNING,
            code=code,
            details=details,
            inner_error=inner_error
        )
