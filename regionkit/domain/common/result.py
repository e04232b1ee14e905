# regionkit/domain/common/result.py

"""
Result pattern used by the application layer.

A Result carries either a value or a DomainError, so UI handlers can react to
rejected input (an unknown filter mode, a quartile index out of range) without
try/except around every call.
"""
from typing import TypeVar, Generic, Optional, Union, Callable

from regionkit.domain.common.errors import DomainError, ErrorCategory

T = TypeVar('T')
U = TypeVar('U')


class Result(Generic[T]):
    """
    Success value or failure error of an operation.

    Attributes:
        value: The result value (if successful)
        error: Error object (if failed)
        is_success: Whether the operation was successful
        is_failure: Whether the operation failed
    """

    def __init__(self, value: Optional[T], error: Optional[Union[str, DomainError]]):
        self._value = value
        if isinstance(error, str):
            error = DomainError(message=error, category=ErrorCategory.UNKNOWN)
        self._error = error

    @classmethod
    def ok(cls, value: T) -> 'Result[T]':
        """Create a successful result holding value."""
        return cls(value, None)

    @classmethod
    def fail(cls, error: Union[str, DomainError]) -> 'Result[T]':
        """Create a failed result from a message or a DomainError."""
        return cls(None, error)

    @property
    def is_success(self) -> bool:
        return self._error is None

    @property
    def is_failure(self) -> bool:
        return not self.is_success

    @property
    def value(self) -> T:
        """
        Get the success value.

        Raises:
            ValueError: If the result is a failure
        """
        if self.is_failure:
            raise ValueError(f"Cannot access value of a failed result: {self._error}")
        return self._value

    @property
    def error(self) -> DomainError:
        """
        Get the error.

        Raises:
            ValueError: If the result is a success
        """
        if self.is_success:
            raise ValueError("Cannot access error of a successful result")
        return self._error

    def value_or(self, default: T) -> T:
        """Return the value, or default when the result failed."""
        return self._value if self.is_success else default

    def map(self, func: Callable[[T], U]) -> 'Result[U]':
        """
        Transform the value of a successful result.

        Exceptions raised by func turn into a failed result.
        """
        if self.is_failure:
            return Result.fail(self._error)
        try:
            return Result.ok(func(self._value))
        except Exception as e:
            return Result.fail(DomainError.from_exception(e))

    def and_then(self, func: Callable[[T], 'Result[U]']) -> 'Result[U]':
        """Chain another operation that itself returns a Result."""
        if self.is_failure:
            return Result.fail(self._error)
        return func(self._value)

    def on_success(self, action: Callable[[T], None]) -> 'Result[T]':
        if self.is_success:
            action(self._value)
        return self

    def on_failure(self, action: Callable[[DomainError], None]) -> 'Result[T]':
        if self.is_failure:
            action(self._error)
        return self

    @classmethod
    def from_operation(cls, operation_func, logger, error_type, error_message, **kwargs):
        """
        Run operation_func and wrap its outcome.

        Args:
            operation_func: Zero-argument callable to execute
            logger: Logger used to report the failure
            error_type: DomainError subclass to build on failure
            error_message: Message prefix for the error
            **kwargs: Context stored in the error details

        Returns:
            The Result returned by operation_func, or a Result wrapping its
            return value, or a failed Result if it raised.
        """
        try:
            outcome = operation_func()
        except Exception as e:
            error = error_type(message=f"{error_message}: {e}", details=kwargs, inner_error=e)
            logger.error(str(error))
            return cls.fail(error)

        if isinstance(outcome, Result):
            return outcome
        return cls.ok(outcome)

    def __repr__(self) -> str:
        if self.is_success:
            return f"Result.ok({self._value!r})"
        return f"Result.fail({self._error!r})"
