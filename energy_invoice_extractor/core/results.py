"""
Result objects for service outcomes.

Services report per-invoice success or failure through Result so that one
bad file never aborts a batch; the extraction engine itself never fails.
"""

from typing import Optional, Generic, TypeVar
from dataclasses import dataclass

T = TypeVar('T')


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Outcome of a service operation.

    A failure always carries an error message, a success never does.
    """

    success: bool
    value: Optional[T] = None
    error: Optional[str] = None

    def __post_init__(self):
        if self.success and self.error is not None:
            raise ValueError("A successful result cannot carry an error")
        if not self.success and not self.error:
            raise ValueError("A failed result needs an error message")

    @classmethod
    def success_result(cls, value: T) -> 'Result[T]':
        return cls(success=True, value=value)

    @classmethod
    def failure_result(cls, error: str) -> 'Result[T]':
        return cls(success=False, error=error)

    def is_success(self) -> bool:
        return self.success

    def is_failure(self) -> bool:
        return not self.success

    def get_value(self) -> T:
        """
        Get the value of a successful result.

        Raises:
            ValueError: If the operation failed
        """
        if not self.success:
            raise ValueError(f"Result is a failure: {self.error}")
        return self.value

    def get_error(self) -> Optional[str]:
        return self.error
