"""
Abstract base class for rule objects.

Rule objects are handed to RuleBuilder.rule() and come out of flatten()
untouched, for the validation executor to run. The builder never calls
these methods and accepts any object; subclassing ValidationRule is only a
convenient way to document the interface an executor expects.
"""

from abc import ABC, abstractmethod
from typing import Any


class ValidationRule(ABC):
    """
    Abstract base class for custom rule objects.

    The executor calls passes() with the field name and its value, and
    message() when the value is rejected.
    """

    @abstractmethod
    def passes(self, attribute: str, value: Any) -> bool:
        """
        Check a single value.

        Args:
            attribute: Field name being validated (e.g. 'email')
            value: Value supplied for that field

        Returns:
            True if the value is acceptable
        """

    @abstractmethod
    def message(self) -> str:
        """Return the error message used when passes() is False."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__}>"
