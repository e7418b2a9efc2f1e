"""Custom exceptions for meal-plan generation."""
from typing import Any, List, Optional

class MealPlanError(Exception):
    """Base class for meal-plan request and response errors."""
    pass

class MealPlanRequestError(MealPlanError):
    """Raised when the requested condition is empty."""
    pass

class UnknownConditionError(MealPlanError):
    """Raised when the requested condition is not in the disease catalog."""
    pass

class MealPlanParseError(MealPlanError):
    """Raised when the model output is not JSON, even after the retry."""

    def __init__(self, message: str, raw: str = ""):
        super().__init__(message)
        self.raw = raw

class MealPlanValidationError(MealPlanError):
    """Raised when the parsed plan lacks one of the required keys."""

    def __init__(self, message: str, missing_keys: List[str], parsed: Optional[Any] = None):
        super().__init__(message)
        self.missing_keys = missing_keys
        self.parsed = parsed
