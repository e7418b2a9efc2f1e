"""Meal-plan prompt construction and response validation."""
from .exceptions import (
    MealPlanError,
    MealPlanRequestError,
    UnknownConditionError,
    MealPlanParseError,
    MealPlanValidationError
)
from .prompts import RETRY_SUFFIX, build_prompt
from .planner import CompletionFn, MealPlanGenerator, parse_json_from_text

__all__ = [
    'MealPlanError',
    'MealPlanRequestError',
    'UnknownConditionError',
    'MealPlanParseError',
    'MealPlanValidationError',
    'RETRY_SUFFIX',
    'build_prompt',
    'CompletionFn',
    'MealPlanGenerator',
    'parse_json_from_text',
]
