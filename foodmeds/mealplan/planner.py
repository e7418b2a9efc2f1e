"""Meal-plan generation against an injected text-completion callable."""
import json
import logging
import re
from collections import Counter
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from ..config import (
    MEALPLAN_RAW_EXCERPT_CHARS,
    MEALPLAN_REPEAT_ITEM_LIMIT,
    MEALPLAN_REPEAT_TITLE_LIMIT,
    MEALPLAN_REQUIRED_KEYS,
)
from ..matching.fuzzy_matchers import normalize
from ..matching.models import Disease
from .exceptions import (
    MealPlanParseError,
    MealPlanRequestError,
    MealPlanValidationError,
    UnknownConditionError,
)
from .prompts import RETRY_SUFFIX, build_prompt

logger = logging.getLogger(__name__)

# Prompt in, raw model text out
CompletionFn = Callable[[str], str]

_FENCED_BLOCK = re.compile(r"```(?:json)?\s*(\{.*\})\s*```", re.DOTALL)
_LOOSE_OBJECT = re.compile(r"(\{.*\})", re.DOTALL)


def _loads_object(text: str) -> Optional[Dict[str, Any]]:
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        return None
    return parsed if isinstance(parsed, dict) else None


def parse_json_from_text(content: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    Extract a JSON object from model output.

    Tries the whole text first, then a fenced ```json block, then everything
    between the first '{' and the last '}'. Returns None when no attempt
    yields a JSON object.
    """
    if not content or not isinstance(content, str):
        return None
    content = content.strip()

    parsed = _loads_object(content)
    if parsed is not None:
        return parsed

    for pattern in (_FENCED_BLOCK, _LOOSE_OBJECT):
        match = pattern.search(content)
        if match:
            parsed = _loads_object(match.group(1))
            if parsed is not None:
                return parsed
    return None


def missing_required_keys(plan: Mapping[str, Any]) -> List[str]:
    return [key for key in MEALPLAN_REQUIRED_KEYS if not plan.get(key)]


def repeated_meal_titles(plan: Mapping[str, Any]) -> Dict[str, int]:
    """Titles that appear more than MEALPLAN_REPEAT_TITLE_LIMIT times across all meals."""
    meal_plan = plan.get("mealPlan")
    if not isinstance(meal_plan, dict):
        return {}

    titles = Counter()
    for items in meal_plan.values():
        if not isinstance(items, list):
            continue
        for item in items:
            title = item.get("title") if isinstance(item, dict) else None
            titles[str(title) if title else json.dumps(item, sort_keys=True)] += 1
    return {title: count for title, count in titles.items() if count > MEALPLAN_REPEAT_TITLE_LIMIT}


class MealPlanGenerator:
    """Builds the meal-plan prompt, calls the model and validates its JSON reply.

    The model is any callable taking the prompt text and returning the raw
    completion text. Conditions are accepted only when the catalog lists them.
    """

    def __init__(self, catalog: Iterable[Disease], completion_fn: Optional[CompletionFn] = None):
        self._by_normalized_name: Dict[str, Disease] = {}
        for disease in catalog:
            if disease.name:
                self._by_normalized_name.setdefault(normalize(disease.name), disease)
        self.completion_fn = completion_fn

    def resolve_condition(self, disease: Optional[str]) -> Disease:
        """Case-insensitive lookup of the requested condition in the catalog."""
        if not disease or not disease.strip():
            raise MealPlanRequestError("Please enter a disease or condition.")
        known = self._by_normalized_name.get(normalize(disease))
        if known is None:
            raise UnknownConditionError(
                f"'{disease.strip()}' is not available in the disease catalog. Please try another health condition."
            )
        return known

    def prompt_for(self, disease: str, activity_status: Optional[str] = None,
                   user: Optional[Mapping[str, Any]] = None) -> str:
        condition = self.resolve_condition(disease)
        return build_prompt(condition.name, activity_status=activity_status, user=user)

    def generate(self, disease: str, activity_status: Optional[str] = None,
                 user: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """
        Request a meal plan for a catalog condition.

        Args:
            disease (str): Condition name (case-insensitive)
            activity_status (Optional[str]): Free-text activity level
            user (Optional[Mapping[str, Any]]): Demographics (age, sex, height, weight)

        Returns:
            Dict[str, Any]: The parsed plan

        Raises:
            MealPlanRequestError: If the condition is empty or no completion function is configured
            UnknownConditionError: If the condition is not in the catalog
            MealPlanParseError: If neither reply contains a JSON object
            MealPlanValidationError: If mealPlan, summary or nutrients is missing or empty
        """
        prompt = self.prompt_for(disease, activity_status=activity_status, user=user)
        if self.completion_fn is None:
            raise MealPlanRequestError("No completion function configured for meal-plan generation.")

        raw = self.completion_fn(prompt)
        logger.debug(f"First model response: {str(raw)[:MEALPLAN_RAW_EXCERPT_CHARS]}")
        plan = parse_json_from_text(raw)

        if plan is None:
            logger.warning("First model response is not parseable JSON. Retrying with a stricter JSON requirement.")
            retry_raw = self.completion_fn(prompt + RETRY_SUFFIX)
            logger.debug(f"Retry model response: {str(retry_raw)[:MEALPLAN_RAW_EXCERPT_CHARS]}")
            plan = parse_json_from_text(retry_raw)
            if plan is None:
                excerpt = str(retry_raw or raw or "")[:MEALPLAN_RAW_EXCERPT_CHARS]
                raise MealPlanParseError("Model returned non-JSON output after retry.", raw=excerpt)

        missing = missing_required_keys(plan)
        if missing:
            logger.error(f"Parsed meal plan missing required keys {missing}; got keys {sorted(plan.keys())}")
            raise MealPlanValidationError(
                f"Model returned JSON but missing required keys ({', '.join(MEALPLAN_REQUIRED_KEYS)}).",
                missing_keys=missing,
                parsed=plan,
            )

        repeats = repeated_meal_titles(plan)
        if len(repeats) > MEALPLAN_REPEAT_ITEM_LIMIT:
            logger.warning(f"Many repeated items across meals, output may be too generic: {repeats}")

        logger.info(f"Generated meal plan for '{disease.strip()}'.")
        return plan
