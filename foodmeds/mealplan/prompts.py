"""Prompt text for the JSON-only meal-plan request."""
from typing import Any, Mapping, Optional

RETRY_SUFFIX = "\n\nIMPORTANT: Produce ONLY valid JSON (no text)."

DEMOGRAPHIC_FIELDS = (
    ("Age", "age"),
    ("Sex", "sex"),
    ("Height(cm)", "height"),
    ("Weight(kg)", "weight"),
)

PLAN_KEYS = ("disease", "summary", "recommendedDiet", "nutrients", "mealPlan", "motivation")
MEALS = ("breakfast", "lunch", "dinner")

FEW_SHOT_EXAMPLES = """
EXAMPLE 1:
Input: Diabetes
Output (JSON only):
{
  "disease": "Diabetes",
  "summary": "Favour low-glycemic carbohydrates, lean protein and fibre to flatten glucose spikes.",
  "recommendedDiet": "Low GI, high fibre",
  "nutrients": {"calories": 1400, "protein": "80 g", "fat": "45 g", "carbohydrates": "130 g", "fiber": "28 g"},
  "mealPlan": {
    "breakfast": [{"title": "Steel-cut oats with cinnamon", "description": "Slow-release carbohydrate", "recipeLink": ""},
                  {"title": "Boiled egg", "description": "Protein to blunt the glucose rise", "recipeLink": ""}],
    "lunch": [{"title": "Chickpea and barley salad", "description": "Legume protein and fibre", "recipeLink": ""},
              {"title": "Steamed green beans", "description": "Low GI side", "recipeLink": ""}],
    "dinner": [{"title": "Lentil dal with cauliflower rice", "description": "Swap white rice for cauliflower", "recipeLink": ""},
               {"title": "Cucumber raita", "description": "Unsweetened yoghurt side", "recipeLink": ""}]
  },
  "motivation": "Steady portions and fibre keep glucose predictable."
}

EXAMPLE 2:
Input: Hypertension
Output (JSON only):
{
  "disease": "Hypertension",
  "summary": "DASH-style eating: little sodium, plenty of vegetables and fruit, whole grains.",
  "recommendedDiet": "DASH (low sodium)",
  "nutrients": {"calories": 1500, "protein": "85 g", "fat": "50 g", "carbohydrates": "140 g", "sodium_mg": 1200},
  "mealPlan": {
    "breakfast": [{"title": "Oatmeal with berries", "description": "Potassium-rich, no added salt", "recipeLink": ""},
                  {"title": "Banana", "description": "Potassium", "recipeLink": ""}],
    "lunch": [{"title": "Unsalted lentil soup", "description": "Plant protein, season with herbs", "recipeLink": ""},
              {"title": "Whole grain roll", "description": "Moderate carbohydrate", "recipeLink": ""}],
    "dinner": [{"title": "Roasted mackerel with greens", "description": "Omega-3s, lemon instead of salt", "recipeLink": ""},
               {"title": "Brown rice (small)", "description": "Whole grain side", "recipeLink": ""}]
  },
  "motivation": "Less salt and more plants protect your heart."
}
"""


def format_demographics(user: Optional[Mapping[str, Any]]) -> str:
    if not user:
        return "No user demographics provided."
    parts = []
    for label, key in DEMOGRAPHIC_FIELDS:
        value = user.get(key)
        parts.append(f"{label}: {'unknown' if value is None else value}")
    return ", ".join(parts)


def build_prompt(disease: str, activity_status: Optional[str] = None,
                 user: Optional[Mapping[str, Any]] = None) -> str:
    """
    Build the meal-plan prompt for one condition.

    The prompt asks for a single JSON object with the keys in PLAN_KEYS, a
    breakfast/lunch/dinner plan of at least two items each, and numeric
    nutrient estimates, followed by two worked examples.

    Args:
        disease (str): Condition name, as it appears in the catalog
        activity_status (Optional[str]): Free-text activity level
        user (Optional[Mapping[str, Any]]): age, sex, height (cm), weight (kg)

    Returns:
        str: The prompt text
    """
    keys = ", ".join(f'"{key}"' for key in PLAN_KEYS)
    meals = ", ".join(f'"{meal}"' for meal in MEALS)
    return f"""
You are a licensed clinical nutritionist. Use the patient demographics and health condition to produce a personalized meal plan.

Patient info:
{format_demographics(user)}
Activity level: {activity_status or 'not provided'}
Health condition: {disease}

Rules:
1) Output ONLY valid JSON, with no explanation around it. The JSON MUST include the keys {keys}.
2) "mealPlan" must contain {meals}, each an array of objects with keys "title", "description", "recipeLink".
3) Be specific to the condition: choose foods, items to avoid and swaps that matter for it.
4) Give at least 2 distinct items per meal and suggest a swap in the description where it helps.
5) Give realistic numeric estimates in "nutrients" (calories, protein, fat, carbohydrates); add fiber or sodium where relevant.
6) The same condition must always get the same plan, and different conditions must get different plans.
7) Keep strings concise. No markdown.

Follow these examples, then produce the JSON only:
{FEW_SHOT_EXAMPLES}
Produce the JSON now.
"""
