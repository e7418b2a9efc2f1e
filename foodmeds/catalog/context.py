"""Keyword-scored "trusted local knowledge" block for chatbot prompts."""
import logging
from typing import Any, Iterable, List, Tuple

from ..config import DEFAULT_CONTEXT_MAX_ENTRIES
from ..matching.fuzzy_matchers import normalize
from ..matching.models import Disease

logger = logging.getLogger(__name__)

CONTEXT_HEADER = "Trusted local knowledge:\n"

FOODS_FIELDS = ("foods", "diet", "recommendations")
CURE_FIELDS = ("cure", "treatment", "tips")

NAME_WEIGHT = 6
FOODS_WEIGHT = 4
CURE_WEIGHT = 3
SYMPTOMS_WEIGHT = 2
MIN_KEYWORD_LENGTH = 4


def flatten_text(value: Any) -> str:
    """Render a payload value (str, list, dict, nested) as plain comma-joined text."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        return ", ".join(t for t in (flatten_text(v) for v in value.values()) if t)
    if isinstance(value, (list, tuple)):
        return ", ".join(t for t in (flatten_text(v) for v in value) if t)
    return str(value)


def _first_present(disease: Disease, fields: Tuple[str, ...]) -> str:
    for field_name in fields:
        text = flatten_text(disease.payload.get(field_name))
        if text:
            return text
    return ""


def score_disease_for_context(disease: Disease, query: str) -> float:
    """Score how relevant a disease record is to a free-text chatbot query."""
    q = normalize(query)
    if not q:
        return 0.0

    name = disease.name.lower()
    foods = _first_present(disease, FOODS_FIELDS).lower()
    cure = _first_present(disease, CURE_FIELDS).lower()
    symptoms = flatten_text(list(disease.symptoms)).lower()

    score = 0.0
    if q in name:
        score += NAME_WEIGHT
    if q in foods:
        score += FOODS_WEIGHT
    if q in cure:
        score += CURE_WEIGHT
    if q in symptoms:
        score += SYMPTOMS_WEIGHT

    for word in q.split():
        if len(word) >= MIN_KEYWORD_LENGTH:
            if word in name:
                score += 1
            if word in foods:
                score += 1
            if word in symptoms:
                score += 0.5
    return score


def _format_entry(position: int, disease: Disease) -> str:
    lines = [f"\n{position}. {disease.name or 'Unknown'}\n"]
    foods = flatten_text(disease.payload.get("foods"))
    if foods:
        lines.append(f"Foods / Diet: {foods}\n")
    recommendations = flatten_text(disease.payload.get("recommendations"))
    if recommendations:
        lines.append(f"Recommendations: {recommendations}\n")
    cure = flatten_text(disease.payload.get("cure"))
    if cure:
        lines.append(f"Tips: {cure}\n")
    if disease.symptoms:
        lines.append(f"Symptoms: {flatten_text(list(disease.symptoms))}\n")
    return "".join(lines)


def build_disease_context(
    catalog: Iterable[Disease],
    query: str,
    max_entries: int = DEFAULT_CONTEXT_MAX_ENTRIES
) -> str:
    """
    Build a short text block describing the catalog entries most relevant to a query.

    The block is meant to be prepended to an LLM prompt by the chatbot layer.
    Returns an empty string when the query is blank, the catalog is empty,
    or nothing scores above zero.

    Args:
        catalog: Diseases to score, in catalog order
        query (str): Free-text user question
        max_entries (int): Maximum number of diseases to include

    Returns:
        str: The formatted context, or "" when there is nothing relevant
    """
    if not normalize(query) or max_entries <= 0:
        return ""

    scored: List[Tuple[Disease, float]] = []
    for disease in catalog:
        score = score_disease_for_context(disease, query)
        if score > 0:
            scored.append((disease, score))

    if not scored:
        logger.debug(f"No catalog entries relevant to context query '{query}'.")
        return ""

    scored.sort(key=lambda item: item[1], reverse=True)
    top = [disease for disease, _score in scored[:max_entries]]
    logger.debug(f"Context query '{query}' matched: {[d.name for d in top]}")

    return CONTEXT_HEADER + "".join(_format_entry(i, d) for i, d in enumerate(top, start=1))
