from typing import Any, Dict, Iterable, List, Optional, Set, Tuple
import logging

from ..config import (
    DEFAULT_SIMILARITY_THRESHOLD,
    DEFAULT_SUGGESTION_LIMIT,
    EXACT_MATCH_SCORE,
    TIER_FUZZY_NAME,
    TIER_SUBSTRING_NAME,
    TIER_SYMPTOM,
)
from .fuzzy_matchers import FuzzyMatcher, normalize
from .models import Disease, NameMatch, SearchResult, Suggestion, SymptomMatch

logger = logging.getLogger(__name__)

DEFAULT_DISEASE_SEARCH_CONFIG = {
    "similarity_threshold": DEFAULT_SIMILARITY_THRESHOLD,
    "suggestion_limit": DEFAULT_SUGGESTION_LIMIT,
}

class DiseaseSearchStrategy:
    """Ranks catalog diseases against free-text input by name and symptom.

    Every operation is a pure function of (query, catalog). Sorts are stable,
    so entries with equal scores keep catalog order.
    """

    def __init__(
        self,
        catalog: Iterable[Disease],
        fuzzy_matcher: Optional[FuzzyMatcher] = None,
        config: Optional[Dict[str, Any]] = None
    ):
        # Iterated by every operation, several times per suggest()
        self.catalog: Tuple[Disease, ...] = tuple(catalog)
        self.config = {**DEFAULT_DISEASE_SEARCH_CONFIG, **(config or {})}
        if fuzzy_matcher is None:
            fuzzy_matcher = FuzzyMatcher(similarity_threshold=self.config["similarity_threshold"])
        elif config and "similarity_threshold" in config \
                and config["similarity_threshold"] != fuzzy_matcher.similarity_threshold:
            logger.warning(
                f"Ignoring config similarity_threshold={config['similarity_threshold']}; "
                f"the injected matcher uses {fuzzy_matcher.similarity_threshold}."
            )
        self.fuzzy_matcher = fuzzy_matcher
        self.config["similarity_threshold"] = fuzzy_matcher.similarity_threshold

        if not isinstance(self.config["suggestion_limit"], int) or self.config["suggestion_limit"] < 0:
            raise ValueError("suggestion_limit in config must be a non-negative integer")

    def find_name_matches(self, query: str) -> List[Disease]:
        q = normalize(query)
        if not q:
            return []
        return [disease for disease in self.catalog if q in disease.name.lower()]

    def find_fuzzy_name_suggestions(self, query: str, exclude: Optional[Set[str]] = None) -> List[NameMatch]:
        if not normalize(query):
            return []
        exclude = exclude or set()

        fuzzy: List[NameMatch] = []
        for disease in self.catalog:
            if disease.name in exclude:
                continue
            score = self.fuzzy_matcher.calculate_string_similarity(disease.name, query)
            if score >= self.fuzzy_matcher.similarity_threshold:
                fuzzy.append(NameMatch(disease, score))
        fuzzy.sort(key=lambda m: m.score, reverse=True)
        return fuzzy

    def find_symptom_matches(self, query: str) -> List[SymptomMatch]:
        """Return one record per disease: its first symptom (in list order) that qualifies."""
        if not normalize(query):
            return []

        results: List[SymptomMatch] = []
        for disease in self.catalog:
            for symptom in disease.symptoms:
                score = self.fuzzy_matcher.compare_symptom(symptom, query)
                if score is not None:
                    results.append(SymptomMatch(disease, symptom, score))
                    break
        results.sort(key=lambda m: m.score, reverse=True)
        return results

    def _symptom_suggestions(self, query: str, seen_pairs: Set[tuple]) -> List[Suggestion]:
        suggestions: List[Suggestion] = []
        for disease in self.catalog:
            for symptom in disease.symptoms:
                pair = (disease.name, symptom)
                if pair in seen_pairs:
                    continue
                score = self.fuzzy_matcher.compare_symptom(symptom, query)
                if score is not None:
                    suggestions.append(Suggestion.for_symptom(disease, TIER_SYMPTOM, symptom, score))
                    seen_pairs.add(pair)
        suggestions.sort(key=lambda s: s.score, reverse=True)
        return suggestions

    def suggest(self, query: str, limit: Optional[int] = None) -> List[Suggestion]:
        """
        Type-ahead suggestions in fixed tier order, truncated to `limit`.

        Tier 1 holds substring name hits (score 1.0, catalog order), Tier 2 fuzzy
        name hits not already in Tier 1, Tier 3 symptom hits labelled
        "<name> (<symptom>)". Tiers are concatenated, never re-sorted together.
        """
        if limit is None:
            limit = self.config["suggestion_limit"]
        if limit <= 0 or not normalize(query):
            return []

        out: List[Suggestion] = []
        added_names: Set[str] = set()
        for disease in self.find_name_matches(query):
            out.append(Suggestion.for_name(disease, TIER_SUBSTRING_NAME, EXACT_MATCH_SCORE))
            added_names.add(disease.name)

        for match in self.find_fuzzy_name_suggestions(query, exclude=added_names):
            out.append(Suggestion.for_name(match.disease, TIER_FUZZY_NAME, match.score))

        out.extend(self._symptom_suggestions(query, seen_pairs=set()))

        logger.debug(f"Suggestions for '{query}': {len(out)} candidates before limit {limit}.")
        return out[:limit]

    def search(self, query: str) -> SearchResult:
        """Strict name matches plus symptom matches, as shown after the user presses Enter."""
        result = SearchResult(
            query=query,
            name_matches=self.find_name_matches(query),
            symptom_matches=self.find_symptom_matches(query),
        )
        if not result.found:
            logger.info(f"No diseases found for query '{query}'.")
        else:
            logger.info(f"Query '{query}' matched {len(result.name_matches)} names "
                        f"and {len(result.symptom_matches)} diseases by symptom.")
        return result
