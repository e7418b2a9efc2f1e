"""Disease and symptom matching for fuzzy search capabilities."""

from .fuzzy_matchers import FuzzyMatcher, edit_distance, normalize, similarity
from .models import Disease, NameMatch, SearchResult, Suggestion, SymptomMatch
from .search_strategy import DEFAULT_DISEASE_SEARCH_CONFIG, DiseaseSearchStrategy

__all__ = [
    "Disease",
    "NameMatch",
    "SymptomMatch",
    "Suggestion",
    "SearchResult",
    "FuzzyMatcher",
    "edit_distance",
    "normalize",
    "similarity",
    "DiseaseSearchStrategy",
    "DEFAULT_DISEASE_SEARCH_CONFIG",
]
