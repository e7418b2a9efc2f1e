from typing import Optional
from rapidfuzz.distance import Levenshtein
from ..config import DEFAULT_SIMILARITY_THRESHOLD, EXACT_MATCH_SCORE

def normalize(text: Optional[str]) -> str:
    return (text or "").strip().lower()

def edit_distance(a: str, b: str) -> int:
    """Minimum number of single-character insertions, deletions and substitutions turning a into b."""
    return Levenshtein.distance(a, b)

def similarity(a: Optional[str], b: Optional[str]) -> float:
    """Normalized edit-distance similarity in [0.0, 1.0].

    Both inputs are stripped and lowercased first. An empty side scores 0.0,
    even when both sides are empty, so a blank query never matches anything.
    """
    a_clean = normalize(a)
    b_clean = normalize(b)
    if not a_clean or not b_clean:
        return 0.0
    return 1.0 - edit_distance(a_clean, b_clean) / max(len(a_clean), len(b_clean))

class FuzzyMatcher:
    def __init__(self, similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD):
        if not (0.0 <= similarity_threshold <= 1.0):
            raise ValueError("similarity_threshold must be between 0.0 and 1.0")
        self.similarity_threshold = similarity_threshold

    def calculate_string_similarity(self, str1: Optional[str], str2: Optional[str]) -> float:
        return similarity(str1, str2)

    def is_exact(self, str1: Optional[str], str2: Optional[str]) -> bool:
        str1_clean = normalize(str1)
        return bool(str1_clean) and str1_clean == normalize(str2)

    def is_similar(self, str1: Optional[str], str2: Optional[str]) -> bool:
        return self.calculate_string_similarity(str1, str2) >= self.similarity_threshold

    def compare_symptom(self, symptom: Optional[str], query: Optional[str]) -> Optional[float]:
        """Score a symptom against the query, or None when it does not qualify."""
        if self.is_exact(symptom, query):
            return EXACT_MATCH_SCORE
        score = self.calculate_string_similarity(symptom, query)
        if score >= self.similarity_threshold:
            return score
        return None
