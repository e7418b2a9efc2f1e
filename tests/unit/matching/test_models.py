"""Unit tests for foodmeds.matching.models module."""

import dataclasses

import pytest

from foodmeds.matching.models import Disease, NameMatch, SearchResult, Suggestion, SymptomMatch


class TestDisease:
    """Test Disease dataclass functionality."""

    def test_basic_initialization(self):
        disease = Disease(name="Anemia", symptoms=("fatigue", "pale skin"))

        assert disease.name == "Anemia"
        assert disease.symptoms == ("fatigue", "pale skin")
        assert disease.payload == {}

    def test_defaults(self):
        disease = Disease(name="Mystery")
        assert disease.symptoms == ()
        assert disease.payload == {}

    def test_frozen(self):
        disease = Disease(name="Anemia")
        with pytest.raises(dataclasses.FrozenInstanceError):
            disease.name = "Other"

    def test_payload_is_read_only(self):
        disease = Disease("Anemia", ("fatigue",), {"generalAdvice": "Eat greens."})
        with pytest.raises(TypeError):
            disease.payload["generalAdvice"] = "Skip meals."
        assert disease.payload["generalAdvice"] == "Eat greens."

    def test_payload_copied_from_source_record(self):
        record = {"generalAdvice": "Eat greens."}
        disease = Disease("Anemia", payload=record)
        record["generalAdvice"] = "Changed."
        assert disease.payload["generalAdvice"] == "Eat greens."

    def test_payload_ignored_for_equality_and_hash(self):
        a = Disease("Anemia", ("fatigue",), {"foods": ["Spinach"]})
        b = Disease("Anemia", ("fatigue",), {"foods": ["Lentils"]})
        assert a == b
        assert hash(a) == hash(b)

    def test_to_dict_round_trips_catalog_shape(self):
        disease = Disease("Anemia", ("fatigue",), {"generalAdvice": "Eat greens."})
        assert disease.to_dict() == {
            "name": "Anemia",
            "symptoms": ["fatigue"],
            "generalAdvice": "Eat greens.",
        }


class TestSuggestion:
    """Test Suggestion constructors and labels."""

    def test_name_suggestion_label_is_name(self):
        disease = Disease("Diabetes", ("thirst",))
        suggestion = Suggestion.for_name(disease, 1, 1.0)

        assert suggestion.kind == "name"
        assert suggestion.tier == 1
        assert suggestion.label == "Diabetes"
        assert suggestion.symptom is None

    def test_symptom_suggestion_label_discloses_symptom(self):
        disease = Disease("Diabetes", ("thirst",))
        suggestion = Suggestion.for_symptom(disease, 3, "thirst", 1.0)

        assert suggestion.kind == "symptom"
        assert suggestion.tier == 3
        assert suggestion.label == "Diabetes (thirst)"
        assert suggestion.symptom == "thirst"


class TestSearchResult:
    """Test SearchResult found flag."""

    def test_empty_result_not_found(self):
        assert SearchResult(query="xyz").found is False

    def test_name_matches_found(self):
        result = SearchResult(query="anemia", name_matches=[Disease("Anemia")])
        assert result.found is True

    def test_symptom_matches_found(self):
        disease = Disease("Common Cold", ("cough",))
        result = SearchResult(query="cough", symptom_matches=[SymptomMatch(disease, "cough", 1.0)])
        assert result.found is True


class TestMatchRecords:

    def test_name_match_fields(self):
        match = NameMatch(Disease("Anemia"), 0.75)
        assert match.disease.name == "Anemia"
        assert match.score == 0.75

    def test_symptom_match_fields(self):
        match = SymptomMatch(Disease("Common Cold"), "cough", 1.0)
        assert match.matched_symptom == "cough"
        assert match.score == 1.0
