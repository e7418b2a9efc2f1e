"""Unit tests for foodmeds.output_handler and foodmeds.metadata modules."""

import argparse
import json
from datetime import datetime, timezone

import pytest

from foodmeds.matching.models import Disease, SearchResult, Suggestion
from foodmeds.metadata import count_results, create_metadata_dict, extract_query_parameters
from foodmeds.output_handler import determine_output_format, format_metadata_summary, handle_output


@pytest.fixture
def suggestions():
    disease = Disease("Diabetes", ("thirst",))
    return [Suggestion.for_name(disease, 1, 1.0), Suggestion.for_symptom(disease, 3, "thirst", 1.0)]


class TestDetermineOutputFormat:

    def test_user_format_wins(self):
        assert determine_output_format("csv", "out.json") == "csv"

    @pytest.mark.parametrize("path,expected", [
        ("out.json", "json"),
        ("out.CSV", "csv"),
        ("out.tsv", "tsv"),
        ("out.txt", "txt"),
        ("out.xlsx", "json"),
        ("out", "json"),
    ])
    def test_inferred_from_extension(self, path, expected):
        assert determine_output_format(None, path) == expected

    def test_stdout_default(self):
        assert determine_output_format(None, None) == "stdout"


class TestFormatMetadataSummary:

    def test_comment_lines(self):
        assert format_metadata_summary({"a": 1, "b": "x"}) == "# a: 1\n# b: x"

    def test_empty(self):
        assert format_metadata_summary(None) == ""
        assert format_metadata_summary({}) == ""


class TestHandleOutput:

    def test_json_to_file(self, suggestions, temp_dir):
        path = temp_dir / "out.json"
        handle_output(suggestions, str(path), "Disease Suggestions", "json", {"status": "success"})

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["metadata"]["status"] == "success"
        assert [row["label"] for row in data["data"]] == ["Diabetes", "Diabetes (thirst)"]

    def test_csv_to_file_with_metadata_comments(self, suggestions, temp_dir):
        path = temp_dir / "out.csv"
        handle_output(suggestions, str(path), "Disease Suggestions", "csv", {"status": "success"})

        lines = path.read_text(encoding="utf-8").splitlines()
        assert lines[0] == "# status: success"
        assert lines[1] == "label,kind,tier,score,disease,symptom"

    def test_txt_to_stdout(self, suggestions, capsys):
        handle_output(suggestions, None, "Disease Suggestions", "txt")
        assert capsys.readouterr().out == "Diabetes\nDiabetes (thirst)\n"

    def test_stdout_table(self, suggestions, capsys):
        handle_output(suggestions, None, "Disease Suggestions", "stdout", {"status": "success"})
        out = capsys.readouterr().out
        assert out.startswith("# status: success\n+")
        assert "Diabetes (thirst)" in out

    def test_unknown_format_reported(self, suggestions, capsys):
        handle_output(suggestions, None, "Disease Suggestions", "xml")
        assert "Unknown output format: xml" in capsys.readouterr().err

    def test_unwritable_path_reported(self, suggestions, temp_dir, capsys):
        handle_output(suggestions, str(temp_dir / "missing" / "out.json"), "Disease Suggestions", "json")
        assert "Error writing output" in capsys.readouterr().err


class TestMetadata:

    def test_count_results(self):
        result = SearchResult(query="x", name_matches=[Disease("A"), Disease("B")])
        assert count_results(result) == 2
        assert count_results([1, 2, 3]) == 3
        assert count_results(None) == 0

    def test_extract_query_parameters(self):
        args = argparse.Namespace(action="suggest", query="cough", limit=10, threshold=0.6,
                                  catalog=None, debug=False)
        assert extract_query_parameters(args) == {"query": "cough", "limit": "10", "threshold": "0.6"}

    def test_create_metadata_dict(self, suggestions):
        args = argparse.Namespace(action="suggest", query="diab", limit=10)
        start = datetime(2024, 1, 1, tzinfo=timezone.utc)
        metadata = create_metadata_dict(start, 5, args, "Disease Suggestions", suggestions)

        assert metadata["run_timestamp_utc"] == "2024-01-01T00:00:00+00:00"
        assert metadata["action"] == "suggest"
        assert metadata["result_count"] == 2
        assert metadata["execution_duration_ms"] == 5
        assert metadata["status"] == "success"
        assert metadata["parameters"] == {"query": "diab", "limit": "10"}

    def test_no_data_status(self):
        args = argparse.Namespace(action="search", query="zzz")
        metadata = create_metadata_dict(datetime.now(timezone.utc), 0, args, "Disease Search", SearchResult("zzz"))
        assert metadata["status"] == "success_no_data"
