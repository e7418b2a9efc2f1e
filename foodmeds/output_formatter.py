import json
from typing import List, Dict, Any, Optional
import sys
import io
import csv
import logging
from tabulate import tabulate
from .config import EXACT_MATCH_SCORE, KIND_NAME, KIND_SYMPTOM
from .matching.models import Disease, NameMatch, SearchResult, Suggestion, SymptomMatch

logger = logging.getLogger(__name__)

class OutputFormatter:
    """Formats match results (or rows derived from them) for display or saving."""

    @staticmethod
    def suggestion_to_dict(suggestion: Suggestion) -> Dict[str, Any]:
        return {
            'label': suggestion.label,
            'kind': suggestion.kind,
            'tier': suggestion.tier,
            'score': round(suggestion.score, 4),
            'disease': suggestion.disease.name,
            'symptom': suggestion.symptom,
        }

    @staticmethod
    def name_match_to_dict(match: NameMatch) -> Dict[str, Any]:
        return {
            'match_type': KIND_NAME,
            'disease': match.disease.name,
            'matched_symptom': None,
            'score': round(match.score, 4),
        }

    @staticmethod
    def symptom_match_to_dict(match: SymptomMatch) -> Dict[str, Any]:
        return {
            'match_type': KIND_SYMPTOM,
            'disease': match.disease.name,
            'matched_symptom': match.matched_symptom,
            'score': round(match.score, 4),
        }

    @staticmethod
    def disease_to_summary_dict(disease: Disease) -> Dict[str, Any]:
        return {
            'name': disease.name,
            'symptom_count': len(disease.symptoms),
            'symptoms': ', '.join(disease.symptoms),
        }

    @staticmethod
    def search_result_to_rows(result: SearchResult) -> List[Dict[str, Any]]:
        """Flatten a SearchResult into rows: name matches first, then symptom matches."""
        rows = [
            OutputFormatter.name_match_to_dict(NameMatch(disease, EXACT_MATCH_SCORE))
            for disease in result.name_matches
        ]
        rows.extend(OutputFormatter.symptom_match_to_dict(m) for m in result.symptom_matches)
        return rows

    @staticmethod
    def to_rows(data: Any) -> List[Dict[str, Any]]:
        """Convert any supported result payload into a list of flat dictionaries."""
        if isinstance(data, SearchResult):
            return OutputFormatter.search_result_to_rows(data)
        rows = []
        for item in data or []:
            if isinstance(item, Suggestion):
                rows.append(OutputFormatter.suggestion_to_dict(item))
            elif isinstance(item, SymptomMatch):
                rows.append(OutputFormatter.symptom_match_to_dict(item))
            elif isinstance(item, NameMatch):
                rows.append(OutputFormatter.name_match_to_dict(item))
            elif isinstance(item, Disease):
                rows.append(OutputFormatter.disease_to_summary_dict(item))
            elif isinstance(item, dict):
                rows.append(item)
            else:
                raise TypeError(f"Cannot format result of type {type(item).__name__}")
        return rows

    @staticmethod
    def format_as_json(data_payload: Any, metadata: Dict[str, Any] = None, indent: Optional[int] = 4) -> str:
        """
        Formats the data payload and metadata into a structured JSON string.

        The output JSON will have two top-level keys: "metadata" and "data".

        Args:
            data_payload (Any): Match results or pre-built rows.
            metadata (Dict[str, Any]): The metadata dictionary for the run.
                                     If None, an empty object is written.
            indent (Optional[int]): The indentation level for pretty-printing JSON.
                                  Set to None for compact output. Defaults to 4.

        Returns:
            str: The JSON formatted string representation of the structured data.

        Raises:
            TypeError: If the payload contains values that cannot be serialized.
        """
        try:
            structured_output = {
                "metadata": metadata or {},
                "data": OutputFormatter.to_rows(data_payload)
            }
            return json.dumps(structured_output, indent=indent, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            logger.error(f"Error during JSON serialization: {e}")
            raise

    @staticmethod
    def format_as_csv(data: List[Dict[str, Any]]) -> str:
        """Formats the data into a CSV string."""
        if not data:
            return ""

        output = io.StringIO()
        writer = csv.DictWriter(output, fieldnames=data[0].keys())
        writer.writeheader()
        writer.writerows(data)
        return output.getvalue()

    @staticmethod
    def format_as_tsv(data: List[Dict[str, Any]]) -> str:
        """Formats the data into a TSV string."""
        if not data:
            return ""

        output = io.StringIO()
        writer = csv.DictWriter(output, fieldnames=data[0].keys(), delimiter='\t')
        writer.writeheader()
        writer.writerows(data)
        return output.getvalue()

    @staticmethod
    def format_as_txt(data: List[Dict[str, Any]]) -> str:
        """One line per row: the label if present, otherwise the disease name."""
        lines = []
        for row in data:
            text = row.get('label') or row.get('disease') or row.get('name')
            if row.get('matched_symptom'):
                text = f"{text} ({row['matched_symptom']})"
            if text:
                lines.append(str(text))
        return '\n'.join(lines)

    @staticmethod
    def format_as_console_table(data: List[Dict[str, Any]], stream=sys.stdout) -> None:
        """Formats rows as a console table and writes to the given stream."""
        if not data:
            logger.info("No data to display.")
            print("No diseases found.", file=stream)
            return

        headers = list(data[0].keys())
        rows = [[row.get(h) for h in headers] for row in data]
        print(tabulate(rows, headers=headers, tablefmt="grid"), file=stream)

    @staticmethod
    def format_disease_detail(disease: Disease) -> str:
        """Render the detail card for a selected disease as plain text."""
        lines = [disease.name, "=" * len(disease.name)]

        if disease.symptoms:
            lines.append("")
            lines.append("Common Symptoms:")
            lines.extend(f"  - {symptom}" for symptom in disease.symptoms)

        vitamins = disease.payload.get("vitamins") or []
        if vitamins:
            lines.append("")
            lines.append("Vitamins & Supplements:")
            for vitamin in vitamins:
                if not isinstance(vitamin, dict):
                    lines.append(f"  - {vitamin}")
                    continue
                entry = f"  - {vitamin.get('name', 'Unknown')}"
                if vitamin.get("benefit"):
                    entry += f": {vitamin['benefit']}"
                if vitamin.get("dosage"):
                    entry += f" (Dosage: {vitamin['dosage']})"
                lines.append(entry)

        foods = disease.payload.get("foods") or []
        if foods:
            lines.append("")
            lines.append("Beneficial Food Sources:")
            for food in foods:
                if not isinstance(food, dict):
                    lines.append(f"  - {food}")
                    continue
                lines.append(f"  - {food.get('name', 'Unknown')}")
                if food.get("nutrients"):
                    lines.append(f"      Nutrients: {food['nutrients']}")
                if food.get("benefit"):
                    lines.append(f"      Benefit: {food['benefit']}")

        advice = disease.payload.get("generalAdvice")
        if advice:
            lines.append("")
            lines.append(f"General Advice: {advice}")

        return '\n'.join(lines)
