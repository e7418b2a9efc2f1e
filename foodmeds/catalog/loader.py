"""Read-only disease catalog loaded once from a static JSON file."""
import json
import logging
import os
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from ..config import DEFAULT_FILE_ENCODING
from ..matching.models import Disease
from .exceptions import CatalogError, CatalogFormatError, CatalogNotFoundError, DiseaseNotFoundError

logger = logging.getLogger(__name__)


def _clean_symptoms(raw_symptoms: Any, disease_name: str) -> Tuple[str, ...]:
    """Coerce a record's symptoms field into a tuple of strings."""
    if raw_symptoms is None:
        return ()
    if not isinstance(raw_symptoms, list):
        logger.warning(f"Ignoring non-list 'symptoms' for disease '{disease_name}'.")
        return ()

    symptoms = []
    for symptom in raw_symptoms:
        if isinstance(symptom, str):
            symptoms.append(symptom)
        else:
            logger.warning(f"Skipping non-string symptom {symptom!r} for disease '{disease_name}'.")
    return tuple(symptoms)


def disease_from_record(record: Dict[str, Any]) -> Disease:
    """Build a Disease from one catalog record, keeping unknown fields as payload."""
    name = record.get("name")
    if not isinstance(name, str):
        logger.warning(f"Catalog record without a usable 'name' field: {sorted(record.keys())}")
        name = ""
    symptoms = _clean_symptoms(record.get("symptoms"), name)
    payload = {k: v for k, v in record.items() if k not in ("name", "symptoms")}
    return Disease(name=name, symptoms=symptoms, payload=payload)


class DiseaseCatalog:
    """Immutable, ordered collection of Disease entries.

    The catalog is built once (usually at process start) and then shared
    read-only between matchers. There is no mutation API.
    """

    def __init__(self, diseases: Iterable[Disease], source_path: Optional[str] = None):
        self._diseases: Tuple[Disease, ...] = tuple(diseases)
        self._by_name: Dict[str, Disease] = {}
        for disease in self._diseases:
            # First occurrence wins for duplicate names
            self._by_name.setdefault(disease.name, disease)
        self.source_path = source_path

    @classmethod
    def from_records(cls, records: Iterable[Any], source_path: Optional[str] = None) -> "DiseaseCatalog":
        diseases: List[Disease] = []
        for index, record in enumerate(records):
            if not isinstance(record, dict):
                logger.warning(f"Skipping catalog entry {index}: expected an object, got {type(record).__name__}.")
                continue
            diseases.append(disease_from_record(record))
        return cls(diseases, source_path=source_path)

    @classmethod
    def from_json_file(cls, path: str) -> "DiseaseCatalog":
        """
        Load a catalog from a JSON file containing an array of disease records.

        Args:
            path (str): Path to the JSON file

        Returns:
            DiseaseCatalog: The loaded catalog

        Raises:
            CatalogNotFoundError: If the file does not exist
            CatalogFormatError: If the file is not valid UTF-8 JSON or its top level is not a list
            CatalogError: If the file exists but cannot be read
        """
        if not os.path.isfile(path):
            raise CatalogNotFoundError(f"Catalog file not found: {path}")

        try:
            with open(path, mode='r', encoding=DEFAULT_FILE_ENCODING) as f:
                raw = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise CatalogFormatError(f"Catalog file '{path}' is not valid JSON: {e}") from e
        except OSError as e:
            raise CatalogError(f"Catalog file '{path}' could not be read: {e}") from e

        if not isinstance(raw, list):
            raise CatalogFormatError(
                f"Catalog file '{path}' must contain a JSON array, got {type(raw).__name__}."
            )

        catalog = cls.from_records(raw, source_path=path)
        logger.info(f"Loaded disease catalog from: {path} (entries={len(catalog)})")
        return catalog

    @classmethod
    def load(cls, path: Optional[str] = None) -> "DiseaseCatalog":
        """Resolve the catalog location (see resolve_catalog_path) and load it."""
        from ..utils import resolve_catalog_path
        return cls.from_json_file(resolve_catalog_path(path))

    def __iter__(self) -> Iterator[Disease]:
        return iter(self._diseases)

    def __len__(self) -> int:
        return len(self._diseases)

    def __getitem__(self, index: int) -> Disease:
        return self._diseases[index]

    def __repr__(self) -> str:
        return f"DiseaseCatalog(entries={len(self)}, source_path={self.source_path!r})"

    def get(self, name: str) -> Optional[Disease]:
        return self._by_name.get(name)

    def require(self, name: str) -> Disease:
        disease = self.get(name)
        if disease is None:
            raise DiseaseNotFoundError(f"Disease '{name}' not found in catalog.")
        return disease

    def names(self) -> List[str]:
        return [disease.name for disease in self._diseases]
