"""Disease catalog loading and trusted-context helpers."""
from .exceptions import (
    CatalogError,
    CatalogNotFoundError,
    CatalogFormatError,
    DiseaseNotFoundError
)
from .loader import DiseaseCatalog, disease_from_record
from .context import build_disease_context, score_disease_for_context

__all__ = [
    'CatalogError',
    'CatalogNotFoundError',
    'CatalogFormatError',
    'DiseaseNotFoundError',
    'DiseaseCatalog',
    'disease_from_record',
    'build_disease_context',
    'score_disease_for_context',
]
