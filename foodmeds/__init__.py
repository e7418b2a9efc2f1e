"""foodmeds package"""
import logging

# Configure a null handler by default
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Expose public interface
from . import matching
from .matching import (
    Disease,
    DiseaseSearchStrategy,
    FuzzyMatcher,
    SearchResult,
    Suggestion,
    SymptomMatch,
    NameMatch,
    edit_distance,
    similarity
)
from .catalog import (
    DiseaseCatalog,
    CatalogError,
    CatalogNotFoundError,
    CatalogFormatError,
    DiseaseNotFoundError,
    build_disease_context
)
from .mealplan import (
    MealPlanGenerator,
    MealPlanError,
    build_prompt,
    parse_json_from_text
)
from .main import main

__version__ = "0.1.0"

__all__ = [
    'matching',
    'Disease',
    'DiseaseSearchStrategy',
    'FuzzyMatcher',
    'SearchResult',
    'Suggestion',
    'SymptomMatch',
    'NameMatch',
    'edit_distance',
    'similarity',
    'DiseaseCatalog',
    'CatalogError',
    'CatalogNotFoundError',
    'CatalogFormatError',
    'DiseaseNotFoundError',
    'build_disease_context',
    'MealPlanGenerator',
    'MealPlanError',
    'build_prompt',
    'parse_json_from_text',
    'main',
]
