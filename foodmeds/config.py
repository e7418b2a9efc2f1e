"""Configuration constants and settings for foodmeds."""
import logging
import os

logger = logging.getLogger(__name__)

# Application constants
APP_VERSION = "0.1.0"

# Matching defaults
DEFAULT_SIMILARITY_THRESHOLD = 0.6
DEFAULT_SUGGESTION_LIMIT = 10
DEFAULT_CONTEXT_MAX_ENTRIES = 2
EXACT_MATCH_SCORE = 1.0

# Suggestion kinds and tiers
KIND_NAME = "name"
KIND_SYMPTOM = "symptom"
TIER_SUBSTRING_NAME = 1
TIER_FUZZY_NAME = 2
TIER_SYMPTOM = 3

# Meal-plan responses
MEALPLAN_REQUIRED_KEYS = ("mealPlan", "summary", "nutrients")
MEALPLAN_RAW_EXCERPT_CHARS = 3000
MEALPLAN_REPEAT_TITLE_LIMIT = 2  # a title seen more often than this counts as repeated
MEALPLAN_REPEAT_ITEM_LIMIT = 3   # warn when more titles than this are repeated

# Environment variables
CATALOG_ENV_VAR = "FOODMEDS_CATALOG_PATH"
LOGFILE_ENV_VAR = "FOODMEDS_LOGFILE"
THRESHOLD_ENV_VAR = "FOODMEDS_SIMILARITY_THRESHOLD"

# Catalog lookup, relative to the working directory
CATALOG_FILENAME = "diseases.json"
CATALOG_CANDIDATE_PATHS = [
    os.path.join("backend", "data", CATALOG_FILENAME),
    os.path.join("data", CATALOG_FILENAME),
    os.path.join("frontend", "src", "data", CATALOG_FILENAME),
    os.path.join("src", "data", CATALOG_FILENAME),
    os.path.join("..", "frontend", "src", "data", CATALOG_FILENAME),
]

# Logging configuration
LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
LOGGER_NAME = "foodmeds.main"

# File handling
DEFAULT_FILE_ENCODING = 'utf-8'
VALID_OUTPUT_FORMATS = ['json', 'csv', 'tsv', 'txt', 'stdout']
FILE_EXTENSION_MAP = {
    '.json': 'json',
    '.csv': 'csv',
    '.tsv': 'tsv',
    '.txt': 'txt'
}

# Metadata parameter keys (for consistency)
METADATA_PARAM_KEYS = [
    'query', 'name', 'limit', 'threshold', 'max_entries', 'catalog'
]

# Status constants
STATUS_SUCCESS = "success"
STATUS_SUCCESS_NO_DATA = "success_no_data"

def get_env_or_default(key: str, default: str = "") -> str:
    """Get environment variable with optional default."""
    return os.getenv(key, default)

def get_float_env(key: str, default: float) -> float:
    """Get a float environment variable, falling back to default when unset or invalid."""
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Environment variable {key}='{raw}' is not a number. Using default {default}.")
        return default
