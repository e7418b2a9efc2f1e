"""Utility functions for foodmeds"""
import os
import logging
import importlib.resources as resources
from typing import Optional

from .config import CATALOG_CANDIDATE_PATHS, CATALOG_ENV_VAR, CATALOG_FILENAME, get_env_or_default
from .catalog.exceptions import CatalogNotFoundError

logger = logging.getLogger(__name__)

def resolve_catalog_path(explicit_path: Optional[str] = None) -> str:
    """
    Resolves the path to the disease catalog JSON file.
    Handles explicit paths, the environment override, the working-directory
    layouts used by the web app, and the catalog bundled with the package.

    Args:
        explicit_path (Optional[str]): Path given by the caller (e.g. --catalog)

    Returns:
        str: Absolute path to the catalog file

    Raises:
        CatalogNotFoundError: If no catalog file can be found
    """
    # Strategy 1: Explicit path from the caller
    if explicit_path:
        if os.path.isfile(explicit_path):
            logger.debug(f"Using explicit catalog path: {explicit_path}")
            return os.path.abspath(explicit_path)
        raise CatalogNotFoundError(f"Catalog file not found: {explicit_path}")

    # Strategy 2: Environment variable
    env_path = get_env_or_default(CATALOG_ENV_VAR)
    if env_path:
        if os.path.isfile(env_path):
            logger.debug(f"Using catalog from {CATALOG_ENV_VAR}: {env_path}")
            return os.path.abspath(env_path)
        raise CatalogNotFoundError(f"{CATALOG_ENV_VAR} points to a missing file: {env_path}")

    # Strategy 3: Known layouts relative to the working directory
    for candidate in CATALOG_CANDIDATE_PATHS:
        candidate_path = os.path.join(os.getcwd(), candidate)
        if os.path.isfile(candidate_path):
            logger.debug(f"Found catalog in working directory: {candidate_path}")
            return os.path.abspath(candidate_path)
        logger.debug(f"Catalog candidate not found: {candidate_path}")

    # Strategy 4: Catalog bundled with the package
    bundled = resources.files('foodmeds').joinpath('data').joinpath(CATALOG_FILENAME)
    if bundled.is_file():
        logger.debug(f"Using bundled catalog: {bundled}")
        return str(bundled)

    error_msg = "Could not locate a disease catalog after trying:\n"
    error_msg += "1. Explicit path argument\n"
    error_msg += f"2. The {CATALOG_ENV_VAR} environment variable\n"
    error_msg += f"3. Working-directory paths: {', '.join(CATALOG_CANDIDATE_PATHS)}\n"
    error_msg += "4. The catalog bundled with the foodmeds package"
    raise CatalogNotFoundError(error_msg)
