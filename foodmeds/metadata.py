"""Metadata generation utilities for foodmeds."""
import logging
from datetime import datetime
from typing import Any, Dict
from .config import APP_VERSION, METADATA_PARAM_KEYS, STATUS_SUCCESS, STATUS_SUCCESS_NO_DATA
from .matching.models import SearchResult

logger = logging.getLogger(__name__)


def count_results(results: Any) -> int:
    """Number of result rows, counting both lists of a SearchResult."""
    if isinstance(results, SearchResult):
        return len(results.name_matches) + len(results.symptom_matches)
    return len(results) if results else 0


def create_base_metadata(
    run_start_time: datetime,
    execution_duration_ms: int,
    args: Any,
    display_name: str,
    results_count: int
) -> Dict[str, Any]:
    """Create base metadata dictionary for all actions."""
    return {
        'run_timestamp_utc': run_start_time.isoformat(),
        'action': getattr(args, 'action', None),
        'display_name': display_name,
        'tool_version': APP_VERSION,
        'execution_duration_ms': execution_duration_ms,
        'result_count': results_count,
    }


def extract_query_parameters(args: Any) -> Dict[str, str]:
    """Extract relevant parameters from args for metadata."""
    return {
        k: str(v) for k, v in vars(args).items()
        if k in METADATA_PARAM_KEYS and v is not None
    }


def create_metadata_dict(
    run_start_time: datetime,
    execution_duration_ms: int,
    args: Any,
    display_name: str,
    results: Any
) -> Dict[str, Any]:
    """Create complete metadata dictionary for a CLI run."""
    results_count = count_results(results)

    metadata_dict = create_base_metadata(
        run_start_time, execution_duration_ms, args,
        display_name, results_count
    )
    metadata_dict['parameters'] = extract_query_parameters(args)
    metadata_dict['status'] = STATUS_SUCCESS if results_count else STATUS_SUCCESS_NO_DATA

    return metadata_dict
