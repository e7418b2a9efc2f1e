"""Output handling utilities for formatting and writing results."""
import io
import os
import sys
import logging
from typing import Any, Dict, List, Optional
from .output_formatter import OutputFormatter
from .config import FILE_EXTENSION_MAP, DEFAULT_FILE_ENCODING

logger = logging.getLogger(__name__)


def determine_output_format(user_format: Optional[str], output_file_path: Optional[str]) -> str:
    """Determines the effective output format based on user input and file extension."""
    if user_format:
        return user_format

    if output_file_path:
        _, ext = os.path.splitext(output_file_path)
        ext = ext.lower()

        if ext in FILE_EXTENSION_MAP:
            return FILE_EXTENSION_MAP[ext]
        else:
            if ext:
                logger.warning(
                    f"Output file extension '{ext}' for '{output_file_path}' is not recognized. "
                    f"Defaulting to 'json' format."
                )
            else:
                logger.warning(
                    f"No file extension for '{output_file_path}'. Defaulting to 'json' format."
                )
            return 'json'

    return 'stdout'


def format_metadata_summary(metadata_dict: Optional[Dict[str, Any]]) -> str:
    """Format metadata dictionary as comment lines."""
    if not metadata_dict:
        return ''

    metadata_lines = [f"# {k}: {v}" for k, v in metadata_dict.items()]
    return '\n'.join(metadata_lines)


def render_output(
    results: Any,
    rows: List[Dict[str, Any]],
    effective_format: str,
    metadata_dict: Optional[Dict[str, Any]],
    output_formatter: OutputFormatter
) -> str:
    """Render results in the requested format and return the text."""
    metadata_summary = format_metadata_summary(metadata_dict)

    if effective_format == 'json':
        return output_formatter.format_as_json(results, metadata_dict)
    elif effective_format in ('csv', 'tsv'):
        body = (output_formatter.format_as_csv(rows) if effective_format == 'csv'
                else output_formatter.format_as_tsv(rows))
        return f"{metadata_summary}\n{body}" if metadata_summary else body
    elif effective_format == 'txt':
        # No metadata or headers for plain text
        return output_formatter.format_as_txt(rows)
    elif effective_format == 'stdout':
        buf = io.StringIO()
        if metadata_summary:
            buf.write(metadata_summary + '\n')
        output_formatter.format_as_console_table(rows, stream=buf)
        return buf.getvalue()
    else:
        raise ValueError(f"Unknown output format: {effective_format}")


def handle_output(
    results: Any,
    output_file_path: Optional[str],
    display_name: str,
    effective_format: str,
    metadata_dict: Optional[Dict[str, Any]] = None
) -> None:
    """
    Format and output results based on the specified format and destination.

    Args:
        results: Match results (suggestions, a SearchResult, diseases) to format
        output_file_path: Path to save results to (None for stdout)
        display_name: Display name of the action for logging
        effective_format: Output format ('json', 'csv', 'tsv', 'txt', 'stdout')
        metadata_dict: Optional metadata dictionary to include
    """
    output_formatter = OutputFormatter()
    rows = output_formatter.to_rows(results)

    try:
        text = render_output(results, rows, effective_format, metadata_dict, output_formatter)
        if output_file_path:
            with open(output_file_path, 'w', encoding=DEFAULT_FILE_ENCODING, newline='') as f:
                f.write(text)
            logger.info(f"Saved results for '{display_name}' to {output_file_path}")
        else:
            sys.stdout.write(text if text.endswith('\n') or not text else text + '\n')
    except ValueError as e:
        logger.error(str(e))
        print(str(e), file=sys.stderr)
    except OSError as e:
        logger.error(f"Error writing output for '{display_name}': {e}")
        print(f"Error writing output: {e}", file=sys.stderr)
