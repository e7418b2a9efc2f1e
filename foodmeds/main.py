"""Main module for the foodmeds package."""
import argparse
import json
import os
import sys
import logging
from datetime import datetime, timezone
from typing import List, Optional
from dotenv import load_dotenv
from .catalog import CatalogError, DiseaseCatalog, DiseaseNotFoundError, build_disease_context
from .config import (
    DEFAULT_CONTEXT_MAX_ENTRIES,
    DEFAULT_FILE_ENCODING,
    DEFAULT_SIMILARITY_THRESHOLD,
    DEFAULT_SUGGESTION_LIMIT,
    LOG_FORMAT,
    LOGFILE_ENV_VAR,
    LOGGER_NAME,
    THRESHOLD_ENV_VAR,
    VALID_OUTPUT_FORMATS,
    get_float_env,
)
from .matching import DiseaseSearchStrategy, FuzzyMatcher
from .mealplan import CompletionFn, MealPlanError, MealPlanGenerator
from .metadata import create_metadata_dict
from .output_formatter import OutputFormatter
from .output_handler import determine_output_format, handle_output

load_dotenv()

def add_output_arguments(subparser: argparse.ArgumentParser) -> None:
    subparser.add_argument(
        '--format', '-f',
        type=str,
        choices=VALID_OUTPUT_FORMATS,
        default=None,
        help='Output format: json, csv, tsv, txt, or stdout (table to console). Inferred from -o extension if not set.'
    )
    subparser.add_argument(
        '--output', '-o', type=str, metavar='FILE_PATH',
        help='Optional path to save results as a JSON, CSV, TSV, or TXT file.'
    )

def add_threshold_argument(subparser: argparse.ArgumentParser) -> None:
    subparser.add_argument(
        '--threshold', type=float, metavar='0.0-1.0',
        default=get_float_env(THRESHOLD_ENV_VAR, DEFAULT_SIMILARITY_THRESHOLD),
        help=f'Similarity threshold for fuzzy name/symptom matching (default: {DEFAULT_SIMILARITY_THRESHOLD}, '
             f'or ${THRESHOLD_ENV_VAR}).'
    )

def setup_arg_parser():
    parser = argparse.ArgumentParser(
        description="Look up diseases by name or symptom in the FoodMeds catalog.",
        formatter_class=argparse.RawTextHelpFormatter
    )
    parser.add_argument(
        '--debug', '-v',
        action='store_true',
        help='Enable verbose debug output for troubleshooting.'
    )
    parser.add_argument(
        '--catalog', '-c', type=str, metavar='JSON_FILE',
        help='Path to the diseases.json catalog. Defaults to $FOODMEDS_CATALOG_PATH,\n'
             'then known project layouts, then the catalog bundled with the package.'
    )
    subparsers = parser.add_subparsers(
        dest='action', help='The main action to perform. Use one of the subcommands below.', required=True, metavar='ACTION'
    )

    # --- Sub-command: suggest ---
    parser_suggest = subparsers.add_parser('suggest', help='Type-ahead suggestions (name, fuzzy name, then symptom).')
    parser_suggest.add_argument('query', type=str, help='Free-text disease name or symptom.')
    parser_suggest.add_argument(
        '--limit', '-l', type=int, default=DEFAULT_SUGGESTION_LIMIT, metavar='N',
        help=f'Maximum number of suggestions (default: {DEFAULT_SUGGESTION_LIMIT}).'
    )
    add_threshold_argument(parser_suggest)
    add_output_arguments(parser_suggest)

    # --- Sub-command: search ---
    parser_search = subparsers.add_parser('search', help='Diseases matched by name and diseases matched by symptom.')
    parser_search.add_argument('query', type=str, help='Free-text disease name or symptom.')
    add_threshold_argument(parser_search)
    add_output_arguments(parser_search)

    # --- Sub-command: show ---
    parser_show = subparsers.add_parser('show', help='Show the detail card for one disease.')
    parser_show.add_argument('name', type=str, help='Exact disease name as listed in the catalog.')

    # --- Sub-command: context ---
    parser_context = subparsers.add_parser('context', help='Print the trusted local context block for a chatbot question.')
    parser_context.add_argument('query', type=str, help='The chatbot question.')
    parser_context.add_argument(
        '--max-entries', type=int, default=DEFAULT_CONTEXT_MAX_ENTRIES, metavar='N',
        help=f'Maximum number of diseases to include (default: {DEFAULT_CONTEXT_MAX_ENTRIES}).'
    )

    # --- Sub-command: mealplan ---
    parser_mealplan = subparsers.add_parser(
        'mealplan', help='Build the meal-plan prompt for a catalog disease, or validate a saved model reply.'
    )
    parser_mealplan.add_argument('disease', type=str, help='Disease name as listed in the catalog (case-insensitive).')
    parser_mealplan.add_argument('--activity', type=str, help='Activity level, e.g. "sedentary" or "very active".')
    demographics_group = parser_mealplan.add_argument_group('Demographics')
    demographics_group.add_argument('--age', type=int)
    demographics_group.add_argument('--sex', type=str)
    demographics_group.add_argument('--height', type=float, help='Height in cm.')
    demographics_group.add_argument('--weight', type=float, help='Weight in kg.')
    parser_mealplan.add_argument(
        '--response-file', type=str, metavar='FILE_PATH',
        help='Model reply saved to a file. When given, the reply is parsed and validated\n'
             'and the plan is printed as JSON; otherwise the prompt is printed.'
    )

    # --- Sub-command: list ---
    parser_list = subparsers.add_parser('list', help='List all diseases in the catalog.')
    add_output_arguments(parser_list)

    return parser

def setup_logging(debug: bool = False, log_file: str = None):
    log_level = logging.DEBUG if debug else logging.INFO
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))
    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True
    )

def build_strategy(args: argparse.Namespace, catalog: DiseaseCatalog, parser: argparse.ArgumentParser) -> DiseaseSearchStrategy:
    try:
        fuzzy_matcher = FuzzyMatcher(similarity_threshold=args.threshold)
    except ValueError as e:
        parser.error(f"Invalid --threshold: {e}")
    return DiseaseSearchStrategy(catalog, fuzzy_matcher)

def handle_suggest(args: argparse.Namespace, catalog: DiseaseCatalog, logger: logging.Logger, parser: argparse.ArgumentParser) -> tuple[Optional[list], str]:
    """Handle the suggest action."""
    display_name = "Disease Suggestions"
    if args.limit < 0:
        parser.error("--limit must not be negative.")
    strategy = build_strategy(args, catalog, parser)
    results = strategy.suggest(args.query, limit=args.limit)
    logger.info(f"{len(results)} suggestions for '{args.query}'.")
    return results, display_name

def handle_search(args: argparse.Namespace, catalog: DiseaseCatalog, logger: logging.Logger, parser: argparse.ArgumentParser):
    """Handle the search action."""
    display_name = "Disease Search"
    strategy = build_strategy(args, catalog, parser)
    return strategy.search(args.query), display_name

def handle_show(args: argparse.Namespace, catalog: DiseaseCatalog, logger: logging.Logger, parser: argparse.ArgumentParser) -> tuple[Optional[list], str]:
    """Handle the show action. Prints directly; nothing goes through handle_output."""
    display_name = "Disease Detail"
    disease = catalog.require(args.name)
    print(OutputFormatter.format_disease_detail(disease))
    return None, display_name

def handle_context(args: argparse.Namespace, catalog: DiseaseCatalog, logger: logging.Logger, parser: argparse.ArgumentParser) -> tuple[Optional[list], str]:
    """Handle the context action."""
    display_name = "Trusted Local Context"
    context = build_disease_context(catalog, args.query, max_entries=args.max_entries)
    if not context:
        logger.info(f"No trusted local context for '{args.query}'.")
    else:
        print(context)
    return None, display_name

def read_response_file(path: str) -> CompletionFn:
    """Completion callable that replays a saved model reply for every prompt."""
    with open(path, mode='r', encoding=DEFAULT_FILE_ENCODING) as f:
        reply = f.read()
    return lambda prompt: reply

def handle_mealplan(args: argparse.Namespace, catalog: DiseaseCatalog, logger: logging.Logger, parser: argparse.ArgumentParser) -> tuple[Optional[list], str]:
    """Handle the mealplan action. Prints the prompt, or the validated plan when a reply file is given."""
    display_name = "Meal Plan"
    user = {key: getattr(args, key) for key in ('age', 'sex', 'height', 'weight')}
    if all(value is None for value in user.values()):
        user = None

    if not args.response_file:
        generator = MealPlanGenerator(catalog)
        print(generator.prompt_for(args.disease, activity_status=args.activity, user=user))
        return None, display_name

    try:
        completion_fn = read_response_file(args.response_file)
    except OSError as e:
        parser.error(f"Cannot read --response-file: {e}")
    generator = MealPlanGenerator(catalog, completion_fn)
    plan = generator.generate(args.disease, activity_status=args.activity, user=user)
    print(json.dumps(plan, indent=4, ensure_ascii=False))
    return None, display_name

def handle_list(args: argparse.Namespace, catalog: DiseaseCatalog, logger: logging.Logger, parser: argparse.ArgumentParser) -> tuple[Optional[list], str]:
    """Handle the list action."""
    return list(catalog), "Disease Catalog"

def main(argv: Optional[List[str]] = None):
    parser = setup_arg_parser()
    args = parser.parse_args(argv)

    debug = getattr(args, 'debug', False)
    log_file = os.getenv(LOGFILE_ENV_VAR, None)
    setup_logging(debug, log_file)
    logger = logging.getLogger(LOGGER_NAME)
    logger.debug(f"Parsed arguments: {args}")

    handler = ACTION_HANDLERS.get(args.action)
    if handler is None:  # Should not happen due to argparse
        logger.critical(f"Unknown action: {args.action}")
        sys.exit(1)

    try:
        catalog = DiseaseCatalog.load(args.catalog)
        run_start_time = datetime.now(timezone.utc)
        results, display_name = handler(args, catalog, logger, parser)
        execution_duration_ms = int((datetime.now(timezone.utc) - run_start_time).total_seconds() * 1000)
    except DiseaseNotFoundError as e:
        logger.error(str(e))
        sys.exit(1)
    except CatalogError as e:
        logger.error(f"Catalog Error: {e}", exc_info=debug)
        sys.exit(1)
    except MealPlanError as e:
        logger.error(f"Meal Plan Error: {e}", exc_info=debug)
        sys.exit(1)

    if results is not None:
        output_file_path = getattr(args, 'output', None)
        effective_format = determine_output_format(getattr(args, 'format', None), output_file_path)
        metadata_dict = create_metadata_dict(
            run_start_time, execution_duration_ms, args,
            display_name, results
        )
        handle_output(results, output_file_path, display_name, effective_format, metadata_dict)

    logger.info(f"--- {display_name} finished ---")

# Action handlers dictionary mapping actions to their handler functions
ACTION_HANDLERS = {
    'suggest': handle_suggest,
    'search': handle_search,
    'show': handle_show,
    'context': handle_context,
    'mealplan': handle_mealplan,
    'list': handle_list,
}

if __name__ == "__main__":
    main()
