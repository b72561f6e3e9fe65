#!/usr/bin/env python3
"""
Identity Document Form Scanner - Main Entry Point.

Reads OCR text dumps of identity documents, extracts form fields and
merges everything into one field set, as a single scanning session would.

Usage:
    Command Line:
        python main.py --input aadhaar_front.txt
        python main.py --input ./scans/ --output fields.json --validate

    Python:
        from main import run_scan
        result = run_scan(["aadhaar_front.txt", "pan.txt"])
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

# Import project modules
from config import ConfigurationManager
from form_scanner.utils.exceptions import FormScannerError
from form_scanner.utils.helpers import ensure_directory, validate_file_exists
from form_scanner.utils.logger import ROOT_LOGGER_NAME, get_logger, setup_logger_from_config

SUPPORTED_EXTENSIONS = {'.txt'}


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="Identity Document Form Scanner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    Scan a single OCR dump:
        python main.py --input aadhaar.txt

    Merge every dump in a directory and save the fields:
        python main.py --input ./scans/ --output fields.json

    Also check the form is ready to submit:
        python main.py --input ./scans/ --validate
        """
    )

    # Input/Output arguments
    parser.add_argument(
        "--input", "-i",
        type=str,
        required=True,
        help="OCR text file, or directory of .txt files, one scan per file"
    )

    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Write the merged fields as JSON to this path"
    )

    # Processing options
    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to custom configuration file"
    )

    parser.add_argument(
        "--validate",
        action="store_true",
        help="Validate the merged fields and report form readiness"
    )

    # Logging options
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only print the JSON result"
    )

    return parser.parse_args(argv)


def initialize_system(args: argparse.Namespace) -> ConfigurationManager:
    """
    Initialize configuration and logging.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Initialized configuration manager.
    """
    config = ConfigurationManager(args.config)

    logger = setup_logger_from_config()

    override = logging.DEBUG if args.debug else logging.WARNING if args.quiet else None
    if override is not None:
        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        root_logger.setLevel(override)
        for handler in root_logger.handlers:
            handler.setLevel(override)

    logger.info("=" * 60)
    logger.info("IDENTITY DOCUMENT FORM SCANNER")
    logger.info("=" * 60)
    logger.info(f"Version: {config.get('project.version', '1.0.0')}")
    logger.info(f"Input: {args.input}")

    return config


def collect_inputs(input_arg: str) -> List[Path]:
    """
    Resolve the input argument to a sorted list of OCR text files.

    Raises:
        FileNotFoundError: If input path doesn't exist.
        ValueError: If a single file has an unsupported extension.
    """
    logger = get_logger(__name__)
    input_path = Path(input_arg)

    if not input_path.exists():
        raise FileNotFoundError(f"Input path not found: {input_path}")

    if validate_file_exists(input_path):
        if input_path.suffix.lower() in SUPPORTED_EXTENSIONS:
            return [input_path]
        raise ValueError(f"Unsupported file type: {input_path.suffix}")

    files = sorted(
        p for p in input_path.iterdir()
        if p.is_file() and p.suffix.lower() in SUPPORTED_EXTENSIONS
    )
    if not files:
        logger.warning(f"No OCR text files found in: {input_path}")
    else:
        logger.info(f"Found {len(files)} files to process")
    return files


def run_scan(
    input_files: List[Union[str, Path]],
    validate: bool = False
) -> Dict[str, Any]:
    """
    Run every OCR text through one scanning session.

    Args:
        input_files: OCR text files, processed in order.
        validate: Whether to add per-field validation and form readiness.

    Returns:
        Dictionary with the merged fields, per-scan summaries and,
        when requested, validation results.

    Example:
        >>> result = run_scan(["scans/aadhaar.txt"])
        >>> result["form_data"]["adharId"]
        '1234 5678 9012'
    """
    from form_scanner.accumulation import ScanSession
    from form_scanner.validation import check_form, validate_field

    logger = get_logger(__name__)
    session = ScanSession()
    scans = []

    for file_path in input_files:
        file_path = Path(file_path)
        logger.info(f"Processing: {file_path.name}")

        text = file_path.read_text(encoding="utf-8")
        result = session.process_text(text)
        outcome = session.last_outcome

        scans.append({
            'source': str(file_path),
            'document_type': outcome.document_type.value,
            'strategy': outcome.strategy,
            'added': result.added,
            'improved': result.improved,
            'status': session.status_message(result),
        })

    report: Dict[str, Any] = {
        'scans': scans,
        'fields': session.fields.to_list(),
        'form_data': session.to_form_data(),
    }

    if validate:
        form_data = session.to_form_data()
        report['validation'] = {
            name: validate_field(name, value).to_dict()
            for name, value in form_data.items()
        }
        check = check_form(form_data)
        report['form_ready'] = check.is_ready
        report['form_message'] = check.message()

    return report


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function - entry point for command-line execution.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    try:
        args = parse_arguments(argv)

        initialize_system(args)
        logger = get_logger(__name__)

        input_files = collect_inputs(args.input)
        if not input_files:
            logger.error("No files to process")
            return 1

        report = run_scan(input_files, validate=args.validate)
        output = json.dumps(report, indent=2, ensure_ascii=False)

        if args.output:
            output_path = Path(args.output)
            ensure_directory(output_path.parent)
            output_path.write_text(output, encoding="utf-8")
            logger.info(f"Fields saved to: {output_path}")

        print(output)

        logger.info("=" * 60)
        logger.info(
            f"Scan complete. Processed {len(input_files)} files, "
            f"{len(report['fields'])} fields."
        )
        logger.info("=" * 60)

        return 0

    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except FormScannerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
