#!/usr/bin/env python3
"""
Invoice Interpretation Engine - Command Line Entry Point.

Interprets recognized receipt/invoice text files and prints (or writes)
the structured records as JSON.

Usage:
    Command Line:
        python main.py --input receipt.txt
        python main.py --input ./ocr_texts/ --output records.json

    Python:
        from main import run_interpretation
        records = run_interpretation("receipt.txt")
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from invoice_interpreter import InvoiceAssembler
from invoice_interpreter.config import ConfigurationManager
from invoice_interpreter.utils.exceptions import (
    InputFileNotFoundError,
    InvoiceInterpretationError,
    UnsupportedFileTypeError,
)
from invoice_interpreter.utils.helpers import ensure_directory, get_file_extension
from invoice_interpreter.utils.logger import get_logger, setup_logger_from_config

SUPPORTED_EXTENSIONS = ['.txt']


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="International Invoice Text Interpretation Engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    Interpret a single OCR text:
        python main.py --input receipt.txt

    Interpret a directory of OCR texts:
        python main.py --input ./ocr_texts/ --output records.json
        """
    )

    parser.add_argument(
        "--input", "-i",
        type=str,
        required=True,
        help="Recognized-text file (.txt) or directory of them"
    )

    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="JSON output file (default: print to stdout)"
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to custom configuration file"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only log warnings and errors"
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
    # stdout carries the JSON output
    logger = setup_logger_from_config(stream=sys.stderr)

    if args.debug:
        logger.setLevel(logging.DEBUG)
        for handler in logger.handlers:
            handler.setLevel(logging.DEBUG)
    elif args.quiet:
        logger.setLevel(logging.WARNING)

    logger.info(f"Invoice interpreter {config.get('project.version', '1.0.0')}")
    logger.info(f"Input: {args.input}")
    return config


def validate_inputs(input_path: str) -> List[Path]:
    """
    Resolve the input argument to the list of text files to interpret.

    Args:
        input_path: File or directory path.

    Returns:
        Sorted list of input files.

    Raises:
        InputFileNotFoundError: If the path doesn't exist.
        UnsupportedFileTypeError: If a single file is not a .txt file.
    """
    logger = get_logger(__name__)
    path = Path(input_path)

    if not path.exists():
        raise InputFileNotFoundError(str(path))

    if path.is_file():
        if get_file_extension(path) not in SUPPORTED_EXTENSIONS:
            raise UnsupportedFileTypeError(path.suffix, SUPPORTED_EXTENSIONS)
        return [path]

    files = sorted(
        p for p in path.iterdir()
        if p.is_file() and get_file_extension(p) in SUPPORTED_EXTENSIONS
    )
    if not files:
        logger.warning(f"No supported files found in: {path}")
    else:
        logger.info(f"Found {len(files)} files to interpret")
    return files


def run_interpretation(input_path: str) -> List[Dict[str, Any]]:
    """
    Interpret every text file under input_path.

    Args:
        input_path: Text file or directory.

    Returns:
        List of record dictionaries, each with a "source_file" key.
    """
    logger = get_logger(__name__)
    assembler = InvoiceAssembler()
    results = []

    for file_path in validate_inputs(input_path):
        logger.info(f"Interpreting: {file_path.name}")
        text = file_path.read_text(encoding='utf-8')
        record = assembler.assemble(text)

        total = f"{record.total.amount} {record.currency_code}" if record.total else "N/A"
        logger.info(f"  {record.vendor} | total {total} | {record.category.value}")
        for warning in record.warnings:
            logger.warning(f"  {file_path.name}: {warning}")

        entry = record.to_dict()
        entry['source_file'] = str(file_path)
        results.append(entry)

    return results


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

        results = run_interpretation(args.input)
        output = json.dumps(results, indent=2, ensure_ascii=False)

        if args.output:
            output_path = Path(args.output)
            ensure_directory(output_path.parent)
            output_path.write_text(output, encoding='utf-8')
            logger.info(f"Wrote {len(results)} record(s) to {output_path}")
        else:
            print(output)

        return 0

    except InvoiceInterpretationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
