#!/usr/bin/env python3
"""
Main Application Entry Point

Command-line interface for extracting address, meter-point id and current
consumption from OCR text files of electricity invoices.
"""

import argparse
import json
import sys
from pathlib import Path

from energy_invoice_extractor.services.processing_service import ProcessingService
from energy_invoice_extractor.core.exceptions import InvoiceProcessingError
from energy_invoice_extractor.core.logging_config import configure_from_settings, get_logger
from energy_invoice_extractor.config.settings import get_settings

logger = get_logger(__name__)


def process_single_file(file_path: str, output_dir: str = "output", print_json: bool = False) -> bool:
    """
    Process a single OCR text file.

    Args:
        file_path: Path to the text file to process
        output_dir: Directory to save JSON output
        print_json: Print the extracted JSON to stdout instead of saving it

    Returns:
        True if processing succeeded, False otherwise
    """
    try:
        processing_service = ProcessingService()

        if print_json:
            result = processing_service.extract_file(file_path)
            if result.is_success():
                print(json.dumps(result.get_value(), indent=2, ensure_ascii=False))
        else:
            result = processing_service.process_single_file(file_path, output_dir)

        if result.is_success():
            return True

        logger.error(f"Failed to process {file_path}: {result.get_error()}")
        return False

    except Exception as e:
        logger.error(f"Error processing {file_path}: {str(e)}", exc_info=True)
        return False


def process_all_invoices(invoices_dir: str = "invoices", output_dir: str = "output") -> None:
    """
    Process all OCR text files in the specified directory.

    Args:
        invoices_dir: Directory containing OCR text files
        output_dir: Directory to save JSON and CSV output files
    """
    try:
        processing_service = ProcessingService()
        processing_service.process_all_invoices(invoices_dir, output_dir)

    except InvoiceProcessingError as e:
        logger.error(str(e))
        sys.exit(1)
    except Exception as e:
        logger.error(f"Error in batch processing: {str(e)}", exc_info=True)
        sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        description='Extract address, Zählpunktnummer and current kWh from invoice OCR text'
    )

    parser.add_argument(
        '--file',
        type=str,
        help='Process a specific OCR text file'
    )

    parser.add_argument(
        '--invoices-dir',
        type=str,
        default=settings.invoices_dir,
        help=f'Directory containing OCR text files (default: {settings.invoices_dir})'
    )

    parser.add_argument(
        '--output-dir',
        type=str,
        default=settings.output_dir,
        help=f'Directory to save JSON output files (default: {settings.output_dir})'
    )

    parser.add_argument(
        '--print',
        dest='print_json',
        action='store_true',
        help='With --file: print the extracted JSON instead of saving it'
    )

    parser.add_argument(
        '--log-file',
        type=str,
        help='Also write logs to this file'
    )

    return parser


def main():
    """Main entry point for the application."""
    args = build_parser().parse_args()
    settings = get_settings()

    configure_from_settings(settings, log_file=args.log_file)

    config_errors = settings.collect_errors()
    if config_errors:
        for error in config_errors:
            logger.error(f"Invalid configuration: {error}")
        sys.exit(1)
    logger.debug(f"Effective settings: {settings.to_dict()}")

    try:
        if args.file:
            if not args.print_json:
                Path(args.output_dir).mkdir(parents=True, exist_ok=True)
            success = process_single_file(args.file, args.output_dir, args.print_json)
            sys.exit(0 if success else 1)
        else:
            Path(args.output_dir).mkdir(parents=True, exist_ok=True)
            process_all_invoices(args.invoices_dir, args.output_dir)
            sys.exit(0)

    except KeyboardInterrupt:
        logger.info("Processing interrupted by user")
        sys.exit(1)


if __name__ == '__main__':
    main()
