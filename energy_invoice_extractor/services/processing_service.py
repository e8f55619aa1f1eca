"""
Processing Service.

Orchestrates batch processing of multiple invoice text files.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import List, Dict, Any, Optional, Tuple
from pathlib import Path
from ..processors.document_processor import DocumentProcessor
from ..services.invoice_service import InvoiceService
from ..json_generator import JSONGenerator, RECORD_FIELDS
from ..config.settings import Settings, get_settings
from ..core.logging_config import get_logger
from ..core.results import Result

logger = get_logger(__name__)

COMBINED_JSON_NAME = "all_invoices.json"
COMBINED_CSV_NAME = "all_invoices.csv"

STATUS_SUCCESSFUL = 'successful'
STATUS_EMPTY = 'empty'
STATUS_FAILED = 'failed'


class ProcessingService:
    """
    Service for batch processing invoices.

    Handles multiple documents, optionally in a thread pool, and generates
    summaries. Extraction is a pure function of each text, so parallel and
    sequential runs produce the same output.
    """

    def __init__(
        self,
        processor: Optional[DocumentProcessor] = None,
        invoice_service: Optional[InvoiceService] = None,
        json_generator: Optional[JSONGenerator] = None,
        settings: Optional[Settings] = None
    ):
        """
        Initialize processing service.

        Args:
            processor: Optional document processor (created per directory if None)
            invoice_service: Optional invoice service (creates default if None)
            json_generator: Optional JSON generator (creates default if None)
            settings: Optional settings (global settings if None)
        """
        self.settings = settings or get_settings()
        self.processor = processor
        self.invoice_service = invoice_service or InvoiceService(settings=settings)
        self.json_generator = json_generator or JSONGenerator()

    def extract_file(self, file_path: str) -> Result[Dict[str, Any]]:
        """
        Extract invoice JSON from a single OCR text file without saving it.

        Args:
            file_path: Path to the text file

        Returns:
            Result with the invoice JSON dictionary
        """
        file_path_obj = Path(file_path)
        if not file_path_obj.exists():
            error_msg = f"File not found: {file_path}"
            logger.error(error_msg)
            return Result.failure_result(error_msg)
        if not file_path_obj.is_file():
            error_msg = f"Path is not a file: {file_path}"
            logger.error(error_msg)
            return Result.failure_result(error_msg)

        processor = self.processor or DocumentProcessor(str(file_path_obj.parent))
        document = processor.process_document_by_path(file_path)
        if not document:
            error_msg = f"Failed to load text from file: {file_path}"
            logger.error(error_msg)
            return Result.failure_result(error_msg)

        return self.invoice_service.process_invoice(
            ocr_text=document['ocr_text'],
            llm_response=document.get('llm_response'),
            filename=document['filename']
        )

    def process_single_file(
        self,
        file_path: str,
        output_dir: str = "output"
    ) -> Result[bool]:
        """
        Process a single invoice file.

        Args:
            file_path: Path to the OCR text file
            output_dir: Output directory for JSON

        Returns:
            Result indicating success or failure
        """
        try:
            logger.info(f"Processing file: {file_path}")

            invoice_result = self.extract_file(file_path)
            if invoice_result.is_failure():
                return Result.failure_result(invoice_result.get_error())

            output_path = Path(output_dir) / f"{Path(file_path).stem}.json"
            save_result = self.invoice_service.save_invoice(
                invoice_result.get_value(),
                str(output_path)
            )

            if save_result.is_failure():
                logger.error(f"Failed to save invoice data for {file_path}: {save_result.get_error()}")
                return save_result

            logger.info(f"✓ Successfully processed and saved {Path(file_path).name} to {output_path}")
            return Result.success_result(True)

        except Exception as e:
            logger.error(f"Error processing file {file_path}: {str(e)}", exc_info=True)
            return Result.failure_result(f"Error processing {file_path}: {str(e)}")

    def process_all_invoices(
        self,
        invoices_dir: str = "invoices",
        output_dir: str = "output"
    ) -> Dict[str, Any]:
        """
        Process all invoice text files in a directory.

        Args:
            invoices_dir: Directory containing OCR text files
            output_dir: Directory to save JSON and CSV output files

        Returns:
            Dictionary with processing summary
        """
        try:
            processor = self.processor or DocumentProcessor(invoices_dir)

            logger.info(f"Processing all invoices from {invoices_dir}")
            documents = processor.process_all_documents()

            if not documents:
                logger.warning("No documents were loaded")
                return {
                    'total': 0,
                    'successful': 0,
                    'empty': 0,
                    'failed': 0,
                    'output_dir': output_dir
                }

            outcomes = self._run_documents(documents, output_dir)

            counts = {STATUS_SUCCESSFUL: 0, STATUS_EMPTY: 0, STATUS_FAILED: 0}
            all_invoice_data = []
            for status, invoice_data in outcomes:
                counts[status] += 1
                if invoice_data is not None:
                    all_invoice_data.append(invoice_data)

            if all_invoice_data:
                combined_data = self.json_generator.generate_combined_json(all_invoice_data)
                self.json_generator.save_json(combined_data, str(Path(output_dir) / COMBINED_JSON_NAME))
                self.json_generator.save_csv(all_invoice_data, str(Path(output_dir) / COMBINED_CSV_NAME))

            summary = {
                'total': len(documents),
                'successful': counts[STATUS_SUCCESSFUL],
                'empty': counts[STATUS_EMPTY],
                'failed': counts[STATUS_FAILED],
                'output_dir': output_dir
            }

            self._print_summary(summary)
            return summary

        except Exception as e:
            logger.error(f"Error in batch processing: {str(e)}", exc_info=True)
            raise

    def _run_documents(
        self,
        documents: List[Dict[str, Any]],
        output_dir: str
    ) -> List[Tuple[str, Optional[Dict[str, Any]]]]:
        """
        Process documents sequentially or in a thread pool.

        Returns:
            (status, invoice JSON or None) per document, in input order
        """
        if self.settings.enable_parallel_processing and len(documents) > 1:
            logger.info(f"Processing {len(documents)} documents with {self.settings.max_workers} workers")
            with ThreadPoolExecutor(max_workers=self.settings.max_workers) as executor:
                return list(executor.map(lambda document: self._process_document(document, output_dir), documents))

        return [self._process_document(document, output_dir) for document in documents]

    def _process_document(
        self,
        document: Dict[str, Any],
        output_dir: str
    ) -> Tuple[str, Optional[Dict[str, Any]]]:
        """
        Extract and save one loaded document.

        Args:
            document: Dictionary from DocumentProcessor
            output_dir: Output directory for JSON

        Returns:
            (status, invoice JSON or None)
        """
        filename = document['filename']

        try:
            invoice_result = self.invoice_service.process_invoice(
                ocr_text=document.get('ocr_text', ''),
                llm_response=document.get('llm_response'),
                filename=filename
            )

            if invoice_result.is_failure():
                logger.warning(f"✗ Failed to process {filename}: {invoice_result.get_error()}")
                return STATUS_FAILED, None

            invoice_data = invoice_result.get_value()

            output_path = Path(output_dir) / f"{Path(filename).stem}.json"
            save_result = self.invoice_service.save_invoice(invoice_data, str(output_path))

            if save_result.is_failure():
                logger.error(f"✗ Failed to save {filename}: {save_result.get_error()}")
                return STATUS_FAILED, None

            if all(invoice_data.get(field) is None for field in RECORD_FIELDS):
                logger.info(f"○ No fields recognized in {filename}")
                return STATUS_EMPTY, invoice_data

            logger.info(f"✓ Successfully processed {filename}")
            return STATUS_SUCCESSFUL, invoice_data

        except Exception as e:
            logger.error(f"✗ Unexpected error processing {filename}: {str(e)}", exc_info=True)
            return STATUS_FAILED, None

    @staticmethod
    def _print_summary(summary: Dict[str, Any]) -> None:
        print("\n" + "=" * 60)
        print("Processing Summary")
        print("=" * 60)
        print(f"Total documents: {summary['total']}")
        print(f"Successfully processed: {summary['successful']}")
        print(f"No fields recognized: {summary['empty']}")
        print(f"Failed: {summary['failed']}")
        print(f"Output directory: {summary['output_dir']}")
        print("=" * 60)
