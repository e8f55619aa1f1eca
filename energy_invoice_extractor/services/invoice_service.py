"""
Invoice Service.

Orchestrates extraction, validation and JSON generation for one invoice.
"""

from typing import Dict, Optional, Any
from ..extractors.base import BaseExtractor
from ..extractors.hybrid_extractor import HybridExtractor
from ..extractors.ocr_extractor import OCRExtractor
from ..validators.data_validator import DataValidator
from ..json_generator import JSONGenerator
from ..core.logging_config import get_logger
from ..core.results import Result
from ..config.settings import Settings, get_settings

logger = get_logger(__name__)


class InvoiceService:
    """
    Service for processing invoices.

    Orchestrates extraction, validation, and JSON generation.
    """

    def __init__(
        self,
        extractor: Optional[BaseExtractor] = None,
        data_validator: Optional[DataValidator] = None,
        json_generator: Optional[JSONGenerator] = None,
        settings: Optional[Settings] = None
    ):
        """
        Initialize invoice service.

        Args:
            extractor: Optional extractor instance (creates default if None)
            data_validator: Optional data validator (creates default if None)
            json_generator: Optional JSON generator (creates default if None)
            settings: Optional settings (global settings if None)
        """
        self.settings = settings or get_settings()

        # Consult LLM replies only if enabled, otherwise rule-based engine only
        if self.settings.use_llm_response:
            self.extractor = extractor or HybridExtractor(settings)
        else:
            self.extractor = extractor or OCRExtractor(settings)
            logger.info("Using OCR text engine only (LLM responses disabled)")

        self.data_validator = data_validator or DataValidator(settings)
        self.json_generator = json_generator or JSONGenerator()

    def process_invoice(
        self,
        ocr_text: Optional[str] = None,
        llm_response: Optional[str] = None,
        filename: Optional[str] = None
    ) -> Result[Dict[str, Any]]:
        """
        Process an invoice and extract all data.

        Empty or unrecognizable text is not a failure: it yields a record
        whose fields are all null.

        Args:
            ocr_text: Optional OCR text
            llm_response: Optional raw LLM reply
            filename: Optional filename for metadata

        Returns:
            Result object with the invoice JSON dictionary
        """
        try:
            invoice_data = self.extractor.extract_all_fields(
                ocr_text=ocr_text,
                llm_response=llm_response
            )

            if invoice_data.is_empty():
                logger.info(f"No fields recognized in {filename or 'invoice text'}")

            # Still return data on invariant violations, but log them
            if not self.data_validator.validate(invoice_data):
                logger.warning("Extracted record violates field invariants")

            json_data = self.json_generator.generate_json(invoice_data, filename)
            return Result.success_result(json_data)

        except Exception as e:
            logger.error(f"Error processing invoice: {str(e)}", exc_info=True)
            return Result.failure_result(f"Failed to process invoice: {str(e)}")

    def save_invoice(
        self,
        invoice_data: Dict[str, Any],
        output_path: str
    ) -> Result[bool]:
        """
        Save invoice data to JSON file.

        Args:
            invoice_data: Invoice data dictionary
            output_path: Path to save JSON file

        Returns:
            Result indicating success or failure
        """
        if not self.json_generator.validate_json_structure(invoice_data):
            return Result.failure_result(f"Refusing to save malformed invoice data to {output_path}")

        try:
            self.json_generator.save_json(invoice_data, output_path)
            return Result.success_result(True)
        except Exception as e:
            logger.error(f"Error saving invoice: {str(e)}", exc_info=True)
            return Result.failure_result(f"Failed to save invoice: {str(e)}")
