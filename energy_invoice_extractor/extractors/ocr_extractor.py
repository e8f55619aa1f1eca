"""
OCR Text Extractor.

Extracts address, meter-point id and current consumption from OCR text
using the rule-based locators. No language model is involved.
"""

from typing import Optional
from .base import BaseExtractor
from .address_locator import AddressLocator
from .meter_id_locator import MeterIdLocator
from .consumption_locator import ConsumptionLocator
from ..config.patterns import PatternConfig, get_patterns
from ..config.settings import Settings
from ..core.interfaces import ILocator
from ..core.records import ExtractedInvoiceData


class OCRExtractor(BaseExtractor):
    """
    Extracts invoice data from OCR text.

    The three locators are pure functions of the same text with no ordering
    dependency between them; partial results are valid.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        address_locator: Optional[ILocator] = None,
        meter_id_locator: Optional[ILocator] = None,
        consumption_locator: Optional[ILocator] = None
    ):
        """
        Initialize the extractor.

        Args:
            settings: Optional settings (global settings if None)
            address_locator: Optional address locator (creates default if None)
            meter_id_locator: Optional meter id locator (creates default if None)
            consumption_locator: Optional consumption locator (creates default if None)
        """
        super().__init__(settings)
        patterns = PatternConfig(settings) if settings is not None else get_patterns()
        self.address_locator = address_locator or AddressLocator(self.settings, patterns)
        self.meter_id_locator = meter_id_locator or MeterIdLocator(self.settings, patterns)
        self.consumption_locator = consumption_locator or ConsumptionLocator(self.settings, patterns)

    def extract_all_fields(
        self,
        ocr_text: Optional[str] = None,
        llm_response: Optional[str] = None
    ) -> ExtractedInvoiceData:
        """
        Extract all fields from OCR text.

        Args:
            ocr_text: Raw OCR text from the invoice
            llm_response: Not used in OCR extractor (for interface compatibility)

        Returns:
            Extracted record; all fields None for empty or unrecognizable text
        """
        if not ocr_text:
            return ExtractedInvoiceData.empty()

        data = ExtractedInvoiceData(
            address=self.address_locator.locate(ocr_text),
            meter_point_id=self.meter_id_locator.locate(ocr_text),
            current_consumption_kwh=self.consumption_locator.locate(ocr_text),
        )
        self.logger.debug(f"Extracted {data.field_count()}/3 fields from OCR text")
        return data


def extract_invoice_data(text: Optional[str]) -> ExtractedInvoiceData:
    """
    Extract address, meter-point id and current kWh from OCR text.

    Args:
        text: Raw OCR text, possibly empty

    Returns:
        Extracted record (never raises)
    """
    return OCRExtractor().extract_all_fields(ocr_text=text)
