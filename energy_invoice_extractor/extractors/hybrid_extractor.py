"""
Hybrid Extractor.

Uses an LLM reply as primary source and the rule-based engine as fallback.
"""

from typing import Optional
from .base import BaseExtractor
from .ocr_extractor import OCRExtractor
from .llm_response_extractor import LLMResponseExtractor
from ..config.settings import Settings
from ..core.exceptions import LLMResponseError
from ..core.records import ExtractedInvoiceData


class HybridExtractor(BaseExtractor):
    """
    Hybrid extractor that combines the LLM path and the rule-based engine.

    The fallback is a full replacement: when the LLM reply is unusable the
    engine's record is returned as a whole, fields are never merged.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        ocr_extractor: Optional[OCRExtractor] = None,
        llm_extractor: Optional[LLMResponseExtractor] = None
    ):
        """Initialize hybrid extractor with sub-extractors."""
        super().__init__(settings)
        self.ocr_extractor = ocr_extractor or OCRExtractor(settings)
        self.llm_extractor = llm_extractor or LLMResponseExtractor(settings)

    def extract_all_fields(
        self,
        ocr_text: Optional[str] = None,
        llm_response: Optional[str] = None
    ) -> ExtractedInvoiceData:
        """
        Extract all fields using the hybrid strategy.

        1. Parse the LLM reply when one is given and the LLM path is enabled
        2. Fall back to the OCR text engine when the reply is absent,
           malformed, or yields no usable field

        Args:
            ocr_text: OCR text for the engine
            llm_response: Optional raw LLM reply

        Returns:
            Extracted record
        """
        llm_data = self._extract_llm_data(llm_response)
        if llm_data is not None:
            self.logger.debug("Used LLM response")
            return llm_data

        return self.ocr_extractor.extract_all_fields(ocr_text=ocr_text)

    def _extract_llm_data(self, llm_response: Optional[str]) -> Optional[ExtractedInvoiceData]:
        """
        Parse the LLM reply, or return None when the engine has to take over.

        Args:
            llm_response: Raw LLM reply

        Returns:
            Record with at least one field, or None
        """
        if llm_response is None or not self.settings.use_llm_response:
            return None

        try:
            llm_data = self.llm_extractor.extract_all_fields(llm_response=llm_response)
        except LLMResponseError as e:
            self.logger.info(f"Falling back to OCR text engine: {e}")
            return None

        if llm_data.is_empty():
            self.logger.info("Falling back to OCR text engine: LLM response has no usable field")
            return None

        return llm_data
