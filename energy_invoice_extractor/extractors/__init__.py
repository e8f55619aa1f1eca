"""
Extractors module for invoice data extraction.

Provides the three field locators, the rule-based OCR text extractor that
composes them, and the LLM/hybrid extractors sharing its output shape.
"""

from .base import BaseExtractor, BaseLocator, first_match
from .address_locator import AddressLocator, locate_address
from .meter_id_locator import MeterIdLocator, locate_meter_id
from .consumption_locator import ConsumptionLocator, locate_consumption_kwh
from .number_normalizer import normalize_german_decimal, parse_kwh_value, format_kwh
from .context_filter import KeywordProximityFilter
from .ocr_extractor import OCRExtractor, extract_invoice_data
from .llm_response_extractor import LLMResponseExtractor
from .hybrid_extractor import HybridExtractor

__all__ = [
    'BaseExtractor',
    'BaseLocator',
    'first_match',
    'AddressLocator',
    'locate_address',
    'MeterIdLocator',
    'locate_meter_id',
    'ConsumptionLocator',
    'locate_consumption_kwh',
    'normalize_german_decimal',
    'parse_kwh_value',
    'format_kwh',
    'KeywordProximityFilter',
    'OCRExtractor',
    'extract_invoice_data',
    'LLMResponseExtractor',
    'HybridExtractor',
]
