"""
Energy invoice extractor.

Turns OCR text of an Austrian electricity invoice into the postal address,
the meter-point id (Zählpunktnummer) and the current consumption in kWh.
"""

from .core.records import ExtractedInvoiceData
from .extractors.ocr_extractor import extract_invoice_data

__version__ = '1.0.0'

__all__ = [
    'ExtractedInvoiceData',
    'extract_invoice_data',
]
