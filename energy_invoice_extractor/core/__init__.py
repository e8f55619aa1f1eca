"""
Core module providing foundational components for the application.

Includes the result record, interfaces, exceptions and result objects.
"""

from .interfaces import ILocator, IValidator
from .exceptions import InvoiceProcessingError, DocumentReadError, LLMResponseError
from .records import ExtractedInvoiceData
from .results import Result

__all__ = [
    'ILocator',
    'IValidator',
    'InvoiceProcessingError',
    'DocumentReadError',
    'LLMResponseError',
    'ExtractedInvoiceData',
    'Result',
]
