"""
Services module for business logic orchestration.

Wraps extraction of single invoices and batch runs over a directory.
"""

from .invoice_service import InvoiceService
from .processing_service import ProcessingService

__all__ = [
    'InvoiceService',
    'ProcessingService',
]
