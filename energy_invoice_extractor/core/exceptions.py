"""
Custom exception hierarchy for the application.

Provides specific exception types for better error handling and debugging.
The extraction engine itself never raises; these cover the surrounding
file and LLM-reply handling.
"""

from typing import Optional


class InvoiceProcessingError(Exception):
    """Base exception for all invoice processing errors."""
    pass


class DocumentReadError(InvoiceProcessingError):
    """Raised when an OCR text file cannot be found or read."""

    def __init__(self, message: str, file_path: Optional[str] = None):
        super().__init__(message)
        self.file_path = file_path


class LLMResponseError(InvoiceProcessingError):
    """Raised when an LLM reply is absent or carries no decodable JSON object."""

    def __init__(self, message: str, raw_response: Optional[str] = None):
        super().__init__(message)
        self.raw_response = raw_response
