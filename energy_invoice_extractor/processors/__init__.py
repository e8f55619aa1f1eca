"""
Processors module for loading OCR text documents.
"""

from .document_processor import DocumentProcessor, llm_reply_path, read_text

__all__ = [
    'DocumentProcessor',
    'llm_reply_path',
    'read_text',
]
