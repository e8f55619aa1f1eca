"""
Document Processor Module

Loads OCR text files (one per invoice) and optional LLM replies stored next
to them as "<stem>.llm.txt".
"""

from typing import List, Dict, Optional, Any
from pathlib import Path
from ..core.exceptions import DocumentReadError
from ..core.logging_config import get_logger

logger = get_logger(__name__)

TEXT_SUFFIX = '.txt'
LLM_REPLY_SUFFIX = '.llm.txt'


def llm_reply_path(text_path: Path) -> Path:
    """Path of the LLM reply belonging to an OCR text file."""
    return text_path.with_name(text_path.stem + LLM_REPLY_SUFFIX)


def read_text(file_path: Path) -> str:
    """
    Read a UTF-8 text file.

    Raises:
        DocumentReadError: If the file is missing or not valid UTF-8
    """
    try:
        return file_path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentReadError(f"Cannot read {file_path}: {e}", file_path=str(file_path)) from e


class DocumentProcessor:
    """
    Loads OCR text documents in batch.
    """

    def __init__(self, invoices_dir: str = "invoices"):
        """
        Initialize document processor.

        Args:
            invoices_dir: Directory containing OCR text files

        Raises:
            DocumentReadError: If the directory does not exist
        """
        self.invoices_dir = Path(invoices_dir)

        if not self.invoices_dir.is_dir():
            raise DocumentReadError(f"Invoices directory not found: {invoices_dir}", file_path=invoices_dir)

    def get_text_files(self) -> List[Path]:
        """
        Get all OCR text files from the invoices directory, sorted by name.

        Returns:
            List of Path objects (LLM reply files excluded)
        """
        text_files = sorted(
            path for path in self.invoices_dir.glob(f"*{TEXT_SUFFIX}")
            if path.is_file() and not path.name.endswith(LLM_REPLY_SUFFIX)
        )
        logger.info(f"Found {len(text_files)} text files in {self.invoices_dir}")
        return text_files

    def process_single_document(self, file_path: Path) -> Optional[Dict[str, Any]]:
        """
        Load one OCR text file and its LLM reply, if present.

        Args:
            file_path: Path to the text file

        Returns:
            Dictionary with file path, filename, OCR text and LLM reply (or None),
            or None if the text cannot be read
        """
        try:
            ocr_text = read_text(file_path)

            reply_path = llm_reply_path(file_path)
            llm_response = read_text(reply_path) if reply_path.is_file() else None

            return {
                'file_path': str(file_path),
                'filename': file_path.name,
                'ocr_text': ocr_text,
                'llm_response': llm_response
            }

        except DocumentReadError as e:
            logger.error(f"Error loading {file_path}: {str(e)}")
            return None

    def process_all_documents(self) -> List[Dict[str, Any]]:
        """
        Load all OCR text documents in the invoices directory.

        Returns:
            List of document dictionaries
        """
        text_files = self.get_text_files()
        results = []

        for text_file in text_files:
            logger.debug(f"Loading: {text_file.name}")
            result = self.process_single_document(text_file)

            if result:
                results.append(result)
            else:
                logger.warning(f"Skipping {text_file.name} due to read error")

        logger.info(f"Loaded {len(results)} out of {len(text_files)} documents")
        return results

    def process_document_by_path(self, file_path: str) -> Optional[Dict[str, Any]]:
        """
        Load a specific document by file path.

        Args:
            file_path: Full path to the text file

        Returns:
            Document dictionary, or None if the file is missing or not a text file
        """
        file_path_obj = Path(file_path)

        if not file_path_obj.is_file():
            logger.error(f"File not found: {file_path}")
            return None

        if file_path_obj.suffix.lower() != TEXT_SUFFIX:
            logger.error(f"File is not a text file: {file_path}")
            return None

        return self.process_single_document(file_path_obj)
