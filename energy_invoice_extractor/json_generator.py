"""
JSON Generator Module

Converts extracted invoice records into JSON (per invoice and combined) and
a tabular CSV overview of a batch.
"""

import json
from datetime import datetime, timezone
from typing import Dict, Any, List, Optional
from pathlib import Path

import pandas as pd

from .core.logging_config import get_logger
from .core.records import ExtractedInvoiceData

logger = get_logger(__name__)

RECORD_FIELDS = ['address', 'meter_point_id', 'current_consumption_kwh']


class JSONGenerator:
    """
    Generates JSON output from extracted invoice data.

    Absent fields are written as JSON null, never as empty strings.
    """

    @staticmethod
    def _safe_str(value: Any) -> Optional[str]:
        """Convert value to a stripped string, keeping None and blank as None."""
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @staticmethod
    def generate_json(invoice_data: ExtractedInvoiceData, filename: Optional[str] = None) -> Dict[str, Any]:
        """
        Generate JSON structure from an extracted record.

        Args:
            invoice_data: Extracted invoice record
            filename: Optional filename for metadata

        Returns:
            Dictionary with properly structured JSON data
        """
        record = invoice_data.to_dict()
        json_output = {field: JSONGenerator._safe_str(record[field]) for field in RECORD_FIELDS}

        if filename:
            json_output['_metadata'] = {
                'source_file': filename,
                'extraction_timestamp': datetime.now(timezone.utc).isoformat()
            }

        return json_output

    @staticmethod
    def save_json(data: Dict[str, Any], output_path: str, pretty: bool = True) -> None:
        """
        Save JSON data to a file.

        Args:
            data: Dictionary to save as JSON
            output_path: Path where JSON file should be saved
            pretty: If True, format JSON with indentation
        """
        output_file = Path(output_path)
        output_file.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(output_file, 'w', encoding='utf-8') as f:
                if pretty:
                    json.dump(data, f, indent=2, ensure_ascii=False)
                else:
                    json.dump(data, f, ensure_ascii=False)

            logger.info(f"Saved JSON output to {output_path}")
        except Exception as e:
            logger.error(f"Failed to save JSON to {output_path}: {str(e)}")
            raise

    @staticmethod
    def validate_json_structure(data: Dict[str, Any]) -> bool:
        """
        Validate that JSON structure matches expected schema.

        Args:
            data: Dictionary to validate

        Returns:
            True if structure is valid, False otherwise
        """
        for field in RECORD_FIELDS:
            if field not in data:
                logger.warning(f"Missing required field: {field}")
                return False

            value = data[field]
            if value is not None and not isinstance(value, str):
                logger.warning(f"Field {field} must be a string or null")
                return False

        return True

    @staticmethod
    def generate_combined_json(all_invoice_data: List[Dict[str, Any]]) -> Dict[str, Any]:
        """
        Generate a combined JSON document with all processed invoices.

        Args:
            all_invoice_data: List of invoice JSON dictionaries

        Returns:
            Dictionary containing all invoices in a structured format
        """
        return {
            'invoices': all_invoice_data,
            'total_invoices': len(all_invoice_data),
            'metadata': {
                'generated_at': datetime.now(timezone.utc).isoformat(),
                'version': '1.0'
            }
        }

    @staticmethod
    def generate_dataframe(all_invoice_data: List[Dict[str, Any]]) -> pd.DataFrame:
        """
        Flatten invoice JSON dictionaries into one row per invoice.

        Args:
            all_invoice_data: List of invoice JSON dictionaries

        Returns:
            DataFrame with source_file and the record fields as columns
        """
        rows = []
        for invoice in all_invoice_data:
            row = {'source_file': invoice.get('_metadata', {}).get('source_file')}
            row.update({field: invoice.get(field) for field in RECORD_FIELDS})
            rows.append(row)
        return pd.DataFrame(rows, columns=['source_file'] + RECORD_FIELDS)

    @staticmethod
    def save_csv(all_invoice_data: List[Dict[str, Any]], output_path: str) -> None:
        """
        Save a batch overview as CSV.

        Args:
            all_invoice_data: List of invoice JSON dictionaries
            output_path: Path where the CSV file should be saved
        """
        output_file = Path(output_path)
        output_file.parent.mkdir(parents=True, exist_ok=True)

        frame = JSONGenerator.generate_dataframe(all_invoice_data)
        frame.to_csv(output_file, index=False, encoding='utf-8')
        logger.info(f"Saved CSV overview with {len(frame)} rows to {output_path}")
