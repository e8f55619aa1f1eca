"""
LLM Response Extractor.

Reads the reply of an LLM that was asked to return the invoice fields as
JSON. The reply contract is the object

    {"address": ..., "zaehlpunktnummer": ..., "kwh_aktuell": ...}

possibly wrapped in prose or markdown fences. Values are checked against the
same invariants as the rule-based engine.
"""

import json
import re
from typing import Any, Dict, Optional, Sequence
from .base import BaseExtractor
from .meter_id_locator import MeterIdLocator
from .number_normalizer import parse_kwh_value, format_kwh, within_bounds
from ..config.settings import Settings
from ..core.exceptions import LLMResponseError
from ..core.records import ExtractedInvoiceData

# Reply keys per record field, preferred key first
LLM_REPLY_KEYS: Dict[str, Sequence[str]] = {
    'address': ('address', 'adresse'),
    'meter_point_id': ('zaehlpunktnummer', 'zählpunktnummer', 'meter_point_id'),
    'current_consumption_kwh': ('kwh_aktuell', 'current_consumption_kwh'),
}

UNIT_SUFFIX = re.compile(r'\s*kwh\s*$', re.IGNORECASE)


def extract_json_object(text: str) -> Optional[str]:
    """
    Cut the outermost JSON object out of a reply.

    Args:
        text: Raw LLM reply

    Returns:
        Substring from the first "{" to the last "}", or None
    """
    start = text.find('{')
    end = text.rfind('}')
    if start == -1 or end == -1 or end <= start:
        return None
    return text[start:end + 1]


def _first_present(payload: Dict[str, Any], keys: Sequence[str]) -> Any:
    for key in keys:
        value = payload.get(key)
        if value is not None:
            return value
    return None


class LLMResponseExtractor(BaseExtractor):
    """
    Extracts invoice data from an LLM reply.

    Raises LLMResponseError when the reply is absent or has no decodable
    JSON object; values that break the record invariants are dropped.
    """

    def __init__(self, settings: Optional[Settings] = None):
        super().__init__(settings)
        self.meter_id_locator = MeterIdLocator(settings)

    def extract_all_fields(
        self,
        ocr_text: Optional[str] = None,
        llm_response: Optional[str] = None
    ) -> ExtractedInvoiceData:
        """
        Extract all fields from an LLM reply.

        Args:
            ocr_text: Not used in LLM extractor (for interface compatibility)
            llm_response: Raw reply text

        Returns:
            Extracted record (possibly empty)

        Raises:
            LLMResponseError: If the reply is absent or malformed
        """
        payload = self.parse_payload(llm_response)

        return ExtractedInvoiceData(
            address=self.extract_address(payload),
            meter_point_id=self.extract_meter_point_id(payload),
            current_consumption_kwh=self.extract_consumption(payload),
        )

    def parse_payload(self, llm_response: Optional[str]) -> Dict[str, Any]:
        """Decode the JSON object embedded in the reply."""
        if not llm_response or not llm_response.strip():
            raise LLMResponseError("LLM response is empty", raw_response=llm_response)

        json_string = extract_json_object(llm_response)
        if json_string is None:
            raise LLMResponseError("LLM response contains no JSON object", raw_response=llm_response)

        try:
            payload = json.loads(json_string)
        except json.JSONDecodeError as e:
            raise LLMResponseError(f"LLM response is not valid JSON: {e}", raw_response=llm_response) from e

        if not isinstance(payload, dict):
            raise LLMResponseError("LLM response JSON is not an object", raw_response=llm_response)

        return payload

    def extract_address(self, payload: Dict[str, Any]) -> Optional[str]:
        address = _first_present(payload, LLM_REPLY_KEYS['address'])
        if isinstance(address, str) and address.strip():
            return ' '.join(address.split())
        return None

    def extract_meter_point_id(self, payload: Dict[str, Any]) -> Optional[str]:
        """Accept the id only with the configured length, ignoring group spaces."""
        meter_id = _first_present(payload, LLM_REPLY_KEYS['meter_point_id'])
        if not isinstance(meter_id, str):
            return None

        candidate = ''.join(meter_id.split())
        if self.meter_id_locator.is_plausible(candidate):
            return candidate

        self.logger.info(f"Dropping implausible meter point id from LLM response: {meter_id!r}")
        return None

    def extract_consumption(self, payload: Dict[str, Any]) -> Optional[str]:
        """
        Normalize the kWh value, given either as JSON number or as string.

        Strings may use German separators and carry a "kWh" suffix.
        """
        kwh = _first_present(payload, LLM_REPLY_KEYS['current_consumption_kwh'])
        bounds = (self.settings.kwh_min, self.settings.kwh_max)

        # bool is an int subclass
        if isinstance(kwh, bool):
            return None
        if isinstance(kwh, (int, float)):
            value = float(kwh) if within_bounds(float(kwh), bounds) else None
        elif isinstance(kwh, str):
            value = parse_kwh_value(UNIT_SUFFIX.sub('', kwh.strip()), bounds)
        else:
            return None

        if value is None:
            self.logger.info(f"Dropping unusable kWh value from LLM response: {kwh!r}")
            return None
        return format_kwh(value)
