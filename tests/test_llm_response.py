"""
Tests for LLM reply parsing and the hybrid LLM/engine strategy.
"""

import json

import pytest
from unittest.mock import Mock
from energy_invoice_extractor.config.settings import Settings
from energy_invoice_extractor.core.exceptions import LLMResponseError
from energy_invoice_extractor.core.records import ExtractedInvoiceData
from energy_invoice_extractor.extractors.hybrid_extractor import HybridExtractor
from energy_invoice_extractor.extractors.llm_response_extractor import (
    LLMResponseExtractor,
    extract_json_object,
)
from energy_invoice_extractor.extractors.ocr_extractor import OCRExtractor

METER_ID = "AT0040000502000000000000010127094"

OCR_TEXT = """
Erika Musterfrau
Bahnhofstraße 3
8010 Graz
Zählpunktnummer: AT 004000 05020 00000 00000 00101 27094
Verbrauch aktuell: 1.850,0 kWh
"""


def make_reply(**fields):
    """Wrap a JSON object in the prose and fences LLMs like to add."""
    return f"Hier sind die Daten:\n```json\n{json.dumps(fields, ensure_ascii=False)}\n```"


class TestExtractJsonObject:
    """Test cutting the JSON object out of a reply."""

    def test_fenced_object(self):
        """Test a markdown fenced object."""
        assert extract_json_object('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_nested_object(self):
        """Test that the last closing brace ends the object."""
        assert extract_json_object('x {"a": {"b": 1}} y') == '{"a": {"b": 1}}'

    @pytest.mark.parametrize("text", ["", "no json here", "} {"])
    def test_no_object(self, text):
        """Test replies without an object."""
        assert extract_json_object(text) is None


class TestLLMResponseExtractor:
    """Test field extraction from LLM replies."""

    def setup_method(self):
        """Set up test fixtures."""
        self.extractor = LLMResponseExtractor()

    def test_complete_reply(self):
        """Test a reply with all three fields."""
        reply = make_reply(
            address="Max Mustermann, Hauptstraße 12, 1010 Wien",
            zaehlpunktnummer=METER_ID,
            kwh_aktuell=2573.1,
        )

        data = self.extractor.extract_all_fields(llm_response=reply)

        assert data == ExtractedInvoiceData(
            address="Max Mustermann, Hauptstraße 12, 1010 Wien",
            meter_point_id=METER_ID,
            current_consumption_kwh="2573.1",
        )

    @pytest.mark.parametrize("kwh,expected", [
        (2573, "2573.0"),
        (2573.14, "2573.1"),
        ("2.573,1", "2573.1"),
        ("2573,1 kWh", "2573.1"),
        ("2,573.1", "2573.1"),
        (0.5, None),
        (100000, None),
        ("viel", None),
        (True, None),
        ([2573], None),
    ])
    def test_consumption_values(self, kwh, expected):
        """Test numeric and textual kWh values against the bounds."""
        data = self.extractor.extract_all_fields(llm_response=make_reply(kwh_aktuell=kwh))

        assert data.current_consumption_kwh == expected

    def test_split_meter_id_is_joined(self):
        """Test that group spaces in the id are removed."""
        reply = make_reply(zaehlpunktnummer="AT 004000 05020 00000 00000 00101 27094")

        assert self.extractor.extract_all_fields(llm_response=reply).meter_point_id == METER_ID

    def test_implausible_meter_id_is_dropped(self):
        """Test that an id of the wrong length is not accepted."""
        reply = make_reply(zaehlpunktnummer="AT12345")

        assert self.extractor.extract_all_fields(llm_response=reply).meter_point_id is None

    def test_address_whitespace_is_collapsed(self):
        """Test multi-line addresses from the reply."""
        reply = make_reply(address="Max Mustermann,\n  Hauptstraße 12,\n1010 Wien")

        assert self.extractor.extract_all_fields(llm_response=reply).address == \
            "Max Mustermann, Hauptstraße 12, 1010 Wien"

    def test_alternative_keys(self):
        """Test accepted synonyms for the reply keys."""
        reply = make_reply(adresse="Hauptstraße 12, 1010 Wien", meter_point_id=METER_ID)

        data = self.extractor.extract_all_fields(llm_response=reply)

        assert data.address == "Hauptstraße 12, 1010 Wien"
        assert data.meter_point_id == METER_ID

    def test_null_fields(self):
        """Test that null fields stay absent."""
        reply = make_reply(address=None, zaehlpunktnummer=None, kwh_aktuell=None)

        assert self.extractor.extract_all_fields(llm_response=reply).is_empty()

    @pytest.mark.parametrize("reply", [None, "", "   ", "Keine Daten gefunden", "{address: Wien}"])
    def test_malformed_reply_raises(self, reply):
        """Test that unusable replies raise LLMResponseError."""
        with pytest.raises(LLMResponseError):
            self.extractor.extract_all_fields(llm_response=reply)

    def test_error_keeps_raw_response(self):
        """Test that the raw reply is attached to the error."""
        with pytest.raises(LLMResponseError) as exc_info:
            self.extractor.extract_all_fields(llm_response="Keine Daten gefunden")

        assert exc_info.value.raw_response == "Keine Daten gefunden"


class TestHybridExtractor:
    """Test LLM-first extraction with engine fallback."""

    def setup_method(self):
        """Set up test fixtures."""
        self.extractor = HybridExtractor()
        self.engine_data = OCRExtractor().extract_all_fields(ocr_text=OCR_TEXT)

    def test_engine_finds_all_fields(self):
        """Test the fixture text against the engine."""
        assert self.engine_data == ExtractedInvoiceData(
            address="Erika Musterfrau, Bahnhofstraße 3, 8010 Graz",
            meter_point_id=METER_ID,
            current_consumption_kwh="1850.0",
        )

    def test_valid_reply_wins(self):
        """Test that a usable reply is returned as is."""
        reply = make_reply(address="Max Mustermann, Hauptstraße 12, 1010 Wien", kwh_aktuell="2573,1")

        data = self.extractor.extract_all_fields(ocr_text=OCR_TEXT, llm_response=reply)

        assert data.address == "Max Mustermann, Hauptstraße 12, 1010 Wien"
        assert data.current_consumption_kwh == "2573.1"

    def test_fields_are_never_merged(self):
        """Test that fields missing from the reply are not filled from the engine."""
        reply = make_reply(address="Max Mustermann, Hauptstraße 12, 1010 Wien")

        data = self.extractor.extract_all_fields(ocr_text=OCR_TEXT, llm_response=reply)

        assert data.meter_point_id is None
        assert data.current_consumption_kwh is None

    @pytest.mark.parametrize("reply", [None, "Keine Daten gefunden", "{kaputt", make_reply(address=None)])
    def test_fallback_to_engine(self, reply):
        """Test absent, malformed and empty replies."""
        data = self.extractor.extract_all_fields(ocr_text=OCR_TEXT, llm_response=reply)

        assert data == self.engine_data

    def test_llm_path_disabled(self, monkeypatch):
        """Test USE_LLM_RESPONSE=false."""
        monkeypatch.setenv('USE_LLM_RESPONSE', 'false')
        extractor = HybridExtractor(Settings())
        reply = make_reply(address="Max Mustermann, Hauptstraße 12, 1010 Wien")

        data = extractor.extract_all_fields(ocr_text=OCR_TEXT, llm_response=reply)

        assert data == self.engine_data

    def test_injected_extractors(self):
        """Test that the sub-extractors can be replaced."""
        llm_extractor = Mock()
        llm_extractor.extract_all_fields.side_effect = LLMResponseError("broken")
        ocr_extractor = Mock()
        ocr_extractor.extract_all_fields.return_value = ExtractedInvoiceData(address="X")
        extractor = HybridExtractor(ocr_extractor=ocr_extractor, llm_extractor=llm_extractor)

        data = extractor.extract_all_fields(ocr_text="text", llm_response="reply")

        assert data == ExtractedInvoiceData(address="X")
        ocr_extractor.extract_all_fields.assert_called_once_with(ocr_text="text")
