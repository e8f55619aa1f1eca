"""
Regex pattern definitions.

Centralizes all regex patterns used for extraction.
"""

import re
from typing import Pattern, Optional
from .settings import Settings, get_settings

# Character classes for German capitalized words (OCR keeps umlauts most of the time)
UPPER = 'A-ZÄÖÜ'
LOWER = 'a-zäöüß'

STREET_SUFFIXES = r'(?:\.|Straße|Strasse|Platz|Weg|Gasse|Allee|Ring|Str\.?)'
CITY = rf'[{UPPER}][{LOWER}]+(?:[\s-][{UPPER}][{LOWER}]+)*'

# Name and street words start at a word boundary, never inside a longer token
WORD_START = rf'(?<![{UPPER}{LOWER}-])'

METER_LABELS = r'(?:zählpunktnummer|zählpunkt|zp-nr|zp\s*nr|zählernummer|metering\s*point)'
CONSUMPTION_LABELS = r'(?:gesamtverbrauch|energieverbrauch|verbrauch|strom)'

# A whole numeric token: never starts inside another digit run.
# German/English grouped forms first ("2.573,1", "2,573.1"), then plain ("2573.1", "2573,1", "2573").
NUMBER = r'(?<![\d.,])(\d{1,3}(?:[.,]\d{3})+(?:[.,]\d+)?|\d+(?:[.,]\d+)?)'


class PatternConfig:
    """
    Configuration for regex patterns.

    Compiles patterns once for performance. Meter-id patterns depend on the
    configured identifier length and country prefix.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """Initialize and compile all patterns."""
        settings = settings or get_settings()
        prefix = re.escape(settings.meter_id_country_prefix)
        length = settings.meter_id_length
        rest = length - len(settings.meter_id_country_prefix)

        # Address patterns (compiled)
        self.postal_city_pattern = re.compile(rf'^(\d{{4}})\s+({CITY})$')
        self.street_pattern = re.compile(
            rf'({WORD_START}[{UPPER}][{LOWER}-]+{STREET_SUFFIXES})\s+(\d+[a-z]?)',
            re.IGNORECASE
        )
        self.name_pattern = re.compile(rf'^[{UPPER}][{LOWER}]+\s+[{UPPER}][{LOWER}]+$')
        self.single_line_address_pattern = re.compile(
            rf'({WORD_START}[{UPPER}][{LOWER}]+\s+[{UPPER}][{LOWER}]+)?,?\s*'
            rf'({WORD_START}[{UPPER}][{LOWER}-]+{STREET_SUFFIXES})\s+(\d+[a-z]?),?\s*'
            rf'(\d{{4}})\s+({CITY})',
            re.IGNORECASE
        )
        # A name line must not be a street line in disguise
        self.name_excluded_words = ('straße', 'strasse')

        # Meter-point id patterns (compiled), in tier order
        self.meter_id_labeled_split_pattern = re.compile(
            rf'(?i:{METER_LABELS})[:\s]*({prefix}(?:[ \t]+[A-Z0-9]+\b)+)'
        )
        self.meter_id_labeled_pattern = re.compile(
            rf'(?i:{METER_LABELS})[:\s]*([A-Za-z0-9]{{{length}}})(?![A-Za-z0-9])'
        )
        self.meter_id_split_pattern = re.compile(rf'\b({prefix}(?:[ \t]+[A-Z0-9]+\b)+)')
        self.meter_id_prefixed_pattern = re.compile(rf'\b({prefix}[A-Z0-9]{{{rest}}})\b')
        self.meter_id_generic_pattern = re.compile(rf'\b([A-Z0-9]{{{length}}})\b')

        # Consumption patterns (compiled)
        # Pass 1: value qualified as the current period
        self.kwh_current_pattern = re.compile(
            rf'(?:aktuell|current)[:\s]*{NUMBER}\s*kwh',
            re.IGNORECASE
        )
        # Pass 2: any kWh value, optionally labeled
        self.kwh_any_pattern = re.compile(
            rf'(?:{CONSUMPTION_LABELS}[:\s]*)?{NUMBER}\s*kwh',
            re.IGNORECASE
        )

        # Locale number shapes
        self.decimal_comma_pattern = re.compile(r',\d{1,2}$')
        self.decimal_point_pattern = re.compile(r'\.\d{1,2}$')
        self.canonical_number_pattern = re.compile(r'^\d+(?:\.\d+)?$')

        # Meter id sanity
        self.letter_pattern = re.compile(r'[A-Za-z]')
        self.digit_pattern = re.compile(r'\d')
        self.whitespace_pattern = re.compile(r'\s+')

    def get_single_line_address_pattern(self) -> Pattern:
        """Get compiled single-line address pattern."""
        return self.single_line_address_pattern

    def get_kwh_current_pattern(self) -> Pattern:
        """Get compiled pattern for kWh values marked as current."""
        return self.kwh_current_pattern

    def get_kwh_any_pattern(self) -> Pattern:
        """Get compiled pattern for any kWh value."""
        return self.kwh_any_pattern


# Global pattern config instance
_patterns: Optional[PatternConfig] = None


def get_patterns() -> PatternConfig:
    """Get the global pattern configuration instance."""
    global _patterns
    if _patterns is None:
        _patterns = PatternConfig()
    return _patterns


def set_patterns(patterns: Optional[PatternConfig]):
    """Set the global pattern configuration (useful for testing)."""
    global _patterns
    _patterns = patterns
