"""
Base extractor classes.

Provides abstract base classes for all extractors and the tiered locators
they are built from.
"""

from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Sequence, Tuple
from ..config.patterns import PatternConfig, get_patterns
from ..config.settings import Settings, get_settings
from ..core.logging_config import get_logger
from ..core.records import ExtractedInvoiceData

Tier = Tuple[str, Callable[[str], Optional[str]]]


def first_match(tiers: Sequence[Tier], text: str) -> Tuple[Optional[str], Optional[str]]:
    """
    Evaluate tiers in order and stop at the first one that yields a value.

    Args:
        tiers: Ordered (name, function) pairs
        text: Text passed to every tier

    Returns:
        (value, tier name) of the first hit, or (None, None)
    """
    for name, tier in tiers:
        value = tier(text)
        if value is not None:
            return value, name
    return None, None


def split_lines(text: str) -> List[str]:
    """Split text into trimmed, non-empty lines, keeping their order."""
    return [line.strip() for line in text.split('\n') if line.strip()]


class BaseLocator(ABC):
    """
    Base class for single-field locators.

    Subclasses list their tiers strictly in priority order; once a tier
    yields a value, later tiers are not consulted.
    """

    field_name = 'field'

    def __init__(
        self,
        settings: Optional[Settings] = None,
        patterns: Optional[PatternConfig] = None
    ):
        self.settings = settings or get_settings()
        if patterns is None:
            patterns = PatternConfig(settings) if settings is not None else get_patterns()
        self.patterns = patterns
        self.logger = get_logger(self.__class__.__name__)

    @abstractmethod
    def tiers(self) -> List[Tier]:
        """Return the ordered (name, function) tiers of this locator."""
        pass

    def locate(self, text: str) -> Optional[str]:
        """
        Find the field in raw OCR text.

        Args:
            text: Raw OCR text, possibly empty

        Returns:
            Field value, or None when no tier matched
        """
        if not text:
            return None

        value, tier_name = first_match(self.tiers(), text)
        if value is None:
            self.logger.debug(f"No {self.field_name} found")
        else:
            self.logger.debug(f"Found {self.field_name} via tier '{tier_name}': {value}")
        return value


class BaseExtractor(ABC):
    """
    Abstract base class for all extractors.

    Every extractor produces the same record shape so callers can switch
    between the rule-based engine and the LLM path freely.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """Initialize base extractor with settings."""
        self.settings = settings or get_settings()
        self.logger = get_logger(self.__class__.__name__)

    @abstractmethod
    def extract_all_fields(
        self,
        ocr_text: Optional[str] = None,
        llm_response: Optional[str] = None
    ) -> ExtractedInvoiceData:
        """
        Extract all fields.

        Args:
            ocr_text: Optional OCR text
            llm_response: Optional raw reply of an LLM extractor

        Returns:
            Extracted invoice record
        """
        pass
