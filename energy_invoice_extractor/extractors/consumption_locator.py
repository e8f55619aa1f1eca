"""
Consumption Locator.

Finds the current-period consumption in kWh and renders it as a canonical
decimal string with one fractional digit ("2573.1").
"""

from typing import List, Optional, Tuple
from .base import BaseLocator, Tier
from .context_filter import KeywordProximityFilter
from .number_normalizer import parse_kwh_value, format_kwh
from ..config.patterns import PatternConfig
from ..config.settings import Settings

SELECT_MAX = 'max'
SELECT_FIRST = 'first'


class ConsumptionLocator(BaseLocator):
    """
    Locates the current kWh reading.

    **Extraction Strategy**:
    1. Values qualified by "aktuell"/"current" directly before them and "kWh"
       after them. Several hits usually are OCR-duplicated fragments of the
       same figure; by default the numeric maximum wins (ties: first
       occurrence). AKTUELL_SELECTION=first takes the first hit instead.
    2. Only if pass 1 found nothing: any value followed by "kWh", optionally
       labeled ("Strom", "Verbrauch", ...), unless "Vorperiode"/"previous"
       appears within the context window around it. The maximum wins.

    Values outside the configured bounds are never candidates.
    """

    field_name = 'consumption'

    def __init__(
        self,
        settings: Optional[Settings] = None,
        patterns: Optional[PatternConfig] = None
    ):
        super().__init__(settings, patterns)
        self.bounds = (self.settings.kwh_min, self.settings.kwh_max)
        self.previous_period_filter = KeywordProximityFilter(
            self.settings.previous_period_keywords,
            window=self.settings.context_window
        )

    def tiers(self) -> List[Tier]:
        return [
            ('current_period', self.locate_current_period),
            ('any_kwh', self.locate_any_kwh),
        ]

    def current_period_candidates(self, text: str) -> List[Tuple[float, int]]:
        """Return (value, offset) for every valid "aktuell" kWh value in document order."""
        candidates = []
        for match in self.patterns.get_kwh_current_pattern().finditer(text):
            value = parse_kwh_value(match.group(1), self.bounds)
            if value is not None:
                candidates.append((value, match.start()))
        return candidates

    def any_kwh_candidates(self, text: str) -> List[Tuple[float, int]]:
        """Return (value, offset) for every valid kWh value not near a previous-period marker."""
        candidates = []
        for match in self.patterns.get_kwh_any_pattern().finditer(text):
            keyword = self.previous_period_filter.find_keyword(text, match.start(), match.end())
            if keyword:
                self.logger.debug(f"Skipping kWh value {match.group(1)!r} near '{keyword}'")
                continue
            value = parse_kwh_value(match.group(1), self.bounds)
            if value is not None:
                candidates.append((value, match.start()))
        return candidates

    def locate_current_period(self, text: str) -> Optional[str]:
        candidates = self.current_period_candidates(text)
        if not candidates:
            return None
        if self.settings.aktuell_selection == SELECT_FIRST:
            return format_kwh(candidates[0][0])
        return format_kwh(select_maximum(candidates))

    def locate_any_kwh(self, text: str) -> Optional[str]:
        candidates = self.any_kwh_candidates(text)
        if not candidates:
            return None
        return format_kwh(select_maximum(candidates))


def select_maximum(candidates: List[Tuple[float, int]]) -> float:
    """Numeric maximum; on ties the earliest occurrence is kept."""
    best_value, _ = candidates[0]
    for value, _ in candidates[1:]:
        if value > best_value:
            best_value = value
    return best_value


def locate_consumption_kwh(text: str) -> Optional[str]:
    """Find the current consumption in OCR text with the default settings."""
    return ConsumptionLocator().locate(text)
