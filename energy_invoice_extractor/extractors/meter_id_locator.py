"""
Meter-ID Locator.

Finds the meter-point id (Zählpunktnummer): 33 alphanumeric characters,
conventionally starting with the country code "AT", printed either
contiguously or split into space-separated groups, e.g.
"AT 004000 05020 00000 00000 00101 27094".
"""

from typing import List, Optional, Pattern
from .base import BaseLocator, Tier


class MeterIdLocator(BaseLocator):
    """
    Locates the meter-point id.

    **Extraction Strategy** (strict priority order, first qualifying match in
    document order within a tier):
    1. Label + country prefix + space-separated groups
    2. Label + contiguous token
    3. Country prefix + space-separated groups, anywhere
    4. Contiguous token starting with the country prefix, anywhere
    5. Any contiguous token of the right length

    Labels: "Zählpunkt", "Zählpunktnummer", "ZP-Nr", "ZP Nr",
    "Zählernummer", "Metering Point" (case-insensitive).

    Every returned id has the configured length and contains at least one
    letter and one digit, which filters phone/customer numbers.
    """

    field_name = 'meter point id'

    def tiers(self) -> List[Tier]:
        return [
            ('labeled_split', self.locate_labeled_split),
            ('labeled_contiguous', self.locate_labeled_contiguous),
            ('prefixed_split', self.locate_prefixed_split),
            ('prefixed_contiguous', self.locate_prefixed_contiguous),
            ('generic', self.locate_generic),
        ]

    def is_plausible(self, candidate: str) -> bool:
        """Check length and the letter+digit mix of a whitespace-free candidate."""
        return (
            len(candidate) == self.settings.meter_id_length
            and self.patterns.letter_pattern.search(candidate) is not None
            and self.patterns.digit_pattern.search(candidate) is not None
        )

    def join_groups(self, groups: str) -> str:
        """
        Join space-separated groups, stopping once the id length is reached.

        Tokens after a complete id on the same line (a year, a page number)
        are left out; a group that overshoots the length still yields a
        wrong-length candidate.
        """
        joined = ''
        for group in groups.split():
            joined += group
            if len(joined) >= self.settings.meter_id_length:
                break
        return joined

    def _first_candidate(self, pattern: Pattern, text: str, split: bool = False) -> Optional[str]:
        for match in pattern.finditer(text):
            if split:
                candidate = self.join_groups(match.group(1))
            else:
                candidate = self.patterns.whitespace_pattern.sub('', match.group(1))
            if self.is_plausible(candidate):
                return candidate
        return None

    def locate_labeled_split(self, text: str) -> Optional[str]:
        return self._first_candidate(self.patterns.meter_id_labeled_split_pattern, text, split=True)

    def locate_labeled_contiguous(self, text: str) -> Optional[str]:
        return self._first_candidate(self.patterns.meter_id_labeled_pattern, text)

    def locate_prefixed_split(self, text: str) -> Optional[str]:
        return self._first_candidate(self.patterns.meter_id_split_pattern, text, split=True)

    def locate_prefixed_contiguous(self, text: str) -> Optional[str]:
        return self._first_candidate(self.patterns.meter_id_prefixed_pattern, text)

    def locate_generic(self, text: str) -> Optional[str]:
        """Weakest tier: no label and no country prefix required."""
        return self._first_candidate(self.patterns.meter_id_generic_pattern, text)


def locate_meter_id(text: str) -> Optional[str]:
    """Find the meter-point id in OCR text with the default settings."""
    return MeterIdLocator().locate(text)
