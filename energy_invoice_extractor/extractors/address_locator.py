"""
Address Locator.

Finds an Austrian postal address (name, street + number, postal code + city)
in OCR text, where the address block is often broken across 1-3 physical
lines in an unpredictable order.
"""

from typing import List, Optional
from .base import BaseLocator, Tier, split_lines

# A lone postal-code line is not an address
MIN_ADDRESS_PARTS = 2


class AddressLocator(BaseLocator):
    """
    Locates a postal address using layout heuristics.

    **Extraction Strategy** (priority order, no backtracking across tiers):
    1. Postal code + city line, with the street on the line above and an
       optional "Firstname Lastname" line above that
    2. Street line directly followed by a postal code + city line, with an
       optional name line before the street
    3. Name, street and postal code + city on a single line

    Parts are joined with ", " in document order.
    """

    field_name = 'address'

    def tiers(self) -> List[Tier]:
        return [
            ('postal_anchored', self.locate_postal_anchored),
            ('street_then_postal', self.locate_street_then_postal),
            ('single_line', self.locate_single_line),
        ]

    def is_postal_line(self, line: str) -> bool:
        return self.patterns.postal_city_pattern.match(line) is not None

    def is_street_line(self, line: str) -> bool:
        return self.patterns.street_pattern.search(line) is not None

    def is_name_line(self, line: str) -> bool:
        """Check for a two-word "Firstname Lastname" line that is not a street."""
        if not self.patterns.name_pattern.match(line):
            return False
        lowered = line.lower()
        return not any(word in lowered for word in self.patterns.name_excluded_words)

    def locate_postal_anchored(self, text: str) -> Optional[str]:
        """
        Anchor on a postal code + city line and look backwards for context.

        Args:
            text: Raw OCR text

        Returns:
            Joined address, or None
        """
        lines = split_lines(text)

        for i, line in enumerate(lines):
            if not self.is_postal_line(line):
                continue

            parts = []
            if i > 0 and self.is_street_line(lines[i - 1]):
                parts.append(lines[i - 1])
                if i > 1 and self.is_name_line(lines[i - 2]):
                    parts.insert(0, lines[i - 2])
            parts.append(line)

            if len(parts) >= MIN_ADDRESS_PARTS:
                return ', '.join(parts)

        return None

    def locate_street_then_postal(self, text: str) -> Optional[str]:
        """
        Find a street line immediately followed by a postal code + city line.

        Args:
            text: Raw OCR text

        Returns:
            Joined address, or None
        """
        lines = split_lines(text)

        for i in range(len(lines) - 1):
            line, next_line = lines[i], lines[i + 1]
            if not (self.is_street_line(line) and self.is_postal_line(next_line)):
                continue

            parts = []
            if i > 0 and self.is_name_line(lines[i - 1]):
                parts.append(lines[i - 1])
            parts.extend([line, next_line])

            if len(parts) >= MIN_ADDRESS_PARTS:
                return ', '.join(parts)

        return None

    def locate_single_line(self, text: str) -> Optional[str]:
        """
        Match a complete address written on one line.

        Args:
            text: Raw OCR text

        Returns:
            Address rebuilt from the captured parts, or None
        """
        pattern = self.patterns.get_single_line_address_pattern()

        for line in split_lines(text):
            match = pattern.search(line)
            if not match:
                continue

            name, street, number, postal_code, city = match.groups()
            parts = []
            if name:
                parts.append(name)
            parts.append(f"{street} {number}")
            parts.append(f"{postal_code} {city}")
            return ', '.join(parts)

        return None


def locate_address(text: str) -> Optional[str]:
    """Find a postal address in OCR text with the default settings."""
    return AddressLocator().locate(text)
