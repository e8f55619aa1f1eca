"""
Keyword proximity filter.

Rejects regex matches whose surrounding text mentions an exclusion keyword,
e.g. a kWh figure printed next to "Vorperiode".
"""

from typing import List, Optional, Sequence


class KeywordProximityFilter:
    """
    Checks a ±window character span around a match for keywords.

    Keywords are compared case-insensitively.
    """

    def __init__(self, keywords: Sequence[str], window: int = 50):
        if window < 0:
            raise ValueError("window must not be negative")
        self.keywords: List[str] = [keyword.lower() for keyword in keywords if keyword]
        self.window = window

    def context(self, text: str, start: int, end: int) -> str:
        """Return the lower-cased text around [start, end), clamped to the text."""
        context_start = max(start - self.window, 0)
        context_end = min(end + self.window, len(text))
        return text[context_start:context_end].lower()

    def find_keyword(self, text: str, start: int, end: int) -> Optional[str]:
        """Return the first keyword found near the span, if any."""
        context = self.context(text, start, end)
        for keyword in self.keywords:
            if keyword in context:
                return keyword
        return None
