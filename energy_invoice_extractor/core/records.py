"""
Extraction result record.

The single output shape shared by the rule-based engine and the LLM path.
"""

from dataclasses import dataclass, asdict
from typing import Optional, Dict


@dataclass(frozen=True)
class ExtractedInvoiceData:
    """
    Fields extracted from one invoice text.

    Every field is independently optional; None means "no confident match",
    never zero or an empty string.
    """

    address: Optional[str] = None
    meter_point_id: Optional[str] = None
    current_consumption_kwh: Optional[str] = None

    @classmethod
    def empty(cls) -> 'ExtractedInvoiceData':
        """Create a record without any extracted field."""
        return cls()

    def is_empty(self) -> bool:
        """Check if no field was extracted."""
        return self.field_count() == 0

    def field_count(self) -> int:
        """Number of fields that carry a value."""
        return sum(1 for value in asdict(self).values() if value is not None)

    def to_dict(self) -> Dict[str, Optional[str]]:
        return asdict(self)
