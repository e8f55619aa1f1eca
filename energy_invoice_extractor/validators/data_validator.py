"""
Data Validator.

Validates extracted invoice records against their invariants.
"""

from typing import Any, List, Optional
from ..config.patterns import PatternConfig, get_patterns
from ..config.settings import Settings, get_settings
from ..core.logging_config import get_logger
from ..core.interfaces import IValidator
from ..core.records import ExtractedInvoiceData

logger = get_logger(__name__)


class DataValidator(IValidator):
    """
    Validates extracted invoice data.

    Checks that present fields respect the record invariants: meter-point id
    length and letter+digit mix, consumption inside the bounds with exactly
    one fractional digit.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.patterns: PatternConfig = PatternConfig(settings) if settings is not None else get_patterns()

    def validate(self, data: Any) -> bool:
        """
        Validate an extracted record.

        Args:
            data: ExtractedInvoiceData instance

        Returns:
            True if every present field is valid, False otherwise
        """
        if not isinstance(data, ExtractedInvoiceData):
            return False

        errors = self.collect_errors(data)
        for error in errors:
            logger.warning(error)
        return not errors

    def collect_errors(self, data: ExtractedInvoiceData) -> List[str]:
        """
        List every invariant violation of a record.

        Args:
            data: Extracted record

        Returns:
            Human-readable error messages (empty if valid)
        """
        errors = []

        if data.address is not None and not data.address.strip():
            errors.append("address must not be blank")

        if data.meter_point_id is not None and not self.validate_meter_point_id(data.meter_point_id):
            errors.append(
                f"meter_point_id must have {self.settings.meter_id_length} alphanumeric "
                f"characters with letters and digits: {data.meter_point_id!r}"
            )

        if data.current_consumption_kwh is not None and not self.validate_consumption(data.current_consumption_kwh):
            errors.append(
                f"current_consumption_kwh must be a one-decimal number between "
                f"{self.settings.kwh_min:g} and {self.settings.kwh_max:g}: {data.current_consumption_kwh!r}"
            )

        return errors

    def validate_meter_point_id(self, meter_point_id: str) -> bool:
        return (
            len(meter_point_id) == self.settings.meter_id_length
            and meter_point_id.isascii()
            and meter_point_id.isalnum()
            and self.patterns.letter_pattern.search(meter_point_id) is not None
            and self.patterns.digit_pattern.search(meter_point_id) is not None
        )

    def validate_consumption(self, kwh: str) -> bool:
        """Check the canonical one-decimal form and the exclusive bounds."""
        whole, _, fraction = kwh.partition('.')
        if not (whole.isdigit() and len(fraction) == 1 and fraction.isdigit()):
            return False

        try:
            value = float(kwh)
        except (ValueError, TypeError):
            return False

        return self.settings.kwh_min < value < self.settings.kwh_max
