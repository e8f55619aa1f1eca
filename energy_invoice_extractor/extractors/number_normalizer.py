"""
Locale-aware number normalization.

Invoices mix German ("2.573,1") and English ("2,573.1") separators, and OCR
drops or duplicates them freely. The decision table below is order
sensitive: which separator is assumed to be decimal when only one kind is
present decides between 2573 and 2.573.
"""

from typing import Optional, Tuple
from ..config.patterns import get_patterns
from ..config.settings import get_settings
from ..core.logging_config import get_logger

logger = get_logger(__name__)


def normalize_german_decimal(raw: str) -> Optional[float]:
    """
    Normalize a numeric token with German or English separators.

    Rules, applied in this order:
    - both "." and ",": the separator appearing last is the decimal
      separator, the other one groups thousands and is removed
    - only ",": decimal comma if 1-2 digits follow the last comma,
      otherwise commas group thousands and are removed
    - only ".": decimal point if 1-2 digits follow the last dot,
      otherwise dots group thousands and are removed

    Args:
        raw: Numeric token as found in the text

    Returns:
        Parsed value, or None if the token is not a number
    """
    if raw is None:
        return None

    patterns = get_patterns()
    normalized = raw.strip()

    if '.' in normalized and ',' in normalized:
        if normalized.rfind(',') > normalized.rfind('.'):
            normalized = normalized.replace('.', '').replace(',', '.')
        else:
            normalized = normalized.replace(',', '')
    elif ',' in normalized:
        if patterns.decimal_comma_pattern.search(normalized):
            normalized = normalized.replace(',', '.')
        else:
            normalized = normalized.replace(',', '')
    elif '.' in normalized:
        if not patterns.decimal_point_pattern.search(normalized):
            normalized = normalized.replace('.', '')

    # float() would also take "nan", "1e5" or "1.2.3" fragments apart differently
    if not patterns.canonical_number_pattern.match(normalized):
        logger.debug(f"Discarding unparsable numeric token: {raw!r}")
        return None

    return float(normalized)


def parse_kwh_value(raw: str, bounds: Optional[Tuple[float, float]] = None) -> Optional[float]:
    """
    Normalize a token and accept it only as a plausible consumption value.

    The exclusive bounds filter invoice/customer numbers and years that look
    like consumption figures. The value rounded to one decimal must stay
    inside the bounds as well, so the formatted output never leaves them.

    Args:
        raw: Numeric token
        bounds: Exclusive (min, max); defaults to KWH_MIN/KWH_MAX settings

    Returns:
        Value, or None if unparsable or out of bounds
    """
    if bounds is None:
        settings = get_settings()
        bounds = (settings.kwh_min, settings.kwh_max)

    value = normalize_german_decimal(raw)
    if value is None:
        return None

    if not within_bounds(value, bounds):
        logger.debug(f"Discarding out-of-range kWh value {value} from {raw!r}")
        return None

    return value


def within_bounds(value: float, bounds: Tuple[float, float]) -> bool:
    """Check the exclusive bounds for the value and for its one-decimal rendering."""
    lower, upper = bounds
    return lower < value < upper and lower < round(value, 1) < upper


def format_kwh(value: float) -> str:
    """Render a kWh value with exactly one fractional digit."""
    return f"{value:.1f}"
