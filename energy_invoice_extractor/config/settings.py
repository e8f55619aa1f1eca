"""
Application settings and configuration.

Centralizes all configurable values, including the domain constants of the
Austrian invoicing format (meter-point id length, consumption bounds).
"""

import os
from typing import Optional, Dict, Any, List
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


# Pass-1 policies for several "aktuell" values
AKTUELL_SELECTIONS = ('max', 'first')


def _split_keywords(value: str) -> List[str]:
    return [keyword.strip().lower() for keyword in value.split(',') if keyword.strip()]


class Settings:
    """
    Application settings.

    Centralizes all configuration values.
    """

    def __init__(self):
        """Initialize settings from environment and defaults."""
        # Processing Settings
        self.invoices_dir = os.getenv('INVOICES_DIR', 'invoices')
        self.output_dir = os.getenv('OUTPUT_DIR', 'output')

        # Consumption Settings (exclusive bounds)
        self.kwh_min = float(os.getenv('KWH_MIN', '1'))
        self.kwh_max = float(os.getenv('KWH_MAX', '100000'))
        self.aktuell_selection = os.getenv('AKTUELL_SELECTION', 'max').lower()

        # Context window around kWh candidates
        self.context_window = int(os.getenv('CONTEXT_WINDOW', '50'))
        self.previous_period_keywords = _split_keywords(
            os.getenv('PREVIOUS_PERIOD_KEYWORDS', 'vorperiode,previous')
        )

        # Meter-point id Settings
        self.meter_id_length = int(os.getenv('METER_ID_LENGTH', '33'))
        self.meter_id_country_prefix = os.getenv('METER_ID_COUNTRY_PREFIX', 'AT').upper()

        # Logging Settings
        self.log_level = os.getenv('LOG_LEVEL', 'INFO')
        self.log_format = os.getenv(
            'LOG_FORMAT',
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        self.log_file = os.getenv('LOG_FILE') or None

        # Feature Flags
        self.use_llm_response = os.getenv('USE_LLM_RESPONSE', 'true').lower() == 'true'
        self.enable_parallel_processing = os.getenv('ENABLE_PARALLEL_PROCESSING', 'false').lower() == 'true'
        self.max_workers = int(os.getenv('MAX_WORKERS', '4'))

    def collect_errors(self) -> List[str]:
        """
        List every inconsistent setting.

        Returns:
            Human-readable error messages (empty if valid)
        """
        errors = []

        if self.kwh_min >= self.kwh_max:
            errors.append(f"KWH_MIN ({self.kwh_min:g}) must be below KWH_MAX ({self.kwh_max:g})")

        if self.meter_id_length <= len(self.meter_id_country_prefix):
            errors.append(
                f"METER_ID_LENGTH ({self.meter_id_length}) must exceed the length of "
                f"METER_ID_COUNTRY_PREFIX ({self.meter_id_country_prefix!r})"
            )

        if self.aktuell_selection not in AKTUELL_SELECTIONS:
            errors.append(
                f"AKTUELL_SELECTION must be one of {', '.join(AKTUELL_SELECTIONS)}: {self.aktuell_selection!r}"
            )

        if self.context_window < 0:
            errors.append(f"CONTEXT_WINDOW must not be negative: {self.context_window}")

        if self.max_workers < 1:
            errors.append(f"MAX_WORKERS must be at least 1: {self.max_workers}")

        # Output directory must exist or be creatable
        output_path = Path(self.output_dir)
        if not output_path.exists() and not output_path.parent.exists():
            errors.append(f"OUTPUT_DIR parent does not exist: {self.output_dir}")

        return errors

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary."""
        return {
            'invoices_dir': self.invoices_dir,
            'output_dir': self.output_dir,
            'kwh_min': self.kwh_min,
            'kwh_max': self.kwh_max,
            'aktuell_selection': self.aktuell_selection,
            'context_window': self.context_window,
            'previous_period_keywords': list(self.previous_period_keywords),
            'meter_id_length': self.meter_id_length,
            'meter_id_country_prefix': self.meter_id_country_prefix,
            'log_level': self.log_level,
            'log_file': self.log_file,
            'use_llm_response': self.use_llm_response,
            'enable_parallel_processing': self.enable_parallel_processing,
            'max_workers': self.max_workers,
        }


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Optional[Settings]):
    """Set the global settings instance (useful for testing)."""
    global _settings
    _settings = settings
