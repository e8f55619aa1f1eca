"""
Validators module.

Provides validation of extracted invoice records.
"""

from .data_validator import DataValidator

__all__ = [
    'DataValidator',
]
