"""
Configuration management module.

Centralizes settings (environment / .env) and the compiled regex patterns
that depend on them.
"""

from .settings import Settings, get_settings, set_settings
from .patterns import PatternConfig, get_patterns, set_patterns

__all__ = [
    'Settings',
    'get_settings',
    'set_settings',
    'PatternConfig',
    'get_patterns',
    'set_patterns',
]
