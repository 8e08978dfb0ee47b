"""
Utility Module for the Invoice Interpretation Engine.

This module provides common utilities used across all other modules:
    - Logging configuration
    - Boundary exceptions
    - Text helpers
"""

from .logger import setup_logger, get_logger
from .helpers import (
    normalize_text,
    collapse_whitespace,
    split_lines,
    ensure_directory,
    get_file_extension
)

__all__ = [
    'setup_logger',
    'get_logger',
    'normalize_text',
    'collapse_whitespace',
    'split_lines',
    'ensure_directory',
    'get_file_extension'
]
