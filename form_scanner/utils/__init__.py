"""
Utility Module for the Form Scanner.

This module provides common utilities used across all other modules:
    - Logging configuration
    - Custom exceptions
    - Text and file helpers
"""

from .logger import setup_logger, get_logger, mask_id
from .helpers import ensure_directory, split_lines, title_case, contains_any

__all__ = [
    'setup_logger',
    'get_logger',
    'mask_id',
    'ensure_directory',
    'split_lines',
    'title_case',
    'contains_any'
]
