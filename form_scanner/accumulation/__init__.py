"""
Accumulation Module for the Form Scanner.

Combines fields from successive extraction passes into one field set.
"""

from .accumulator import MergeResult, merge_fields
from .session import ScanSession, SCAN_SEPARATOR

__all__ = ['MergeResult', 'merge_fields', 'ScanSession', 'SCAN_SEPARATOR']
