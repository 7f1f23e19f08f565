"""
Duration parsing and span formatting
"""

from .formatter import TimeUnit, decompose_span, format_span
from .parser import parse_duration, parse_duration_or_raise

__all__ = ["TimeUnit", "decompose_span", "format_span", "parse_duration", "parse_duration_or_raise"]
