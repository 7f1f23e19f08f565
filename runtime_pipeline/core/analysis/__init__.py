"""
Runtime aggregation
"""

from .runtime_report import RuntimeReport

__all__ = ["RuntimeReport"]
