"""
Output storage shared by the pipelines
"""

from .output_file import OutputFile

__all__ = ["OutputFile"]
