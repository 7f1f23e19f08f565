"""
Channel Runtime - total watch time of a YouTube channel's public uploads
"""

__version__ = "0.1.0"
