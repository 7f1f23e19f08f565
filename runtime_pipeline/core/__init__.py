"""
Core retrieval and aggregation modules
"""
