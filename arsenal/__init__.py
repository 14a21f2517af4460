"""
Arsenal CLI - capture code learnings locally and sync them to Arsenal.
"""

__version__ = "0.1.0"
