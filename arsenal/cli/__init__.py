"""
Command-line interface for arsenal.
"""
