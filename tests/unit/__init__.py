"""
Unit tests for theory_kit components.
"""
