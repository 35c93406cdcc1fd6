"""
Theory-writing entry points.
"""
