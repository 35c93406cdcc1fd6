"""
Value objects for constraints, traces and search results.
"""
