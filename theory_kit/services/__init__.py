"""
Outcome reporting services.
"""
