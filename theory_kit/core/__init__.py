"""
Generation, search and shrinking engine.
"""
