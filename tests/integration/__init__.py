"""
Integration tests running whole theories through the public entry points.
"""
