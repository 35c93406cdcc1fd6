"""
Property-based tests for theory_kit.

Uses Hypothesis to check the engine's own invariants across generated
ranges, seeds and traces.
"""
