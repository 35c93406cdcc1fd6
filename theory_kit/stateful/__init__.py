"""
Stateful theories and sequential/parallel model checking.
"""
