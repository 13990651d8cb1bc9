"""
Production Python kernels.

These modules are designed to be:
- deterministic (integer-only, no floats anywhere),
- easy to audit (explicit intermediate variables),
- small surface-area (pure functions, typed results).
"""
