"""
Production Python kernels.

These modules are designed to be:
- deterministic (integer-only, no floats anywhere),
- easy to audit (one Newton step per loop body),
- fail-closed (overflow and non-convergence raise).
"""
