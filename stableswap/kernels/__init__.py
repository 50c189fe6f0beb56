"""
Kernel layer.

- `stableswap/kernels/dex/` contains the pair parameter document (.yaml).
- `stableswap/kernels/python/` contains the integer invariant solvers and the
  fixed-width helpers they share.
"""
