"""
Kernel layer.

`fixedswap/kernels/python/` holds the integer-only swap kernels for the two
supported curve families. Everything above this layer (fee policies, liquidity
accounting, the pool) treats them as pure functions.
"""
