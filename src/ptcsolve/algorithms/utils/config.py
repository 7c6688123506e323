"""Numerical flags for the numba kernels."""

FASTMATH = False  # Global flag for Numba's fastmath option
