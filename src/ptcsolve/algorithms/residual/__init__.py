"""Residual augmentation for implicit pseudo-time steps."""

from .augment import (algebraic_mask, augment_jacobian, augment_residual,
                      residual_distance)
from .types import JacobianFn, ResidualFn

__all__ = [
    "augment_residual",
    "augment_jacobian",
    "algebraic_mask",
    "residual_distance",
    "ResidualFn",
    "JacobianFn",
]
