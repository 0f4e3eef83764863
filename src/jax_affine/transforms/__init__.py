"""
JAX-based 2D affine transforms.

This module provides:
- matrix primitives on 6-coefficient affine matrices (affine2d module)
- rotation construction (rotation module)
- CompiledTransform, the immutable result of building a TransformBuilder

The primitives are pure, stateless, and JIT-able.
"""

from . import affine2d
from . import rotation
from .transform import CompiledTransform

__all__ = [
    "affine2d",
    "rotation",
    "CompiledTransform",
]
