"""
JAX Affine: composable 2D affine transforms.

Queue translations, rotations, scalings and raw matrices on a
TransformBuilder, squash them into a single CompiledTransform, then apply it
to points or invert it. Matrix primitives are pure, JIT-compilable JAX code.
"""

import logging

import jax
jax.config.update("jax_enable_x64", True)

# Import core modules
from . import transforms
from . import core
from .builder import TransformBuilder
from .errors import InvalidArgumentError, OutOfRangeError, SingularMatrixError
from .transforms import CompiledTransform

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
__all__ = [
    "transforms",
    "core",
    "TransformBuilder",
    "CompiledTransform",
    "InvalidArgumentError",
    "OutOfRangeError",
    "SingularMatrixError",
]
