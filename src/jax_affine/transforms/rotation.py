"""2D rotation utilities in JAX."""

import jax
import jax.numpy as jnp
from typing import Union

# Type aliases
Array = jax.Array
Scalar = Union[float, Array]


def rotation(angle: Scalar) -> Array:
    """
    Rotation about the coordinate origin.

    The matrix is (cos, -sin; sin, cos). With the y axis pointing down, as in
    screen and image coordinates, a positive angle turns points clockwise.

    Args:
        angle: (...) rotation angle in radians

    Returns:
        (..., 6) affine matrix
    """
    angle = jnp.asarray(angle, dtype=float)
    cos, sin = jnp.cos(angle), jnp.sin(angle)
    zero = jnp.zeros_like(angle)
    return jnp.stack([cos, -sin, zero, sin, cos, zero], axis=-1)


def rotation_angle(m: Array) -> Array:
    """
    Recover the rotation angle of an affine matrix.

    Exact for rotations combined with uniform positive scaling; for matrices
    with shear or non-uniform scale it returns the angle the x axis is turned by.

    Args:
        m: (..., 6) affine matrix

    Returns:
        (...) angle in radians, in (-pi, pi]
    """
    m = jnp.asarray(m)
    return jnp.arctan2(m[..., 3], m[..., 0])
