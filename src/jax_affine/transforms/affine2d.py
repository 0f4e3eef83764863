"""2D affine transform primitives implemented with JAX.

An affine matrix is stored as a (..., 6) array holding the top two rows
(a, b, c, d, e, f) of the homogeneous matrix

    a b c
    d e f
    0 0 1

All functions are pure, JIT-able, and broadcast over leading batch dimensions.
"""

from functools import reduce

import jax
import jax.numpy as jnp

from ..errors import InvalidArgumentError

Array = jax.Array


def as_coefficients(values, size: int, name: str = "value") -> Array:
    """
    Convert *values* to a float array of shape (size,).

    Args:
        values: sequence or array of numbers
        size: required number of values
        name: what the values represent, used in the error message

    Returns:
        (size,) float array

    Raises:
        InvalidArgumentError: if *values* does not hold exactly *size* numbers
    """
    arr = jnp.asarray(values, dtype=float)
    if arr.shape != (size,):
        raise InvalidArgumentError(f"{name} must have length {size}, got shape {arr.shape}")
    return arr


def identity(dtype=float) -> Array:
    """The identity transform (1, 0, 0, 0, 1, 0)."""
    return jnp.array([1.0, 0.0, 0.0, 0.0, 1.0, 0.0], dtype=dtype)


def translate(vec: Array) -> Array:
    """
    Translation by *vec*.

    Args:
        vec: (..., 2) translation vector

    Returns:
        (..., 6) affine matrix (1, 0, x, 0, 1, y)
    """
    vec = jnp.asarray(vec, dtype=float)
    x, y = vec[..., 0], vec[..., 1]
    one, zero = jnp.ones_like(x), jnp.zeros_like(x)
    return jnp.stack([one, zero, x, zero, one, y], axis=-1)


def inverse_translate(vec: Array) -> Array:
    """
    Translation by -*vec*.

    Args:
        vec: (..., 2) translation vector

    Returns:
        (..., 6) affine matrix (1, 0, -x, 0, 1, -y)
    """
    return translate(-jnp.asarray(vec, dtype=float))


def scale(factor: Array) -> Array:
    """
    Axis-aligned scaling about the coordinate origin.

    Args:
        factor: (..., 2) scale factors along x and y

    Returns:
        (..., 6) affine matrix (fx, 0, 0, 0, fy, 0)
    """
    factor = jnp.asarray(factor, dtype=float)
    fx, fy = factor[..., 0], factor[..., 1]
    zero = jnp.zeros_like(fx)
    return jnp.stack([fx, zero, zero, zero, fy, zero], axis=-1)


def compose2(outer: Array, inner: Array) -> Array:
    """
    Compose two affine matrices: apply *inner* first, then *outer*.

    This is the homogeneous matrix product outer @ inner written out on the
    six stored coefficients.

    Args:
        outer: (..., 6) affine matrix applied last
        inner: (..., 6) affine matrix applied first

    Returns:
        (..., 6) affine matrix
    """
    a0, b0, c0, d0, e0, f0 = jnp.moveaxis(jnp.asarray(outer), -1, 0)
    a1, b1, c1, d1, e1, f1 = jnp.moveaxis(jnp.asarray(inner), -1, 0)
    return jnp.stack([
        a0 * a1 + b0 * d1,
        a0 * b1 + b0 * e1,
        a0 * c1 + b0 * f1 + c0,
        d0 * a1 + e0 * d1,
        d0 * b1 + e0 * e1,
        d0 * c1 + e0 * f1 + f0,
    ], axis=-1)


def compose(*matrices: Array) -> Array:
    """
    Compose a chain of affine matrices into one.

    The first matrix is the outermost (applied last to a point); every
    following matrix is folded in as the new inner transform, so
    ``compose(A, B, C)`` applies C, then B, then A. A single matrix is
    returned unchanged.

    Raises:
        InvalidArgumentError: if no matrices are given
    """
    if not matrices:
        raise InvalidArgumentError("compose needs at least one matrix")
    return reduce(compose2, matrices)


def apply(m: Array, points: Array) -> Array:
    """
    Apply an affine matrix to points.

    Args:
        m: (..., 6) affine matrix
        points: (..., 2) points

    Returns:
        (..., 2) transformed points (a*x + b*y + c, d*x + e*y + f)
    """
    a, b, c, d, e, f = jnp.moveaxis(jnp.asarray(m), -1, 0)
    points = jnp.asarray(points, dtype=float)
    x, y = points[..., 0], points[..., 1]
    return jnp.stack([a * x + b * y + c, d * x + e * y + f], axis=-1)


def determinant(m: Array) -> Array:
    """Determinant a*e - b*d of the linear part of *m*."""
    m = jnp.asarray(m)
    return m[..., 0] * m[..., 4] - m[..., 1] * m[..., 3]


def inverse(m: Array) -> Array:
    """
    Closed-form inverse of an affine matrix.

    No singularity check is made here so the function stays traceable; a
    singular input yields inf/nan coefficients. ``CompiledTransform.invert``
    performs the check.

    Args:
        m: (..., 6) affine matrix

    Returns:
        (..., 6) inverse affine matrix
    """
    a, b, c, d, e, f = jnp.moveaxis(jnp.asarray(m), -1, 0)
    det = a * e - b * d
    return jnp.stack([
        e / det,
        -b / det,
        (b * f - c * e) / det,
        -d / det,
        a / det,
        (c * d - a * f) / det,
    ], axis=-1)


def to_homogeneous(m: Array) -> Array:
    """
    Expand (..., 6) coefficients to the full (..., 3, 3) homogeneous matrix.
    """
    m = jnp.asarray(m)
    bottom = jnp.broadcast_to(
        jnp.array([0.0, 0.0, 1.0], dtype=m.dtype),
        m.shape[:-1] + (3,),
    )
    return jnp.concatenate([m, bottom], axis=-1).reshape(m.shape[:-1] + (3, 3))


def from_homogeneous(M: Array) -> Array:
    """
    Extract the six stored coefficients from a (..., 3, 3) homogeneous matrix.

    The bottom row is assumed to be (0, 0, 1) and is discarded.

    Raises:
        InvalidArgumentError: if *M* is not (..., 3, 3)
    """
    M = jnp.asarray(M, dtype=float)
    if M.shape[-2:] != (3, 3):
        raise InvalidArgumentError(f"matrix must have shape (...,3,3), got {M.shape}")
    return M[..., :2, :].reshape(M.shape[:-2] + (6,))
