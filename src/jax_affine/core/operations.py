"""Queued transform operations and their resolution to affine matrices.

Each operation is an immutable PyTree built with ``flax.struct`` so a queue of
operations can be passed through ``jax.jit`` or ``jax.tree_util`` like any
other JAX data. ``resolve`` turns one operation into its (6,) affine matrix.
"""

from typing import Union

from jax import Array
from flax import struct

from ..errors import InvalidArgumentError
from ..transforms import affine2d
from ..transforms.rotation import rotation


@struct.dataclass
class Translate:
    """Shift every point by ``vector``.

    Attributes:
        vector: Array of shape (2,) holding (dx, dy).
    """
    vector: Array


@struct.dataclass
class Rotate:
    """Rotate clockwise by ``angle`` radians around ``origin``.

    Attributes:
        angle: Scalar array, the rotation angle in radians.
        origin: Array of shape (2,), the fixed point of the rotation.
    """
    angle: Array
    origin: Array


@struct.dataclass
class Scale:
    """Scale by ``factor`` about ``origin``.

    Attributes:
        origin: Array of shape (2,), the fixed point of the scaling.
        factor: Array of shape (2,) holding (fx, fy).
    """
    origin: Array
    factor: Array


@struct.dataclass
class RawMatrix:
    """An affine matrix supplied directly by the caller.

    Attributes:
        matrix: Array of shape (6,) in row-major order (a, b, c, d, e, f).
    """
    matrix: Array


Operation = Union[Translate, Rotate, Scale, RawMatrix]


def about_point(linear: Array, origin: Array) -> Array:
    """Conjugate *linear* so that it acts around *origin* instead of (0, 0).

    The origin is moved to (0, 0) first, *linear* is applied, and the result is
    moved back, which keeps *origin* fixed.
    """
    return affine2d.compose(
        affine2d.translate(origin),
        linear,
        affine2d.inverse_translate(origin),
    )


def resolve(op: Operation) -> Array:
    """Convert a single operation into its (6,) affine matrix.

    Args:
        op: One of Translate, Rotate, Scale or RawMatrix.

    Returns:
        Array of shape (6,).

    Raises:
        InvalidArgumentError: If ``op`` is not a known operation.
    """
    if isinstance(op, Translate):
        return affine2d.translate(op.vector)
    elif isinstance(op, RawMatrix):
        return op.matrix
    elif isinstance(op, Scale):
        return about_point(affine2d.scale(op.factor), op.origin)
    elif isinstance(op, Rotate):
        return about_point(rotation(op.angle), op.origin)
    raise InvalidArgumentError(f"Unrecognised transform operation: {op!r}")
