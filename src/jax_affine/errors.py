"""Exception types raised by jax_affine.

All errors are raised synchronously at the offending call. Builder methods
validate their arguments before touching the operation queue, so a failed
call never leaves a partially appended operation behind.
"""


class InvalidArgumentError(ValueError):
    """A vector, point or matrix has the wrong length, or an argument has the wrong type."""


class OutOfRangeError(InvalidArgumentError, IndexError):
    """An operation index lies outside the builder's queue."""


class SingularMatrixError(ZeroDivisionError):
    """The transform has a zero determinant and cannot be inverted."""
