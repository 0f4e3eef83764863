"""Compiled 2D affine transforms implemented with JAX."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional, Tuple

import jax
import jax.numpy as jnp
from jax.tree_util import register_pytree_node_class

from ..errors import SingularMatrixError
from . import affine2d

if TYPE_CHECKING:
    from ..builder import TransformBuilder

Array = jax.Array

@register_pytree_node_class  # let CompiledTransform work with jit / vmap …
@dataclass(frozen=True, eq=False)
class CompiledTransform:
    """Immutable affine transform, the result of ``TransformBuilder.build()``.

    ``builder`` is the builder that produced this transform, kept for
    introspection only. Transforms created any other way (inverses,
    ``from_matrix``) have no builder.
    """
    matrix: Array  # shape (6,)
    builder: Optional["TransformBuilder"] = field(default=None, repr=False)

    # Constructors
    @classmethod
    def from_matrix(cls, matrix) -> "CompiledTransform":
        return cls(affine2d.as_coefficients(matrix, 6, "matrix"))

    @classmethod
    def identity(cls) -> "CompiledTransform":
        return cls(affine2d.identity())

    # PyTree boiler-plate
    def tree_flatten(self):
        return (self.matrix,), self.builder

    @classmethod
    def tree_unflatten(cls, aux, children):
        (matrix,) = children
        return cls(matrix, aux)

    # Basic operations
    def compose(self, other: "CompiledTransform") -> "CompiledTransform":
        """Self ∘ other (apply *other* first, then self)."""
        return CompiledTransform(affine2d.compose2(self.matrix, other.matrix))

    def determinant(self) -> Array:
        return affine2d.determinant(self.matrix)

    def invert(self) -> "CompiledTransform":
        """
        Inverse transform, without a builder.

        ```
        (a b c)^-1     ( e/det  -b/det  (b*f - c*e)/det )
        (d e f)     =  (-d/det   a/det  (c*d - a*f)/det )
        (0 0 1)        (   0       0           1        )
        ```
        with det = a*e - b*d.

        Raises:
            SingularMatrixError: if det is zero
        """
        det = self.determinant()
        if float(det) == 0.0:
            raise SingularMatrixError(
                f"transform is singular (determinant 0) and has no inverse: {self.as_tuple()}"
            )
        return CompiledTransform(affine2d.inverse(self.matrix))

    # Point transformation
    def transform_point(self, point) -> Array:
        """
        Apply the transform to a single point.

        Args:
            point: 2 values (x, y)

        Returns:
            (2,) array (a*x + b*y + c, d*x + e*y + f)
        """
        point = affine2d.as_coefficients(point, 2, "point")
        return affine2d.apply(self.matrix, point)

    # Builder round trips
    def to_single_op_builder(self) -> "TransformBuilder":
        """A new builder holding this matrix as its only operation."""
        from ..builder import TransformBuilder

        return TransformBuilder().matrix(self.matrix)

    def to_original_builder(self) -> Optional["TransformBuilder"]:
        """The builder this transform was built from (shared, not copied)."""
        return self.builder

    # Convenience helpers
    def as_tuple(self) -> Tuple[float, ...]:
        """The six coefficients (a, b, c, d, e, f) as Python floats."""
        return tuple(float(v) for v in self.matrix)

    def as_homogeneous(self) -> Array:
        return affine2d.to_homogeneous(self.matrix)

    def get_translation(self) -> Array:
        return self.matrix[jnp.array([2, 5])]
