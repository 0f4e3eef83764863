"""TransformBuilder: queue geometric operations and squash them into one transform.

Think "apply this transform, then apply this transform etc.": the first
queued operation is the first one applied to a point. ``build()`` resolves
every operation to an affine matrix and composes them into a single
CompiledTransform.
"""

import logging
from typing import Iterable, List, Optional, Tuple

import jax.numpy as jnp
from jax import Array

from .core.operations import Operation, RawMatrix, Rotate, Scale, Translate, resolve
from .errors import InvalidArgumentError, OutOfRangeError
from .transforms import affine2d
from .transforms.transform import CompiledTransform

logger = logging.getLogger(__name__)


class TransformBuilder:
    """An ordered, mutable queue of affine operations.

    Every queueing method returns the builder itself so calls can be chained::

        TransformBuilder().translate((10, 5)).rotate(jnp.pi / 2, (5, 3)).build()
    """

    def __init__(self, operations: Optional[Iterable[Operation]] = None):
        self._operations: List[Operation] = list(operations or ())

    def __len__(self) -> int:
        return len(self._operations)

    def __repr__(self) -> str:
        return f"TransformBuilder({self._operations!r})"

    @property
    def operations(self) -> Tuple[Operation, ...]:
        return tuple(self._operations)

    def copy(self) -> "TransformBuilder":
        return TransformBuilder(self._operations)

    def translate(self, vector) -> "TransformBuilder":
        """Add a translation by ``vector`` (2 values)."""
        vector = affine2d.as_coefficients(vector, 2, "2d vector")
        self._operations.append(Translate(vector=vector))
        return self

    def rotate(self, angle, origin) -> "TransformBuilder":
        """Add a clockwise rotation by ``angle`` radians around ``origin``."""
        angle = jnp.asarray(angle, dtype=float)
        if angle.ndim != 0:
            raise InvalidArgumentError(f"angle must be a scalar, got shape {angle.shape}")
        origin = affine2d.as_coefficients(origin, 2, "origin")
        self._operations.append(Rotate(angle=angle, origin=origin))
        return self

    def scale(self, origin, factor) -> "TransformBuilder":
        """Add a scaling about ``origin``.

        ``factor`` is either a single number (1 is a no-op) or the pair (fx, fy).
        """
        origin = affine2d.as_coefficients(origin, 2, "origin")
        factor = jnp.asarray(factor, dtype=float)
        if factor.ndim == 0:
            factor = jnp.stack([factor, factor])
        factor = affine2d.as_coefficients(factor, 2, "scale factor")
        self._operations.append(Scale(origin=origin, factor=factor))
        return self

    def matrix(self, matrix) -> "TransformBuilder":
        """Add a raw affine matrix, the top 6 values (a, b, c, d, e, f) row-major."""
        matrix = affine2d.as_coefficients(matrix, 6, "matrix (m11, m12, m13, m21, m22, m23)")
        self._operations.append(RawMatrix(matrix=matrix))
        return self

    def apply_transform(self, builder: "TransformBuilder") -> "TransformBuilder":
        """Append every operation queued on ``builder`` after this builder's own."""
        if not isinstance(builder, TransformBuilder):
            raise InvalidArgumentError(
                f"Must be a TransformBuilder, got {type(builder).__name__}"
            )
        self._operations.extend(builder._operations)
        return self

    def resolve_at(self, idx: int) -> Array:
        """The (6,) affine matrix of the operation at position ``idx``."""
        if not 0 <= idx < len(self._operations):
            raise OutOfRangeError(
                f"Operation index {idx} out of bounds for builder with "
                f"{len(self._operations)} operations"
            )
        return resolve(self._operations[idx])

    def build(self) -> CompiledTransform:
        """Resolve all queued operations into one CompiledTransform.

        The earliest queued operation is innermost, i.e. applied first.
        The builder is left untouched and can keep growing and be built again.
        """
        if not self._operations:
            raise InvalidArgumentError(
                "Cannot build an empty TransformBuilder; queue at least one operation"
            )
        matrices = [resolve(op) for op in self._operations]
        matrix = affine2d.compose(*reversed(matrices))
        logger.debug("Composed %d operations into %s", len(matrices), matrix)
        return CompiledTransform(matrix, builder=self)
