"""Operation data structures for jax_affine.

This module provides the immutable operation records a TransformBuilder
queues, and the resolver that turns each one into an affine matrix.
"""

from .operations import Operation, RawMatrix, Rotate, Scale, Translate, resolve

__all__ = ["Operation", "Translate", "Rotate", "Scale", "RawMatrix", "resolve"]
