"""Tests for the affine matrix primitives and rotation helpers."""

import hypothesis
import jax
import jax.numpy as jnp
import numpy as np
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from jax_affine.errors import InvalidArgumentError
from jax_affine.transforms import affine2d, rotation

# Use hypothesis profile for CI
hypothesis.settings.register_profile("ci", max_examples=10, deadline=None)

IDENTITY = jnp.array([1.0, 0.0, 0.0, 0.0, 1.0, 0.0])


# Basic tests
def test_identity():
    """Test identity matrix coefficients."""
    np.testing.assert_allclose(affine2d.identity(), IDENTITY)


def test_translate():
    """Test translation matrix layout."""
    m = affine2d.translate(jnp.array([10.0, 5.2]))
    expected = jnp.array([1.0, 0.0, 10.0, 0.0, 1.0, 5.2])
    np.testing.assert_allclose(m, expected, rtol=1e-6, atol=1e-6)


def test_inverse_translate():
    """Test inverse translation negates the vector."""
    m = affine2d.inverse_translate([10.0, 5.2])
    expected = jnp.array([1.0, 0.0, -10.0, 0.0, 1.0, -5.2])
    np.testing.assert_allclose(m, expected, rtol=1e-6, atol=1e-6)


def test_scale():
    """Test scaling about the coordinate origin."""
    m = affine2d.scale([2.0, 2.5])
    expected = jnp.array([2.0, 0.0, 0.0, 0.0, 2.5, 0.0])
    np.testing.assert_allclose(m, expected, rtol=1e-6, atol=1e-6)


def test_integer_input_promoted_to_float():
    """Test integer vectors produce float matrices."""
    m = affine2d.translate([1, 2])
    assert jnp.issubdtype(m.dtype, jnp.floating)


def test_compose2_applies_inner_first():
    """Test compose2(outer, inner) applies inner, then outer."""
    outer = affine2d.translate([1.0, 2.0])
    inner = affine2d.scale([2.0, 3.0])

    # (1, 1) -> scale -> (2, 3) -> translate -> (3, 5)
    transformed = affine2d.apply(affine2d.compose2(outer, inner), jnp.array([1.0, 1.0]))
    np.testing.assert_allclose(transformed, jnp.array([3.0, 5.0]), rtol=1e-6, atol=1e-6)


def test_compose2_matches_homogeneous_product():
    """Test compose2 agrees with the 3x3 matrix product."""
    outer = jnp.array([1.0, 2.0, 3.0, 4.0, 5.0, 6.0])
    inner = jnp.array([-1.0, 0.5, 2.0, 0.25, 3.0, -4.0])

    expected = affine2d.to_homogeneous(outer) @ affine2d.to_homogeneous(inner)
    result = affine2d.to_homogeneous(affine2d.compose2(outer, inner))
    np.testing.assert_allclose(result, expected, rtol=1e-6, atol=1e-6)


def test_compose_chain_order():
    """Test compose(A, B, C) applies C, then B, then A."""
    a = affine2d.translate([1.0, 0.0])
    b = affine2d.scale([2.0, 2.0])
    c = affine2d.translate([0.0, 1.0])

    # (0, 0) -> c -> (0, 1) -> b -> (0, 2) -> a -> (1, 2)
    transformed = affine2d.apply(affine2d.compose(a, b, c), jnp.zeros(2))
    np.testing.assert_allclose(transformed, jnp.array([1.0, 2.0]), rtol=1e-6, atol=1e-6)


def test_compose_single_matrix_unchanged():
    """Test compose with one matrix returns it."""
    m = jnp.array([1.0, 2.0, 3.0, 4.0, 5.0, 6.0])
    np.testing.assert_allclose(affine2d.compose(m), m)


def test_compose_empty_raises():
    """Test compose with no matrices is rejected."""
    with pytest.raises(InvalidArgumentError):
        affine2d.compose()


def test_determinant():
    """Test determinant of the linear part."""
    m = jnp.array([2.0, 1.0, 7.0, 3.0, 4.0, -2.0])
    np.testing.assert_allclose(affine2d.determinant(m), 5.0)


def test_inverse_closed_form():
    """Test inverse coefficients against hand-computed values."""
    m = jnp.array([2.0, 0.0, 1.0, 0.0, 4.0, 2.0])
    expected = jnp.array([0.5, 0.0, -0.5, 0.0, 0.25, -0.5])
    np.testing.assert_allclose(affine2d.inverse(m), expected, rtol=1e-6, atol=1e-6)

    # m maps (1, 1) to (3, 6); the inverse maps it back
    back = affine2d.apply(affine2d.inverse(m), jnp.array([3.0, 6.0]))
    np.testing.assert_allclose(back, jnp.array([1.0, 1.0]), rtol=1e-6, atol=1e-6)


def test_homogeneous_conversion():
    """Test expansion to 3x3 and back."""
    m = jnp.array([1.0, 2.0, 3.0, 4.0, 5.0, 6.0])
    M = affine2d.to_homogeneous(m)

    expected = jnp.array([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0], [0.0, 0.0, 1.0]])
    np.testing.assert_allclose(M, expected)
    np.testing.assert_allclose(affine2d.from_homogeneous(M), m)


def test_from_homogeneous_rejects_bad_shape():
    """Test from_homogeneous requires a 3x3 matrix."""
    with pytest.raises(InvalidArgumentError):
        affine2d.from_homogeneous(jnp.eye(4))


@pytest.mark.parametrize("values,size", [([1.0, 2.0, 3.0], 2), ([1.0], 2), ([1.0] * 5, 6), ([[1.0, 2.0]], 2)])
def test_as_coefficients_rejects_wrong_length(values, size):
    """Test length validation of vectors and matrices."""
    with pytest.raises(InvalidArgumentError):
        affine2d.as_coefficients(values, size)


# Batched tests
def test_primitives_batched():
    """Test primitives broadcast over a batch of vectors."""
    batch_size = 5
    vectors = jnp.tile(jnp.array([1.0, 2.0]), (batch_size, 1))
    translations = affine2d.translate(vectors)
    assert translations.shape == (batch_size, 6)

    points = jnp.zeros((batch_size, 2))
    transformed = affine2d.apply(translations, points)
    np.testing.assert_allclose(transformed, vectors, rtol=1e-6, atol=1e-6)


# JIT tests
def test_compose2_jit():
    """Test compose2 under JIT."""
    jitted = jax.jit(affine2d.compose2)
    result = jitted(affine2d.translate([3.0, 4.0]), affine2d.inverse_translate([3.0, 4.0]))
    np.testing.assert_allclose(result, IDENTITY, rtol=1e-6, atol=1e-6)


def test_inverse_jit():
    """Test inverse under JIT."""
    m = jnp.array([2.0, 1.0, 7.0, 3.0, 4.0, -2.0])
    result = jax.jit(affine2d.inverse)(m)
    np.testing.assert_allclose(affine2d.compose2(m, result), IDENTITY, rtol=1e-6, atol=1e-6)


# Rotation tests
def test_rotation_quarter_turn():
    """Test rotation by pi/2 maps the x axis onto the y axis."""
    m = rotation.rotation(jnp.pi / 2)
    expected = jnp.array([0.0, -1.0, 0.0, 1.0, 0.0, 0.0])
    np.testing.assert_allclose(m, expected, rtol=1e-6, atol=1e-6)

    transformed = affine2d.apply(m, jnp.array([1.0, 0.0]))
    np.testing.assert_allclose(transformed, jnp.array([0.0, 1.0]), rtol=1e-6, atol=1e-6)


def test_rotation_zero_is_identity():
    """Test rotation by zero gives identity."""
    np.testing.assert_allclose(rotation.rotation(0.0), IDENTITY, rtol=1e-6, atol=1e-6)


def test_rotation_determinant_is_one():
    """Test rotations preserve area."""
    angles = jnp.linspace(-jnp.pi, jnp.pi, 7)
    dets = affine2d.determinant(rotation.rotation(angles))
    np.testing.assert_allclose(dets, jnp.ones(7), rtol=1e-6, atol=1e-6)


def test_rotation_angle_recovered():
    """Test rotation_angle inverts rotation."""
    angle = 0.7
    m = affine2d.compose(rotation.rotation(angle), affine2d.scale([3.0, 3.0]))
    np.testing.assert_allclose(rotation.rotation_angle(m), angle, rtol=1e-6, atol=1e-6)


# Property-based tests with hypothesis - explicit key handling
@given(st.integers(min_value=0, max_value=100))
@settings(deadline=None)
def test_translate_then_inverse_is_identity(seed):
    """Test composing a translation with its inverse gives identity."""
    key = jax.random.PRNGKey(seed)
    vec = jax.random.uniform(key, (2,), minval=-100.0, maxval=100.0)

    result = affine2d.compose(affine2d.translate(vec), affine2d.inverse_translate(vec))
    np.testing.assert_allclose(result, IDENTITY, rtol=1e-6, atol=1e-6)

    result = affine2d.compose(affine2d.inverse_translate(vec), affine2d.translate(vec))
    np.testing.assert_allclose(result, IDENTITY, rtol=1e-6, atol=1e-6)


@given(st.integers(min_value=0, max_value=100))
@settings(deadline=None)
def test_rotations_add(seed):
    """Test composing two rotations adds their angles."""
    key1, key2 = jax.random.split(jax.random.PRNGKey(seed))
    alpha = jax.random.uniform(key1, (), minval=-jnp.pi, maxval=jnp.pi)
    beta = jax.random.uniform(key2, (), minval=-jnp.pi, maxval=jnp.pi)

    combined = affine2d.compose(rotation.rotation(alpha), rotation.rotation(beta))
    np.testing.assert_allclose(combined, rotation.rotation(alpha + beta), rtol=1e-6, atol=1e-6)
