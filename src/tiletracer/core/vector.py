"""Vector3 type and single-precision math helpers for the path tracer.

All vectors are NumPy ``float32`` arrays of shape ``(3,)``. They are treated
as values: every helper returns a new array and none of them writes into its
arguments, so vectors can be shared freely between worker threads.

Scalar results (dot products, square roots) are NumPy ``float32`` scalars so
that arithmetic stays in single precision throughout the integrator.

Example:
    >>> from tiletracer.core.vector import vec3, inner_product, normalize_or_zero
    >>> v = vec3(1.0, 2.0, 3.0)
    >>> float(inner_product(v, v))
    14.0
    >>> n = normalize_or_zero(v)  # approximately (0.2672, 0.5344, 0.8016)
"""

import numpy as np
import numpy.typing as npt

# Type alias for 3D vectors (float32 arrays of shape (3,))
Vector3 = npt.NDArray[np.float32]

# Magic constant for the fast inverse square root (Chris Lomont's variant)
LOMONT_CONSTANT = 0x5F375A86

# Vectors with squared length at or below this are normalized to zero
SQUARED_EPSILON = np.float32(1e-8)

_HALF = np.float32(0.5)
_THREE_HALVES = np.float32(1.5)
_ONE = np.float32(1.0)
_TWO = np.float32(2.0)


def vec3(x: float = 0.0, y: float = 0.0, z: float = 0.0) -> Vector3:
    """Create a single-precision 3D vector.

    Args:
        x: First component.
        y: Second component.
        z: Third component.

    Returns:
        A float32 array of shape (3,).
    """
    return np.array((x, y, z), dtype=np.float32)


def zero_vector() -> Vector3:
    """Return a new zero vector."""
    return np.zeros(3, dtype=np.float32)


# =============================================================================
# Products
# =============================================================================


def hadamard_product(a: Vector3, b: Vector3) -> Vector3:
    """Compute the component-wise product of two vectors.

    Used to tint light by a surface color: (a.x*b.x, a.y*b.y, a.z*b.z).
    """
    return np.multiply(a, b, dtype=np.float32)


def inner_product(a: Vector3, b: Vector3) -> np.float32:
    """Compute the dot product of two vectors.

    Args:
        a: First vector.
        b: Second vector.

    Returns:
        The dot product a . b as a float32 scalar.
    """
    return np.float32(a[0] * b[0] + a[1] * b[1] + a[2] * b[2])


def cross_product(a: Vector3, b: Vector3) -> Vector3:
    """Compute the cross product a x b."""
    return np.array(
        (
            a[1] * b[2] - a[2] * b[1],
            a[2] * b[0] - a[0] * b[2],
            a[0] * b[1] - a[1] * b[0],
        ),
        dtype=np.float32,
    )


# =============================================================================
# Square Roots and Normalization
# =============================================================================


def square_root(value: float) -> np.float32:
    """Single-precision square root."""
    return np.sqrt(np.float32(value))


def inverse_sqrt(value: float) -> np.float32:
    """Approximate 1/sqrt(value) with the fast inverse square root.

    Reinterprets the float32 bit pattern as a signed 32-bit integer, subtracts
    half of it from ``LOMONT_CONSTANT`` and refines the estimate with a single
    Newton-Raphson step. The relative error is below 0.2% for positive
    normal floats.

    Args:
        value: A positive number.

    Returns:
        The approximate reciprocal square root as a float32 scalar.
    """
    x = np.float32(value)
    x_half = _HALF * x

    bits = np.array([x], dtype=np.float32).view(np.int32)
    bits = np.int32(LOMONT_CONSTANT) - (bits >> 1)
    y = bits.view(np.float32)[0]

    return y * (_THREE_HALVES - x_half * y * y)


def normalize_or_zero(v: Vector3) -> Vector3:
    """Normalize a vector, or return the zero vector if it is too short.

    Guards against NaN/Inf from zero-length vectors: when the squared length
    is at most ``SQUARED_EPSILON`` the zero vector is returned.

    Args:
        v: The vector to normalize.

    Returns:
        A unit-length vector in the direction of v, or (0, 0, 0).
    """
    length_squared = inner_product(v, v)
    if length_squared > SQUARED_EPSILON:
        return v * inverse_sqrt(length_squared)
    return zero_vector()


# =============================================================================
# Interpolation and Reflection
# =============================================================================


def lerp(a: Vector3, t: float, b: Vector3) -> Vector3:
    """Linearly interpolate from a (t = 0) to b (t = 1).

    Computed as ``(1 - t) * a + t * b`` so both endpoints are exact.
    """
    t = np.float32(t)
    return (_ONE - t) * a + t * b


def reflect(incident: Vector3, normal: Vector3) -> Vector3:
    """Mirror an incident direction about a unit normal: I - 2(I . N)N."""
    return incident - _TWO * inner_product(incident, normal) * normal
