"""
Vector operations: dot product, cross product, magnitude.

Each public function validates its operands and hands contiguous float64
arrays to a Numba-compiled kernel.  ``cross`` and ``cross_in_place`` share
the same kernel, so they produce identical numbers for identical inputs.
"""

from typing import Sequence, Union

import numpy as np
from numba import jit

from .errors import DimensionError, OutputBufferError

ArrayLike = Union[Sequence[float], np.ndarray]


def _as_vector(v: ArrayLike, n: int, name: str) -> np.ndarray:
    """Return *v* as a contiguous 1-D float64 array holding at least *n* values."""
    arr = np.ascontiguousarray(v, dtype=np.float64)
    if arr.ndim != 1:
        raise DimensionError(f"{name} must be 1-D, got shape {arr.shape}", n)
    if arr.size < n:
        raise DimensionError(f"{name} has {arr.size} elements, need {n}", n)
    return arr


def _check_positive(n: int, what: str = "n") -> None:
    if n <= 0:
        raise DimensionError(f"{what} must be positive, got {n}", n)


def _cross_size(ndim: int) -> int:
    return 1 if ndim == 2 else 3


@jit(nopython=True, cache=True)
def _dot_jit(x, y, n):
    """JIT-compiled dot product over the first n elements."""
    s = 0.0
    for i in range(n):
        s += x[i] * y[i]
    return s


@jit(nopython=True, cache=True)
def _magnitude_jit(x, n):
    """JIT-compiled Euclidean norm over the first n elements."""
    s = 0.0
    for i in range(n):
        s += x[i] * x[i]
    return np.sqrt(s)


@jit(nopython=True, cache=True)
def _cross_jit(r, x, y, ndim):
    """JIT-compiled cross product written into r."""
    if ndim == 2:
        r[0] = x[0] * y[1] - x[1] * y[0]
    else:
        r[0] = x[1] * y[2] - x[2] * y[1]
        r[1] = x[2] * y[0] - x[0] * y[2]
        r[2] = x[0] * y[1] - x[1] * y[0]


def dot(x: ArrayLike, y: ArrayLike, n: int) -> float:
    """
    Dot product of the first *n* elements of *x* and *y*.

    $x \\cdot y = \\sum_{i<n} x_i y_i$

    Parameters
    ----------
    x, y : array_like
        Vectors with at least *n* elements.
    n : int
        Number of elements to use (> 0).

    Returns
    -------
    float

    Raises
    ------
    DimensionError
        If ``n <= 0`` or a vector is too short.
    """
    _check_positive(n)
    return float(_dot_jit(_as_vector(x, n, "x"), _as_vector(y, n, "y"), n))


def magnitude(x: ArrayLike, n: int) -> float:
    """
    Euclidean norm of the first *n* elements, $\\sqrt{\\sum_i x_i^2}$.

    Raises
    ------
    DimensionError
        If ``n <= 0`` or *x* is too short.
    """
    _check_positive(n)
    return float(_magnitude_jit(_as_vector(x, n, "x"), n))


def cross(x: ArrayLike, y: ArrayLike, ndim: int) -> np.ndarray:
    """
    Cross product $x \\times y$ in a new array.

    For ``ndim == 2`` the result has one element, the z-component
    ``x0*y1 - x1*y0`` of the planar cross product.  Any other positive
    *ndim* gives the usual 3-element cross product.

    Parameters
    ----------
    x, y : array_like
        Operands with at least 2 (planar) or 3 elements.
    ndim : int
        Spatial dimension.

    Returns
    -------
    ndarray of float64, shape ``(1,)`` or ``(3,)``

    Raises
    ------
    DimensionError
        If ``ndim <= 0`` or an operand is too short.
    """
    _check_positive(ndim, "ndim")
    r = np.zeros(_cross_size(ndim), dtype=np.float64)
    return cross_in_place(r, x, y, ndim)


def cross_in_place(r: np.ndarray, x: ArrayLike, y: ArrayLike, ndim: int) -> np.ndarray:
    """
    Cross product $x \\times y$ written into the caller's buffer *r*.

    Same numbers as :func:`cross`.  *r* must be a writeable 1-D float64
    ndarray with room for 1 (``ndim == 2``) or 3 elements; it is returned.

    Raises
    ------
    DimensionError
        If ``ndim <= 0``, an operand is too short or *r* is too small.
    OutputBufferError
        If *r* is not float64 or is read-only.
    """
    _check_positive(ndim, "ndim")
    size = _cross_size(ndim)
    need = 2 if ndim == 2 else 3
    xa = _as_vector(x, need, "x")
    ya = _as_vector(y, need, "y")
    if not isinstance(r, np.ndarray) or r.ndim != 1 or r.size < size:
        raise DimensionError(f"result buffer needs {size} elements", ndim)
    if r.dtype != np.float64:
        raise OutputBufferError(f"result buffer must be float64, got {r.dtype}", r.dtype)
    if not r.flags.writeable:
        raise OutputBufferError("result buffer is read-only", r.dtype)
    _cross_jit(r, xa, ya, ndim)
    return r
