"""
Determinant and rank-2 tensor transformation for 2x2 and 3x3 matrices.

Only 2 and 3 dimensions are supported; any other ``ndim`` raises
:class:`~numroutines.errors.DimensionError`.
"""

import numpy as np
from numba import jit

from .allocation import two_dimensional_array
from .errors import DimensionError

SUPPORTED_NDIM = (2, 3)


def _as_matrix(a, ndim: int, name: str) -> np.ndarray:
    """Return *a* as a float64 matrix of at least ``ndim x ndim``."""
    if ndim not in SUPPORTED_NDIM:
        raise DimensionError(f"only 2 or 3 dimensions are supported, got ndim={ndim}", ndim)
    arr = np.ascontiguousarray(a, dtype=np.float64)
    if arr.ndim != 2 or arr.shape[0] < ndim or arr.shape[1] < ndim:
        raise DimensionError(f"{name} must be at least {ndim}x{ndim}, got shape {arr.shape}", ndim)
    return arr


@jit(nopython=True, cache=True)
def _determinant_jit(a, ndim):
    """JIT-compiled closed-form determinant."""
    if ndim == 2:
        return a[0, 0] * a[1, 1] - a[1, 0] * a[0, 1]
    det = 0.0
    det += a[0, 0] * a[1, 1] * a[2, 2] + a[0, 1] * a[1, 2] * a[2, 0]
    det += a[0, 2] * a[1, 0] * a[2, 1] - a[0, 2] * a[1, 1] * a[2, 0]
    det -= a[0, 1] * a[1, 0] * a[2, 2] + a[0, 0] * a[1, 2] * a[2, 1]
    return det


@jit(nopython=True, cache=True)
def _tensor_transform_jit(result, a, sigma, ndim):
    """JIT-compiled result_nm = a_nj a_mi sigma_ji."""
    for n in range(ndim):
        for m in range(ndim):
            x = 0.0
            for j in range(ndim):
                y = 0.0
                for i in range(ndim):
                    y += a[m, i] * sigma[j, i]
                x += a[n, j] * y
            result[n, m] = x


def determinant(a, ndim: int) -> float:
    """
    Determinant of a 2x2 or 3x3 matrix.

    ndim = 2:  $a_{00} a_{11} - a_{10} a_{01}$

    ndim = 3:  cofactor expansion along the first row,

    $a_{00}(a_{11}a_{22} - a_{12}a_{21}) - a_{01}(a_{10}a_{22} - a_{12}a_{20})
    + a_{02}(a_{10}a_{21} - a_{11}a_{20})$

    Parameters
    ----------
    a : array_like, shape (ndim, ndim)
        Matrix or rank-2 tensor. Only the leading ``ndim x ndim`` block is read.
    ndim : int
        2 or 3.

    Returns
    -------
    float

    Raises
    ------
    DimensionError
        If ``ndim`` is not 2 or 3, or *a* is too small.
    """
    return float(_determinant_jit(_as_matrix(a, ndim, "a"), ndim))


def tensor_transform(a, sigma, ndim: int) -> np.ndarray:
    """
    Apply the transformation *a* to the rank-2 tensor *sigma*.

    A tensor transformation of the form

    $\\sigma' = a \\, \\sigma \\, a^T$

    written index-wise (summation over repeated indices) is

    $\\sigma'_{nm} = a_{nj} \\, a_{mi} \\, \\sigma_{ji}$

    which rotates e.g. a stress tensor into the basis described by *a*.
    Cost is O(ndim^3).

    Parameters
    ----------
    a : array_like, shape (ndim, ndim)
        Transformation (typically a rotation) matrix.
    sigma : array_like, shape (ndim, ndim)
        Tensor to transform.
    ndim : int
        2 or 3.

    Returns
    -------
    ndarray of float64, shape ``(ndim, ndim)``
        Newly allocated transformed tensor; inputs are not modified.

    Raises
    ------
    DimensionError
        If ``ndim`` is not 2 or 3, or an operand is too small.
    """
    am = _as_matrix(a, ndim, "a")
    sm = _as_matrix(sigma, ndim, "sigma")
    result = two_dimensional_array(ndim, ndim)
    _tensor_transform_jit(result, am, sm, ndim)
    return result
