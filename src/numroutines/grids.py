"""
Sample grid generators.

Provides the i-th of n linearly or log10 spaced values between ``xmin`` and
``xmax``, useful for building the abscissa array of an interpolation, plus
vectorised builders for the whole grid.
"""

import numpy as np

from .errors import GridError


def _check_count(n: int) -> None:
    if n < 2:
        raise GridError(f"need at least 2 grid points, got n={n}")


def _check_order(xmin: float, xmax: float) -> None:
    if not xmin < xmax:
        raise GridError(f"grid bounds must satisfy xmin < xmax, got [{xmin}, {xmax}]")


def _check_positive(xmin: float, xmax: float) -> None:
    if not (xmin > 0.0 and xmax > 0.0):
        raise GridError(f"log10 grid bounds must be positive, got [{xmin}, {xmax}]")


def log10_index(i: int, n: int, xmin: float, xmax: float) -> float:
    """
    The i-th of n log10 incremented values between *xmin* and *xmax*.

    $x_i = 10^{(\\log_{10} x_{max} - \\log_{10} x_{min})\\, i/(n-1) + \\log_{10} x_{min}}$

    *i* is not bounds checked; values outside ``[0, n-1]`` extrapolate.

    Parameters
    ----------
    i : int
        Point index.
    n : int
        Number of grid points (>= 2).
    xmin, xmax : float
        Grid bounds, both > 0.

    Returns
    -------
    float

    Raises
    ------
    GridError
        If ``n < 2``, ``xmin >= xmax`` or a bound is not positive.
    """
    _check_count(n)
    _check_order(xmin, xmax)
    _check_positive(xmin, xmax)
    lmin = np.log10(xmin)
    return float(10.0 ** ((np.log10(xmax) - lmin) * float(i) / float(n - 1) + lmin))


def linear_index(i: int, n: int, xmin: float, xmax: float) -> float:
    """
    The i-th of n linearly incremented values between *xmin* and *xmax*.

    $x_i = (x_{max} - x_{min})\\, i/(n-1) + x_{min}$

    *i* is not bounds checked; values outside ``[0, n-1]`` extrapolate.

    Raises
    ------
    GridError
        If ``n < 2`` or ``xmin >= xmax``.
    """
    _check_count(n)
    _check_order(xmin, xmax)
    return float((xmax - xmin) * float(i) / float(n - 1) + xmin)


def log10_grid(n: int, xmin: float, xmax: float) -> np.ndarray:
    """
    All n log10 spaced points, ``log10_index(i, n, xmin, xmax)`` for each i.

    The endpoints are set to *xmin* and *xmax* exactly.

    Returns
    -------
    ndarray of float64, shape ``(n,)``
    """
    _check_count(n)
    _check_order(xmin, xmax)
    _check_positive(xmin, xmax)
    lmin = np.log10(xmin)
    i = np.arange(n, dtype=np.float64)
    grid = 10.0 ** ((np.log10(xmax) - lmin) * i / float(n - 1) + lmin)
    grid[0] = xmin
    grid[-1] = xmax
    return grid


def linear_grid(n: int, xmin: float, xmax: float) -> np.ndarray:
    """All n linearly spaced points; endpoints are exact."""
    _check_count(n)
    _check_order(xmin, xmax)
    i = np.arange(n, dtype=np.float64)
    grid = (xmax - xmin) * i / float(n - 1) + xmin
    grid[0] = xmin
    grid[-1] = xmax
    return grid
