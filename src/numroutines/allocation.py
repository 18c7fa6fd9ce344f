"""
Safe allocation of zero-initialised numeric buffers.

Every allocator returns a single contiguous ``ndarray`` that records its
own shape and dtype, so there is no matching deallocation call to get
wrong: dropping the last reference frees the buffer.  Allocation failures
are reported as :class:`~numroutines.errors.AllocationError` instead of
stopping the program.
"""

import operator
from typing import Tuple

import numpy as np

from .errors import AllocationError
from .logger import get_logger
from .numerictypes import dp, i4b, size_t, sp

log = get_logger(__name__)


def _calloc(shape: Tuple[int, ...], dtype) -> np.ndarray:
    """Allocate a zeroed array of *shape*, or raise ``AllocationError``."""
    for extent in shape:
        try:
            size = operator.index(extent)
        except TypeError:
            size = -1
        if size < 0:
            raise AllocationError(f"invalid extent {extent!r}", shape, np.dtype(dtype).name)
    try:
        arr = np.zeros(shape, dtype=dtype)
    except (MemoryError, ValueError) as exc:
        nbytes = int(np.prod(shape, dtype=np.float64) * np.dtype(dtype).itemsize)
        log.error("Error allocating array of shape %s (%d bytes).", shape, nbytes)
        raise AllocationError(str(exc) or "out of memory", shape, np.dtype(dtype).name) from exc
    log.debug2("allocated %s array of shape %s", arr.dtype.name, shape)
    return arr


# ===================================================================
#  1-D buffers
# ===================================================================

def calloc_double_array(n: int) -> np.ndarray:
    """Zeroed float64 array of length *n*."""
    return _calloc((n,), dp)


def calloc_float_array(n: int) -> np.ndarray:
    """Zeroed float32 array of length *n*."""
    return _calloc((n,), sp)


def calloc_int_array(n: int) -> np.ndarray:
    """Zeroed int32 array of length *n*."""
    return _calloc((n,), i4b)


def calloc_size_t_array(n: int) -> np.ndarray:
    """Zeroed ``uintp`` (size_t) array of length *n*."""
    return _calloc((n,), size_t)


# ===================================================================
#  Multi-dimensional arrays
# ===================================================================

def two_dimensional_array(n: int, l: int) -> np.ndarray:
    """
    Allocate a zeroed ``(n, l)`` float64 array.

    Parameters
    ----------
    n, l : int
        Extents along each axis.

    Returns
    -------
    ndarray of float64, shape ``(n, l)``

    Raises
    ------
    AllocationError
        If an extent is negative or the memory cannot be obtained.
    """
    return _calloc((n, l), dp)


def three_dimensional_array(n: int, l: int, m: int) -> np.ndarray:
    """Allocate a zeroed ``(n, l, m)`` float64 array."""
    return _calloc((n, l, m), dp)


def four_dimensional_array(n: int, l: int, m: int, p: int) -> np.ndarray:
    """
    Allocate a zeroed ``(n, l, m, p)`` float64 array.

    All four extents are honoured independently (``m`` and ``p`` may
    differ).
    """
    return _calloc((n, l, m, p), dp)


def three_dimensional_int_array(n: int, l: int, m: int) -> np.ndarray:
    """Allocate a zeroed ``(n, l, m)`` int32 array."""
    return _calloc((n, l, m), i4b)
