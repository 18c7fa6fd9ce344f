"""
Small supporting routines: argument and file checks, extrema, and a
numeric comparator for sorting.

Checks that fail raise a :class:`~numroutines.errors.RoutinesError`
subclass; nothing here exits the interpreter.
"""

import functools
import os
from typing import IO, Optional, Sequence, Union

import numpy as np

from .errors import ArgumentCountError, FileOpenError
from .logger import get_logger

log = get_logger(__name__)

PathLike = Union[str, bytes, os.PathLike]


def check_args(argv: Sequence[str], num_args: int) -> None:
    """
    Ensure that the number of command line arguments equals *num_args*.

    Parameters
    ----------
    argv : sequence of str
        Typically ``sys.argv`` (program name included).
    num_args : int
        Expected ``len(argv)``.

    Raises
    ------
    ArgumentCountError
    """
    if len(argv) != num_args:
        raise ArgumentCountError(len(argv), num_args)


def check_file(fname: PathLike) -> bool:
    """True if *fname* exists and can be opened for reading."""
    try:
        with open(fname, "r"):
            return True
    except OSError:
        return False


def fopen_safe(fname: PathLike, mode: str = "r") -> IO:
    """
    Open *fname* with *mode*, raising ``FileOpenError`` on failure.

    The returned file object is owned by the caller.
    """
    try:
        return open(fname, mode)
    except OSError as exc:
        log.error("Error opening %s.", fname)
        raise FileOpenError(fname, mode) from exc


def max_three(a: float, b: float, c: float) -> float:
    """Returns the max of 3 numbers"""
    return max(max(a, b), c)


def _leading(x, n: Optional[int]) -> np.ndarray:
    arr = np.asarray(x, dtype=np.float64).ravel()
    if n is not None:
        arr = arr[:n]
    if arr.size == 0:
        raise ValueError("extremum of an empty array is undefined")
    return arr


def array_max(x, n: Optional[int] = None) -> float:
    """Maximum of the first *n* elements of *x* (all when *n* is None)."""
    return float(np.max(_leading(x, n)))


def array_min(x, n: Optional[int] = None) -> float:
    """Minimum of the first *n* elements of *x* (all when *n* is None)."""
    return float(np.min(_leading(x, n)))


def compare_doubles(a: float, b: float) -> int:
    """
    Three-way comparison of two reals: -1, 0 or 1.

    Use with :func:`functools.cmp_to_key` to sort ascending.  NaN compares
    equal to everything, so its position in a sorted result is unspecified.
    """
    return (a > b) - (a < b)


def sort_doubles(x) -> np.ndarray:
    """Ascending float64 copy of *x*, ordered by :func:`compare_doubles`."""
    values = np.asarray(x, dtype=np.float64).ravel().tolist()
    return np.array(sorted(values, key=functools.cmp_to_key(compare_doubles)), dtype=np.float64)
