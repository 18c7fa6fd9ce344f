"""
Numeric type aliases for the allocation helpers, using NumPy.
"""
from typing import Type

import numpy as np


class NumericTypes:
    """
    Element types for the buffers handed out by :mod:`numroutines.allocation`.

    Attributes:
        dp (Type[np.float64]): Double precision (64-bit) floating point type.
        sp (Type[np.float32]): Single precision (32-bit) floating point type.
        i4b (Type[np.int32]): 32-bit integer type, the C ``int``.
        size_t (Type[np.uintp]): Unsigned integer wide enough to hold a pointer.
    """
    dp: Type[np.float64] = np.float64
    sp: Type[np.float32] = np.float32
    i4b: Type[np.int32] = np.int32
    size_t: Type[np.unsignedinteger] = np.uintp


dp = NumericTypes.dp
sp = NumericTypes.sp
i4b = NumericTypes.i4b
size_t = NumericTypes.size_t
