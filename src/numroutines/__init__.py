"""
numroutines: small numeric helper routines.

Safe array allocation, linear/log10 sample grids, cubic spline builders,
and 2-D/3-D vector and rank-2 tensor operations.
"""

__version__ = "0.1.0"

# Import modules themselves (allows: from numroutines import spline)
from . import allocation
from . import errors
from . import grids
from . import logger
from . import numerictypes
from . import routines
from . import spline
from . import tensors
from . import vectors

from .errors import (
    AllocationError,
    ArgumentCountError,
    DimensionError,
    DomainError,
    FileOpenError,
    GridError,
    NonPositiveValueError,
    OutputBufferError,
    RoutinesError,
    SplineError,
)
from .grids import linear_grid, linear_index, log10_grid, log10_index
from .spline import Spline, create_linear_spline, create_log10_spline
from .tensors import determinant, tensor_transform
from .vectors import cross, cross_in_place, dot, magnitude

__all__ = [
    "allocation",
    "errors",
    "grids",
    "logger",
    "numerictypes",
    "routines",
    "spline",
    "tensors",
    "vectors",
    "AllocationError",
    "ArgumentCountError",
    "DimensionError",
    "DomainError",
    "FileOpenError",
    "GridError",
    "NonPositiveValueError",
    "OutputBufferError",
    "RoutinesError",
    "SplineError",
    "Spline",
    "create_linear_spline",
    "create_log10_spline",
    "cross",
    "cross_in_place",
    "determinant",
    "dot",
    "linear_grid",
    "linear_index",
    "log10_grid",
    "log10_index",
    "magnitude",
    "tensor_transform",
]
