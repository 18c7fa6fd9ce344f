"""
numroutines exceptions

Every failure that would otherwise stop the program is reported as a
subclass of :class:`RoutinesError`. Subclasses also derive from the closest
built-in exception so callers can catch either.
"""


class RoutinesError(Exception):
    """Base exception class for all numroutines errors"""

    def __init__(self, message: str, error_code: str = "NR_GENERAL"):
        super().__init__(message)
        self.error_code = error_code
        self.message = message

    def __str__(self):
        return f"[{self.error_code}] {self.message}"


class AllocationError(RoutinesError, MemoryError):
    """Raised when a buffer cannot be allocated"""

    def __init__(self, message: str, shape: tuple = None, dtype=None):
        self.shape = shape
        self.dtype = dtype
        full_message = f"Allocation failed: {message}"
        if shape is not None:
            full_message += f" (shape={shape}, dtype={dtype})"
        super().__init__(full_message, "NR_ALLOC")


class DimensionError(RoutinesError, ValueError):
    """Raised for an unsupported dimension or an undersized operand"""

    def __init__(self, message: str, ndim: int = None):
        self.ndim = ndim
        super().__init__(message, "NR_DIMENSION")


class OutputBufferError(RoutinesError, TypeError):
    """Raised when a caller-supplied result buffer is not writeable float64"""

    def __init__(self, message: str, dtype=None):
        self.dtype = dtype
        super().__init__(message, "NR_BUFFER")


class GridError(RoutinesError, ValueError):
    """Raised when grid bounds or point counts are invalid"""

    def __init__(self, message: str):
        super().__init__(message, "NR_GRID")


class SplineError(RoutinesError, ValueError):
    """Raised when a spline cannot be built or evaluated"""

    def __init__(self, message: str, error_code: str = "NR_SPLINE"):
        super().__init__(message, error_code)


class NonPositiveValueError(SplineError):
    """Raised when a log10 spline samples a function value <= 0"""

    def __init__(self, index: int, x: float, value: float):
        self.index = index
        self.x = x
        self.value = value
        super().__init__(
            f"func({x:e}) <= 0 ({value:e}) at index {index}, cannot use log10 spline here",
            "NR_NONPOSITIVE",
        )


class DomainError(SplineError):
    """Raised when a spline is evaluated outside its abscissa range"""

    def __init__(self, u: float, lower: float, upper: float):
        self.u = u
        self.lower = lower
        self.upper = upper
        super().__init__(
            f"interpolation point {u!r} outside range [{lower!r}, {upper!r}]",
            "NR_DOMAIN",
        )


class ArgumentCountError(RoutinesError):
    """Raised when a command line has the wrong number of arguments"""

    def __init__(self, argc: int, expected: int):
        self.argc = argc
        self.expected = expected
        super().__init__(f"argc == {argc}, expected num_args == {expected}", "NR_ARGS")


class FileOpenError(RoutinesError, OSError):
    """Raised when a file cannot be opened"""

    def __init__(self, fname, mode: str):
        self.fname = fname
        self.mode = mode
        super().__init__(f"Error opening {fname} (mode {mode!r})", "NR_FILE")
