"""
Cubic spline construction and evaluation.

:func:`create_linear_spline` and :func:`create_log10_spline` sample a
caller-supplied function on an abscissa array and fit a cubic spline to the
result, either directly or in log10 space.  The fit itself is delegated to a
:class:`SplineBackend`:

- ``"scipy"``  -- :class:`scipy.interpolate.CubicSpline`, natural boundary
  conditions (default).
- ``"fmm"``    -- Forsythe-Malcolm-Moler end conditions, Numba kernel.

The default backend is taken from ``NUMROUTINES_SPLINE_BACKEND`` or set with
:func:`set_default_backend`.  Any object with a compatible ``fit`` method may
also be passed as ``backend=``.

A :class:`Spline` keeps an :class:`InterpAccel` that caches the last located
interval, so it must not be evaluated from several threads at once without
external locking.
"""

import os
from typing import Callable, Dict, List, Optional, Protocol, Union

import numpy as np
from numba import jit
from scipy.interpolate import CubicSpline

from .allocation import calloc_double_array, two_dimensional_array
from .errors import DomainError, NonPositiveValueError, SplineError
from .logger import get_logger

log = get_logger(__name__)

ENV_BACKEND = "NUMROUTINES_SPLINE_BACKEND"

# A cubic needs at least three knots to be anything but a straight line.
MIN_POINTS = 3

ScalarFunc = Callable[[float], float]
Number = Union[float, np.ndarray]


# ===================================================================
#  Interval location
# ===================================================================

@jit(nopython=True, cache=True)
def _bsearch(xa, u, ilo, ihi):
    """
    Bisection for i in [ilo, ihi) with xa[i] <= u < xa[i+1].

    Returns ihi - 1 when u equals the last knot.
    """
    while ihi > ilo + 1:
        i = (ihi + ilo) // 2
        if xa[i] > u:
            ihi = i
        else:
            ilo = i
    return ilo


class InterpAccel:
    """
    Interval lookup accelerator.

    Remembers the interval found by the previous query and checks it first;
    only on a miss does it fall back to bisection.  ``hits`` and ``misses``
    count the two outcomes.
    """

    def __init__(self):
        self.cache = 0
        self.hits = 0
        self.misses = 0

    def reset(self) -> None:
        """Forget the cached interval and zero the counters."""
        self.cache = 0
        self.hits = 0
        self.misses = 0

    def find(self, xa: np.ndarray, u: float) -> int:
        """
        Index i such that ``xa[i] <= u < xa[i+1]``.

        *u* is assumed to lie in ``[xa[0], xa[-1]]``; for ``u == xa[-1]``
        the last interval ``len(xa) - 2`` is returned.
        """
        n = xa.shape[0]
        i = self.cache
        if i > n - 2:
            i = 0
        if u < xa[i]:
            self.misses += 1
            i = _bsearch(xa, u, 0, i)
        elif u >= xa[i + 1]:
            self.misses += 1
            i = _bsearch(xa, u, i, n - 1)
        else:
            self.hits += 1
        self.cache = int(i)
        return self.cache


# ===================================================================
#  Backends
# ===================================================================

class SplineBackend(Protocol):
    """
    Fits a cubic spline to (x, y).

    ``fit`` returns the piecewise polynomial coefficients, shape
    ``(4, n-1)``, highest power first, local to each left knot: on
    ``[x[i], x[i+1]]`` the spline is
    ``c[0,i]*dx**3 + c[1,i]*dx**2 + c[2,i]*dx + c[3,i]`` with ``dx = u - x[i]``.
    """

    name: str

    def fit(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        ...


class ScipyCubicBackend:
    """Cubic spline from :class:`scipy.interpolate.CubicSpline`."""

    name = "scipy"

    def __init__(self, bc_type: str = "natural"):
        self.bc_type = bc_type

    def fit(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        return np.array(CubicSpline(x, y, bc_type=self.bc_type).c, dtype=np.float64)

    def __repr__(self):
        return f"ScipyCubicBackend(bc_type={self.bc_type!r})"


@jit(nopython=True, cache=True)
def _fmm_jit(x, y, coef):
    """
    JIT-compiled cubic coefficients with Forsythe-Malcolm-Moler end conditions.

    Algorithm of routine SPLINE in Forsythe, Malcolm & Moler, *Computer
    Methods for Mathematical Computations* (1977).  Fills *coef*, shape
    ``(4, n-1)``, highest power first, so that on ``[x[i], x[i+1]]``
    ``y(u) = ((coef[0,i]*t + coef[1,i])*t + coef[2,i])*t + coef[3,i]``
    with ``t = u - x[i]``.  Requires n >= 3.
    """
    n = x.shape[0]
    h = np.empty(n - 1)
    slope = np.empty(n - 1)
    for i in range(n - 1):
        h[i] = x[i + 1] - x[i]
        slope[i] = (y[i + 1] - y[i]) / h[i]

    # Symmetric tridiagonal system for sigma = y''/6; row i couples to i+1 via h[i]
    diag = np.empty(n)
    rhs = np.zeros(n)
    diag[0] = -h[0]
    diag[n - 1] = -h[n - 2]
    for i in range(1, n - 1):
        diag[i] = 2.0 * (h[i - 1] + h[i])
        rhs[i] = slope[i] - slope[i - 1]
    if n > 3:
        # end third derivatives match the cubics through the first and last four points
        first = rhs[2] / (x[3] - x[1]) - rhs[1] / (x[2] - x[0])
        last = rhs[n - 2] / (x[n - 1] - x[n - 3]) - rhs[n - 3] / (x[n - 2] - x[n - 4])
        rhs[0] = first * h[0] ** 2 / (x[3] - x[0])
        rhs[n - 1] = -last * h[n - 2] ** 2 / (x[n - 1] - x[n - 4])

    for i in range(1, n):
        t = h[i - 1] / diag[i - 1]
        diag[i] -= t * h[i - 1]
        rhs[i] -= t * rhs[i - 1]
    sigma = np.empty(n)
    sigma[n - 1] = rhs[n - 1] / diag[n - 1]
    for i in range(n - 2, -1, -1):
        sigma[i] = (rhs[i] - h[i] * sigma[i + 1]) / diag[i]

    for i in range(n - 1):
        coef[0, i] = (sigma[i + 1] - sigma[i]) / h[i]
        coef[1, i] = 3.0 * sigma[i]
        coef[2, i] = slope[i] - h[i] * (sigma[i + 1] + 2.0 * sigma[i])
        coef[3, i] = y[i]


class FMMCubicBackend:
    """
    Cubic spline with Forsythe-Malcolm-Moler end conditions.

    The end slopes come from cubics through the first and last four points,
    so any cubic polynomial is reproduced exactly when n >= 4.
    """

    name = "fmm"

    def fit(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        coef = two_dimensional_array(4, x.shape[0] - 1)
        _fmm_jit(x, y, coef)
        return coef

    def __repr__(self):
        return "FMMCubicBackend()"


_BACKENDS: Dict[str, Callable[[], SplineBackend]] = {
    "scipy": ScipyCubicBackend,
    "fmm": FMMCubicBackend,
}
_default_backend: Optional[str] = None


def register_backend(name: str, factory: Callable[[], SplineBackend]) -> None:
    """Make *factory* available under *name* for :func:`get_backend`."""
    _BACKENDS[name.lower()] = factory


def available_backends() -> List[str]:
    """Sorted names accepted by :func:`get_backend`."""
    return sorted(_BACKENDS)


def default_backend_name() -> str:
    """Name of the backend used when none is given."""
    if _default_backend is not None:
        return _default_backend
    return os.environ.get(ENV_BACKEND, "scipy").strip().lower() or "scipy"


def set_default_backend(name: Optional[str]) -> None:
    """
    Select the default backend by name.  ``None`` reverts to the
    ``NUMROUTINES_SPLINE_BACKEND`` environment variable.
    """
    global _default_backend
    if name is not None:
        name = name.lower()
        if name not in _BACKENDS:
            raise SplineError(f"unknown spline backend {name!r}, choose from {available_backends()}",
                              "NR_BACKEND")
    _default_backend = name


def get_backend(name: Optional[str] = None) -> SplineBackend:
    """Instantiate the backend registered as *name* (default backend if omitted)."""
    key = (name or default_backend_name()).lower()
    try:
        factory = _BACKENDS[key]
    except KeyError:
        raise SplineError(f"unknown spline backend {key!r}, choose from {available_backends()}",
                          "NR_BACKEND") from None
    return factory()


# ===================================================================
#  Spline
# ===================================================================

def _map_scalar(fn: Callable[[float], float], u: Number) -> Number:
    """Apply a scalar evaluator to a float or elementwise to an array."""
    arr = np.asarray(u, dtype=np.float64)
    if arr.ndim == 0:
        return fn(float(arr))
    out = np.empty(arr.shape, dtype=np.float64)
    for idx, val in np.ndenumerate(arr):
        out[idx] = fn(float(val))
    return out


class Spline:
    """
    Cubic spline interpolant owning its knots, values, coefficients and
    accelerator.

    Attributes
    ----------
    x : ndarray
        Abscissas (log10 values for a ``"log10"`` spline).
    y : ndarray
        Ordinates at ``x`` (log10 values for a ``"log10"`` spline).
    coefficients : ndarray, shape (4, n-1)
        Local polynomial coefficients, highest power first.
    scale : str
        ``"linear"`` or ``"log10"``.
    accel : InterpAccel
        Interval cache.  Not thread safe: one thread at a time per spline.
    """

    def __init__(self, x: np.ndarray, y: np.ndarray, coefficients: np.ndarray,
                 scale: str = "linear", backend: str = ""):
        self.x = x
        self.y = y
        self.coefficients = coefficients
        self.scale = scale
        self.backend = backend
        self.accel = InterpAccel()

    def __repr__(self):
        return (f"Spline(n={self.n}, range=[{self.xmin!r}, {self.xmax!r}], "
                f"scale={self.scale!r}, backend={self.backend!r})")

    @property
    def n(self) -> int:
        return self.x.shape[0]

    @property
    def xmin(self) -> float:
        return float(self.x[0])

    @property
    def xmax(self) -> float:
        return float(self.x[-1])

    def _locate(self, u: float):
        if not (self.x[0] <= u <= self.x[-1]):
            raise DomainError(u, self.xmin, self.xmax)
        i = self.accel.find(self.x, u)
        return i, u - self.x[i]

    def _eval_scalar(self, u: float) -> float:
        i, dx = self._locate(u)
        c = self.coefficients[:, i]
        return float(((c[0] * dx + c[1]) * dx + c[2]) * dx + c[3])

    def _deriv_scalar(self, u: float) -> float:
        i, dx = self._locate(u)
        c = self.coefficients[:, i]
        return float((3.0 * c[0] * dx + 2.0 * c[1]) * dx + c[2])

    def _deriv2_scalar(self, u: float) -> float:
        i, dx = self._locate(u)
        c = self.coefficients[:, i]
        return float(6.0 * c[0] * dx + 2.0 * c[1])

    def _antiderivative(self, i: int, t: float) -> float:
        c = self.coefficients[:, i]
        return (((c[0] * t / 4.0 + c[1] / 3.0) * t + c[2] / 2.0) * t + c[3]) * t

    def eval(self, u: Number) -> Number:
        """
        Spline value at *u* (scalar or array).

        Raises
        ------
        DomainError
            If any point lies outside ``[x[0], x[-1]]``.
        """
        return _map_scalar(self._eval_scalar, u)

    __call__ = eval

    def eval_deriv(self, u: Number) -> Number:
        """First derivative at *u*."""
        return _map_scalar(self._deriv_scalar, u)

    def eval_deriv2(self, u: Number) -> Number:
        """Second derivative at *u*."""
        return _map_scalar(self._deriv2_scalar, u)

    def eval_integ(self, a: float, b: float) -> float:
        """
        Integral of the spline from *a* to *b*.

        Both limits must lie inside the knot range; ``a > b`` gives the
        negated integral over ``[b, a]``.
        """
        if a > b:
            return -self.eval_integ(b, a)
        ia, _ = self._locate(a)
        ib, _ = self._locate(b)
        total = 0.0
        for i in range(ia, ib + 1):
            lo = a if i == ia else self.x[i]
            hi = b if i == ib else self.x[i + 1]
            total += self._antiderivative(i, hi - self.x[i]) - self._antiderivative(i, lo - self.x[i])
        return float(total)

    def eval_physical(self, x: Number) -> Number:
        """
        Interpolated function value at the physical abscissa *x*.

        For a log10 spline this is ``10**eval(log10(x))``; for a linear
        spline it is ``eval(x)``.
        """
        if self.scale != "log10":
            return self.eval(x)
        with np.errstate(divide="ignore", invalid="ignore"):
            lx = np.log10(np.asarray(x, dtype=np.float64))
        out = 10.0 ** np.asarray(self.eval(lx), dtype=np.float64)
        return float(out) if out.ndim == 0 else out


# ===================================================================
#  Spline builders
# ===================================================================

def _check_abscissa(x) -> np.ndarray:
    xa = np.array(x, dtype=np.float64)
    if xa.ndim != 1:
        raise SplineError(f"abscissa must be 1-D, got shape {xa.shape}")
    if xa.size < MIN_POINTS:
        raise SplineError(f"need at least {MIN_POINTS} points for a cubic spline, got {xa.size}")
    if not np.all(np.isfinite(xa)):
        raise SplineError("abscissa contains non-finite values")
    if not np.all(np.diff(xa) > 0.0):
        raise SplineError("abscissa must be strictly increasing")
    return xa


def _fit(xa: np.ndarray, ya: np.ndarray, scale: str,
         backend: Optional[Union[str, SplineBackend]]) -> Spline:
    if backend is None or isinstance(backend, str):
        backend = get_backend(backend)
    coefficients = np.asarray(backend.fit(xa, ya), dtype=np.float64)
    if coefficients.shape != (4, xa.size - 1):
        raise SplineError(
            f"backend {backend!r} returned coefficients of shape {coefficients.shape}, "
            f"expected {(4, xa.size - 1)}")
    name = getattr(backend, "name", type(backend).__name__)
    log.debug("built %s spline: n=%d, range=[%g, %g], backend=%s",
              scale, xa.size, xa[0], xa[-1], name)
    return Spline(xa, ya, coefficients, scale=scale, backend=name)


def create_linear_spline(func: ScalarFunc, x,
                         backend: Optional[Union[str, SplineBackend]] = None) -> Spline:
    """
    Sample *func* on *x* and fit a cubic spline, interpolating linearly.

    Parameters
    ----------
    func : callable
        ``func(x) -> float``.  Bind any parameters with a closure or
        :func:`functools.partial`.
    x : array_like
        Strictly increasing abscissas at which *func* is evaluated (n >= 3).
    backend : str or SplineBackend, optional
        Fitting backend; the default backend when omitted.

    Returns
    -------
    Spline
        Owns ``x``, ``y = func(x)``, the coefficients and a fresh accelerator.

    Raises
    ------
    SplineError
        On a malformed abscissa, a non-finite function value, or an unknown
        backend.
    """
    xa = _check_abscissa(x)
    ya = calloc_double_array(xa.size)
    for i in range(xa.size):
        ya[i] = func(float(xa[i]))
        if not np.isfinite(ya[i]):
            raise SplineError(f"func({xa[i]:e}) is not finite ({ya[i]}) at index {i}")
    return _fit(xa, ya, "linear", backend)


def create_log10_spline(func: ScalarFunc, log10x,
                        backend: Optional[Union[str, SplineBackend]] = None) -> Spline:
    """
    Sample *func* and fit a cubic spline to ``log10(func)`` in log10 space.

    *log10x* already holds the log10 of the sample locations; *func* is
    evaluated at ``10**log10x[i]``.

    Returns
    -------
    Spline
        ``scale == "log10"``; ``y[i] = log10(func(10**log10x[i]))``.
        Use :meth:`Spline.eval_physical` for values in linear units.

    Raises
    ------
    NonPositiveValueError
        If ``func`` returns a value ``<= 0`` at any sample.  No spline is
        built; the exception records the index, x and value.
    SplineError
        On a malformed abscissa, a non-finite function value, or an unknown
        backend.
    """
    xa = _check_abscissa(log10x)
    ya = calloc_double_array(xa.size)
    for i in range(xa.size):
        x = 10.0 ** xa[i]
        y = func(float(x))
        if y <= 0:
            raise NonPositiveValueError(i, float(x), float(y))
        if not np.isfinite(y):
            raise SplineError(f"func({x:e}) is not finite ({y}) at index {i}")
        ya[i] = np.log10(y)
    return _fit(xa, ya, "log10", backend)
