# -*- coding: utf-8 -*-
"""
Weft: Sampling the mathematics of light across wavelength
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: weft_interpolators.py — Nearest, linear and six-point Sprague.

Architecture:
  Kernel               {window_size, evaluate(window, t)} plus, for
                       Sprague, the boundary generator and the minimum
                       sample count.  ``evaluate`` is Numba-compiled.
  Interpolation        closed enumeration of the three kernels.  Members
                       are stateless ``f(x, samples)`` interpolators.
  ScalarInterpolator   kernel bound to one 1-D sample array; owns the
                       ExtrapolationCache for Sprague boundary points.
  VectorInterpolator   one ScalarInterpolator per channel, driven in
                       lock-step over column views.
  CachingInterpolator  ``f(x, samples)`` strategy for a Sampler that keeps
                       a bound ScalarInterpolator (and so a boundary cache)
                       per sample array it has seen, LRU-evicted.

All variants share :func:`interpolate`, so vector results are bit-identical
to running the scalar path on each channel.

Domain: ``x`` is an array-domain coordinate in ``[0, n-1]``; anything
outside raises ``DomainError``.  Coordinates within ``GRID_TOLERANCE`` of
an integer return that sample exactly.

References:
    CIE 167:2005 "Recommended Practice for Tabulating Spectral Data for
    Use in Colour Computations" (Sprague interpolation).
"""

from __future__ import annotations

import math
from collections import OrderedDict
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Final, List, Optional, Tuple

import numpy as np
from numba import njit

from weft_errors import DomainError, ValidationError
from weft_extrapolators import sprague_boundary
from weft_sampling import ExtrapolationCache, SampleFunction, column_views, window

__all__ = [
    "GRID_TOLERANCE",
    "SPRAGUE_MIN_SAMPLES",
    "DEFAULT_CACHE_SIZE",
    "Kernel",
    "Interpolation",
    "interpolate",
    "nearest_interpolator",
    "linear_interpolator",
    "sprague_interpolator",
    "ScalarInterpolator",
    "VectorInterpolator",
    "CachingInterpolator",
]

GRID_TOLERANCE: Final[float] = 1e-9
SPRAGUE_MIN_SAMPLES: Final[int] = 6
DEFAULT_CACHE_SIZE: Final[int] = 32

# Sprague a-coefficients: a = C · window / 24, y(t) = Σ a[k] t^k
_SPRAGUE_COEFFICIENTS: Final[np.ndarray] = np.array([
    [  0.0,   0.0,  24.0,    0.0,   0.0,   0.0],
    [  2.0, -16.0,   0.0,   16.0,  -2.0,   0.0],
    [ -1.0,  16.0, -30.0,   16.0,  -1.0,   0.0],
    [ -9.0,  39.0, -70.0,   66.0, -33.0,   7.0],
    [ 13.0, -64.0, 126.0, -124.0,  61.0, -12.0],
    [ -5.0,  25.0, -50.0,   50.0, -25.0,   5.0],
], dtype=np.float64)
_SPRAGUE_SCALE: Final[float] = 1.0 / 24.0


# =============================================================================
# 1.  Kernels (Numba)
# =============================================================================
@njit(cache=True)
def _nearest_kernel(win: np.ndarray, t: float) -> float:
    if t < 0.5:
        return win[0]
    return win[1]


@njit(cache=True)
def _linear_kernel(win: np.ndarray, t: float) -> float:
    return win[0] + t * (win[1] - win[0])


@njit(cache=True)
def _sprague_kernel(win: np.ndarray, t: float) -> float:
    """Power series Σ a[k] t^k with a = C · win / 24."""
    result = 0.0
    power = 1.0
    for k in range(6):
        a = 0.0
        for j in range(6):
            a += _SPRAGUE_COEFFICIENTS[k, j] * win[j]
        result += a * _SPRAGUE_SCALE * power
        power *= t
    return result


@dataclass(frozen=True, slots=True)
class Kernel:
    """Capability record of one interpolation method."""
    name:        str
    window_size: int
    evaluate:    Callable[[np.ndarray, float], float]
    boundary:    Optional[Callable[[int, np.ndarray], float]] = None
    min_samples: int = 1


class Interpolation(Enum):
    """
    Closed set of interpolation methods.

    Members double as stateless interpolators::

        >>> Interpolation.LINEAR(0.4, [0, 4, 3.5])
        1.6
    """
    NEAREST = Kernel("nearest", 2, _nearest_kernel)
    LINEAR  = Kernel("linear", 2, _linear_kernel)
    SPRAGUE = Kernel("sprague", 6, _sprague_kernel, sprague_boundary, SPRAGUE_MIN_SAMPLES)

    @property
    def kernel(self) -> Kernel:
        return self.value

    @property
    def window_size(self) -> int:
        return self.value.window_size

    @property
    def min_samples(self) -> int:
        return self.value.min_samples

    @classmethod
    def default_for(cls, count: int) -> "Interpolation":
        """Sprague from six samples up, linear below."""
        return cls.SPRAGUE if count >= SPRAGUE_MIN_SAMPLES else cls.LINEAR

    def __call__(self, x: float, samples) -> float:
        return interpolate(self.value, x, samples)


# =============================================================================
# 2.  Core evaluation
# =============================================================================
def _check_count(kernel: Kernel, n: int) -> None:
    if n == 0:
        raise ValidationError("Cannot interpolate an empty sample array")
    if n < kernel.min_samples:
        raise ValidationError(
            f"{kernel.name.capitalize()} interpolation requires at least "
            f"{kernel.min_samples} samples, got {n}"
        )


def interpolate(
    kernel: Kernel,
    x: float,
    samples,
    boundary: Optional[SampleFunction] = None,
) -> float:
    """
    Evaluate *kernel* at array-domain coordinate *x*.

    Parameters
    ----------
    kernel : Kernel
        Interpolation method.
    x : float
        Fractional index in ``[0, n-1]``.
    samples : array-like
        1-D sample sequence.
    boundary : callable, optional
        Extrapolator for window indices past the edges; defaults to the
        kernel's own (uncached) boundary generator.

    Raises
    ------
    DomainError
        If *x* lies outside ``[0, n-1]``.
    ValidationError
        If *samples* is too short for *kernel*.
    """
    n = len(samples)
    _check_count(kernel, n)
    if not 0 <= x <= n - 1:
        raise DomainError(
            f"Cannot interpolate outside domain: x = {x}, domain = [0, {n - 1}]"
        )

    nearest = round(x)
    if abs(x - nearest) <= GRID_TOLERANCE:
        return float(samples[int(nearest)])

    x0 = math.floor(x)
    t = x - x0
    extrapolate = boundary if boundary is not None else kernel.boundary
    win = window(samples, x0, kernel.window_size, extrapolate)
    return float(kernel.evaluate(win, t))


def nearest_interpolator(x: float, samples) -> float:
    """Sample closest to *x* (ties go right)."""
    return interpolate(Interpolation.NEAREST.value, x, samples)


def linear_interpolator(x: float, samples) -> float:
    """Lerp between the two samples straddling *x*."""
    return interpolate(Interpolation.LINEAR.value, x, samples)


def sprague_interpolator(x: float, samples) -> float:
    """Six-point Sprague interpolation; needs at least six samples."""
    return interpolate(Interpolation.SPRAGUE.value, x, samples)


# =============================================================================
# 3.  Bound interpolators
# =============================================================================
class ScalarInterpolator:
    """
    Interpolation method bound to one 1-D sample array.

    For Sprague the four virtual boundary points are memoised in an
    :class:`ExtrapolationCache`; :meth:`reset` swaps the array and clears
    it.  The array is referenced, not copied: do not mutate it in place.

    Raises
    ------
    ValidationError
        On empty or non-1-D samples, or fewer samples than the method
        needs (six for Sprague).
    """

    __slots__ = ("kind", "_samples", "_boundary")

    def __init__(self, samples, kind: Interpolation = Interpolation.SPRAGUE) -> None:
        self.kind = kind
        self._samples = self._validated(samples)
        boundary = kind.kernel.boundary
        self._boundary: Optional[ExtrapolationCache] = (
            ExtrapolationCache(boundary, self._samples) if boundary is not None else None
        )

    def _validated(self, samples) -> np.ndarray:
        arr = np.asarray(samples, dtype=np.float64)
        if arr.ndim != 1:
            raise ValidationError(
                f"ScalarInterpolator expects 1-D samples, got shape {arr.shape}"
            )
        _check_count(self.kind.kernel, arr.shape[0])
        return arr

    @property
    def samples(self) -> np.ndarray:
        return self._samples

    @property
    def boundary_cache(self) -> Optional[ExtrapolationCache]:
        return self._boundary

    def reset(self, samples) -> None:
        """Replace the backing array; invalidates cached boundary values."""
        self._samples = self._validated(samples)
        if self._boundary is not None:
            self._boundary.bind(self._samples)

    def sample_one(self, x: float) -> float:
        return interpolate(self.kind.kernel, float(x), self._samples, self._boundary)

    def sample_many(self, xs) -> np.ndarray:
        xs = np.asarray(xs, dtype=np.float64)
        values = [self.sample_one(x) for x in xs.ravel()]
        return np.asarray(values, dtype=np.float64).reshape(xs.shape)

    def __call__(self, x):
        if np.ndim(x) == 0:
            return self.sample_one(x)
        return self.sample_many(x)

    def __len__(self) -> int:
        return self._samples.shape[0]

    def __repr__(self) -> str:
        return f"ScalarInterpolator(kind={self.kind.name}, samples={len(self)})"


class VectorInterpolator:
    """
    Per-channel interpolation of ``(n, channels)`` samples.

    Each channel gets its own :class:`ScalarInterpolator` over a read-only
    column view of the 2-D array; queries run them in lock-step.
    """

    __slots__ = ("kind", "_samples", "_channels")

    def __init__(self, samples, kind: Interpolation = Interpolation.SPRAGUE) -> None:
        arr = np.asarray(samples, dtype=np.float64)
        if arr.ndim != 2 or arr.shape[1] == 0:
            raise ValidationError(
                f"VectorInterpolator expects (n, channels) samples, got shape {arr.shape}"
            )
        self.kind = kind
        self._samples = arr
        self._channels: List[ScalarInterpolator] = [
            ScalarInterpolator(col, kind) for col in column_views(arr)
        ]

    @property
    def samples(self) -> np.ndarray:
        return self._samples

    @property
    def channels(self) -> List[ScalarInterpolator]:
        return list(self._channels)

    def sample_one(self, x: float) -> np.ndarray:
        return np.array([c.sample_one(x) for c in self._channels], dtype=np.float64)

    def sample_many(self, xs) -> np.ndarray:
        xs = np.asarray(xs, dtype=np.float64)
        values = [self.sample_one(x) for x in xs.ravel()]
        return np.asarray(values, dtype=np.float64).reshape(xs.shape + (len(self._channels),))

    def __call__(self, x):
        if np.ndim(x) == 0:
            return self.sample_one(x)
        return self.sample_many(x)

    def __len__(self) -> int:
        return self._samples.shape[0]

    def __repr__(self) -> str:
        return (
            f"VectorInterpolator(kind={self.kind.name}, samples={len(self)}, "
            f"channels={len(self._channels)})"
        )


class CachingInterpolator:
    """
    ``f(x, samples)`` strategy that reuses boundary caches across calls.

    A Sampler hands its interpolator one column at a time, so a single
    cache keyed only by boundary index would mix channels.  This strategy
    keeps one bound :class:`ScalarInterpolator` per sample array, keyed by
    array identity (the array itself is held, so the identity cannot be
    recycled while the entry lives) and evicted LRU beyond *cache_size*.
    Methods without boundary points bypass the cache entirely.
    """

    __slots__ = ("kind", "_entries", "_max_entries")

    def __init__(self, kind: Interpolation, cache_size: int = DEFAULT_CACHE_SIZE) -> None:
        if cache_size < 1:
            raise ValueError(f"cache_size must be >= 1, got {cache_size}")
        self.kind = kind
        self._entries: OrderedDict[int, Tuple[np.ndarray, ScalarInterpolator]] = OrderedDict()
        self._max_entries = cache_size

    def __call__(self, x: float, samples) -> float:
        if self.kind.kernel.boundary is None:
            return interpolate(self.kind.kernel, x, samples)
        return self._bound(samples).sample_one(x)

    def invalidate_cache(self) -> None:
        self._entries.clear()

    def _bound(self, samples) -> ScalarInterpolator:
        key = id(samples)
        entry = self._entries.get(key)
        if entry is not None:
            if entry[0] is samples:
                # hit: promote to MRU
                self._entries.move_to_end(key)
                return entry[1]
            del self._entries[key]

        bound = ScalarInterpolator(samples, self.kind)
        if len(self._entries) >= self._max_entries:
            self._entries.popitem(last=False)  # evict LRU
        self._entries[key] = (samples, bound)
        return bound

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"CachingInterpolator(kind={self.kind.name}, cached_arrays={len(self)})"
