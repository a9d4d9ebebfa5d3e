# -*- coding: utf-8 -*-
"""
Weft: Sampling the mathematics of light across wavelength
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: weft_sampling.py — Windows, column views, boundary cache, Sampler.

Building blocks shared by every interpolator:

  window()              fixed-size index window around a sample position,
                        with out-of-range indices filled by an extrapolator
  column_view()         read-only strided view of one channel of a 2-D
                        sample array
  ExtrapolationCache    explicit integer-keyed memo of boundary values,
                        bound to one sample array and cleared on rebind
  Sampler               interpolator + extrapolator composed into a single
                        function valid over the reals, for scalar or
                        per-channel samples and for one or many positions

Callable conventions
--------------------
Interpolators and extrapolators are plain callables ``f(x, samples)``
taking an array-domain coordinate and a 1-D sample array and returning
a float.  The Sampler handles vector samples by driving them once per
channel over column views, so strategies never see 2-D input.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Sequence, TypeAlias, Union

import numpy as np

from weft_errors import ExtrapolationError

__all__ = [
    "SampleFunction",
    "window",
    "column_view",
    "column_views",
    "ExtrapolationCache",
    "Sampler",
    "compose_sampler",
]

SampleFunction: TypeAlias = Callable[[float, np.ndarray], float]
ArrayLike: TypeAlias = Union[np.ndarray, Sequence[float], Sequence[Sequence[float]]]


# =============================================================================
# 1.  Windows and views
# =============================================================================
def window(
    samples: Union[np.ndarray, Sequence[float]],
    x0: int,
    window_size: int,
    extrapolate: Optional[SampleFunction] = None,
) -> np.ndarray:
    """
    Return ``window_size`` consecutive values around index *x0*.

    The window covers ``x0 - (window_size/2 - 1) … x0 + window_size/2``,
    i.e. the pair straddling ``x0 + t`` for size 2 and three points on
    each side for size 6.  Indices outside ``[0, n-1]`` are resolved with
    *extrapolate*; without one they come back as ``nan``.

    The result is always a fresh, contiguous ``float64`` array, ready to
    be handed to a compiled kernel.
    """
    n = len(samples)
    first = int(x0) - (window_size // 2 - 1)
    stop = first + window_size

    if first >= 0 and stop <= n:
        return np.array(samples[first:stop], dtype=np.float64)

    out = np.empty(window_size, dtype=np.float64)
    for k, i in enumerate(range(first, stop)):
        if 0 <= i < n:
            out[k] = samples[i]
        elif extrapolate is not None:
            out[k] = extrapolate(i, samples)
        else:
            out[k] = np.nan
    return out


def column_view(array: np.ndarray, column: int) -> np.ndarray:
    """Read-only 1-D view of *column* of a 2-D sample array (no copy)."""
    view = array[:, column]
    view.flags.writeable = False
    return view


def column_views(array: np.ndarray) -> List[np.ndarray]:
    """One :func:`column_view` per channel."""
    return [column_view(array, c) for c in range(array.shape[1])]


# =============================================================================
# 2.  ExtrapolationCache
# =============================================================================
def _as_index(index: float) -> int:
    key = int(index)
    if key != index:
        raise ExtrapolationError(f"Boundary index must be an integer, got {index}")
    return key


class ExtrapolationCache:
    """
    Memoised boundary values for one sample array.

    ``cache[i]`` computes ``compute(i, samples)`` on first access and
    returns the stored value afterwards.  Binding a different array
    (``bind`` or calling the cache with another array) clears it; the
    identity of the bound array is the invalidation key, so bound arrays
    must not be mutated in place.

    The cache is callable with the ``f(index, samples)`` extrapolator
    signature and can be passed straight to :func:`window`.
    """

    __slots__ = ("_compute", "_samples", "_values")

    def __init__(
        self,
        compute: Callable[[int, np.ndarray], float],
        samples: Optional[np.ndarray] = None,
    ) -> None:
        self._compute = compute
        self._samples = samples
        self._values: Dict[int, float] = {}

    @property
    def samples(self) -> Optional[np.ndarray]:
        return self._samples

    def bind(self, samples: np.ndarray) -> None:
        """Attach *samples*; clears cached values if the array changed."""
        if samples is not self._samples:
            self._samples = samples
            self._values.clear()

    def clear(self) -> None:
        self._values.clear()

    def __call__(self, index: float, samples: np.ndarray) -> float:
        self.bind(samples)
        return self[index]

    def __getitem__(self, index: float) -> float:
        key = _as_index(index)
        value = self._values.get(key)
        if value is None:
            if self._samples is None:
                raise ExtrapolationError("No sample array bound to the cache")
            value = float(self._compute(key, self._samples))
            self._values[key] = value
        return value

    def __contains__(self, index: object) -> bool:
        return index in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ExtrapolationCache(indices={sorted(self._values)})"


# =============================================================================
# 3.  Sampler
# =============================================================================
class Sampler:
    """
    Interpolator and extrapolator composed into one function over the reals.

    Dispatch rule: *interpolator* for ``0 <= x < n-1``, *extrapolator*
    otherwise (including ``x == n-1``, where every extrapolator returns
    the last sample).

    Two axes compose orthogonally:

      samples   1-D → float result;  2-D ``(n, channels)`` → one result
                per channel, each channel sampled independently
      queries   ``sample_one(x)`` → single result;  ``sample_many(xs)``
                → array of results in query order

    ``sampler(x, samples)`` picks ``sample_one`` or ``sample_many`` from
    the dimensionality of *x*.
    """

    __slots__ = ("interpolator", "extrapolator", "_columns_of", "_columns")

    def __init__(self, interpolator: SampleFunction, extrapolator: SampleFunction) -> None:
        self.interpolator = interpolator
        self.extrapolator = extrapolator
        self._columns_of: Optional[np.ndarray] = None
        self._columns: List[np.ndarray] = []

    def __call__(self, x, samples: ArrayLike):
        if np.ndim(x) == 0:
            return self.sample_one(x, samples)
        return self.sample_many(x, samples)

    def sample_one(self, x: float, samples: ArrayLike):
        """Sample at one array-domain coordinate; float or per-channel array."""
        arr = np.asarray(samples, dtype=np.float64)
        x = float(x)
        if arr.ndim == 1:
            return self._sample_channel(x, arr)
        return np.array(
            [self._sample_channel(x, col) for col in self._columns_for(arr)],
            dtype=np.float64,
        )

    def sample_many(self, xs, samples: ArrayLike) -> np.ndarray:
        """Sample at many coordinates; result shape is ``xs.shape + channels``."""
        arr = np.asarray(samples, dtype=np.float64)
        xs = np.asarray(xs, dtype=np.float64)
        values = [self.sample_one(x, arr) for x in xs.ravel()]
        return np.asarray(values, dtype=np.float64).reshape(xs.shape + arr.shape[1:])

    # -- internals ---------------------------------------------------------
    def _sample_channel(self, x: float, samples: np.ndarray) -> float:
        if 0 <= x < len(samples) - 1:
            return float(self.interpolator(x, samples))
        return float(self.extrapolator(x, samples))

    def _columns_for(self, arr: np.ndarray) -> List[np.ndarray]:
        """Column views, rebuilt only when a different array comes in."""
        if arr is not self._columns_of:
            self._columns = column_views(arr)
            self._columns_of = arr
        return self._columns

    def __repr__(self) -> str:
        return (
            f"Sampler(interpolator={_name(self.interpolator)}, "
            f"extrapolator={_name(self.extrapolator)})"
        )


def _name(func: object) -> str:
    return getattr(func, "__name__", None) or repr(func)


def compose_sampler(interpolator: SampleFunction, extrapolator: SampleFunction) -> Sampler:
    """Compose *interpolator* and *extrapolator* into a :class:`Sampler`."""
    return Sampler(interpolator, extrapolator)
