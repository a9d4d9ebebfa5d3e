# -*- coding: utf-8 -*-
"""
Weft: Sampling the mathematics of light across wavelength
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: weft_extrapolators.py — Values outside the sampled index range.

Every extrapolator has the sampler signature ``f(x, samples)`` and is only
defined for ``x <= 0`` or ``x >= n-1``; asking for a strictly interior
point is a caller error and raises ``ExtrapolationError``.

``sprague_boundary`` is different in kind: it is not a distribution-level
strategy but the virtual-point generator the six-point Sprague kernel
needs at the array edges (integer indices -2, -1, n and n+1 only).
"""

from __future__ import annotations

from typing import Callable, Final, Sequence, Union

import numpy as np

from weft_errors import ExtrapolationError, ValidationError

__all__ = [
    "nearest_extrapolator",
    "linear_extrapolator",
    "constant_extrapolator",
    "sprague_boundary",
    "SPRAGUE_BOUNDARY_REACH",
]

SampleArray = Union[np.ndarray, Sequence[float]]

# Sprague needs two virtual points beyond each edge.
SPRAGUE_BOUNDARY_REACH: Final[int] = 2

# CIE boundary coefficients, applied to the six samples nearest the edge
# (reversed for the right edge) and scaled by 1/209.
#   row 0 → two steps out  (index -2 / n+1)
#   row 1 → one step out   (index -1 / n)
_SPRAGUE_BOUNDARY_COEFFICIENTS: Final[np.ndarray] = np.array([
    [884.0, -1960.0, 3033.0, -2648.0, 1080.0, -180.0],
    [508.0,  -540.0,  488.0,  -367.0,  144.0,  -24.0],
], dtype=np.float64)
_SPRAGUE_BOUNDARY_SCALE: Final[float] = 1.0 / 209.0


def _interior_error(x: float, n: int) -> ExtrapolationError:
    return ExtrapolationError(
        f"Cannot extrapolate inside the domain: x = {x}, domain = [0, {n - 1}]"
    )


def nearest_extrapolator(x: float, samples: SampleArray):
    """
    Repeat the closest edge sample.

    ``samples[0]`` for ``x <= 0``, ``samples[-1]`` for ``x >= n-1``.
    """
    n = len(samples)
    if x <= 0:
        return samples[0]
    if x >= n - 1:
        return samples[n - 1]
    raise _interior_error(x, n)


def linear_extrapolator(x: float, samples: SampleArray) -> float:
    """Extend the first or last segment with its own slope."""
    n = len(samples)
    if n == 1:
        return float(samples[0])
    if x <= 0:
        a, b = float(samples[0]), float(samples[1])
        return a + x * (b - a)
    if x >= n - 1:
        a, b = float(samples[n - 2]), float(samples[n - 1])
        return b + (x - (n - 1)) * (b - a)
    raise _interior_error(x, n)


def constant_extrapolator(value: float) -> Callable[[float, SampleArray], float]:
    """
    Build an extrapolator returning a fixed fill *value* outside the domain.

    Equivalent to ``np.interp(..., left=value, right=value)``.
    """
    fill = float(value)

    def extrapolate(x: float, samples: SampleArray) -> float:
        n = len(samples)
        if x <= 0 or x >= n - 1:
            # the exact edges keep their sample so the domain stays closed
            if x == 0:
                return float(samples[0])
            if x == n - 1:
                return float(samples[n - 1])
            return fill
        raise _interior_error(x, n)

    extrapolate.__name__ = f"constant_extrapolator({fill:g})"
    return extrapolate


def sprague_boundary(index: int, samples: SampleArray) -> float:
    """
    Virtual sample at *index* ∈ {-2, -1, n, n+1} for Sprague interpolation.

    Raises
    ------
    ExtrapolationError
        If *index* lies inside ``[0, n-1]`` or beyond two steps past
        either edge.
    ValidationError
        If fewer than six samples are available.
    """
    n = len(samples)
    if n < 6:
        raise ValidationError(
            f"Sprague boundary extrapolation requires at least 6 samples, got {n}"
        )
    if index < -SPRAGUE_BOUNDARY_REACH or index > n - 1 + SPRAGUE_BOUNDARY_REACH:
        raise ExtrapolationError(
            f"Out of extrapolation domain: index = {index}, "
            f"supported = [{-SPRAGUE_BOUNDARY_REACH}, {n - 1 + SPRAGUE_BOUNDARY_REACH}]"
        )
    if 0 <= index <= n - 1:
        raise _interior_error(index, n)

    arr = np.asarray(samples, dtype=np.float64)
    edge = arr[:6] if index < 0 else arr[n - 6:][::-1]
    row = 1 if index in (-1, n) else 0
    return float(np.dot(_SPRAGUE_BOUNDARY_COEFFICIENTS[row], edge)) * _SPRAGUE_BOUNDARY_SCALE
