# -*- coding: utf-8 -*-
"""
Weft: Sampling the mathematics of light across wavelength
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: weft_shape.py — Evenly sampled wavelength domain.

A ``Shape`` is the closed domain ``[start, end]`` sampled every
``interval``.  Sample ``i`` sits at ``start + i * interval``; the
conversion of a wavelength into that fractional index is the
*array-domain coordinate* used by every interpolator.
"""

from __future__ import annotations

from typing import Callable, Final, Iterator, List, Sequence, Tuple, TypeVar, Union

import numpy as np

from weft_errors import DomainError

__all__ = ["Shape", "SHAPE_TOLERANCE"]

# Remainder of (end - start) / interval accepted as "zero".  Checked on
# both sides of the modulus so that remainders just below ``interval``
# (floating noise such as 0.9 % 0.1 == 0.0999...) are accepted as well.
SHAPE_TOLERANCE: Final[float] = 1e-8

_T = TypeVar("_T")
Domain = Tuple[float, float]


class Shape:
    """
    Immutable description of a uniformly sampled wavelength domain.

    Accepts either ``Shape(start, end, interval)`` or
    ``Shape((start, end), interval)``.

    Raises
    ------
    DomainError
        If a bound or the interval is not finite, ``start > end``,
        ``interval <= 0`` or the span is not an integer multiple of
        ``interval``.

    Examples
    --------
    >>> Shape(380, 780, 5).count
    81
    >>> Shape((-1.5, 9), 0.5).domain()
    (-1.5, 9.0)
    """

    __slots__ = ("_start", "_end", "_interval")

    def __init__(
        self,
        start_or_domain: Union[float, Sequence[float]],
        end_or_interval: float,
        interval: float | None = None,
    ) -> None:
        if interval is None:
            if np.ndim(start_or_domain) != 1 or len(start_or_domain) != 2:
                raise DomainError(
                    f"Domain must be a (start, end) pair, got {start_or_domain!r}"
                )
            start, end = start_or_domain
            interval = end_or_interval
        else:
            start, end = start_or_domain, end_or_interval

        object.__setattr__(self, "_start", float(start))
        object.__setattr__(self, "_end", float(end))
        object.__setattr__(self, "_interval", float(interval))
        self.validate()

    # -- immutability ------------------------------------------------------
    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"Shape is immutable; cannot set '{name}'")

    # -- read interface ----------------------------------------------------
    @property
    def start(self) -> float:
        """Wavelength of the first sample."""
        return self._start

    @property
    def end(self) -> float:
        """Wavelength of the last sample."""
        return self._end

    @property
    def interval(self) -> float:
        """Spacing between consecutive samples."""
        return self._interval

    @property
    def count(self) -> int:
        """Number of grid positions, rounded to absorb floating error."""
        return int(round((self._end - self._start) / self._interval)) + 1

    @property
    def span(self) -> Domain:
        """Alias of :meth:`domain`."""
        return self.domain()

    def domain(self) -> Domain:
        return self._start, self._end

    def is_in_domain(self, wavelength: float) -> bool:
        """Inclusive membership test."""
        return self._start <= wavelength <= self._end

    __contains__ = is_in_domain

    def wavelengths(self) -> Iterator[float]:
        """Lazy ascending sequence of the ``count`` sample wavelengths."""
        start, interval = self._start, self._interval
        for i in range(self.count):
            yield start + i * interval

    def wavelength_array(self) -> np.ndarray:
        """The wavelength grid as a ``float64`` array."""
        return self._start + np.arange(self.count, dtype=np.float64) * self._interval

    def map_wavelengths(self, func: Callable[[float], _T]) -> List[_T]:
        """Evaluate *func* at every grid wavelength."""
        return [func(w) for w in self.wavelengths()]

    def to_array_domain(self, wavelength):
        """
        Convert wavelength(s) into fractional sample indices.

        Works element-wise on arrays; no range check is applied.
        """
        if np.ndim(wavelength) == 0:
            return (float(wavelength) - self._start) / self._interval
        return (np.asarray(wavelength, dtype=np.float64) - self._start) / self._interval

    # -- validation --------------------------------------------------------
    def validate(self) -> None:
        start, end, interval = self._start, self._end, self._interval
        if not np.isfinite((start, end, interval)).all():
            raise DomainError(
                f"Shape bounds and interval must be finite, got "
                f"start={start}, end={end}, interval={interval}"
            )
        if start > end:
            raise DomainError(
                f"End wavelength {end} must be equal or larger than "
                f"start wavelength {start}"
            )
        if interval <= 0:
            raise DomainError(f"Interval {interval} must be larger than zero")
        remainder = (end - start) % interval
        if SHAPE_TOLERANCE < remainder < interval - SHAPE_TOLERANCE:
            raise DomainError(
                f"Span [{start}, {end}] does not match sampling interval {interval}"
            )

    # -- value semantics ---------------------------------------------------
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Shape):
            return NotImplemented
        return (self._start, self._end, self._interval) == (
            other._start, other._end, other._interval
        )

    def __hash__(self) -> int:
        return hash((self._start, self._end, self._interval))

    def __repr__(self) -> str:
        return (
            f"Shape(start={self._start:g}, end={self._end:g}, "
            f"interval={self._interval:g}, count={self.count})"
        )
