# -*- coding: utf-8 -*-
"""
Weft: Sampling the mathematics of light across wavelength
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: weft_distribution.py — SpectralDistribution.

A distribution is a function of wavelength given by samples on a
:class:`Shape` grid, plus the strategies that evaluate it between and
beyond those samples.

  Samples          ``(count,)`` for scalar or ``(count, channels)`` for
                   vector distributions; stored read-only.
  Interpolation    an :class:`Interpolation` member or any ``f(x, samples)``
                   callable.  Default: Sprague from six samples, linear
                   below.
  Extrapolation    any ``f(x, samples)`` callable.  Default: nearest.

Distributions are immutable: ``resample``, ``combine``, ``zip_with``,
``map`` and the arithmetic operators return new instances carrying the
left operand's strategies.

Query path:
    wavelength → (w - start) / interval → Sampler → interpolator or
    extrapolator → value

``sample_at`` never raises for finite input; outside ``[start, end]`` it
extrapolates.  Only the raw interpolators enforce their domain.
"""

from __future__ import annotations

import warnings
from typing import (
    Any,
    Callable,
    Iterator,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    TypeAlias,
    Union,
)

import numpy as np

from weft_errors import DegenerateResultError, ValidationError
from weft_extrapolators import nearest_extrapolator
from weft_interpolators import CachingInterpolator, Interpolation
from weft_operators import Value, apply_to_samples, zip_samples
from weft_sampling import SampleFunction, Sampler, compose_sampler
from weft_shape import Shape

__all__ = ["SpectralDistribution", "InterpolationStrategy"]

InterpolationStrategy: TypeAlias = Union[Interpolation, SampleFunction]
Sample: TypeAlias = Union[float, np.ndarray]


def _validated_samples(samples: Any, shape: Shape) -> np.ndarray:
    """Copy *samples* into a read-only float64 array matching *shape*."""
    try:
        arr = np.array(samples, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise ValidationError(
            "Samples must be numbers or fixed-length numeric vectors "
            "of one common length"
        ) from exc

    if arr.ndim == 0 or arr.shape[0] == 0:
        raise ValidationError("Sample array must not be empty")
    if arr.ndim > 2 or (arr.ndim == 2 and arr.shape[1] == 0):
        raise ValidationError(
            f"Samples must be scalars or non-empty vectors, got array shape {arr.shape}"
        )
    if arr.shape[0] != shape.count:
        raise ValidationError(
            f"Sample count {arr.shape[0]} does not match shape count {shape.count} "
            f"for {shape!r}"
        )
    arr.flags.writeable = False
    return arr


def _values(arr: np.ndarray) -> List[Sample]:
    """Per-sample values: floats for scalar arrays, row arrays for vectors."""
    if arr.ndim == 1:
        return [float(v) for v in arr]
    return list(arr)


def _strategy_name(strategy: object) -> str:
    if isinstance(strategy, Interpolation):
        return strategy.name
    return getattr(strategy, "__name__", None) or repr(strategy)


class SpectralDistribution:
    """
    Spectral distribution sampled on a uniform wavelength grid.

    Parameters
    ----------
    shape : Shape
        Sampling domain.
    samples : array-like
        ``shape.count`` scalars, or ``shape.count`` vectors of one common
        length.
    interpolator : Interpolation or callable, optional
        Defaults to ``Interpolation.SPRAGUE`` for six or more samples and
        ``Interpolation.LINEAR`` otherwise.
    extrapolator : callable, optional
        Defaults to :func:`nearest_extrapolator`.

    Raises
    ------
    ValidationError
        On empty, ragged or miscounted samples, or an interpolation
        method needing more samples than available.

    Examples
    --------
    >>> sd = SpectralDistribution(Shape(400, 700, 100), [0.1, 0.4, 0.6, 0.2])
    >>> sd.sample_at(450)
    0.25
    >>> sd.sample_at(350)          # nearest extrapolation
    0.1
    """

    __slots__ = (
        "_shape",
        "_samples",
        "_interpolation",
        "_explicit_interpolation",
        "_extrapolator",
        "_sampler",
    )

    # numpy left operands defer to the reflected operators below
    __array_ufunc__ = None

    def __init__(
        self,
        shape: Shape,
        samples: Any,
        *,
        interpolator: Optional[InterpolationStrategy] = None,
        extrapolator: Optional[SampleFunction] = None,
    ) -> None:
        if not isinstance(shape, Shape):
            raise TypeError(f"shape must be a Shape, got {type(shape).__name__}")

        self._shape = shape
        self._samples = _validated_samples(samples, shape)
        count = self._samples.shape[0]

        self._explicit_interpolation = interpolator is not None
        if interpolator is None:
            interpolator = Interpolation.default_for(count)
        if isinstance(interpolator, Interpolation) and count < interpolator.min_samples:
            raise ValidationError(
                f"{interpolator.name.capitalize()} interpolation requires at least "
                f"{interpolator.min_samples} samples, got {count}"
            )
        self._interpolation: InterpolationStrategy = interpolator
        self._extrapolator: SampleFunction = extrapolator or nearest_extrapolator

        strategy = (
            CachingInterpolator(interpolator)
            if isinstance(interpolator, Interpolation)
            else interpolator
        )
        self._sampler: Sampler = compose_sampler(strategy, self._extrapolator)

    # -- alternate constructors --------------------------------------------
    @classmethod
    def from_domain(
        cls,
        domain: Sequence[float],
        interval: float,
        samples: Any,
        **strategies: Any,
    ) -> "SpectralDistribution":
        """Build from a ``(start, end)`` pair and an interval."""
        return cls(Shape(domain, interval), samples, **strategies)

    @classmethod
    def from_start(
        cls,
        start: float,
        interval: float,
        samples: Any,
        **strategies: Any,
    ) -> "SpectralDistribution":
        """Build from the first wavelength; the end follows from the sample count."""
        n = len(samples)
        if n == 0:
            raise ValidationError("Sample array must not be empty")
        return cls(Shape(start, start + (n - 1) * interval, interval), samples, **strategies)

    @classmethod
    def from_function(
        cls,
        func: Callable[[float], Value],
        shape: Shape,
        **strategies: Any,
    ) -> "SpectralDistribution":
        """Sample *func* at every grid wavelength of *shape*."""
        return cls(shape, shape.map_wavelengths(func), **strategies)

    @classmethod
    def from_table(cls, table: Mapping[str, Any], **strategies: Any) -> "SpectralDistribution":
        """
        Build from a reference-data mapping.

        The mapping carries ``domain`` (``[start, end]``), ``interval`` and
        ``samples`` (numbers or per-channel lists), the layout used for
        colour-matching function and illuminant tables.
        """
        try:
            domain, interval, samples = table["domain"], table["interval"], table["samples"]
        except KeyError as exc:
            raise ValidationError(f"Reference table is missing key {exc}") from exc
        return cls(Shape(domain, interval), samples, **strategies)

    # -- read interface ----------------------------------------------------
    @property
    def shape(self) -> Shape:
        return self._shape

    @property
    def interval(self) -> float:
        return self._shape.interval

    @property
    def samples(self) -> np.ndarray:
        """Read-only sample array, ``(count,)`` or ``(count, channels)``."""
        return self._samples

    @property
    def is_vector(self) -> bool:
        return self._samples.ndim == 2

    @property
    def channels(self) -> int:
        """Values per sample; 1 for scalar distributions."""
        return self._samples.shape[1] if self._samples.ndim == 2 else 1

    @property
    def interpolator(self) -> InterpolationStrategy:
        return self._interpolation

    @property
    def extrapolator(self) -> SampleFunction:
        return self._extrapolator

    @property
    def sampler(self) -> Sampler:
        return self._sampler

    def wavelengths(self) -> Iterator[float]:
        return self._shape.wavelengths()

    def __iter__(self) -> Iterator[Tuple[float, Sample]]:
        """``(wavelength, sample)`` pairs in ascending wavelength order."""
        return zip(self._shape.wavelengths(), _values(self._samples))

    def __len__(self) -> int:
        return self._samples.shape[0]

    # -- sampling ----------------------------------------------------------
    def sample_at(self, wavelength):
        """
        Value(s) at arbitrary wavelength(s).

        A scalar wavelength gives a float (scalar distribution) or a
        ``(channels,)`` array; an array of wavelengths gives an array of
        shape ``wavelengths.shape`` or ``wavelengths.shape + (channels,)``.
        """
        x = self._shape.to_array_domain(wavelength)
        return self._sampler(x, self._samples)

    def resample(self, shape: Shape) -> "SpectralDistribution":
        """Re-sample onto *shape*, keeping the strategies."""
        return self._derive(shape, self.sample_at(shape.wavelength_array()))

    # -- combination -------------------------------------------------------
    def combine(
        self,
        other: "SpectralDistribution",
        func: Callable[[Sample, Sample], Value],
    ) -> "SpectralDistribution":
        """
        Pointwise ``func(self, other)`` on this distribution's grid.

        *other* is sampled (interpolated or extrapolated) at every
        wavelength of ``self.shape`` first; the result keeps ``self.shape``.
        """
        resampled = other.sample_at(self._shape.wavelength_array())
        samples = [func(a, b) for a, b in zip(_values(self._samples), _values(resampled))]
        return self._derive(self._shape, samples)

    def zip_with(
        self,
        other: "SpectralDistribution",
        func: Callable[[Sample, Sample], Value],
    ) -> "SpectralDistribution":
        """
        Pointwise ``func(self, other)`` restricted to the overlap.

        Only wavelengths of ``self.shape`` inside ``other.shape`` are kept,
        so *other* is interpolated but never extrapolated.

        Raises
        ------
        DegenerateResultError
            If no wavelength of this distribution falls in *other*'s domain.
        """
        grid = self._shape.wavelength_array()
        start, end = other.shape.domain()
        indices = np.nonzero((grid >= start) & (grid <= end))[0]
        if indices.size == 0:
            raise DegenerateResultError(
                f"No overlap between {self._shape!r} and {other.shape!r}"
            )

        overlap = grid[indices]
        ours = self._samples[indices]
        theirs = other.sample_at(overlap)
        samples = [func(a, b) for a, b in zip(_values(ours), _values(theirs))]
        shape = Shape(float(overlap[0]), float(overlap[-1]), self._shape.interval)
        return self._derive(shape, samples)

    def map(self, func: Callable[[Sample], Value]) -> "SpectralDistribution":
        """Pointwise transform; scalar samples may map to vectors and back."""
        return self._derive(self._shape, [func(v) for v in _values(self._samples)])

    def sum(self) -> Sample:
        """Sum over all samples; per channel for vector distributions."""
        total = self._samples.sum(axis=0)
        if np.ndim(total) == 0:
            return float(total)
        return total

    # -- arithmetic --------------------------------------------------------
    def add(self, other: Union["SpectralDistribution", Value]) -> "SpectralDistribution":
        return self._arithmetic(np.add, other)

    def subtract(self, other: Union["SpectralDistribution", Value]) -> "SpectralDistribution":
        return self._arithmetic(np.subtract, other)

    def multiply(self, other: Union["SpectralDistribution", Value]) -> "SpectralDistribution":
        return self._arithmetic(np.multiply, other)

    def divide(self, other: Union["SpectralDistribution", Value]) -> "SpectralDistribution":
        return self._arithmetic(np.true_divide, other)

    __add__ = add
    __sub__ = subtract
    __mul__ = multiply
    __truediv__ = divide

    def __radd__(self, other: Value) -> "SpectralDistribution":
        return self._arithmetic(np.add, other, reflected=True)

    def __rsub__(self, other: Value) -> "SpectralDistribution":
        return self._arithmetic(np.subtract, other, reflected=True)

    def __rmul__(self, other: Value) -> "SpectralDistribution":
        return self._arithmetic(np.multiply, other, reflected=True)

    def __rtruediv__(self, other: Value) -> "SpectralDistribution":
        return self._arithmetic(np.true_divide, other, reflected=True)

    def _arithmetic(
        self,
        op: Callable[[np.ndarray, np.ndarray], np.ndarray],
        other: Union["SpectralDistribution", Value],
        reflected: bool = False,
    ) -> "SpectralDistribution":
        """
        Distributions are resampled onto ``self.shape`` first; bare numbers
        and vectors are broadcast to every sample as they are.
        """
        if isinstance(other, SpectralDistribution):
            theirs = np.asarray(other.sample_at(self._shape.wavelength_array()))
            if reflected:
                samples = zip_samples(op, theirs, self._samples)
            else:
                samples = zip_samples(op, self._samples, theirs)
        else:
            samples = apply_to_samples(op, self._samples, other, reflected=reflected)
        return self._derive(self._shape, samples)

    # -- internals ---------------------------------------------------------
    def _derive(self, shape: Shape, samples: Any) -> "SpectralDistribution":
        """New distribution on *shape* carrying this one's strategies."""
        interpolator = self._interpolation if self._explicit_interpolation else None
        if isinstance(interpolator, Interpolation) and shape.count < interpolator.min_samples:
            warnings.warn(
                f"{interpolator.name.capitalize()} interpolation needs "
                f"{interpolator.min_samples} samples but {shape!r} has "
                f"{shape.count}; falling back to "
                f"{Interpolation.default_for(shape.count).name.capitalize()}.",
                stacklevel=3,
            )
            interpolator = None
        return SpectralDistribution(
            shape,
            samples,
            interpolator=interpolator,
            extrapolator=self._extrapolator,
        )

    # -- display -----------------------------------------------------------
    def __repr__(self) -> str:
        kind = f"vector[{self.channels}]" if self.is_vector else "scalar"
        return (
            f"SpectralDistribution({self._shape!r}, {kind}, "
            f"interpolator={_strategy_name(self._interpolation)}, "
            f"extrapolator={_strategy_name(self._extrapolator)})"
        )
