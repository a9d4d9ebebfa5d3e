# -*- coding: utf-8 -*-
"""
Weft: Sampling the mathematics of light across wavelength
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: weft_operators.py — Broadcasting arithmetic on sample values.

A sample value is either a scalar or a fixed-length vector (one entry per
channel).  Binary operators broadcast over the two kinds:

    scalar ⊕ scalar → scalar
    scalar ⊕ vector → vector   (scalar replicated across channels)
    vector ⊕ scalar → vector
    vector ⊕ vector → vector   (elementwise; channel counts must match)

Numpy would silently stretch a length-1 vector against any other length;
that is rejected here with ``ValidationError``.

Two layers:
  add / subtract / multiply / divide   single values
  apply_to_samples / zip_samples       whole sample arrays, row-aligned
"""

from __future__ import annotations

from typing import Callable, Sequence, TypeAlias, Union

import numpy as np

from weft_errors import ValidationError

__all__ = [
    "Value",
    "BinaryOperator",
    "broadcast_binary_operator",
    "add",
    "subtract",
    "multiply",
    "divide",
    "apply_to_samples",
    "zip_samples",
]

Value: TypeAlias = Union[float, Sequence[float], np.ndarray]
BinaryOperator: TypeAlias = Callable[[np.ndarray, np.ndarray], np.ndarray]


def _check_channels(left: int, right: int) -> None:
    if left != right:
        raise ValidationError(
            f"Channel count mismatch in elementwise operation: {left} vs {right}"
        )


def _as_value(value: Value) -> np.ndarray:
    arr = np.asarray(value, dtype=np.float64)
    if arr.ndim > 1:
        raise ValidationError(
            f"Sample value must be a scalar or a 1-D vector, got shape {arr.shape}"
        )
    return arr


def broadcast_binary_operator(op: BinaryOperator) -> Callable[[Value, Value], Value]:
    """
    Lift a numpy ufunc-style *op* to broadcast over scalar / vector values.

    The returned function yields a ``float`` for two scalars and a
    ``float64`` array otherwise.
    """
    def apply(a: Value, b: Value) -> Value:
        left, right = _as_value(a), _as_value(b)
        if left.ndim == 1 and right.ndim == 1:
            _check_channels(left.shape[0], right.shape[0])
        result = op(left, right)
        if result.ndim == 0:
            return float(result)
        return result

    apply.__name__ = getattr(op, "__name__", "operator")
    return apply


add      = broadcast_binary_operator(np.add)
subtract = broadcast_binary_operator(np.subtract)
multiply = broadcast_binary_operator(np.multiply)
divide   = broadcast_binary_operator(np.true_divide)


def apply_to_samples(
    op: BinaryOperator,
    samples: np.ndarray,
    value: Value,
    reflected: bool = False,
) -> np.ndarray:
    """
    Combine every sample with one bare *value*.

    Parameters
    ----------
    op : callable
        Binary operator.
    samples : numpy.ndarray
        ``(n,)`` scalar or ``(n, channels)`` vector samples.
    value : float or array-like
        Scalar or vector, broadcast to every sample (not resampled).
    reflected : bool, optional
        Compute ``op(value, sample)`` instead of ``op(sample, value)``.
    """
    right = _as_value(value)
    left = samples
    if right.ndim == 1:
        if samples.ndim == 1:
            left = samples[:, np.newaxis]
        else:
            _check_channels(samples.shape[1], right.shape[0])
    return op(right, left) if reflected else op(left, right)


def zip_samples(op: BinaryOperator, a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """
    Combine two row-aligned sample arrays (same sample count).

    Scalar rows broadcast across the channels of vector rows.
    """
    if a.shape[0] != b.shape[0]:
        raise ValidationError(
            f"Sample count mismatch: {a.shape[0]} vs {b.shape[0]}"
        )
    if a.ndim == 2 and b.ndim == 2:
        _check_channels(a.shape[1], b.shape[1])
    elif a.ndim == 1 and b.ndim == 2:
        a = a[:, np.newaxis]
    elif a.ndim == 2 and b.ndim == 1:
        b = b[:, np.newaxis]
    return op(a, b)
