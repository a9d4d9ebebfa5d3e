# -*- coding: utf-8 -*-
"""
Weft: Sampling the mathematics of light across wavelength
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: weft_errors.py — Exception taxonomy.

Every error derives from ``ValueError``; ``except ValueError`` still
catches all of them.
"""

__all__ = [
    "WeftError",
    "DomainError",
    "ValidationError",
    "ExtrapolationError",
    "DegenerateResultError",
]


class WeftError(ValueError):
    """Base class for all Weft errors."""


class DomainError(WeftError):
    """
    Malformed sampling domain, or an interpolator queried outside ``[0, n-1]``.
    """


class ValidationError(WeftError):
    """
    Sample data inconsistent with its shape or with the requested strategy.

    Raised for sample-count mismatches, empty or ragged sample arrays,
    Sprague interpolation with fewer than six samples and channel-count
    mismatches in elementwise arithmetic.
    """


class ExtrapolationError(WeftError):
    """Extrapolation requested where the extrapolator is not defined."""


class DegenerateResultError(WeftError):
    """An overlap-based combination produced no wavelengths at all."""
