# -*- coding: utf-8 -*-
# Weft: Sampling the mathematics of light across wavelength.
#
# Copyright (c) 2026 opticsWolf
#
# SPDX-License-Identifier: LGPL-3.0-or-later

"""
Project metadata for the opticsWolf Weft.
"""

from typing import Final

__title__: Final[str] = "Weft"
__description__: Final[str] = (
    "Uniformly sampled spectral distributions with Sprague, linear and "
    "nearest interpolation, pluggable extrapolation and broadcasting "
    "arithmetic over scalar and vector samples."
)
__version__: Final[str] = "0.1.0"
__author__: Final[str] = "opticsWolf"
__license__: Final[str] = "LGPL-3.0-or-later"
__copyright__: Final[str] = "Copyright (c) 2026 opticsWolf"


def metadata_summary() -> dict[str, str]:
    """Project metadata as a plain dictionary."""
    return {
        "title": __title__,
        "version": __version__,
        "author": __author__,
        "license": __license__,
        "description": __description__,
        "copyright": __copyright__,
    }
