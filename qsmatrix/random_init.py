# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Seeded random initialization

All random matrices drawn without an explicit generator share one
Mersenne Twister stream, seeded once with DEFAULT_SEED the first time it
is needed and never reseeded. Two calls in the same process therefore
produce different matrices, while a fresh process replays the same
sequence from the start.

The shared generator is not thread-safe. Callers drawing from several
threads must serialize their calls or pass their own generator via `rng`.
"""

import logging
from typing import Optional

import numpy as np

from .matrix import Matrix
from .utils import DEFAULT_SEED, check_dims

logger = logging.getLogger(__name__)

_generator: Optional[np.random.Generator] = None


def make_generator(seed: int = DEFAULT_SEED) -> np.random.Generator:
    """Build an MT19937-backed generator, the same family the shared stream uses."""
    return np.random.Generator(np.random.MT19937(seed))


def default_generator() -> np.random.Generator:
    """Return the process-wide generator, creating it on first use."""
    global _generator
    if _generator is None:
        logger.debug("Seeding process-wide generator with %d", DEFAULT_SEED)
        _generator = make_generator(DEFAULT_SEED)
    return _generator


def init_random(
    rows: int,
    cols: int,
    max_weight: float,
    rng: Optional[np.random.Generator] = None,
) -> Matrix:
    """
    Matrix of i.i.d. draws from the uniform distribution on
    [-max_weight, max_weight].

    Parameters
    ----------
    rows, cols : int
        Shape of the result.
    max_weight : float
        Half-width of the sampling interval.
    rng : numpy.random.Generator | None
        Generator to draw from. None continues the process-wide stream.

    Returns
    -------
    Matrix with Python float entries, row-major in draw order.
    """
    check_dims(rows, cols)
    gen = default_generator() if rng is None else rng
    draws = gen.uniform(-max_weight, max_weight, size=rows * cols)
    return Matrix.from_flat(draws.tolist(), rows, cols)
