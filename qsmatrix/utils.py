# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import numpy as np

EPS: float = 1e-12
DEFAULT_SEED: int = 42


def scale_tol(A: np.ndarray) -> float:
    """Return an absolute tolerance scaled to the matrix magnitude."""
    if A.size == 0:
        return EPS
    return EPS * max(1.0, np.linalg.norm(A, ord=np.inf))


def check_dims(rows: int, cols: int) -> None:
    """Reject negative or non-integral dimensions."""
    if int(rows) != rows or int(cols) != cols:
        raise ValueError(f"Matrix dimensions must be integers, got {rows}x{cols}")
    if rows < 0 or cols < 0:
        raise ValueError(f"Matrix dimensions must be non-negative, got {rows}x{cols}")


def zero_like(data: list):
    """
    Additive identity for the element type held in `data`.

    Calls the type of the first element with no arguments, so ints give 0,
    floats 0.0, Fractions Fraction(0) and so on. Empty storage falls back to 0.
    """
    if not data:
        return 0
    return type(data[0])()
