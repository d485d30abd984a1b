# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
qsmatrix
========

A small dense-matrix value type: row-major storage, broadcasting
addition, a cache-friendly product, transpose and elementwise
transforms, over any numeric element type.

Public API
~~~~~~~~~~
- `Matrix`
    - constructors: `Matrix(rows, cols, initial)`, `Matrix.from_rows`,
      `Matrix.from_flat`, `Matrix.from_numpy`, `Matrix.init_random`
    - operators: `+ - * / @` and their in-place forms
    - `hadamard`, `matvec`, `transpose`, `component_wise_transform`,
      `diagonal`, `take`, `copy`
- Random initialization
    - `init_random`, `default_generator`, `make_generator`

Example
-------
>>> from qsmatrix import Matrix
>>> A = Matrix.from_rows([[1, 2], [3, 4]])
>>> B = Matrix.from_rows([[5, 6], [7, 8]])
>>> (A * B).tolist()
[[19, 22], [43, 50]]
>>> A * [1, 1]
[3, 7]
"""

from importlib.metadata import version as _pkg_version

from .matrix import Matrix
from .random_init import default_generator, init_random, make_generator
from .utils import DEFAULT_SEED, EPS, scale_tol

__all__ = [
    "Matrix",
    "init_random",
    "default_generator",
    "make_generator",
    "DEFAULT_SEED",
    "EPS",
    "scale_tol",
]

# ---------------------------------------------------------------------
# Version string (helps “pip show qsmatrix”, Sphinx, etc.)
# ---------------------------------------------------------------------
try:  # installed via pip / build backend
    __version__ = _pkg_version(__name__)
except Exception:  # running from a checkout
    __version__ = "0.0.0.dev0"

# ---------------------------------------------------------------------
# Library logging stays silent unless the application configures it.
# ---------------------------------------------------------------------
import logging as _logging

_logging.getLogger(__name__).addHandler(_logging.NullHandler())
