#!/usr/bin/python3
# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Compare the (i, k, j) product against the textbook (i, j, k) order and NumPy.

    python -m qsmatrix.benchmark_matmul
"""

import logging
import time

import numpy as np
import pandas as pd

from .matrix import Matrix
from .random_init import init_random, make_generator

logger = logging.getLogger(__name__)

REPEATS = 5  # best of 5 runs
SIZES = [(64, 64, 64), (128, 128, 128), (200, 100, 150)]


def wall(f, *args, **kwargs):
    t0 = time.perf_counter()
    f(*args, **kwargs)
    return time.perf_counter() - t0


def naive_matmul(A: Matrix, B: Matrix) -> Matrix:
    """Inner-product order: strided walk down each column of B."""
    if A.cols != B.rows:
        raise ValueError(f"Cannot multiply {A.shape} by {B.shape}")
    a = A.tolist()
    b = B.tolist()
    out = []
    for i in range(A.rows):
        row = []
        for j in range(B.cols):
            total = 0.0
            for k in range(A.cols):
                total += a[i][k] * b[k][j]
            row.append(total)
        out.append(row)
    return Matrix.from_rows(out) if out else Matrix(0, B.cols)


def run_benchmark(sizes=SIZES, repeats: int = REPEATS, seed: int = 0) -> pd.DataFrame:
    rng = make_generator(seed)
    records = []
    for n, m, p in sizes:
        logger.info("Benchmarking %dx%d by %dx%d", n, m, m, p)
        A = init_random(n, m, 1.0, rng=rng)
        B = init_random(m, p, 1.0, rng=rng)
        a_np, b_np = A.to_numpy(), B.to_numpy()
        ref = a_np @ b_np

        t_np = min(wall(np.matmul, a_np, b_np) for _ in range(repeats))
        # guard the ratio for tiny sizes where NumPy rounds to zero
        t_np = max(t_np, 1e-9)
        size = f"{n}x{m}x{p}"

        for kernel, f in (("ikj", Matrix.matmul), ("ijk", naive_matmul)):
            t = min(wall(f, A, B) for _ in range(repeats))
            err = float(np.max(np.abs(f(A, B).to_numpy() - ref), initial=0.0))
            records.append((kernel, size, t, t / t_np, err))

    return pd.DataFrame(
        records,
        columns=["kernel", "size", "sec", "sec/NumPy", "max_abs_err"],
    )


def main():
    logging.basicConfig(level=logging.INFO)
    df = run_benchmark()
    print(df.to_markdown(index=False))


if __name__ == "__main__":
    main()
