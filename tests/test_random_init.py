# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import ast
import copy
import subprocess
import sys
from pathlib import Path

import numpy as np
import pytest

from qsmatrix.matrix import Matrix
from qsmatrix.random_init import default_generator, init_random, make_generator
from qsmatrix.utils import DEFAULT_SEED

REPO_ROOT = Path(__file__).resolve().parents[1]


def test_entries_within_bounds():
    M = init_random(20, 30, 0.5)
    assert M.shape == (20, 30)
    a = M.to_numpy()
    assert np.all(a >= -0.5)
    assert np.all(a <= 0.5)


def test_successive_calls_continue_stream():
    A = init_random(100, 100, 1.0)
    B = init_random(100, 100, 1.0)
    assert A != B


def test_shared_generator_is_singleton():
    assert default_generator() is default_generator()


def test_draws_follow_shared_stream_in_row_major_order():
    snapshot = copy.deepcopy(default_generator())
    expected = snapshot.uniform(-2.0, 2.0, size=6).tolist()
    M = Matrix.init_random(2, 3, 2.0)
    assert M.tolist() == [expected[:3], expected[3:]]


def test_injected_generator_leaves_shared_stream_alone():
    snapshot = copy.deepcopy(default_generator())
    init_random(4, 4, 1.0, rng=make_generator(7))
    expected = snapshot.uniform(-1.0, 1.0, size=4).tolist()
    assert init_random(2, 2, 1.0).tolist() == [expected[:2], expected[2:]]


def test_injected_generator_reproducible():
    A = init_random(5, 5, 1.0, rng=make_generator(123))
    B = init_random(5, 5, 1.0, rng=make_generator(123))
    assert A == B


def test_negative_shape_rejected():
    with pytest.raises(ValueError):
        init_random(-1, 2, 1.0)


def _first_draw_in_fresh_process():
    code = "from qsmatrix import init_random; print(init_random(4, 4, 1.0).tolist())"
    out = subprocess.run(
        [sys.executable, "-c", code],
        cwd=REPO_ROOT,
        capture_output=True,
        text=True,
        check=True,
    )
    return ast.literal_eval(out.stdout.strip())


def test_fresh_process_reproduces_first_call():
    first = _first_draw_in_fresh_process()
    second = _first_draw_in_fresh_process()
    assert first == second

    expected = make_generator(DEFAULT_SEED).uniform(-1.0, 1.0, size=16).tolist()
    assert Matrix.from_rows(first) == Matrix.from_flat(expected, 4, 4)
