# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Dense row-major matrix

Element (i, j) of an r-by-c matrix lives at flat index i * c + j of an
owned Python list. Any element type supporting + - * / and whose type
called with no arguments yields zero works: int, float, complex,
Fraction, Decimal, NumPy scalars.

Every shape or index violation is a caller bug and raises immediately
(ValueError for shapes, IndexError for indices). Nothing is coerced,
truncated or padded.
"""

import copy
import logging
import numbers
import operator
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np

from .utils import check_dims, scale_tol, zero_like

logger = logging.getLogger(__name__)


def _is_scalar(x) -> bool:
    return isinstance(x, numbers.Number)


def _is_vector(x) -> bool:
    if isinstance(x, np.ndarray):
        return x.ndim == 1
    return isinstance(x, (list, tuple))


class Matrix:
    """
    Row-major dense matrix with value semantics.

    Parameters
    ----------
    rows, cols : int
        Shape, both >= 0.
    initial : number
        Fill value for every element.

    Other constructors: `from_rows`, `from_flat`, `from_numpy`,
    `init_random`.
    """

    __slots__ = ("_rows", "_cols", "_data")

    # Let NumPy scalars and arrays defer to our reflected operators
    __array_ufunc__ = None
    __hash__ = None

    def __init__(self, rows: int, cols: int, initial=0):
        check_dims(rows, cols)
        self._rows = int(rows)
        self._cols = int(cols)
        self._data = [initial] * (self._rows * self._cols)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def _wrap(cls, data: list, rows: int, cols: int) -> "Matrix":
        m = cls.__new__(cls)
        m._rows = rows
        m._cols = cols
        m._data = data
        return m

    @classmethod
    def from_rows(cls, nested: Sequence[Sequence]) -> "Matrix":
        """
        Build from a sequence of rows. Every row must have the length of
        the first one; an empty outer sequence gives a 0x0 matrix.
        """
        nested = [list(row) for row in nested]
        rows = len(nested)
        cols = len(nested[0]) if rows else 0
        data = []
        for i, row in enumerate(nested):
            if len(row) != cols:
                raise ValueError(
                    f"Ragged input: row {i} has {len(row)} columns, expected {cols}"
                )
            data.extend(row)
        return cls._wrap(data, rows, cols)

    @classmethod
    def from_flat(cls, flat: Sequence, rows: int, cols: int) -> "Matrix":
        """
        Use `flat` as row-major storage. A list is taken as-is, not copied.

        The caller guarantees len(flat) == rows * cols; this is not checked.
        """
        check_dims(rows, cols)
        data = flat if isinstance(flat, list) else list(flat)
        return cls._wrap(data, int(rows), int(cols))

    @classmethod
    def from_numpy(cls, array: np.ndarray) -> "Matrix":
        """Copy a 2-D array into a new matrix holding Python scalars."""
        a = np.asarray(array)
        if a.ndim != 2:
            raise ValueError(f"Expected a 2-D array, got {a.ndim} dimension(s)")
        rows, cols = a.shape
        return cls._wrap(a.ravel().tolist(), rows, cols)

    @classmethod
    def init_random(
        cls,
        rows: int,
        cols: int,
        max_weight: float,
        rng: Optional[np.random.Generator] = None,
    ) -> "Matrix":
        """See `qsmatrix.random_init.init_random`."""
        from .random_init import init_random

        return init_random(rows, cols, max_weight, rng=rng)

    def copy(self) -> "Matrix":
        return Matrix._wrap(list(self._data), self._rows, self._cols)

    def __copy__(self) -> "Matrix":
        return self.copy()

    def __deepcopy__(self, memo) -> "Matrix":
        return Matrix._wrap(copy.deepcopy(self._data, memo), self._rows, self._cols)

    def take(self) -> "Matrix":
        """
        Move the storage into a new matrix and leave this one empty (0x0).
        The emptied matrix should only be reassigned or dropped.
        """
        moved = Matrix._wrap(self._data, self._rows, self._cols)
        self._rows = 0
        self._cols = 0
        self._data = []
        return moved

    def _assign(self, other: "Matrix") -> "Matrix":
        # other must be a fresh result nobody else holds
        self._rows = other._rows
        self._cols = other._cols
        self._data = other._data
        return self

    # ------------------------------------------------------------------
    # Shape and element access
    # ------------------------------------------------------------------
    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def shape(self) -> Tuple[int, int]:
        return self._rows, self._cols

    def row_count(self) -> int:
        return self._rows

    def col_count(self) -> int:
        return self._cols

    def _offset(self, row: int, col: int) -> int:
        if not (0 <= row < self._rows and 0 <= col < self._cols):
            raise IndexError(
                f"Index ({row}, {col}) out of bounds for "
                f"{self._rows}x{self._cols} matrix"
            )
        return row * self._cols + col

    def get(self, row: int, col: int):
        return self._data[self._offset(row, col)]

    def set(self, row: int, col: int, value) -> None:
        self._data[self._offset(row, col)] = value

    def __getitem__(self, key):
        if not isinstance(key, tuple) or len(key) != 2:
            raise TypeError("Matrix indices must be (row, col) pairs")
        return self.get(*key)

    def __setitem__(self, key, value) -> None:
        if not isinstance(key, tuple) or len(key) != 2:
            raise TypeError("Matrix indices must be (row, col) pairs")
        self.set(key[0], key[1], value)

    def tolist(self) -> List[list]:
        c = self._cols
        return [self._data[i * c : (i + 1) * c] for i in range(self._rows)]

    def to_numpy(self, dtype=None) -> np.ndarray:
        return np.array(self._data, dtype=dtype).reshape(self._rows, self._cols)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}"
            f"({self._rows}x{self._cols}, {self.tolist()!r})"
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and self._data == other._data

    def allclose(self, other: "Matrix", rtol: float = 1e-9, atol=None) -> bool:
        """
        Same shape and every element within tolerance. The default `atol`
        is scaled to the magnitude of this matrix.
        """
        if self.shape != other.shape:
            return False
        a = _numeric_array(self)
        b = _numeric_array(other)
        if atol is None:
            atol = scale_tol(a)
        return bool(np.allclose(a, b, rtol=rtol, atol=atol))

    # ------------------------------------------------------------------
    # Elementwise arithmetic
    # ------------------------------------------------------------------
    def _shape_error(self, op: str, other: "Matrix") -> ValueError:
        logger.debug("Rejected %s of %s and %s", op, self.shape, other.shape)
        return ValueError(
            f"Matrix dimensions incompatible for {op}: "
            f"{self._rows}x{self._cols} and {other._rows}x{other._cols}"
        )

    def _require_same_shape(self, op: str, other: "Matrix") -> None:
        if self._rows != other._rows or self._cols != other._cols:
            raise self._shape_error(op, other)

    def _zip(self, other: "Matrix", op: Callable) -> "Matrix":
        out = [op(x, y) for x, y in zip(self._data, other._data)]
        return Matrix._wrap(out, self._rows, self._cols)

    def _map(self, f: Callable) -> "Matrix":
        return Matrix._wrap([f(x) for x in self._data], self._rows, self._cols)

    def _add_matrix(self, other: "Matrix") -> "Matrix":
        # 1. same shape
        if self._rows == other._rows and self._cols == other._cols:
            return self._zip(other, operator.add)

        c = self._cols
        # 2. other is a single row, added to each of our rows
        if other._rows == 1 and other._cols == c:
            a, row = self._data, other._data
            out = [a[i * c + j] + row[j] for i in range(self._rows) for j in range(c)]
            return Matrix._wrap(out, self._rows, c)

        # 3. we are a single row, added to each row of other
        if self._rows == 1 and other._cols == c:
            row, b = self._data, other._data
            out = [row[j] + b[i * c + j] for i in range(other._rows) for j in range(c)]
            return Matrix._wrap(out, other._rows, c)

        raise self._shape_error("addition (no broadcasting available)", other)

    def __add__(self, other):
        if isinstance(other, Matrix):
            return self._add_matrix(other)
        if _is_scalar(other):
            return self._map(lambda x: x + other)
        return NotImplemented

    def __radd__(self, other):
        if _is_scalar(other):
            return self._map(lambda x: other + x)
        return NotImplemented

    def __iadd__(self, other):
        if isinstance(other, Matrix):
            self._require_same_shape("in-place addition", other)
            self._data[:] = [x + y for x, y in zip(self._data, other._data)]
            return self
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, Matrix):
            self._require_same_shape("subtraction", other)
            return self._zip(other, operator.sub)
        if _is_scalar(other):
            return self._map(lambda x: x - other)
        return NotImplemented

    def __isub__(self, other):
        if isinstance(other, Matrix):
            self._require_same_shape("in-place subtraction", other)
            self._data[:] = [x - y for x, y in zip(self._data, other._data)]
            return self
        return NotImplemented

    def hadamard(self, other: "Matrix") -> "Matrix":
        """Elementwise product of two matrices of identical shape."""
        self._require_same_shape("Hadamard product", other)
        return self._zip(other, operator.mul)

    def hadamard_in_place(self, other: "Matrix") -> "Matrix":
        self._require_same_shape("Hadamard product", other)
        self._data[:] = [x * y for x, y in zip(self._data, other._data)]
        return self

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------
    def matmul(self, other: "Matrix") -> "Matrix":
        """
        Matrix product using (i, k, j) loop order.

        A(i, k) is read once per (i, k) pair and the inner loop sweeps
        row k of `other` and row i of the result contiguously.
        """
        if self._cols != other._rows:
            raise self._shape_error("multiplication", other)
        n, m, p = self._rows, self._cols, other._cols
        a, b = self._data, other._data
        out = [zero_like(a or b)] * (n * p)
        for i in range(n):
            a_off = i * m
            out_off = i * p
            for k in range(m):
                temp = a[a_off + k]
                b_off = k * p
                for j in range(p):
                    out[out_off + j] += temp * b[b_off + j]
        return Matrix._wrap(out, n, p)

    def matvec(self, v: Sequence) -> list:
        """Dense matrix-vector product; len(v) must equal the column count."""
        if len(v) != self._cols:
            raise ValueError(
                f"Vector of length {len(v)} incompatible with "
                f"{self._rows}x{self._cols} matrix"
            )
        c = self._cols
        d = self._data
        result = []
        for i in range(self._rows):
            total = zero_like(d)
            off = i * c
            for j in range(c):
                total += d[off + j] * v[j]
            result.append(total)
        return result

    def __mul__(self, other):
        if isinstance(other, Matrix):
            return self.matmul(other)
        if _is_vector(other):
            return self.matvec(other)
        if _is_scalar(other):
            return self._map(lambda x: x * other)
        return NotImplemented

    def __rmul__(self, other):
        if _is_scalar(other):
            return self._map(lambda x: other * x)
        return NotImplemented

    def __imul__(self, other):
        if isinstance(other, Matrix):
            return self._assign(self.matmul(other))
        if _is_scalar(other):
            self._data[:] = [x * other for x in self._data]
            return self
        if _is_vector(other):
            raise TypeError("In-place matrix-vector product is not supported")
        return NotImplemented

    def __matmul__(self, other):
        if isinstance(other, Matrix):
            return self.matmul(other)
        if _is_vector(other):
            return self.matvec(other)
        return NotImplemented

    def __imatmul__(self, other):
        if isinstance(other, Matrix):
            return self._assign(self.matmul(other))
        return NotImplemented

    def __truediv__(self, other):
        if _is_scalar(other):
            return self._map(lambda x: x / other)
        return NotImplemented

    # ------------------------------------------------------------------
    # Transpose and transforms
    # ------------------------------------------------------------------
    def transpose(self) -> "Matrix":
        r, c = self._rows, self._cols
        d = self._data
        return Matrix._wrap([d[i * c + j] for j in range(c) for i in range(r)], c, r)

    @property
    def T(self) -> "Matrix":
        return self.transpose()

    def transpose_in_place(self) -> "Matrix":
        return self._assign(self.transpose())

    def component_wise_transform(self, f: Callable) -> "Matrix":
        """Apply f to every element and return the results as a new matrix."""
        return self._map(f)

    def component_wise_transform_in_place(self, f: Callable) -> "Matrix":
        self._data[:] = [f(x) for x in self._data]
        return self

    def diagonal(self) -> list:
        c = self._cols
        return [self._data[i * c + i] for i in range(min(self._rows, c))]


def _numeric_array(m: Matrix) -> np.ndarray:
    a = m.to_numpy()
    if not np.issubdtype(a.dtype, np.number):
        # Fraction, Decimal and friends land in object arrays
        a = a.astype(float)
    return a
