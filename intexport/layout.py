"""
Derivative Matrix Layout
========================

Storage layout of exported derivative (Jacobian) buffers.

Supported layouts:
- Dense: every entry, row-major
- Compressed-row (CSR): only structural nonzeros, with row pointers and
  column indices
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np
import scipy.sparse as sp

from .exceptions import DimensionError, InvalidInputError


@dataclass(frozen=True, eq=False)
class DerivativeLayout:
    """
    Index map from matrix entries to positions in the exported buffer.

    Args:
        shape: (rows, cols) of the derivative matrix
        sparse: True for compressed-row storage
        row_ptr: CSR row pointers (rows + 1,)
        col_idx: CSR column indices (nnz,)

    Example:
        >>> pattern = np.array([[1, 0, 1], [0, 1, 0]])
        >>> layout = DerivativeLayout.from_pattern(pattern, sparse=True)
        >>> layout.nnz, layout.flat_index(1, 1)
        (3, 2)
    """
    shape: Tuple[int, int]
    sparse: bool
    row_ptr: np.ndarray
    col_idx: np.ndarray

    @classmethod
    def from_pattern(cls, pattern, sparse: bool = False) -> "DerivativeLayout":
        """
        Build a layout from a sparsity pattern.

        Args:
            pattern: 2D array-like or scipy sparse matrix; nonzero entries are
                structural nonzeros
            sparse: Use compressed-row storage instead of dense
        """
        if sp.issparse(pattern):
            mask = sp.csr_matrix(pattern, dtype=bool)
        else:
            arr = np.asarray(pattern)
            if arr.ndim != 2:
                raise DimensionError(f"pattern must be 2D, got shape {arr.shape}")
            mask = sp.csr_matrix(arr != 0)
        mask.eliminate_zeros()
        mask.sort_indices()

        rows, cols = mask.shape
        if sparse:
            row_ptr = mask.indptr.astype(np.int64)
            col_idx = mask.indices.astype(np.int64)
        else:
            row_ptr = np.arange(rows + 1, dtype=np.int64) * cols
            col_idx = np.tile(np.arange(cols, dtype=np.int64), rows)

        row_ptr.setflags(write=False)
        col_idx.setflags(write=False)
        return cls((int(rows), int(cols)), bool(sparse), row_ptr, col_idx)

    @classmethod
    def dense(cls, rows: int, cols: int) -> "DerivativeLayout":
        """Dense layout for a ``rows`` x ``cols`` matrix."""
        return cls.from_pattern(np.ones((rows, cols), dtype=bool), sparse=False)

    @property
    def nnz(self) -> int:
        """Number of stored entries."""
        return int(self.row_ptr[-1])

    def flat_index(self, row: int, col: int) -> int:
        """
        Position of entry (row, col) in the exported buffer.

        Raises:
            InvalidInputError: If the entry is a structural zero of a sparse
                layout or lies outside the matrix
        """
        rows, cols = self.shape
        if not (0 <= row < rows and 0 <= col < cols):
            raise InvalidInputError(f"entry ({row}, {col}) outside matrix of shape {self.shape}")

        if not self.sparse:
            return row * cols + col

        start, stop = int(self.row_ptr[row]), int(self.row_ptr[row + 1])
        hits = np.flatnonzero(self.col_idx[start:stop] == col)
        if len(hits) == 0:
            raise InvalidInputError(f"entry ({row}, {col}) is a structural zero")
        return start + int(hits[0])

    def to_csr(self) -> sp.csr_matrix:
        """Boolean CSR matrix of the stored entries."""
        data = np.ones(len(self.col_idx), dtype=bool)
        return sp.csr_matrix((data, self.col_idx.copy(), self.row_ptr.copy()), shape=self.shape)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DerivativeLayout):
            return NotImplemented
        return (
            self.shape == other.shape
            and self.sparse == other.sparse
            and np.array_equal(self.row_ptr, other.row_ptr)
            and np.array_equal(self.col_idx, other.col_idx)
        )

    __hash__ = None

    def __repr__(self) -> str:
        kind = "csr" if self.sparse else "dense"
        return f"DerivativeLayout({kind}, shape={self.shape}, nnz={self.nnz})"
