"""
Small dense-matrix utilities for the normal-equation solve.

Matrices here are at most ~10x10 (9 features + bias), so inversion is a
plain Gauss-Jordan elimination with partial pivoting. Instead of letting a
singular matrix leak NaN/inf into the coefficients, invert() reports the
failure through InversionResult and leaves the decision to the caller.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np


# Pivots no larger than this fraction of the largest |entry| of the whole matrix count as zero
DEFAULT_TOLERANCE = 1e-12


@dataclass(frozen=True)
class InversionResult:
    """Outcome of a matrix inversion."""
    success: bool
    inverse: Optional[np.ndarray] = None
    reason: str = ""


def transpose(matrix) -> np.ndarray:
    a = np.asarray(matrix, dtype=float)
    if a.ndim != 2:
        raise ValueError(f"Expected a 2-D matrix, got {a.ndim}-D")
    return a.T.copy()


def matmul(a, b) -> np.ndarray:
    """Matrix product with an explicit shape check."""
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    if a.ndim != 2 or b.ndim != 2:
        raise ValueError("matmul expects 2-D matrices")
    if a.shape[1] != b.shape[0]:
        raise ValueError(f"Shape mismatch: {a.shape} x {b.shape}")
    return a @ b


def invert(matrix, tolerance: float = DEFAULT_TOLERANCE) -> InversionResult:
    """
    Invert a square matrix by Gauss-Jordan elimination on [A | I].

    For each column: pick the remaining row with the largest absolute value
    in that column, swap it into place, scale it so the pivot is 1, then
    eliminate the column from every other row.

    Args:
        matrix: Square matrix (array-like)
        tolerance: Pivot threshold as a fraction of the largest absolute entry
            of the whole matrix (one global scale, not per row or column)

    Returns:
        InversionResult; ``inverse`` is set only when ``success`` is True
    """
    a = np.asarray(matrix, dtype=float)

    if a.ndim != 2 or a.shape[0] != a.shape[1]:
        return InversionResult(False, reason=f"matrix must be square, got shape {a.shape}")
    if a.shape[0] == 0:
        return InversionResult(False, reason="matrix is empty")
    if not np.all(np.isfinite(a)):
        return InversionResult(False, reason="matrix contains NaN or infinite values")

    n = a.shape[0]
    scale = float(np.max(np.abs(a)))
    if scale == 0.0:
        return InversionResult(False, reason="matrix is all zeros")
    threshold = tolerance * scale

    augmented = np.hstack([a, np.eye(n)])

    for col in range(n):
        pivot_row = col + int(np.argmax(np.abs(augmented[col:, col])))
        pivot = augmented[pivot_row, col]
        if abs(pivot) <= threshold:
            return InversionResult(
                False,
                reason=f"matrix is singular or near-singular (pivot {pivot:.3e} in column {col})"
            )

        if pivot_row != col:
            augmented[[col, pivot_row]] = augmented[[pivot_row, col]]

        augmented[col] /= pivot

        for row in range(n):
            if row == col:
                continue
            factor = augmented[row, col]
            if factor != 0.0:
                augmented[row] -= factor * augmented[col]

    inverse = augmented[:, n:].copy()
    if not np.all(np.isfinite(inverse)):
        return InversionResult(False, reason="inverse contains NaN or infinite values")

    return InversionResult(True, inverse=inverse)
