# SPDX-License-Identifier: LicenseRef-Rateslib-Dual
#
# Copyright (c) 2026 Siffrorna Technology Limited
#
# Dual-licensed: Free Educational Licence or Paid Commercial Licence (commercial/professional use)
# Source-available, not open source.
#
# See LICENSE and https://rateslib.com/py/en/latest/i_licence.html for details,
# and/or contact info (at) rateslib (dot) com
####################################################################################################

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from dualtower import defaults
from dualtower import errors as err

if TYPE_CHECKING:
    from dualtower.typing import Arr1dObj, Arr2dObj  # pragma: no cover

# The routines below use only scalar +, -, *, /, abs and < on the array elements, so they
# operate unchanged on object arrays of floats or Dual numbers.


def _pivot_matrix(A: Arr2dObj, method: int = 1) -> tuple[Arr2dObj, Arr2dObj]:
    """
    Return the row permutation ``P`` and the permuted matrix ``PA`` for partial pivoting.

    With ``method=1`` each column search sees the rows already swapped; ``method=2`` searches
    the original matrix, which can give a different, usable permutation when the first fails.
    """
    n = A.shape[0]
    P = np.eye(n, dtype="object")
    PA = A.copy()
    _ = A.copy()
    for j in range(n):
        row = max(range(j, n), key=lambda i: abs(_[i, j]))
        if j != row:
            P[[j, row]] = P[[row, j]]
            PA[[j, row]] = PA[[row, j]]
            if method == 1:
                _[[j, row]] = _[[row, j]]
    return P, PA


def _plu_decomp(A: Arr2dObj, method: int = 1) -> tuple[Arr2dObj, Arr2dObj, Arr2dObj]:
    """Factorise a square ``A`` as ``PA = LU`` by Doolittle's method, returning P, L and U.

    A pivot smaller than ``defaults.pivot_tol`` retries with the next pivoting ``method``.
    """
    if method == 3:
        raise ArithmeticError(err.AE_PIVOTING_FAILED)
    n = A.shape[0]
    L, U = np.zeros((n, n), dtype="object"), np.zeros((n, n), dtype="object")

    P, PA = _pivot_matrix(A, method=method)

    for j in range(n):
        L[j, j] = 1.0

        # row i of U in column j
        for i in range(j + 1):
            U[i, j] = PA[i, j] - sum(L[i, k] * U[k, j] for k in range(i))

        # column j of L below the diagonal
        for i in range(j, n):
            if abs(U[j, j]) < defaults.pivot_tol:
                return _plu_decomp(A, method + 1)
            L[i, j] = (PA[i, j] - sum(L[i, k] * U[k, j] for k in range(j))) / U[j, j]

    return P, L, U


def _solve_lower_triangular_1d(L: Arr2dObj, b: Arr1dObj) -> Arr1dObj:
    """Forward substitution for ``Lx = b`` with a single right hand side."""
    n = L.shape[0]
    x = np.zeros(shape=n, dtype="object")
    for i in range(n):
        x[i] = (b[i] - sum(L[i, k] * x[k] for k in range(i))) / L[i, i]
    return x


def _solve_lower_triangular(L: Arr2dObj, b: Arr2dObj) -> Arr2dObj:
    n, m = L.shape[0], b.shape[1]
    x = np.zeros(shape=(n, m), dtype="object")
    for j in range(m):
        x[:, j] = _solve_lower_triangular_1d(L, b[:, j])
    return x


def _solve_upper_triangular(U: Arr2dObj, b: Arr2dObj) -> Arr2dObj:
    # reversing rows and columns turns U into a lower triangular matrix
    return _solve_lower_triangular(U[::-1, ::-1], b[::-1, ::-1])[::-1, ::-1]


def _dsolve(A: Arr2dObj, b: Arr2dObj, allow_lsq: bool = False) -> Arr2dObj:
    """
    Solve ``Ax = b`` for object arrays of floats or :class:`~dualtower.dual.Dual`.

    Parameters
    ----------
    A : ndarray of object dtype
        2-d coefficient matrix.
    b : ndarray of object dtype
        2-d right hand side, one system per column.
    allow_lsq : bool
        If ``A`` has more rows than columns, solve the normal equations
        :math:`A^TAx = A^Tb` instead.

    Returns
    -------
    ndarray of object dtype

    Notes
    -----
    With :math:`PA = LU`, forward substitution solves :math:`Ly = Pb` and back substitution
    solves :math:`Ux = y`.
    """
    if allow_lsq and A.shape[0] > A.shape[1]:
        b, A = np.matmul(A.T, b), np.matmul(A.T, A)

    P, L, U = _plu_decomp(A)
    y = _solve_lower_triangular(L, np.matmul(P, b))
    return _solve_upper_triangular(U, y)
