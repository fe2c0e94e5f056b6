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

import logging
import math
from functools import partial
from statistics import NormalDist
from typing import TYPE_CHECKING

import numpy as np

from dualtower import errors as err
from dualtower.dual.dual import Dual
from dualtower.dual.linalg import _dsolve
from dualtower.dual.promotion import convert

if TYPE_CHECKING:
    from dualtower.typing import (  # pragma: no cover
        Any,
        Arr1dF64,
        Arr1dObj,
        Arr2dF64,
        Arr2dObj,
        Callable,
        DualTypes,
        Number,
        Scalar,
    )

logger = logging.getLogger(__name__)


def _dual_float(val: Number) -> float:
    """Overload for the float() builtin that narrows a Dual explicitly to its value."""
    if isinstance(val, Dual):
        return val.value
    return float(val)


def set_order(val: Number, order: int) -> DualTypes:
    """
    Change the AD order of a value: convert it to a :class:`Dual` or narrow it to a float.

    Parameters
    ----------
    val : float, int or Dual
        The value to convert the order of.
    order : int in [0, 1]
        The AD order to convert to. Order 0 returns the ``value`` of a *Dual*, discarding its
        tangent. Order 1 converts a float or int to a constant *Dual*.

    Returns
    -------
    float or Dual
    """
    if order == 1:
        return convert(Dual, val)  # type: ignore[no-any-return]
    elif order == 0:
        return _dual_float(val)
    raise ValueError(err.VE_SET_ORDER.format(order))


def gradient(dual: Dual) -> float:
    """
    Return the derivative carried by a dual number.

    Parameters
    ----------
    dual : Dual
        The dual variable from which to derive the derivative.

    Returns
    -------
    float
    """
    if not isinstance(dual, Dual):
        raise TypeError(err.TE_GRADIENT_NON_DUAL.format(type(dual).__name__))
    return dual.tangent


def derivative(f: Callable[..., Scalar], x: float, args: tuple[Any, ...] = ()) -> Dual:
    """
    Evaluate a function and its first derivative at a point.

    Parameters
    ----------
    f : callable
        The function to differentiate, of the signature `f(x, *args)`. It must be written
        using operations supported by :class:`Dual`, e.g. arithmetic and the ``dual_*`` functions.
    x : float, int
        The point at which to evaluate.
    args : tuple
        Additional arguments passed to ``f``. These are treated as constants unless they are
        themselves *Dual*.

    Returns
    -------
    Dual

    Examples
    --------
    .. ipython:: python

       from dualtower.dual import derivative, dual_log

       derivative(lambda x: dual_log(x + 2) - 2, 1.0)
    """
    result = f(Dual(x, 1.0), *args)
    return convert(Dual, result)  # type: ignore[no-any-return]


def dual_exp(x: Number) -> DualTypes:
    """
    Calculate the exponential value of a regular int or float or a dual number.

    Parameters
    ----------
    x : int, float, Dual
        Value to calculate exponent of.

    Returns
    -------
    float, Dual

    Notes
    -----
    A plain real is passed to :func:`math.exp`, which raises *OverflowError* for large inputs.
    A *Dual* overflows to *inf*.
    """
    if isinstance(x, Dual):
        return x.__exp__()
    return math.exp(x)


def dual_log(x: Number, base: int | float | None = None) -> DualTypes:
    """
    Calculate the logarithm of a regular int or float or a dual number.

    Parameters
    ----------
    x : int, float, Dual
        Value to calculate logarithm of.
    base : int, float, optional
        Base of the logarithm. Defaults to e to compute natural logarithm

    Returns
    -------
    float, Dual

    Notes
    -----
    For a *Dual* a non-positive value does not raise; the result carries *nan* or *-inf*
    following IEEE floating point semantics. A plain real is passed to :func:`math.log`, which
    raises *ValueError* for a non-positive value.
    """
    if isinstance(x, Dual):
        val = x.__log__()
        if base is None:
            return val
        else:
            return val * (1 / math.log(base))
    elif base is None:
        return math.log(x)
    else:
        return math.log(x, base)


def dual_sqrt(x: Number) -> DualTypes:
    """
    Calculate the square root of a regular int or float or a dual number.

    Parameters
    ----------
    x : int, float, Dual

    Returns
    -------
    float, Dual

    Notes
    -----
    A plain real is passed to :func:`math.sqrt`, which raises *ValueError* for a negative
    value. A *Dual* returns *nan*.
    """
    if isinstance(x, Dual):
        return x.__sqrt__()
    return math.sqrt(x)


def dual_norm_pdf(x: Number) -> DualTypes:
    """
    Return the standard normal probability density function.

    Parameters
    ----------
    x : float, Dual

    Returns
    -------
    float, Dual
    """
    return dual_exp(-0.5 * x**2) / math.sqrt(2.0 * math.pi)


def dual_norm_cdf(x: Number) -> DualTypes:
    """
    Return the cumulative standard normal distribution for given value.

    Parameters
    ----------
    x : float, Dual

    Returns
    -------
    float, Dual
    """
    if isinstance(x, Dual):
        return x.__norm_cdf__()
    else:
        return NormalDist().cdf(x)


def dual_inv_norm_cdf(x: Number) -> DualTypes:
    """
    Return the inverse cumulative standard normal distribution for given value.

    Parameters
    ----------
    x : float, Dual

    Returns
    -------
    float, Dual
    """
    if isinstance(x, Dual):
        return x.__norm_inv_cdf__()
    else:
        return NormalDist().inv_cdf(x)


def dual_solve(
    A: Arr2dObj | Arr2dF64,
    b: Arr1dObj | Arr1dF64 | Arr2dObj | Arr2dF64,
    allow_lsq: bool = False,
) -> Arr1dObj | Arr1dF64 | Arr2dObj | Arr2dF64:
    """
    Solve a linear system of equations involving dual number data types.

    The `x` value is found for the equation :math:`Ax=b`.

    Parameters
    ----------
    A: 2-d array
        Left side matrix of values.
    b: 1-d or 2-d array
        Right side vector, or matrix, of values.
    allow_lsq: bool
        Whether to allow solutions for non-square `A`, i.e. when `len(b) > len(x)`.

    Returns
    -------
    array with the same number of dimensions as ``b``

    Notes
    -----
    If neither ``A`` nor ``b`` contains a :class:`Dual` the system is passed directly to NumPy.
    Otherwise every element is converted to a *Dual* and the system is solved by a generic
    LU decomposition, so the tangents of the solution are the derivatives of :math:`x` with
    respect to the differentiated input.

    Examples
    --------
    .. ipython:: python

       import numpy as np
       from dualtower.dual import Dual, dual_solve

       p = Dual(2.0, 1.0)
       A = np.array([[p, 1.0], [1.0, 3.0]], dtype=object)
       dual_solve(A, np.array([1.0, 2.0]))
    """
    A_, b_ = np.asarray(A), np.asarray(b)
    if not (_is_any_dual(A_) or _is_any_dual(b_)):
        logger.debug("Solving %s system with float types in NumPy.", A_.shape)
        A_, b_ = A_.astype(np.float64), b_.astype(np.float64)
        if allow_lsq:
            return np.linalg.lstsq(A_, b_, rcond=None)[0]  # type: ignore[no-any-return]
        else:
            return np.linalg.solve(A_, b_)  # type: ignore[no-any-return]

    logger.debug("Solving %s system with dual types.", A_.shape)
    to_dual = np.vectorize(partial(convert, Dual), otypes=[object])
    A_, b_ = to_dual(A_), to_dual(b_)
    if b_.ndim == 1:
        return _dsolve(A_, b_[:, np.newaxis], allow_lsq)[:, 0]  # type: ignore[no-any-return]
    return _dsolve(A_, b_, allow_lsq)


def _is_any_dual(arr: np.ndarray[tuple[int, ...], np.dtype[Any]]) -> bool:
    return any(isinstance(_, Dual) for _ in arr.flatten())
