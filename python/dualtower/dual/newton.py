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
from time import time
from typing import TYPE_CHECKING, Any

from dualtower import defaults
from dualtower import errors as err
from dualtower.default import NoInput, _drb
from dualtower.dual.dual import Dual
from dualtower.dual.utils import _dual_float

if TYPE_CHECKING:
    from dualtower.typing import Callable, DualTypes, float_, int_  # pragma: no cover

logger = logging.getLogger(__name__)

STATE_MAP = {
    1: ["SUCCESS", "`conv_tol` reached"],
    2: ["SUCCESS", "`func_tol` reached"],
    -1: ["FAILURE", "`max_iter` breached"],
}


def _solver_result(
    state: int, i: int, func_val: DualTypes, time: float, algo: str
) -> dict[str, Any]:
    level = logging.INFO if state > 0 else logging.WARNING
    logger.log(
        level,
        "%s: %s after %d iterations (%s), `f_val`: %s, `time`: %.4fs",
        STATE_MAP[state][0],
        STATE_MAP[state][1],
        i,
        algo,
        func_val,
        time,
    )
    return {
        "status": STATE_MAP[state][0],
        "state": state,
        "g": func_val,
        "iterations": i,
        "time": time,
    }


def _dual_float_or_unchanged(x: Any) -> Any:
    """If x is a DualType convert it to float otherwise leave it as is"""
    if isinstance(x, float | Dual):
        return _dual_float(x)
    return x


def newton_1dim(
    f: Callable[..., tuple[DualTypes, DualTypes]],
    g0: DualTypes,
    max_iter: int_ = NoInput(0),
    func_tol: float_ = NoInput(0),
    conv_tol: float_ = NoInput(0),
    args: tuple[Any, ...] = (),
    pre_args: tuple[Any, ...] = (),
    final_args: tuple[Any, ...] = (),
    raise_on_fail: bool = True,
) -> dict[str, Any]:
    """
    Find a root of a scalar function of **one** variable by Newton-Raphson iteration, keeping
    the derivative of the root with respect to any :class:`Dual` arguments.

    Parameters
    ----------
    f: callable
        Of the signature `f(g, *args)`, returning the pair ``(f0, f1)``: the function value and
        its analytic derivative with respect to *g*.
    g0: float, Dual
        Starting point. A *Dual* is narrowed to its ``value``.
    max_iter: int, optional
        Iteration cap, at least one. Taken from ``defaults.newton_max_iter`` if not given.
    func_tol: float, optional
        Stop once ``abs(f0)`` is below this. Taken from ``defaults.newton_func_tol``.
    conv_tol: float, optional
        Stop once a step changes *g* by less than this. Taken from ``defaults.newton_conv_tol``.
    args: tuple
        Extra arguments for ``f``. *Dual* entries are narrowed to floats while iterating and
        restored for the last step.
    pre_args: tuple
        Arguments appended only while iterating in floats, i.e. `f(g, *float_args, *pre_args)`.
    final_args: tuple
        Arguments appended only in the last step, i.e. `f(g, *args, *final_args)`.
    raise_on_fail: bool, optional
        When *False* a breach of ``max_iter`` returns a FAILURE result instead of raising.

    Returns
    -------
    dict
        With keys ``status``, ``state``, ``g``, ``iterations`` and ``time``.

    Notes
    ------
    The iterations run on floats. One further Newton step is then taken with the original
    arguments. At a converged root this step leaves the value unchanged and sets the tangent to
    :math:`\\frac{dg}{ds} = -\\frac{f_s}{f_g}` by the implicit function theorem. The derivative
    is only meaningful where *f* is smooth around the root.

    Examples
    --------
    Solve :math:`g^2 - s = 0`. For :math:`s=2` the root is :math:`\\sqrt{2}` with
    :math:`\\frac{dg}{ds} = \\frac{1}{2\\sqrt{2}}`.

    .. ipython:: python

       from dualtower.dual import Dual, newton_1dim

       def f(g, s):
           return g**2 - s, 2 * g

       newton_1dim(f, g0=1.0, args=(Dual(2.0, 1.0),))
    """
    max_iter_: int = _drb(defaults.newton_max_iter, max_iter)
    func_tol_: float = _drb(defaults.newton_func_tol, func_tol)
    conv_tol_: float = _drb(defaults.newton_conv_tol, conv_tol)

    if max_iter_ < 1:
        raise ValueError(err.VE_NEWTON_MAX_ITER_POSITIVE.format(max_iter_))

    t0 = time()
    i = 0

    # iterate on floats
    float_args = tuple(_dual_float_or_unchanged(_) for _ in args)
    g0_ = _dual_float(g0)
    g1 = g0_
    state = -1

    while i < max_iter_:
        f0, f1 = f(*(g0_, *float_args, *pre_args))
        i += 1
        g1 = g0_ - f0 / f1
        if abs(f0) < func_tol_:
            state = 2
            break
        elif abs(g1 - g0_) < conv_tol_:
            state = 1
            break
        g0_ = g1

    if state == -1:
        if raise_on_fail:
            raise ValueError(err.VE_NEWTON_MAX_ITER.format(max_iter_, f0, f1, g0_))
        else:
            return _solver_result(-1, i, g1, time() - t0, algo="newton_1dim")

    # one step with the original arguments carries the tangent
    f0, f1 = f(*(g1, *args, *final_args))
    if isinstance(f0, Dual) or isinstance(f1, Dual):
        i += 1
        g1 = g1 - f0 / f1

    return _solver_result(state, i, g1, time() - t0, algo="newton_1dim")
