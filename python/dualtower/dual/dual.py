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

import math
from statistics import NormalDist
from typing import TYPE_CHECKING

import numpy as np

from dualtower import defaults
from dualtower import errors as err

if TYPE_CHECKING:
    from dualtower.typing import Any, Callable  # pragma: no cover

FLOATS = (float, np.float16, np.float32, np.float64, np.longdouble)
INTS = (int, np.int8, np.int16, np.int32, np.int64)
REALS = (*FLOATS, *INTS)


def _ieee(func: Callable[..., Any], *args: float) -> float:
    """Evaluate a NumPy ufunc on float64 arguments, propagating inf and nan as IEEE does."""
    with np.errstate(all=defaults.fp_errors):
        return float(func(*[np.float64(_) for _ in args]))


class Dual:
    """
    Dual number data type to perform first derivative automatic differentiation.

    Parameters
    ----------
    value : float, int
        The real coefficient of the dual number.
    tangent : float, int, optional
        The coefficient of the infinitesimal, i.e. the first derivative of ``value`` with
        respect to the single input being differentiated. Defaults to zero, which represents a
        constant.

    Attributes
    ----------
    value : float
    tangent : float

    Notes
    -----
    Instances are immutable. Every operation returns a new *Dual*.

    A *Dual* cannot be converted implicitly to a plain real, e.g. by :class:`float`, since that
    would silently discard the tangent. Use the ``value`` attribute to narrow explicitly.

    Examples
    --------
    .. ipython:: python

       from dualtower.dual import Dual, dual_log

       x = Dual(1.0, 1.0)
       dual_log(x + 2) - 2
    """

    __slots__ = ("_value", "_tangent")

    def __init__(self, value: float, tangent: float = 0.0) -> None:
        object.__setattr__(self, "_value", float(value))
        object.__setattr__(self, "_tangent", float(tangent))

    @property
    def value(self) -> float:
        return self._value

    @property
    def tangent(self) -> float:
        return self._tangent

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"`Dual` is immutable and '{name}' cannot be set.")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"`Dual` is immutable and '{name}' cannot be deleted.")

    def __reduce__(self) -> tuple[type[Dual], tuple[float, float]]:
        return Dual, (self._value, self._tangent)

    def __repr__(self) -> str:
        sign, tangent = ("-", -self._tangent) if self._tangent < 0 else ("+", self._tangent)
        dp = defaults.repr_dp
        return f"<Dual: {self._value:,.{dp}f} {sign} {tangent:.{dp}f}{defaults.epsilon}>"

    def __str__(self) -> str:
        sign, tangent = ("-", -self._tangent) if self._tangent < 0 else ("+", self._tangent)
        return f"{self._value} {sign} {tangent}{defaults.epsilon}"

    # Narrowing is rejected

    def __float__(self) -> float:
        raise err.UnsupportedConversion(err.TE_UNSUPPORTED_CONVERSION.format("float"))

    def __int__(self) -> int:
        raise err.UnsupportedConversion(err.TE_UNSUPPORTED_CONVERSION.format("int"))

    def __complex__(self) -> complex:
        raise err.UnsupportedConversion(err.TE_UNSUPPORTED_CONVERSION.format("complex"))

    # Comparison

    def __eq__(self, argument: Any) -> bool:
        """Compare structurally: values and tangents must be exactly equal."""
        other = _to_dual(argument)
        if other is None:
            return NotImplemented
        return self._value == other._value and self._tangent == other._tangent

    def __ne__(self, argument: Any) -> bool:
        result = self.__eq__(argument)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self) -> int:
        # a constant hashes as its value to remain consistent with equality against reals
        if self._tangent == 0.0:
            return hash(self._value)
        return hash((self._value, self._tangent))

    def __lt__(self, argument: Any) -> bool:
        """Compare by ``value`` first, and by ``tangent`` only when the values are equal."""
        other = _to_dual(argument)
        if other is None:
            return NotImplemented
        return _lt(self, other)

    def __le__(self, argument: Any) -> bool:
        other = _to_dual(argument)
        if other is None:
            return NotImplemented
        return _lt(self, other) or self == other

    def __gt__(self, argument: Any) -> bool:
        other = _to_dual(argument)
        if other is None:
            return NotImplemented
        return _lt(other, self)

    def __ge__(self, argument: Any) -> bool:
        other = _to_dual(argument)
        if other is None:
            return NotImplemented
        return _lt(other, self) or self == other

    # Arithmetic

    def __neg__(self) -> Dual:
        return Dual(-self._value, -self._tangent)

    def __pos__(self) -> Dual:
        return self

    def __abs__(self) -> Dual:
        # no tie-break at zero: the derivative of abs is undefined there
        if self._value > 0.0:
            return self
        return -self

    def __add__(self, argument: Any) -> Dual:
        other = _to_dual(argument)
        if other is None:
            return NotImplemented
        return Dual(self._value + other._value, self._tangent + other._tangent)

    __radd__ = __add__

    def __sub__(self, argument: Any) -> Dual:
        other = _to_dual(argument)
        if other is None:
            return NotImplemented
        return self + (-other)

    def __rsub__(self, argument: Any) -> Dual:
        other = _to_dual(argument)
        if other is None:
            return NotImplemented
        return other + (-self)

    def __mul__(self, argument: Any) -> Dual:
        other = _to_dual(argument)
        if other is None:
            return NotImplemented
        return Dual(
            self._value * other._value,
            self._value * other._tangent + self._tangent * other._value,
        )

    __rmul__ = __mul__

    def __truediv__(self, argument: Any) -> Dual:
        other = _to_dual(argument)
        if other is None:
            return NotImplemented
        return _divide(self, other)

    def __rtruediv__(self, argument: Any) -> Dual:
        other = _to_dual(argument)
        if other is None:
            return NotImplemented
        return _divide(other, self)

    def __pow__(self, power: Any, modulo: None = None) -> Dual:
        if modulo is not None:
            return NotImplemented
        if isinstance(power, Dual):
            # d(x^y) = y x^(y-1) dx + x^y ln(x) dy
            value = _ieee(np.power, self._value, power._value)
            coeff = power._value * _ieee(np.power, self._value, power._value - 1.0)
            tangent = coeff * self._tangent
            if power._tangent == 0.0 or (self._value == 0.0 and power._value > 0.0):
                # x^y ln(x) tends to zero as x tends to zero for positive y
                return Dual(value, tangent)
            log_ = _ieee(np.log, self._value)
            return Dual(value, tangent + value * log_ * power._tangent)
        elif isinstance(power, REALS):
            p = float(power)
            if p == 0.0:
                return Dual(1.0)
            coeff = p * _ieee(np.power, self._value, p - 1.0)
            return Dual(_ieee(np.power, self._value, p), coeff * self._tangent)
        return NotImplemented

    def __rpow__(self, base: Any) -> Dual:
        if not isinstance(base, REALS):
            return NotImplemented
        value = _ieee(np.power, float(base), self._value)
        if self._tangent == 0.0 or (base == 0 and self._value > 0.0):
            return Dual(value)
        return Dual(value, value * _ieee(np.log, float(base)) * self._tangent)

    # Transcendental functions: value f(x), tangent f'(x) * dx

    def __exp__(self) -> Dual:
        const = _ieee(np.exp, self._value)
        return Dual(const, const * self._tangent)

    def __log__(self) -> Dual:
        return Dual(_ieee(np.log, self._value), _ieee(np.divide, self._tangent, self._value))

    def __sqrt__(self) -> Dual:
        root = _ieee(np.sqrt, self._value)
        return Dual(root, _ieee(np.divide, self._tangent, 2.0 * root))

    def __norm_cdf__(self) -> Dual:
        base = NormalDist().cdf(self._value)
        scalar = 1 / math.sqrt(2 * math.pi) * _ieee(np.exp, -0.5 * self._value * self._value)
        return Dual(base, scalar * self._tangent)

    def __norm_inv_cdf__(self) -> Dual:
        if 0.0 < self._value < 1.0:
            base = NormalDist().inv_cdf(self._value)
        elif self._value == 0.0:
            base = -math.inf
        elif self._value == 1.0:
            base = math.inf
        else:
            base = math.nan
        scalar = math.sqrt(2 * math.pi) * _ieee(np.exp, 0.5 * base * base)
        return Dual(base, scalar * self._tangent)

    # NumPy object arrays dispatch ufuncs such as np.exp to methods of the same name
    exp = __exp__
    log = __log__
    sqrt = __sqrt__


def _to_dual(argument: Any) -> Dual | None:
    """
    Apply the conversion rule to an operand: a real becomes a constant, a Dual is unchanged.

    Returns *None* for types outside the numeric tower so that operators can return
    *NotImplemented* and let Python, or NumPy, resolve the operation.
    """
    if isinstance(argument, Dual):
        return argument
    elif isinstance(argument, REALS):
        return Dual(argument)
    return None


def _lt(x: Dual, y: Dual) -> bool:
    return x._value < y._value or (x._value == y._value and x._tangent < y._tangent)


def _divide(x: Dual, y: Dual) -> Dual:
    with np.errstate(all=defaults.fp_errors):
        xv, xt = np.float64(x._value), np.float64(x._tangent)
        yv, yt = np.float64(y._value), np.float64(y._tangent)
        return Dual(xv / yv, xt / yv - xv * yt / (yv * yv))
