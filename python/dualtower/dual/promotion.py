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

"""
Conversion and promotion rules that place :class:`~dualtower.dual.Dual` in the numeric tower.

A plain real converts losslessly to a *Dual* with zero tangent. The reverse conversion is not
defined. Any supported real paired with a *Dual* promotes to *Dual*, in either order.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

import numpy as np

from dualtower import errors as err
from dualtower.dual.dual import REALS, Dual, _to_dual

if TYPE_CHECKING:
    from dualtower.typing import Any  # pragma: no cover

_PROMOTION_RULES = MappingProxyType(
    {
        **{(real, Dual): Dual for real in REALS},
        **{(Dual, real): Dual for real in REALS},
        (Dual, Dual): Dual,
    }
)


def _registered(t: type) -> type | None:
    """Return the numeric tower type that ``t`` is, or derives from, e.g. *int* for *bool*."""
    for base in t.__mro__:
        if base is Dual or base in REALS:
            return base
    return None


def promote_type(a: type, b: type) -> type:
    """
    Return the common type to which operands of types ``a`` and ``b`` are converted.

    Parameters
    ----------
    a: type
        The type of the first operand.
    b: type
        The type of the second operand.

    Returns
    -------
    type

    Notes
    -----
    Any pairing of a supported real type with :class:`~dualtower.dual.Dual` promotes to *Dual*,
    regardless of order. Two plain real types promote to their common NumPy scalar type.

    Examples
    --------
    .. ipython:: python

       from dualtower.dual import Dual, promote_type

       promote_type(int, Dual)
       promote_type(Dual, float)
       promote_type(int, float)
    """
    a_, b_ = _registered(a), _registered(b)
    if a_ is None or b_ is None:
        raise TypeError(err.TE_NO_PROMOTION_RULE.format(a.__name__, b.__name__))
    elif a_ is Dual or b_ is Dual:
        return _PROMOTION_RULES[(a_, b_)]
    return np.promote_types(a_, b_).type  # type: ignore[no-any-return]


def convert(target: type, x: Any) -> Any:
    """
    Convert ``x`` to the type ``target``.

    Parameters
    ----------
    target: type
        The type to convert to, either :class:`~dualtower.dual.Dual` or a supported real type.
    x: int, float, Dual
        The value to convert.

    Returns
    -------
    float, int, Dual

    Raises
    ------
    UnsupportedConversion
        If ``x`` is a *Dual* and ``target`` is a plain real type.
    TypeError
        If no conversion rule exists for the types.

    Examples
    --------
    .. ipython:: python

       from dualtower.dual import Dual, convert

       convert(Dual, 2.5)
    """
    if target is Dual:
        converted = _to_dual(x)
        if converted is None:
            raise TypeError(err.TE_NO_CONVERSION_RULE.format(type(x).__name__, "Dual"))
        return converted

    if _registered(target) in REALS:
        if isinstance(x, Dual):
            raise err.UnsupportedConversion(err.TE_UNSUPPORTED_CONVERSION.format(target.__name__))
        elif isinstance(x, REALS):
            return target(x)
    raise TypeError(err.TE_NO_CONVERSION_RULE.format(type(x).__name__, target.__name__))


def promote(x: Any, y: Any) -> tuple[Any, Any]:
    """
    Convert two operands to their common type as determined by :meth:`promote_type`.

    Examples
    --------
    .. ipython:: python

       from dualtower.dual import Dual, promote

       promote(5, Dual(3.0, 2.0))
    """
    t = promote_type(type(x), type(y))
    return convert(t, x), convert(t, y)
