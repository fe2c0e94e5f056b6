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


class UnsupportedConversion(TypeError):
    """
    Raised when a :class:`~dualtower.dual.Dual` is narrowed to a plain real type.

    Narrowing discards the tangent, so it is never performed implicitly. Use the ``value``
    attribute, or :meth:`~dualtower.dual.set_order` with ``order=0``, to do it explicitly.
    """


# Conversion

TE_UNSUPPORTED_CONVERSION = (
    "Cannot convert a `Dual` to '{0}' implicitly: the tangent would be lost.\n"
    "Use `.value` or `set_order(x, 0)` to narrow explicitly."
)

TE_NO_CONVERSION_RULE = "No conversion rule exists from type '{0}' to type '{1}'."

TE_NO_PROMOTION_RULE = "No promotion rule exists for the type pair ('{0}', '{1}')."

# Operations

TE_GRADIENT_NON_DUAL = "Can call `gradient` only on dual-type variables, got: '{0}'."

VE_SET_ORDER = "`order` must be in {{0, 1}} for a single tangent dual number, got: {0}."

# Solvers

AE_PIVOTING_FAILED = "Partial pivoting has failed on matrix and cannot solve."

VE_NEWTON_MAX_ITER_POSITIVE = (
    "`max_iter` must be a positive integer for 'newton_1dim', got: {0}."
)

VE_NEWTON_MAX_ITER = (
    "`max_iter`: {0} exceeded in 'newton_1dim' algorithm.\n"
    "Last iteration values:\nf0: {1}\nf1: {2}\ng0: {3}"
)

# Configuration

VE_CONTEXT_ARGS = "Need to invoke as default_context(pat, val, [(pat, val), ...])."
