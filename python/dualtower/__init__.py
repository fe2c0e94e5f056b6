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

__docformat__ = "restructuredtext"

# Let users know if they're missing any of our hard dependencies
_hard_dependencies = ("numpy",)

for _dependency in _hard_dependencies:
    try:
        __import__(_dependency)
    except ImportError as _e:  # pragma: no cover
        raise ImportError(f"`dualtower` requires installation of {_dependency}: {_e}")

from contextlib import ContextDecorator
from typing import Any

from dualtower import errors
from dualtower.default import Defaults, NoInput

defaults = Defaults()


class default_context(ContextDecorator):
    """
    Context manager to temporarily set options in the `with` statement context.

    You need to invoke as ``default_context(pat, val, [(pat, val), ...])``.

    Examples
    --------
    >>> with default_context("fp_errors", "raise", "repr_dp", 2):
    ...     pass
    """

    def __init__(self, *args: Any) -> None:
        if len(args) % 2 != 0 or len(args) < 2:
            raise ValueError(errors.VE_CONTEXT_ARGS)

        self.ops = list(zip(args[::2], args[1::2], strict=True))

    def __enter__(self) -> None:
        self.undo = [(pat, getattr(defaults, pat, None)) for pat, _ in self.ops]

        for pat, val in self.ops:
            setattr(defaults, pat, val)

    def __exit__(self, *args: Any) -> None:
        if self.undo:
            for pat, val in self.undo:
                setattr(defaults, pat, val)


from dualtower.dual import (  # noqa: E402
    Dual,
    convert,
    derivative,
    dual_exp,
    dual_inv_norm_cdf,
    dual_log,
    dual_norm_cdf,
    dual_norm_pdf,
    dual_solve,
    dual_sqrt,
    gradient,
    newton_1dim,
    promote,
    promote_type,
    set_order,
)
from dualtower.errors import UnsupportedConversion  # noqa: E402

__all__ = [
    "defaults",
    "default_context",
    "Defaults",
    "NoInput",
    "Dual",
    "UnsupportedConversion",
    "convert",
    "promote",
    "promote_type",
    "dual_log",
    "dual_exp",
    "dual_sqrt",
    "dual_solve",
    "dual_norm_pdf",
    "dual_norm_cdf",
    "dual_inv_norm_cdf",
    "derivative",
    "gradient",
    "set_order",
    "newton_1dim",
]

__version__ = "1.0.0"
