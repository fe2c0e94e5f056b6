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

from dualtower.dual.dual import Dual
from dualtower.dual.newton import newton_1dim
from dualtower.dual.promotion import convert, promote, promote_type
from dualtower.dual.utils import (
    derivative,
    dual_exp,
    dual_inv_norm_cdf,
    dual_log,
    dual_norm_cdf,
    dual_norm_pdf,
    dual_solve,
    dual_sqrt,
    gradient,
    set_order,
)

__all__ = [
    "Dual",
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
