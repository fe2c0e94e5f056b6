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

from copy import deepcopy
from enum import Enum
from typing import Any

DEFAULTS = dict(
    # Dual
    fp_errors="ignore",  # or "warn" or "raise" or "call" or "print"
    epsilon="ϵ",
    repr_dp=6,
    # Solvers
    pivot_tol=1e-16,
    newton_max_iter=50,
    newton_func_tol=1e-14,
    newton_conv_tol=1e-9,
)


class NoInput(Enum):
    """
    Enumerable type to handle setting default values.

    ``NoInput.blank`` marks an argument the user did not supply, so that the value held by
    :class:`Defaults` is used instead.
    """

    blank = 0


def _drb(default: Any, possible_ni: Any | NoInput) -> Any:
    """(D)efault (r)eplaces (b)lank"""
    return default if isinstance(possible_ni, NoInput) else possible_ni


class Defaults:
    """
    The *defaults* object used by the dual number functions. Values are printed below:

    .. ipython:: python

       from dualtower import defaults
       print(defaults.print())

    """

    _instance = None

    fp_errors: str
    epsilon: str
    repr_dp: int

    pivot_tol: float
    newton_max_iter: int
    newton_func_tol: float
    newton_conv_tol: float

    def __new__(cls) -> Defaults:
        if cls._instance is None:
            cls._instance = super().__new__(cls)

            for k, v in DEFAULTS.items():
                setattr(cls._instance, k, deepcopy(v))

        return cls._instance

    def reset_defaults(self) -> None:
        """
        Revert defaults back to their initialisation status.

        Examples
        --------
        .. ipython:: python

           from dualtower import defaults
           defaults.reset_defaults()
        """
        attrs = [
            v
            for v in dir(self)
            if "__" not in v and not callable(getattr(self, v)) and v != "_instance"
        ]
        for attr in attrs:
            delattr(self, attr)

        for k, v in DEFAULTS.items():
            setattr(self, k, deepcopy(v))

    def print(self) -> str:
        """
        Return a string representation of the current values in the defaults object.
        """

        def _t_n(v: str) -> str:  # tab-newline
            return f"\t{v}\n"

        dual_ = "".join(
            [_t_n(f"{attr}: {getattr(self, attr)}") for attr in ["fp_errors", "epsilon", "repr_dp"]]
        )
        solvers_ = "".join(
            [
                _t_n(f"{attr}: {getattr(self, attr)}")
                for attr in ["pivot_tol", "newton_max_iter", "newton_func_tol", "newton_conv_tol"]
            ]
        )
        return f"Dual:\n\n{dual_}\nSolvers:\n\n{solvers_}"


__all__ = ["Defaults", "NoInput"]
