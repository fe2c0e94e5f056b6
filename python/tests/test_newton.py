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

import logging
import math

import pytest
from dualtower import default_context
from dualtower.dual import Dual, dual_exp, newton_1dim


def _sqrt_root(g, s):
    f0 = g**2 - s
    f1 = 2 * g
    return f0, f1


def _no_root(g):
    return 1.0, 1.0


def test_newton_solver_dual() -> None:
    s = Dual(2.0, 1.0)
    result = newton_1dim(_sqrt_root, g0=1.0, args=(s,))

    assert result["status"] == "SUCCESS"
    g = result["g"]
    assert isinstance(g, Dual)
    assert abs(g.value - math.sqrt(2.0)) < 1e-12
    assert abs(g.tangent - 1 / (2 * math.sqrt(2.0))) < 1e-12


def test_newton_solver_float() -> None:
    result = newton_1dim(_sqrt_root, g0=1.0, args=(2.0,))

    assert result["status"] == "SUCCESS"
    assert isinstance(result["g"], float)
    assert abs(result["g"] - math.sqrt(2.0)) < 1e-12


def test_newton_solver_dual_initial_guess() -> None:
    result = newton_1dim(_sqrt_root, g0=Dual(1.0, 5.0), args=(2.0,))
    assert isinstance(result["g"], float)


def test_newton_solver_func_tol() -> None:
    result = newton_1dim(_sqrt_root, g0=2.0, args=(4.0,))
    assert result["state"] == 2
    assert result["iterations"] == 1
    assert result["g"] == 2.0


def test_newton_solver_transcendental() -> None:
    # g such that exp(g) = s, so dg/ds = 1 / s
    def f(g, s):
        return dual_exp(g) - s, dual_exp(g)

    result = newton_1dim(f, g0=0.0, args=(Dual(3.0, 1.0),))
    assert abs(result["g"].value - math.log(3.0)) < 1e-12
    assert abs(result["g"].tangent - 1 / 3.0) < 1e-9


def test_newton_pre_and_final_args() -> None:
    def f(g, s, scale):
        return scale * (g**2 - s), scale * 2 * g

    result = newton_1dim(
        f, g0=1.0, args=(Dual(2.0, 1.0),), pre_args=(10.0,), final_args=(1.0,)
    )
    assert result["status"] == "SUCCESS"
    assert abs(result["g"].tangent - 1 / (2 * math.sqrt(2.0))) < 1e-12


def test_newton_raises() -> None:
    with pytest.raises(ValueError, match="`max_iter`: 5 exceeded in 'newton_1dim'"):
        newton_1dim(_no_root, g0=1.0, max_iter=5)


def test_newton_no_raise(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="dualtower.dual.newton"):
        result = newton_1dim(_no_root, g0=1.0, max_iter=5, raise_on_fail=False)

    assert result["status"] == "FAILURE"
    assert result["state"] == -1
    assert result["iterations"] == 5
    assert "FAILURE: `max_iter` breached" in caplog.text


def test_newton_success_logged(caplog) -> None:
    with caplog.at_level(logging.INFO, logger="dualtower.dual.newton"):
        newton_1dim(_sqrt_root, g0=1.0, args=(2.0,))
    assert "SUCCESS" in caplog.text


def test_newton_defaults() -> None:
    with default_context("newton_max_iter", 3):
        result = newton_1dim(_no_root, g0=1.0, raise_on_fail=False)
    assert result["iterations"] == 3


@pytest.mark.parametrize("max_iter", [0, -1])
def test_newton_max_iter_not_positive_raises(max_iter) -> None:
    with pytest.raises(ValueError, match="`max_iter` must be a positive integer"):
        newton_1dim(_sqrt_root, g0=1.0, args=(2.0,), max_iter=max_iter)
