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

import numpy as np
import pytest
from dualtower import UnsupportedConversion
from dualtower.dual import Dual, convert, promote, promote_type
from dualtower.dual.dual import REALS

REAL_VALUES = [t(2) for t in REALS]


@pytest.mark.parametrize("real", REALS)
def test_promote_type_with_dual_is_symmetric(real) -> None:
    assert promote_type(real, Dual) is Dual
    assert promote_type(Dual, real) is Dual


def test_promote_type_dual_dual() -> None:
    assert promote_type(Dual, Dual) is Dual


def test_promote_type_subclass_of_real() -> None:
    assert promote_type(bool, Dual) is Dual
    assert promote_type(Dual, bool) is Dual


@pytest.mark.parametrize(
    ("a", "b"),
    [(int, float), (np.float32, np.int8), (int, int), (np.float16, np.float64)],
)
def test_promote_type_reals(a, b) -> None:
    expected = np.promote_types(a, b).type
    assert promote_type(a, b) is expected
    assert promote_type(b, a) is expected


@pytest.mark.parametrize(("a", "b"), [(str, Dual), (Dual, complex), (list, float)])
def test_promote_type_unsupported_raises(a, b) -> None:
    with pytest.raises(TypeError, match="No promotion rule exists"):
        promote_type(a, b)


@pytest.mark.parametrize("x", REAL_VALUES)
def test_convert_real_to_dual(x) -> None:
    result = convert(Dual, x)
    assert isinstance(result, Dual)
    assert result == Dual(2.0, 0.0)


def test_convert_dual_to_dual_is_identity() -> None:
    x = Dual(1.0, 2.0)
    assert convert(Dual, x) is x


@pytest.mark.parametrize("target", [float, int, np.float64, np.int32])
def test_convert_dual_to_real_raises(target) -> None:
    with pytest.raises(UnsupportedConversion):
        convert(target, Dual(1.0, 2.0))


def test_unsupported_conversion_is_type_error() -> None:
    with pytest.raises(TypeError):
        convert(float, Dual(1.0))


def test_convert_real_to_real() -> None:
    result = convert(float, 2)
    assert result == 2.0
    assert type(result) is float
    assert type(convert(np.float32, 1.5)) is np.float32


@pytest.mark.parametrize(("target", "x"), [(Dual, "a"), (Dual, 1 + 2j), (str, 1), (float, "a")])
def test_convert_no_rule_raises(target, x) -> None:
    with pytest.raises(TypeError, match="No conversion rule exists"):
        convert(target, x)


def test_promote() -> None:
    x, y = promote(5, Dual(3.0, 2.0))
    assert isinstance(x, Dual)
    assert x == Dual(5.0)
    assert y == Dual(3.0, 2.0)

    x, y = promote(Dual(3.0, 2.0), 5.5)
    assert (x, y) == (Dual(3.0, 2.0), Dual(5.5))


def test_promote_reals() -> None:
    x, y = promote(1, 2.5)
    assert type(x) is np.float64
    assert type(y) is np.float64
    assert (x, y) == (1.0, 2.5)


@pytest.mark.parametrize(("a", "b"), [(1, 2), (1.5, -3.25), (np.int8(3), np.float32(0.5))])
def test_conversion_is_additive(a, b) -> None:
    assert convert(Dual, a) + convert(Dual, b) == convert(Dual, a + b)


@pytest.mark.parametrize("x", REAL_VALUES)
def test_mixed_addition_is_symmetric(x) -> None:
    z = Dual(3.0, 1.0)
    assert x + z == Dual(5.0, 1.0)
    assert z + x == Dual(5.0, 1.0)
    assert x * z == z * x


def test_bool_operand() -> None:
    assert Dual(3.0, 1.0) + True == Dual(4.0, 1.0)
    assert True * Dual(3.0, 1.0) == Dual(3.0, 1.0)
