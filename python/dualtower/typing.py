# This module is reserved only for typing purposes.
# It avoids all circular import by performing a TYPE_CHECKING check on any component.

from collections.abc import Callable as Callable
from typing import Any as Any
from typing import Protocol, TypeAlias, runtime_checkable

import numpy as np

from dualtower.default import NoInput as NoInput
from dualtower.dual.dual import Dual as Dual

DualTypes: TypeAlias = "float | Dual"

Number: TypeAlias = "int | float | Dual"

# https://stackoverflow.com/questions/68916893/
Arr1dF64: TypeAlias = "np.ndarray[tuple[int], np.dtype[np.float64]]"
Arr2dF64: TypeAlias = "np.ndarray[tuple[int, int], np.dtype[np.float64]]"
Arr1dObj: TypeAlias = "np.ndarray[tuple[int], np.dtype[np.object_]]"
Arr2dObj: TypeAlias = "np.ndarray[tuple[int, int], np.dtype[np.object_]]"

int_: TypeAlias = "int | NoInput"
float_: TypeAlias = "float | NoInput"


@runtime_checkable
class Scalar(Protocol):
    """
    The arithmetic capability shared by plain reals and :class:`~dualtower.dual.Dual`.

    Generic numeric code written against this set of operations works unchanged when any
    input is replaced by a dual number.
    """

    def __add__(self, other: Any) -> Any: ...
    def __sub__(self, other: Any) -> Any: ...
    def __mul__(self, other: Any) -> Any: ...
    def __truediv__(self, other: Any) -> Any: ...
    def __neg__(self) -> Any: ...
    def __abs__(self) -> Any: ...
    def __eq__(self, other: Any) -> bool: ...
    def __lt__(self, other: Any) -> bool: ...
    def __le__(self, other: Any) -> bool: ...
