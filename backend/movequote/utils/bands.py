"""Ordered threshold bands.

Several pricing rules are expressed as ascending ``(upper_bound, value)``
pairs: crew size by cubic feet, handicap thresholds by cubic feet. All of
them resolve through :func:`first_band` so the band semantics live in one
place.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Sequence, Tuple, TypeVar, Union

T = TypeVar("T")

Number = Union[int, float, Decimal]
Band = Tuple[Number, T]


def first_band(value: Number, bands: Sequence[Band], *, inclusive: bool = True) -> T:
    """Return the value of the first band whose upper bound fits ``value``.

    ``inclusive`` selects ``value <= bound`` (default) or ``value < bound``.
    A value above every bound resolves to the last band. ``bands`` must be
    non-empty and sorted by ascending bound.
    """
    if not bands:
        raise ValueError("bands must not be empty")
    for bound, band_value in bands:
        if value <= bound if inclusive else value < bound:
            return band_value
    return bands[-1][1]
