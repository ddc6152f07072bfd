"""Swing pivot data model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Pivot:
    """Swing high or low at a position in an aggregated bar sequence.

    Attributes:
        index: Position of the pivot bar in the sequence it was detected on.
        price: The bar's high (pivot high) or low (pivot low).
    """

    index: int
    price: float
