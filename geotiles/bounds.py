#!/usr/bin/env python3
# geotiles/bounds.py
"""
Ordered numeric interval used for clamping and overlap tests.

Bounds(a, b) always exposes min <= max, whatever order the values came in.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Mapping, TypeVar, Union

from geotiles.errors import GeoFormatError

__all__ = ["Bounds"]

T = TypeVar("T", int, float)


@dataclass(frozen=True)
class Bounds(Generic[T]):
    min: T
    max: T

    def __post_init__(self):
        if self.min > self.max:
            lo, hi = self.max, self.min
            object.__setattr__(self, "min", lo)
            object.__setattr__(self, "max", hi)

    @property
    def size(self) -> T:
        return self.max - self.min

    def contains(self, item: Union[T, "Bounds[T]"]) -> bool:
        """Value membership, or non-strict subset test when given another Bounds."""
        if isinstance(item, Bounds):
            return self.min <= item.min and item.max <= self.max
        return self.min <= item <= self.max

    __contains__ = contains

    def overlaps(self, other: "Bounds[T]") -> bool:
        """Open-interval intersection; bounds that only touch do not overlap."""
        return other.min < self.max and self.min < other.max

    def clamp(self, value: T) -> T:
        if value < self.min:
            return self.min
        if value > self.max:
            return self.max
        return value

    def __iter__(self):
        yield self.min
        yield self.max

    def __str__(self) -> str:
        return f"({self.min}, {self.max})"

    # --- records

    def to_dict(self) -> dict:
        return {"min": self.min, "max": self.max}

    @classmethod
    def from_dict(cls, record: Mapping[str, Any], cast: Callable[[Any], T] = int) -> "Bounds[T]":
        """
        Build from a {min, max} record. Keys are matched case-insensitively so
        {"Min": 0, "Max": 19} is accepted as well.
        """
        if not isinstance(record, Mapping):
            raise GeoFormatError(f"Bounds record must be a mapping, got {type(record).__name__}")
        keys = {str(k).lower(): v for k, v in record.items()}
        try:
            lo, hi = keys["min"], keys["max"]
        except KeyError as exc:
            raise GeoFormatError(f"Bounds record is missing {exc.args[0]!r}") from exc
        try:
            return cls(cast(lo), cast(hi))
        except (TypeError, ValueError) as exc:
            raise GeoFormatError(f"Bounds record has non-numeric values: {lo!r}, {hi!r}") from exc
