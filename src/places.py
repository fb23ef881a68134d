"""Places (addresses or lat/lng pairs) and the origin/destination matrix."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import (
    MAX_EMAX,
    MIN_EMIN,
    ROUND_HALF_UP,
    Decimal,
    InvalidOperation,
    localcontext,
)
from typing import List, Optional, Union

from config_loader import Configuration  # type: ignore

Coordinate = Union[int, float, str, Decimal]


def _to_decimal(value: Coordinate, name: str) -> Decimal:
    try:
        d = Decimal(str(value).strip())
    except InvalidOperation as e:
        raise ValueError(f"{name}={value!r} is not a number.") from e
    if not d.is_finite():
        raise ValueError(f"{name}={value!r} is not a finite number.")
    return d


def format_coordinate(value: Decimal, scale: int) -> str:
    """Round half away from zero to `scale` digits; drop trailing zeros.

    >>> format_coordinate(Decimal("10.123456789"), 5)
    '10.12346'
    >>> format_coordinate(Decimal("1"), 5)
    '1'
    """
    with localcontext() as ctx:
        # Room for every integer digit plus `scale` fraction digits.
        ctx.prec = max(value.adjusted() + 1, 1) + scale + 1
        ctx.Emin = MIN_EMIN
        ctx.Emax = MAX_EMAX
        rounded = value.quantize(Decimal(1).scaleb(-scale), rounding=ROUND_HALF_UP)
        text = format(rounded.normalize(), "f")
    return "0" if text == "-0" else text


@dataclass(frozen=True)
class Place:
    """A location given either as an address or as a lat/lng pair."""

    address: Optional[str] = None
    lat: Optional[Decimal] = None
    lng: Optional[Decimal] = None

    def __post_init__(self) -> None:
        has_address = self.address is not None
        has_lat_lng = self.lat is not None or self.lng is not None
        if has_address and has_lat_lng:
            raise ValueError("Place takes either an address or lat/lng, not both.")
        if has_address:
            if not str(self.address).strip():
                raise ValueError("Place address must not be blank.")
            return
        if self.lat is None or self.lng is None:
            raise ValueError("Place requires an address or both lat and lng.")
        object.__setattr__(self, "lat", _to_decimal(self.lat, "lat"))
        object.__setattr__(self, "lng", _to_decimal(self.lng, "lng"))

    @property
    def is_lat_lng(self) -> bool:
        return self.address is None

    def to_param(self, lat_lng_scale: int) -> str:
        """Unescaped text for this place in an origins/destinations value."""
        if self.address is not None:
            return self.address
        return (
            f"{format_coordinate(self.lat, lat_lng_scale)},"
            f"{format_coordinate(self.lng, lat_lng_scale)}"
        )


@dataclass
class Matrix:
    origins: List[Place] = field(default_factory=list)
    destinations: List[Place] = field(default_factory=list)
    configuration: Configuration = field(default_factory=Configuration)

    def errors(self) -> List[str]:
        errs: List[str] = []
        if not self.origins:
            errs.append("origins can't be empty.")
        if not self.destinations:
            errs.append("destinations can't be empty.")
        return errs
