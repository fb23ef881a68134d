"""
Polyline encoding utility.
Implements the Encoded Polyline Algorithm Format.
ref: https://developers.google.com/maps/documentation/utilities/polylinealgorithm
"""
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Tuple, Union

Number = Union[int, float, str, Decimal]

_PRECISION = Decimal(100000)


def encode_polyline(points: Iterable[Tuple[Number, Number]]) -> str:
    """
    Encode (lat, lng) pairs into a polyline string.

    Coordinates are scaled to 5 decimal digits, rounding half away from zero,
    and every point after the first is stored as a delta from the previous one.
    """
    result = []
    prev_lat = 0
    prev_lng = 0

    for lat, lng in points:
        lat_e5 = _to_e5(lat)
        lng_e5 = _to_e5(lng)

        result.append(_encode_value(lat_e5 - prev_lat))
        result.append(_encode_value(lng_e5 - prev_lng))

        prev_lat = lat_e5
        prev_lng = lng_e5

    return "".join(result)


def _to_e5(value: Number) -> int:
    scaled = Decimal(str(value)) * _PRECISION
    return int(scaled.to_integral_value(rounding=ROUND_HALF_UP))


def _encode_value(value: int) -> str:
    """Encode a single signed value."""
    value = value << 1
    if value < 0:
        value = ~value

    result = []
    while value >= 0x20:
        result.append(chr((0x20 | (value & 0x1f)) + 63))
        value >>= 5
    result.append(chr(value + 63))

    return "".join(result)
