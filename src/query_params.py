"""Query string assembly for Distance Matrix requests.

- origins and destinations come first, then every configured option in a fixed
  order (see `config_loader.REQUEST_OPTIONS`), then the auth parameter.
- Values are form-encoded; `,` and `:` inside a location are escaped so they
  cannot be confused with the structural pipe delimiter.
- With `use_encoded_polylines`, consecutive lat/lng places on one axis are
  merged into a single `enc:<polyline>:` token. Addresses break the run so the
  original place order is kept.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence
from urllib.parse import quote_plus

import encoded_polyline  # type: ignore
from places import Matrix, Place, format_coordinate  # type: ignore


DELIMITER = quote_plus("|")


def escape(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return quote_plus(str(value))


def _encoded_token(run: List[Place], lat_lng_scale: int) -> str:
    points = [
        (format_coordinate(p.lat, lat_lng_scale), format_coordinate(p.lng, lat_lng_scale))
        for p in run
    ]
    return f"enc:{encoded_polyline.encode_polyline(points)}:"


def places_to_param(
    places: Sequence[Place],
    lat_lng_scale: int,
    use_encoded_polylines: bool = False,
) -> str:
    """Serialize one axis (origins or destinations) to an escaped value."""
    if not use_encoded_polylines:
        return DELIMITER.join(escape(p.to_param(lat_lng_scale)) for p in places)

    tokens: List[str] = []
    run: List[Place] = []
    for place in places:
        if place.is_lat_lng:
            run.append(place)
            continue
        if run:
            tokens.append(_encoded_token(run, lat_lng_scale))
            run = []
        tokens.append(place.to_param(lat_lng_scale))
    if run:
        tokens.append(_encoded_token(run, lat_lng_scale))

    return DELIMITER.join(escape(t) for t in tokens)


def build_query_params(matrix: Matrix) -> Dict[str, str]:
    """Return escaped query parameters in URL order."""
    cfg = matrix.configuration
    params: Dict[str, str] = {
        "origins": places_to_param(
            matrix.origins, cfg.lat_lng_scale, cfg.use_encoded_polylines
        ),
        "destinations": places_to_param(
            matrix.destinations, cfg.lat_lng_scale, cfg.use_encoded_polylines
        ),
    }
    for name, value in cfg.to_param():
        params[name] = escape(value)
    return params


def query_params_string(params: Dict[str, str]) -> str:
    return "&".join(f"{name}={value}" for name, value in params.items())
