"""Distance Matrix configuration with YAML loading and environment-based secrets.

Notes:
- Secrets are NOT stored in the YAML file; only the ENV VAR names are.
- Request options default to None (unset) and are left out of the URL.
- A plain API key and business credentials (client id + private key) are
  mutually exclusive.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, Tuple, Union

import yaml

import url_signer  # type: ignore
from matrix_errors import InvalidConfiguration  # type: ignore


PROTOCOLS = {"http", "https"}
MODES = {"driving", "walking", "bicycling", "transit"}
AVOIDS = {"tolls", "highways", "ferries", "indoor"}
UNITS = {"metric", "imperial"}
TRAFFIC_MODELS = {"best_guess", "pessimistic", "optimistic"}
TRANSIT_MODES = {"bus", "subway", "train", "tram", "rail"}
TRANSIT_ROUTING_PREFERENCES = {"less_walking", "fewer_transfers"}

DEFAULT_FILTER_PARAMETERS = ("key", "signature")

# Emitted in this order after origins/destinations.
REQUEST_OPTIONS = (
    "mode",
    "language",
    "region",
    "units",
    "avoid",
    "departure_time",
    "arrival_time",
    "traffic_model",
    "transit_mode",
    "transit_routing_preference",
)

_DEPARTURE_TIME_RE = re.compile(r"^(\d+|now)$")
_ARRIVAL_TIME_RE = re.compile(r"^\d+$")


def _default_filter_parameters() -> Set[str]:
    return set(DEFAULT_FILTER_PARAMETERS)


@dataclass
class Configuration:
    protocol: str = "https"
    lat_lng_scale: int = 5
    use_encoded_polylines: bool = False

    google_api_key: Optional[str] = None
    google_business_api_client_id: Optional[str] = None
    google_business_api_private_key: Optional[str] = None

    filter_parameters_in_logged_url: Set[str] = field(
        default_factory=_default_filter_parameters
    )

    mode: Optional[str] = None
    language: Optional[str] = None
    region: Optional[str] = None
    units: Optional[str] = None
    avoid: Optional[str] = None
    departure_time: Optional[Union[int, str]] = None
    arrival_time: Optional[Union[int, str]] = None
    traffic_model: Optional[str] = None
    transit_mode: Optional[str] = None
    transit_routing_preference: Optional[str] = None
    channel: Optional[str] = None

    @property
    def has_business_credentials(self) -> bool:
        return bool(
            self.google_business_api_client_id
            and self.google_business_api_private_key
        )

    def errors(self) -> List[str]:
        """Return validation messages; empty when the configuration is usable."""
        errs: List[str] = []

        if not isinstance(self.protocol, str) or self.protocol not in PROTOCOLS:
            errs.append(f"protocol must be one of {sorted(PROTOCOLS)}.")
        if (
            isinstance(self.lat_lng_scale, bool)
            or not isinstance(self.lat_lng_scale, int)
            or self.lat_lng_scale < 0
        ):
            errs.append("lat_lng_scale must be a non-negative integer.")
        if not isinstance(self.use_encoded_polylines, bool):
            errs.append("use_encoded_polylines must be true or false.")

        for name, allowed in (
            ("mode", MODES),
            ("avoid", AVOIDS),
            ("units", UNITS),
            ("traffic_model", TRAFFIC_MODELS),
            ("transit_mode", TRANSIT_MODES),
            ("transit_routing_preference", TRANSIT_ROUTING_PREFERENCES),
        ):
            value = getattr(self, name)
            if value is not None and (
                not isinstance(value, str) or value not in allowed
            ):
                errs.append(f"{name}={value!r} is not one of {sorted(allowed)}.")

        if self.departure_time is not None and not _DEPARTURE_TIME_RE.match(
            str(self.departure_time)
        ):
            errs.append("departure_time must be a unix timestamp or 'now'.")
        if self.arrival_time is not None and not _ARRIVAL_TIME_RE.match(
            str(self.arrival_time)
        ):
            errs.append("arrival_time must be a unix timestamp.")
        if self.departure_time is not None and self.arrival_time is not None:
            errs.append("departure_time and arrival_time cannot both be set.")

        client_id = self.google_business_api_client_id
        private_key = self.google_business_api_private_key
        if bool(client_id) != bool(private_key):
            errs.append(
                "google_business_api_client_id and google_business_api_private_key "
                "must be set together."
            )
        if private_key:
            try:
                url_signer.decode_private_key(private_key)
            except InvalidConfiguration as e:
                errs.append(str(e))
        if self.google_api_key and (client_id or private_key):
            errs.append(
                "google_api_key and business credentials are mutually exclusive."
            )
        if self.channel is not None and not self.has_business_credentials:
            errs.append("channel requires business credentials.")

        return errs

    def validate(self) -> None:
        errs = self.errors()
        if errs:
            raise InvalidConfiguration(" ".join(errs))

    def to_param(self) -> List[Tuple[str, str]]:
        """Ordered (name, raw value) pairs for every option that is set."""
        out: List[Tuple[str, str]] = []
        for name in REQUEST_OPTIONS:
            value = getattr(self, name)
            if value is not None:
                out.append((name, str(value)))

        if self.has_business_credentials:
            out.append(("client", str(self.google_business_api_client_id)))
            if self.channel is not None:
                out.append(("channel", str(self.channel)))
        elif self.google_api_key:
            out.append(("key", self.google_api_key))
        return out


def _require_key(d: Dict[str, Any], key: str) -> Any:
    if key not in d:
        raise KeyError(f"Missing required configuration key: {key}")
    return d[key]


def _getenv(name: Optional[str]) -> Optional[str]:
    return os.getenv(name) if name else None


def load_config(path: str) -> Configuration:
    """Load and validate YAML configuration from `path`.

    Credentials are read from the environment variables the file names.
    """
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    dm_raw = _require_key(raw, "distance_matrix") or {}
    auth_raw = dm_raw.get("auth", {}) or {}
    request_raw = dm_raw.get("request", {}) or {}

    unknown = set(request_raw) - set(REQUEST_OPTIONS) - {"channel"}
    if unknown:
        raise InvalidConfiguration(
            f"Unknown request option(s): {', '.join(sorted(unknown))}"
        )

    filter_params = dm_raw.get(
        "filter_parameters_in_logged_url", list(DEFAULT_FILTER_PARAMETERS)
    )

    cfg = Configuration(
        protocol=_require_key(dm_raw, "protocol"),
        lat_lng_scale=_require_key(dm_raw, "lat_lng_scale"),
        use_encoded_polylines=dm_raw.get("use_encoded_polylines", False),
        google_api_key=_getenv(auth_raw.get("google_api_key_env")),
        google_business_api_client_id=_getenv(
            auth_raw.get("google_business_api_client_id_env")
        ),
        google_business_api_private_key=_getenv(
            auth_raw.get("google_business_api_private_key_env")
        ),
        filter_parameters_in_logged_url={str(p) for p in filter_params or []},
        **{k: v for k, v in request_raw.items() if v is not None},
    )

    cfg.validate()
    return cfg
