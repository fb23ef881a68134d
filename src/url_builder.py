"""Distance Matrix request URL builder.

This module constructs (and, for business credentials, signs) Distance Matrix
API request URLs. It does NOT call the API.

- `UrlBuilder.sensitive_url()` contains credentials and the signature in plain
  text and must never be logged.
- `UrlBuilder.filtered_url()` replaces the values of the configured parameters
  (default: key, signature) with `[FILTERED]` and is safe to log.

References:
- Distance Matrix API: https://developers.google.com/maps/documentation/distance-matrix/distance-matrix
"""

from __future__ import annotations

import argparse
import re
from typing import Iterable, List, Optional

import config_loader  # type: ignore
import query_params  # type: ignore
import request_log  # type: ignore
import url_signer  # type: ignore
from matrix_errors import (  # type: ignore
    InvalidConfiguration,
    InvalidMatrix,
    MatrixUrlTooLong,
)
from places import Matrix, Place  # type: ignore


BASE_URL = "maps.googleapis.com/maps/api/distancematrix/json"
MAX_URL_SIZE = 2048
FILTER_VALUE = "[FILTERED]"


def filter_url(url: str, filter_params: Iterable[str]) -> str:
    """Replace the value of every `name=value` pair whose name is in `filter_params`.

    Repeated parameters are each replaced. Everything up to the first `?` is
    left as is.
    """
    names = set(filter_params)
    if not names or "?" not in url:
        return url

    head, query = url.split("?", 1)
    fragment = ""
    if "#" in query:
        query, fragment = query.split("#", 1)
        fragment = "#" + fragment

    pairs = []
    for pair in query.split("&"):
        name, sep, _value = pair.partition("=")
        if sep and name in names:
            pair = f"{name}={FILTER_VALUE}"
        pairs.append(pair)
    return f"{head}?{'&'.join(pairs)}{fragment}"


class UrlBuilder:
    """Build request URLs for one matrix.

    The matrix and its configuration are validated once here; building does
    not validate again.
    """

    def __init__(self, matrix: Matrix) -> None:
        errs = matrix.errors()
        if errs:
            raise InvalidMatrix(errs)
        try:
            matrix.configuration.validate()
        except InvalidConfiguration as e:
            raise InvalidMatrix([str(e)]) from e
        self.matrix = matrix

    @property
    def configuration(self) -> config_loader.Configuration:
        return self.matrix.configuration

    def query_params_string(self) -> str:
        return query_params.query_params_string(
            query_params.build_query_params(self.matrix)
        )

    def sensitive_url(self) -> str:
        """Full URL including credentials; raises MatrixUrlTooLong."""
        cfg = self.configuration
        url = f"{cfg.protocol}://{BASE_URL}?{self.query_params_string()}"
        if cfg.has_business_credentials:
            url = url_signer.add_signature(url, cfg.google_business_api_private_key)

        if len(url) > MAX_URL_SIZE:
            raise MatrixUrlTooLong(len(url), MAX_URL_SIZE)
        return url

    def filtered_url(self) -> str:
        # The configured set is caller-owned; read a snapshot.
        filter_params = set(self.configuration.filter_parameters_in_logged_url)
        return filter_url(self.sensitive_url(), filter_params)


_LAT_LNG_RE = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*,\s*(-?\d+(?:\.\d+)?)\s*$")


def parse_place(text: str) -> Place:
    """`"lat,lng"` becomes a coordinate place; anything else an address."""
    m = _LAT_LNG_RE.match(text)
    if m:
        return Place(lat=m.group(1), lng=m.group(2))
    return Place(address=text.strip())


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        description="Build a Distance Matrix request URL (printed filtered)."
    )
    parser.add_argument("--config", required=True, help="Path to config/config.yml")
    parser.add_argument(
        "--origin",
        action="append",
        default=[],
        help="Origin address or 'lat,lng' (repeatable)",
    )
    parser.add_argument(
        "--destination",
        action="append",
        default=[],
        help="Destination address or 'lat,lng' (repeatable)",
    )
    parser.add_argument(
        "--log",
        required=False,
        default=None,
        help="Optional path to JSONL request log",
    )
    args = parser.parse_args(argv)

    try:
        cfg = config_loader.load_config(args.config)
    except (KeyError, ValueError) as e:
        parser.error(f"invalid config {args.config}: {e}")

    if not (cfg.google_api_key or cfg.has_business_credentials):
        print(
            "WARNING: no API key or business credentials configured; "
            "the API will reject this request.",
            flush=True,
        )

    try:
        matrix = Matrix(
            origins=[parse_place(o) for o in args.origin],
            destinations=[parse_place(d) for d in args.destination],
            configuration=cfg,
        )
        builder = UrlBuilder(matrix)
        url = builder.filtered_url()
    except (ValueError, InvalidMatrix, MatrixUrlTooLong) as e:
        parser.error(str(e))

    request_log.log_request_url(builder, request_log.JsonlLogger(args.log))
    print(url)


if __name__ == "__main__":
    main()
