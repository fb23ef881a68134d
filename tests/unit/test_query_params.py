import pathlib
import sys

# Ensure src/ is importable
REPO_ROOT = pathlib.Path(__file__).resolve().parents[2]
SRC_DIR = REPO_ROOT / "src"
sys.path.append(str(SRC_DIR))

import encoded_polyline as ep  # type: ignore
import query_params as qp  # type: ignore
from config_loader import Configuration  # type: ignore
from places import Matrix, Place  # type: ignore

DELIM = qp.DELIMITER


def test_delimiter_is_escaped_pipe():
    assert DELIM == "%7C"


def test_escape_structural_characters():
    assert qp.escape("Oslo, Norway") == "Oslo%2C+Norway"
    assert qp.escape("a:b/c") == "a%3Ab%2Fc"
    assert qp.escape(None) is None


def test_places_to_param_plain():
    places = [
        Place(address="address_origin_1"),
        Place(lat="10.123456789", lng="10.987654321"),
        Place(address="Main St 1, Springfield"),
    ]
    assert qp.places_to_param(places, 5) == (
        f"address_origin_1{DELIM}10.12346%2C10.98765{DELIM}Main+St+1%2C+Springfield"
    )
    assert qp.places_to_param(places[1:2], 2) == "10.12%2C10.99"


def test_places_to_param_encoded_keeps_order_and_splits_runs():
    places = [
        Place(lat=1, lng=11),
        Place(lat=2, lng=22),
        Place(address="X"),
        Place(lat=4, lng=44),
    ]
    expected = DELIM.join(
        [
            qp.escape(f"enc:{ep.encode_polyline([(1, 11), (2, 22)])}:"),
            "X",
            qp.escape(f"enc:{ep.encode_polyline([(4, 44)])}:"),
        ]
    )
    assert qp.places_to_param(places, 5, use_encoded_polylines=True) == expected
    assert expected == (
        f"enc%3A_ibE_mcbA_ibE_mcbA%3A{DELIM}X{DELIM}enc%3A_glW_wpkG%3A"
    )


def test_places_to_param_encoded_addresses_only():
    places = [Place(address="a"), Place(address="b")]
    assert qp.places_to_param(places, 5, use_encoded_polylines=True) == f"a{DELIM}b"


def test_places_to_param_encoded_rounds_to_scale_first():
    # 1.234564 rounded to scale 5 is 1.23456, scale 3 gives 1.235
    at_5 = qp.places_to_param([Place(lat="1.234564", lng=0)], 5, True)
    at_3 = qp.places_to_param([Place(lat="1.234564", lng=0)], 3, True)
    assert at_5 == qp.escape(f"enc:{ep.encode_polyline([('1.23456', 0)])}:")
    assert at_3 == qp.escape(f"enc:{ep.encode_polyline([('1.235', 0)])}:")


def test_build_query_params_order_and_escaping():
    cfg = Configuration(
        mode="driving",
        language="en-GB",
        avoid="tolls",
        departure_time="now",
        google_api_key="k/ey",
    )
    matrix = Matrix(
        origins=[Place(address="a b")],
        destinations=[Place(lat=1, lng=2)],
        configuration=cfg,
    )
    params = qp.build_query_params(matrix)
    assert list(params) == [
        "origins",
        "destinations",
        "mode",
        "language",
        "avoid",
        "departure_time",
        "key",
    ]
    assert params["origins"] == "a+b"
    assert params["destinations"] == "1%2C2"
    assert params["key"] == "k%2Fey"
    assert qp.query_params_string(params) == (
        "origins=a+b&destinations=1%2C2&mode=driving&language=en-GB"
        "&avoid=tolls&departure_time=now&key=k%2Fey"
    )
