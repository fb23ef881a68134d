import pathlib
import sys

# Ensure src/ is importable
REPO_ROOT = pathlib.Path(__file__).resolve().parents[2]
SRC_DIR = REPO_ROOT / "src"
sys.path.append(str(SRC_DIR))

import encoded_polyline as ep  # type: ignore


def test_reference_polyline():
    points = [(38.5, -120.2), (40.7, -120.95), (43.252, -126.453)]
    assert ep.encode_polyline(points) == "_p~iF~ps|U_ulLnnqC_mqNvxq`@"


def test_points_are_delta_encoded():
    # (1, 11) then (2, 22): the second point's delta equals the first point.
    assert ep.encode_polyline([(1, 11), (2, 22)]) == "_ibE_mcbA_ibE_mcbA"
    assert ep.encode_polyline([(4, 44)]) == "_glW_wpkG"


def test_rounds_half_away_from_zero():
    # 0.000005 -> 1e-5 units, -0.000005 -> -1e-5 units
    assert ep.encode_polyline([("0.000005", "-0.000005")]) == "A@"


def test_empty_input():
    assert ep.encode_polyline([]) == ""
