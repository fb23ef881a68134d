import pathlib
import sys

import pytest

# Ensure src/ is importable
REPO_ROOT = pathlib.Path(__file__).resolve().parents[2]
SRC_DIR = REPO_ROOT / "src"
sys.path.append(str(SRC_DIR))

import url_signer as us  # type: ignore
from matrix_errors import InvalidConfiguration  # type: ignore


def test_decode_private_key():
    assert us.decode_private_key("c2VjcmV0") == b"secret"
    # padding is optional, URL-safe alphabet is accepted
    assert us.decode_private_key("vNIXE0xscrmjlyV-12Nj_BvUPaw") == us.decode_private_key(
        "vNIXE0xscrmjlyV-12Nj_BvUPaw="
    )


def test_decode_private_key_rejects_garbage():
    with pytest.raises(InvalidConfiguration):
        us.decode_private_key("not base64 !!")


def test_sign_matches_documented_example():
    sig = us.sign(
        "/maps/api/geocode/json?address=New+York&client=clientID",
        "vNIXE0xscrmjlyV-12Nj_BvUPaw=",
    )
    assert sig == "chaRF2hTJKOScPr-RQCEhZbSzIE="


def test_sign_is_deterministic_and_input_sensitive():
    path = "/maps/api/distancematrix/json?origins=a&destinations=b&client=123"
    sig = us.sign(path, "c2VjcmV0")
    assert sig == us.sign(path, "c2VjcmV0")
    assert sig != us.sign(path + "x", "c2VjcmV0")
    assert sig != us.sign(path, "c2VjcmV1")


def test_add_signature_signs_path_and_query_only():
    url = (
        "https://maps.googleapis.com/maps/api/distancematrix/json"
        "?origins=address_origin_1%7Caddress_origin_2"
        "&destinations=1%2C11%7C2%2C22&client=123"
    )
    signed = us.add_signature(url, "c2VjcmV0")
    assert signed == url + "&signature=EaT2I1k-GYoPuUv6hJHiSmfTt08="
    # protocol and host are not part of the signed string
    assert us.add_signature(url.replace("https", "http", 1), "c2VjcmV0").endswith(
        "&signature=EaT2I1k-GYoPuUv6hJHiSmfTt08="
    )
