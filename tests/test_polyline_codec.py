import random

import pytest

from api_structures import Coordinates, Route
from polyline_codec import MalformedPolyline, decode, encode

# The worked example from the encoded polyline algorithm documentation.
REFERENCE_POLYLINE = "_p~iF~ps|U_ulLnnqC_mqNvxq`@"
REFERENCE_POINTS = [(38.5, -120.2), (40.7, -120.95), (43.252, -126.453)]


def assert_points_close(actual, expected, tolerance=1e-5):
    assert len(actual) == len(expected)
    for (lat, lon), (exp_lat, exp_lon) in zip(actual, expected):
        assert abs(lat - exp_lat) <= tolerance
        assert abs(lon - exp_lon) <= tolerance


def test_decode_empty_string_returns_empty_list():
    assert decode("") == []


def test_decode_reference_example():
    points = decode(REFERENCE_POLYLINE)

    assert_points_close(points, REFERENCE_POINTS)
    assert all(isinstance(p, Coordinates) for p in points)


def test_decode_first_two_pairs_of_reference_example():
    points = decode("_p~iF~ps|U_ulLnnqC")

    assert points == [Coordinates(38.5, -120.2), Coordinates(40.7, -120.95)]


def test_decode_carries_running_totals_across_pairs():
    # The second and third pairs are deltas, not absolute positions.
    second_pair_alone = decode("_ulLnnqC")
    full = decode(REFERENCE_POLYLINE)

    assert_points_close(second_pair_alone, [(2.2, -0.75)])
    assert full[1] != second_pair_alone[0]


def test_decode_minimal_pair():
    assert decode("??") == [Coordinates(0.0, 0.0)]


def test_decode_negative_smallest_delta():
    assert decode("@?") == [Coordinates(-0.00001, 0.0)]


def test_decode_is_deterministic():
    assert decode(REFERENCE_POLYLINE) == decode(REFERENCE_POLYLINE)


def test_decode_single_codeword_is_malformed():
    with pytest.raises(MalformedPolyline) as excinfo:
        decode("?")

    assert excinfo.value.position == 1


def test_decode_truncated_value_is_malformed():
    # '_' has the continuation bit set, so the string stops mid-value.
    with pytest.raises(MalformedPolyline) as excinfo:
        decode("_p~iF~ps|U_")

    assert excinfo.value.position == len("_p~iF~ps|U_")


def test_decode_character_below_range_is_malformed():
    with pytest.raises(MalformedPolyline) as excinfo:
        decode("_p~iF ~ps|U")

    assert excinfo.value.position == 5


def test_decode_character_above_range_is_malformed():
    with pytest.raises(MalformedPolyline):
        decode("??" + chr(127) + "?")


def test_malformed_polyline_fails_the_whole_call():
    # A valid first pair is not returned when a later pair is broken.
    with pytest.raises(MalformedPolyline):
        decode("_p~iF~ps|U_ulL")


def test_malformed_polyline_is_a_value_error():
    with pytest.raises(ValueError):
        decode("?")


def test_encode_reference_example():
    assert encode(REFERENCE_POINTS) == REFERENCE_POLYLINE


def test_encode_empty_route():
    assert encode([]) == ""


def test_encode_accepts_route_and_coordinates():
    route = Route(points=tuple(Coordinates(lat, lon) for lat, lon in REFERENCE_POINTS))

    assert encode(route) == REFERENCE_POLYLINE


def test_out_of_range_values_pass_through():
    points = [(95.0, 200.0), (-91.5, -181.25)]

    assert_points_close(decode(encode(points)), points)


def test_precision_six():
    points = [(38.5, -120.2), (40.123456, -120.654321)]
    encoded = encode(points, precision=6)

    assert_points_close(decode(encoded, precision=6), points, tolerance=1e-6)
    assert_points_close(decode(encoded), [(385.0, -1202.0), (401.23456, -1206.54321)])


def test_round_trip_random_routes():
    rng = random.Random(42)
    for _ in range(50):
        route = [
            (rng.uniform(-90, 90), rng.uniform(-180, 180))
            for _ in range(rng.randint(1, 30))
        ]

        assert_points_close(decode(encode(route)), route)


def test_round_trip_preserves_order():
    route = [(51.2, 6.78), (51.21, 6.79), (51.19, 6.77), (51.2, 6.78)]

    decoded = decode(encode(route))

    assert [(round(p.lat, 5), round(p.lon, 5)) for p in decoded] == route
