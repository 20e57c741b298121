# Encodes and decodes routes in the "encoded polyline algorithm format".

from itertools import accumulate
from typing import Iterable, Iterator

from api_structures import Coordinates

# Every encoded character is a 6-bit value offset into the printable range.
CHAR_OFFSET = 63
MAX_CHUNK = 0x3F
CONTINUATION_BIT = 0x20
CHUNK_MASK = 0x1F
CHUNK_BITS = 5

DEFAULT_PRECISION = 5


class MalformedPolyline(ValueError):
    """Raised when an encoded polyline cannot be decoded."""

    def __init__(self, message: str, position: int):
        super().__init__(f"{message} (at index {position})")
        self.position = position


def _iter_deltas(encoded: str) -> Iterator[int]:
    """Yields each signed delta in the string, in scan order."""
    accumulator = 0
    shift = 0
    for position, char in enumerate(encoded):
        chunk = ord(char) - CHAR_OFFSET
        if not 0 <= chunk <= MAX_CHUNK:
            raise MalformedPolyline(
                f"Invalid polyline character {char!r}", position)

        accumulator |= (chunk & CHUNK_MASK) << shift
        shift += CHUNK_BITS

        if chunk < CONTINUATION_BIT:
            # Bit 0 carries the sign; ~x is the one's complement of x.
            if accumulator & 1:
                yield ~(accumulator >> 1)
            else:
                yield accumulator >> 1
            accumulator = 0
            shift = 0

    if shift:
        raise MalformedPolyline(
            "Polyline ends in the middle of a value", len(encoded))


def _iter_pairs(encoded: str) -> Iterator[tuple[int, int]]:
    """Groups the deltas into (lat, lon) pairs, latitude first."""
    deltas = _iter_deltas(encoded)
    for lat_delta in deltas:
        lon_delta = next(deltas, None)
        if lon_delta is None:
            raise MalformedPolyline(
                "Polyline ends after a latitude with no longitude", len(encoded))
        yield lat_delta, lon_delta


def _add_pairs(running: tuple[int, int], delta: tuple[int, int]) -> tuple[int, int]:
    return running[0] + delta[0], running[1] + delta[1]


def decode(encoded: str, precision: int = DEFAULT_PRECISION) -> list[Coordinates]:
    """
    Decodes an encoded polyline into an ordered list of Coordinates.

    Each pair in the string is a delta from the previous one, so the running
    latitude and longitude are folded across the whole string. Raises
    MalformedPolyline on a truncated value, a character outside the encoded
    range, or a latitude with no matching longitude.
    """
    factor = 10 ** precision
    return [
        Coordinates(lat=lat / factor, lon=lon / factor)
        for lat, lon in accumulate(_iter_pairs(encoded), _add_pairs)
    ]


def _encode_value(value: int) -> str:
    """Encodes one signed delta as a run of 5-bit chunks."""
    value = ~(value << 1) if value < 0 else value << 1

    chunks = []
    while value >= CONTINUATION_BIT:
        chunks.append(chr((CONTINUATION_BIT | (value & CHUNK_MASK)) + CHAR_OFFSET))
        value >>= CHUNK_BITS
    chunks.append(chr(value + CHAR_OFFSET))
    return ''.join(chunks)


def encode(route: Iterable[tuple[float, float] | Coordinates], precision: int = DEFAULT_PRECISION) -> str:
    """Encodes (lat, lon) points into a polyline string. The inverse of decode()."""
    factor = 10 ** precision
    encoded = []
    prev_lat = 0
    prev_lon = 0

    for lat, lon in route:
        # Deltas are taken between rounded points so rounding error never builds up.
        lat_int = round(lat * factor)
        lon_int = round(lon * factor)
        encoded.append(_encode_value(lat_int - prev_lat))
        encoded.append(_encode_value(lon_int - prev_lon))
        prev_lat, prev_lon = lat_int, lon_int

    return ''.join(encoded)
