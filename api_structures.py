# Defines the standardized, internal data structures for the application.

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class Coordinates:
    """A standardized representation of geographic coordinates, in degrees."""
    lat: float
    lon: float

    def __iter__(self):
        # Lets a point be unpacked as `lat, lon = point`.
        yield self.lat
        yield self.lon


@dataclass(frozen=True)
class Route:
    """An ordered path of points. The first point is the start, the last is the end."""
    points: tuple[Coordinates, ...] = ()

    @property
    def start(self) -> Coordinates | None:
        return self.points[0] if self.points else None

    @property
    def end(self) -> Coordinates | None:
        return self.points[-1] if self.points else None

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self):
        return iter(self.points)

    def __getitem__(self, index):
        return self.points[index]


class RouteStatus(Enum):
    """How a directions search ended."""
    OK = "ok"
    NO_ROUTE = "no_route"
    NETWORK_ERROR = "network_error"
    PARSE_ERROR = "parse_error"
    API_ERROR = "api_error"


@dataclass(frozen=True)
class DirectionsResult:
    """A standardized representation of a directions search outcome."""
    status: RouteStatus
    route: Route = field(default_factory=Route)
    distance_text: str = ""
    duration_text: str = ""
    encoded_polyline: str = ""
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status is RouteStatus.OK
