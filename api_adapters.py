# Contains the adapter classes for communicating with external directions APIs.

import requests
import os
from abc import ABC, abstractmethod
from dotenv import load_dotenv

from api_structures import DirectionsResult, Route, RouteStatus
from polyline_codec import MalformedPolyline, decode

# --- API Configuration ---
# Keys are read from environment variables for security.
load_dotenv()
GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY")
DIRECTIONS_TIMEOUT = os.getenv("DIRECTIONS_TIMEOUT", "10")

# Google statuses that mean the request was fine but there is nothing to show.
NO_ROUTE_STATUSES = {"ZERO_RESULTS", "NOT_FOUND"}


def _read_timeout(raw: str) -> float:
    """Converts the DIRECTIONS_TIMEOUT setting into a positive number of seconds."""
    try:
        timeout = float(raw)
    except (TypeError, ValueError):
        timeout = 0
    if timeout <= 0:
        raise ValueError(
            f"FATAL ERROR: The DIRECTIONS_TIMEOUT environment variable must be a positive number of seconds, got '{raw}'.")
    return timeout


def _unreadable_response() -> DirectionsResult:
    print("   > [Google] The Directions API returned a response that could not be read.")
    return DirectionsResult(
        status=RouteStatus.PARSE_ERROR, distance_text="Error", duration_text="Error",
        message="The directions response could not be read.")


class ApiAdapter(ABC):
    """
    Abstract Base Class (blueprint) for all directions clients.
    It ensures every adapter we create has the same public methods.
    """
    @abstractmethod
    def get_directions(self, start: str, end: str) -> DirectionsResult:
        """Finds a route between two free-text locations and returns our standard DirectionsResult."""
        pass


class GoogleMapsAdapter(ApiAdapter):
    """The adapter for the Google Maps Directions API."""
    DIRECTIONS_URL = "https://maps.googleapis.com/maps/api/directions/json"

    def __init__(self, api_key: str | None = None, timeout: float | None = None, verbose: bool = False):
        self.api_key = api_key if api_key is not None else GOOGLE_API_KEY
        self.verbose = verbose
        if not self.api_key:
            raise ValueError(
                "FATAL ERROR: The GOOGLE_API_KEY environment variable is not set.")
        self.timeout = timeout if timeout is not None else _read_timeout(DIRECTIONS_TIMEOUT)

    def _log(self, message: str):
        if self.verbose:
            print(f"   > [Google] {message}")

    def get_directions(self, start: str, end: str) -> DirectionsResult:
        if not start or not start.strip() or not end or not end.strip():
            raise ValueError("Both a start and an end location are required.")

        params = {
            'origin': start.strip(),
            'destination': end.strip(),
            'key': self.api_key
        }
        self._log(f"Requesting directions from '{params['origin']}' to '{params['destination']}'...")
        try:
            response = requests.get(
                self.DIRECTIONS_URL, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.JSONDecodeError:
            # Must come first: it is also a RequestException.
            return _unreadable_response()
        except requests.exceptions.RequestException as e:
            print(f"   > [Google] A network error occurred while requesting directions: {e}")
            return DirectionsResult(
                status=RouteStatus.NETWORK_ERROR, distance_text="Error", duration_text="Error",
                message=f"Could not reach the directions service: {e}")

        if not isinstance(data, dict):
            return _unreadable_response()

        status = data.get('status', 'OK')
        self._log(f"Directions API status: {status}")
        if status in NO_ROUTE_STATUSES or (status == 'OK' and not data.get('routes')):
            return DirectionsResult(
                status=RouteStatus.NO_ROUTE, distance_text="No route found", duration_text="N/A",
                message=f"No route found from '{start}' to '{end}'.")
        if status != 'OK':
            error_message = data.get('error_message', status)
            print(f"   > [Google] The Directions API refused the request. Status: {status}")
            return DirectionsResult(
                status=RouteStatus.API_ERROR, distance_text="Error", duration_text="Error",
                message=f"Directions API error: {error_message}")

        try:
            route = data['routes'][0]
            encoded_polyline = route['overview_polyline']['points']
            leg = route['legs'][0]
            distance = leg['distance']['text']
            duration = leg['duration']['text']
            # *** NORMALIZATION to our standard Route object ***
            points = decode(encoded_polyline)
        except (KeyError, IndexError, TypeError):
            print("   > [Google] Error parsing the Directions API response.")
            return DirectionsResult(
                status=RouteStatus.PARSE_ERROR, distance_text="Error", duration_text="Error",
                message="The directions response is missing route data.")
        except MalformedPolyline as e:
            print(f"   > [Google] The route geometry could not be decoded: {e}")
            return DirectionsResult(
                status=RouteStatus.PARSE_ERROR, distance_text="Error", duration_text="Error",
                message=f"The route geometry could not be decoded: {e}")

        self._log(f"Decoded {len(points)} route points.")
        return DirectionsResult(
            status=RouteStatus.OK,
            route=Route(points=tuple(points)),
            distance_text=distance,
            duration_text=duration,
            encoded_polyline=encoded_polyline)
