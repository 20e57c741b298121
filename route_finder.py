# Main script to find a route between two locations and report its path.

import argparse
import sys
from dotenv import load_dotenv
from api_adapters import ApiAdapter, GoogleMapsAdapter
from api_structures import Coordinates, DirectionsResult, RouteStatus

DEFAULT_START = "1 Rocket Road, Hawthorne, CA"
DEFAULT_END = "2600 Alton Pkwy, Irvine, CA"

# What to tell the user when a search does not produce a route.
FAILURE_MESSAGES = {
    RouteStatus.NO_ROUTE: "No route could be found between those locations.",
    RouteStatus.NETWORK_ERROR: "The directions service could not be reached. Check your connection and try again.",
    RouteStatus.PARSE_ERROR: "The directions service sent a route that could not be read.",
    RouteStatus.API_ERROR: "The directions service refused the request.",
}


def format_point(point: Coordinates | None) -> str:
    """Formats a point as 'lat, lon' with the five decimals the route carries."""
    if point is None:
        return "N/A"
    return f"{point.lat:.5f}, {point.lon:.5f}"


# --- Core Logic ---

def search_for_route(start: str, end: str, api_adapter: ApiAdapter) -> DirectionsResult:
    """
    Asks the provided API adapter for a route between two free-text locations.
    """
    print(f"\nSearching for a route from '{start}' to '{end}'...")
    return api_adapter.get_directions(start, end)


def display_route(result: DirectionsResult, show_points: bool = False):
    """Formats and prints the route summary, or why there is none."""
    if not result.ok:
        print(f"\n{FAILURE_MESSAGES[result.status]}")
        if result.message:
            print(f"   ! {result.message}")
        return

    print("\nHere is your route.\n")
    print(f"Distance:    {result.distance_text}")
    print(f"Travel Time: {result.duration_text}")
    print(f"Start:       {format_point(result.route.start)}")
    print(f"End:         {format_point(result.route.end)}")
    print(f"Points:      {len(result.route)}")

    if show_points:
        print()
        for i, point in enumerate(result.route, start=1):
            print(f"{i:>5}. {format_point(point)}")


def main(argv: list[str] | None = None) -> int:
    load_dotenv()

    parser = argparse.ArgumentParser(
        description="Route Finder: get directions between two locations.")
    parser.add_argument('--start', help="Start location, as free text.")
    parser.add_argument('--end', help="End location, as free text.")
    parser.add_argument('--points', action='store_true',
                        help="Print every point along the route.")
    parser.add_argument('-v', '--verbose', action='store_true',
                        help="Enable verbose mode to see the API calls being made.")
    args = parser.parse_args(argv)

    try:
        api_adapter = GoogleMapsAdapter(verbose=args.verbose)
    except ValueError as e:
        print(e)
        return 1

    start = args.start or input(
        f"Enter the Start location [Default: {DEFAULT_START}]: ") or DEFAULT_START
    end = args.end or input(
        f"Enter the End location [Default: {DEFAULT_END}]: ") or DEFAULT_END

    try:
        result = search_for_route(start, end, api_adapter)
    except ValueError as e:
        print(e)
        return 1
    display_route(result, show_points=args.points)
    return 0 if result.ok else 1


if __name__ == '__main__':
    sys.exit(main())
