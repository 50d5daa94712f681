"""Routing — nested route table with O(path-depth) matching.

Routes are registered during setup and compiled into an immutable
lookup structure when the navigator starts.
"""

from waypost.routing.route import Guard, PathSegment, Resolver, Route, RouteMatch
from waypost.routing.router import Router, parse_path

__all__ = [
    "Guard",
    "PathSegment",
    "Resolver",
    "Route",
    "RouteMatch",
    "Router",
    "parse_path",
]
