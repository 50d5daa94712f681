"""Shared fixtures: the cars example used throughout the navigation tests."""

import pytest

from waypost.config import NavigatorConfig
from waypost.navigation.navigator import Navigator
from waypost.navigation.resolver import GuardedResolver
from waypost.routing.route import Route
from waypost.sources import collection
from waypost.testing import EventRecorder, StaticSource

CARS = [{"name": "tesla", "top_speed": 250}, {"name": "arrinera", "top_speed": 340}]


@pytest.fixture
def cars_source() -> StaticSource:
    return StaticSource(CARS)


@pytest.fixture
def car_routes(cars_source: StaticSource) -> list[Route]:
    return [
        Route("", name="home"),
        Route(
            "cars",
            name="cars",
            resolve={"cars": collection(cars_source)},
            children=(
                Route("{name}", name="car", resolve={"car": GuardedResolver("cars")}),
            ),
        ),
        Route("about", name="about"),
    ]


@pytest.fixture
def navigator(car_routes: list[Route]) -> Navigator:
    nav = Navigator(car_routes, NavigatorConfig(fallback_route="/cars"))
    nav.start()
    return nav


@pytest.fixture
def recorder(navigator: Navigator) -> EventRecorder:
    return EventRecorder.attach(navigator.events)
