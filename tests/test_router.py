"""Tests for waypost.routing.router — nested trie-based router."""

import pytest

from waypost.errors import ConfigurationError, RouteNotFound
from waypost.routing.route import Route
from waypost.routing.router import Router, normalize_url, parse_path, same_path, split_url


def _compiled(*routes: Route) -> Router:
    r = Router()
    for route in routes:
        r.add(route)
    r.compile()
    return r


class TestParsePath:
    def test_static(self) -> None:
        segments = parse_path("cars")
        assert len(segments) == 1
        assert segments[0].value == "cars"
        assert segments[0].is_param is False

    def test_multi_static(self) -> None:
        segments = parse_path("/garage/cars/")
        assert [s.value for s in segments] == ["garage", "cars"]

    def test_param(self) -> None:
        segments = parse_path("cars/{name}")
        assert segments[1].is_param is True
        assert segments[1].param_name == "name"

    def test_empty(self) -> None:
        assert parse_path("") == []
        assert parse_path("/") == []

    def test_rejects_angle_style_param(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            parse_path("cars/<name>")
        assert "{param}" in str(exc_info.value)
        assert "cars/<name>" in str(exc_info.value)

    def test_rejects_colon_style_param(self) -> None:
        with pytest.raises(ConfigurationError):
            parse_path("cars/:name")

    def test_rejects_invalid_param_name(self) -> None:
        with pytest.raises(ConfigurationError, match="Invalid parameter name"):
            parse_path("cars/{}")


class TestSplitUrl:
    def test_drops_query_and_fragment(self) -> None:
        assert split_url("/cars/tesla?tab=specs#top") == ["cars", "tesla"]

    def test_root(self) -> None:
        assert split_url("/") == []


class TestNormalizeUrl:
    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("", "/"),
            ("//", "/"),
            ("//cars//tesla/", "/cars/tesla"),
            ("/?tab=1#top", "/?tab=1"),
            ("cars?", "/cars"),
        ],
    )
    def test_canonical_form(self, url: str, expected: str) -> None:
        assert normalize_url(url) == expected

    def test_same_path_ignores_decoration(self) -> None:
        assert same_path("", "/")
        assert same_path("/?tab=1", "/")
        assert same_path("//cars/", "/cars#list")
        assert not same_path("/cars", "/")


class TestNestedRoutes:
    def test_parent_and_child_both_match(self) -> None:
        child = Route("{name}")
        parent = Route("cars", children=(child,))
        r = _compiled(parent)

        assert r.match("/cars").chain == (parent,)
        match = r.match("/cars/tesla")
        assert match.chain == (parent, child)
        assert match.leaf is child
        assert match.path_params == {"name": "tesla"}
        assert match.url == "/cars/tesla"

    def test_deep_nesting_collects_all_params(self) -> None:
        model = Route("{model}")
        make = Route("{make}", children=(model,))
        r = _compiled(Route("cars", children=(make,)))

        match = r.match("/cars/tesla/roadster")
        assert match.path_params == {"make": "tesla", "model": "roadster"}
        assert len(match.chain) == 3

    def test_root_route(self) -> None:
        home = Route("")
        r = _compiled(home)
        assert r.match("/").chain == (home,)

    def test_routes_lists_full_paths(self) -> None:
        r = _compiled(
            Route("", children=()),
            Route("cars", children=(Route("{name}"),)),
        )
        assert r.routes == ["/", "/cars", "/cars/{name}"]


class TestMatching:
    def test_static_beats_param(self) -> None:
        new = Route("new")
        detail = Route("{name}")
        r = _compiled(Route("cars", children=(new, detail)))

        assert r.match("/cars/new").leaf is new
        assert r.match("/cars/ford").leaf is detail

    def test_param_value_is_raw(self) -> None:
        r = _compiled(Route("cars", children=(Route("{name}"),)))
        match = r.match("/cars/Tesla%20S")
        assert match.path_params["name"] == "Tesla%20S"

    def test_query_string_ignored(self) -> None:
        r = _compiled(Route("cars"))
        assert r.match("/cars?sort=asc").url == "/cars?sort=asc"

    def test_no_match(self) -> None:
        r = _compiled(Route("cars"))
        with pytest.raises(RouteNotFound):
            r.match("/boats")

    def test_too_deep(self) -> None:
        r = _compiled(Route("cars", children=(Route("{name}"),)))
        with pytest.raises(RouteNotFound):
            r.match("/cars/tesla/extra")

    def test_path_params_read_only(self) -> None:
        r = _compiled(Route("cars", children=(Route("{name}"),)))
        match = r.match("/cars/tesla")
        with pytest.raises(TypeError):
            match.path_params["name"] = "ford"  # type: ignore[index]


class TestRegistration:
    def test_duplicate_path(self) -> None:
        r = Router()
        r.add(Route("cars"))
        with pytest.raises(ConfigurationError, match="Duplicate route"):
            r.add(Route("cars"))

    def test_conflicting_param_names(self) -> None:
        r = Router()
        r.add(Route("cars/{name}"))
        with pytest.raises(ConfigurationError, match="Conflicting parameter names"):
            r.add(Route("cars/{id}/edit"))

    def test_add_after_compile(self) -> None:
        r = Router()
        r.compile()
        with pytest.raises(ConfigurationError, match="after compilation"):
            r.add(Route("cars"))
