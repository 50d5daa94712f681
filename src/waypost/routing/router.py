"""Compiled router with trie-based path matching.

Nested routes are flattened into full paths when added. Each terminal
node remembers the chain of routes (outermost parent first) that led to
it, so a match carries everything the activation pipeline needs.
"""

import re
from dataclasses import dataclass

from waypost.errors import ConfigurationError, RouteNotFound
from waypost.routing.route import PathSegment, Route, RouteMatch

_BAD_PARAM = re.compile(r"^(<[^>]*>|:\w+)$")
_PARAM_NAME = re.compile(r"^[A-Za-z_]\w*$")


def parse_path(path: str) -> list[PathSegment]:
    """Parse a route path string into segments.

    Examples::

        "cars"         -> [PathSegment("cars")]
        "cars/{name}"  -> [PathSegment("cars"), PathSegment("{name}", is_param=True, ...)]
        ""             -> []

    Raises ``ConfigurationError`` for ``<param>`` and ``:param`` styles
    and for placeholders that are not valid identifiers.
    """
    segments: list[PathSegment] = []
    for part in path.strip("/").split("/"):
        if not part:
            continue
        if _BAD_PARAM.match(part):
            msg = (
                f"Route path {path!r} uses {part!r}. "
                "Waypost expects {param} placeholders, not <param> or :param."
            )
            raise ConfigurationError(msg)
        if part.startswith("{") and part.endswith("}"):
            param_name = part[1:-1]
            if not _PARAM_NAME.match(param_name):
                msg = f"Invalid parameter name {param_name!r} in route path {path!r}"
                raise ConfigurationError(msg)
            segments.append(PathSegment(value=part, is_param=True, param_name=param_name))
        else:
            segments.append(PathSegment(value=part))
    return segments


def split_url(url: str) -> list[str]:
    """Split a URL into path parts, dropping query string and fragment."""
    path = url.split("#", 1)[0].split("?", 1)[0]
    return [p for p in path.strip("/").split("/") if p]


def normalize_url(url: str) -> str:
    """Canonical location for *url*: one leading slash, no empty segments.

    The query string is kept; the fragment is dropped::

        ""              -> "/"
        "//cars//tesla" -> "/cars/tesla"
        "/?tab=1#top"   -> "/?tab=1"
    """
    path = "/" + "/".join(split_url(url))
    query = url.split("#", 1)[0].partition("?")[2]
    return f"{path}?{query}" if query else path


def same_path(a: str, b: str) -> bool:
    """True when *a* and *b* name the same path, ignoring query and fragment."""
    return split_url(a) == split_url(b)


class _TrieNode:
    """A node in the route trie. Mutable during compilation only."""

    __slots__ = ("chain", "children", "param_child")

    def __init__(self) -> None:
        # Static segment children: "cars" -> node
        self.children: dict[str, _TrieNode] = {}
        # Single parameter child (only one param name per level)
        self.param_child: _ParamEdge | None = None
        # Route chain terminating here, root-first
        self.chain: tuple[Route, ...] | None = None


@dataclass(slots=True)
class _ParamEdge:
    """A parameter edge in the trie."""

    param_name: str
    node: _TrieNode


class Router:
    """Compiled router with trie-based path matching.

    Usage::

        router = Router()
        router.add(Route("cars", children=(Route("{name}"),)))
        router.compile()
        match = router.match("/cars/tesla")
        match.path_params  # {"name": "tesla"}
    """

    __slots__ = ("_compiled", "_paths", "_root")

    def __init__(self) -> None:
        self._root = _TrieNode()
        self._compiled = False
        self._paths: list[str] = []

    def add(self, route: Route) -> None:
        """Add a route and its children. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise ConfigurationError(msg)
        self._add(route, self._root, (), "")

    def _add(
        self,
        route: Route,
        node: _TrieNode,
        parents: tuple[Route, ...],
        prefix: str,
    ) -> None:
        for seg in parse_path(route.path):
            if seg.is_param:
                name = seg.param_name or ""
                if node.param_child is None:
                    node.param_child = _ParamEdge(param_name=name, node=_TrieNode())
                elif node.param_child.param_name != name:
                    msg = (
                        f"Conflicting parameter names {{{node.param_child.param_name}}} "
                        f"and {{{name}}} at the same level of {prefix or '/'!r}"
                    )
                    raise ConfigurationError(msg)
                node = node.param_child.node
            else:
                node = node.children.setdefault(seg.value, _TrieNode())

        full_path = "/" + "/".join(
            p for p in (prefix.strip("/"), route.path.strip("/")) if p
        )
        chain = (*parents, route)
        if node.chain is not None:
            msg = f"Duplicate route for {full_path!r}"
            raise ConfigurationError(msg)
        node.chain = chain
        self._paths.append(full_path)

        for child in route.children:
            self._add(child, node, chain, full_path)

    @property
    def routes(self) -> list[str]:
        """Return the full path of every registered route, in insertion order."""
        return list(self._paths)

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._compiled = True

    def match(self, url: str) -> RouteMatch:
        """Match a URL against compiled routes.

        Returns a ``RouteMatch`` on success.
        Raises ``RouteNotFound`` if no route matches the path.
        """
        parts = split_url(url)
        result = self._match_node(self._root, parts, 0, {})
        if result is None:
            raise RouteNotFound(url)
        chain, params = result
        return RouteMatch(chain=chain, path_params=params, url=url)

    def _match_node(
        self,
        node: _TrieNode,
        parts: list[str],
        index: int,
        params: dict[str, str],
    ) -> tuple[tuple[Route, ...], dict[str, str]] | None:
        """Recursively match path parts against the trie."""
        # All parts consumed — this node must terminate a route
        if index == len(parts):
            if node.chain is not None:
                return node.chain, params
            return None

        part = parts[index]

        # 1. Try static child first (exact match)
        if part in node.children:
            result = self._match_node(node.children[part], parts, index + 1, params)
            if result is not None:
                return result

        # 2. Try parameter child; the raw segment is kept as-is
        if node.param_child is not None:
            edge = node.param_child
            new_params = {**params, edge.param_name: part}
            return self._match_node(edge.node, parts, index + 1, new_params)

        return None
