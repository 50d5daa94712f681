"""Tests for waypost.navigation.resolver — resolve() and GuardedResolver."""

import logging

from waypost.navigation.context import ActivationContext
from waypost.navigation.outcome import RejectReason, Rejected, Resolved
from waypost.navigation.resolver import GuardedResolver, resolve
from waypost.navigation.snapshot import CollectionSnapshot
from waypost.routing.route import Route

CARS = CollectionSnapshot.of([{"name": "tesla"}, {"name": "arrinera"}])

_PARENT = Route("cars")
_CHILD = Route("{name}")


def _child_ctx(
    name: str | None = "tesla",
    parent_data: dict | None = None,
    *,
    parent_resolved: bool = True,
    with_parent: bool = True,
) -> ActivationContext:
    parent = None
    if with_parent:
        parent = ActivationContext(route=_PARENT, data=parent_data or {})
        if parent_resolved:
            parent = parent.with_data(parent_data or {})
    params = {} if name is None else {"name": name}
    return ActivationContext(route=_CHILD, path_params=params, parent=parent, depth=1)


class TestResolve:
    def test_scenario_match(self) -> None:
        assert resolve(CARS, "tesla") == Resolved({"name": "tesla"})

    def test_scenario_miss(self) -> None:
        outcome = resolve(CARS, "ford")
        assert isinstance(outcome, Rejected)
        assert outcome.reason is RejectReason.NOT_FOUND

    def test_returns_the_snapshot_item(self) -> None:
        snapshot = CollectionSnapshot.of([{"name": "tesla", "top_speed": 250}])
        outcome = resolve(snapshot, "tesla")
        assert isinstance(outcome, Resolved)
        assert outcome.item is snapshot.items[0]
        assert outcome.item == {"name": "tesla", "top_speed": 250}


    def test_duplicate_keys_pick_first(self) -> None:
        first, second = {"name": "x", "n": 1}, {"name": "x", "n": 2}
        snapshot = CollectionSnapshot.of([first, second])
        for _ in range(3):
            assert resolve(snapshot, "x").item == first

    def test_idempotent(self) -> None:
        before = CARS.items
        assert resolve(CARS, "ford") == resolve(CARS, "ford")
        assert resolve(CARS, "tesla") == resolve(CARS, "tesla")
        assert CARS.items == before

    def test_empty_snapshot(self) -> None:
        assert not resolve(CollectionSnapshot.of([]), "tesla")

    def test_case_sensitive(self) -> None:
        assert not resolve(CARS, "TESLA")


class TestGuardedResolver:
    def test_resolves_from_parent(self) -> None:
        outcome = GuardedResolver("cars")(_child_ctx("arrinera", {"cars": CARS}))
        assert outcome == Resolved({"name": "arrinera"})

    def test_unknown_key(self) -> None:
        outcome = GuardedResolver("cars")(_child_ctx("ford", {"cars": CARS}))
        assert outcome == Rejected(RejectReason.NOT_FOUND, "no item with key 'ford'")

    def test_custom_param(self) -> None:
        child = ActivationContext(
            route=Route("{slug}"),
            path_params={"slug": "tesla"},
            parent=ActivationContext(route=_PARENT).with_data({"cars": CARS}),
        )
        assert GuardedResolver("cars", param="slug")(child)

    def test_missing_param(self) -> None:
        outcome = GuardedResolver("cars")(_child_ctx(None, {"cars": CARS}))
        assert isinstance(outcome, Rejected)
        assert outcome.reason is RejectReason.NOT_FOUND

    def test_reads_grandparent(self) -> None:
        grandparent = ActivationContext(route=_PARENT).with_data({"cars": CARS})
        middle = ActivationContext(route=Route("list"), parent=grandparent).with_data({})
        child = ActivationContext(route=_CHILD, path_params={"name": "tesla"}, parent=middle)
        assert GuardedResolver("cars")(child)

    def test_repr(self) -> None:
        assert repr(GuardedResolver("cars")) == "GuardedResolver(parent_key='cars', param='name')"


class TestFailClosed:
    def test_no_parent(self, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="waypost.resolver"):
            outcome = GuardedResolver("cars")(_child_ctx("tesla", with_parent=False))
        assert outcome.reason is RejectReason.PREMATURE_INVOCATION
        assert "no ancestor" in caplog.text

    def test_parent_not_resolved(self, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="waypost.resolver"):
            outcome = GuardedResolver("cars")(
                _child_ctx("tesla", {"cars": CARS}, parent_resolved=False)
            )
        assert isinstance(outcome, Rejected)
        assert outcome.reason is RejectReason.PREMATURE_INVOCATION
        assert "ordering defect" in caplog.text

    def test_parent_key_absent(self) -> None:
        outcome = GuardedResolver("cars")(_child_ctx("tesla", {"boats": CARS}))
        assert outcome.reason is RejectReason.PREMATURE_INVOCATION

    def test_parent_value_not_a_snapshot(self, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="waypost.resolver"):
            outcome = GuardedResolver("cars")(
                _child_ctx("tesla", {"cars": [{"name": "tesla"}]})
            )
        assert outcome.reason is RejectReason.PREMATURE_INVOCATION
        assert "not a CollectionSnapshot" in caplog.text

    def test_resolve_without_snapshot(self, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="waypost.resolver"):
            outcome = resolve(None, "tesla")
        assert outcome == Rejected(RejectReason.PREMATURE_INVOCATION, "parent data unavailable")
        assert "instead of a CollectionSnapshot" in caplog.text

    def test_resolve_with_raw_list(self) -> None:
        outcome = resolve([{"name": "tesla"}], "tesla")  # type: ignore[arg-type]
        assert outcome.reason is RejectReason.PREMATURE_INVOCATION
