"""Tests for waypost._internal.calls — calling sync and async hooks."""

import functools

from waypost._internal.calls import call_hook, hook_name
from waypost.navigation.resolver import GuardedResolver


class TestCallHook:
    async def test_sync_function(self) -> None:
        def double(x: int) -> int:
            return x * 2

        assert await call_hook(double, 21) == 42

    async def test_async_function(self) -> None:
        async def double(x: int) -> int:
            return x * 2

        assert await call_hook(double, 21) == 42

    async def test_async_callable_instance(self) -> None:
        class Source:
            async def __call__(self) -> list[str]:
                return ["tesla"]

        assert await call_hook(Source()) == ["tesla"]


class TestHookName:
    def test_local_function(self) -> None:
        def logged_in(ctx: object) -> bool:
            return True

        assert hook_name(logged_in) == "logged_in"

    def test_method_keeps_class(self) -> None:
        class Session:
            def check(self, ctx: object) -> bool:
                return True

        assert hook_name(Session().check) == "Session.check"

    def test_instance_uses_class_name(self) -> None:
        assert hook_name(GuardedResolver("cars")) == "GuardedResolver"

    def test_partial(self) -> None:
        assert hook_name(functools.partial(max, 1)) == "partial"
