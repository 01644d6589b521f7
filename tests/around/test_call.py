"""Tests for AroundCall — the context passed to around wrappers."""

from __future__ import annotations

import dataclasses

import pytest

from decorate.around.call import AroundCall
from decorate.kernel.exceptions import ConfigurationError, ResultUnavailableError


class Counter:
    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def add_original(self, a: int, b: int = 0, *, scale: int = 1) -> int:
        self.calls.append((a, b, scale))
        return (a + b) * scale

    def fail_original(self) -> None:
        raise LookupError("original failed")

    async def fetch_original(self, key: str) -> str:
        return f"value:{key}"


def _call(receiver: Counter, args: tuple = (1, 2), kwargs: dict | None = None) -> AroundCall:
    return AroundCall(receiver, "add", "add_original", args, kwargs or {})


class TestConstruction:
    def test_attributes(self) -> None:
        receiver = Counter()
        call = _call(receiver, (1, 2), {"scale": 3})

        assert call.receiver is receiver
        assert call.operation_name == "add"
        assert call.original_name == "add_original"
        assert call.args == (1, 2)
        assert call.kwargs == {"scale": 3}

    def test_list_args_become_tuple(self) -> None:
        call = AroundCall(Counter(), "add", "add_original", [5], {})
        assert call.args == (5,)

    def test_attributes_are_read_only(self) -> None:
        call = _call(Counter())
        with pytest.raises(dataclasses.FrozenInstanceError):
            call.operation_name = "other"  # type: ignore[misc]

    def test_original_name_must_differ(self) -> None:
        with pytest.raises(ConfigurationError) as info:
            AroundCall(Counter(), "add", "add", (), {})
        assert info.value.code == "AROUND_ALIAS_SELF"


class TestResult:
    def test_absent_before_transfer(self) -> None:
        call = _call(Counter())
        assert call.has_result is False
        with pytest.raises(ResultUnavailableError):
            call.result

    def test_repr_while_absent(self) -> None:
        assert "result=<absent>" in repr(_call(Counter()))

    def test_none_is_a_real_result(self) -> None:
        class Quiet:
            def ping_original(self) -> None:
                return None

        call = AroundCall(Quiet(), "ping", "ping_original", (), {})
        call.transfer()
        assert call.has_result is True
        assert call.result is None


class TestTransfer:
    def test_defaults_to_captured_arguments(self) -> None:
        receiver = Counter()
        call = _call(receiver, (1, 2), {"scale": 10})

        assert call.transfer() == 30
        assert call.result == 30
        assert receiver.calls == [(1, 2, 10)]

    def test_custom_args(self) -> None:
        receiver = Counter()
        call = _call(receiver, (1, 2))

        assert call.transfer((7, 3)) == 10
        assert call.result == 10
        assert call.args == (1, 2)
        assert receiver.calls == [(7, 3, 1)]

    def test_custom_kwargs_replace_captured(self) -> None:
        receiver = Counter()
        call = _call(receiver, (1, 1), {"scale": 5})

        assert call.transfer(kwargs={}) == 2
        assert call.transfer(kwargs={"scale": 2}) == 4

    def test_latest_transfer_wins(self) -> None:
        call = _call(Counter(), (1, 0))
        call.transfer()
        call.transfer((4, 0))
        assert call.result == 4

    def test_original_error_propagates_verbatim(self) -> None:
        call = AroundCall(Counter(), "fail", "fail_original", (), {})
        with pytest.raises(LookupError, match="original failed"):
            call.transfer()
        assert call.has_result is False

    @pytest.mark.asyncio
    async def test_transfer_async(self) -> None:
        call = AroundCall(Counter(), "fetch", "fetch_original", ("k",), {})
        assert await call.transfer_async() == "value:k"
        assert call.result == "value:k"
        assert await call.transfer_async(["other"]) == "value:other"
        assert call.result == "value:other"
