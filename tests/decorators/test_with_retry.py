"""Tests for the retry decorator."""

from collections.abc import Awaitable, Callable

from pytest import raises

from app.decorators import with_retry


class Flaky:
    """Async callable that raises the queued outcomes in order, then returns."""

    def __init__(self, *outcomes: BaseException | str) -> None:
        self.outcomes = list(outcomes)
        self.calls: list[tuple[tuple, dict]] = []

    async def __call__(self, *args: object, **kwargs: object) -> str:
        self.calls.append((args, kwargs))
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


def no_wait(flaky: Flaky, **kwargs: object) -> Callable[..., Awaitable[str]]:
    @with_retry(base_delay=0, max_delay=0, **kwargs)
    async def call(*args: object, **inner: object) -> str:
        return await flaky(*args, **inner)

    return call


class TestWithRetry:
    """Test cases for with_retry."""

    async def test_success_first_time(self) -> None:
        flaky = Flaky("ok")
        assert await no_wait(flaky, max_retries=3)() == "ok"
        assert len(flaky.calls) == 1

    async def test_retries_until_success(self) -> None:
        flaky = Flaky(ConnectionError(), TimeoutError(), "ok")
        assert await no_wait(flaky, max_retries=3)() == "ok"
        assert len(flaky.calls) == 3

    async def test_reraises_last_error(self) -> None:
        flaky = Flaky(ConnectionError("still down"))
        with raises(ConnectionError, match="still down"):
            await no_wait(flaky, max_retries=2)()
        assert len(flaky.calls) == 2

    async def test_only_listed_exceptions_retried(self) -> None:
        flaky = Flaky(ValueError("bad"))
        with raises(ValueError):
            await no_wait(flaky, max_retries=3, exec_retry=KeyError)()
        assert len(flaky.calls) == 1

    async def test_arguments_passed_through(self) -> None:
        flaky = Flaky("ok")
        await no_wait(flaky)(1, key="value")
        assert flaky.calls == [((1,), {"key": "value"})]
