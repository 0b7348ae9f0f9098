"""Tests for wren.status — status-code handler resolution."""

from wren.status import StatusCodeHandler, StatusHandler, resolve_status_handler


class _Range:
    def __init__(self, low: int, high: int) -> None:
        self.low = low
        self.high = high

    def can_handle(self, status: int) -> bool:
        return self.low <= status <= self.high

    async def handle(self, ctx) -> None:
        return None


def _noop(ctx) -> None:
    return None


class TestResolveStatusHandler:
    def test_first_match_wins(self) -> None:
        first = StatusHandler.for_codes([404], _noop)
        second = StatusHandler.for_codes([404], _noop)

        assert resolve_status_handler([first, second], 404) is first
        assert resolve_status_handler([second, first], 404) is second

    def test_skips_non_matching(self) -> None:
        errors = _Range(500, 599)
        missing = StatusHandler.for_codes([404], _noop)

        assert resolve_status_handler([errors, missing], 404) is missing

    def test_none_when_nothing_matches(self) -> None:
        assert resolve_status_handler([StatusHandler.for_codes([404], _noop)], 200) is None

    def test_empty(self) -> None:
        assert resolve_status_handler([], 500) is None

    def test_range_handler(self) -> None:
        errors = _Range(500, 599)
        assert resolve_status_handler([errors], 503) is errors
        assert resolve_status_handler([errors], 499) is None


class TestStatusHandler:
    def test_for_codes(self) -> None:
        handler = StatusHandler.for_codes([401, 403], _noop)

        assert handler.can_handle(401)
        assert handler.can_handle(403)
        assert not handler.can_handle(404)

    def test_predicate(self) -> None:
        handler = StatusHandler(predicate=lambda code: code >= 400, func=_noop)

        assert handler.can_handle(418)
        assert not handler.can_handle(302)

    async def test_handle_sync_func(self) -> None:
        seen: list[object] = []
        handler = StatusHandler.for_codes([404], seen.append)

        await handler.handle("ctx")  # type: ignore[arg-type]
        assert seen == ["ctx"]

    async def test_handle_async_func(self) -> None:
        seen: list[object] = []

        async def record(ctx) -> None:
            seen.append(ctx)

        await StatusHandler.for_codes([404], record).handle("ctx")  # type: ignore[arg-type]
        assert seen == ["ctx"]

    def test_satisfies_protocol(self) -> None:
        assert isinstance(StatusHandler.for_codes([404], _noop), StatusCodeHandler)
        assert isinstance(_Range(400, 499), StatusCodeHandler)
