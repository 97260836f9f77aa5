"""Pilot tests for the ghdep TUI app."""

import asyncio

import pytest

from ghdep_core.signals import ActionKind, Completed, Failed
from ghdep_core.tui.app import DependabotApp
from ghdep_core.tui.screens import DetailScreen


def _run_async(coro):
    """Run an async coroutine in a fresh event loop (safe across tests)."""
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


class FakeCommander:
    """Commander stand-in whose commands finish instantly."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls: list[tuple[str, str]] = []

    def _command(self, name, kind, unit, message):
        self.calls.append((name, unit.number))
        if self.fail:
            return lambda: Failed(unit, kind, f"{name} failed")
        return lambda: Completed(unit, kind, message)

    def merge(self, unit, method):
        return self._command(f"merge-{method.value}", ActionKind.MERGE, unit, f"Approved {unit.url}")

    def rebase(self, unit):
        return self._command("rebase", ActionKind.REBASE, unit, f"Rebased {unit.url}")

    def recreate(self, unit):
        return self._command("recreate", ActionKind.RECREATE, unit, f"Recreated {unit.url}")

    def close(self, unit):
        return self._command("close", ActionKind.CLOSE, unit, f"Closed {unit.url}")

    def browse(self, unit):
        return self._command("browse", ActionKind.BROWSE, unit, f"Opened {unit.url}")

    def view(self, unit):
        return self._command("view", ActionKind.VIEW, unit, "title:\tBump lodash")

    def copy_checkout(self, unit):
        return self._command("copy", ActionKind.COPY, unit, "Copied")


async def _settle(app, pilot):
    await pilot.pause()
    await app.workers.wait_for_complete()
    await pilot.pause()


@pytest.fixture
def units(make_unit):
    return [make_unit(1), make_unit(2), make_unit(3)]


class TestDependabotApp:
    def test_lists_all_units(self, units):
        async def scenario():
            app = DependabotApp(units, "org:acme", commander=FakeCommander())
            async with app.run_test() as pilot:
                await pilot.pause()
                option_list = app.query_one("#pr-list")
                assert option_list.option_count == 3
                assert option_list.highlighted == 0
        _run_async(scenario())

    def test_enter_merges_selected_unit(self, units):
        async def scenario():
            commander = FakeCommander()
            app = DependabotApp(units, "org:acme", commander=commander)
            async with app.run_test() as pilot:
                await pilot.pause()
                await pilot.press("down")
                await pilot.press("enter")
                await _settle(app, pilot)

                assert commander.calls == [("merge-rebase", "2")]
                assert app.query_one("#pr-list").option_count == 2
                assert [u.number for u in app.controller.units] == ["1", "3"]
                assert app.controller.status == f"Approved {units[1].url}"
                assert not app.controller.tracker.has_work_in_progress()
                assert app.controller.busy is False
        _run_async(scenario())

    def test_failed_rebase_reports_error(self, units):
        async def scenario():
            app = DependabotApp(units, "org:acme", commander=FakeCommander(fail=True))
            async with app.run_test() as pilot:
                await pilot.pause()
                await pilot.press("r")
                await _settle(app, pilot)

                assert app.controller.status == "rebase failed"
                assert len(app.controller.units) == 3
                assert app.controller.tracker.snapshot() == {}
        _run_async(scenario())

    def test_close_removes_unit(self, units):
        async def scenario():
            commander = FakeCommander()
            app = DependabotApp(units, "org:acme", commander=commander)
            async with app.run_test() as pilot:
                await pilot.pause()
                await pilot.press("C")
                await _settle(app, pilot)

                assert commander.calls == [("close", "1")]
                assert app.query_one("#pr-list").option_count == 2
                assert app.controller.status == f"Closed {units[0].url}"
        _run_async(scenario())

    def test_view_opens_detail_screen_and_blocks_actions(self, units):
        async def scenario():
            commander = FakeCommander()
            app = DependabotApp(units, "org:acme", commander=commander)
            async with app.run_test() as pilot:
                await pilot.pause()
                await pilot.press("v")
                await _settle(app, pilot)
                assert isinstance(app.screen, DetailScreen)

                await pilot.press("enter")
                await _settle(app, pilot)
                assert commander.calls == [("view", "1")]

                await pilot.press("escape")
                await pilot.pause()
                assert not isinstance(app.screen, DetailScreen)
                assert len(app.controller.units) == 3
        _run_async(scenario())

    def test_empty_list_ignores_actions(self):
        async def scenario():
            commander = FakeCommander()
            app = DependabotApp([], "org:acme", commander=commander)
            async with app.run_test() as pilot:
                await pilot.pause()
                await pilot.press("enter")
                await pilot.press("o")
                await _settle(app, pilot)
                assert commander.calls == []
        _run_async(scenario())
