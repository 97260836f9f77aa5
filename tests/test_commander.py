"""Tests for ghdep_core.commander — background operations and their signals."""

from unittest import mock

import pytest

from ghdep_core import commander as commander_mod
from ghdep_core.commander import Commander, MergeMethod
from ghdep_core.gh_ops import GhCommandError
from ghdep_core.signals import ActionKind, Completed, Failed


@pytest.fixture
def gh():
    """Replace every gh_ops call the commander makes."""
    with mock.patch.object(commander_mod, "gh_ops") as gh_ops:
        gh_ops.view_pr.return_value = "title:\tBump lodash"
        yield gh_ops


class TestMerge:
    @pytest.mark.parametrize("method", [MergeMethod.REBASE, MergeMethod.MERGE, MergeMethod.SQUASH])
    def test_approves_then_enables_auto_merge(self, gh, make_unit, method):
        unit = make_unit(1)
        signal = Commander().merge(unit, method)()

        gh.approve_pr.assert_called_once_with(unit.url)
        gh.merge_pr.assert_called_once_with(unit.url, method.value)
        gh.comment_pr.assert_not_called()
        assert signal == Completed(unit, ActionKind.MERGE, f"Approved {unit.url}")

    def test_dependabot_merge_comments(self, gh, make_unit):
        unit = make_unit(1)
        Commander().merge(unit, MergeMethod.DEPENDABOT)()

        gh.approve_pr.assert_called_once_with(unit.url)
        gh.comment_pr.assert_called_once_with(unit.url, "@dependabot merge")
        gh.merge_pr.assert_not_called()

    def test_approve_failure_skips_merge(self, gh, make_unit):
        gh.approve_pr.side_effect = GhCommandError(["gh"], 1, "not allowed")
        unit = make_unit(1)
        signal = Commander().merge(unit, MergeMethod.SQUASH)()

        gh.merge_pr.assert_not_called()
        assert signal == Failed(unit, ActionKind.MERGE, "not allowed")


class TestCommands:
    @pytest.mark.parametrize("name, kind, comment, message", [
        ("rebase", ActionKind.REBASE, "@dependabot rebase", "Rebased"),
        ("recreate", ActionKind.RECREATE, "@dependabot recreate", "Recreated"),
    ])
    def test_dependabot_comment_commands(self, gh, make_unit, name, kind, comment, message):
        unit = make_unit(3)
        signal = getattr(Commander(), name)(unit)()

        gh.comment_pr.assert_called_once_with(unit.url, comment)
        assert signal == Completed(unit, kind, f"{message} {unit.url}")

    def test_close(self, gh, make_unit):
        unit = make_unit(4)
        assert Commander().close(unit)() == Completed(unit, ActionKind.CLOSE, f"Closed {unit.url}")
        gh.close_pr.assert_called_once_with(unit.url)

    def test_browse(self, gh, make_unit):
        unit = make_unit(5)
        assert Commander().browse(unit)() == Completed(unit, ActionKind.BROWSE, f"Opened {unit.url}")
        gh.browse_pr.assert_called_once_with(unit.url)

    def test_view_carries_pr_text(self, gh, make_unit):
        unit = make_unit(6)
        assert Commander().view(unit)() == Completed(unit, ActionKind.VIEW, "title:\tBump lodash")

    def test_copy_checkout(self, make_unit):
        clipboard = mock.Mock()
        unit = make_unit(7, repository="acme/api")
        signal = Commander(clipboard=clipboard).copy_checkout(unit)()

        clipboard.assert_called_once_with("gh pr checkout 7 --repo acme/api")
        assert signal == Completed(unit, ActionKind.COPY, "Copied: gh pr checkout 7 --repo acme/api")

    def test_clipboard_error_becomes_failure(self, make_unit):
        clipboard = mock.Mock(side_effect=RuntimeError("no clipboard"))
        unit = make_unit(7)
        signal = Commander(clipboard=clipboard).copy_checkout(unit)()
        assert signal == Failed(unit, ActionKind.COPY, "no clipboard")


class TestCommandLaziness:
    def test_building_a_command_has_no_side_effect(self, gh, make_unit):
        Commander().close(make_unit(1))
        gh.close_pr.assert_not_called()

    def test_error_without_message_uses_type_name(self, gh, make_unit):
        gh.close_pr.side_effect = ValueError()
        signal = Commander().close(make_unit(1))()
        assert signal.error == "ValueError"
