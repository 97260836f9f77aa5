"""Background pull request operations.

Every Commander method returns a *command*: a zero-argument callable that
performs the operation when run (in a worker thread) and returns exactly one
completion signal.  Commands never raise; a failing gh call becomes a
``Failed`` signal so the event loop always hears back.
"""

from enum import Enum
from typing import Callable

from ghdep_core import gh_ops
from ghdep_core.paths import configure_logger
from ghdep_core.signals import ActionKind, Command, Completed, Failed, Signal
from ghdep_core.units import ReviewUnit

_log = configure_logger("ghdep.commander")


class MergeMethod(Enum):
    REBASE = "rebase"
    MERGE = "merge"
    SQUASH = "squash"
    DEPENDABOT = "dependabot"


def _copy_to_clipboard(text: str) -> None:
    import pyperclip
    pyperclip.copy(text)


class Commander:
    """Builds commands for each action kind."""

    def __init__(self, clipboard: Callable[[str], None] = _copy_to_clipboard):
        self._clipboard = clipboard

    def _command(self, unit: ReviewUnit, kind: ActionKind,
                 operation: Callable[[], str]) -> Command:
        def run() -> Signal:
            _log.info("%s %s", kind.value, unit.operation_key)
            try:
                message = operation()
            except Exception as e:
                _log.warning("%s %s failed: %s", kind.value, unit.operation_key, e)
                return Failed(unit, kind, str(e) or type(e).__name__)
            _log.debug("%s %s done", kind.value, unit.operation_key)
            return Completed(unit, kind, message)
        return run

    def merge(self, unit: ReviewUnit, method: MergeMethod) -> Command:
        def operation() -> str:
            gh_ops.approve_pr(unit.url)
            if method is MergeMethod.DEPENDABOT:
                gh_ops.comment_pr(unit.url, "@dependabot merge")
            else:
                gh_ops.merge_pr(unit.url, method.value)
            return f"Approved {unit.url}"
        return self._command(unit, ActionKind.MERGE, operation)

    def rebase(self, unit: ReviewUnit) -> Command:
        def operation() -> str:
            gh_ops.comment_pr(unit.url, "@dependabot rebase")
            return f"Rebased {unit.url}"
        return self._command(unit, ActionKind.REBASE, operation)

    def recreate(self, unit: ReviewUnit) -> Command:
        def operation() -> str:
            gh_ops.comment_pr(unit.url, "@dependabot recreate")
            return f"Recreated {unit.url}"
        return self._command(unit, ActionKind.RECREATE, operation)

    def close(self, unit: ReviewUnit) -> Command:
        def operation() -> str:
            gh_ops.close_pr(unit.url)
            return f"Closed {unit.url}"
        return self._command(unit, ActionKind.CLOSE, operation)

    def browse(self, unit: ReviewUnit) -> Command:
        def operation() -> str:
            gh_ops.browse_pr(unit.url)
            return f"Opened {unit.url}"
        return self._command(unit, ActionKind.BROWSE, operation)

    def view(self, unit: ReviewUnit) -> Command:
        return self._command(unit, ActionKind.VIEW, lambda: gh_ops.view_pr(unit.url))

    def copy_checkout(self, unit: ReviewUnit) -> Command:
        def operation() -> str:
            command = unit.checkout_command
            self._clipboard(command)
            return f"Copied: {command}"
        return self._command(unit, ActionKind.COPY, operation)
