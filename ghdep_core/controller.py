"""List state machine for the review TUI.

ListController owns the visible units, the cursor, the status line and the
OperationTracker.  It is a reducer: every event (key, resize, completion
signal) updates state and returns the commands to start in the background.
It never runs a command itself and is only called from the event loop.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ghdep_core.commander import Commander, MergeMethod
from ghdep_core.paths import configure_logger
from ghdep_core.signals import TRACKED_KINDS, ActionKind, Command, Completed, Signal
from ghdep_core.tracker import OperationTracker
from ghdep_core.units import ReviewUnit

_log = configure_logger("ghdep.controller")

# Padding around the list (top/bottom rows, left/right columns)
LIST_PADDING = (1, 2)


class Action(Enum):
    MERGE_REBASE = "merge_rebase"
    MERGE_DEFAULT = "merge_default"
    MERGE_SQUASH = "merge_squash"
    MERGE_DEPENDABOT = "merge_dependabot"
    REBASE = "rebase"
    RECREATE = "recreate"
    CLOSE = "close"
    BROWSE = "browse"
    VIEW = "view"
    COPY_CHECKOUT = "copy_checkout"


@dataclass(frozen=True)
class KeyBinding:
    key: str
    action: Action
    description: str


KEY_BINDINGS = (
    KeyBinding("enter", Action.MERGE_REBASE, "Merge (rebase)"),
    KeyBinding("m", Action.MERGE_DEFAULT, "Merge (merge-commit)"),
    KeyBinding("M", Action.MERGE_SQUASH, "Merge (squash)"),
    KeyBinding("a", Action.MERGE_DEPENDABOT, "Merge (Dependabot)"),
    KeyBinding("r", Action.REBASE, "Rebase"),
    KeyBinding("R", Action.RECREATE, "Recreate"),
    KeyBinding("C", Action.CLOSE, "Close PR"),
    KeyBinding("o", Action.BROWSE, "Open in browser"),
    KeyBinding("v", Action.VIEW, "View details"),
    KeyBinding("c", Action.COPY_CHECKOUT, "Copy checkout"),
)

KEY_ACTIONS = {b.key: b.action for b in KEY_BINDINGS}

MERGE_METHODS = {
    Action.MERGE_REBASE: MergeMethod.REBASE,
    Action.MERGE_DEFAULT: MergeMethod.MERGE,
    Action.MERGE_SQUASH: MergeMethod.SQUASH,
    Action.MERGE_DEPENDABOT: MergeMethod.DEPENDABOT,
}


@dataclass(frozen=True)
class Intent:
    """An action bound to the unit it applies to."""

    action: Action
    unit: ReviewUnit


class ListController:
    """Visible list of review units and the operations running against them."""

    def __init__(self, units: list[ReviewUnit], commander: Commander,
                 tracker: Optional[OperationTracker] = None):
        self.units: list[ReviewUnit] = list(units)
        self.index = 0
        self.status = ""
        self.busy = False
        self.bounds = (0, 0)
        self.commander = commander
        self.tracker = tracker if tracker is not None else OperationTracker()

    # --- Selection ---

    @property
    def selected(self) -> Optional[ReviewUnit]:
        if 0 <= self.index < len(self.units):
            return self.units[self.index]
        return None

    def select(self, index: int) -> None:
        if self.units:
            self.index = max(0, min(index, len(self.units) - 1))
        else:
            self.index = 0

    def is_pending(self, unit: ReviewUnit) -> bool:
        return self.tracker.count(unit.operation_key) > 0

    def _remove_selected(self) -> None:
        del self.units[self.index]
        self.select(self.index)

    # --- Events ---

    def resolve(self, action: Action) -> Optional[Intent]:
        unit = self.selected
        if unit is None:
            return None
        return Intent(action, unit)

    def handle_key(self, key: str) -> list[Command]:
        action = KEY_ACTIONS.get(key)
        if action is None:
            return []
        return self.dispatch(action)

    def dispatch(self, action: Action) -> list[Command]:
        """Apply *action* to the selected unit and return the command to run."""
        intent = self.resolve(action)
        if intent is None:
            _log.debug("%s ignored: nothing selected", action.value)
            return []
        unit = intent.unit
        _log.info("dispatch %s on %s", action.value, unit.operation_key)

        if action in MERGE_METHODS:
            self.tracker.mark_in_progress(unit.operation_key)
            self._remove_selected()
            self.busy = True
            return [self.commander.merge(unit, MERGE_METHODS[action])]
        if action is Action.REBASE:
            self.tracker.mark_in_progress(unit.operation_key)
            self.busy = True
            return [self.commander.rebase(unit)]
        if action is Action.RECREATE:
            self.tracker.mark_in_progress(unit.operation_key)
            self.busy = True
            return [self.commander.recreate(unit)]
        if action is Action.CLOSE:
            self._remove_selected()
            return [self.commander.close(unit)]
        if action is Action.BROWSE:
            return [self.commander.browse(unit)]
        if action is Action.VIEW:
            return [self.commander.view(unit)]
        return [self.commander.copy_checkout(unit)]

    def handle_signal(self, signal: Signal) -> list[Command]:
        """Fold a completion signal back into list state."""
        if signal.kind in TRACKED_KINDS:
            self.tracker.mark_done(signal.unit.operation_key)
        if not self.tracker.has_work_in_progress():
            self.busy = False

        if isinstance(signal, Completed):
            _log.info("%s %s completed", signal.kind.value, signal.unit.operation_key)
            if signal.kind is not ActionKind.VIEW:
                self.status = signal.message
        else:
            _log.warning("%s %s failed: %s",
                         signal.kind.value, signal.unit.operation_key, signal.error)
            self.status = signal.error
        return []

    def resize(self, width: int, height: int) -> None:
        """Recompute the list area for a terminal of *width* x *height*."""
        rows, cols = LIST_PADDING
        self.bounds = (max(0, width - 2 * cols), max(0, height - 2 * rows))
