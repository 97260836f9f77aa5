"""Textual TUI App for reviewing Dependabot pull requests."""

from functools import partial

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, LoadingIndicator, OptionList
from textual.widgets.option_list import Option

from ghdep_core.commander import Commander
from ghdep_core.controller import KEY_BINDINGS, Action, ListController
from ghdep_core.paths import configure_logger
from ghdep_core.signals import ActionKind, Command, Completed
from ghdep_core.tui import OperationFinished
from ghdep_core.tui.screens import DetailScreen
from ghdep_core.tui.widgets import LogLine, StatusBar, unit_prompt
from ghdep_core.units import ReviewUnit

_log = configure_logger("ghdep.tui")


class DependabotApp(App):
    """Interactive list of pull requests with bulk merge/rebase/close actions."""

    TITLE = "ghdep — Dependabot PRs"

    CSS = """
    Screen {
        layout: vertical;
    }
    StatusBar {
        height: 1;
        background: $surface;
        color: $text;
        padding: 0 1;
        margin-top: 1;
    }
    #pr-list {
        height: 1fr;
        padding: 1 2;
        border: none;
    }
    #progress {
        height: 1;
        display: none;
    }
    LogLine {
        height: 1;
        background: $surface;
        color: $text-muted;
        padding: 0 1;
    }
    """

    # enter is a priority binding so the list never turns it into a selection
    BINDINGS = [Binding("q", "quit", "Quit")] + [
        Binding(b.key, f"dispatch('{b.action.value}')", b.description,
                priority=b.key == "enter")
        for b in KEY_BINDINGS
    ]

    def __init__(self, units: list[ReviewUnit], filter_label: str = "",
                 commander: Commander | None = None):
        super().__init__()
        self.controller = ListController(units, commander or Commander())
        self._filter_label = filter_label

    def compose(self) -> ComposeResult:
        yield StatusBar(id="status-bar")
        yield OptionList(id="pr-list")
        yield LoadingIndicator(id="progress")
        yield LogLine(id="log-line")
        yield Footer()

    def on_mount(self) -> None:
        _log.info("TUI mounted with %d units", len(self.controller.units))
        self.controller.resize(self.size.width, self.size.height)
        self._update_display()
        self._widget("#pr-list", OptionList).focus()

    def check_action(self, action: str, parameters: tuple) -> bool | None:
        """Disable list actions while a modal screen is open."""
        if action == "dispatch" and isinstance(self.screen, DetailScreen):
            return False
        return True

    # --- Display ---

    def _widget(self, selector, expect_type):
        """Query the list screen, even while a modal is on top of it."""
        return self.screen_stack[0].query_one(selector, expect_type)

    def _update_display(self) -> None:
        """Rebuild every widget from controller state."""
        controller = self.controller
        option_list = self._widget("#pr-list", OptionList)
        option_list.clear_options()
        option_list.add_options([
            Option(Text.from_markup(unit_prompt(unit, controller.is_pending(unit))),
                   id=unit.operation_key)
            for unit in controller.units
        ])
        if controller.units:
            option_list.highlighted = controller.index

        self._widget("#status-bar", StatusBar).update_status(
            self._filter_label, len(controller.units), busy=controller.busy)
        self._widget("#progress", LoadingIndicator).display = controller.busy
        self.log_message(controller.status)

    def log_message(self, msg: str) -> None:
        """Show a message in the log line."""
        self._widget("#log-line", LogLine).update(f" {msg}" if msg else "")

    # --- Event handlers ---

    def on_option_list_option_highlighted(self, event: OptionList.OptionHighlighted) -> None:
        self.controller.select(event.option_index)

    def on_resize(self, event: events.Resize) -> None:
        self.controller.resize(event.size.width, event.size.height)
        _log.debug("resize: list bounds %s", self.controller.bounds)

    def on_operation_finished(self, message: OperationFinished) -> None:
        signal = message.signal
        self._start(self.controller.handle_signal(signal))
        self._update_display()
        if isinstance(signal, Completed) and signal.kind is ActionKind.VIEW:
            self.push_screen(DetailScreen(signal.unit, signal.message))

    # --- Key actions ---

    def action_dispatch(self, action_name: str) -> None:
        option_list = self._widget("#pr-list", OptionList)
        if option_list.highlighted is not None:
            self.controller.select(option_list.highlighted)
        commands = self.controller.dispatch(Action(action_name))
        self._start(commands)
        self._update_display()

    # --- Background work ---

    def _start(self, commands: list[Command]) -> None:
        for command in commands:
            self.run_worker(partial(self._run_command, command),
                            thread=True, group="operations", exit_on_error=False)

    def _run_command(self, command: Command) -> None:
        """Worker thread body: run the command and hand its signal to the loop."""
        signal = command()
        self.post_message(OperationFinished(signal))
