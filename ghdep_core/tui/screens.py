"""Modal screens for the ghdep TUI."""

from rich.markup import escape
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Label, Static

from ghdep_core.units import ReviewUnit


class DetailScreen(ModalScreen):
    """Modal popup with gh's rendering of a pull request."""

    BINDINGS = [
        Binding("escape", "dismiss", "Close"),
        Binding("q", "dismiss", "Close"),
    ]

    CSS = """
    DetailScreen {
        align: center middle;
    }
    #detail-container {
        width: 90%;
        height: 80%;
        background: $surface;
        border: solid $primary;
        padding: 1 2;
    }
    #detail-title {
        text-style: bold;
        margin-bottom: 1;
    }
    .detail-hint {
        height: 1;
        color: $text-muted;
    }
    """

    def __init__(self, unit: ReviewUnit, text: str):
        super().__init__()
        self.unit = unit
        self._text = text

    def compose(self) -> ComposeResult:
        with Vertical(id="detail-container"):
            yield Label(f"{escape(self.unit.repository)}#{self.unit.number}", id="detail-title")
            with VerticalScroll():
                yield Static(escape(self._text), id="detail-body")
            yield Label("[dim]Press [bold]Esc[/bold] to close[/]", classes="detail-hint")

    def action_dismiss(self) -> None:
        self.app.pop_screen()
