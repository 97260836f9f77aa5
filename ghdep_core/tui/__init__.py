"""TUI package for ghdep."""

from textual.message import Message

from ghdep_core.signals import Signal


class OperationFinished(Message):
    """Posted from a worker thread when a background operation completes."""

    def __init__(self, signal: Signal) -> None:
        self.signal = signal
        super().__init__()
