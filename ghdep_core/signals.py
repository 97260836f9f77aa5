"""Completion signals produced by background operations."""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Union

from ghdep_core.units import ReviewUnit


class ActionKind(Enum):
    MERGE = "merge"
    REBASE = "rebase"
    RECREATE = "recreate"
    CLOSE = "close"
    BROWSE = "browse"
    VIEW = "view"
    COPY = "copy"


# Kinds that count against the OperationTracker while running
TRACKED_KINDS = frozenset({ActionKind.MERGE, ActionKind.REBASE, ActionKind.RECREATE})


@dataclass(frozen=True)
class Completed:
    unit: ReviewUnit
    kind: ActionKind
    message: str


@dataclass(frozen=True)
class Failed:
    unit: ReviewUnit
    kind: ActionKind
    error: str


Signal = Union[Completed, Failed]

# A background operation: runs the side effect and reports how it went
Command = Callable[[], Signal]
