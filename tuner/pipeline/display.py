"""Display sinks - receive one status string per detection cycle."""

import logging
from collections import deque
from typing import Optional

from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from ..core.constants import UNKNOWN_STATUS

logger = logging.getLogger(__name__)


class ConsoleDisplay:
    """Shows the current status in a live-updating rich panel."""

    def __init__(self, console: Optional[Console] = None, title: str = "Tuner"):
        self.console = console or Console()
        self.title = title
        self.current = UNKNOWN_STATUS
        self._live: Optional[Live] = None

    def render(self) -> Panel:
        style = "dim" if self.current == UNKNOWN_STATUS else "bold green"
        return Panel(
            Text(self.current, style=style, justify="center"),
            title=self.title,
            width=32,
        )

    def __call__(self, status: str) -> None:
        self.current = status
        if self._live is not None:
            self._live.update(self.render())

    def __enter__(self) -> "ConsoleDisplay":
        self._live = Live(self.render(), console=self.console, refresh_per_second=8)
        self._live.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._live is not None:
            self._live.__exit__(exc_type, exc, tb)
            self._live = None


class LogDisplay:
    """Writes each status to the log and keeps a history of them."""

    def __init__(self, level: int = logging.INFO, history_size: int = 100):
        self.level = level
        self.history = deque(maxlen=history_size)

    @property
    def current(self) -> str:
        return self.history[-1] if self.history else UNKNOWN_STATUS

    def __call__(self, status: str) -> None:
        logger.log(self.level, "Status: %s", status)
        self.history.append(status)
