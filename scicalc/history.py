"""Calculation history: bounded log, JSON persistence, Rich rendering.

Entries are kept most-recent-first.  Once the bound is reached the oldest
entry is dropped silently.  Only successful evaluations ever get here; the
session decides that, not this module.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterator, Optional

from rich.console import Console
from rich.table import Table

from scicalc.models import HistoryEntry

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 50


class History:
    """Most-recent-first log of successful evaluations, capped at `limit`."""

    def __init__(self, limit: int = DEFAULT_LIMIT):
        if limit < 1:
            raise ValueError(f"history limit must be positive, got {limit}")
        self.limit = limit
        self._entries: list[HistoryEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(list(self._entries))

    @property
    def entries(self) -> list[HistoryEntry]:
        """Copy of the entries, newest first."""
        return list(self._entries)

    def latest(self) -> Optional[HistoryEntry]:
        return self._entries[0] if self._entries else None

    def add(self, entry: HistoryEntry) -> HistoryEntry:
        """Prepend an entry, evicting the oldest beyond the limit."""
        self._entries.insert(0, entry)
        del self._entries[self.limit:]
        return entry

    def record(self, expression: str, result: str) -> HistoryEntry:
        """Create and prepend an entry for a successful evaluation."""
        return self.add(HistoryEntry(expression=expression, result=result))

    def clear(self) -> None:
        self._entries.clear()

    def save(self, path: Path) -> None:
        """Write the history as a JSON list, newest first."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps([e.to_dict() for e in self._entries], indent=2),
            encoding="utf-8",
        )

    @classmethod
    def load(cls, path: Path, limit: int = DEFAULT_LIMIT) -> History:
        """Load a history file.

        A missing or unreadable file gives an empty history; malformed
        entries are skipped.  Anything past `limit` is dropped.
        """
        history = cls(limit=limit)
        if not path.exists():
            return history
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.debug("ignoring unreadable history file %s: %s", path, e)
            return history
        if not isinstance(raw, list):
            return history

        entries: list[HistoryEntry] = []
        for item in raw:
            try:
                entries.append(HistoryEntry.from_dict(item))
            except (KeyError, ValueError, TypeError) as e:
                logger.debug("skipping malformed history entry %r: %s", item, e)
        history._entries = entries[:limit]
        return history


def _fmt_time(entry: HistoryEntry) -> str:
    """Local wall-clock time of an entry."""
    return entry.timestamp.astimezone().strftime("%Y-%m-%d %H:%M:%S")


def render_history(history: History, console: Console) -> None:
    """Render a Rich table of history entries, newest first."""
    if not len(history):
        console.print("[yellow]No history yet.[/yellow]")
        return

    table = Table(title="History", show_header=True, header_style="bold")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Expression", min_width=20)
    table.add_column("Result", style="green", justify="right", min_width=10)
    table.add_column("Time", style="dim")

    for i, entry in enumerate(history, 1):
        table.add_row(str(i), entry.expression, entry.result, _fmt_time(entry))

    console.print()
    console.print(table)
    console.print()
