"""Data models for the scicalc calculator.

ResultKind enum, EvaluationResult, HistoryEntry: the typed structures that
flow through evaluator → session → history → CLI.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


class ResultKind(str, Enum):
    """Outcome of a single evaluation."""

    NUMBER = "number"
    ERROR = "error"


@dataclass(frozen=True)
class EvaluationResult:
    """Tagged evaluation outcome: a number or an error, never both.

    Build instances with EvaluationResult.number() / EvaluationResult.error().
    """

    kind: ResultKind
    value: Optional[float] = None
    text: str = ""
    reason: str = ""

    @classmethod
    def number(cls, value: float, text: str) -> EvaluationResult:
        """A successful result; `text` is the formatted value for display."""
        return cls(kind=ResultKind.NUMBER, value=value, text=text)

    @classmethod
    def error(cls, reason: str) -> EvaluationResult:
        return cls(kind=ResultKind.ERROR, reason=reason)

    @property
    def ok(self) -> bool:
        return self.kind == ResultKind.NUMBER

    @property
    def display(self) -> str:
        """Text shown to the user: formatted number or the "Error" marker."""
        return self.text if self.ok else "Error"


def _new_id() -> str:
    return uuid.uuid4().hex


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class HistoryEntry:
    """One successful evaluation, as remembered by the history log."""

    expression: str
    result: str
    id: str = field(default_factory=_new_id)
    timestamp: datetime = field(default_factory=_now)

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dict."""
        return {
            "id": self.id,
            "expression": self.expression,
            "result": self.result,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, d: dict) -> HistoryEntry:
        """Deserialize from a JSON dict.

        Raises:
            KeyError: a required field is missing.
            ValueError: the timestamp is not ISO-8601.
        """
        return cls(
            expression=d["expression"],
            result=d["result"],
            id=d.get("id") or _new_id(),
            timestamp=datetime.fromisoformat(d["timestamp"]),
        )
