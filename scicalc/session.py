"""Calculator session: the state a keypad front end owns.

The evaluator is stateless; everything that changes between key presses
lives here instead:

    input: what the user has typed so far
    result: last displayed result ("" before any evaluation)
    result_final: True right after a successful "="

Typical flow:

    session = CalculatorSession()
    for key in ("2", "+", "3", "×", "4"):
        session.press(key)
    session.evaluate()          # "14", recorded in session.history
    session.press("+")          # continues from the result: "14+"
"""

from __future__ import annotations

from typing import Optional

from scicalc.evaluator import evaluate
from scicalc.history import History
from scicalc.models import HistoryEntry

ERROR_MARKER = "Error"

# Keys that continue from a final result instead of starting over.
CONTINUATION_KEYS = ("+", "-", "×", "÷", "^", "*", "/")


class CalculatorSession:
    """Input buffer, displayed result and history for one user."""

    def __init__(self, history: Optional[History] = None):
        self.history = history if history is not None else History()
        self.input = ""
        self.result = ""
        self.result_final = False

    def press(self, key: str) -> str:
        """Apply a key press and return the new input text."""
        if self.result_final:
            if key in CONTINUATION_KEYS:
                self.input = self.result + key
            else:
                self.input = key
            self.result_final = False
            self.result = ""
        else:
            self.input += key
        return self.input

    def delete(self) -> str:
        """Backspace.  Right after a result, this clears everything."""
        if self.result_final:
            self.clear()
        else:
            self.input = self.input[:-1]
        return self.input

    def clear(self) -> None:
        """All-clear: input and result, not history."""
        self.input = ""
        self.result = ""
        self.result_final = False

    def evaluate(self) -> Optional[str]:
        """Evaluate the current input.

        Returns the displayed result, or None if there was nothing to
        evaluate.  On error the input is kept for correction and nothing is
        added to the history.
        """
        if not self.input:
            return None

        outcome = evaluate(self.input)
        if not outcome.ok:
            self.result = ERROR_MARKER
            return self.result

        self.result = outcome.display
        self.history.record(self.input, self.result)
        self.result_final = True
        return self.result

    def recall(self, entry: HistoryEntry) -> str:
        """Load a history entry's result back into the input."""
        self.input = entry.result
        self.result = ""
        self.result_final = False
        return self.input
