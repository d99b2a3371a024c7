"""CLI configuration read from the environment.

Only the command-line front end reads these; the evaluator takes no
configuration at all.

    SCICALC_HISTORY_FILE   history JSON path (default ~/.scicalc/history.json)
    SCICALC_HISTORY_LIMIT  number of entries kept (default 50)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from scicalc.history import DEFAULT_LIMIT

HISTORY_FILE_VAR = "SCICALC_HISTORY_FILE"
HISTORY_LIMIT_VAR = "SCICALC_HISTORY_LIMIT"


def history_path(env: Optional[dict[str, str]] = None) -> Path:
    """Where the CLI keeps its history."""
    env = os.environ if env is None else env
    override = env.get(HISTORY_FILE_VAR, "").strip()
    if override:
        return Path(override).expanduser()
    return Path.home() / ".scicalc" / "history.json"


def history_limit(env: Optional[dict[str, str]] = None) -> int:
    """History bound; unset, non-numeric or non-positive values give the default."""
    env = os.environ if env is None else env
    raw = env.get(HISTORY_LIMIT_VAR, "").strip()
    try:
        limit = int(raw)
    except ValueError:
        return DEFAULT_LIMIT
    return limit if limit > 0 else DEFAULT_LIMIT
