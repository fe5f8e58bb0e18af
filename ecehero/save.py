"""Saving and loading the player's progress to a small text file."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Union

DEFAULT_PATH = "sauvegarde.txt"

PathLike = Union[str, Path]

# Two whitespace-separated integers; the lookahead keeps "12" from being
# split into "1" and "2".
_RECORD = re.compile(r"\s*([+-]?\d+)(?!\d)\s*([+-]?\d+)")


class SaveError(Exception):
    """Raised when progress cannot be written or read back."""


@dataclass
class Progress:
    """Where the player stands: the current level and the lives left."""

    level: int = 1
    lives: int = 3


def save_game(progress: Progress, path: PathLike = DEFAULT_PATH) -> None:
    """Write ``progress`` as ``"<level> <lives>"``."""
    try:
        Path(path).write_text(f"{progress.level} {progress.lives}", encoding="ascii")
    except OSError as exc:
        raise SaveError(f"cannot write {path}: {exc}") from exc


def load_game(path: PathLike = DEFAULT_PATH) -> Progress:
    """Read back progress written by :func:`save_game`."""
    try:
        text = Path(path).read_text(encoding="ascii", errors="replace")
    except OSError as exc:
        raise SaveError(f"cannot read {path}: {exc}") from exc
    match = _RECORD.match(text)
    if match is None:
        raise SaveError(f"{path} does not hold a saved game")
    return Progress(int(match[1]), int(match[2]))