"""The 9x9 match-three board: filling, matching, clearing and gravity."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence

HEIGHT = 9
WIDTH = 9
EMPTY = " "

SYMBOLS = ("X", "&", "+", "O", "#")
BONUS_ROW = ("1", "2", "3", "4", "5")
BONUS_COLUMN = ("A", "B", "C", "D", "E")

_COLOR_INDEX = {
    ch: index
    for family in (SYMBOLS, BONUS_ROW, BONUS_COLUMN)
    for index, ch in enumerate(family)
}

_ANSI = ("\x1b[31m", "\x1b[36m", "\x1b[32m", "\x1b[33m", "\x1b[35m")
_ANSI_WHITE = "\x1b[37m"
_ANSI_RESET = "\x1b[0m"


def _color_of(ch: str) -> int | None:
    return _COLOR_INDEX.get(ch)


def _is_bonus(ch: str) -> bool:
    return ch in BONUS_ROW or ch in BONUS_COLUMN


def same_color(a: str, b: str) -> bool:
    """True when both cells are non-empty and share a colour family."""
    color = _color_of(a)
    return color is not None and color == _color_of(b)


@dataclass(frozen=True)
class Cursor:
    """A board position: ``x`` is the column, ``y`` the row."""

    x: int
    y: int


@dataclass(frozen=True)
class ClearResult:
    """What a clearing pass removed: items per colour and lives earned."""

    collected: tuple[int, int, int, int, int]
    lives_gained: int


class Board:
    """A grid of symbol characters, ``EMPTY`` marking a cleared cell."""

    def __init__(self, grid: list[list[str]]) -> None:
        self._grid = grid

    @classmethod
    def random(cls, rng: random.Random | None = None) -> "Board":
        board = cls([[SYMBOLS[0]] * WIDTH for _ in range(HEIGHT)])
        board.fill(rng)
        return board

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "Board":
        rows = list(rows)
        if len(rows) != HEIGHT:
            raise ValueError(f"expected {HEIGHT} rows, got {len(rows)}")
        grid = []
        for number, row in enumerate(rows):
            if len(row) != WIDTH:
                raise ValueError(
                    f"row {number} has {len(row)} cells, expected {WIDTH}"
                )
            for ch in row:
                if ch != EMPTY and ch not in _COLOR_INDEX:
                    raise ValueError(f"unknown cell {ch!r} in row {number}")
            grid.append(list(row))
        return cls(grid)

    def rows(self) -> list[str]:
        return ["".join(row) for row in self._grid]

    def __getitem__(self, position: tuple[int, int]) -> str:
        row, column = position
        return self._grid[row][column]

    def __iter__(self) -> Iterator[str]:
        return iter(self.rows())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid

    def __repr__(self) -> str:
        return f"Board.from_rows({self.rows()!r})"

    def fill(self, rng: random.Random | None = None) -> None:
        """Replace every cell with a random basic symbol."""
        rng = rng or random.Random()
        for row in self._grid:
            row[:] = [rng.choice(SYMBOLS) for _ in range(WIDTH)]

    def render(self) -> str:
        """Draw the board as coloured text, bonuses shown as '=' and 'H'."""
        border = "  " + "+---" * WIDTH + "+\n"
        parts = [border]
        for row in self._grid:
            parts.append("  ")
            for ch in row:
                color = _color_of(ch)
                parts.append("|")
                parts.append(_ANSI[color] if color is not None else _ANSI_WHITE)
                if ch in BONUS_ROW:
                    parts.append(" = ")
                elif ch in BONUS_COLUMN:
                    parts.append(" H ")
                else:
                    parts.append(f" {ch} ")
                parts.append(_ANSI_RESET)
            parts.append("|\n")
            parts.append(border)
        return "".join(parts)

    def has_alignment(self) -> bool:
        """True when three same-coloured cells line up anywhere."""
        g = self._grid
        for r in range(HEIGHT):
            for c in range(WIDTH):
                ref = g[r][c]
                if ref == EMPTY:
                    continue
                if c <= WIDTH - 3 and same_color(ref, g[r][c + 1]) and same_color(
                    ref, g[r][c + 2]
                ):
                    return True
                if r <= HEIGHT - 3 and same_color(ref, g[r + 1][c]) and same_color(
                    ref, g[r + 2][c]
                ):
                    return True
        return False

    def clear_matches(self) -> ClearResult:
        """Remove every pattern on the board and report what was collected."""
        g = self._grid
        marked = [[False] * WIDTH for _ in range(HEIGHT)]
        lives = 0

        for line in self._lines():
            for start in range(len(line) - 2):
                window = line[start:start + 3]
                if all(_is_bonus(g[r][c]) for r, c in window):
                    lives += 1
                    for r, c in window:
                        marked[r][c] = True

        for r in range(1, HEIGHT - 1):
            for c in range(1, WIDTH - 1):
                if self._block_matches(r - 1, c - 1, 3, g[r][c]):
                    for col in range(WIDTH):
                        marked[r][col] = True
                    for row in range(HEIGHT):
                        marked[row][c] = True

        for r in range(HEIGHT - 3):
            for c in range(WIDTH - 3):
                if self._block_matches(r, c, 4, g[r][c]):
                    for dr in range(4):
                        for dc in range(4):
                            marked[r + dr][c + dc] = True

        self._mark_runs(self._row_lines(), BONUS_ROW, marked)
        self._mark_runs(self._column_lines(), BONUS_COLUMN, marked)

        changed = True
        while changed:
            changed = False
            for r in range(HEIGHT):
                for c in range(WIDTH):
                    if not marked[r][c]:
                        continue
                    targets: Iterable[tuple[int, int]] = ()
                    if g[r][c] in BONUS_ROW:
                        targets = ((r, col) for col in range(WIDTH))
                    elif g[r][c] in BONUS_COLUMN:
                        targets = ((row, c) for row in range(HEIGHT))
                    for tr, tc in targets:
                        if not marked[tr][tc]:
                            marked[tr][tc] = True
                            changed = True

        collected = [0] * len(SYMBOLS)
        for r in range(HEIGHT):
            for c in range(WIDTH):
                if marked[r][c]:
                    color = _color_of(g[r][c])
                    if color is not None:
                        collected[color] += 1
                    g[r][c] = EMPTY
        return ClearResult(tuple(collected), lives)

    def apply_gravity(self, rng: random.Random | None = None) -> None:
        """Drop cells into the gaps below them and refill the top randomly."""
        rng = rng or random.Random()
        for c in range(WIDTH):
            kept = [self._grid[r][c] for r in range(HEIGHT) if self._grid[r][c] != EMPTY]
            fresh = [rng.choice(SYMBOLS) for _ in range(HEIGHT - len(kept))]
            fresh.reverse()
            for r, ch in enumerate(fresh + kept):
                self._grid[r][c] = ch

    def swap(self, first: Cursor, second: Cursor) -> None:
        g = self._grid
        g[first.y][first.x], g[second.y][second.x] = (
            g[second.y][second.x],
            g[first.y][first.x],
        )

    def _block_matches(self, top: int, left: int, size: int, ref: str) -> bool:
        if ref == EMPTY:
            return False
        return all(
            same_color(ref, self._grid[top + dr][left + dc])
            for dr in range(size)
            for dc in range(size)
        )

    @staticmethod
    def _row_lines() -> list[list[tuple[int, int]]]:
        return [[(r, c) for c in range(WIDTH)] for r in range(HEIGHT)]

    @staticmethod
    def _column_lines() -> list[list[tuple[int, int]]]:
        return [[(r, c) for r in range(HEIGHT)] for c in range(WIDTH)]

    def _lines(self) -> list[list[tuple[int, int]]]:
        return self._row_lines() + self._column_lines()

    def _mark_runs(
        self,
        lines: list[list[tuple[int, int]]],
        bonuses: tuple[str, ...],
        marked: list[list[bool]],
    ) -> None:
        g = self._grid
        for line in lines:
            pos = 0
            while pos <= len(line) - 3:
                r0, c0 = line[pos]
                ref = g[r0][c0]
                if ref == EMPTY:
                    pos += 1
                    continue
                count = 1
                while pos + count < len(line):
                    r, c = line[pos + count]
                    if not same_color(ref, g[r][c]):
                        break
                    count += 1
                if count < 3:
                    pos += 1
                    continue
                if count >= 6:
                    for r in range(HEIGHT):
                        for c in range(WIDTH):
                            if same_color(ref, g[r][c]):
                                marked[r][c] = True
                else:
                    for r, c in line[pos:pos + count]:
                        marked[r][c] = True
                    if count in (4, 5):
                        color = _color_of(ref)
                        if color is not None:
                            g[r0][c0] = bonuses[color]
                            marked[r0][c0] = False
                pos += count