"""Pattern lab: drop a known shape on the board and watch it resolve."""

from __future__ import annotations

import argparse
import random
import sys
from typing import Mapping, Optional, Sequence

from .board import SYMBOLS, Board
from .game import _Console

_CLEAR = "\x1b[2J\x1b[H"
_CYAN = "\x1b[36m"
_GREEN = "\x1b[32m"
_LIGHT_CYAN = "\x1b[96m"
_LIGHT_RED = "\x1b[91m"
_LIGHT_GREEN = "\x1b[92m"
_YELLOW = "\x1b[93m"
_WHITE = "\x1b[97m"


def _with_cells(board: Board, cells: Mapping[tuple[int, int], str]) -> Board:
    rows = [list(row) for row in board.rows()]
    for (r, c), ch in cells.items():
        rows[r][c] = ch
    return Board.from_rows(["".join(row) for row in rows])


def inject_three_bonuses(board: Board) -> Board:
    """Three bonus items side by side on row 4."""
    return _with_cells(board, {(4, 3): "1", (4, 4): "B", (4, 5): "3"})


def inject_line4_horizontal(board: Board) -> Board:
    """Four of the first symbol across row 4."""
    return _with_cells(board, {(4, c): SYMBOLS[0] for c in range(2, 6)})


def inject_line4_vertical(board: Board) -> Board:
    """Four of the second symbol down column 4."""
    return _with_cells(board, {(r, 4): SYMBOLS[1] for r in range(2, 6)})


def inject_line6(board: Board) -> Board:
    """Six of the third symbol across row 3."""
    return _with_cells(board, {(3, c): SYMBOLS[2] for c in range(1, 7)})


def inject_square4(board: Board) -> Board:
    """A 4x4 block of the fourth symbol."""
    return _with_cells(
        board, {(r, c): SYMBOLS[3] for r in range(2, 6) for c in range(2, 6)}
    )


def inject_cross5(board: Board) -> Board:
    """A plus sign five cells wide of the fifth symbol, centred at (4, 4)."""
    cells = {(4, c): SYMBOLS[4] for c in range(2, 7)}
    cells.update({(r, 4): SYMBOLS[4] for r in range(2, 7)})
    return _with_cells(board, cells)


_INJECTIONS = {
    1: inject_line4_horizontal,
    2: inject_line4_vertical,
    3: inject_line6,
    4: inject_square4,
    5: inject_cross5,
    6: inject_three_bonuses,
}


def _menu(lives: int) -> str:
    return "".join(
        [
            _CLEAR,
            _CYAN,
            "\n\t--- LABO DE TESTS : DESTRUCTION DE PATTERNS ---\n",
            _GREEN,
            f"\t          VIES ACTUELLES : {lives}\n\n",
            _LIGHT_CYAN,
            " 1. Ligne de 4 Horizontale.\n",
            " 2. Ligne de 4 Verticale.\n",
            " 3. Ligne de 6\n",
            " 4. Carre 4x4\n",
            " 5. Croix 5x5\n",
            " 6. Aligner 3 Bonus -> +1 Vie\n",
            _LIGHT_RED,
            " 7. Quitter\n\n",
            _WHITE,
            " Votre choix : ",
        ]
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the interactive pattern lab."""
    parser = argparse.ArgumentParser(description="Try board patterns one at a time.")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    args = parser.parse_args(argv)
    rng = random.Random(args.seed)
    out = sys.stdout
    lives = 3

    def show(board: Board, message: str) -> None:
        out.write(_CLEAR + board.render() + message)
        out.flush()

    with _Console(out) as console:
        while True:
            out.write(_menu(lives))
            out.flush()
            key = console.getch()
            choice = ord(key[0]) - ord("0") if key else -1
            if choice == 7:
                return 0
            inject = _INJECTIONS.get(choice)
            if inject is None:
                continue
            lives = 3
            board = inject(Board.random(rng))
            show(board, _YELLOW + "\n [ETAPE 1] Test injecte. Appuyez pour SUPPRIMER...")
            console.getch()
            lives += board.clear_matches().lives_gained
            show(
                board,
                _LIGHT_GREEN
                + f"\n [ETAPE 2] Items supprimes. Vies : {lives}. Appuyez pour GRAVITE...",
            )
            console.getch()
            board.apply_gravity(rng)
            show(board, "\n [ETAPE 3] Fini. Appuyez pour revenir au menu.")
            console.getch()


if __name__ == "__main__":
    sys.exit(main())