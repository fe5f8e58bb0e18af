"""Level rules and the interactive game loop."""

from __future__ import annotations

import argparse
import random
import select
import sys
import time
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence, TextIO

from .board import SYMBOLS, WIDTH, HEIGHT, Board, ClearResult, Cursor
from .menu import show_menu, show_rules
from .save import DEFAULT_PATH, Progress, SaveError, load_game, save_game

try:
    import msvcrt
except ImportError:
    msvcrt = None

try:
    import termios
    import tty
except ImportError:
    termios = None
    tty = None

TIME_LIMIT = 90
LAST_LEVEL = 3
_LEAVE = 100

_CLEAR = "\x1b[2J\x1b[H"
_HOME = "\x1b[H"
_RESET = "\x1b[0m"
_WHITE = "\x1b[97m"
_CYAN = "\x1b[36m"
_YELLOW = "\x1b[93m"
_RED = "\x1b[31m"
_LIGHT_RED = "\x1b[91m"
_LIGHT_GREEN = "\x1b[92m"
_LIGHT_MAGENTA = "\x1b[95m"
_SELECTED = "\x1b[97;44m"
_HOVER = "\x1b[30;47m"


def _goto(x: int, y: int) -> str:
    return f"\x1b[{y + 1};{x + 1}H"


def moves_for_level(level: int) -> int:
    """Number of swaps allowed on a level."""
    return 20 if level == 1 else 15 if level == 2 else 12


@dataclass
class Contract:
    """How many items of each colour are still to be collected."""

    goals: list[int]
    total: int

    @classmethod
    def for_level(cls, level: int) -> "Contract":
        total = 60 if level == 1 else 100 if level == 2 else 150
        return cls([total // len(SYMBOLS)] * len(SYMBOLS), total)

    def collect(self, counts: Sequence[int]) -> None:
        """Subtract collected items, never going below zero."""
        self.goals = [max(0, goal - got) for goal, got in zip(self.goals, counts)]

    def remaining(self) -> int:
        return sum(self.goals)


@dataclass
class Level:
    """One level in progress: the board, its contract, moves and cursor."""

    number: int
    board: Optional[Board] = None
    rng: Optional[random.Random] = None
    on_step: Optional[Callable[[], None]] = None
    contract: Contract = field(init=False)
    moves: int = field(init=False)
    cursor: Cursor = field(init=False, default=Cursor(0, 0))
    selected: Optional[Cursor] = field(init=False, default=None)

    def __post_init__(self) -> None:
        if self.rng is None:
            self.rng = random.Random()
        if self.board is None:
            self.board = Board.random(self.rng)
        self.contract = Contract.for_level(self.number)
        self.moves = moves_for_level(self.number)

    def resolve(self) -> Optional[ClearResult]:
        """Clear any matches, credit the contract and let the board settle."""
        if not self.board.has_alignment():
            return None
        if self.on_step:
            self.on_step()
        result = self.board.clear_matches()
        self.contract.collect(result.collected)
        if self.on_step:
            self.on_step()
        self.board.apply_gravity(self.rng)
        return result

    def handle_key(self, key: str) -> bool:
        """Apply one key press; True when the player asks to save and quit."""
        x, y = self.cursor.x, self.cursor.y
        if key in ("z", "Z"):
            if y > 0:
                self.cursor = Cursor(x, y - 1)
        elif key in ("s", "S"):
            if y < HEIGHT - 1:
                self.cursor = Cursor(x, y + 1)
        elif key in ("q", "Q"):
            if x > 0:
                self.cursor = Cursor(x - 1, y)
        elif key in ("d", "D"):
            if x < WIDTH - 1:
                self.cursor = Cursor(x + 1, y)
        elif key == " ":
            if self.selected is None:
                self.selected = self.cursor
            else:
                first = self.selected
                if abs(first.x - x) + abs(first.y - y) == 1:
                    self.board.swap(first, self.cursor)
                    if self.board.has_alignment():
                        self.moves -= 1
                    else:
                        self.board.swap(first, self.cursor)
                self.selected = None
        elif key == "k":
            return True
        return False

    def render(self, lives: int, time_left: int) -> str:
        """The full level screen: board, objectives, counters and cursor."""
        parts = [_HOME, self.board.render(), _CYAN, _goto(45, 2)]
        parts.append(f"OBJECTIFS NIVEAU {self.number}:")
        for row, (symbol, goal) in enumerate(zip(SYMBOLS, self.contract.goals), start=4):
            parts.append(_goto(45, row))
            parts.append(f"{symbol} restant: {goal:2d}  ")
        parts.append(_LIGHT_RED if self.moves <= 5 else _YELLOW)
        parts.append(_goto(45, 10))
        parts.append(f"COUPS RESTANTS: {self.moves} ")
        parts.append(_goto(0, 20))
        parts.append(_WHITE)
        parts.append(
            f"\n NIVEAU: {self.number} | VIES: {lives} | COUPS: {self.moves}"
            f" | TEMPS: {time_left}s\n"
        )
        parts.append(_goto(self.cursor.x * 4 + 4, self.cursor.y * 2 + 1))
        parts.append(_SELECTED if self.selected == self.cursor else _HOVER)
        parts.append(self.board[self.cursor.y, self.cursor.x])
        parts.append(_RESET)
        return "".join(parts)


class _Console:
    """Unbuffered single-key input on the controlling terminal."""

    def __init__(self, out: TextIO) -> None:
        self._out = out
        self._saved = None

    def __enter__(self) -> "_Console":
        if msvcrt is None and termios is not None and sys.stdin.isatty():
            fd = sys.stdin.fileno()
            self._saved = termios.tcgetattr(fd)
            tty.setcbreak(fd)
        self._out.write("\x1b[?25l")
        self._out.flush()
        return self

    def __exit__(self, *exc_info: object) -> None:
        if self._saved is not None:
            termios.tcsetattr(sys.stdin.fileno(), termios.TCSADRAIN, self._saved)
            self._saved = None
        self._out.write(_RESET + "\x1b[?25h")
        self._out.flush()

    def getch(self) -> str:
        if msvcrt is not None:
            return msvcrt.getwch()
        return sys.stdin.read(1)

    def kbhit(self) -> bool:
        if msvcrt is not None:
            return bool(msvcrt.kbhit())
        ready, _, _ = select.select([sys.stdin], [], [], 0)
        return bool(ready)


class _Session:
    def __init__(
        self, console: _Console, out: TextIO, rng: random.Random, save_path: str
    ) -> None:
        self.console = console
        self.out = out
        self.rng = rng
        self.save_path = save_path
        self.progress = Progress(1, 3)

    def say(self, text: str, pause: float = 0.0) -> None:
        self.out.write(text)
        self.out.flush()
        if pause:
            time.sleep(pause)

    def save(self) -> None:
        try:
            save_game(self.progress, self.save_path)
        except SaveError:
            self.say("Erreur critique lors de la sauvegarde.\n")
        else:
            self.say("Partie sauvegardee avec succes !\n")

    def run(self) -> None:
        while True:
            choice = show_menu(self.console.getch, self.out)
            launch = False
            if choice == 1:
                show_rules(self.console.getch, self.out)
            elif choice == 2:
                self.progress = Progress(1, 3)
                launch = True
            elif choice == 3:
                try:
                    self.progress = load_game(self.save_path)
                except SaveError:
                    self.say(_LIGHT_RED + "\n Aucune sauvegarde trouvee !\n", 1.5)
                else:
                    self.say(
                        f"\n Sauvegarde chargee : Niveau {self.progress.level},"
                        f" {self.progress.lives} Vies.\n",
                        1.5,
                    )
                    launch = True
            elif choice == 4:
                self.say(_CLEAR + "\n Au revoir !\n")
                return
            if launch:
                self.play()

    def play(self) -> None:
        progress = self.progress
        total_victory = False
        while progress.level <= LAST_LEVEL and progress.lives > 0:
            total_victory = self.play_level()
        if total_victory:
            self.say(_CLEAR + _LIGHT_MAGENTA + "\n FELICITATIONS ! VOUS AVEZ SAUVE L'ECE ! \n", 3)
        elif progress.lives <= 0:
            self.say(_CLEAR + _RED + "\n GAME OVER - PLUS DE VIES \n", 3)

    def play_level(self) -> bool:
        progress = self.progress
        level = Level(progress.level, rng=self.rng)

        def show_step() -> None:
            self.say(_HOME + level.board.render(), 0.35)

        level.on_step = show_step
        self.say(_CLEAR)
        start = time.monotonic()
        while True:
            time_left = TIME_LIMIT - int(time.monotonic() - start)
            if time_left <= 0 or level.moves < 0:
                self.lose_life(time_left <= 0)
                return False

            result = level.resolve()
            if result is not None:
                progress.lives += result.lives_gained

            if level.contract.remaining() <= 0:
                self.say(
                    _CLEAR + _LIGHT_GREEN
                    + f"\n BRAVO ! NIVEAU {progress.level} REUSSI !\n",
                    2,
                )
                progress.level += 1
                if progress.level <= LAST_LEVEL:
                    self.say(_CLEAR + "Niveau suivant (1) ou Sauvegarder et Quitter (2) ? ")
                    if self.console.getch() == "2":
                        self.save()
                        progress.level = _LEAVE
                    return False
                return True

            self.say(level.render(progress.lives, time_left))
            if self.console.kbhit() and level.handle_key(self.console.getch()):
                self.save()
                progress.level = _LEAVE
                return False
            time.sleep(0.01)

    def lose_life(self, out_of_time: bool) -> None:
        progress = self.progress
        self.say(_CLEAR + _LIGHT_RED)
        self.say("\n TEMPS ECOULE ! \n" if out_of_time else "\n PLUS DE COUPS ! \n")
        progress.lives -= 1
        self.say(f" Vies restantes : {progress.lives}\n", 2)
        if progress.lives <= 0:
            progress.level = LAST_LEVEL + 1
            return
        self.say(_CLEAR + "Voulez-vous reessayer tout de suite (1) ou Sauvegarder et Quitter (2) ? ")
        decision = self.console.getch()
        self.say(_CLEAR)
        if decision == "2":
            self.save()
            progress.level = _LEAVE


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the game in the terminal."""
    parser = argparse.ArgumentParser(description="Match-three puzzle game.")
    parser.add_argument("--save-file", default=DEFAULT_PATH, help="where progress is kept")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    args = parser.parse_args(argv)
    out = sys.stdout
    with _Console(out) as console:
        _Session(console, out, random.Random(args.seed), args.save_file).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())