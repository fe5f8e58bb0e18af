# ecehero

A match-3 puzzle game for the terminal. Each level deals a 9×9 board of five
symbols (`X`, `&`, `+`, `O`, `#`). You swap two neighbouring pieces to line up three
or more of the same colour and fill the level's contract before your moves or your
time run out. The game text is in French.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Playing

```
ecehero [--save-file PATH] [--seed N]
```

- `--save-file PATH`: where progress is saved and loaded (default `sauvegarde.txt`
  in the current directory).
- `--seed N`: seed for the random board, so that a game can be replayed.

The menu has four entries. You can read the rules, start a new game, resume the
saved game or quit. Press the digit of the entry you want.

Controls during a level:

- `Z` `Q` `S` `D`: move the cursor up, left, down and right
- `Space`: select a piece, then select a direct neighbour to swap with it. A swap
  that creates no alignment is undone and costs no move.
- `k`: save the progress and return to the menu

There are three levels. The contracts ask for 60, 100 and 150 pieces, split evenly
across the five colours. You get 20, 15 and 12 moves, and 90 seconds per level. You
start with three lives. When the time or the moves run out you lose a life. After a
lost life you can retry at once or save and quit. After a won level you can go on to
the next one or save and quit. If you finish the third level you win the game. If
your lives reach zero the game is over.

### Special shapes

- 4 or 5 in a row: the run is cleared and a bonus piece is left in its first cell.
  A horizontal run leaves `=` and a vertical run leaves `H`.
- 3 bonus pieces in a row: they are cleared and you gain a life.
- 6 or more in a row: every piece of that colour is cleared.
- 3×3 block of one colour: the whole row and the whole column through its centre
  are cleared.
- 4×4 block of one colour: the block is cleared.
- A cleared `=` clears its whole row, and a cleared `H` clears its whole column.
  These clears can chain into further bonus pieces.

Bonus pieces count as the colour they were made from.

## Pattern lab

```
ecehero-lab [--seed N]
```

Choose one of six shapes: a horizontal line of 4, a vertical line of 4, a line of 6,
a 4×4 square, a five-wide cross, or three bonus pieces side by side. The lab puts the
shape on a random board. It then clears the matches and applies gravity, one key
press at a time, and shows the lives gained. Press `7` to quit.

## Library use

The board logic is in `ecehero.board`:

```python
import random
from ecehero.board import Board, Cursor

rng = random.Random(1)
board = Board.random(rng)
board.swap(Cursor(0, 0), Cursor(1, 0))
if board.has_alignment():
    result = board.clear_matches()   # ClearResult(collected, lives_gained)
    board.apply_gravity(rng)
print(board.render())
```

`Board.from_rows` builds a board from nine strings of nine cells. A cleared cell is
a space, and `Board.rows` returns the board in the same form. `same_color(a, b)` tells
whether two cells belong to the same colour family.

`ecehero.save` has `Progress(level, lives)`, `save_game(progress, path)` and
`load_game(path)`. Both functions raise `SaveError` when the file cannot be written,
read or parsed.

`ecehero.game` has `Contract`, `Level` and `moves_for_level`, which hold the level
rules without the terminal loop. `ecehero.menu` has `menu_text`, `rules_text`,
`show_menu` and `show_rules`.

## Limitations

- The game runs only in a terminal that understands ANSI escape codes. It has no
  graphical interface.
- The rules screen lists an `O` key to leave a level, but the game does nothing
  with it. Use `k` to save and leave.
- There is a single save slot, which is overwritten at every save.