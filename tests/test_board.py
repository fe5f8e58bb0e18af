import random
import re

import pytest

from ecehero.board import (
    BONUS_COLUMN,
    BONUS_ROW,
    EMPTY,
    HEIGHT,
    SYMBOLS,
    WIDTH,
    Board,
    ClearResult,
    Cursor,
    same_color,
)

_PALETTE = "&+O#"


def base_rows():
    return ["".join(_PALETTE[(r + c) % 4] for c in range(WIDTH)) for r in range(HEIGHT)]


def board_with(cells):
    rows = [list(row) for row in base_rows()]
    for (r, c), ch in cells.items():
        rows[r][c] = ch
    return Board.from_rows(["".join(row) for row in rows])


def strip_ansi(text):
    return re.sub(r"\x1b\[[0-9;]*m", "", text)


@pytest.mark.parametrize(
    "a, b, expected",
    [
        ("X", "X", True),
        ("X", "1", True),
        ("X", "A", True),
        ("1", "A", True),
        ("&", "2", True),
        ("X", "&", False),
        ("1", "2", False),
        (" ", " ", False),
        ("X", " ", False),
        ("?", "?", False),
    ],
)
def test_same_color(a, b, expected):
    assert same_color(a, b) is expected


def test_from_rows_round_trip():
    rows = base_rows()
    assert Board.from_rows(rows).rows() == rows


def test_from_rows_rejects_wrong_height():
    with pytest.raises(ValueError):
        Board.from_rows(base_rows()[:-1])


def test_from_rows_rejects_wrong_width():
    rows = base_rows()
    rows[0] = rows[0][:-1]
    with pytest.raises(ValueError):
        Board.from_rows(rows)


def test_from_rows_rejects_unknown_cell():
    rows = base_rows()
    rows[2] = "?" + rows[2][1:]
    with pytest.raises(ValueError):
        Board.from_rows(rows)


def test_random_board_uses_basic_symbols():
    board = Board.random(random.Random(7))
    rows = board.rows()
    assert len(rows) == HEIGHT
    assert all(len(row) == WIDTH for row in rows)
    assert set("".join(rows)) <= set(SYMBOLS)


def test_random_matches_fill_with_same_seed():
    generated = Board.random(random.Random(3)).rows()
    filled = Board.from_rows([EMPTY * WIDTH] * HEIGHT)
    filled.fill(random.Random(3))
    assert generated == filled.rows()
    assert set("".join(generated)) <= set(SYMBOLS)


def test_fill_overwrites_everything():
    board = Board.from_rows([EMPTY * WIDTH] * HEIGHT)
    board.fill(random.Random(1))
    assert EMPTY not in "".join(board.rows())


def test_base_has_no_alignment():
    assert Board.from_rows(base_rows()).has_alignment() is False


def test_horizontal_alignment_detected():
    board = board_with({(0, 0): "X", (0, 1): "X", (0, 2): "X"})
    assert board.has_alignment() is True


def test_vertical_alignment_with_bonus_detected():
    board = board_with({(6, 8): "X", (7, 8): "1", (8, 8): "A"})
    assert board.has_alignment() is True


def test_clear_three_in_a_row():
    board = board_with({(0, 0): "X", (0, 1): "X", (0, 2): "X"})
    before = board.rows()
    result = board.clear_matches()
    assert result == ClearResult((3, 0, 0, 0, 0), 0)
    after = board.rows()
    assert after[0][:3] == EMPTY * 3
    assert after[0][3:] == before[0][3:]
    assert after[1:] == before[1:]


def test_line_of_four_horizontal_makes_row_bonus():
    board = board_with({(4, c): "X" for c in range(2, 6)})
    result = board.clear_matches()
    assert board[4, 2] == BONUS_ROW[0]
    assert board.rows()[4][3:6] == EMPTY * 3
    assert result.collected[0] == 3
    assert result.lives_gained == 0


def test_line_of_four_vertical_makes_column_bonus():
    board = board_with({(r, 4): "X" for r in range(2, 6)})
    result = board.clear_matches()
    assert board[2, 4] == BONUS_COLUMN[0]
    assert all(board[r, 4] == EMPTY for r in range(3, 6))
    assert result.collected[0] == 3


def test_line_of_six_clears_whole_color():
    cells = {(3, c): "X" for c in range(1, 7)}
    cells[(8, 8)] = "X"
    board = board_with(cells)
    result = board.clear_matches()
    assert "X" not in "".join(board.rows())
    assert result.collected[0] == len(cells)


def test_three_by_three_block_clears_row_and_column():
    cells = {(r, c): "X" for r in range(3, 6) for c in range(3, 6)}
    board = board_with(cells)
    result = board.clear_matches()
    rows = board.rows()
    assert rows[4] == EMPTY * WIDTH
    assert all(rows[r][4] == EMPTY for r in range(HEIGHT))
    assert all(board[r, c] == EMPTY for r, c in cells)
    assert result.collected[0] == len(cells)


def test_four_by_four_square_clears_lower_rows():
    cells = {(r, c): "X" for r in range(2, 6) for c in range(2, 6)}
    board = board_with(cells)
    board.clear_matches()
    rows = board.rows()
    for r in range(3, 6):
        assert rows[r] == EMPTY * WIDTH
    assert rows[2][2:6] == BONUS_COLUMN[0] * 4


def test_three_bonuses_give_a_life_and_activate():
    board = board_with({(4, 3): "1", (4, 4): "B", (4, 5): "3"})
    result = board.clear_matches()
    rows = board.rows()
    assert result.lives_gained == 1
    assert rows[4] == EMPTY * WIDTH
    assert all(rows[r][4] == EMPTY for r in range(HEIGHT))


def test_clear_on_quiet_board_changes_nothing():
    board = Board.from_rows(base_rows())
    result = board.clear_matches()
    assert result == ClearResult((0, 0, 0, 0, 0), 0)
    assert board.rows() == base_rows()


def test_collected_counts_match_emptied_cells():
    board = Board.random(random.Random(11))
    while not board.has_alignment():
        board.fill(random.Random(12))
    result = board.clear_matches()
    assert sum(result.collected) == "".join(board.rows()).count(EMPTY)


def test_gravity_keeps_order_and_fills_gaps():
    rows = base_rows()
    grid = [list(row) for row in rows]
    for r in (1, 4, 8):
        grid[r][0] = EMPTY
    board = Board.from_rows(["".join(row) for row in grid])
    survivors = [grid[r][0] for r in range(HEIGHT) if grid[r][0] != EMPTY]
    board.apply_gravity(random.Random(5))
    column = [board[r, 0] for r in range(HEIGHT)]
    assert column[3:] == survivors
    assert all(ch in SYMBOLS for ch in column[:3])
    assert EMPTY not in "".join(board.rows())
    assert [row[1:] for row in board.rows()] == [row[1:] for row in rows]


def test_gravity_on_full_board_is_identity():
    board = Board.from_rows(base_rows())
    board.apply_gravity(random.Random(0))
    assert board.rows() == base_rows()


def test_swap_and_swap_back():
    board = Board.from_rows(base_rows())
    a, b = Cursor(0, 0), Cursor(1, 0)
    first, second = board[0, 0], board[0, 1]
    board.swap(a, b)
    assert board[0, 0] == second and board[0, 1] == first
    board.swap(a, b)
    assert board.rows() == base_rows()


def test_render_layout():
    board = board_with({(0, 0): "1", (0, 1): "A"})
    lines = strip_ansi(board.render()).splitlines()
    border = "  " + "+---" * WIDTH + "+"
    assert len(lines) == 2 * HEIGHT + 1
    assert lines[0] == border
    assert lines[-1] == border
    assert lines[1].startswith("  | = | H |")
    assert lines[3].startswith("  | + |")


def test_render_colours_cells():
    board = board_with({(0, 0): "X"})
    assert "\x1b[31m X " in board.render()