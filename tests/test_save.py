from pathlib import Path

import pytest

from ecehero.save import Progress, SaveError, load_game, save_game


def test_round_trip(tmp_path: Path):
    path = tmp_path / "save.txt"
    save_game(Progress(2, 1), path)
    assert load_game(path) == Progress(2, 1)


def test_file_format(tmp_path: Path):
    path = tmp_path / "save.txt"
    save_game(Progress(3, 5), path)
    assert path.read_text() == "3 5"


def test_overwrite_keeps_latest(tmp_path: Path):
    path = tmp_path / "save.txt"
    save_game(Progress(1, 3), path)
    save_game(Progress(2, 2), path)
    assert load_game(path) == Progress(2, 2)


def test_defaults():
    progress = Progress()
    assert (progress.level, progress.lives) == (1, 3)


def test_missing_file_raises(tmp_path: Path):
    with pytest.raises(SaveError):
        load_game(tmp_path / "absent.txt")


@pytest.mark.parametrize("content", ["", "abc", "12", "7 x"])
def test_unreadable_content_raises(tmp_path: Path, content: str):
    path = tmp_path / "save.txt"
    path.write_text(content)
    with pytest.raises(SaveError):
        load_game(path)


def test_trailing_text_is_ignored(tmp_path: Path):
    path = tmp_path / "save.txt"
    path.write_text("  3\n2 extra")
    assert load_game(path) == Progress(3, 2)


def test_write_into_directory_raises(tmp_path: Path):
    with pytest.raises(SaveError):
        save_game(Progress(), tmp_path)