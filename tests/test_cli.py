import os
import subprocess
import sys
from pathlib import Path

import pytest

SRC = Path(__file__).resolve().parents[1] / "src"


def _run_cli(args: list[str], cwd: Path, stdin: str = "") -> subprocess.CompletedProcess:
    exe = [sys.executable, "-m", "tictactoe_engine.cli"]
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(p for p in [str(SRC), env.get("PYTHONPATH", "")] if p)
    for var in ("TTT_DIFFICULTY", "TTT_COMPUTER_PLAYS", "TTT_SEED"):
        env.pop(var, None)
    return subprocess.run(exe + args, cwd=cwd, input=stdin, capture_output=True, text=True, env=env)


def test_cli_best_move(tmp_path: Path):
    # X to move and wins at 2
    r = _run_cli(["best-move", "--board", "110220000"], cwd=tmp_path)
    assert r.returncode == 0
    s = r.stdout + r.stderr
    assert "player=X" in s and "move=2" in s and "scores=" in s


def test_cli_best_move_explicit_player(tmp_path: Path):
    r = _run_cli(["best-move", "--board", "110220000", "--player", "O"], cwd=tmp_path)
    assert r.returncode == 0
    assert "move=5" in r.stdout + r.stderr


@pytest.mark.parametrize("bad", ["abc", "012345678", "0123456789", "12345678x"])
def test_cli_error_invalid_boards(tmp_path: Path, bad: str):
    r = _run_cli(["best-move", "--board", bad], cwd=tmp_path)
    assert r.returncode == 2


@pytest.mark.parametrize("bad", ["111222111", "111220000", "121122211"])
def test_cli_error_unreachable_or_finished(tmp_path: Path, bad: str):
    r = _run_cli(["best-move", "--board", bad], cwd=tmp_path)
    assert r.returncode == 2


def test_cli_two_player_session(tmp_path: Path):
    r = _run_cli(["play", "--mode", "two-player"], cwd=tmp_path, stdin="0\n3\n1\n4\n2\nq\n")
    assert r.returncode == 0
    assert "PLAYER X VICTORY" in r.stdout
    assert "X: 1  O: 0" in r.stdout
    assert r.stdout.splitlines()[-5:] == ["X|X|X", "O|O|.", ".|.|.", "PLAYER X VICTORY", "X: 1  O: 0"]


def test_cli_illegal_input_is_reported_and_ignored(tmp_path: Path):
    r = _run_cli(["play", "--mode", "two-player"], cwd=tmp_path, stdin="4\n4\n9\nhello\nq\n")
    assert r.returncode == 0
    assert r.stderr.count("Illegal move") == 2
    assert "Unknown command" in r.stderr
    assert "PLAYER O TURN" in r.stdout


def test_cli_rounds_and_resets(tmp_path: Path):
    stdin = "0\n3\n1\n4\n2\nn\nr\nq\n"
    r = _run_cli(["play", "--mode", "two-player"], cwd=tmp_path, stdin=stdin)
    assert r.returncode == 0
    out = r.stdout
    after_new_round = out.split("PLAYER X VICTORY", 1)[1]
    assert "X: 1  O: 0" in after_new_round
    assert out.rstrip().endswith("X: 0  O: 0")


def test_cli_vs_computer(tmp_path: Path):
    r = _run_cli(
        ["--seed", "3", "play", "--difficulty", "easy", "--computer", "O"],
        cwd=tmp_path,
        stdin="4\nq\n",
    )
    assert r.returncode == 0
    assert r.stdout.count("PLAYER X TURN") == 2


def test_cli_simulate(tmp_path: Path):
    r = _run_cli(
        ["--seed", "1", "simulate", "--games", "3", "--x-difficulty", "easy", "--o-difficulty", "easy"],
        cwd=tmp_path,
    )
    assert r.returncode == 0
    assert "games=3" in r.stderr


def test_cli_simulate_rejects_negative_games(tmp_path: Path):
    r = _run_cli(["simulate", "--games", "-2"], cwd=tmp_path)
    assert r.returncode == 2


def test_cli_version(tmp_path: Path):
    r = _run_cli(["--version"], cwd=tmp_path)
    assert r.returncode == 0
    assert r.stdout.strip()


def _last_board(stdout: str) -> str:
    return "".join(stdout.splitlines()[-5:-2])


def test_cli_switch_to_vs_computer(tmp_path: Path):
    r = _run_cli(
        ["--seed", "3", "play", "--mode", "two-player", "--difficulty", "easy"],
        cwd=tmp_path,
        stdin="m vs-computer o\n4\nq\n",
    )
    assert r.returncode == 0
    # initial board, the fresh round after the switch, then the computer's reply
    assert r.stdout.count("PLAYER X TURN") == 3
    board = _last_board(r.stdout)
    assert board.count("X") == 1 and board.count("O") == 1


def test_cli_switch_to_computer_as_x_opens(tmp_path: Path):
    r = _run_cli(
        ["--seed", "5", "play", "--mode", "two-player", "--difficulty", "easy"],
        cwd=tmp_path,
        stdin="m vs-computer x\nq\n",
    )
    assert r.returncode == 0
    board = _last_board(r.stdout)
    assert board.count("X") == 1 and board.count("O") == 0
    assert r.stdout.splitlines()[-2] == "PLAYER O TURN"


def test_cli_switch_to_two_player(tmp_path: Path):
    r = _run_cli(
        ["--seed", "3", "play", "--difficulty", "easy", "--computer", "O"],
        cwd=tmp_path,
        stdin="m two-player\n4\nq\n",
    )
    assert r.returncode == 0
    assert r.stdout.splitlines()[-5:-2] == [".|.|.", ".|X|.", ".|.|."]
    assert r.stdout.splitlines()[-2] == "PLAYER O TURN"


def test_cli_mode_switch_keeps_scores(tmp_path: Path):
    r = _run_cli(
        ["play", "--mode", "two-player"],
        cwd=tmp_path,
        stdin="0\n3\n1\n4\n2\nm two-player\nq\n",
    )
    assert r.returncode == 0
    assert r.stdout.splitlines()[-5:] == [".|.|.", ".|.|.", ".|.|.", "PLAYER X TURN", "X: 1  O: 0"]


@pytest.mark.parametrize("line", ["m", "m foo", "m two-player x", "m vs-computer q", "m vs-computer o x"])
def test_cli_bad_mode_command(tmp_path: Path, line: str):
    r = _run_cli(["play", "--mode", "two-player"], cwd=tmp_path, stdin=f"{line}\n4\nq\n")
    assert r.returncode == 0
    assert "[ERROR]" in r.stderr
    # still two-player: nobody answers the move
    assert r.stdout.splitlines()[-2] == "PLAYER O TURN"


def test_cli_set_difficulty(tmp_path: Path):
    r = _run_cli(["play", "--mode", "two-player"], cwd=tmp_path, stdin="d hard\nd nope\nd\nq\n")
    assert r.returncode == 0
    assert "difficulty=hard" in r.stderr
    assert "Unknown difficulty: 'nope'" in r.stderr
    assert "usage: d easy|medium|hard" in r.stderr
    # difficulty changes do not redraw the board
    assert r.stdout.count("PLAYER X TURN") == 1


def test_status_text_for_each_status():
    from tictactoe_engine.cli import status_text
    from tictactoe_engine.controller import Draw, GameController, InProgress, Mode, Won
    from tictactoe_engine.game_basics import Player

    ctl = GameController(Mode.two_player())
    assert status_text(ctl, Won(Player.O)) == "PLAYER O VICTORY"
    assert status_text(ctl, Draw()) == "DRAW"
    assert status_text(ctl, InProgress(Player.X)) == "PLAYER X TURN"
    vs = GameController(Mode.vs_computer(Player.O))
    assert status_text(vs, InProgress(Player.O)) == "COMPUTER PROCESSING..."
