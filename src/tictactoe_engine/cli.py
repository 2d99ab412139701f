from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

from .arena import run_matches
from .controller import Draw, GameController, GameStatus, Mode, Won
from .errors import IllegalMove
from .game_basics import (
    Player,
    current_player,
    deserialize_board,
    format_board,
    get_winner,
    is_full,
    is_valid_state,
)
from .policy import Difficulty, make_rng
from .settings import default_computer_player, default_difficulty, default_seed
from .solver import best_move, move_scores
from .tracking import log_match_summary, maybe_mlflow_run

DIFFICULTY_CHOICES = [d.name.lower() for d in Difficulty]


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ttt", description="Tic-tac-toe with a computer opponent")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the computer's random moves (default: $TTT_SEED, else unseeded)",
    )

    p_play = sub.add_parser(
        "play",
        help="Play in the console (index 0-8, n=new round, r=full reset, m MODE [X|O], d LEVEL, q=quit)",
    )
    p_play.add_argument(
        "--mode",
        choices=["two-player", "vs-computer"],
        default="vs-computer",
        help="Game mode (default: vs-computer)",
    )
    p_play.add_argument(
        "--computer",
        choices=["X", "O"],
        default=None,
        help="Side the computer plays in vs-computer mode (default: $TTT_COMPUTER_PLAYS, else O)",
    )
    p_play.add_argument(
        "--difficulty",
        choices=DIFFICULTY_CHOICES,
        default=None,
        help="Computer strength (default: $TTT_DIFFICULTY, else medium)",
    )

    p_best = sub.add_parser("best-move", help="Show the minimax move for a board (9 digits, 0=empty,1=X,2=O)")
    p_best.add_argument("--board", required=True, help="Board string, e.g., 100020000")
    p_best.add_argument("--player", choices=["X", "O"], default=None, help="Side to move (default: inferred)")

    p_sim = sub.add_parser("simulate", help="Play computer-vs-computer games and report the tally")
    p_sim.add_argument("--games", type=int, default=10, help="Number of games (default: 10)")
    p_sim.add_argument("--x-difficulty", choices=DIFFICULTY_CHOICES, default="medium")
    p_sim.add_argument("--o-difficulty", choices=DIFFICULTY_CHOICES, default="medium")
    p_sim.add_argument(
        "--tracking",
        choices=["none", "mlflow"],
        default="none",
        help="Experiment tracking backend",
    )
    p_sim.add_argument(
        "--log-dir",
        type=Path,
        default=Path("runs"),
        help="Directory for tracking logs (for mlflow local backend)",
    )

    return p


def status_text(ctl: GameController, status: GameStatus) -> str:
    if isinstance(status, Won):
        return f"PLAYER {status.winner.name} VICTORY"
    if isinstance(status, Draw):
        return "DRAW"
    if status.current == ctl.mode.computer_plays:
        return "COMPUTER PROCESSING..."
    return f"PLAYER {status.current.name} TURN"


def _show(ctl: GameController, out: TextIO) -> None:
    scores = ctl.scores()
    print(format_board(list(ctl.current_board())), file=out)
    print(status_text(ctl, ctl.current_status()), file=out)
    print(f"X: {scores.x_wins}  O: {scores.o_wins}", file=out)


def _parse_mode(args: list[str], current: Mode) -> Mode:
    if not args or args[0] not in ("two-player", "vs-computer") or len(args) > 2:
        raise ValueError("usage: m two-player | m vs-computer [X|O]")
    if args[0] == "two-player":
        if len(args) > 1:
            raise ValueError("two-player mode takes no side")
        return Mode.two_player()
    if len(args) == 2:
        return Mode.vs_computer(Player.parse(args[1]))
    return Mode.vs_computer(current.computer_plays or Player.O)


def play(ctl: GameController, inp: TextIO, out: TextIO) -> int:
    """Console loop.

    Commands: a cell index 0-8, ``n`` new round, ``r`` full reset,
    ``m two-player|vs-computer [X|O]`` switch mode (starts a new round),
    ``d easy|medium|hard`` change difficulty, ``q`` quit.
    """
    _show(ctl, out)
    for line in inp:
        parts = line.strip().lower().split()
        if not parts:
            continue
        cmd, args = parts[0], parts[1:]
        if cmd == "q":
            break
        if cmd == "n":
            ctl.reset_round()
        elif cmd == "r":
            ctl.full_reset()
        elif cmd == "m":
            try:
                mode = _parse_mode(args, ctl.mode)
            except ValueError as e:
                logging.error("%s", e)
                continue
            ctl.set_mode(mode)
            ctl.reset_round()
        elif cmd == "d":
            if len(args) != 1:
                logging.error("usage: d easy|medium|hard")
                continue
            try:
                ctl.set_difficulty(Difficulty.parse(args[0]))
            except ValueError as e:
                logging.error("%s", e)
                continue
            logging.info("difficulty=%s", ctl.difficulty.name.lower())
            continue
        else:
            try:
                index = int(cmd)
            except ValueError:
                logging.error("Unknown command: %r", line.strip())
                continue
            try:
                ctl.apply_human_move(index)
            except IllegalMove as e:
                logging.error("Illegal move: %s", e)
                continue
        _show(ctl, out)
    return 0


def _version() -> str:
    from importlib.metadata import PackageNotFoundError, version

    try:
        return version("tictactoe-engine")
    except PackageNotFoundError:
        return "unknown"


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if ns.verbose else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    if ns.version:
        print(_version())
        return 0

    seed: Optional[int] = ns.seed if ns.seed is not None else default_seed()

    if ns.cmd == "play":
        difficulty = Difficulty.parse(ns.difficulty) if ns.difficulty else default_difficulty()
        if ns.mode == "two-player":
            mode = Mode.two_player()
        else:
            computer = Player.parse(ns.computer) if ns.computer else default_computer_player()
            mode = Mode(computer)
        ctl = GameController(mode=mode, difficulty=difficulty, rng=make_rng(seed))
        return play(ctl, sys.stdin, sys.stdout)

    if ns.cmd == "best-move":
        try:
            board = deserialize_board(ns.board)
        except ValueError as e:
            logging.error("%s", e)
            return 2
        if not is_valid_state(board):
            logging.error("Board is not a valid reachable state.")
            return 2
        if get_winner(board) is not None or is_full(board):
            logging.error("Board is already finished.")
            return 2
        player = Player.parse(ns.player) if ns.player else current_player(board)
        logging.info(
            "player=%s move=%s scores=%s",
            player.name,
            best_move(board, player),
            move_scores(board, player),
        )
        return 0

    if ns.cmd == "simulate":
        if ns.games < 0:
            logging.error("--games must be non-negative: %s", ns.games)
            return 2
        x_diff = Difficulty.parse(ns.x_difficulty)
        o_diff = Difficulty.parse(ns.o_difficulty)
        with maybe_mlflow_run(ns.tracking == "mlflow", run_name="simulate", log_dir=ns.log_dir) as tracking:
            summary = run_matches(ns.games, x_diff, o_diff, make_rng(seed))
            if tracking:
                log_match_summary(summary, seed=seed)
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
