"""
Computer-vs-computer games for checking difficulty tiers against each other.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .controller import GameController, InProgress, Mode, Won
from .game_basics import Player
from .policy import Difficulty, choose_move, make_rng


@dataclass
class GameRecord:
    winner: Optional[Player]
    moves: List[Tuple[Player, int]]
    board: Tuple[int, ...]


@dataclass
class MatchSummary:
    x_difficulty: Difficulty
    o_difficulty: Difficulty
    x_wins: int = 0
    o_wins: int = 0
    draws: int = 0
    records: List[GameRecord] = field(default_factory=list)

    @property
    def games(self) -> int:
        return self.x_wins + self.o_wins + self.draws


def play_game(x_difficulty: Difficulty, o_difficulty: Difficulty, rng=None) -> GameRecord:
    if rng is None:
        rng = make_rng()
    ctl = GameController(mode=Mode.two_player(), rng=rng)
    tiers = {Player.X: x_difficulty, Player.O: o_difficulty}
    while True:
        status = ctl.current_status()
        if not isinstance(status, InProgress):
            break
        board = list(ctl.current_board())
        mv = choose_move(board, status.current, tiers[status.current], rng)
        ctl.apply_move(mv, status.current)
    winner = status.winner if isinstance(status, Won) else None
    return GameRecord(winner=winner, moves=ctl.history, board=ctl.current_board())


def run_matches(games: int, x_difficulty: Difficulty, o_difficulty: Difficulty, rng=None) -> MatchSummary:
    if games < 0:
        raise ValueError("games must be non-negative")
    if rng is None:
        rng = make_rng()
    summary = MatchSummary(x_difficulty=x_difficulty, o_difficulty=o_difficulty)
    for n in range(games):
        rec = play_game(x_difficulty, o_difficulty, rng)
        summary.records.append(rec)
        if rec.winner is Player.X:
            summary.x_wins += 1
        elif rec.winner is Player.O:
            summary.o_wins += 1
        else:
            summary.draws += 1
        logging.debug("game %d: winner=%s moves=%s", n, rec.winner, [i for _, i in rec.moves])
    logging.info(
        "x=%s o=%s games=%d x_wins=%d o_wins=%d draws=%d",
        x_difficulty.name.lower(),
        o_difficulty.name.lower(),
        summary.games,
        summary.x_wins,
        summary.o_wins,
        summary.draws,
    )
    return summary
