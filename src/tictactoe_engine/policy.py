"""
Difficulty-tiered move selection.

Weaker tiers sometimes play a uniformly random empty cell and otherwise defer
to the next stronger tier, which applies its own rule in turn:

    EASY   -- 60% random, else MEDIUM
    MEDIUM -- 30% random, else HARD
    HARD   -- exhaustive minimax (``solver.best_move``)

So an EASY miss can still land on a MEDIUM random pick.
"""
import logging
from enum import IntEnum
from typing import Dict, Optional, Sequence

import numpy as np

from .game_basics import Board, Player, empty_indices
from .solver import best_move


class Difficulty(IntEnum):
    EASY = 1
    MEDIUM = 2
    HARD = 3

    @classmethod
    def parse(cls, text: str) -> "Difficulty":
        try:
            return cls[text.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown difficulty: {text!r}") from None


RANDOM_MOVE_PROBABILITY: Dict[Difficulty, float] = {
    Difficulty.EASY: 0.6,
    Difficulty.MEDIUM: 0.3,
}


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    return np.random.default_rng(seed)


def _random_choice(rng, moves: Sequence[int]) -> int:
    return int(rng.choice(moves))


def choose_move(board: Board, player: Player, difficulty: Difficulty, rng=None) -> int:
    """Pick a cell for ``player``.

    ``rng`` is anything with ``random()`` and ``choice(seq)``; a fresh numpy
    generator is used when omitted.
    """
    moves = empty_indices(board)
    if not moves:
        raise ValueError("No empty cells left to play")
    if rng is None:
        rng = make_rng()

    tier = difficulty
    while tier < Difficulty.HARD:
        if rng.random() < RANDOM_MOVE_PROBABILITY[tier]:
            mv = _random_choice(rng, moves)
            logging.debug("%s plays random move %d (tier=%s)", player.name, mv, tier.name)
            return mv
        tier = Difficulty(tier + 1)

    mv = best_move(board, player)
    logging.debug("%s plays searched move %s (difficulty=%s)", player.name, mv, difficulty.name)
    return mv  # type: ignore[return-value]
