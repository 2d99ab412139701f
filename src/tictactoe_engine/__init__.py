"""tictactoe_engine package.

Board rules, exhaustive minimax, difficulty-tiered move selection and the game
controller that owns a session. A console CLI lives in ``tictactoe_engine.cli``.

Convenience imports are exposed for common workflows.
"""

from .controller import Draw, GameController, InProgress, Mode, ScoreLedger, Won, new_session
from .errors import CellOccupied, GameOver, IllegalMove, NotCurrentTurn, OutOfRange
from .game_basics import Player, empty_indices, get_winner, is_full, new_board
from .policy import Difficulty, choose_move
from .solver import best_move, search

__all__ = [
    "new_session",
    "GameController",
    "Mode",
    "ScoreLedger",
    "InProgress",
    "Won",
    "Draw",
    "Player",
    "Difficulty",
    "IllegalMove",
    "OutOfRange",
    "CellOccupied",
    "NotCurrentTurn",
    "GameOver",
    "new_board",
    "is_full",
    "empty_indices",
    "get_winner",
    "search",
    "best_move",
    "choose_move",
]
