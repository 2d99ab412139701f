"""Rejected moves. The board is never modified when one of these is raised."""
from typing import Optional

from .game_basics import Player


class IllegalMove(ValueError):
    def __init__(self, message: str, index: Optional[int] = None, player: Optional[Player] = None):
        super().__init__(message)
        self.index = index
        self.player = player


class OutOfRange(IllegalMove):
    pass


class CellOccupied(IllegalMove):
    pass


class NotCurrentTurn(IllegalMove):
    pass


class GameOver(IllegalMove):
    pass
