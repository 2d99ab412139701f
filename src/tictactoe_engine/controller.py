"""
Game controller: the single owner of one game session.

A session holds the board, the game status, the score ledger, the mode and the
difficulty. Every board mutation goes through ``apply_move``; when it becomes
the computer's turn the controller picks and plays the computer's move before
returning, so callers always get control back on a human turn or a finished
game.
"""
from __future__ import annotations

import logging
import operator
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from .errors import CellOccupied, GameOver, NotCurrentTurn, OutOfRange
from .game_basics import BOARD_CELLS, EMPTY, Board, Player, get_winner, is_full, new_board
from .policy import Difficulty, choose_move, make_rng


@dataclass(frozen=True)
class InProgress:
    current: Player


@dataclass(frozen=True)
class Won:
    winner: Player


@dataclass(frozen=True)
class Draw:
    pass


GameStatus = Union[InProgress, Won, Draw]


@dataclass(frozen=True)
class Mode:
    """Two-player when ``computer_plays`` is None, otherwise versus the computer."""
    computer_plays: Optional[Player] = None

    @classmethod
    def two_player(cls) -> "Mode":
        return cls(None)

    @classmethod
    def vs_computer(cls, computer_plays: Player = Player.O) -> "Mode":
        return cls(computer_plays)

    @property
    def is_vs_computer(self) -> bool:
        return self.computer_plays is not None


@dataclass
class ScoreLedger:
    x_wins: int = 0
    o_wins: int = 0

    def record_win(self, player: Player) -> None:
        if player is Player.X:
            self.x_wins += 1
        else:
            self.o_wins += 1

    def reset(self) -> None:
        self.x_wins = 0
        self.o_wins = 0


def _cell_index(index, player: Optional[Player] = None) -> int:
    """Plain int for any integer-like index (numpy ints included) in 0-8."""
    if isinstance(index, bool):
        raise OutOfRange(f"Invalid position {index!r}. Must be 0-8.", index=index, player=player)
    try:
        value = operator.index(index)
    except TypeError:
        raise OutOfRange(f"Invalid position {index!r}. Must be 0-8.", index=index, player=player) from None
    if not 0 <= value < BOARD_CELLS:
        raise OutOfRange(f"Invalid position {index!r}. Must be 0-8.", index=index, player=player)
    return value


class GameController:
    def __init__(
        self,
        mode: Optional[Mode] = None,
        difficulty: Difficulty = Difficulty.MEDIUM,
        rng=None,
    ) -> None:
        self._mode = mode if mode is not None else Mode.two_player()
        self._pending_mode: Optional[Mode] = None
        self._difficulty = difficulty
        self._rng = rng if rng is not None else make_rng()
        self._ledger = ScoreLedger()
        self._board: Board = new_board()
        self._status: GameStatus = InProgress(Player.X)
        self._history: List[Tuple[Player, int]] = []
        self._play_computer_turns()

    # -- read access -----------------------------------------------------

    def current_board(self) -> Tuple[int, ...]:
        return tuple(self._board)

    def current_status(self) -> GameStatus:
        return self._status

    def scores(self) -> ScoreLedger:
        return ScoreLedger(self._ledger.x_wins, self._ledger.o_wins)

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def pending_mode(self) -> Optional[Mode]:
        """Mode queued by ``set_mode`` for the next round, if any."""
        return self._pending_mode

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    @property
    def history(self) -> List[Tuple[Player, int]]:
        return list(self._history)

    @property
    def is_over(self) -> bool:
        return not isinstance(self._status, InProgress)

    # -- moves -----------------------------------------------------------

    def apply_move(self, index: int, player: Player) -> GameStatus:
        """Play ``player`` at ``index`` and return the resulting status.

        Raises an ``IllegalMove`` subclass, leaving the session untouched, when
        the game is over, it is not ``player``'s turn, the index is outside
        0-8 or the cell is taken.
        """
        status = self._status
        if not isinstance(status, InProgress):
            raise GameOver("Game is already over", index=index, player=player)
        if player != status.current:
            raise NotCurrentTurn(
                f"It is {status.current.name}'s turn, not {player.name}'s", index=index, player=player
            )
        index = _cell_index(index, player)
        if self._board[index] != EMPTY:
            raise CellOccupied(f"Cell {index} is already occupied", index=index, player=player)

        self._place(index, player)
        self._play_computer_turns()
        return self._status

    def apply_human_move(self, index: int) -> GameStatus:
        status = self._status
        if not isinstance(status, InProgress):
            raise GameOver("Game is already over", index=index)
        if status.current == self._mode.computer_plays:
            raise NotCurrentTurn(f"It is the computer's turn ({status.current.name})", index=index)
        return self.apply_move(index, status.current)

    def _place(self, index: int, player: Player) -> None:
        self._board[index] = player
        self._history.append((player, index))
        winner = get_winner(self._board)
        if winner is not None:
            self._status = Won(winner)
            self._ledger.record_win(winner)
            logging.debug("%s wins with move %d", winner.name, index)
        elif is_full(self._board):
            self._status = Draw()
            logging.debug("Draw after move %d", index)
        else:
            self._status = InProgress(player.opponent)

    def _play_computer_turns(self) -> None:
        computer = self._mode.computer_plays
        while computer is not None and self._status == InProgress(computer):
            mv = choose_move(self._board, computer, self._difficulty, self._rng)
            logging.debug("Computer (%s) plays %d", computer.name, mv)
            self._place(mv, computer)

    # -- settings and resets ---------------------------------------------

    def set_difficulty(self, difficulty: Difficulty) -> None:
        """Takes effect from the computer's next move."""
        self._difficulty = difficulty

    def set_mode(self, mode: Mode) -> None:
        """Takes effect from the next ``reset_round`` or ``full_reset``.

        Until then ``mode`` keeps reporting the active mode and the queued one
        is visible through ``pending_mode``.
        """
        self._pending_mode = mode

    def reset_round(self) -> None:
        if self._pending_mode is not None:
            self._mode = self._pending_mode
            self._pending_mode = None
        self._board = new_board()
        self._status = InProgress(Player.X)
        self._history = []
        logging.debug("New round (mode=%s, difficulty=%s)", self._mode, self._difficulty.name)
        self._play_computer_turns()

    def full_reset(self) -> None:
        self._ledger.reset()
        self.reset_round()


def new_session(mode: Optional[Mode] = None, difficulty: Difficulty = Difficulty.MEDIUM, rng=None) -> GameController:
    return GameController(mode=mode, difficulty=difficulty, rng=rng)
