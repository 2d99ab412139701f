"""
Game basics: board representation, serialization, winner/draw checks, validity.

- A board is a list of 9 cells, row-major: 0=empty, 1=X, 2=O. X always starts.
- A "ply" is a half-move (one player's turn).
- Winning lines are scanned rows first, then columns, then diagonals; the
  first full line decides the winner.
"""
from enum import IntEnum
from typing import List, Optional, Tuple

EMPTY = 0
BOARD_CELLS = 9

WIN_PATTERNS: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)


class Player(IntEnum):
    X = 1
    O = 2

    @property
    def opponent(self) -> "Player":
        return Player.O if self is Player.X else Player.X

    @classmethod
    def parse(cls, text: str) -> "Player":
        try:
            return cls[text.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown player: {text!r}") from None


Board = List[int]


def new_board() -> Board:
    return [EMPTY] * BOARD_CELLS


def is_full(board: Board) -> bool:
    return EMPTY not in board


def empty_indices(board: Board) -> List[int]:
    return [i for i, v in enumerate(board) if v == EMPTY]


def winning_line(board: Board) -> Optional[Tuple[int, int, int]]:
    for pattern in WIN_PATTERNS:
        a, b, c = pattern
        v = board[a]
        if v != EMPTY and v == board[b] and v == board[c]:
            return pattern
    return None


def get_winner(board: Board) -> Optional[Player]:
    line = winning_line(board)
    if line is None:
        return None
    return Player(board[line[0]])


def is_draw(board: Board) -> bool:
    return is_full(board) and get_winner(board) is None


def serialize_board(board: Board) -> str:
    return ''.join(str(int(cell)) for cell in board)


def deserialize_board(board_str: str) -> Board:
    raw = board_str.strip()
    if len(raw) != BOARD_CELLS or any(c not in "012" for c in raw):
        raise ValueError("Invalid board string. Must be 9 chars of 0/1/2.")
    return [int(c) for c in raw]


def get_piece_counts(board: Board) -> Tuple[int, int]:
    return board.count(Player.X), board.count(Player.O)


def current_player(board: Board) -> Player:
    x, o = get_piece_counts(board)
    return Player.X if x == o else Player.O


def is_valid_state(board: Board) -> bool:
    """True if the board can arise from legal alternating play starting with X."""
    x_count, o_count = get_piece_counts(board)
    if not (x_count == o_count or x_count == o_count + 1):
        return False

    def count_wins(p: Player) -> int:
        return sum(1 for pat in WIN_PATTERNS if all(board[i] == p for i in pat))

    if count_wins(Player.X) > 0 and count_wins(Player.O) > 0:
        return False
    w = get_winner(board)
    if w is Player.X and x_count != o_count + 1:
        return False
    if w is Player.O and x_count != o_count:
        return False
    return True


def format_board(board: Board) -> str:
    """Three text rows, e.g. ``X|O|.``, for console output."""
    marks = {EMPTY: '.', Player.X: 'X', Player.O: 'O'}
    rows = []
    for r in range(3):
        rows.append('|'.join(marks[board[r * 3 + c]] for c in range(3)))
    return '\n'.join(rows)
