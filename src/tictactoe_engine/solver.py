"""
Exhaustive minimax search with depth-adjusted terminal scores.

Scoring, from the perspective of the player being optimized:
- a win scores ``10 - depth`` (faster wins are worth more);
- a loss scores ``depth - 10`` (slower losses are worth more);
- a full board without a winner scores 0.

The search walks every line of play to a terminal board. The board passed in
is used as scratch space: each hypothetical mark is undone before returning,
so callers see it unchanged.
"""
from typing import List, Optional

from .game_basics import Board, EMPTY, Player, empty_indices, get_winner, is_full

WIN_SCORE = 10


def search(board: Board, player_to_optimize: Player, ply_player: Player, depth: int) -> int:
    w = get_winner(board)
    if w is not None:
        if w == player_to_optimize:
            return WIN_SCORE - depth
        return depth - WIN_SCORE
    if is_full(board):
        return 0

    maximizing = ply_player == player_to_optimize
    best: Optional[int] = None
    for i in empty_indices(board):
        board[i] = ply_player
        score = search(board, player_to_optimize, ply_player.opponent, depth + 1)
        board[i] = EMPTY
        if best is None:
            best = score
        elif maximizing:
            best = max(best, score)
        else:
            best = min(best, score)
    return best  # type: ignore[return-value]


def move_scores(board: Board, player: Player) -> List[Optional[int]]:
    """Score of playing each cell for ``player``; None where the cell is taken."""
    work = list(board)
    scores: List[Optional[int]] = [None] * len(work)
    for i in empty_indices(work):
        work[i] = player
        scores[i] = search(work, player, player.opponent, 0)
        work[i] = EMPTY
    return scores


def best_move(board: Board, player: Player) -> Optional[int]:
    """Highest-scoring empty cell for ``player``; ties go to the lowest index.

    Returns None when the board is full.
    """
    best_score: Optional[int] = None
    best_idx: Optional[int] = None
    for i, score in enumerate(move_scores(board, player)):
        if score is None:
            continue
        # strict comparison keeps the earliest index on ties
        if best_score is None or score > best_score:
            best_score = score
            best_idx = i
    return best_idx
