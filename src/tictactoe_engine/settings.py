"""Session defaults read from the environment.

Environment-first, falling back to the built-in defaults when a variable is
unset or cannot be parsed:

- ``TTT_DIFFICULTY``: easy | medium | hard (default: medium)
- ``TTT_COMPUTER_PLAYS``: X | O | none (default: O)
- ``TTT_SEED``: integer seed for the move-selection generator (default: unset)
"""

from __future__ import annotations

import logging
import os

from .controller import Mode
from .game_basics import Player
from .policy import Difficulty

DEFAULT_DIFFICULTY = Difficulty.MEDIUM
DEFAULT_COMPUTER_PLAYS: Player | None = Player.O


def default_difficulty() -> Difficulty:
    raw = os.getenv("TTT_DIFFICULTY")
    if not raw:
        return DEFAULT_DIFFICULTY
    try:
        return Difficulty.parse(raw)
    except ValueError:
        logging.warning("Ignoring TTT_DIFFICULTY=%r; using %s", raw, DEFAULT_DIFFICULTY.name.lower())
        return DEFAULT_DIFFICULTY


def default_computer_player() -> Player | None:
    raw = os.getenv("TTT_COMPUTER_PLAYS")
    if not raw:
        return DEFAULT_COMPUTER_PLAYS
    if raw.strip().lower() == "none":
        return None
    try:
        return Player.parse(raw)
    except ValueError:
        logging.warning("Ignoring TTT_COMPUTER_PLAYS=%r; using O", raw)
        return DEFAULT_COMPUTER_PLAYS


def default_mode() -> Mode:
    return Mode(default_computer_player())


def default_seed() -> int | None:
    raw = os.getenv("TTT_SEED")
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        logging.warning("Ignoring non-integer TTT_SEED=%r", raw)
        return None
