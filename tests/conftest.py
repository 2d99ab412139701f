from typing import List, Sequence

import pytest


class ScriptedRng:
    """Random source returning pre-set draws; running out raises IndexError."""

    def __init__(self, randoms: Sequence[float] = (), choices: Sequence[int] = ()):
        self.randoms: List[float] = list(randoms)
        self.choices: List[int] = list(choices)
        self.choice_args: List[List[int]] = []

    def random(self) -> float:
        return self.randoms.pop(0)

    def choice(self, seq):
        self.choice_args.append(list(seq))
        if self.choices:
            return self.choices.pop(0)
        return seq[0]


@pytest.fixture
def scripted_rng():
    return ScriptedRng
