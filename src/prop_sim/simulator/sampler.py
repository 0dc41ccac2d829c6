"""Bernoulli win/loss outcome stream."""

from __future__ import annotations

import random
from typing import Iterator, Optional


class OutcomeSampler:
    """Draws i.i.d. wins with probability ``win_rate / 100``.

    ``rng`` only needs a ``random()`` method returning floats in [0, 1); pass
    a seeded ``random.Random`` for reproducible runs.
    """

    def __init__(self, win_rate: float, rng: Optional[random.Random] = None) -> None:
        self.win_rate = win_rate
        self.rng = rng if rng is not None else random.Random()

    def draw(self) -> bool:
        return self.rng.random() * 100 < self.win_rate

    def __iter__(self) -> Iterator[bool]:
        while True:
            yield self.draw()
