# relief_inventory/allocation/random_source.py

from typing import Optional, Protocol

import numpy as np


class RandomSource(Protocol):
    """
    Anything with a ``random()`` returning a float in [0, 1).
    numpy Generators and ``random.Random`` both qualify.
    """

    def random(self) -> float:
        ...


def default_random_source(seed: Optional[int] = None) -> RandomSource:
    return np.random.default_rng(seed)


def draw(rng: RandomSource) -> float:
    return float(rng.random())
