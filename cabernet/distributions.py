"""Weight initializers and random distributions used to fill tensors."""

from __future__ import annotations

import enum
import random
from abc import ABC, abstractmethod


class Initializer(enum.Enum):
    """Schemes for filling a tensor with initial random values."""

    HE = "he"


class Distribution(ABC):
    """A source of random real numbers."""

    @abstractmethod
    def generate(self) -> float:
        """Draw one value from the distribution."""


class Normal(Distribution):
    """Normal (Gaussian) distribution with a given mean and standard deviation."""

    def __init__(self, mean: float, standard_deviation: float, seed: int | None = None) -> None:
        if standard_deviation < 0:
            raise ValueError("standard deviation must not be negative")
        self.mean = float(mean)
        self.standard_deviation = float(standard_deviation)
        self._generator = random.Random(seed)

    def generate(self) -> float:
        return self._generator.gauss(self.mean, self.standard_deviation)