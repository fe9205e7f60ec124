"""Feature normalizers."""

from __future__ import annotations

import statistics
from abc import ABC, abstractmethod
from collections.abc import Sequence


class Normalizer(ABC):
    """Fits scaling parameters to a feature vector and applies them."""

    @abstractmethod
    def fit(self, features: Sequence[float]) -> None:
        """Learn the scaling parameters from ``features``."""

    @abstractmethod
    def transform(self, features: Sequence[float]) -> list[float]:
        """Scale ``features`` with the learned parameters."""

    def fit_transform(self, features: Sequence[float]) -> list[float]:
        self.fit(features)
        return self.transform(features)

    @abstractmethod
    def inverse_transform(self, features: Sequence[float]) -> list[float]:
        """Undo ``transform``."""


class Standard(Normalizer):
    """Standardises features to zero mean and unit standard deviation."""

    def __init__(self) -> None:
        self.mean: float | None = None
        self.standard_deviation: float | None = None

    def fit(self, features: Sequence[float]) -> None:
        values = [float(value) for value in features]
        if not values:
            raise ValueError("cannot fit an empty feature vector")
        deviation = statistics.pstdev(values)
        if deviation == 0:
            raise ValueError("cannot standardise features with zero deviation")
        self.mean = statistics.fmean(values)
        self.standard_deviation = deviation

    def _parameters(self) -> tuple[float, float]:
        if self.mean is None or self.standard_deviation is None:
            raise RuntimeError("normalizer has not been fitted")
        return self.mean, self.standard_deviation

    def transform(self, features: Sequence[float]) -> list[float]:
        mean, deviation = self._parameters()
        return [(value - mean) / deviation for value in features]

    def inverse_transform(self, features: Sequence[float]) -> list[float]:
        mean, deviation = self._parameters()
        return [value * deviation + mean for value in features]