"""Optimizers that update parameter tensors from their gradients."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

import numpy as np

from .tensor import Tensor


class Optimizer(ABC):
    """Holds a list of parameters and updates each of them on ``step``."""

    def __init__(self) -> None:
        self._parameters: list[Tensor] = []

    @property
    def parameters(self) -> tuple[Tensor, ...]:
        return tuple(self._parameters)

    def add_parameter(self, parameter: Tensor | Iterable[Tensor]) -> None:
        """Register one parameter tensor or an iterable of them."""
        if isinstance(parameter, Tensor):
            self._parameters.append(parameter)
        else:
            self._parameters.extend(parameter)

    def step(self) -> None:
        for parameter in self._parameters:
            self.update(parameter)

    @abstractmethod
    def update(self, parameter: Tensor) -> None:
        """Update a single parameter in place."""


class NoOptimization(Optimizer):
    """An optimizer that leaves every parameter unchanged."""

    def update(self, parameter: Tensor) -> None:
        return None


class SGD(Optimizer):
    """Plain stochastic gradient descent; gradients are zeroed after use."""

    def __init__(self, learning_rate: float) -> None:
        super().__init__()
        self.learning_rate = float(learning_rate)

    def update(self, parameter: Tensor) -> None:
        gradient = parameter.grad
        if gradient is None:
            raise RuntimeError("parameter has no gradient to optimize with")
        parameter.data -= np.float32(self.learning_rate) * gradient.data
        gradient.data.fill(0)