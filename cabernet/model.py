"""Base class for layers and networks."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .optimizers import NoOptimization, Optimizer
from .tensor import Tensor


class Model(ABC):
    """Something callable that maps a tensor to a tensor.

    Subclasses implement ``forward`` and, when they hold trainable
    tensors, ``parameters``.
    """

    def __init__(self, optimizer: Optimizer | None = None) -> None:
        self._optimizer: Optimizer = NoOptimization()
        if optimizer is not None:
            self.configure_optimizer(optimizer)

    @property
    def current_optimizer(self) -> Optimizer:
        return self._optimizer

    def __call__(self, input: Tensor) -> Tensor:
        return self.forward(input)

    @abstractmethod
    def forward(self, input: Tensor) -> Tensor:
        """Build the graph computing this model's output from ``input``."""

    def parameters(self) -> list[Tensor]:
        """The trainable tensors of this model."""
        return []

    def set_optimizer(self, optimizer: Optimizer) -> None:
        """Register this model's parameters with ``optimizer``."""
        optimizer.add_parameter(self.parameters())

    def configure_optimizer(self, optimizer: Optimizer) -> None:
        self.set_optimizer(optimizer)
        self._optimizer = optimizer