"""Loss criteria that compare a network's output with class targets."""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

from .tensor import IntTensor, Tensor


class Criterion(ABC):
    """A loss over a batch of outputs, one row per sample.

    The criterion keeps its own gradient tensor, shaped like the output,
    which it fills and sends back through the graph in ``backward``.
    """

    def __init__(self, output: Tensor, targets: IntTensor) -> None:
        self.output = output
        self.targets = targets
        self.gradient = Tensor(output.shape)

    @property
    def batch_size(self) -> int:
        if not self.output.shape:
            raise ValueError("output tensor has no batch dimension")
        return self.output.shape[0]

    @property
    def number_of_classes(self) -> int:
        return self.output.size // self.batch_size

    def _target_indices(self) -> np.ndarray:
        batch = self.batch_size
        if self.targets.size < batch:
            raise ValueError(
                f"{self.targets.size} targets for a batch of {batch} samples"
            )
        indices = self.targets.data[:batch].astype(np.intp)
        if np.any(indices < 0) or np.any(indices >= self.number_of_classes):
            raise ValueError("target class out of range")
        return indices

    @abstractmethod
    def loss(self) -> float:
        """Evaluate the output and return the mean loss over the batch."""

    @abstractmethod
    def backward(self) -> None:
        """Propagate the gradient of the loss back through the output."""


class NLLLoss(Criterion):
    """Negative log-likelihood loss over log-probabilities."""

    def loss(self) -> float:
        batch, classes = self.batch_size, self.number_of_classes
        values = self.output.forward().data.reshape(batch, classes)
        picked = values[np.arange(batch), self._target_indices()]
        return float(-picked.sum(dtype=np.float32) / np.float32(batch))

    def backward(self) -> None:
        batch, classes = self.batch_size, self.number_of_classes
        if self.gradient.shape != self.output.shape:
            self.gradient = Tensor(self.output.shape)
        gradient = np.zeros((batch, classes), dtype=np.float32)
        gradient[np.arange(batch), self._target_indices()] = -1.0
        gradient /= np.float32(batch)
        self.gradient.data[:] = gradient.ravel()
        self.output.backward(self.gradient)