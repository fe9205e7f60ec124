"""Layers: models built from graph functions, composable in a Sequence."""

from __future__ import annotations

from .distributions import Initializer
from .functions import linear, log_softmax, relu, softmax
from .model import Model
from .optimizers import Optimizer
from .tensor import Tensor


class Linear(Model):
    """Fully connected layer with a weight of shape (output, input) and a bias."""

    def __init__(
        self,
        input_features: int,
        output_features: int,
        distribution: Initializer = Initializer.HE,
    ) -> None:
        self._weight = Tensor((output_features, input_features), True)
        self._bias = Tensor((1, output_features), True)
        self._weight.fill(distribution)
        self._bias.fill(0.0)
        super().__init__()

    @property
    def weight(self) -> Tensor:
        return self._weight

    @property
    def bias(self) -> Tensor:
        return self._bias

    def forward(self, input: Tensor) -> Tensor:
        return linear(input, self._weight, self._bias)

    def parameters(self) -> list[Tensor]:
        return [self._weight, self._bias]

    def set_optimizer(self, optimizer: Optimizer) -> None:
        optimizer.add_parameter(self._weight)
        optimizer.add_parameter(self._bias)


class ReLU(Model):
    """Rectified linear unit."""

    def forward(self, input: Tensor) -> Tensor:
        return relu(input)


class Softmax(Model):
    """Softmax along a given axis."""

    def __init__(self, axis: int) -> None:
        self.axis = axis
        super().__init__()

    def forward(self, input: Tensor) -> Tensor:
        return softmax(input, self.axis)


class LogSoftmax(Model):
    """Log-softmax along a given axis."""

    def __init__(self, axis: int) -> None:
        self.axis = axis
        super().__init__()

    def forward(self, input: Tensor) -> Tensor:
        return log_softmax(input, self.axis)


class Sequence(Model):
    """Layers applied one after another."""

    def __init__(self, *args: Model) -> None:
        for layer in args:
            if not isinstance(layer, Model):
                raise TypeError(f"{layer!r} is not a layer")
        self.layers: tuple[Model, ...] = args
        super().__init__()

    def __len__(self) -> int:
        return len(self.layers)

    def forward(self, input: Tensor) -> Tensor:
        for layer in self.layers:
            input = layer.forward(input)
        return input

    def parameters(self) -> list[Tensor]:
        return [parameter for layer in self.layers for parameter in layer.parameters()]

    def set_optimizer(self, optimizer: Optimizer) -> None:
        for layer in self.layers:
            layer.set_optimizer(optimizer)