"""Differentiable functions as nodes of the computational graph."""

from __future__ import annotations

import numpy as np

from .tensor import Expression, Shape, Tensor

_AXES = (0, 1)


def _tensor_from(values: np.ndarray, shape: Shape) -> Tensor:
    result = Tensor(shape)
    result.data[:] = np.asarray(values, dtype=np.float32).ravel()
    return result


def _check_axis(axis: int) -> int:
    if axis not in _AXES:
        raise ValueError("axis should be 0 or 1")
    return axis


class Function(Expression):
    """A graph node computed from a single input tensor."""

    def __init__(self, input: Tensor, shape) -> None:
        super().__init__(shape)
        self.input = input


class Linear(Function):
    """Affine map ``input @ weight.T + bias``, with rank-2 input and weight."""

    def __init__(self, input: Tensor, weight: Tensor, bias: Tensor | None) -> None:
        if input.rank != 2 or weight.rank != 2:
            raise ValueError("rank mismatch")
        if input.shape[-1] != weight.shape[-1]:
            raise ValueError("shape mismatch between input and weight")
        if bias is not None and (not bias.shape or bias.shape[-1] != weight.shape[0]):
            raise ValueError("shape mismatch between bias and weight")
        super().__init__(input, (input.shape[0], weight.shape[0]))
        self.weight = weight
        self.bias = bias
        self.set_requires_gradient(
            input.requires_gradient
            or weight.requires_gradient
            or (bias is not None and bias.requires_gradient)
        )

    @property
    def rows_dimension(self) -> int:
        return self.input.shape[0]

    @property
    def inner_dimension(self) -> int:
        return self.input.shape[-1]

    @property
    def columns_dimension(self) -> int:
        return self.weight.shape[0]

    def _input_matrix(self, data: np.ndarray) -> np.ndarray:
        return data.reshape(self.rows_dimension, self.inner_dimension)

    def _weight_matrix(self, data: np.ndarray) -> np.ndarray:
        return data.reshape(self.columns_dimension, self.inner_dimension)

    def forward(self) -> Tensor:
        inputs = self._input_matrix(self.input.forward().data)
        weights = self._weight_matrix(self.weight.forward().data)
        result = inputs @ weights.T
        if self.bias is not None:
            result = result + self.bias.forward().data[: self.columns_dimension]
        self.data[:] = result.ravel()
        return self

    def backward(self, gradient: Tensor) -> None:
        gradient_matrix = gradient.data.reshape(self.rows_dimension, self.columns_dimension)
        if self.input.requires_gradient:
            weights = self._weight_matrix(self.weight.data)
            self.input.backward(_tensor_from(gradient_matrix @ weights, self.input.shape))
        if self.weight.requires_gradient:
            inputs = self._input_matrix(self.input.data)
            self.weight.backward(_tensor_from(gradient_matrix.T @ inputs, self.weight.shape))
        if self.bias is not None and self.bias.requires_gradient:
            self.bias.backward(_tensor_from(gradient_matrix.sum(axis=0), self.bias.shape))


class ReLU(Function):
    """Elementwise ``max(x, 0)``."""

    def __init__(self, input: Tensor) -> None:
        super().__init__(input, input.shape)
        self.set_requires_gradient(input.requires_gradient)

    def forward(self) -> Tensor:
        source = self.input.forward()
        if source.shape != self.shape:
            self.reshape(source.shape)
        self.data[:] = np.maximum(source.data, 0)
        return self

    def backward(self, gradient: Tensor) -> None:
        if self.requires_gradient:
            gradient.data *= (self.data > 0).astype(np.float32)
            self.input.backward(gradient)


class _AxisFunction(Function):
    def _dimensions(self) -> tuple[int, int]:
        rows = self.input.shape[0]
        return rows, self.input.size // rows


class Softmax(_AxisFunction):
    """Softmax over axis 0 or 1 of a tensor seen as a matrix of rows."""

    def __init__(self, input: Tensor, axis: int) -> None:
        self.axis = _check_axis(axis)
        super().__init__(input, input.shape)
        self.set_requires_gradient(input.requires_gradient)

    def forward(self) -> Tensor:
        source = self.input.forward()
        rows, columns = self._dimensions()
        # Axis 0 works on the data read in column-major order.
        order = "F" if self.axis == 0 else "C"
        view = source.data.reshape((rows, columns), order=order)
        shifted = np.exp(view - view.max(axis=1, keepdims=True))
        result = shifted / shifted.sum(axis=1, keepdims=True)
        self.data[:] = result.ravel(order=order)
        return self

    def backward(self, gradient: Tensor) -> None:
        if self.requires_gradient:
            raise RuntimeError("softmax does not support backward propagation")


class LogSoftmax(_AxisFunction):
    """Logarithm of the softmax over axis 0 or 1."""

    def __init__(self, input: Tensor, axis: int) -> None:
        self.axis = _check_axis(axis)
        super().__init__(input, input.shape)
        self.set_requires_gradient(input.requires_gradient)

    def forward(self) -> Tensor:
        rows, columns = self._dimensions()
        view = self.input.forward().data.reshape(rows, columns)
        shifted = view - view.max(axis=1, keepdims=True)
        if self.axis == 0:
            result = shifted - np.log(np.exp(shifted).sum(axis=0, keepdims=True))
        else:
            result = shifted - np.log(np.exp(shifted).sum(axis=1, keepdims=True))
        self.data[:] = result.ravel()
        return self

    def backward(self, gradient: Tensor) -> None:
        if not self.input.requires_gradient:
            return
        rows, columns = self._dimensions()
        output = self.data.reshape(rows, columns)
        gradient_matrix = gradient.data.reshape(rows, columns)
        if self.axis == 0:
            gradient_matrix -= np.exp(output) * gradient_matrix.sum(axis=0, keepdims=True)
        else:
            gradient_matrix -= np.exp(output) * gradient_matrix.sum(axis=1, keepdims=True)
        self.input.backward(gradient)


def linear(input: Tensor, weight: Tensor, bias: Tensor | None) -> Linear:
    """Build the graph node for ``input @ weight.T + bias``."""
    return Linear(input, weight, bias)


def relu(input: Tensor) -> ReLU:
    """Build the graph node for the rectified linear unit."""
    return ReLU(input)


def softmax(input: Tensor, axis: int) -> Softmax:
    """Build the graph node for the softmax along ``axis``."""
    return Softmax(input, axis)


def log_softmax(input: Tensor, axis: int) -> LogSoftmax:
    """Build the graph node for the log-softmax along ``axis``."""
    return LogSoftmax(input, axis)