"""Binary operations as nodes of the computational graph."""

from __future__ import annotations

import numpy as np

from .tensor import Expression, Shape, Tensor


def _tensor_from(values: np.ndarray, shape: Shape) -> Tensor:
    result = Tensor(shape)
    result.data[:] = np.asarray(values, dtype=np.float32).ravel()
    return result


def _copy_of(gradient: Tensor) -> Tensor:
    return _tensor_from(gradient.data, gradient.shape)


class Operation(Expression):
    """A graph node combining two operand tensors.

    It requires a gradient whenever either operand does.
    """

    def __init__(self, first: Tensor, second: Tensor) -> None:
        shape = self._output_shape(first, second)
        super().__init__(shape)
        self.first_operand = first
        self.second_operand = second
        self.set_requires_gradient(first.requires_gradient or second.requires_gradient)

    @staticmethod
    def _output_shape(first: Tensor, second: Tensor) -> Shape:
        if first.shape != second.shape:
            raise ValueError("shape mismatch")
        return first.shape


class Addition(Operation):
    """Elementwise sum of two tensors of the same shape."""

    def forward(self) -> Tensor:
        first = self.first_operand.forward()
        second = self.second_operand.forward()
        self.data[:] = first.data + second.data
        return self

    def backward(self, gradient: Tensor) -> None:
        first, second = self.first_operand, self.second_operand
        if first.requires_gradient:
            if second.requires_gradient:
                first.backward(_copy_of(gradient))
            else:
                first.backward(gradient)
        if second.requires_gradient:
            second.backward(gradient)


class Multiplication(Operation):
    """Elementwise product of two tensors of the same shape."""

    def forward(self) -> Tensor:
        first = self.first_operand.forward()
        second = self.second_operand.forward()
        self.data[:] = first.data * second.data
        return self

    def backward(self, gradient: Tensor) -> None:
        first, second = self.first_operand, self.second_operand
        if first.requires_gradient:
            if second.requires_gradient:
                gradient_copy = _copy_of(gradient)
                gradient_copy.data *= second.data
                first.backward(gradient_copy)
            else:
                gradient.data *= second.data
                first.backward(gradient)
        if second.requires_gradient:
            gradient.data *= first.data
            second.backward(gradient)


class Matmul(Operation):
    """Matrix product of two rank-2 tensors."""

    @staticmethod
    def _output_shape(first: Tensor, second: Tensor) -> Shape:
        if first.rank != 2 or second.rank != 2:
            raise ValueError("rank mismatch")
        if first.shape[-1] != second.shape[0]:
            raise ValueError("shape mismatch")
        return (first.shape[0], second.shape[-1])

    @property
    def rows_dimension(self) -> int:
        return self.first_operand.shape[0]

    @property
    def inner_dimension(self) -> int:
        return self.first_operand.shape[-1]

    @property
    def columns_dimension(self) -> int:
        return self.second_operand.shape[-1]

    def _first_matrix(self, data: np.ndarray) -> np.ndarray:
        return data.reshape(self.rows_dimension, self.inner_dimension)

    def _second_matrix(self, data: np.ndarray) -> np.ndarray:
        return data.reshape(self.inner_dimension, self.columns_dimension)

    def forward(self) -> Tensor:
        first = self._first_matrix(self.first_operand.forward().data)
        second = self._second_matrix(self.second_operand.forward().data)
        self.data[:] = (first @ second).ravel()
        return self

    def backward(self, gradient: Tensor) -> None:
        gradient_matrix = gradient.data.reshape(self.rows_dimension, self.columns_dimension)
        first, second = self.first_operand, self.second_operand
        if first.requires_gradient:
            second_matrix = self._second_matrix(second.data)
            first.backward(
                _tensor_from(
                    gradient_matrix @ second_matrix.T,
                    (self.rows_dimension, self.inner_dimension),
                )
            )
        if second.requires_gradient:
            first_matrix = self._first_matrix(first.data)
            second.backward(
                _tensor_from(
                    first_matrix.T @ gradient_matrix,
                    (self.inner_dimension, self.columns_dimension),
                )
            )


def add(first: Tensor, second: Tensor) -> Addition:
    """Build the graph node for ``first + second``."""
    return Addition(first, second)


def multiply(first: Tensor, second: Tensor) -> Multiplication:
    """Build the graph node for the elementwise product of two tensors."""
    return Multiplication(first, second)


def matmul(first: Tensor, second: Tensor) -> Matmul:
    """Build the graph node for the matrix product of two tensors."""
    return Matmul(first, second)