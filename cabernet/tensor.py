"""Tensors: nodes of the computational graph holding data and gradients."""

from __future__ import annotations

import math
import numbers
import operator
from collections.abc import Iterable, Iterator

import numpy as np

from .distributions import Initializer, Normal

Shape = tuple[int, ...]


def _normalise_shape(shape) -> Shape | None:
    if shape is None:
        return None
    if isinstance(shape, numbers.Integral):
        dims = (operator.index(shape),)
    else:
        dims = tuple(operator.index(dimension) for dimension in shape)
    if any(dimension < 0 for dimension in dims):
        raise ValueError(f"invalid shape {dims}")
    return dims


def _resized(data: np.ndarray, size: int) -> np.ndarray:
    resized = np.zeros(size, dtype=data.dtype)
    kept = min(size, data.size)
    resized[:kept] = data[:kept]
    return resized


def _format(values: Iterable) -> str:
    return "[" + "".join(f"{value:g}, " for value in values) + "]"


class Tensor:
    """A float tensor that is a leaf of the computational graph.

    Leaf tensors that require a gradient own a gradient tensor of the same
    shape, into which ``backward`` accumulates.
    """

    _leaf = True

    def __init__(self, shape=None, requires_gradient: bool = False) -> None:
        dims = _normalise_shape(shape)
        self._shape: Shape = dims if dims is not None else ()
        self.data = np.zeros(math.prod(dims) if dims is not None else 0, dtype=np.float32)
        self._is_leaf = self._leaf
        self._requires_gradient = False
        self._gradient: Tensor | None = None
        self.set_requires_gradient(bool(requires_gradient))

    @property
    def shape(self) -> Shape:
        return self._shape

    @property
    def size(self) -> int:
        return int(self.data.size)

    @property
    def rank(self) -> int:
        return len(self._shape)

    @property
    def is_leaf(self) -> bool:
        return self._is_leaf

    @property
    def requires_gradient(self) -> bool:
        return self._requires_gradient

    @property
    def grad(self) -> Tensor | None:
        """The live gradient storage, or None if there is none."""
        return self._gradient

    def reshape(self, shape) -> None:
        """Change the shape, truncating or zero-padding the data."""
        dims = _normalise_shape(shape) or ()
        self._shape = dims
        self.data = _resized(self.data, math.prod(dims))
        if self._is_leaf and self._gradient is not None:
            self._gradient.reshape(dims)

    def fill(self, value) -> None:
        """Fill with a scalar, a sequence of values, or an initializer."""
        if isinstance(value, Initializer):
            self._fill_initializer(value)
        elif isinstance(value, (numbers.Real, np.number)):
            self.data.fill(value)
        else:
            values = np.asarray(list(value), dtype=np.float32)
            if values.size > self.size:
                raise ValueError(f"{values.size} values do not fit a tensor of size {self.size}")
            self.data[: values.size] = values

    def _fill_initializer(self, distribution: Initializer) -> None:
        if distribution is Initializer.HE:
            if not self._shape or self._shape[-1] == 0:
                raise ValueError("He initialization needs a non-empty last dimension")
            filler = Normal(0.0, math.sqrt(2.0 / self._shape[-1]))
            self.data[:] = [filler.generate() for _ in range(self.size)]
        else:
            raise ValueError(f"invalid initializer {distribution!r}")

    def _detached(self) -> Tensor:
        clone = Tensor(self._shape)
        clone.data[:] = self.data
        return clone

    def copy(self, other: Tensor) -> None:
        """Take over the shape, data and gradient settings of ``other``."""
        if other is self:
            return
        self._shape = other.shape
        self.data = other.data.copy()
        if other.requires_gradient:
            if other.is_leaf and self._is_leaf and other._gradient is not None:
                self._gradient = other._gradient._detached()
            else:
                self._gradient = other._gradient
        else:
            self._gradient = None
        self._requires_gradient = other.requires_gradient
        self._is_leaf = other.is_leaf

    def gradient(self) -> Tensor:
        """Return a copy of the accumulated gradient."""
        if self._gradient is None:
            raise RuntimeError("tensor has no gradient")
        return self._gradient._detached()

    def set_requires_gradient(self, status: bool) -> None:
        if not self._requires_gradient and status:
            self._requires_gradient = True
            if self._is_leaf:
                self._gradient = Tensor(self._shape)
        elif self._requires_gradient and not status:
            self._requires_gradient = False
            self._gradient = None

    def forward(self) -> Tensor:
        return self

    def backward(self, gradient: Tensor) -> None:
        if self._gradient is None:
            raise RuntimeError("tensor does not require a gradient")
        self._gradient.add(gradient)

    def perform(self) -> Tensor:
        """Evaluate the graph ending at this tensor."""
        return self.forward()

    def add(self, other: Tensor) -> None:
        if self._shape != other.shape:
            raise ValueError("shape mismatch")
        self.data += other.data

    def multiply(self, other: Tensor) -> None:
        if self._shape != other.shape:
            raise ValueError("shape mismatch")
        self.data *= other.data

    def tolist(self) -> list[float]:
        return [float(value) for value in self.data]

    def __iter__(self) -> Iterator[float]:
        return iter(self.tolist())

    def __len__(self) -> int:
        return self.size

    def __add__(self, other):
        if not isinstance(other, Tensor):
            return NotImplemented
        from .operations import add

        return add(self, other)

    def __mul__(self, other):
        if not isinstance(other, Tensor):
            return NotImplemented
        from .operations import multiply

        return multiply(self, other)

    def __matmul__(self, other):
        if not isinstance(other, Tensor):
            return NotImplemented
        from .operations import matmul

        return matmul(self, other)

    def __str__(self) -> str:
        return _format(self.tolist())

    def __repr__(self) -> str:
        return f"{type(self).__name__}(shape={self._shape}, data={self})"


class Expression(Tensor):
    """A non-leaf node of the computational graph.

    Expressions never own gradient storage; they pass gradients on to
    their inputs in ``backward``.
    """

    _leaf = False

    def __init__(self, shape=None, requires_gradient: bool = False) -> None:
        super().__init__(shape, requires_gradient)


class IntTensor:
    """A tensor of integers, used for class targets."""

    def __init__(self, shape=None) -> None:
        dims = _normalise_shape(shape)
        self._shape: Shape = dims if dims is not None else ()
        self.data = np.zeros(math.prod(dims) if dims is not None else 0, dtype=np.int32)

    @property
    def shape(self) -> Shape:
        return self._shape

    @property
    def size(self) -> int:
        return int(self.data.size)

    @property
    def rank(self) -> int:
        return len(self._shape)

    def reshape(self, shape) -> None:
        dims = _normalise_shape(shape) or ()
        self._shape = dims
        self.data = _resized(self.data, math.prod(dims))

    def fill(self, value) -> None:
        """Fill with a scalar or a sequence of values."""
        if isinstance(value, (numbers.Integral, np.integer)):
            self.data.fill(int(value))
            return
        values = np.asarray(list(value), dtype=np.int32)
        if values.size > self.size:
            raise ValueError(f"{values.size} values do not fit a tensor of size {self.size}")
        self.data[: values.size] = values

    def copy(self, other: IntTensor) -> None:
        self._shape = other.shape
        self.data = other.data.copy()

    def tolist(self) -> list[int]:
        return [int(value) for value in self.data]

    def __iter__(self) -> Iterator[int]:
        return iter(self.tolist())

    def __len__(self) -> int:
        return self.size

    def __str__(self) -> str:
        return "[" + "".join(f"{value}, " for value in self.tolist()) + "]"

    def __repr__(self) -> str:
        return f"IntTensor(shape={self._shape}, data={self})"