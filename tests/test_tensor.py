import math
import statistics

import pytest

from cabernet.distributions import Initializer
from cabernet.tensor import Expression, IntTensor, Tensor


def test_new_tensor_is_zero_with_given_shape():
    tensor = Tensor((2, 3))
    assert tensor.shape == (2, 3)
    assert tensor.size == 6
    assert tensor.rank == 2
    assert tensor.tolist() == [0.0] * 6


def test_negative_shape_rejected():
    with pytest.raises(ValueError):
        Tensor((2, -1))


def test_fill_with_values_and_scalar():
    tensor = Tensor((2, 3))
    tensor.fill([1, 2, 3, 4, 5, 6])
    assert tensor.tolist() == [1, 2, 3, 4, 5, 6]
    tensor.fill(7)
    assert tensor.tolist() == [7] * 6


def test_fill_prefix_only():
    tensor = Tensor((4,))
    tensor.fill(9)
    tensor.fill([1, 2])
    assert tensor.tolist() == [1, 2, 9, 9]


def test_fill_too_many_values_rejected():
    tensor = Tensor((2,))
    with pytest.raises(ValueError):
        tensor.fill([1, 2, 3])


def test_fill_he_statistics():
    tensor = Tensor((200, 50))
    tensor.fill(Initializer.HE)
    values = tensor.tolist()
    assert abs(statistics.fmean(values)) < 0.02
    assert abs(statistics.pstdev(values) - math.sqrt(2.0 / 50)) < 0.02


def test_fill_he_needs_last_dimension():
    with pytest.raises(ValueError):
        Tensor().fill(Initializer.HE)


def test_reshape_keeps_prefix_and_pads():
    tensor = Tensor((2, 2))
    tensor.fill([1, 2, 3, 4])
    tensor.reshape((1, 2))
    assert tensor.shape == (1, 2)
    assert tensor.tolist() == [1, 2]
    tensor.reshape(3)
    assert tensor.tolist() == [1, 2, 0]


def test_gradient_accumulates_through_backward():
    x = Tensor((2, 2), requires_gradient=True)
    identity = Tensor((2, 2))
    identity.fill(1)
    x.backward(identity)
    assert x.gradient().tolist() == [1, 1, 1, 1]
    x.backward(identity)
    assert x.gradient().tolist() == [2.0] * 4


def test_gradient_is_a_copy():
    x = Tensor((2,), requires_gradient=True)
    snapshot = x.gradient()
    snapshot.fill(5)
    assert x.gradient().tolist() == [0, 0]
    assert not snapshot.requires_gradient


def test_backward_without_gradient_fails():
    x = Tensor((2,))
    with pytest.raises(RuntimeError):
        x.backward(Tensor((2,)))
    with pytest.raises(RuntimeError):
        x.gradient()


def test_set_requires_gradient_toggles_storage():
    x = Tensor((3,))
    x.set_requires_gradient(True)
    assert x.requires_gradient
    assert x.gradient().shape == (3,)
    x.set_requires_gradient(False)
    assert not x.requires_gradient
    assert x.grad is None


def test_copy_of_leaf_has_independent_gradient():
    source = Tensor((2,), requires_gradient=True)
    source.fill([3, 4])
    target = Tensor((5,))
    target.copy(source)
    assert target.shape == (2,)
    assert target.tolist() == [3, 4]
    assert target.requires_gradient
    assert target.grad is not source.grad
    ones = Tensor((2,))
    ones.fill(1)
    target.backward(ones)
    assert source.gradient().tolist() == [0, 0]


def test_copy_of_non_gradient_tensor_drops_gradient():
    target = Tensor((2,), requires_gradient=True)
    source = Tensor((2,))
    source.fill([1, 2])
    target.copy(source)
    assert not target.requires_gradient
    with pytest.raises(RuntimeError):
        target.gradient()


def test_add_and_multiply_in_place():
    a = Tensor((3,))
    a.fill([1, 2, 3])
    zeros = Tensor((3,))
    a.add(zeros)
    assert a.tolist() == [1, 2, 3]
    ones = Tensor((3,))
    ones.fill(1)
    a.multiply(ones)
    assert a.tolist() == [1, 2, 3]
    a.multiply(zeros)
    assert a.tolist() == [0, 0, 0]


def test_add_shape_mismatch():
    with pytest.raises(ValueError):
        Tensor((2,)).add(Tensor((3,)))
    with pytest.raises(ValueError):
        Tensor((2,)).multiply(Tensor((2, 1)))


def test_str_format():
    tensor = Tensor((3,))
    tensor.fill([1, 2, 0.5])
    assert str(tensor) == "[1, 2, 0.5, ]"


def test_iteration_and_length():
    tensor = Tensor((2, 2))
    tensor.fill([4, 3, 2, 1])
    assert list(tensor) == [4, 3, 2, 1]
    assert len(tensor) == 4


def test_forward_and_perform_return_self():
    tensor = Tensor((1,))
    assert tensor.forward() is tensor
    assert tensor.perform() is tensor


def test_expression_is_not_leaf_and_owns_no_gradient():
    expression = Expression((2,), requires_gradient=True)
    assert not expression.is_leaf
    assert expression.requires_gradient
    assert expression.grad is None
    with pytest.raises(RuntimeError):
        expression.gradient()


def test_int_tensor_fill_and_str():
    targets = IntTensor((3, 1))
    targets.fill([1, 3, 0])
    assert targets.tolist() == [1, 3, 0]
    assert str(targets) == "[1, 3, 0, ]"
    assert len(targets) == 3
    assert targets.rank == 2


def test_int_tensor_copy_and_reshape():
    source = IntTensor((2,))
    source.fill(5)
    target = IntTensor((4,))
    target.copy(source)
    assert target.shape == (2,)
    assert list(target) == [5, 5]
    target.reshape(3)
    assert target.tolist() == [5, 5, 0]


def test_int_tensor_fill_too_many_rejected():
    with pytest.raises(ValueError):
        IntTensor((1,)).fill([1, 2])