import pytest

from cabernet.model import Model
from cabernet.optimizers import SGD, NoOptimization
from cabernet.tensor import Tensor


class Scale(Model):
    def __init__(self, optimizer=None):
        self.weight = Tensor((1, 2), True)
        self.weight.fill([2, 3])
        super().__init__(optimizer)

    def parameters(self):
        return [self.weight]

    def forward(self, input):
        return input * self.weight


def _input():
    x = Tensor((1, 2))
    x.fill([1, 2])
    return x


def test_model_is_abstract():
    with pytest.raises(TypeError):
        Model()


def test_call_runs_forward():
    model = Scale()
    output = model(_input())
    output.perform()
    assert output.tolist() == [2.0, 6.0]


def test_default_optimizer_does_nothing():
    model = Scale()
    assert isinstance(model.current_optimizer, NoOptimization)

    weight = Tensor((1, 2), True)
    weight.fill([2, 3])
    optimizer = NoOptimization()
    optimizer.add_parameter(weight)
    optimizer.step()
    assert weight.tolist() == [2.0, 3.0]

    model.current_optimizer.step()
    assert model.weight.tolist() == [2.0, 3.0]


def test_configure_optimizer_registers_parameters():
    model = Scale()
    optimizer = SGD(0.5)
    model.configure_optimizer(optimizer)
    assert model.current_optimizer is optimizer
    assert optimizer.parameters == (model.weight,)


def test_optimizer_given_at_construction_trains():
    optimizer = SGD(0.5)
    model = Scale(optimizer)
    assert optimizer.parameters == (model.weight,)
    output = model(_input())
    output.perform()
    ones = Tensor((1, 2))
    ones.fill(1)
    output.backward(ones)
    optimizer.step()
    assert model.weight.tolist() == pytest.approx([1.5, 2.0])
    assert model.weight.gradient().tolist() == [0.0, 0.0]