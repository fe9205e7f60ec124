# cabernet

A small deep-learning library built around a lazy computational graph.
Expressions are recorded when you write them, evaluated when you call
`perform()`, and differentiated in reverse mode when you call `backward()`.
Arrays are stored with numpy as 32-bit floats (and 32-bit integers for
targets).

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Tensors and operations

A `Tensor` (in `cabernet.tensor`) is created from a shape and a flag saying
whether it should accumulate a gradient. `fill` takes a single value, a
list of values, or an `Initializer`. `IntTensor` holds integers and is used
for class targets.

```python
from cabernet.tensor import Tensor
from cabernet.operations import matmul

x = Tensor([2, 3], False); x.fill([1, 2, 3, 4, 5, 6])
y = Tensor([2, 3], True);  y.fill([1, 1, 1, -1, -1, -1])
z = Tensor([2, 3], True);  z.fill(1)
I = Tensor([2, 3], False); I.fill(1)
w = Tensor([3, 3], True);  w.fill([1, 2, 3, 4, 5, 6, 7, 8, 9])

x = x + I
x = matmul(x, w)           # or: x @ w
x = x * z + y * z + z * y
x.perform()
x.backward(I)

print(x)                   # [44, 53, 62, 76, 94, 112, ]
print(y.gradient())        # [2, 2, 2, 2, 2, 2, ]
print(w.gradient())        # [7, 7, 7, 9, 9, 9, 11, 11, 11, ]
```

`gradient()` returns a copy of the accumulated gradient; the live gradient
storage is available as the `grad` property. `tolist()` and iteration give
the values in row-major order.

Shapes are checked when an expression is built: adding or multiplying
tensors of different shapes, or multiplying matrices whose inner dimensions
disagree, raises `ValueError` straight away.

Note that `backward` may write into the gradient tensor you pass it (for
example through an elementwise product), so pass a fresh tensor when you
need to keep its values.

## Functions

`cabernet.functions` holds `linear`, `relu`, `softmax` and `log_softmax`.
`linear` computes `input @ weight.T + bias`.

```python
from cabernet.tensor import Tensor
from cabernet import functions

x = Tensor([2, 3], False); x.fill([1, 2, 3, 4, 5, 6])
w = Tensor([4, 3], True);  w.fill([1, 2, -3, 4, 5, 6, 7, 8, -9, 10, 11, -12])
b = Tensor([1, 4], True);  b.fill([1, 2, 3, 4])
I = Tensor([2, 4], False); I.fill(1)

x = functions.linear(x, w, b)
x = functions.relu(x)
x.perform()
x.backward(I)

print(x)                   # [0, 34, 0, 0, 0, 79, 17, 27, ]
print(w.gradient())        # [0, 0, 0, 5, 7, 9, 4, 5, 6, 4, 5, 6, ]
print(b.gradient())        # [0, 2, 1, 1, ]
```

`softmax` and `log_softmax` take an axis, which must be 0 or 1. Softmax can
be evaluated but has no backward pass: calling `backward` on a softmax node
that requires a gradient raises `RuntimeError`. Use `log_softmax` with a
negative log-likelihood loss for training.

## Loss and optimization

```python
from cabernet.tensor import Tensor, IntTensor
from cabernet import functions
from cabernet.criterions import NLLLoss
from cabernet.optimizers import SGD

X = Tensor([3, 5], True)
X.fill([-1.0, 2.0, -0.5, 1.0, 3.0,
        0.5, 1.0, 2.0, -1.0, -2.0,
        2.0, 1.0, -1.0, 0.5, -0.5])
y = IntTensor([3]); y.fill([1, 3, 0])

output = functions.log_softmax(X, 1)
criterion = NLLLoss(output, y)
print(criterion.loss())    # about 1.8298835

criterion.backward()
optimizer = SGD(0.1)
optimizer.add_parameter(X)
optimizer.step()           # X -= 0.1 * gradient, then the gradient is reset
```

`NLLLoss.loss()` evaluates the output graph itself, so no `perform()` call
is needed first. Targets outside the range of classes raise `ValueError`.
`add_parameter` takes one tensor or an iterable of tensors.
`NoOptimization` is an optimizer that leaves parameters unchanged.

## Layers and models

Layers live in `cabernet.layers`: `Linear`, `ReLU`, `Softmax`, `LogSoftmax`
and `Sequence`, which chains them. Subclass `cabernet.model.Model` and
implement `forward` to build a network; calling the model runs `forward`.

```python
from cabernet.model import Model
from cabernet.layers import Sequence, Linear, ReLU, LogSoftmax
from cabernet.optimizers import SGD


class Classifier(Model):
    def __init__(self):
        super().__init__()
        self.layers = Sequence(
            Linear(784, 128),
            ReLU(),
            Linear(128, 10),
            LogSoftmax(1),
        )
        self.optimizer = SGD(0.01)
        self.optimizer.add_parameter(self.layers.parameters())

    def forward(self, input):
        return self.layers(input)

    def step(self):
        self.optimizer.step()
```

`Linear` weights have shape `(output_features, input_features)` and are
drawn with He initialization by default (`Initializer.HE` in
`cabernet.distributions`); biases start at zero. `parameters()` lists a
model's trainable tensors, and `configure_optimizer` registers them with an
optimizer.

## Datasets

`cabernet.dataset.Dataset` reads MNIST-style IDX files (big-endian headers)
into batches of `batch_size` samples: `read_features` scales pixel bytes to
`[0, 1]`, `read_targets` reads label bytes as integers, and `len(dataset)`
gives the number of feature batches. The last batch read from each file is
dropped, so a file with fewer samples than one batch contributes nothing.
The `shuffle` flag is stored but batches are not reordered.

`read_csv` loads a CSV with a header line, the target in the first column
and features after it, and returns `(features, targets)`.
`cabernet.normalizers.Standard` standardizes a feature vector to zero mean
and unit deviation and can invert the transform; it raises `ValueError` for
an empty or constant vector.

## Training

`cabernet.train` provides ready-made `Network` (784 → 128 → 10 classifier)
and `Autoencoder` models, and `train(dataset, model, epochs)`, which runs an
`NLLLoss` over every batch, calls `model.step()` after each backward pass,
and returns the losses grouped by epoch. The model passed to `train` must
have a `step` method, as `Network` and `Autoencoder` do.

The `cabernet-train` command trains `Network` on IDX files and prints the
loss of every batch:

```
cabernet-train --images data/train-images.idx3-ubyte \
               --labels data/train-labels.idx1-ubyte \
               --batch-size 64 --epochs 10 --learning-rate 0.01
```

## What is not included

There is no way to save or load trained weights, no evaluation or accuracy
reporting, and no GPU support; everything runs on numpy arrays in memory.