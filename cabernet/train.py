"""Example networks and a training loop over an IDX dataset."""

from __future__ import annotations

import argparse
from collections.abc import Iterator

from .criterions import NLLLoss
from .dataset import Dataset
from .distributions import Initializer
from .layers import Linear, LogSoftmax, ReLU, Sequence
from .model import Model
from .optimizers import SGD
from .tensor import IntTensor, Tensor


class Network(Model):
    """A two-layer classifier for 28x28 images into 10 classes."""

    def __init__(self, learning_rate: float = 0.01) -> None:
        super().__init__()
        self.layers = Sequence(
            Linear(784, 128),
            ReLU(),
            Linear(128, 10),
            LogSoftmax(1),
        )
        self.optimizer = SGD(learning_rate)
        self.optimizer.add_parameter(self.layers.parameters())

    def forward(self, input: Tensor) -> Tensor:
        return self.layers(input)

    def parameters(self) -> list[Tensor]:
        return self.layers.parameters()

    def step(self) -> None:
        self.optimizer.step()


class Autoencoder(Model):
    """Encoder and decoder, each with its own optimizer."""

    def __init__(self, learning_rate: float = 0.01) -> None:
        super().__init__()
        self.encoder = Sequence(
            Linear(784, 128, Initializer.HE),
            ReLU(),
            Linear(128, 64, Initializer.HE),
        )
        self.decoder = Sequence(
            Linear(64, 128, Initializer.HE),
            ReLU(),
            Linear(128, 784, Initializer.HE),
            LogSoftmax(1),
        )
        self.encoder_optimizer = SGD(learning_rate)
        self.decoder_optimizer = SGD(learning_rate)
        self.encoder_optimizer.add_parameter(self.encoder.parameters())
        self.decoder_optimizer.add_parameter(self.decoder.parameters())

    def forward(self, input: Tensor) -> Tensor:
        return self.decoder(self.encoder(input))

    def parameters(self) -> list[Tensor]:
        return self.encoder.parameters() + self.decoder.parameters()

    def step(self) -> None:
        self.encoder_optimizer.step()
        self.decoder_optimizer.step()


def _training_losses(dataset: Dataset, model: Model, epochs: int) -> Iterator[tuple[int, float]]:
    if len(dataset) == 0:
        raise ValueError("dataset holds no feature batches")
    if len(dataset.targets) < len(dataset):
        raise ValueError("dataset has fewer target batches than feature batches")
    if epochs < 0:
        raise ValueError("number of epochs must not be negative")

    input = Tensor(dataset.features[0].shape, False)
    targets = IntTensor(dataset.targets[0].shape)
    criterion = NLLLoss(model(input), targets)

    for epoch in range(epochs):
        for features, labels in zip(dataset.features, dataset.targets):
            input.copy(features)
            targets.copy(labels)
            loss = criterion.loss()
            criterion.backward()
            model.step()
            yield epoch, loss


def train(dataset: Dataset, model: Model, epochs: int = 10) -> list[list[float]]:
    """Train ``model`` on every batch for ``epochs`` epochs; return losses per epoch."""
    history: list[list[float]] = [[] for _ in range(max(epochs, 0))]
    for epoch, loss in _training_losses(dataset, model, epochs):
        history[epoch].append(loss)
    return history


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Train a classifier on IDX image data.")
    parser.add_argument("--images", default="data/train-images.idx3-ubyte")
    parser.add_argument("--labels", default="data/train-labels.idx1-ubyte")
    parser.add_argument("--batch-size", type=int, default=64)
    parser.add_argument("--epochs", type=int, default=10)
    parser.add_argument("--learning-rate", type=float, default=0.01)
    args = parser.parse_args(argv)

    dataset = Dataset(args.batch_size, False)
    dataset.read_targets(args.labels)
    dataset.read_features(args.images)

    model = Network(args.learning_rate)
    current = -1
    for epoch, loss in _training_losses(dataset, model, args.epochs):
        if epoch != current:
            current = epoch
            print(f"Epoch: {epoch + 1}")
        print(f"loss {loss}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())