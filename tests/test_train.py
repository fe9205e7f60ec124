import math
import struct

import numpy as np
import pytest

from cabernet.dataset import Dataset
from cabernet.tensor import Tensor
from cabernet.train import Autoencoder, Network, main, train


def _write_files(tmp_path, count):
    rng = np.random.default_rng(0)
    pixels = rng.integers(0, 256, size=(count, 28 * 28), dtype=np.uint8)
    labels = bytes(i % 10 for i in range(count))
    images_path = tmp_path / "images.idx3"
    labels_path = tmp_path / "labels.idx1"
    images_path.write_bytes(struct.pack(">IIII", 2051, count, 28, 28) + pixels.tobytes())
    labels_path.write_bytes(struct.pack(">II", 2049, count) + labels)
    return images_path, labels_path


def _dataset(tmp_path, count, batch_size):
    images_path, labels_path = _write_files(tmp_path, count)
    dataset = Dataset(batch_size)
    dataset.read_features(images_path)
    dataset.read_targets(labels_path)
    return dataset


def test_network_outputs_log_probabilities():
    model = Network()
    x = Tensor((2, 784))
    x.fill(0.5)
    y = model(x)
    y.perform()
    assert y.shape == (2, 10)
    rows = np.exp(np.array(y.tolist()).reshape(2, 10)).sum(axis=1)
    assert rows == pytest.approx([1.0, 1.0], rel=1e-4)


def test_network_registers_all_parameters():
    model = Network(0.1)
    assert len(model.optimizer.parameters) == 4
    assert model.optimizer.learning_rate == pytest.approx(0.1)


def test_autoencoder_step_updates_weights():
    model = Autoencoder()
    x = Tensor((1, 784))
    x.fill(0.25)
    y = model(x)
    y.perform()
    assert y.shape == (1, 784)
    before = model.encoder.parameters()[0].tolist()
    gradient = Tensor((1, 784))
    gradient.fill(1.0)
    y.backward(gradient)
    model.step()
    assert model.encoder.parameters()[0].tolist() != before
    assert model.decoder.parameters()[2].grad.tolist() == [0.0] * (784 * 128)


def test_train_returns_finite_losses_and_changes_weights(tmp_path):
    dataset = _dataset(tmp_path, 3, 1)
    model = Network()
    before = model.parameters()[0].tolist()
    history = train(dataset, model, epochs=2)
    assert [len(epoch) for epoch in history] == [2, 2]
    assert all(math.isfinite(loss) and loss > 0 for epoch in history for loss in epoch)
    assert model.parameters()[0].tolist() != before


def test_train_rejects_empty_dataset():
    with pytest.raises(ValueError):
        train(Dataset(4), Network(), epochs=1)


def test_main_prints_progress(tmp_path, capsys):
    images_path, labels_path = _write_files(tmp_path, 3)
    code = main(
        [
            "--images", str(images_path),
            "--labels", str(labels_path),
            "--batch-size", "1",
            "--epochs", "2",
        ]
    )
    output = capsys.readouterr().out
    assert code == 0
    assert "Epoch: 1" in output
    assert "Epoch: 2" in output
    assert output.count("loss") == 4