"""Readers for IDX (MNIST-style) files and simple CSV datasets."""

from __future__ import annotations

import csv
import os
import struct

import numpy as np

from .tensor import IntTensor, Tensor

_LABELS_HEADER = struct.Struct(">II")
_IMAGES_HEADER = struct.Struct(">IIII")

PathLike = str | os.PathLike


def _read_idx(filepath: PathLike, header: struct.Struct) -> tuple[tuple[int, ...], bytes]:
    with open(filepath, "rb") as file:
        raw = file.read()
    if len(raw) < header.size:
        raise ValueError(f"{os.fspath(filepath)!r} is too short for an IDX header")
    return header.unpack_from(raw), raw[header.size:]


def _padded(payload: bytes, length: int) -> np.ndarray:
    values = np.zeros(length, dtype=np.uint8)
    chunk = np.frombuffer(payload[:length], dtype=np.uint8)
    values[: chunk.size] = chunk
    return values


def _batch_count(count: int, batch_size: int) -> int:
    return -(-count // batch_size)


class Dataset:
    """Batches of features and class targets read from IDX files.

    Every file is cut into batches of ``batch_size`` samples, and the last
    batch read from each file is dropped, since it may be padded with zeros.
    """

    def __init__(self, batch_size: int, shuffle: bool = False) -> None:
        if batch_size <= 0:
            raise ValueError("batch size must be positive")
        self.batch_size = int(batch_size)
        self.shuffle = bool(shuffle)
        self.features_size = 0
        self._features: list[Tensor] = []
        self._targets: list[IntTensor] = []

    @property
    def features(self) -> list[Tensor]:
        return self._features

    @property
    def targets(self) -> list[IntTensor]:
        return self._targets

    def read_targets(self, filepath: PathLike) -> None:
        """Append the label batches of an IDX1 file."""
        (_magic, count), payload = _read_idx(filepath, _LABELS_HEADER)
        batches = _batch_count(count, self.batch_size)
        labels = _padded(payload, batches * self.batch_size).reshape(batches, self.batch_size)
        new_batches = []
        for row in labels:
            batch = IntTensor((self.batch_size,))
            batch.data[:] = row
            new_batches.append(batch)
        self._targets.extend(new_batches[:-1])

    def read_features(self, filepath: PathLike) -> None:
        """Append the image batches of an IDX3 file, scaled to [0, 1]."""
        (_magic, count, rows, cols), payload = _read_idx(filepath, _IMAGES_HEADER)
        self.features_size = rows * cols
        batches = _batch_count(count, self.batch_size)
        per_batch = self.batch_size * self.features_size
        pixels = _padded(payload, batches * per_batch).reshape(batches, per_batch)
        new_batches = []
        for row in pixels:
            batch = Tensor((self.batch_size, self.features_size), False)
            batch.data[:] = row.astype(np.float32) / np.float32(255.0)
            new_batches.append(batch)
        self._features.extend(new_batches[:-1])

    def clear(self) -> None:
        self._features.clear()
        self._targets.clear()

    def __len__(self) -> int:
        return len(self._features)


def read_csv(filename: PathLike) -> tuple[list[list[float]], list[int]]:
    """Read a CSV file whose first column is the target and the rest features.

    The first line is a header and is skipped.
    """
    features: list[list[float]] = []
    targets: list[int] = []
    with open(filename, newline="") as file:
        reader = csv.reader(file)
        next(reader, None)
        for row in reader:
            if not row:
                continue
            target, *values = row
            targets.append(int(target))
            features.append([float(value) for value in values])
    return features, targets