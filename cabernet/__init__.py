"""Lazy computational graphs, reverse-mode gradients and small neural networks."""

__version__ = "0.1.0"

__all__ = [
    "criterions",
    "dataset",
    "distributions",
    "functions",
    "layers",
    "model",
    "normalizers",
    "operations",
    "optimizers",
    "tensor",
    "train",
]