"""
3-vector arithmetic on tensors of shape (..., 3).

All functions broadcast over leading dimensions so the same call works for
one vector or for a batch of field samples.
"""

import torch


def add(a: torch.Tensor, b: torch.Tensor) -> torch.Tensor:
    return a + b


def subtract(a: torch.Tensor, b: torch.Tensor) -> torch.Tensor:
    return a - b


def scale(a: torch.Tensor, factor) -> torch.Tensor:
    """Multiply vectors by a scalar or by one factor per vector."""
    if torch.is_tensor(factor) and factor.ndim > 0 and factor.ndim == a.ndim - 1:
        factor = factor.unsqueeze(-1)
    return a * factor


def dot(a: torch.Tensor, b: torch.Tensor) -> torch.Tensor:
    return torch.sum(a * b, dim=-1)


def cross(a: torch.Tensor, b: torch.Tensor) -> torch.Tensor:
    a, b = torch.broadcast_tensors(a, b)
    return torch.linalg.cross(a, b, dim=-1)


def norm(a: torch.Tensor, keepdim: bool = False) -> torch.Tensor:
    return torch.linalg.norm(a, dim=-1, keepdim=keepdim)


def normalize(a: torch.Tensor) -> torch.Tensor:
    """
    Unit vectors along ``a``.

    Zero-length vectors map to the zero vector instead of NaN.
    """
    length = norm(a, keepdim=True)
    safe = torch.where(length > 0, length, torch.ones_like(length))
    return torch.where(length > 0, a / safe, torch.zeros_like(a))


def distance(a: torch.Tensor, b: torch.Tensor) -> torch.Tensor:
    return norm(a - b)
