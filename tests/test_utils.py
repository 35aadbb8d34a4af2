"""
Tests for vector arithmetic and input coercion helpers.
"""

import logging

import numpy as np
import pytest
import torch

from emfieldtorch.logging_config import setup_logging
from emfieldtorch.simulation import trace_electric_field_line
from emfieldtorch.utils import (
    as_array_n_by_dim,
    as_points,
    as_vector3,
    is_scalar,
    restore_shape,
    vector_math,
)

torch.set_default_dtype(torch.float64)


def test_cross_and_dot():
    x = torch.tensor([1.0, 0.0, 0.0])
    y = torch.tensor([0.0, 1.0, 0.0])
    assert torch.allclose(vector_math.cross(x, y), torch.tensor([0.0, 0.0, 1.0]))
    assert vector_math.dot(x, y) == 0.0


def test_cross_broadcasts():
    axis = torch.tensor([0.0, 1.0, 0.0])
    pts = torch.tensor([[1.0, 0.0, 0.0], [0.0, 0.0, 1.0]])
    result = vector_math.cross(axis, pts)
    assert result.shape == (2, 3)
    assert torch.allclose(result[0], torch.tensor([0.0, 0.0, -1.0]))
    assert torch.allclose(result[1], torch.tensor([1.0, 0.0, 0.0]))


def test_normalize_zero_vector():
    result = vector_math.normalize(torch.zeros(3))
    assert torch.all(result == 0)
    assert torch.all(torch.isfinite(result))


def test_normalize_batch():
    vecs = torch.tensor([[3.0, 4.0, 0.0], [0.0, 0.0, 0.0]])
    result = vector_math.normalize(vecs)
    assert torch.allclose(result[0], torch.tensor([0.6, 0.8, 0.0]))
    assert torch.all(result[1] == 0)


def test_scale_and_distance():
    a = torch.tensor([1.0, 2.0, 2.0])
    assert torch.allclose(vector_math.scale(a, 2.0), torch.tensor([2.0, 4.0, 4.0]))
    assert vector_math.distance(a, torch.zeros(3)) == pytest.approx(3.0)
    assert torch.allclose(vector_math.add(a, a), vector_math.scale(a, 2.0))
    assert torch.all(vector_math.subtract(a, a) == 0)

    batch = torch.ones(2, 3)
    scaled = vector_math.scale(batch, torch.tensor([1.0, 3.0]))
    assert torch.allclose(scaled[1], torch.full((3,), 3.0))


def test_is_scalar():
    assert is_scalar(1.0)
    assert is_scalar(np.float64(2.0))
    assert is_scalar(torch.tensor(3.0))
    assert not is_scalar([1.0, 2.0])


def test_as_vector3():
    vec = as_vector3(np.array([1, 2, 3]))
    assert vec.dtype == torch.float64
    with pytest.raises(ValueError):
        as_vector3([1.0, 2.0])


def test_as_points_round_trip_shapes():
    pts, single = as_points([1.0, 2.0, 3.0])
    assert pts.shape == (1, 3)
    assert single
    assert restore_shape(pts, single).shape == (3,)

    pts, single = as_points(torch.zeros(4, 3))
    assert pts.shape == (4, 3)
    assert not single

    with pytest.raises(ValueError):
        as_array_n_by_dim(torch.zeros(4, 2), 3)


def test_setup_logging(tmp_path):
    log_file = tmp_path / "fields.log"
    logger = setup_logging(logging.DEBUG, log_file=str(log_file))
    assert logger is logging.getLogger("emfieldtorch")
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2

    # Child module loggers reach the configured handlers
    trace_electric_field_line([1.0, 0.0, 0.0], [])

    setup_logging(logging.WARNING)
    assert len(logger.handlers) == 1
    text = log_file.read_text(encoding="utf-8")
    assert "emfieldtorch.simulation.field_lines - DEBUG" in text
    assert "weak field" in text
