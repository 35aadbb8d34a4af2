"""
emfieldtorch
============

Electromagnetic field computation on PyTorch tensors: static source fields,
far-field antenna radiation, material coupling, simplified induction,
energy flow and field-line tracing.
"""

import logging

from .sources import (
    InvalidParameter,
    BaseSrc,
    PointCharge,
    Wire,
    Loop,
    Solenoid,
    WaveSource,
)
from .materials import Material, Sphere, Box, Cylinder, VACUUM, check_overlaps
from . import simulation

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "InvalidParameter",
    "BaseSrc",
    "PointCharge",
    "Wire",
    "Loop",
    "Solenoid",
    "WaveSource",
    "Material",
    "Sphere",
    "Box",
    "Cylinder",
    "VACUUM",
    "check_overlaps",
    "simulation",
]
