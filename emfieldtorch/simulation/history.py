"""
Field samples and the rolling history window used for induction.

The history belongs to the caller's time-stepping loop. Solvers only ever
see an immutable snapshot of it.
"""

import logging
from collections import deque
from dataclasses import dataclass

import torch

from ..constants import HISTORY_LIMIT
from ..utils import as_vector3

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldSample:
    """
    Fields observed at one point and one instant.

    Attributes
    ----------
    electric : torch.Tensor
        Electric field (3,)
    magnetic : torch.Tensor
        Magnetic flux density (3,)
    poynting : torch.Tensor
        Poynting vector (3,)
    timestamp : float
        Observation time in seconds
    """

    electric: torch.Tensor
    magnetic: torch.Tensor
    poynting: torch.Tensor
    timestamp: float

    @classmethod
    def from_fields(cls, electric, magnetic, poynting, timestamp):
        return cls(
            as_vector3(electric),
            as_vector3(magnetic),
            as_vector3(poynting),
            float(timestamp),
        )

    def as_row(self):
        """
        Flat ``[t, Ex, Ey, Ez, Bx, By, Bz, Sx, Sy, Sz]`` row for tabular export.
        """
        return [self.timestamp] + torch.cat(
            [self.electric, self.magnetic, self.poynting]
        ).tolist()


class FieldHistory:
    """
    Bounded, time-ordered window of :class:`FieldSample` objects.

    Parameters
    ----------
    maxlen : int, default: HISTORY_LIMIT
        Capacity; appending to a full history evicts the oldest sample.
    """

    def __init__(self, maxlen=HISTORY_LIMIT):
        if maxlen < 2:
            raise ValueError(f"maxlen must be at least 2, got {maxlen}")
        self._samples = deque(maxlen=maxlen)

    @property
    def maxlen(self):
        return self._samples.maxlen

    def append(self, sample):
        """
        Add a sample; timestamps must not decrease.
        """
        if self._samples and sample.timestamp < self._samples[-1].timestamp:
            raise ValueError(
                f"Sample at t={sample.timestamp} is older than the latest "
                f"sample at t={self._samples[-1].timestamp}"
            )
        if len(self._samples) == self._samples.maxlen:
            logger.debug(
                "History full, evicting sample at t=%s", self._samples[0].timestamp
            )
        self._samples.append(sample)

    def snapshot(self):
        """Immutable copy of the current window, oldest first."""
        return tuple(self._samples)

    def clear(self):
        self._samples.clear()

    @property
    def latest(self):
        return self._samples[-1] if self._samples else None

    def __len__(self):
        return len(self._samples)

    def __iter__(self):
        return iter(tuple(self._samples))

    def __getitem__(self, index):
        return self._samples[index]
