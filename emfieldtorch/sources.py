import math
import uuid

import torch

from .utils import as_vector3, is_scalar


class InvalidParameter(ValueError):
    """Raised when a source, antenna or material is built from malformed data."""


def _finite_vector(value, name):
    try:
        vec = as_vector3(value)
    except (TypeError, ValueError) as e:
        raise InvalidParameter(f"{name} must be a 3-vector, got {value!r}") from e
    if not torch.all(torch.isfinite(vec)):
        raise InvalidParameter(f"{name} must be finite, got {vec.tolist()}")
    return vec


def _finite_scalar(value, name):
    if not is_scalar(value):
        raise InvalidParameter(f"{name} must be a scalar, got {value!r}")
    value = float(value)
    if not math.isfinite(value):
        raise InvalidParameter(f"{name} must be finite, got {value}")
    return value


def _positive_scalar(value, name):
    value = _finite_scalar(value, name)
    if value <= 0:
        raise InvalidParameter(f"{name} must be positive, got {value}")
    return value


class BaseSrc:
    """
    Base class for field sources.

    Parameters
    ----------
    location : array_like
        Source location [x, y, z].
    identifier : str, optional
        Identity assigned by the scene store. A UUID is generated when omitted.
    """

    def __init__(self, location, identifier=None, **kwargs):
        self.location = location
        self.identifier = identifier if identifier is not None else str(uuid.uuid4())

    @property
    def location(self):
        """Source location

        Returns
        -------
        torch.Tensor
            Location of shape (3,) and dtype float64
        """
        return self._location

    @location.setter
    def location(self, value):
        self._location = _finite_vector(value, "location")

    def __repr__(self):
        return (
            f"{type(self).__name__}(location={self.location.tolist()}, "
            f"identifier={self.identifier!r})"
        )


class PointCharge(BaseSrc):
    """
    Point charge, optionally oscillating in time.

    Parameters
    ----------
    location : array_like
        Charge location [x, y, z]
    strength : float, default: 1.0
        Charge strength (signed)
    frequency : float, default: 0.0
        Oscillation frequency in Hz. ``0`` gives a static charge.
    phase : float, default: 0.0
        Oscillation phase in radians
    """

    def __init__(self, location, strength=1.0, frequency=0.0, phase=0.0, **kwargs):
        super().__init__(location, **kwargs)
        self.strength = _finite_scalar(strength, "strength")
        self.frequency = frequency
        self.phase = _finite_scalar(phase, "phase")

    @property
    def frequency(self):
        """Oscillation frequency

        Returns
        -------
        float
            Oscillation frequency in Hz, ``0`` for a static charge
        """
        return self._frequency

    @frequency.setter
    def frequency(self, freq):
        freq = _finite_scalar(freq, "frequency")
        if freq < 0:
            raise InvalidParameter(f"frequency must be non-negative, got {freq}")
        self._frequency = freq

    @property
    def is_oscillating(self):
        return self.frequency > 0

    def effective_strength(self, time=0.0):
        """
        Charge strength at ``time``.

        ``strength * sin(2*pi*f*time + phase)`` for oscillating charges,
        ``strength`` otherwise.
        """
        if self.is_oscillating:
            return self.strength * math.sin(
                2 * math.pi * self.frequency * time + self.phase
            )
        return self.strength


class Wire(BaseSrc):
    """
    Infinite straight current-carrying wire.

    Parameters
    ----------
    location : array_like
        A point on the wire [x, y, z]
    current : float, default: 0.0
        Current in Amperes. The sign selects the circulation sense.
    direction : array_like, default: [0, 1, 0]
        Direction of the wire. Need not be normalized.
    """

    def __init__(self, location, current=0.0, direction=(0.0, 1.0, 0.0), **kwargs):
        super().__init__(location, **kwargs)
        self.current = _finite_scalar(current, "current")
        self.direction = direction

    @property
    def direction(self):
        return self._direction

    @direction.setter
    def direction(self, value):
        vec = _finite_vector(value, "direction")
        if torch.linalg.norm(vec) == 0:
            raise InvalidParameter("direction must be a non-zero vector")
        self._direction = vec


class Loop(BaseSrc):
    """
    Circular current loop whose axis is parallel to y.

    Parameters
    ----------
    location : array_like
        Loop center [x, y, z]
    radius : float, default: 1.0
        Loop radius in meters
    current : float, default: 0.0
        Loop current in Amperes
    """

    def __init__(self, location, radius=1.0, current=0.0, **kwargs):
        super().__init__(location, **kwargs)
        self.radius = _positive_scalar(radius, "radius")
        self.current = _finite_scalar(current, "current")

    @property
    def magnetic_moment(self):
        """Magnetic moment ``pi * radius**2 * current``"""
        return math.pi * self.radius**2 * self.current


class Solenoid(BaseSrc):
    """
    Finite solenoid whose axis is parallel to y.

    Parameters
    ----------
    location : array_like
        Solenoid center [x, y, z]
    radius : float, default: 0.5
        Winding radius in meters
    length : float, default: 2.0
        Length along the axis in meters
    turns : int, default: 50
        Number of turns, at least 1
    current : float, default: 0.0
        Winding current in Amperes
    """

    def __init__(self, location, radius=0.5, length=2.0, turns=50, current=0.0, **kwargs):
        super().__init__(location, **kwargs)
        self.radius = _positive_scalar(radius, "radius")
        self.length = _positive_scalar(length, "length")
        if isinstance(turns, bool) or not is_scalar(turns) or int(turns) != turns:
            raise InvalidParameter(f"turns must be an integer, got {turns!r}")
        if turns < 1:
            raise InvalidParameter(f"turns must be at least 1, got {turns}")
        self.turns = int(turns)
        self.current = _finite_scalar(current, "current")

    @property
    def turn_density(self):
        """Turns per unit length"""
        return self.turns / self.length


class WaveSource(BaseSrc):
    """
    Radiating antenna source.

    Dipole, monopole and loop antennas all radiate with the far-field
    dipole pattern oriented along ``orientation``.

    Parameters
    ----------
    location : array_like
        Antenna feed point [x, y, z]
    frequency : float, default: 100e6
        Radiation frequency in Hz, must be positive
    amplitude : float, default: 1.0
        Drive amplitude
    phase : float, default: 0.0
        Drive phase in radians
    orientation : array_like, default: [0, 1, 0]
        Antenna axis. Normalized internally.
    length : float, default: 1.0
        Antenna length in meters
    antenna_type : {'dipole', 'monopole', 'loop'}, default: 'dipole'
    """

    ANTENNA_TYPES = ("dipole", "monopole", "loop")

    def __init__(
        self,
        location,
        frequency=100e6,
        amplitude=1.0,
        phase=0.0,
        orientation=(0.0, 1.0, 0.0),
        length=1.0,
        antenna_type="dipole",
        **kwargs,
    ):
        super().__init__(location, **kwargs)
        if antenna_type not in self.ANTENNA_TYPES:
            raise InvalidParameter(
                f"antenna_type must be one of {self.ANTENNA_TYPES}, got {antenna_type!r}"
            )
        self.antenna_type = antenna_type
        self.frequency = _positive_scalar(frequency, "frequency")
        self.amplitude = _finite_scalar(amplitude, "amplitude")
        self.phase = _finite_scalar(phase, "phase")
        self.length = _positive_scalar(length, "length")
        self.orientation = orientation

    @property
    def orientation(self):
        """Unit vector along the antenna axis"""
        return self._orientation

    @orientation.setter
    def orientation(self, value):
        vec = _finite_vector(value, "orientation")
        length = torch.linalg.norm(vec)
        if length == 0:
            raise InvalidParameter("orientation must be a non-zero vector")
        self._orientation = vec / length

    @property
    def angular_frequency(self):
        return 2 * math.pi * self.frequency

    @property
    def dipole_moment(self):
        """Peak dipole moment ``amplitude * length``"""
        return self.amplitude * self.length


ELECTRIC_SOURCE_TYPES = (PointCharge,)
MAGNETIC_SOURCE_TYPES = (Wire, Loop, Solenoid)
