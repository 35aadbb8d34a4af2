"""
Physical constants and numerical tunables
=========================================
Central registry for every constant the field solvers share.

Physical constants come from :mod:`scipy.constants`, except the Coulomb
constant which keeps its rounded visualization value.

Exports:
    EPSILON_0, MU_0, SPEED_OF_LIGHT, COULOMB_CONSTANT
    MIN_DISTANCE, LOOP_AXIS_TOLERANCE, FAR_FIELD_FACTOR, INDUCTION_COUPLING
    ELECTRIC_LINE_THRESHOLD, MAGNETIC_LINE_THRESHOLD
    ELECTRIC_LINE_BOUND, MAGNETIC_LINE_BOUND, LOOP_CLOSURE_MIN_STEPS
    HISTORY_LIMIT
"""
from scipy import constants as _sc

# Physical constants (SI)
EPSILON_0: float = _sc.epsilon_0
MU_0: float = _sc.mu_0
SPEED_OF_LIGHT: float = _sc.c
COULOMB_CONSTANT: float = 8.99e9

# Sources closer than this contribute nothing at a sample point
MIN_DISTANCE: float = 0.01

# Lateral offset from a loop's axis inside which the on-axis model applies
LOOP_AXIS_TOLERANCE: float = 0.1

# Radiation is evaluated only beyond FAR_FIELD_FACTOR / k
FAR_FIELD_FACTOR: float = 10.0

# Visual tuning constant for induction; not physically derived
INDUCTION_COUPLING: float = 0.1

# Field-line tracing
ELECTRIC_LINE_THRESHOLD: float = 1e-6
MAGNETIC_LINE_THRESHOLD: float = 1e-12
ELECTRIC_LINE_BOUND: float = 50.0
MAGNETIC_LINE_BOUND: float = 20.0
LOOP_CLOSURE_MIN_STEPS: int = 50

# Rolling field history length
HISTORY_LIMIT: int = 1000
