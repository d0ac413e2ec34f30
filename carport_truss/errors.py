# carport_truss/errors.py
"""Exceptions and warning categories of the truss engine."""

from enum import Enum


class TrussEngineError(Exception):
    """Base class for engine failures."""
    pass


class InvalidInputError(TrussEngineError):
    """Raised for input no clamp can repair (NaN, inf, unknown tags)."""
    pass


class WarningKind(str, Enum):
    """
    Expected boundary conditions. They are reported, never raised:
    - INPUT_DEGENERATE: a dimension or derived height was clamped
    - CAPACITY_EXCEEDED: no catalog profile is big enough
    - STABILITY_EXCEEDED: a column is too slender
    """
    INPUT_DEGENERATE = 'InputDegenerate'
    CAPACITY_EXCEEDED = 'CapacityExceeded'
    STABILITY_EXCEEDED = 'StabilityExceeded'
