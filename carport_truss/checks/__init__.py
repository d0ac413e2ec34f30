# carport_truss/checks - Structural design checks
"""Steel member checks (SP 16.13330, simplified)."""

from .steel import (
    required_area_tension,
    required_area_compression,
    utilization_percent,
    slenderness_ratio,
    slenderness_check,
    check_steel_member,
)

__all__ = [
    'required_area_tension',
    'required_area_compression',
    'utilization_percent',
    'slenderness_ratio',
    'slenderness_check',
    'check_steel_member',
]
