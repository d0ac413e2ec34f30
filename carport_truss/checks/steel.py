# carport_truss/checks/steel.py
"""Steel member checks per SP 16.13330 (simplified, closed form)."""

from typing import Any, Dict, Tuple

import numpy as np

from ..catalog import Profile
from ..config import DEFAULT_SETTINGS, EngineSettings


def required_area_tension(N: float, Ry: float, gamma_c: float = 1.0) -> float:
    """
    Gross area needed by a tension member.

    A_req = N / (Ry * gamma_c)

    Args:
        N: Axial force (kN)
        Ry: Design resistance (kN/cm²)
        gamma_c: Operating condition factor

    Returns:
        A_req (cm²)
    """
    return abs(N) / (Ry * gamma_c)


def required_area_compression(N: float, Ry: float, gamma_c: float = 1.0, phi: float = 0.5) -> float:
    """
    Gross area needed by a compression member.

    A_req = N / (phi * Ry * gamma_c)

    phi is a fixed buckling factor; there is no iteration on the member's
    actual slenderness.

    Args:
        N: Axial force (kN)
        Ry: Design resistance (kN/cm²)
        gamma_c: Operating condition factor
        phi: Buckling (stability) factor

    Returns:
        A_req (cm²)
    """
    return abs(N) / (phi * Ry * gamma_c)


def utilization_percent(required: float, provided: float) -> float:
    """required / provided as a percentage, clamped to [0, 100]."""
    if provided <= 0:
        return 100.0
    return float(np.clip(required / provided * 100.0, 0.0, 100.0))


def slenderness_ratio(length: float, i: float, K: float = 2.0) -> float:
    """
    lambda = K * L / i

    Args:
        length: Unbraced length (m)
        i: Radius of gyration (cm)
        K: Effective length factor (2.0 = cantilever post)
    """
    if i <= 0:
        return float('inf')
    return K * length * 100.0 / i


def slenderness_check(
    profile: Profile,
    L: float,
    K: float = 2.0,
    limit: float = 150.0,
) -> Tuple[float, str]:
    """
    Check a column's slenderness about its strong axis.

    Returns:
        slenderness: K*L/i_x
        status: 'PASS' or 'WARNING'
    """
    slenderness = slenderness_ratio(L, profile.i_x, K)
    if slenderness <= limit:
        return slenderness, 'PASS'
    return slenderness, 'WARNING'


def check_steel_member(
    N: float,
    profile: Profile,
    compression: bool,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> Dict[str, Any]:
    """
    Check an axially loaded member.

    Args:
        N: Axial force magnitude (kN)
        profile: Section to check
        compression: True for compression (phi applied), False for tension
        settings: Ry, gamma_c and phi

    Returns:
        Dictionary with:
            - required_area: cm²
            - provided_area: cm²
            - utilization: percent, capped at 100
            - status: 'PASS' or 'FAIL'
            - governing: 'tension' or 'compression'
    """
    if compression:
        A_req = required_area_compression(N, settings.Ry, settings.gamma_c, settings.phi)
    else:
        A_req = required_area_tension(N, settings.Ry, settings.gamma_c)

    return {
        'required_area': A_req,
        'provided_area': profile.area,
        'utilization': utilization_percent(A_req, profile.area),
        'status': 'PASS' if profile.area >= A_req else 'FAIL',
        'governing': 'compression' if compression else 'tension',
    }
