# carport_truss/catalog.py
"""
CATALOG: STEEL TUBE PROFILES
============================

PURPOSE:
--------
Reference table of hollow structural steel tubes (GOST 30245-2003 /
GOST 8639-82) that the section selector picks from. The table is static
data, not computed.

WHY A REPOSITORY CLASS?
-----------------------
The selector only needs "the lightest profile that satisfies X" and "the
largest profile there is". Wrapping the table in ProfileCatalog keeps that
contract small, so tests can hand the selector a synthetic catalog.

UNITS:
------
- nominal_h, nominal_b, wall_t : mm
- area                         : cm²
- Ix, Iy                       : cm⁴
- Wx, Wy                       : cm³
- i_x, i_y                     : cm (radius of gyration)
- linear_weight                : kg/m
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple


@dataclass(frozen=True)
class Profile:
    """
    One catalog tube.

    frozen=True: catalog entries are shared by every calculation and must
    never change after creation.
    """
    name: str
    nominal_h: float
    nominal_b: float
    wall_t: float
    area: float
    Ix: float
    Iy: float
    Wx: float
    Wy: float
    i_x: float
    i_y: float
    linear_weight: float

    def meets(
        self,
        min_area: float = 0.0,
        min_h: float = 0.0,
        min_t: float = 0.0,
        min_b: float = 0.0,
    ) -> bool:
        """True when area, nominal size and wall thickness all reach the minimums."""
        return (
            self.area >= min_area
            and self.nominal_h >= min_h
            and self.nominal_b >= min_b
            and self.wall_t >= min_t
        )


# ============================================================================
# PROFILE TABLE (ordered by linear weight, ascending)
# ============================================================================

PROFILES = [
    Profile("40x20x2", 40, 20, 2, 2.12, 4.31, 1.25, 2.15, 1.25, 1.42, 0.77, 1.66),
    Profile("40x40x2", 40, 40, 2, 2.92, 6.74, 6.74, 3.37, 3.37, 1.52, 1.52, 2.29),
    Profile("50x50x2", 50, 50, 2, 3.72, 14.07, 14.07, 5.63, 5.63, 1.95, 1.95, 2.92),
    Profile("60x40x2", 60, 40, 2, 3.72, 18.27, 9.38, 6.09, 4.69, 2.22, 1.59, 2.92),
    Profile("40x40x3", 40, 40, 3, 4.21, 9.17, 9.17, 4.59, 4.59, 1.48, 1.48, 3.30),
    Profile("60x60x2", 60, 60, 2, 4.52, 25.15, 25.15, 8.38, 8.38, 2.36, 2.36, 3.55),
    Profile("50x50x3", 50, 50, 3, 5.41, 19.53, 19.53, 7.81, 7.81, 1.90, 1.90, 4.25),
    Profile("60x40x3", 60, 40, 3, 5.41, 25.59, 13.06, 8.53, 6.53, 2.17, 1.55, 4.25),
    Profile("60x60x3", 60, 60, 3, 6.61, 35.61, 35.61, 11.87, 11.87, 2.32, 2.32, 5.19),
    Profile("80x40x3", 80, 40, 3, 6.61, 53.68, 16.59, 13.42, 8.30, 2.85, 1.58, 5.19),
    Profile("80x60x3", 80, 60, 3, 7.81, 72.07, 43.87, 18.02, 14.62, 3.04, 2.37, 6.13),
    Profile("80x80x3", 80, 80, 3, 9.01, 88.34, 88.34, 22.09, 22.09, 3.13, 3.13, 7.07),
    Profile("80x60x4", 80, 60, 4, 10.15, 91.2, 55.4, 22.8, 18.5, 3.00, 2.34, 7.97),
    Profile("100x100x3", 100, 100, 3, 11.41, 177.3, 177.3, 35.4, 35.4, 3.94, 3.94, 8.96),
    Profile("80x80x4", 80, 80, 4, 11.75, 112.5, 112.5, 28.1, 28.1, 3.09, 3.09, 9.22),
    Profile("100x100x4", 100, 100, 4, 14.95, 228.6, 228.6, 45.7, 45.7, 3.91, 3.91, 11.73),
    Profile("100x100x5", 100, 100, 5, 18.36, 275.9, 275.9, 55.2, 55.2, 3.88, 3.88, 14.41),
]


class ProfileCatalog:
    """
    Read-only, weight-ascending view over a set of profiles.

    The constructor sorts its input by linear weight (stable, so equal
    weights keep their given order). Nothing mutates the catalog afterwards;
    one instance can be shared across concurrent calculations.
    """

    def __init__(self, profiles: Iterable[Profile]):
        ordered = tuple(sorted(profiles, key=lambda p: p.linear_weight))
        if not ordered:
            raise ValueError("ProfileCatalog needs at least one profile")
        self._profiles: Tuple[Profile, ...] = ordered

    def __iter__(self) -> Iterator[Profile]:
        return iter(self._profiles)

    def __len__(self) -> int:
        return len(self._profiles)

    def __getitem__(self, index: int) -> Profile:
        return self._profiles[index]

    @property
    def profiles(self) -> Tuple[Profile, ...]:
        return self._profiles

    @property
    def lightest(self) -> Profile:
        return self._profiles[0]

    @property
    def heaviest(self) -> Profile:
        return self._profiles[-1]

    def first_matching(
        self,
        min_area: float = 0.0,
        min_h: float = 0.0,
        min_t: float = 0.0,
        min_b: float = 0.0,
    ) -> Optional[Profile]:
        """Lightest profile meeting every minimum, or None."""
        for profile in self._profiles:
            if profile.meets(min_area, min_h, min_t, min_b):
                return profile
        return None

    def by_name(self, name: str) -> Profile:
        for profile in self._profiles:
            if profile.name == name:
                return profile
        raise KeyError(f"Unknown profile: {name}")


DEFAULT_CATALOG = ProfileCatalog(PROFILES)
