# carport_truss/selection.py
"""
SECTION SELECTION: pick catalog tubes for every truss role
==========================================================

RULE:
-----
Scan the catalog lightest first and take the first profile whose area and
nominal size both reach the requirement. When nothing qualifies, take the
heaviest profile and report it as undersized; selection never raises.

ROLES:
------
- top chord     compression, A_req = N / (phi * Ry * gamma_c), min 60 mm
- bottom chord  tension,     A_req = N / (Ry * gamma_c),       min 60 mm
- web           compression on the web force, min 40x2 mm
- pillar        taken from the nominal menu (60 / 80 / 100), then checked
                for area and slenderness, never re-sized automatically
- purlin        lightest 40x2 mm tube
"""

import logging
from typing import List, Tuple

from .catalog import Profile, ProfileCatalog
from .checks.steel import (
    check_steel_member,
    required_area_compression,
    required_area_tension,
    slenderness_check,
    utilization_percent,
)
from .config import DEFAULT_SETTINGS, PILLAR_MENU, EngineSettings, PillarSize
from .errors import WarningKind
from .model import ElementSections, LoadAnalysis, Utilization

log = logging.getLogger(__name__)


class SectionSelector:
    """
    Maps required capacities onto a ProfileCatalog.

    The selector holds only read-only references (catalog, settings), so one
    instance can serve any number of calculations.
    """

    def __init__(self, catalog: ProfileCatalog, settings: EngineSettings = DEFAULT_SETTINGS):
        self.catalog = catalog
        self.settings = settings

    def select(
        self,
        required_area: float,
        min_h: float = 0.0,
        min_t: float = 0.0,
        label: str = 'member',
    ) -> Tuple[Profile, List[str]]:
        """
        Lightest profile with area >= required_area and the given minimum size.

        Falls back to the heaviest profile with an "undersized" warning.
        """
        profile = self.catalog.first_matching(required_area, min_h, min_t)
        if profile is not None:
            return profile, []

        largest = self.catalog.heaviest
        msg = (
            f"{WarningKind.CAPACITY_EXCEEDED.value}: {label} section undersized: "
            f"required {required_area:.2f} cm² exceeds the largest catalog profile "
            f"{largest.name} ({largest.area:.2f} cm²)."
        )
        log.warning(msg)
        return largest, [msg]

    def select_top_chord(self, N: float) -> Tuple[Profile, float, List[str]]:
        s = self.settings
        A_req = required_area_compression(N, s.Ry, s.gamma_c, s.phi)
        profile, warnings = self.select(A_req, s.chord_min_h, s.chord_min_t, 'top chord')
        return profile, A_req, warnings

    def select_bottom_chord(self, N: float) -> Tuple[Profile, float, List[str]]:
        s = self.settings
        A_req = required_area_tension(N, s.Ry, s.gamma_c)
        profile, warnings = self.select(A_req, s.chord_min_h, s.chord_min_t, 'bottom chord')
        return profile, A_req, warnings

    def select_web(self, N: float) -> Tuple[Profile, float, List[str]]:
        s = self.settings
        A_req = required_area_compression(N, s.Ry, s.gamma_c, s.phi)
        profile, warnings = self.select(A_req, s.web_min_h, s.web_min_t, 'web')
        return profile, A_req, warnings

    def select_purlin(self) -> Profile:
        s = self.settings
        profile, _ = self.select(0.0, s.purlin_min_h, s.purlin_min_t, 'purlin')
        return profile

    def select_pillar(
        self,
        pillar_size: PillarSize,
        N: float,
        pillar_height: float,
    ) -> Tuple[Profile, dict, List[str]]:
        """
        Post profile from the nominal menu, then an area and a slenderness check.

        Returns (profile, check dict from check_steel_member plus 'slenderness',
        warnings).
        """
        s = self.settings
        side, min_t = PILLAR_MENU[PillarSize(pillar_size)]
        profile = self.catalog.first_matching(0.0, side, min_t, min_b=side)
        warnings = []
        if profile is None:
            profile = self.catalog.heaviest
            msg = (
                f"{WarningKind.CAPACITY_EXCEEDED.value}: no {PillarSize(pillar_size).value} "
                f"post in the catalog; post section undersized, using {profile.name}."
            )
            log.warning(msg)
            warnings.append(msg)

        check = check_steel_member(N, profile, compression=True, settings=s)
        if check['status'] == 'FAIL':
            msg = (
                f"{WarningKind.CAPACITY_EXCEEDED.value}: post section undersized: "
                f"{profile.name} provides {profile.area:.2f} cm², "
                f"{check['required_area']:.2f} cm² required."
            )
            log.warning(msg)
            warnings.append(msg)

        slenderness, status = slenderness_check(
            profile, pillar_height, K=s.column_end_factor, limit=s.slenderness_limit,
        )
        check['slenderness'] = slenderness
        if status != 'PASS':
            msg = (
                f"{WarningKind.STABILITY_EXCEEDED.value}: post slenderness {slenderness:.0f} "
                f"exceeds {s.slenderness_limit:.0f}; use a larger post section."
            )
            log.warning(msg)
            warnings.append(msg)

        return profile, check, warnings

    def select_sections(
        self,
        loads: LoadAnalysis,
        pillar_size: PillarSize,
        pillar_height: float,
    ) -> Tuple[ElementSections, Utilization, List[str]]:
        """
        Choose a profile for every role from the load analysis.

        Returns (ElementSections, Utilization, warnings in the order produced).
        """
        warnings = []

        top, A_top, w = self.select_top_chord(loads.max_axial_top)
        warnings.extend(w)
        bottom, A_bottom, w = self.select_bottom_chord(loads.max_axial_bottom)
        warnings.extend(w)
        web, A_web, w = self.select_web(loads.max_axial_web)
        warnings.extend(w)
        pillar, pillar_check, w = self.select_pillar(pillar_size, loads.max_shear, pillar_height)
        warnings.extend(w)
        purlin = self.select_purlin()

        sections = ElementSections(
            top_chord=top,
            bottom_chord=bottom,
            web=web,
            pillar=pillar,
            purlin=purlin,
        )
        utilization = Utilization(
            top=utilization_percent(A_top, top.area),
            bottom=utilization_percent(A_bottom, bottom.area),
            web=utilization_percent(A_web, web.area),
            pillar=pillar_check['utilization'],
        )
        log.debug(
            "Sections: top=%s bottom=%s web=%s pillar=%s purlin=%s",
            top.name, bottom.name, web.name, pillar.name, purlin.name,
        )
        return sections, utilization, warnings
