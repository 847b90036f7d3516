"""
Boilerplate recommendation text per risk area.

The table is built once at import time and exposed read-only; selecting an
area in the form copies the matching text into the recommendation narrative.
"""
from types import MappingProxyType
from typing import List, Mapping, Optional, Union

from engagement.models import RiskArea

_TEMPLATES = {
    RiskArea.FALL_FROM_HEIGHTS: (
        "Ensure that all elevated work areas are secured with proper fall protection measures "
        "such as guardrails, personal fall arrest systems, or designated tie-off points. "
        "Workers should be trained on hazard awareness and equipment use."
    ),
    RiskArea.FALL_AT_SAME_LEVEL: (
        "Maintain clear, dry, and well-lit walking surfaces to prevent slips and trips. "
        "Ensure all walkways are free from clutter and transition areas are marked clearly."
    ),
    RiskArea.MATERIAL_HANDLING: (
        "Encourage the use of proper lifting techniques and mechanical aids to reduce strain. "
        "Ensure that handling paths are free of obstructions and storage is stable and accessible."
    ),
    RiskArea.HOUSEKEEPING: (
        "Implement a regular housekeeping schedule to keep work areas clean, organized, and free "
        "of hazards such as debris, tools, and spills. Assign responsibility to designated personnel."
    ),
    RiskArea.ELECTRICAL: (
        "All energized equipment should be properly labeled, and access restricted to qualified "
        "individuals. Inspect cords, panels, and outlets regularly for wear or damage."
    ),
    RiskArea.STRUCK_BY: (
        "Identify zones with potential for overhead or moving object hazards and implement controls "
        "like barricades, PPE, and visual alerts. Ensure operators and ground personnel maintain "
        "clear communication."
    ),
    RiskArea.CAUGHT_IN_BETWEEN: (
        "Verify that moving equipment, machinery, and pinch points are properly guarded. Establish "
        "protocols to prevent workers from entering confined or moving part zones during operations."
    ),
    RiskArea.PINCH_POINT: (
        "Identify and label pinch hazard locations on tools, doors, and machinery. Reinforce safe "
        "hand positioning practices and the use of guards or barriers."
    ),
    RiskArea.PUBLIC_PROTECTION: (
        "Restrict unauthorized public access to active work areas with barriers and clear signage. "
        "Ensure any work near pedestrian zones includes visibility controls and site monitoring."
    ),
    RiskArea.OTHER: "",
}

RISK_TEMPLATES: Mapping[RiskArea, str] = MappingProxyType(_TEMPLATES)


def lookup(area_label: Optional[Union[RiskArea, str]]) -> str:
    """Template text for an area label; "" for Other, unset or unknown labels."""
    if not area_label:
        return ""
    try:
        area = RiskArea(area_label)
    except (ValueError, TypeError):
        return ""
    return RISK_TEMPLATES.get(area, "")


def risk_area_options() -> List[str]:
    return [area.value for area in RiskArea]
